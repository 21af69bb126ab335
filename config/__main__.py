# Allows running `python -m config` to print the effective run configuration.

import json
import sys
from collections.abc import Iterable
from typing import Optional

from config.config_manager import ConfigManager
from core.exceptions import ConfigurationError


def build_config_report(manager: ConfigManager) -> list[str]:
    """Return the lines printed by python -m config."""

    config = manager.get_config()
    source = manager.config_file if manager.config_file.exists() else "(defaults only)"
    return [
        "E2E Run Configuration",
        f"Config file: {source}",
        "",
        json.dumps(config.to_dict(), indent=2, default=str),
    ]


def print_lines(lines: Iterable[str]) -> None:
    for line in lines:
        print(line)


def main(argv: Optional[list[str]] = None) -> int:
    """Primary entrypoint for `python -m config [config_file]`."""

    args = sys.argv[1:] if argv is None else argv
    try:
        manager = ConfigManager(config_file=args[0] if args else None)
        print_lines(build_config_report(manager))
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
