"""
Core Package - Harness Runtime.

Components:
- World: per-scenario execution context (driver lifecycle, clicks, waits,
  window switching, screenshots)
- PageObjectRegistry: explicit page-object tables
- hooks: behave lifecycle hooks (before_all, before_scenario, ...)
- exceptions / error_handling: error hierarchy and helpers
- logging_config: application logging setup
"""

from typing import Any

__version__ = "1.0.0"

_SUBMODULES = frozenset(
    [
        "attachments",
        "error_handling",
        "exceptions",
        "hooks",
        "logging_config",
        "page_objects",
        "world",
    ]
)


def __getattr__(name: str) -> Any:
    """Lazy import submodules on attribute access."""
    if name in _SUBMODULES:
        import importlib

        return importlib.import_module(f".{name}", __name__)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available submodules."""
    return list(_SUBMODULES)
