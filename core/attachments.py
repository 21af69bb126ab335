#!/usr/bin/env python3

"""
Scenario attachments.

behave has no attachment API, so screenshots and other artifacts produced
during a scenario are written to disk by a FileAttachmentSink. The World only
knows the ``attach(data, media_type)`` callable.
"""

import logging

logger = logging.getLogger(__name__)

import re
import time
from pathlib import Path
from typing import Callable, Union

MEDIA_EXTENSIONS = {
    "image/png": ".png",
    "text/plain": ".txt",
    "application/json": ".json",
}

AttachFn = Callable[[Union[bytes, str], str], None]

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def slugify(name: str, max_length: int = 80) -> str:
    """Make a scenario name safe to use in a file name."""
    slug = _UNSAFE_CHARS.sub("_", name).strip("_")
    return (slug or "scenario")[:max_length]


class FileAttachmentSink:
    """Writes attachments for one scenario under ``directory``."""

    def __init__(self, directory: Union[str, Path], scenario_name: str) -> None:
        self.directory = Path(directory)
        self.scenario_name = scenario_name
        self.written: list[Path] = []

    def _next_path(self, media_type: str) -> Path:
        extension = MEDIA_EXTENSIONS.get(media_type)
        if extension is None:
            raise ValueError(f"Unsupported media type: {media_type}")
        stamp = time.strftime("%Y%m%d-%H%M%S")
        return self.directory / f"{slugify(self.scenario_name)}-{stamp}-{len(self.written) + 1}{extension}"

    def __call__(self, data: Union[bytes, str], media_type: str) -> None:
        path = self._next_path(media_type)
        self.directory.mkdir(parents=True, exist_ok=True)
        if isinstance(data, bytes):
            path.write_bytes(data)
        else:
            path.write_text(data, encoding="utf-8")
        self.written.append(path)
        logger.info(f"Attachment saved: {path}")
