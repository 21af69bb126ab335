#!/usr/bin/env python3

"""
Centralized Logging Configuration.

Sets up run-wide logging using Python's standard `logging` module.
Features:
- Configurable log level via LoggingConfig, environment variable or argument.
- Console (stderr) and File handlers on the root logger.
- Custom formatter for aligned multi-line messages.
- Filters to reduce noise from external libraries (Selenium, urllib3).
- Dynamic handler level updates without full reconfiguration.
"""

# === STANDARD LIBRARY IMPORTS ===
import copy
import logging
import os
import sys
from pathlib import Path
from typing import Optional

# === LOCAL IMPORTS ===
from testing.test_framework import Colors

# --- Define log format constants ---
LOG_FORMAT: str = "%(asctime)s %(levelname).3s [%(module)-8.8s %(funcName)-8.8s %(lineno)-4d] %(message)s"
DATE_FORMAT: str = "%H:%M:%S"

DEFAULT_LOG_DIRECTORY = "Logs"

# Loggers silenced on the console handler
EXTERNAL_LOGGERS = [
    "selenium",
    "urllib3",
    "websockets",
    "asyncio",
    "parse",
    "behave",
]

logger_for_setup = logging.getLogger("logger_setup")


# --- Custom Logging Filters ---
class NameFilter(logging.Filter):
    """Filters log records based on logger name starting with excluded prefixes."""

    def __init__(self, excluded_names: list[str]):
        super().__init__()
        self.excluded_names = excluded_names

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False if record name starts with any excluded prefix, True otherwise."""
        return not any(record.name.startswith(name) for name in self.excluded_names)


class RemoteConnectionFilter(logging.Filter):
    """Filters out DEBUG level messages originating from Selenium's remote_connection.py"""

    def filter(self, record: logging.LogRecord) -> bool:
        is_debug = record.levelno == logging.DEBUG
        is_remote_conn = bool(record.pathname) and Path(record.pathname).name == "remote_connection.py"
        return not (is_debug and is_remote_conn)


# --- Custom Logging Formatter ---
class AlignedMessageFormatter(logging.Formatter):
    """
    Formats log records to align multi-line messages below the initial log prefix.
    Leading whitespace from subsequent lines of the original message is removed.
    """

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def _apply_level_color(self, message: str, level: int) -> str:
        """Apply color based on log level if not already colored."""
        if not self.use_color or '\033[' in message:
            return message
        if level >= logging.ERROR:
            return Colors.red(message)
        if level >= logging.WARNING:
            return Colors.yellow(message)
        return message

    def _message_start_position(self, record: logging.LogRecord, placeholder: str) -> tuple[str, int]:
        """Return the formatted prefix and the column at which the message starts."""
        record_copy = copy.copy(record)
        record_copy.msg = placeholder
        record_copy.args = ()
        record_copy.exc_info = None
        record_copy.exc_text = None
        formatted = super().format(record_copy)
        try:
            position = formatted.index(placeholder)
        except ValueError:
            logger_for_setup.warning("Placeholder not found in formatted prefix, using fallback.")
            heuristic_index = formatted.find("] ")
            position = heuristic_index + 2 if heuristic_index != -1 else 0
        return formatted[:position], position

    def format(self, record: logging.LogRecord) -> str:
        """Formats the log record with alignment and level coloring."""
        message = self._apply_level_color(record.getMessage(), record.levelno)
        prefix, position = self._message_start_position(record, "\x00")
        indent = " " * position

        lines = message.split("\n")
        result_lines = [f"{prefix}{lines[0].lstrip()}"]
        result_lines.extend(f"{indent}{line.lstrip()}" for line in lines[1:])

        if record.exc_info:
            result_lines.append(self.formatException(record.exc_info))
        return "\n".join(result_lines)


class _LoggingState:
    """Tracks if logging has been set up to avoid adding duplicate handlers."""

    initialized: bool = False
    handlers: list[logging.Handler] = []


def _resolve_log_directory(log_dir: Optional[str]) -> Path:
    directory = Path(log_dir or os.getenv("LOG_DIR", DEFAULT_LOG_DIRECTORY))
    if not directory.is_absolute():
        directory = (Path.cwd() / directory).resolve()
    return directory


def setup_logging(log_file: str = "", log_level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configures run-wide logging on the root logger.
    If called again, updates existing handler levels instead of re-adding them.

    Args:
        log_file: Base name for the log file (placed in log_dir).
                  If empty, reads LOG_FILE from the environment (default: "e2e.log").
        log_level: Minimum level for the handlers (e.g. "DEBUG", "INFO").
                   Unknown names fall back to INFO.
        log_dir: Directory for the log file. Defaults to LOG_DIR or ./Logs.

    Returns:
        The configured root logger.
    """
    root_logger = logging.getLogger()
    numeric_log_level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(numeric_log_level, int):
        numeric_log_level = logging.INFO

    if _LoggingState.initialized:
        for handler in _LoggingState.handlers:
            handler.setLevel(numeric_log_level)
        return root_logger

    if not log_file:
        log_file = os.getenv("LOG_FILE", "e2e.log")

    logs_dir = _resolve_log_directory(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / Path(str(log_file)).name

    root_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(str(log_file_path), mode="a", encoding="utf-8")
    file_handler.setFormatter(AlignedMessageFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT, use_color=False))
    file_handler.setLevel(numeric_log_level)
    file_handler.addFilter(RemoteConnectionFilter())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(AlignedMessageFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    console_handler.setLevel(numeric_log_level)
    console_handler.addFilter(RemoteConnectionFilter())
    console_handler.addFilter(NameFilter(EXTERNAL_LOGGERS))

    for handler in (file_handler, console_handler):
        root_logger.addHandler(handler)
    _LoggingState.handlers = [file_handler, console_handler]

    # External library levels
    logging.getLogger("urllib3").setLevel(logging.ERROR)
    logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)
    logging.getLogger("selenium").setLevel(logging.WARNING)
    logging.getLogger("selenium.webdriver.remote.remote_connection").setLevel(logging.WARNING)

    _LoggingState.initialized = True
    logger_for_setup.debug(f"Logging initialized: level={logging.getLevelName(numeric_log_level)}, file={log_file_path}")
    return root_logger


def reset_logging() -> None:
    """Remove handlers installed by setup_logging (used by tests)."""
    root_logger = logging.getLogger()
    for handler in _LoggingState.handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _LoggingState.handlers = []
    _LoggingState.initialized = False
