#!/usr/bin/env python3

"""
Exception hierarchy for the E2E harness.

Errors are split into two families:
- RetryableError: the condition may clear on its own (a window not open yet,
  a grid node briefly unavailable). Callers may re-invoke.
- FatalError: a configuration or programming mistake. Retrying cannot help.
"""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class HarnessError(Exception):
    """Base exception class for all harness errors."""

    def __init__(self, message: str = "Harness error occurred", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = kwargs.get("context", {})
        self.recovery_hint: Optional[str] = kwargs.get("recovery_hint")


class RetryableError(HarnessError):
    """Exception that indicates the operation can be retried."""

    def __init__(self, message: str = "Operation can be retried", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = kwargs.get("retry_after")


class FatalError(HarnessError):
    """Exception that indicates the operation should not be retried."""

    def __init__(self, message: str = "Fatal error occurred", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


# === FATAL ===


class ConfigurationError(FatalError):
    """Exception for invalid or unusable run configuration."""

    def __init__(self, message: str = "Configuration error occurred", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.config_section = kwargs.get("config_section")


class UnsupportedBrowserError(ConfigurationError):
    """Raised when the configured browser has no driver builder."""

    def __init__(self, browser_name: str, **kwargs: Any) -> None:
        super().__init__(f"Unsupported browser: {browser_name!r}", config_section="selenium", **kwargs)
        self.browser_name = browser_name


class UnknownWindowNameError(FatalError):
    """Raised when a logical window name is not in the window registry."""

    def __init__(self, window_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid window name: {window_name!r}",
            recovery_hint="Register the window in the window registry before switching to it",
            **kwargs,
        )
        self.window_name = window_name


class UnknownPageObjectError(FatalError):
    """Raised when a page object name is not in the page object registry."""

    def __init__(self, page_name: str, **kwargs: Any) -> None:
        super().__init__(f"Invalid page object name: {page_name!r}", **kwargs)
        self.page_name = page_name


class UnknownElementError(FatalError):
    """Raised when a page object has no element with the requested name."""

    def __init__(self, page_name: str, element_name: str, **kwargs: Any) -> None:
        super().__init__(f"Invalid page object element name: {element_name!r} (page {page_name!r})", **kwargs)
        self.page_name = page_name
        self.element_name = element_name


class DriverNotStartedError(FatalError):
    """Raised when a browser operation runs before init_driver()."""

    def __init__(self, message: str = "WebDriver has not been initialized for this scenario", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


# === RETRYABLE ===


class BrowserSessionError(RetryableError):
    """Exception for remote browser session creation or use failures."""

    def __init__(self, message: str = "Browser session error occurred", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.session_name = kwargs.get("session_name")


class WindowNotFoundError(RetryableError):
    """Raised when no open window matched within the timeout budget."""

    def __init__(self, window_name: str, timeout_ms: int = 0, **kwargs: Any) -> None:
        super().__init__(
            f"Window {window_name!r} was not found within {timeout_ms}ms",
            **kwargs,
        )
        self.window_name = window_name
        self.timeout_ms = timeout_ms


__all__ = [
    "BrowserSessionError",
    "ConfigurationError",
    "DriverNotStartedError",
    "FatalError",
    "HarnessError",
    "RetryableError",
    "UnknownElementError",
    "UnknownPageObjectError",
    "UnknownWindowNameError",
    "UnsupportedBrowserError",
    "WindowNotFoundError",
]
