#!/usr/bin/env python3

"""
Window Switching for Multi-Window Scenarios.

Resolves a logical window name (e.g. "popup") to one of the browser's open
windows by matching window titles against a registered pattern, and makes
that window the active one.

Windows are opened and closed by the application under test, asynchronously
with respect to the driver: the handle list can change between
``window_handles`` and ``switch_to.window``. A handle that fails while being
probed is skipped, and the whole enumeration is repeated once per second
until the configured ``default_timeout`` budget is spent.
"""

import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import contextlib
import re
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, Optional, Union

# === THIRD-PARTY IMPORTS ===
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

# === LOCAL IMPORTS ===
from core.exceptions import ConfigurationError, UnknownWindowNameError, WindowNotFoundError

WAIT_BETWEEN_PASSES_MS = 1000

TimeoutProvider = Callable[[], Optional[int]]


@dataclass(frozen=True)
class WindowDescriptor:
    """A logical window: a unique name and the pattern its title must match."""

    name: str
    title_pattern: re.Pattern[str]

    @classmethod
    def create(cls, name: str, title_pattern: Union[str, re.Pattern[str]]) -> "WindowDescriptor":
        """Build a descriptor, compiling ``title_pattern`` when given as a string."""
        pattern = re.compile(title_pattern) if isinstance(title_pattern, str) else title_pattern
        return cls(name=name, title_pattern=pattern)

    def matches(self, title: Optional[str]) -> bool:
        return title is not None and self.title_pattern.search(title) is not None


class WindowRegistry:
    """Static name -> WindowDescriptor table, assembled once at startup."""

    def __init__(self, descriptors: Iterable[WindowDescriptor] = ()) -> None:
        self._descriptors: dict[str, WindowDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in self._descriptors:
                raise ConfigurationError(f"Duplicate window name: {descriptor.name!r}", config_section="windows")
            self._descriptors[descriptor.name] = descriptor

    @classmethod
    def from_mapping(cls, patterns: dict[str, Union[str, re.Pattern[str]]]) -> "WindowRegistry":
        """Build a registry from ``{name: title_pattern}``."""
        return cls(WindowDescriptor.create(name, pattern) for name, pattern in patterns.items())

    def get(self, name: str) -> WindowDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise UnknownWindowNameError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def names(self) -> list[str]:
        return list(self._descriptors)


@dataclass
class SwitchAttempt:
    """One probe of one handle during a resolution pass."""

    retry_index: int
    handle_tried: str
    title_observed: Optional[str] = None
    matched: bool = False


def compute_retry_plan(timeout_ms: Optional[int]) -> tuple[int, int]:
    """
    Turn a total timeout into ``(retry_count, wait_ms)``.

    An unset or zero timeout means a single pass with no wait; otherwise the
    wait is fixed at one second and the budget is split into whole passes
    (at least one).
    """
    if not timeout_ms or timeout_ms <= 0:
        return 1, 0
    wait_ms = WAIT_BETWEEN_PASSES_MS
    return max(1, int(timeout_ms // wait_ms)), wait_ms


class WindowSwitchResolver:
    """
    Makes the window registered under a logical name the active window.

    Args:
        driver: WebDriver session whose windows are probed.
        registry: Known windows.
        timeout_provider: Called on every resolution to read the current
            ``default_timeout`` in milliseconds.
        sleep: Sleep function taking seconds (injectable for tests).
    """

    def __init__(
        self,
        driver: WebDriver,
        registry: WindowRegistry,
        timeout_provider: TimeoutProvider,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.driver = driver
        self.registry = registry
        self.timeout_provider = timeout_provider
        self.sleep = sleep

    def _probe(self, descriptor: WindowDescriptor, retry_index: int, handle: str) -> SwitchAttempt:
        attempt = SwitchAttempt(retry_index=retry_index, handle_tried=handle)
        try:
            self.driver.switch_to.window(handle)
            attempt.title_observed = self.driver.title
        except Exception as e:
            # Window closed between enumeration and use, or the hub dropped the request
            logger.debug(f"Skipping window handle {handle} on pass {retry_index}: {type(e).__name__}")
            return attempt
        attempt.matched = descriptor.matches(attempt.title_observed)
        return attempt

    def _search_pass(self, descriptor: WindowDescriptor, retry_index: int) -> Optional[str]:
        """Probe every currently listed handle once; return the matching handle if any."""
        for handle in list(self.driver.window_handles):
            attempt = self._probe(descriptor, retry_index, handle)
            if attempt.matched:
                return handle
        return None

    def switch_to_window(self, name: str) -> str:
        """
        Make the window registered as ``name`` the active window.

        Returns:
            The handle of the window left active.

        Raises:
            UnknownWindowNameError: ``name`` is not registered (raised before any driver call).
            WindowNotFoundError: no open window matched within the timeout budget.
        """
        descriptor = self.registry.get(name)
        timeout_ms = self.timeout_provider() or 0
        retry_count, wait_ms = compute_retry_plan(timeout_ms)
        logger.debug(f"Switching to window '{name}' ({retry_count} pass(es), {wait_ms}ms apart)")

        for retry_index in range(retry_count):
            handle = self._search_pass(descriptor, retry_index)
            if handle is not None:
                logger.debug(f"Switched to window '{name}' (handle {handle}, pass {retry_index})")
                return handle
            if wait_ms > 0:
                self.sleep(wait_ms / 1000)

        raise WindowNotFoundError(name, timeout_ms)

    def is_window_open(self, name: str) -> bool:
        """
        Report whether a window matching ``name`` is open.

        The previously active window is restored afterwards whatever the outcome,
        unless it had already closed.
        """
        descriptor = self.registry.get(name)
        original_handle: Optional[str] = None
        # Active window may already be gone
        with contextlib.suppress(WebDriverException):
            original_handle = self.driver.current_window_handle
        try:
            self.switch_to_window(descriptor.name)
            return True
        except WindowNotFoundError:
            return False
        finally:
            if original_handle is not None:
                with contextlib.suppress(WebDriverException):
                    self.driver.switch_to.window(original_handle)
