#!/usr/bin/env python3

"""
World - per-scenario execution context.

One World is created for every scenario and handed to the steps through the
behave ``context``. It owns the scenario's remote browser session and offers
the convenience operations steps are written against: clicking, waiting,
window switching and screenshots.
"""

import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import base64
import contextlib
import time
from typing import Callable, Optional

# === THIRD-PARTY IMPORTS ===
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

# === LOCAL IMPORTS ===
from browser import selenium_utils
from browser.driver_factory import create_driver
from browser.selenium_utils import Locator
from browser.window_switch import TimeoutProvider, WindowRegistry, WindowSwitchResolver
from config.config_schema import ConfigSchema, SeleniumConfig
from core.attachments import AttachFn
from core.error_handling import ErrorContext
from core.exceptions import DriverNotStartedError
from core.page_objects import PageObjectRegistry

DriverFactory = Callable[[str, SeleniumConfig], WebDriver]


def _discard_attachment(_data: object, media_type: str) -> None:
    logger.debug(f"No attachment sink configured, dropping {media_type} attachment")


class World:
    """Execution context shared by the steps of one scenario."""

    def __init__(
        self,
        config: ConfigSchema,
        attach: Optional[AttachFn] = None,
        page_objects: Optional[PageObjectRegistry] = None,
        windows: Optional[WindowRegistry] = None,
        driver_factory: DriverFactory = create_driver,
        sleep: Callable[[float], None] = time.sleep,
        timeout_provider: Optional[TimeoutProvider] = None,
    ) -> None:
        self.config = config
        self.attach: AttachFn = attach or _discard_attachment
        self.page_objects = page_objects if page_objects is not None else PageObjectRegistry()
        self.windows = windows if windows is not None else WindowRegistry()
        self._driver_factory = driver_factory
        self._sleep = sleep
        self._timeout_provider = timeout_provider
        self._driver: Optional[WebDriver] = None
        self.scenario_name: Optional[str] = None

    # --- Driver lifecycle ---

    @property
    def driver(self) -> WebDriver:
        if self._driver is None:
            raise DriverNotStartedError()
        return self._driver

    @property
    def has_driver(self) -> bool:
        return self._driver is not None

    def init_driver(self, scenario_name: str) -> WebDriver:
        """Start the scenario's browser session; a second call returns the same driver."""
        if self._driver is not None:
            return self._driver
        self.scenario_name = scenario_name
        with ErrorContext(f"start browser session '{scenario_name}'"):
            self._driver = self._driver_factory(scenario_name, self.config.selenium)
        return self._driver

    def destroy_driver(self) -> None:
        """Quit the browser session. No-op when no session was started."""
        if self._driver is None:
            return
        driver_to_close = self._driver
        self._driver = None
        try:
            driver_to_close.quit()
        except WebDriverException as e:
            logger.warning(f"Error quitting WebDriver: {e}")
        logger.debug(f"Browser session closed ({self.scenario_name})")

    # --- Timeouts ---

    def default_timeout_ms(self) -> int:
        """Current default_timeout in ms, read on every call."""
        if self._timeout_provider is not None:
            return self._timeout_provider() or 0
        return self.config.selenium.default_timeout

    def _wait_seconds(self, timeout: Optional[float]) -> float:
        if timeout is not None:
            return timeout
        return selenium_utils.timeout_ms_to_seconds(self.default_timeout_ms())

    # --- Navigation ---

    def open_url(self, url: str) -> None:
        logger.debug(f"Navigating to {url}")
        self.driver.get(url)

    def current_title(self) -> str:
        return self.driver.title

    # --- Elements ---

    def get_elements(self, locator: Locator, element: Optional[WebElement] = None) -> list[WebElement]:
        """Find all matching elements in the page, or inside ``element``."""
        return selenium_utils.find_elements(self.driver, locator, element)

    def locate(self, page_name: str, element_name: str) -> Locator:
        """Resolve a page-object element to its locator."""
        return self.page_objects.get_element_by_name(page_name, element_name)

    def wait_for_element(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        return selenium_utils.wait_for_element(self.driver, locator, self._wait_seconds(timeout))

    def wait_for_visible(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        return selenium_utils.wait_for_visible(self.driver, locator, self._wait_seconds(timeout))

    def wait_for_clickable(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        return selenium_utils.wait_for_clickable(self.driver, locator, self._wait_seconds(timeout))

    def wait_for_invisible(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        return selenium_utils.wait_for_invisible(self.driver, locator, self._wait_seconds(timeout))

    def is_element_present(self, locator: Locator) -> bool:
        """Presence probe; never raises."""
        return selenium_utils.is_elem_there(self.driver, locator)

    def element_text(self, locator: Locator, timeout: Optional[float] = None) -> str:
        return selenium_utils.extract_text(self.wait_for_visible(locator, timeout))

    def click(self, locator: Locator, timeout: Optional[float] = None) -> None:
        """Wait until the element is clickable, bring it into view and click it."""
        element = self.wait_for_clickable(locator, timeout)
        selenium_utils.scroll_to_element(self.driver, element)
        element.click()

    def click_element(self, page_name: str, element_name: str) -> None:
        self.click(self.locate(page_name, element_name))

    def assert_page_displayed(self, page_name: str) -> None:
        """Assert every initially loaded element of the page is present."""
        page = self.page_objects.get_page_object(page_name)
        for element in page.initially_loaded_elements():
            found = self.get_elements(element.locator)
            assert found, f"{page.name} - The {element.name} element is not displayed correctly!"

    # --- Windows ---

    def window_resolver(self) -> WindowSwitchResolver:
        # Timeout is read through the config on every resolution
        return WindowSwitchResolver(
            self.driver,
            self.windows,
            timeout_provider=self.default_timeout_ms,
            sleep=self._sleep,
        )

    def switch_to_window(self, name: str) -> str:
        """Make the window registered as ``name`` active; returns its handle."""
        self.windows.get(name)  # unknown names fail before any session call
        return self.window_resolver().switch_to_window(name)

    def is_window_open(self, name: str) -> bool:
        self.windows.get(name)
        return self.window_resolver().is_window_open(name)

    # --- Artifacts ---

    def take_screenshot(self) -> bytes:
        """Capture the active window as PNG and hand it to the attachment sink."""
        png = base64.b64decode(self.driver.get_screenshot_as_base64())
        self.attach(png, "image/png")
        return png

    def attach_text(self, text: str) -> None:
        self.attach(text, "text/plain")

    def try_take_screenshot(self) -> Optional[bytes]:
        """Screenshot for failure reporting; never raises."""
        if self._driver is None:
            return None
        with contextlib.suppress(WebDriverException, OSError, ValueError):
            return self.take_screenshot()
        logger.warning(f"Could not capture failure screenshot for '{self.scenario_name}'")
        return None
