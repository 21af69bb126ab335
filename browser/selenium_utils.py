#!/usr/bin/env python3

"""Selenium/WebDriver Utilities for Browser Automation.

Element lookup, wait and click helpers used by the World and the step
library. Two flavours:
- wait_* helpers raise selenium's TimeoutException, so a step fails loudly;
- probes (is_elem_there, extract_text, scroll_to_element) are wrapped in
  safe_execute and return a neutral value instead of raising.
"""

import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
from typing import Any, Callable, Optional

# === THIRD-PARTY IMPORTS ===
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions
from selenium.webdriver.support.wait import WebDriverWait

# === LOCAL IMPORTS ===
from core.error_handling import safe_execute

# (By.<strategy>, value), e.g. (By.CSS_SELECTOR, "#login")
Locator = tuple[str, str]

MIN_WAIT_SECONDS = 1.0


def timeout_ms_to_seconds(timeout_ms: Optional[int]) -> float:
    """Convert a millisecond budget to a WebDriverWait timeout (never below one second)."""
    if not timeout_ms or timeout_ms <= 0:
        return MIN_WAIT_SECONDS
    return max(MIN_WAIT_SECONDS, timeout_ms / 1000)


def wait_until(
    driver: WebDriver,
    condition: Callable[[Any], Any],
    timeout: float,
    message: str = "",
) -> Any:
    """Wait for ``condition`` and return its value; raises TimeoutException."""
    return WebDriverWait(driver, timeout).until(condition, message)


def wait_for_element(driver: WebDriver, locator: Locator, timeout: float) -> WebElement:
    """Wait for element to be present in the DOM."""
    return wait_until(
        driver,
        expected_conditions.presence_of_element_located(locator),
        timeout,
        f"Element {locator} not present after {timeout}s",
    )


def wait_for_visible(driver: WebDriver, locator: Locator, timeout: float) -> WebElement:
    """Wait for element to be present and displayed."""
    return wait_until(
        driver,
        expected_conditions.visibility_of_element_located(locator),
        timeout,
        f"Element {locator} not visible after {timeout}s",
    )


def wait_for_clickable(driver: WebDriver, locator: Locator, timeout: float) -> WebElement:
    """Wait for element to be visible and enabled."""
    return wait_until(
        driver,
        expected_conditions.element_to_be_clickable(locator),
        timeout,
        f"Element {locator} not clickable after {timeout}s",
    )


def wait_for_invisible(driver: WebDriver, locator: Locator, timeout: float) -> bool:
    """Wait for element to disappear or become hidden."""
    return bool(
        wait_until(
            driver,
            expected_conditions.invisibility_of_element_located(locator),
            timeout,
            f"Element {locator} still visible after {timeout}s",
        )
    )


def find_elements(driver: WebDriver, locator: Locator, element: Optional[WebElement] = None) -> list[WebElement]:
    """Find all matches in the page, or inside ``element`` when given."""
    by, value = locator
    scope = element if element is not None else driver
    return scope.find_elements(by, value)


@safe_execute(default_return="", log_errors=False)
def extract_text(element: Optional[WebElement]) -> str:
    """Extract text from an element safely."""
    if not element:
        return ""
    return element.text or ""


@safe_execute(default_return=False, log_errors=False)
def is_elem_there(driver: Optional[WebDriver], locator: Locator, *, wait: float = 0) -> bool:
    """Check if element exists with optional wait for presence."""
    if not driver:
        return False

    if wait and wait > 0:
        wait_for_element(driver, locator, wait)
        return True

    by, value = locator
    driver.find_element(by, value)
    return True


@safe_execute(log_errors=False)
def scroll_to_element(driver: Optional[WebDriver], element: Optional[WebElement]) -> None:
    """Scroll element into view."""
    if not driver or not element:
        return
    driver.execute_script("arguments[0].scrollIntoView({block: 'center'});", element)

