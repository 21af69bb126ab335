#!/usr/bin/env python3

"""
Remote WebDriver Factory.

Creates one remote browser session per scenario against the configured
Selenium hub, retrying session creation a configurable number of times.
"""

import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import contextlib
import time
from typing import Any, Callable, Optional

# === THIRD-PARTY IMPORTS ===
from selenium import webdriver
from selenium.common.exceptions import SessionNotCreatedException, TimeoutException, WebDriverException
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.remote.webdriver import WebDriver

# === LOCAL IMPORTS ===
from browser.chromedriver import get_chrome_options
from browser.firefoxdriver import get_firefox_options
from config.config_schema import SeleniumConfig
from core.exceptions import BrowserSessionError, UnsupportedBrowserError

OptionsBuilder = Callable[[str, SeleniumConfig], ArgOptions]

OPTIONS_BUILDERS: dict[str, OptionsBuilder] = {
    "chrome": get_chrome_options,
    "firefox": get_firefox_options,
}


def get_options_builder(browser_name: str) -> OptionsBuilder:
    """Return the options builder for ``browser_name`` or raise UnsupportedBrowserError."""
    try:
        return OPTIONS_BUILDERS[browser_name.lower()]
    except (KeyError, AttributeError):
        raise UnsupportedBrowserError(str(browser_name)) from None


def _configure_driver_post_init(driver: WebDriver, config: SeleniumConfig) -> None:
    """Apply session timeouts once the remote session exists."""
    driver.set_page_load_timeout(config.step_timeout)
    driver.set_script_timeout(config.step_timeout)
    if config.implicit_wait:
        driver.implicitly_wait(config.implicit_wait)


def _handle_driver_exception(e: Exception, driver: Optional[WebDriver], attempt_num: int) -> None:
    """Log a failed creation attempt and discard any half-built session."""
    if isinstance(e, TimeoutException):
        logger.warning(f"Timeout during WebDriver init attempt {attempt_num}: {e}")
    elif isinstance(e, SessionNotCreatedException):
        logger.error(f"Hub refused the session (attempt {attempt_num}): {str(e).splitlines()[0] if str(e) else e}")
    elif isinstance(e, WebDriverException):
        logger.warning(f"WebDriverException during init attempt {attempt_num}: {e}")
    else:
        logger.error(f"Unexpected error during WebDriver init attempt {attempt_num}: {e}", exc_info=True)

    if driver:
        with contextlib.suppress(Exception):
            driver.quit()


def create_driver(
    session_name: str,
    config: SeleniumConfig,
    remote_factory: Callable[..., Any] = webdriver.Remote,
    sleep: Callable[[float], None] = time.sleep,
) -> WebDriver:
    """
    Start a remote browser session for one scenario.

    Args:
        session_name: Name reported to the hub (usually the scenario name).
        config: Selenium section of the run configuration.
        remote_factory: Constructor for the remote session (webdriver.Remote).
        sleep: Sleep function used between attempts.

    Raises:
        UnsupportedBrowserError: browser_name has no options builder (no retry).
        BrowserSessionError: every creation attempt failed.
    """
    build_options = get_options_builder(config.browser_name)
    max_attempts = config.driver_max_retries
    last_error: Optional[Exception] = None

    for attempt_num in range(1, max_attempts + 1):
        logger.debug(
            f"Creating {config.browser_name} session '{session_name}' on {config.selenium_url} "
            f"(attempt {attempt_num}/{max_attempts})"
        )
        driver: Optional[WebDriver] = None
        try:
            options = build_options(session_name, config)
            driver = remote_factory(command_executor=config.selenium_url, options=options)
            _configure_driver_post_init(driver, config)
            logger.info(f"Browser session started: {config.browser_name} {config.browser_version} ({session_name})")
            return driver
        except Exception as e:
            _handle_driver_exception(e, driver, attempt_num)
            last_error = e

        if attempt_num < max_attempts:
            logger.debug(f"Waiting {config.driver_retry_delay} seconds before retrying session creation...")
            sleep(config.driver_retry_delay)

    logger.critical(f"Failed to create WebDriver session after {max_attempts} attempt(s).")
    raise BrowserSessionError(
        f"Could not start {config.browser_name} session at {config.selenium_url}: {last_error}",
        session_name=session_name,
    ) from last_error
