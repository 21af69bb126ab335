#!/usr/bin/env python3
"""
Tests for browser.driver_factory, browser.chromedriver and browser.firefoxdriver

No hub is contacted: webdriver.Remote is replaced by a MagicMock factory and
the retry sleep is recorded instead of slept.
"""

import sys
from unittest.mock import MagicMock

from selenium.common.exceptions import SessionNotCreatedException, WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from browser.chromedriver import get_chrome_options, grid_session_options
from browser.driver_factory import create_driver, get_options_builder
from browser.firefoxdriver import get_firefox_options
from config.config_schema import SeleniumConfig
from core.exceptions import BrowserSessionError, UnsupportedBrowserError
from testing.test_utilities import create_standard_test_runner

GRID_URL = "http://grid:4444/wd/hub"


# === OPTIONS ===


def test_grid_session_options_name_the_session():
    block = grid_session_options("Login works", SeleniumConfig())
    assert block == {
        "enableVNC": True,
        "enableVideo": False,
        "screenResolution": "1920x1080",
        "name": "Login works",
    }


def test_chrome_options_carry_version_and_grid_capabilities():
    options = get_chrome_options("Login works", SeleniumConfig(browser_version="81.0"))
    caps = options.to_capabilities()
    assert caps["browserName"] == "chrome"
    assert caps["browserVersion"] == "81.0"
    assert caps["selenoid:options"]["name"] == "Login works"
    assert caps["selenoid:options"]["enableVNC"] is True
    assert "start-maximized" in options.arguments
    assert not any(arg.startswith("--headless") for arg in options.arguments)


def test_chrome_headless_uses_configured_resolution():
    options = get_chrome_options("s", SeleniumConfig(headless_mode=True, screen_resolution="1280x720"))
    assert "--headless=new" in options.arguments
    assert "--window-size=1280,720" in options.arguments


def test_firefox_options_carry_version_and_grid_capabilities():
    options = get_firefox_options("Search", SeleniumConfig(browser_name="firefox", browser_version="75.0"))
    caps = options.to_capabilities()
    assert caps["browserName"] == "firefox"
    assert caps["browserVersion"] == "75.0"
    assert caps["selenoid:options"]["screenResolution"] == "1920x1080"
    assert caps["selenoid:options"]["name"] == "Search"
    assert "-headless" not in options.arguments


def test_options_builder_lookup():
    assert get_options_builder("chrome") is get_chrome_options
    assert get_options_builder("Firefox") is get_firefox_options
    try:
        get_options_builder("safari")
    except UnsupportedBrowserError as e:
        assert e.browser_name == "safari"
    else:
        raise AssertionError("safari should be unsupported")


# === SESSION CREATION ===


def test_create_driver_starts_remote_session():
    driver = MagicMock()
    factory = MagicMock(return_value=driver)
    config = SeleniumConfig(selenium_url=GRID_URL)

    result = create_driver("Checkout", config, remote_factory=factory, sleep=lambda _s: None)

    assert result is driver
    factory.assert_called_once()
    kwargs = factory.call_args.kwargs
    assert kwargs["command_executor"] == GRID_URL
    assert isinstance(kwargs["options"], ChromeOptions)
    driver.set_page_load_timeout.assert_called_once_with(120)
    driver.set_script_timeout.assert_called_once_with(120)
    driver.implicitly_wait.assert_not_called()


def test_create_driver_uses_firefox_options():
    factory = MagicMock(return_value=MagicMock())
    create_driver("s", SeleniumConfig(browser_name="firefox", implicit_wait=5), remote_factory=factory)
    assert isinstance(factory.call_args.kwargs["options"], FirefoxOptions)
    factory.return_value.implicitly_wait.assert_called_once_with(5)


def test_unsupported_browser_fails_without_contacting_hub():
    factory = MagicMock()
    try:
        create_driver("s", SeleniumConfig(browser_name="safari"), remote_factory=factory)
    except UnsupportedBrowserError:
        pass
    else:
        raise AssertionError("unsupported browser should raise UnsupportedBrowserError")
    factory.assert_not_called()


def test_create_driver_retries_then_succeeds():
    driver = MagicMock()
    factory = MagicMock(side_effect=[WebDriverException("hub busy"), SessionNotCreatedException("no node"), driver])
    sleeps: list = []
    config = SeleniumConfig(driver_max_retries=3, driver_retry_delay=2)

    assert create_driver("s", config, remote_factory=factory, sleep=sleeps.append) is driver
    assert factory.call_count == 3
    assert sleeps == [2, 2]


def test_create_driver_gives_up_after_last_attempt():
    last = WebDriverException("hub down")
    factory = MagicMock(side_effect=[WebDriverException("hub busy"), last])
    sleeps: list = []
    config = SeleniumConfig(driver_max_retries=2, driver_retry_delay=1)

    try:
        create_driver("Checkout", config, remote_factory=factory, sleep=sleeps.append)
    except BrowserSessionError as e:
        assert e.session_name == "Checkout"
        assert e.__cause__ is last
    else:
        raise AssertionError("exhausted attempts should raise BrowserSessionError")
    assert sleeps == [1]


def test_half_built_session_is_quit():
    driver = MagicMock()
    driver.set_page_load_timeout.side_effect = WebDriverException("session died")
    factory = MagicMock(return_value=driver)

    try:
        create_driver("s", SeleniumConfig(), remote_factory=factory)
    except BrowserSessionError:
        pass
    else:
        raise AssertionError("failed post-init should raise BrowserSessionError")
    driver.quit.assert_called_once()


def module_tests() -> bool:
    from testing.test_framework import TestSuite, suppress_logging

    suite = TestSuite("Remote Driver Factory", "browser.driver_factory")
    suite.start_suite()

    tests = [
        ("Grid capability block", test_grid_session_options_name_the_session, "VNC, resolution and name"),
        ("Chrome options", test_chrome_options_carry_version_and_grid_capabilities, "Version and selenoid:options"),
        ("Chrome headless", test_chrome_headless_uses_configured_resolution, "Headless with window size"),
        ("Firefox options", test_firefox_options_carry_version_and_grid_capabilities, "Version and selenoid:options"),
        ("Builder lookup", test_options_builder_lookup, "Case-insensitive, unknown rejected"),
        ("Remote session", test_create_driver_starts_remote_session, "Remote called with hub URL"),
        ("Firefox session", test_create_driver_uses_firefox_options, "Firefox options used"),
        ("Unsupported browser", test_unsupported_browser_fails_without_contacting_hub, "No hub call"),
        ("Retry", test_create_driver_retries_then_succeeds, "Third attempt wins"),
        ("Give up", test_create_driver_gives_up_after_last_attempt, "BrowserSessionError"),
        ("Cleanup", test_half_built_session_is_quit, "quit() called"),
    ]
    with suppress_logging():
        for name, func, expected in tests:
            suite.run_test(name, func, expected_outcome=expected)

    return suite.finish_suite()


run_comprehensive_tests = create_standard_test_runner(module_tests)


if __name__ == "__main__":
    success = run_comprehensive_tests()
    sys.exit(0 if success else 1)
