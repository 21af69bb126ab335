#!/usr/bin/env python3

"""
Chrome Remote Session Options.

Builds the Chrome options/capabilities sent to the Selenium hub.
https://chromedriver.chromium.org/capabilities

- start-maximized: start Chrome maximized
- --no-sandbox: needed to run Chrome as root inside grid containers
- selenoid:options: VNC/video/resolution and the session name shown in the grid UI
"""

import logging

logger = logging.getLogger(__name__)

# === THIRD-PARTY IMPORTS ===
from selenium.webdriver.chrome.options import Options

# === LOCAL IMPORTS ===
from config.config_schema import SeleniumConfig


def grid_session_options(session_name: str, config: SeleniumConfig) -> dict[str, object]:
    """Vendor capability block understood by Selenoid-compatible hubs."""
    return {
        "enableVNC": config.enable_vnc,
        "enableVideo": config.enable_video,
        "screenResolution": config.screen_resolution,
        "name": session_name,
    }


def get_chrome_options(session_name: str, config: SeleniumConfig) -> Options:
    """Defines the Chrome session options for a scenario."""
    options = Options()
    options.add_argument("start-maximized")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    if config.headless_mode:
        width, height = config.screen_resolution.split("x")
        options.add_argument("--headless=new")
        options.add_argument(f"--window-size={width},{height}")

    if config.browser_version:
        options.browser_version = config.browser_version
    options.accept_insecure_certs = True
    options.set_capability("selenoid:options", grid_session_options(session_name, config))

    logger.debug(f"Chrome options prepared for session '{session_name}' (headless={config.headless_mode})")
    return options
