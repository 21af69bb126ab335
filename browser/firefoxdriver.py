#!/usr/bin/env python3

"""Firefox Remote Session Options."""

import logging

logger = logging.getLogger(__name__)

# === THIRD-PARTY IMPORTS ===
from selenium.webdriver.firefox.options import Options

# === LOCAL IMPORTS ===
from browser.chromedriver import grid_session_options
from config.config_schema import SeleniumConfig


def get_firefox_options(session_name: str, config: SeleniumConfig) -> Options:
    """Defines the Firefox session options for a scenario."""
    options = Options()
    if config.headless_mode:
        options.add_argument("-headless")

    if config.browser_version:
        options.browser_version = config.browser_version
    options.accept_insecure_certs = True
    options.set_capability("selenoid:options", grid_session_options(session_name, config))

    logger.debug(f"Firefox options prepared for session '{session_name}' (headless={config.headless_mode})")
    return options
