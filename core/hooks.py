#!/usr/bin/env python3

"""
behave Lifecycle Hooks.

Import these from ``features/environment.py``:

    before_all      load configuration and logging, attach registries
    before_scenario skip ``@ignore`` scenarios, start a World and its browser
    after_scenario  screenshot on failure, always close the browser
    after_all       log the end of the run

Run-wide state is stored on the behave context as ``context.e2e_config``,
``context.page_objects`` and ``context.windows``; the per-scenario World is
``context.world``. ``context.config`` belongs to behave and is left alone.
"""

import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import time
from typing import Any, Callable, Optional

# === LOCAL IMPORTS ===
from browser.window_switch import WindowRegistry
from config.config_manager import get_config_manager
from core.attachments import FileAttachmentSink
from core.error_handling import describe_error
from core.logging_config import setup_logging
from core.page_objects import PageObjectRegistry
from core.world import World

IGNORE_TAG = "ignore"

# Scenario outcomes treated as failures (behave versions differ in naming)
FAILED_STATUSES = frozenset(["failed", "error", "hook_error"])

# Builds the per-scenario World; tests replace it on the context
WorldFactory = Callable[..., World]


def _status_name(status: Any) -> str:
    return getattr(status, "name", str(status))


def current_default_timeout() -> int:
    """default_timeout as currently configured; reloads when the config file changed."""
    return get_config_manager().get_selenium_config().default_timeout


def before_all(context: Any) -> None:
    """Load the run configuration once and prepare shared registries."""
    config = get_config_manager().get_config()
    setup_logging(
        log_file=config.logging.log_file,
        log_level=config.logging.log_level,
        log_dir=config.logging.log_dir,
    )
    context.e2e_config = config
    if getattr(context, "page_objects", None) is None:
        context.page_objects = PageObjectRegistry()
    if getattr(context, "windows", None) is None:
        context.windows = WindowRegistry()
    context.run_started_at = time.time()
    logger.info(
        f"E2E run starting: {config.selenium.browser_name} {config.selenium.browser_version} "
        f"via {config.selenium.selenium_url} ({len(context.page_objects)} page objects, "
        f"{len(context.windows)} windows)"
    )


def before_scenario(context: Any, scenario: Any) -> None:
    """Skip ignored scenarios; otherwise start the scenario's browser session."""
    if IGNORE_TAG in scenario.effective_tags:
        logger.info(f"Skipping ignored scenario: {scenario.name}")
        scenario.skip(f"Scenario tagged @{IGNORE_TAG}")
        return

    config = context.e2e_config
    world_factory: WorldFactory = getattr(context, "world_factory", None) or World
    world = world_factory(
        config,
        attach=FileAttachmentSink(config.reporting.screenshot_dir, scenario.name),
        page_objects=context.page_objects,
        windows=context.windows,
        timeout_provider=current_default_timeout,
    )
    context.world = world
    logger.debug(f"Starting scenario: {scenario.name}")
    try:
        world.init_driver(scenario.name)
    except Exception as e:
        logger.error(f"Could not start browser for '{scenario.name}': {describe_error(e)}")
        raise


def after_scenario(context: Any, scenario: Any) -> None:
    """Capture a screenshot of failed scenarios, then close the browser."""
    world: Optional[World] = getattr(context, "world", None)
    if world is None:
        return

    try:
        status = _status_name(scenario.status)
        if status in FAILED_STATUSES and context.e2e_config.reporting.screenshot_on_failure:
            logger.warning(f"Scenario failed: {scenario.name}")
            world.try_take_screenshot()
    finally:
        world.destroy_driver()
        context.world = None


def after_all(context: Any) -> None:
    started = getattr(context, "run_started_at", None)
    elapsed = f" in {time.time() - started:.1f}s" if started else ""
    logger.info(f"E2E run finished{elapsed}")
