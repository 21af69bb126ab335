#!/usr/bin/env python3
"""Tests for core.logging_config"""

import logging
import sys

from core.logging_config import (
    AlignedMessageFormatter,
    NameFilter,
    RemoteConnectionFilter,
    _LoggingState,
    reset_logging,
    setup_logging,
)
from testing.test_framework import strip_ansi_codes
from testing.test_utilities import create_standard_test_runner, temp_directory


def _record(name: str = "core.world", level: int = logging.INFO, msg: str = "hello", pathname: str = "world.py"):
    return logging.LogRecord(name, level, pathname, 10, msg, None, None, func="init_driver")


def test_name_filter_drops_external_loggers():
    name_filter = NameFilter(["selenium", "urllib3"])
    assert name_filter.filter(_record("core.hooks")) is True
    assert name_filter.filter(_record("selenium.webdriver.remote")) is False
    assert name_filter.filter(_record("urllib3.connectionpool")) is False


def test_remote_connection_filter_only_drops_debug():
    conn_filter = RemoteConnectionFilter()
    path = "/site-packages/selenium/webdriver/remote/remote_connection.py"
    assert conn_filter.filter(_record(level=logging.DEBUG, pathname=path)) is False
    assert conn_filter.filter(_record(level=logging.WARNING, pathname=path)) is True
    assert conn_filter.filter(_record(level=logging.DEBUG)) is True


def test_formatter_aligns_continuation_lines():
    formatter = AlignedMessageFormatter(fmt="%(levelname)s %(message)s", use_color=False)
    text = formatter.format(_record(msg="line one\n      line two"))
    assert text == "INFO line one\n     line two"


def test_formatter_colors_warnings_on_console():
    formatter = AlignedMessageFormatter(fmt="%(message)s", use_color=True)
    colored = formatter.format(_record(level=logging.ERROR, msg="failed"))
    assert colored != "failed"
    assert strip_ansi_codes(colored) == "failed"
    assert formatter.format(_record(msg="plain")) == "plain"


def test_setup_logging_installs_handlers_once():
    reset_logging()
    root = logging.getLogger()
    try:
        with temp_directory() as tmp:
            setup_logging(log_file="run.log", log_level="DEBUG", log_dir=str(tmp))
            installed = list(_LoggingState.handlers)
            assert len(installed) == 2
            assert all(h in root.handlers for h in installed)
            assert (tmp / "run.log").exists()
            assert all(h.level == logging.DEBUG for h in installed)

            setup_logging(log_file="other.log", log_level="warning", log_dir=str(tmp))
            assert _LoggingState.handlers == installed
            assert all(h.level == logging.WARNING for h in installed)
            assert not (tmp / "other.log").exists()

            reset_logging()
            assert not any(h in root.handlers for h in installed)
    finally:
        reset_logging()


def test_unknown_level_falls_back_to_info():
    reset_logging()
    try:
        with temp_directory() as tmp:
            setup_logging(log_file="run.log", log_level="chatty", log_dir=str(tmp))
            assert all(h.level == logging.INFO for h in _LoggingState.handlers)
    finally:
        reset_logging()


def module_tests() -> bool:
    from testing.test_framework import TestSuite

    suite = TestSuite("Logging Configuration", "core.logging_config")
    suite.start_suite()
    suite.run_test("Name filter", test_name_filter_drops_external_loggers, expected_outcome="External loggers dropped")
    suite.run_test("Remote connection filter", test_remote_connection_filter_only_drops_debug, expected_outcome="DEBUG only")
    suite.run_test("Alignment", test_formatter_aligns_continuation_lines, expected_outcome="Continuation indented")
    suite.run_test("Colors", test_formatter_colors_warnings_on_console, expected_outcome="Errors colored")
    suite.run_test("Setup", test_setup_logging_installs_handlers_once, expected_outcome="Two handlers, levels updated")
    suite.run_test("Unknown level", test_unknown_level_falls_back_to_info, expected_outcome="INFO")
    return suite.finish_suite()


run_comprehensive_tests = create_standard_test_runner(module_tests)


if __name__ == "__main__":
    success = run_comprehensive_tests()
    sys.exit(0 if success else 1)
