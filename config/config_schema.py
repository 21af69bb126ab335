#!/usr/bin/env python3

"""
Configuration Schema Definitions.

This module defines type-safe configuration schemas using dataclasses.
Every section validates itself in __post_init__ and raises ValueError
on bad values; ConfigSchema.validate() collects those messages.
"""

import logging

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any

VALID_ENVIRONMENTS = ("development", "testing", "production")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_RESOLUTION_PATTERN = re.compile(r"^\d+x\d+$")


@dataclass
class SeleniumConfig:
    """Remote WebDriver configuration schema."""

    # Grid / browser selection
    browser_name: str = "chrome"
    browser_version: str = "81.0"
    selenium_url: str = "http://localhost:4444/wd/hub"

    # Total budget for waits and window switching, in milliseconds (0 = single attempt)
    default_timeout: int = 0

    # Session capabilities
    screen_resolution: str = "1920x1080"
    enable_vnc: bool = True
    enable_video: bool = False
    headless_mode: bool = False

    # Timeouts (seconds)
    step_timeout: int = 120
    implicit_wait: int = 0

    # Session creation retries
    driver_max_retries: int = 1
    driver_retry_delay: int = 2

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.selenium_url:
            raise ValueError("selenium_url must not be empty")
        if not isinstance(self.default_timeout, int) or isinstance(self.default_timeout, bool):
            raise ValueError("default_timeout must be an integer number of milliseconds")
        if self.default_timeout < 0:
            raise ValueError("default_timeout must be non-negative")
        if self.step_timeout <= 0:
            raise ValueError("step_timeout must be positive")
        if self.implicit_wait < 0:
            raise ValueError("implicit_wait must be non-negative")
        if self.driver_max_retries < 1:
            raise ValueError("driver_max_retries must be at least 1")
        if self.driver_retry_delay < 0:
            raise ValueError("driver_retry_delay must be non-negative")
        if not _RESOLUTION_PATTERN.match(self.screen_resolution or ""):
            raise ValueError("screen_resolution must be in format 'WIDTHxHEIGHT'")


@dataclass
class LoggingConfig:
    """Logging configuration schema."""

    log_level: str = "INFO"
    log_file: str = "e2e.log"
    log_dir: str = "Logs"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {list(VALID_LOG_LEVELS)}")


@dataclass
class ReportingConfig:
    """Scenario artifact configuration schema."""

    screenshot_dir: str = "screenshots"
    screenshot_on_failure: bool = True


@dataclass
class ConfigSchema:
    """Main configuration schema that combines all sub-schemas."""

    environment: str = "development"

    selenium: SeleniumConfig = field(default_factory=SeleniumConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(f"environment must be one of: {list(VALID_ENVIRONMENTS)}")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain nested dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConfigSchema":
        """Create configuration from dictionary; unknown keys are ignored with a warning."""
        sections = {
            "selenium": SeleniumConfig,
            "logging": LoggingConfig,
            "reporting": ReportingConfig,
        }
        kwargs: dict[str, Any] = {}
        for name, section_cls in sections.items():
            kwargs[name] = section_cls(**_known_fields(section_cls, data.get(name) or {}, name))

        main_data = {k: v for k, v in data.items() if k not in sections}
        kwargs.update(_known_fields(cls, main_data, "root"))
        return cls(**kwargs)

    def validate(self) -> list[str]:
        """
        Validate the entire configuration.

        Returns:
            List of validation error messages (empty when valid)
        """
        errors = []
        for section in (self.selenium, self.logging, self.reporting):
            try:
                type(section)(**section.__dict__)
            except (ValueError, TypeError) as e:
                errors.append(f"{type(section).__name__}: {e}")
        try:
            self.__post_init__()
        except ValueError as e:
            errors.append(str(e))
        return errors


def _known_fields(schema_cls: type, data: dict[str, Any], section: str) -> dict[str, Any]:
    """Drop keys the dataclass does not declare."""
    names = {f.name for f in fields(schema_cls)}
    unknown = set(data) - names
    if unknown:
        logger.warning(f"Ignoring unknown config keys in {section}: {sorted(unknown)}")
    return {k: v for k, v in data.items() if k in names}
