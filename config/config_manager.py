#!/usr/bin/env python3

"""
Run Configuration Manager.

Loads the e2e run configuration in this order, later sources overriding
earlier ones:
1. Default values (ConfigSchema defaults)
2. Configuration file (JSON, ./e2econfig.json unless told otherwise)
3. Environment variables (a .env file is loaded first via python-dotenv)

The merged dictionary is materialized into a validated ConfigSchema and
cached until the config file changes on disk.
"""

import logging
import os

logger = logging.getLogger(__name__)

# === STANDARD LIBRARY IMPORTS ===
import copy
import json
from pathlib import Path
from typing import Any, Optional, Union

# === THIRD-PARTY IMPORTS ===
from dotenv import load_dotenv

# === LOCAL IMPORTS ===
from config.config_schema import ConfigSchema, LoggingConfig, SeleniumConfig
from core.exceptions import ConfigurationError

DEFAULT_CONFIG_FILE = "e2econfig.json"

_TRUTHY = {"true", "1", "yes", "on"}

# Flat keys accepted at the top level of the config file
LEGACY_FILE_KEYS = {
    "browserName": ("selenium", "browser_name"),
    "browserVersion": ("selenium", "browser_version"),
    "seleniumUrl": ("selenium", "selenium_url"),
    "defaultTimeout": ("selenium", "default_timeout"),
}


class _ConfigManagerSingleton:
    """Container class for singleton instance to avoid global statement."""

    instance: Optional["ConfigManager"] = None


def get_config_manager(config_file: Optional[Union[str, Path]] = None) -> "ConfigManager":
    """
    Return the process-wide ConfigManager, creating it on first use.

    ``config_file`` only applies to the first call; later calls return the
    existing instance.
    """
    if _ConfigManagerSingleton.instance is None:
        _ConfigManagerSingleton.instance = ConfigManager(config_file=config_file)
    return _ConfigManagerSingleton.instance


def reset_config_manager() -> None:
    """Forget the singleton so the next get_config_manager() reloads everything."""
    _ConfigManagerSingleton.instance = None


class ConfigManager:
    """
    Configuration manager with type-safe schemas and validation.

    Usage:
        from config.config_manager import get_config_manager
        config = get_config_manager().get_config()
        config.selenium.browser_name
    """

    def __init__(
        self,
        config_file: Optional[Union[str, Path]] = None,
        environment: Optional[str] = None,
        auto_load: bool = True,
    ):
        """
        Initialize the configuration manager.

        Args:
            config_file: JSON configuration file path (default: E2E_CONFIG_FILE or ./e2econfig.json)
            environment: Environment name (development, testing, production)
            auto_load: Whether to load configuration immediately
        """
        skip_dotenv = os.getenv("CONFIG_SKIP_DOTENV", "").strip().lower()
        if skip_dotenv not in _TRUTHY:
            load_dotenv()

        resolved_file = config_file or os.getenv("E2E_CONFIG_FILE") or DEFAULT_CONFIG_FILE
        self.config_file = Path(resolved_file)
        self.environment = environment or os.getenv("ENVIRONMENT", "development")
        self._config_cache: Optional[ConfigSchema] = None
        self._file_modification_time: Optional[float] = None

        if auto_load:
            self.load_config()

    def load_config(self) -> ConfigSchema:
        """
        Load and validate configuration from all sources.

        Returns:
            Validated configuration schema

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        logger.debug(f"Loading configuration for environment: {self.environment}")

        config_data = self._get_default_config()

        file_config = self._load_config_file()
        if file_config:
            config_data = self._merge_configs(config_data, file_config)

        env_config = self._load_environment_variables()
        config_data = self._merge_configs(config_data, env_config)

        try:
            config = ConfigSchema.from_dict(config_data)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}") from e

        validation_errors = config.validate()
        if validation_errors:
            raise ConfigurationError(f"Configuration validation failed: {validation_errors}")

        self._config_cache = config
        if self.config_file.exists():
            self._file_modification_time = self.config_file.stat().st_mtime

        logger.debug(
            f"Configuration loaded: browser={config.selenium.browser_name} "
            f"version={config.selenium.browser_version} url={config.selenium.selenium_url}"
        )
        return config

    def get_config(self, reload_if_changed: bool = True) -> ConfigSchema:
        """
        Get the current configuration.

        Args:
            reload_if_changed: Whether to reload if the config file has changed

        Returns:
            Current configuration schema
        """
        if reload_if_changed and self._should_reload():
            logger.info("Configuration file changed, reloading...")
            return self.load_config()

        if self._config_cache is None:
            return self.load_config()

        return self._config_cache

    def reload_config(self) -> ConfigSchema:
        """Force reload configuration from all sources."""
        self._config_cache = None
        self._file_modification_time = None
        return self.load_config()

    def get_selenium_config(self) -> SeleniumConfig:
        """Get the remote WebDriver configuration section."""
        return self.get_config().selenium

    def get_logging_config(self) -> LoggingConfig:
        """Get the logging configuration section."""
        return self.get_config().logging

    def export_config(self, output_file: Union[str, Path]) -> bool:
        """
        Write the effective configuration to a JSON file.

        Returns:
            True on success, False if the file could not be written
        """
        try:
            output_path = Path(output_file)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with output_path.open("w", encoding="utf-8") as f:
                json.dump(self.get_config().to_dict(), f, indent=2)
            logger.info(f"Configuration exported to {output_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to export configuration: {e}")
            return False

    def _get_default_config(self) -> dict[str, Any]:
        """Get default configuration values."""
        return {
            "environment": self.environment,
            "selenium": {},
            "logging": {},
            "reporting": {},
        }

    def _load_config_file(self) -> dict[str, Any]:
        """Load configuration from the JSON file; a missing or broken file yields {}."""
        if not self.config_file.exists():
            logger.debug(f"No config file at {self.config_file}, using defaults")
            return {}

        if self.config_file.suffix.lower() != ".json":
            logger.warning(f"Unsupported config file format: {self.config_file.suffix}")
            return {}

        try:
            with self.config_file.open(encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load config file {self.config_file}: {e}")
            return {}

        if not isinstance(raw, dict):
            logger.error(f"Config file {self.config_file} must contain a JSON object")
            return {}

        return self._normalize_file_config(raw)

    @staticmethod
    def _normalize_file_config(raw: dict[str, Any]) -> dict[str, Any]:
        """Map flat camelCase keys onto their sections and drop null values."""
        config: dict[str, Any] = {}
        for key, value in raw.items():
            if value is None:
                continue
            if key in LEGACY_FILE_KEYS:
                section, field_name = LEGACY_FILE_KEYS[key]
                config.setdefault(section, {})[field_name] = value
            elif isinstance(value, dict):
                cleaned = {k: v for k, v in value.items() if v is not None}
                config.setdefault(key, {}).update(cleaned)
            else:
                config[key] = value
        return config

    @staticmethod
    def _set_string_config(config: dict[str, Any], section: str, key: str, env_var: str) -> None:
        """Set a string configuration value from environment variable."""
        value = os.getenv(env_var)
        if value:
            config.setdefault(section, {})[key] = value

    @staticmethod
    def _set_int_config(config: dict[str, Any], section: str, key: str, env_var: str) -> None:
        """Set an integer configuration value from environment variable."""
        value = os.getenv(env_var)
        if value:
            try:
                config.setdefault(section, {})[key] = int(value)
            except ValueError:
                logger.warning(f"Invalid {env_var} value: {value}")

    @staticmethod
    def _set_bool_config(config: dict[str, Any], section: str, key: str, env_var: str) -> None:
        """Set a boolean configuration value from environment variable."""
        value = os.getenv(env_var)
        if value is not None and value.strip():
            config.setdefault(section, {})[key] = value.strip().lower() in _TRUTHY

    def _load_selenium_config_from_env(self, config: dict[str, Any]) -> None:
        """Load remote WebDriver configuration from environment variables."""
        self._set_string_config(config, "selenium", "browser_name", "BROWSER_NAME")
        self._set_string_config(config, "selenium", "browser_version", "BROWSER_VERSION")
        self._set_string_config(config, "selenium", "selenium_url", "SELENIUM_URL")
        self._set_string_config(config, "selenium", "screen_resolution", "SCREEN_RESOLUTION")
        self._set_int_config(config, "selenium", "default_timeout", "DEFAULT_TIMEOUT")
        self._set_int_config(config, "selenium", "step_timeout", "STEP_TIMEOUT")
        self._set_bool_config(config, "selenium", "headless_mode", "HEADLESS_MODE")
        self._set_bool_config(config, "selenium", "enable_vnc", "ENABLE_VNC")
        self._set_bool_config(config, "selenium", "enable_video", "ENABLE_VIDEO")

    def _load_logging_config_from_env(self, config: dict[str, Any]) -> None:
        """Load logging configuration from environment variables."""
        self._set_string_config(config, "logging", "log_level", "LOG_LEVEL")
        self._set_string_config(config, "logging", "log_file", "LOG_FILE")
        self._set_string_config(config, "logging", "log_dir", "LOG_DIR")

    def _load_reporting_config_from_env(self, config: dict[str, Any]) -> None:
        """Load screenshot/report configuration from environment variables."""
        self._set_string_config(config, "reporting", "screenshot_dir", "SCREENSHOT_DIR")
        self._set_bool_config(config, "reporting", "screenshot_on_failure", "SCREENSHOT_ON_FAILURE")

    def _load_environment_variables(self) -> dict[str, Any]:
        """Load configuration from environment variables."""
        config: dict[str, Any] = {}

        env_value = os.getenv("ENVIRONMENT")
        if env_value:
            config["environment"] = env_value

        self._load_selenium_config_from_env(config)
        self._load_logging_config_from_env(config)
        self._load_reporting_config_from_env(config)
        return config

    def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Merge two configuration dictionaries.

        Args:
            base: Base configuration
            override: Override configuration (None values are ignored)

        Returns:
            Merged configuration
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if value is None:
                continue
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def _should_reload(self) -> bool:
        """Check if configuration should be reloaded."""
        if not self.config_file.exists():
            return False

        if self._file_modification_time is None:
            return True

        return self.config_file.stat().st_mtime > self._file_modification_time
