"""
Configuration Package.

Main components:
- ConfigManager: loads defaults, the JSON config file and environment variables
- ConfigSchema: type-safe configuration schemas with validation
- get_config_manager(): process-wide ConfigManager
"""

from config.config_manager import ConfigManager, get_config_manager, reset_config_manager
from config.config_schema import (
    ConfigSchema,
    LoggingConfig,
    ReportingConfig,
    SeleniumConfig,
)

__all__ = [
    "ConfigManager",
    "ConfigSchema",
    "LoggingConfig",
    "ReportingConfig",
    "SeleniumConfig",
    "get_config_manager",
    "reset_config_manager",
]
