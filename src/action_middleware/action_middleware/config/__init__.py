# ABOUTME: Configuration package initialization
# ABOUTME: Exports configuration classes and utilities for the action middleware library

from action_middleware.config.settings import CoreSettings, get_settings
from action_middleware.config.logging import (
    LoggerConfig,
    LoggingSettings,
    setup_logging,
    get_logger,
    configure_for_testing,
    configure_for_production,
    configure_for_development,
)

__all__ = [
    "CoreSettings",
    "get_settings",
    "LoggerConfig",
    "LoggingSettings",
    "setup_logging",
    "get_logger",
    "configure_for_testing",
    "configure_for_production",
    "configure_for_development",
]
