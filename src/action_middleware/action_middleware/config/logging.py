# ABOUTME: Loguru sink setup for the action middleware library
# ABOUTME: Derives sink level and format from CoreSettings; importing the package never installs sinks

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from action_middleware.config.settings import CoreSettings

LIBRARY_LOGGER_NAME = "action_middleware"

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level>"
)
PLAIN_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]} | {message}"


class LoggerConfig(BaseModel):
    """Sink configuration applied by `setup_logging`."""

    level: str = "INFO"
    console_enabled: bool = True
    colorize: bool = True
    serialize: bool = False  # JSON lines instead of text
    diagnose: bool = False
    library_only: bool = False  # Drop records not emitted by action_middleware loggers

    file_path: Optional[Path] = None
    file_rotation: str = "50 MB"
    file_retention: str = "14 days"

    enqueue: bool = False

    @classmethod
    def from_settings(cls, settings: "CoreSettings", overrides: Optional["LoggingSettings"] = None) -> "LoggerConfig":
        """
        Build the sink configuration from library settings.

        Args:
            settings: Composed library settings (LOG_LEVEL, LOG_FORMAT, DEBUG).
            overrides: Sink-specific environment overrides. Loaded from the
                environment when omitted.

        Returns:
            LoggerConfig: Configuration ready for `setup_logging`.
        """
        overrides = overrides or LoggingSettings()
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
        return cls(
            level=(overrides.level or level).upper(),
            colorize=overrides.colorize and settings.LOG_FORMAT == "txt",
            serialize=settings.LOG_FORMAT == "json",
            diagnose=settings.DEBUG,
            library_only=overrides.library_only,
            file_path=overrides.file_path,
        )


class LoggingSettings(BaseSettings):
    """Sink overrides read from ACTION_MIDDLEWARE_LOG_* environment variables."""

    level: Optional[str] = Field(default=None, validation_alias="ACTION_MIDDLEWARE_LOG_LEVEL")
    file_path: Optional[Path] = Field(default=None, validation_alias="ACTION_MIDDLEWARE_LOG_FILE")
    colorize: bool = Field(default=True, validation_alias="ACTION_MIDDLEWARE_LOG_COLORIZE")
    library_only: bool = Field(default=False, validation_alias="ACTION_MIDDLEWARE_LOG_LIBRARY_ONLY")

    model_config = SettingsConfigDict(env_prefix="ACTION_MIDDLEWARE_", extra="ignore")


def _library_filter(record: Dict[str, Any]) -> bool:
    return str(record["extra"].get("name", "")).startswith(LIBRARY_LOGGER_NAME)


def setup_logging(config: Optional[LoggerConfig] = None) -> List[int]:
    """
    Replace the loguru sinks with the library's console and file sinks.

    Applications opt in by calling this; the library itself only binds
    loggers and never adds sinks.

    Args:
        config: Sink configuration. If None, it is derived from `get_settings()`.

    Returns:
        List[int]: Loguru handler ids of the installed sinks.
    """
    if config is None:
        from action_middleware.config.settings import get_settings

        config = LoggerConfig.from_settings(get_settings())

    logger.remove()
    logger.configure(extra={"name": LIBRARY_LOGGER_NAME})

    record_filter = _library_filter if config.library_only else None
    text_format = TEXT_FORMAT if config.colorize else PLAIN_FORMAT
    handler_ids: List[int] = []

    if config.console_enabled:
        handler_ids.append(
            logger.add(
                sys.stderr,
                level=config.level,
                format=text_format,
                colorize=config.colorize,
                serialize=config.serialize,
                diagnose=config.diagnose,
                backtrace=config.diagnose,
                filter=record_filter,
                enqueue=config.enqueue,
            )
        )

    if config.file_path is not None:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handler_ids.append(
            logger.add(
                config.file_path,
                level=config.level,
                format=PLAIN_FORMAT,
                serialize=config.serialize,
                rotation=config.file_rotation,
                retention=config.file_retention,
                filter=record_filter,
                enqueue=config.enqueue,
            )
        )

    return handler_ids


def get_logger(name: str):
    """
    Get a logger bound to `name`.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance bound to the specified name
    """
    return logger.bind(name=name)


def configure_for_testing() -> List[int]:
    """Verbose, uncolored console output restricted to library records."""
    return setup_logging(LoggerConfig(level="DEBUG", colorize=False, library_only=True))


def configure_for_production() -> List[int]:
    """JSON console output at INFO without variable diagnostics."""
    return setup_logging(LoggerConfig(level="INFO", colorize=False, serialize=True))


def configure_for_development() -> List[int]:
    """Colored DEBUG console output with diagnostics."""
    return setup_logging(LoggerConfig(level="DEBUG", colorize=True, diagnose=True))
