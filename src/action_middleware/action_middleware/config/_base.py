# ABOUTME: Base configuration classes for the action middleware library
# ABOUTME: Provides application identity, log switches and composition engine switches

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_ALIASES = {
    "dev": "development",
    "develop": "development",
    "stage": "staging",
    "prod": "production",
}
LOG_FORMAT_ALIASES = {
    "structured": "json",
    "text": "txt",
}

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=False,
    extra="ignore",
)


def _normalize(value: Any, aliases: dict, upper: bool = False) -> Any:
    if not isinstance(value, str):
        return value
    value = value.strip().upper() if upper else value.strip().lower()
    return aliases.get(value, value)


class BaseCoreSettings(BaseSettings):
    """Identity and logging settings shared by every part of the library.

    Attributes:
        APP_NAME: Name used to identify the library in logs.
        ENV: Runtime environment. Short aliases (dev, stage, prod) are accepted.
        DEBUG: Lowers the log level to DEBUG and enables loguru diagnostics.
        LOG_LEVEL: Minimum level of records written by `setup_logging`.
        LOG_FORMAT: 'txt' for human-readable lines, 'json' for serialized records.
    """

    APP_NAME: str = Field(default="ActionMiddleware", description="Name used to identify the library in logs.")
    ENV: Literal["development", "staging", "production"] = Field(
        default="development", description="Runtime environment."
    )
    DEBUG: bool = Field(default=False, description="Enable debug logging and diagnostics.")
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Minimum level of emitted log records."
    )
    LOG_FORMAT: Literal["json", "txt"] = Field(default="txt", description="Log output format.")

    model_config = _SETTINGS_CONFIG

    @field_validator("ENV", mode="before")
    @classmethod
    def normalize_env(cls, v: Any) -> Any:
        return _normalize(v, ENV_ALIASES)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return _normalize(v, {}, upper=True)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> Any:
        return _normalize(v, LOG_FORMAT_ALIASES)


class MiddlewareSettings(BaseSettings):
    """Switches that shape how the composition engine runs its pipeline.

    Attributes:
        MIDDLEWARE_ROUTE_CONTRACT_VIOLATIONS: When True, a before stage that does not
            resolve to an argument sequence enters the error stage like any other
            failure. When False the contract error propagates immediately.
        MIDDLEWARE_LOG_PAYLOADS: When True, stage payloads are rendered into debug logs.
    """

    MIDDLEWARE_ROUTE_CONTRACT_VIOLATIONS: bool = Field(
        default=True,
        description="Route before-stage contract violations through the error stage.",
    )
    MIDDLEWARE_LOG_PAYLOADS: bool = Field(
        default=False,
        description="Include payload representations in debug logs.",
    )

    model_config = _SETTINGS_CONFIG
