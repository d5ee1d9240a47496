"""Logging settings, following Lambda's advanced logging controls.

When a function has logging controls configured, the execution environment
exports ``AWS_LAMBDA_LOG_FORMAT`` (``JSON`` or ``Text``) and
``AWS_LAMBDA_LOG_LEVEL`` (``TRACE`` through ``FATAL``). ``LOG_FORMAT`` and
``LOG_LEVEL`` are read when those are absent, e.g. for local invokes.
"""

from enum import StrEnum
from functools import lru_cache
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(StrEnum):
    """Python log levels the runtime can be set to."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Lambda level names with no Python equivalent of the same name
_LAMBDA_LEVEL_NAMES = {
    "TRACE": LogLevel.DEBUG,
    "WARN": LogLevel.WARNING,
    "FATAL": LogLevel.CRITICAL,
}


class LogFormat(StrEnum):
    """Output formats, named as in ``AWS_LAMBDA_LOG_FORMAT``."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseSettings):
    """Logging configuration loaded from environment variables.

    Attributes:
        log_level: Minimum level written by the root logger.
        log_format: JSON for CloudWatch Logs Insights, text for terminals.
        include_location: Whether JSON records carry module/function/line.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        validation_alias=AliasChoices("AWS_LAMBDA_LOG_LEVEL", "LOG_LEVEL", "log_level"),
    )
    log_format: LogFormat = Field(
        default=LogFormat.JSON,
        validation_alias=AliasChoices("AWS_LAMBDA_LOG_FORMAT", "LOG_FORMAT", "log_format"),
    )
    include_location: bool = Field(default=False)

    @field_validator("log_level", mode="before")
    @classmethod
    def translate_lambda_level(cls, value: Any) -> Any:
        """Accept Lambda level names in any case."""
        if isinstance(value, str):
            upper_value = value.strip().upper()
            return _LAMBDA_LEVEL_NAMES.get(upper_value, upper_value)
        return value

    @field_validator("log_format", mode="before")
    @classmethod
    def lowercase_format(cls, value: Any) -> Any:
        """Accept ``JSON`` / ``Text`` as Lambda spells them."""
        if isinstance(value, str):
            return value.strip().lower()
        return value


@lru_cache
def get_logging_config() -> LoggingConfig:
    """Get cached logging configuration instance."""
    return LoggingConfig()
