"""Structured logging for the runtime client.

Usage:
    import logging

    from lambda_runtime_client.logging import setup_logging

    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Invocation received", extra={"remaining_time_ms": 2900})
"""

from lambda_runtime_client.logging.config import LogFormat, LoggingConfig, LogLevel
from lambda_runtime_client.logging.context import (
    clear_context,
    get_extra_context,
    get_request_id,
    request_id,
    set_extra_context,
    set_request_id,
)
from lambda_runtime_client.logging.formatters import JSONFormatter, TextFormatter
from lambda_runtime_client.logging.logger import reset_logging, setup_logging

__all__ = [
    "JSONFormatter",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "TextFormatter",
    "clear_context",
    "get_extra_context",
    "get_request_id",
    "request_id",
    "reset_logging",
    "set_extra_context",
    "set_request_id",
    "setup_logging",
]
