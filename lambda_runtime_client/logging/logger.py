"""Root logger setup for the runtime process.

The runtime and the user handler share one handler on the root logger.
Lambda forwards the process's stdout to CloudWatch Logs, so stdout is the
default stream; local invokes pass stderr to keep stdout for the result.
"""

import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from lambda_runtime_client.logging.config import LogFormat, LoggingConfig, get_logging_config
from lambda_runtime_client.logging.formatters import JSONFormatter, TextFormatter

_QUIET_LOGGERS = ("urllib3", "requests")


@dataclass
class _RootHandlerState:
    """The handler installed by setup_logging, if any."""

    handler: logging.Handler | None = None


_state = _RootHandlerState()


def _build_formatter(config: LoggingConfig, stream: TextIO | None) -> logging.Formatter:
    if config.log_format == LogFormat.TEXT:
        return TextFormatter(use_colors=stream is None and sys.stdout.isatty())
    return JSONFormatter(include_location=config.include_location)


def setup_logging(
    config: LoggingConfig | None = None,
    stream: TextIO | None = None,
    *,
    force: bool = False,
) -> None:
    """Install the runtime's handler on the root logger.

    Handlers installed by anything else are left in place.

    Args:
        config: Logging settings. Loaded from the environment if not provided.
        stream: Output stream, defaults to ``sys.stdout``.
        force: Replace the handler if one was already installed.
    """
    if _state.handler is not None and not force:
        return

    if config is None:
        config = get_logging_config()

    root_logger = logging.getLogger()
    if _state.handler is not None:
        root_logger.removeHandler(_state.handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_build_formatter(config, stream))
    root_logger.addHandler(handler)
    root_logger.setLevel(config.log_level.value)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _state.handler = handler


def reset_logging() -> None:
    """Remove the runtime's handler. Primarily for testing."""
    if _state.handler is not None:
        logging.getLogger().removeHandler(_state.handler)
        _state.handler = None
    get_logging_config.cache_clear()
