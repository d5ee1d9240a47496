"""Log formatters for different output formats."""

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any, ClassVar

from lambda_runtime_client.logging.context import get_extra_context, get_request_id

_STANDARD_LOG_ATTRS: frozenset[str] = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)

_MAX_LOGGER_NAME_LENGTH = 30


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the ``extra=`` fields attached to a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_LOG_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Format log records as JSON, one object per line.

    Field names follow the Lambda structured log format so CloudWatch
    Logs Insights can filter on ``requestId`` across runtimes.
    """

    def __init__(self, *, include_location: bool = False) -> None:
        """Initialize the JSON formatter.

        Args:
            include_location: Whether to include module/function/line fields.
        """
        super().__init__()
        self._include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        current_request_id = get_request_id()
        if current_request_id:
            log_entry["requestId"] = current_request_id

        if self._include_location:
            log_entry["module"] = record.module
            log_entry["function"] = record.funcName
            log_entry["line"] = record.lineno

        log_entry.update(get_extra_context())
        log_entry.update(_record_extras(record))

        if record.exc_info:
            exception_type, exception, exception_traceback = record.exc_info
            log_entry["exception"] = {
                "type": exception_type.__name__ if exception_type else "Unknown",
                "message": str(exception) if exception else "",
                "traceback": traceback.format_exception(
                    exception_type, exception, exception_traceback
                ),
            }

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Format log records as single readable lines for terminals."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, *, use_colors: bool = True) -> None:
        """Initialize the text formatter.

        Args:
            use_colors: Whether to use ANSI colors in output.
        """
        super().__init__()
        self._use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as one line."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        level = record.levelname
        if self._use_colors:
            color = self.COLORS.get(level, "")
            level_string = f"{color}{level:<8}{self.RESET}"
        else:
            level_string = f"{level:<8}"

        logger_name = record.name
        if len(logger_name) > _MAX_LOGGER_NAME_LENGTH:
            truncate_at = _MAX_LOGGER_NAME_LENGTH - 3
            logger_name = "..." + logger_name[-truncate_at:]

        context_parts: list[str] = []

        current_request_id = get_request_id()
        if current_request_id:
            context_parts.append(f"request_id={current_request_id}")

        fields = {**get_extra_context(), **_record_extras(record)}
        context_parts.extend(f"{key}={value}" for key, value in fields.items())

        parts = [timestamp, "|", level_string, "|", f"{logger_name:<30}", "|", record.getMessage()]
        if context_parts:
            parts.extend(["|", " ".join(context_parts)])

        result = " ".join(parts)

        if record.exc_info:
            result += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return result
