"""Conversion of exceptions into Runtime API error reports."""

import traceback

from lambda_runtime_client.exceptions.base import RuntimeClientError
from lambda_runtime_client.models import ErrorReport


def get_error_type(exception: BaseException) -> str:
    """Get the error type reported for an exception.

    Runtime errors report their error code; anything else reports its
    class name, so a handler raising ``ValueError`` surfaces as ``ValueError``.

    Args:
        exception: The exception to classify.

    Returns:
        Error type string.
    """
    if isinstance(exception, RuntimeClientError):
        return exception.error_code
    return type(exception).__name__


def format_stack_trace(exception: BaseException) -> list[str]:
    """Format the traceback of an exception as a list of lines.

    Args:
        exception: The exception whose traceback to format.

    Returns:
        Traceback lines without trailing newlines, empty if there is no traceback.
    """
    if exception.__traceback__ is None:
        return []
    lines: list[str] = []
    for entry in traceback.format_tb(exception.__traceback__):
        lines.extend(entry.rstrip("\n").splitlines())
    return lines


def create_error_report(exception: BaseException) -> ErrorReport:
    """Create a fresh error report from an exception.

    Args:
        exception: The exception to convert.

    Returns:
        ErrorReport with type, message and best-effort stack trace.
    """
    message = exception.message if isinstance(exception, RuntimeClientError) else str(exception)
    return ErrorReport(
        error_type=get_error_type(exception),
        error_message=message,
        stack_trace=format_stack_trace(exception),
    )
