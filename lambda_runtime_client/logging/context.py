"""Context variables for invocation-scoped logging data."""

from contextvars import ContextVar
from typing import Any

request_id: ContextVar[str] = ContextVar("request_id", default="")

_extra_context: ContextVar[dict[str, Any] | None] = ContextVar("extra_context", default=None)


def get_request_id() -> str:
    """Get the request id of the invocation in flight.

    Returns:
        The request id, or an empty string between invocations.
    """
    return request_id.get()


def set_request_id(value: str) -> None:
    """Set the request id for the current context.

    Args:
        value: The request id.
    """
    request_id.set(value)


def get_extra_context() -> dict[str, Any]:
    """Get the current extra context.

    Returns:
        Dictionary of extra context fields.
    """
    context = _extra_context.get()
    if context is None:
        return {}
    return context.copy()


def set_extra_context(**kwargs: Any) -> None:
    """Set additional context fields to include in all log messages.

    Args:
        **kwargs: Key-value pairs to include in log messages.
    """
    current = _extra_context.get()
    current = {} if current is None else current.copy()
    current.update(kwargs)
    _extra_context.set(current)


def clear_context() -> None:
    """Clear all context (request id and extra context)."""
    request_id.set("")
    _extra_context.set(None)
