"""Type definitions for handlers and the objects passed to them."""

from typing import Any, Protocol

# Any JSON value the Runtime API delivered as the event body
LambdaEvent = Any


class LambdaContext(Protocol):
    """Context object interface handed to every handler call."""

    function_name: str
    function_version: str
    invoked_function_arn: str
    memory_limit_in_mb: str
    aws_request_id: str
    log_group_name: str
    log_stream_name: str

    def get_remaining_time_in_millis(self) -> int:
        """Return remaining execution time in milliseconds."""
        ...


class Handler(Protocol):
    """User-supplied function transforming an event and context into a result."""

    def __call__(self, event: LambdaEvent, context: LambdaContext) -> Any:
        """Handle one invocation."""
        ...


class Clock(Protocol):
    """Zero-argument callable returning the current epoch time in milliseconds."""

    def __call__(self) -> int:
        """Return the current time in epoch milliseconds."""
        ...
