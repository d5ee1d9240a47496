"""Per-invocation context object handed to the handler."""

import time
from dataclasses import dataclass, field
from typing import Any

from lambda_runtime_client.config import RuntimeSettings
from lambda_runtime_client.models import Invocation
from lambda_runtime_client.types import Clock


def now_ms() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class InvocationContext:
    """Metadata about the invocation in flight.

    Attribute names match the context object of the managed Python
    runtime so existing handlers run unchanged.
    """

    aws_request_id: str
    deadline_ms: int
    function_name: str = ""
    function_version: str = ""
    memory_limit_in_mb: str = ""
    invoked_function_arn: str = ""
    log_group_name: str = ""
    log_stream_name: str = ""
    client_context: Any = None
    identity: Any = None
    clock: Clock = field(default=now_ms, repr=False, compare=False)

    def get_remaining_time_in_millis(self) -> int:
        """Return milliseconds left before the deadline; negative once it has passed."""
        return self.deadline_ms - self.clock()


def build_invocation_context(
    invocation: Invocation,
    settings: RuntimeSettings,
    clock: Clock = now_ms,
) -> InvocationContext:
    """Build the context for one invocation.

    Args:
        invocation: The invocation being handled.
        settings: Runtime settings holding the function metadata.
        clock: Source of the current epoch time in milliseconds.

    Returns:
        A fresh InvocationContext.
    """
    return InvocationContext(
        aws_request_id=invocation.request_id,
        deadline_ms=invocation.deadline_ms,
        function_name=settings.aws_lambda_function_name,
        function_version=settings.aws_lambda_function_version,
        memory_limit_in_mb=settings.aws_lambda_function_memory_size,
        invoked_function_arn=invocation.invoked_function_arn,
        log_group_name=settings.aws_lambda_log_group_name,
        log_stream_name=settings.aws_lambda_log_stream_name,
        client_context=invocation.client_context,
        identity=invocation.cognito_identity,
        clock=clock,
    )
