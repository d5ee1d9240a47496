"""Adapter binding logging context to the invocation in flight."""

from lambda_runtime_client.logging.context import set_extra_context, set_request_id
from lambda_runtime_client.models import Invocation
from lambda_runtime_client.types import LambdaContext


def set_invocation_context(
    invocation: Invocation,
    context: LambdaContext,
) -> None:
    """Set logging context from an invocation and its context object.

    Args:
        invocation: The invocation being handled.
        context: Context object built for the invocation.
    """
    set_request_id(invocation.request_id)
    set_extra_context(
        function_name=context.function_name,
        function_version=context.function_version,
    )

    if invocation.trace_id:
        set_extra_context(trace_id=invocation.trace_id)
