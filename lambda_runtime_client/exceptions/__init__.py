"""Runtime client exception hierarchy.

Architecture:
    RuntimeClientError (base)
    ├── InitError (fatal, reported to /init/error)
    │   ├── HandlerNotFound
    │   └── HandlerImportError
    ├── InvocationError (reported to /invocation/{id}/error)
    │   └── ResponseFormatError
    └── RuntimeApiError (logged only)
        ├── TransportError
        └── EnvelopeError

Usage:
    from lambda_runtime_client.exceptions import HandlerNotFound

    def resolve(module, name):
        handler = getattr(module, name, None)
        if handler is None:
            raise HandlerNotFound(
                f"Handler {name} not found",
                module_path=module.__name__,
                export_name=name,
            )
        return handler
"""

from lambda_runtime_client.exceptions.base import RuntimeClientError
from lambda_runtime_client.exceptions.init_errors import (
    HandlerImportError,
    HandlerNotFound,
    InitError,
)
from lambda_runtime_client.exceptions.invocation_errors import (
    EnvelopeError,
    InvocationError,
    ResponseFormatError,
    RuntimeApiError,
    TransportError,
)
from lambda_runtime_client.exceptions.reports import (
    create_error_report,
    format_stack_trace,
    get_error_type,
)

__all__ = [
    "EnvelopeError",
    "HandlerImportError",
    "HandlerNotFound",
    "InitError",
    "InvocationError",
    "ResponseFormatError",
    "RuntimeApiError",
    "RuntimeClientError",
    "TransportError",
    "create_error_report",
    "format_stack_trace",
    "get_error_type",
]
