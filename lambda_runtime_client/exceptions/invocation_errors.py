"""Invocation and Runtime API errors (recoverable)."""

from typing import Any, ClassVar

from lambda_runtime_client.exceptions.base import RuntimeClientError

MAX_LOGGED_BODY_BYTES = 1024


class InvocationError(RuntimeClientError):
    """Handler or response formatting failed; reported per request."""

    error_code: ClassVar[str] = "Runtime.InvocationError"


class ResponseFormatError(InvocationError):
    """The handler result could not be serialized into a response."""

    error_code: ClassVar[str] = "Runtime.ResponseFormatError"


class RuntimeApiError(RuntimeClientError):
    """Communication with the Runtime API failed; logged only."""

    error_code: ClassVar[str] = "Runtime.ApiError"


class TransportError(RuntimeApiError):
    """HTTP call to the Runtime API failed or returned a non-2xx status."""

    error_code: ClassVar[str] = "Runtime.TransportError"

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Description of the failure.
            url: URL of the failed call.
            status_code: HTTP status returned, if any.
            context: Additional context information.
        """
        context_dict = context or {}
        if url is not None:
            context_dict["url"] = url
        if status_code is not None:
            context_dict["status_code"] = status_code
        super().__init__(message, context=context_dict)


class EnvelopeError(RuntimeApiError):
    """The next-invocation response is missing a request id or has a bad body."""

    error_code: ClassVar[str] = "Runtime.EnvelopeError"

    def __init__(
        self,
        message: str,
        *,
        header: str | None = None,
        body: bytes | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize envelope error.

        Args:
            message: Description of the malformed envelope.
            header: Name of the missing or invalid header.
            body: Raw event body; a truncated copy is kept for logging.
            context: Additional context information.
        """
        context_dict = context or {}
        if header is not None:
            context_dict["header"] = header
        if body is not None:
            context_dict["event"] = body[:MAX_LOGGED_BODY_BYTES].decode("utf-8", errors="replace")
        super().__init__(message, context=context_dict)
