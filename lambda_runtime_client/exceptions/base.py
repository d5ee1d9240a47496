"""Base exception class for the runtime client."""

from typing import Any, ClassVar


class RuntimeClientError(Exception):
    """Base exception for failures raised by the runtime itself.

    Handler exceptions are never wrapped in this class: they are reported
    under their own class name. Subclasses set ``error_code``, which becomes
    the ``errorType`` of the report posted to the Runtime API and the value
    of the ``Lambda-Runtime-Function-Error-Type`` header.

    Attributes:
        message: Human-readable error description, posted as ``errorMessage``.
        error_code: Error type reported to the Runtime API.
        context: Extra fields for the log record, never posted.
    """

    error_code: ClassVar[str] = "Runtime.Unknown"

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            context: Additional key-value pairs for the log record.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_log_dict(self) -> dict[str, Any]:
        """Return the fields logged when this error cannot be reported.

        Returns:
            Dictionary with the error code, message, class and context.
        """
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "exception_type": type(self).__name__,
            **self.context,
        }

    def __str__(self) -> str:
        """Return the message, followed by the context when there is one."""
        if self.context:
            return f"{self.message} (context: {self.context})"
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation."""
        return f"{type(self).__name__}(message={self.message!r}, context={self.context!r})"
