"""Data models exchanged between the runtime client and the Runtime API."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResponseKind(StrEnum):
    """Encoding chosen for an invocation response."""

    STANDARD = "standard"
    HTTP_SHAPED = "http_shaped"


class Invocation(BaseModel):
    """One unit of work returned by the next-invocation call.

    Attributes:
        request_id: Request id assigned by the host.
        deadline_ms: Execution deadline as epoch milliseconds.
        event: Decoded JSON event.
        invoked_function_arn: ARN the caller invoked.
        trace_id: X-Ray trace header for this invocation.
        client_context: Mobile SDK client context, if any.
        cognito_identity: Cognito identity, if any.
    """

    model_config = ConfigDict(frozen=True)

    request_id: str = Field(min_length=1)
    deadline_ms: int
    event: Any = None
    invoked_function_arn: str = ""
    trace_id: str = ""
    client_context: Any = None
    cognito_identity: Any = None


class ErrorReport(BaseModel):
    """Error envelope accepted by the init and invocation error endpoints."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error_type: str = Field(alias="errorType")
    error_message: str = Field(alias="errorMessage")
    stack_trace: list[str] = Field(default_factory=list, alias="stackTrace")

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase keys the Runtime API expects."""
        return self.model_dump(by_alias=True)


class RawHttpResponse(BaseModel):
    """Formatted response ready to be posted to the response endpoint."""

    model_config = ConfigDict(frozen=True)

    status_code: int = 200
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""


class InvocationOutcome(BaseModel):
    """Explicit result of invoking the handler once.

    Exactly one of ``result`` and ``error`` is meaningful: a failed
    invocation carries its error report, a successful one its result.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    result: Any = None
    error: ErrorReport | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the handler returned without raising."""
        return self.error is None
