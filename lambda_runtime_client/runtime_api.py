"""HTTP transport for the Lambda Runtime API.

Wraps a ``requests.Session`` and exposes one method per endpoint. Every
``requests`` failure is translated into ``TransportError`` so the loop
only deals with runtime client exceptions.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import requests

from lambda_runtime_client.exceptions.invocation_errors import EnvelopeError, TransportError
from lambda_runtime_client.models import ErrorReport, Invocation, RawHttpResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "Lambda-Runtime-Aws-Request-Id"
DEADLINE_HEADER = "Lambda-Runtime-Deadline-Ms"
FUNCTION_ARN_HEADER = "Lambda-Runtime-Invoked-Function-Arn"
TRACE_ID_HEADER = "Lambda-Runtime-Trace-Id"
CLIENT_CONTEXT_HEADER = "Lambda-Runtime-Client-Context"
COGNITO_IDENTITY_HEADER = "Lambda-Runtime-Cognito-Identity"
ERROR_TYPE_HEADER = "Lambda-Runtime-Function-Error-Type"
RESPONSE_MODE_HEADER = "Lambda-Runtime-Function-Response-Mode"

HTTP_INTEGRATION_CONTENT_TYPE = "application/vnd.awslambda.http-integration-response"
HTTP_INTEGRATION_DELIMITER = b"\x00" * 8


def _parse_optional_json(headers: Mapping[str, str], name: str, request_id: str) -> Any:
    """Decode an optional JSON-valued header, dropping it if malformed."""
    raw_value = headers.get(name)
    if not raw_value:
        return None
    try:
        return json.loads(raw_value)
    except json.JSONDecodeError:
        logger.warning(
            "Ignoring header %s: not valid JSON",
            name,
            extra={"request_id": request_id, "header": name},
        )
        return None


def _parse_deadline(headers: Mapping[str, str], request_id: str) -> int:
    """Return the deadline in epoch milliseconds, or 0 if missing or malformed."""
    raw_deadline = headers.get(DEADLINE_HEADER)
    try:
        return int(raw_deadline)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid deadline %r, remaining time will be negative",
            raw_deadline,
            extra={"request_id": request_id, "header": DEADLINE_HEADER},
        )
        return 0


def parse_invocation(headers: Mapping[str, str], body: bytes) -> Invocation:
    """Build an Invocation from a next-invocation response.

    Once a request id is known the invocation is always handed to the
    handler: a missing or malformed deadline becomes 0 and malformed
    optional headers become None.

    Args:
        headers: Response headers (case-insensitive mapping).
        body: Raw response body.

    Returns:
        The parsed Invocation.

    Raises:
        EnvelopeError: If the request id is missing or the body is not
            valid JSON.
    """
    request_id = (headers.get(REQUEST_ID_HEADER) or "").strip()
    if not request_id:
        raise EnvelopeError(
            "Next invocation has no request id",
            header=REQUEST_ID_HEADER,
            body=body,
        )

    try:
        event = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise EnvelopeError(
            f"Event body is not valid JSON: {error}",
            body=body,
            context={"request_id": request_id},
        ) from error

    return Invocation(
        request_id=request_id,
        deadline_ms=_parse_deadline(headers, request_id),
        event=event,
        invoked_function_arn=headers.get(FUNCTION_ARN_HEADER, ""),
        trace_id=headers.get(TRACE_ID_HEADER, ""),
        client_context=_parse_optional_json(headers, CLIENT_CONTEXT_HEADER, request_id),
        cognito_identity=_parse_optional_json(headers, COGNITO_IDENTITY_HEADER, request_id),
    )


def encode_http_integration_response(response: RawHttpResponse) -> bytes:
    """Encode an HTTP-shaped response as prelude, delimiter and raw body."""
    prelude = json.dumps(
        {"statusCode": response.status_code, "headers": response.headers},
        separators=(",", ":"),
    )
    return prelude.encode("utf-8") + HTTP_INTEGRATION_DELIMITER + response.body


class RuntimeApiClient:
    """Client for the Runtime API endpoints of one execution environment."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout_seconds: float = 30,
    ) -> None:
        """Initialize the Runtime API client.

        Args:
            base_url: Runtime API base URL, e.g. ``http://host/2018-06-01/runtime``.
            session: Session to use. A new one is created if not provided.
            timeout_seconds: Timeout for posting responses and errors. The
                next-invocation call never times out.
        """
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout_seconds = timeout_seconds

    @property
    def base_url(self) -> str:
        """Return the Runtime API base URL."""
        return self._base_url

    def next_invocation(self) -> Invocation:
        """Block until the host hands out the next invocation.

        Returns:
            The next Invocation.

        Raises:
            TransportError: If the call fails or returns a non-2xx status.
            EnvelopeError: If the response is malformed.
        """
        url = f"{self._base_url}/invocation/next"
        response = self._request("GET", url, None)
        return parse_invocation(response.headers, response.content)

    def post_response(self, request_id: str, response: RawHttpResponse) -> None:
        """Post a standard JSON response for an invocation.

        Args:
            request_id: Request id of the invocation.
            response: Formatted response.
        """
        url = f"{self._base_url}/invocation/{request_id}/response"
        self._request(
            "POST",
            url,
            self._timeout_seconds,
            data=response.body,
            headers=dict(response.headers),
        )

    def post_http_response(self, request_id: str, response: RawHttpResponse) -> None:
        """Post an HTTP-shaped response using the HTTP integration format.

        Args:
            request_id: Request id of the invocation.
            response: Formatted HTTP response.
        """
        url = f"{self._base_url}/invocation/{request_id}/response"
        self._request(
            "POST",
            url,
            self._timeout_seconds,
            data=encode_http_integration_response(response),
            headers={
                "Content-Type": HTTP_INTEGRATION_CONTENT_TYPE,
                RESPONSE_MODE_HEADER: "streaming",
            },
        )

    def post_invocation_error(self, request_id: str, report: ErrorReport) -> None:
        """Post an error report for a failed invocation.

        Args:
            request_id: Request id of the invocation.
            report: Error report to send.
        """
        url = f"{self._base_url}/invocation/{request_id}/error"
        self._post_error(url, report)

    def post_init_error(self, report: ErrorReport) -> None:
        """Post an error report for a failed initialization.

        Args:
            report: Error report to send.
        """
        self._post_error(f"{self._base_url}/init/error", report)

    def _post_error(self, url: str, report: ErrorReport) -> None:
        self._request(
            "POST",
            url,
            self._timeout_seconds,
            json=report.to_payload(),
            headers={ERROR_TYPE_HEADER: report.error_type},
        )

    def _request(
        self,
        method: str,
        url: str,
        timeout: float | None,
        **kwargs: Any,
    ) -> requests.Response:
        """Send a request and translate failures into TransportError."""
        try:
            response = self._session.request(method, url, timeout=timeout, **kwargs)
        except requests.RequestException as error:
            raise TransportError(f"{method} {url} failed: {error}", url=url) from error

        if not response.ok:
            raise TransportError(
                f"{method} {url} returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response
