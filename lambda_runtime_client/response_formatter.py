"""Response encoding for handler results.

Two encodings exist. Standard responses are the handler result as JSON.
HTTP-shaped responses are used for Function URL events and carry the
status code, headers and raw body the handler returned.
"""

import base64
import json
from collections.abc import Mapping
from typing import Any

from lambda_runtime_client.exceptions.invocation_errors import ResponseFormatError
from lambda_runtime_client.models import RawHttpResponse, ResponseKind

FUNCTION_URL_MARKER = ".lambda-url."
FUNCTION_URL_SUFFIX = ".on.aws"
REMAPPED_HEADER_PREFIX = "x-amzn-remapped-"
CONTENT_TYPE_HEADER = "content-type"
JSON_CONTENT_TYPE = "application/json"


def classify(event: Any) -> ResponseKind:
    """Decide the response encoding from the inbound event.

    Args:
        event: The decoded invocation event.

    Returns:
        HTTP_SHAPED for Function URL events, STANDARD otherwise.
    """
    if not isinstance(event, Mapping):
        return ResponseKind.STANDARD

    request_context = event.get("requestContext")
    if not isinstance(request_context, Mapping):
        return ResponseKind.STANDARD

    domain_name = request_context.get("domainName")
    if (
        isinstance(domain_name, str)
        and FUNCTION_URL_MARKER in domain_name
        and domain_name.endswith(FUNCTION_URL_SUFFIX)
    ):
        return ResponseKind.HTTP_SHAPED
    return ResponseKind.STANDARD


def _decode_body(result: Mapping[str, Any]) -> bytes:
    """Return the raw body bytes of an HTTP-shaped result."""
    body = result.get("body")
    if body is None:
        return b""
    if not isinstance(body, str):
        raise ResponseFormatError(
            "HTTP response body must be a string",
            context={"body_type": type(body).__name__},
        )
    if result.get("isBase64Encoded"):
        try:
            return base64.b64decode(body)
        except ValueError as error:
            raise ResponseFormatError(f"Invalid base64 response body: {error}") from error
    return body.encode("utf-8")


def _remap_headers(headers: Any) -> dict[str, str]:
    """Forward content-type as is and move every other header under the reserved prefix."""
    if headers is None:
        return {}
    if not isinstance(headers, Mapping):
        raise ResponseFormatError(
            "HTTP response headers must be a mapping",
            context={"headers_type": type(headers).__name__},
        )

    remapped: dict[str, str] = {}
    for name, value in headers.items():
        if str(name).lower() == CONTENT_TYPE_HEADER:
            remapped[str(name)] = str(value)
        else:
            remapped[f"{REMAPPED_HEADER_PREFIX}{name}"] = str(value)
    return remapped


def format_http_shaped(result: Any) -> RawHttpResponse | None:
    """Format an HTTP-shaped handler result.

    Args:
        result: The handler result.

    Returns:
        The raw HTTP response, or None if the result carries no ``statusCode``.

    Raises:
        ResponseFormatError: If the status, headers or body are malformed.
    """
    if not isinstance(result, Mapping) or "statusCode" not in result:
        return None

    status_code = result["statusCode"]
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        raise ResponseFormatError(
            "HTTP response statusCode must be an integer",
            context={"status_code": repr(status_code)},
        )

    return RawHttpResponse(
        status_code=status_code,
        headers=_remap_headers(result.get("headers")),
        body=_decode_body(result),
    )


def format_standard(result: Any) -> RawHttpResponse:
    """Serialize a handler result as compact JSON.

    Args:
        result: Any JSON-serializable value, including None.

    Returns:
        The raw HTTP response with a JSON body.

    Raises:
        ResponseFormatError: If the result is not JSON-serializable.
    """
    try:
        body = json.dumps(result, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as error:
        raise ResponseFormatError(
            f"Unable to serialize handler result: {error}",
            context={"result_type": type(result).__name__},
        ) from error

    return RawHttpResponse(
        status_code=200,
        headers={CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE},
        body=body.encode("utf-8"),
    )


def format_response(event: Any, result: Any) -> tuple[ResponseKind, RawHttpResponse]:
    """Format a handler result for the event that produced it.

    HTTP shaping is driven by the event only: a result that looks
    HTTP-shaped on a non Function URL event is still sent as JSON.

    Args:
        event: The inbound event.
        result: The handler result.

    Returns:
        Tuple of (encoding used, formatted response).
    """
    if classify(event) == ResponseKind.HTTP_SHAPED:
        http_response = format_http_shaped(result)
        if http_response is not None:
            return ResponseKind.HTTP_SHAPED, http_response
    return ResponseKind.STANDARD, format_standard(result)
