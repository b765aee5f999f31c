"""Shared response utilities for Lambda handlers."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any
from typing import Optional

from pydantic import BaseModel

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_cors_headers() -> dict[str, str]:
    """Get CORS headers for the response.

    The API is open to every origin, so the headers are fixed.

    Returns:
        Dictionary of CORS headers to include in the response.
    """
    return dict(_CORS_HEADERS)


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway response.

    CORS headers are applied after any per-response headers, so they are
    present on every path.

    Args:
        status_code: HTTP status code.
        body: Response body (dict, list, or Pydantic model).
        headers: Optional additional headers to include.

    Returns:
        API Gateway response dictionary.
    """
    response_headers = {
        "Content-Type": "application/json",
    }

    if headers:
        response_headers.update(headers)

    response_headers.update(get_cors_headers())

    payload = _serialize_body(body)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(payload, default=_json_default),
    }


def _serialize_body(body: Any) -> Any:
    """Serialize response body to JSON-compatible format.

    Args:
        body: The body to serialize.

    Returns:
        JSON-serializable representation of the body.
    """
    if isinstance(body, BaseModel):
        return body.model_dump(exclude_none=True)

    return body


def _json_default(value: Any) -> Any:
    """Encode values ``json`` cannot handle natively.

    DynamoDB returns every number as ``Decimal``; integral values are
    rendered as ints and the rest as floats. Sets come back from string
    and number set attributes.
    """
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)
