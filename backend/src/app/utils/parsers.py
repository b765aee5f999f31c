"""Shared parsing utilities for request handling."""

from __future__ import annotations

import base64
import binascii
import json
from decimal import Decimal
from typing import Any
from typing import Mapping

from app.exceptions import RequestBodyError


def get_http_method(event: Mapping[str, Any]) -> str:
    """Return the HTTP method of an API Gateway proxy event.

    Args:
        event: The Lambda event.

    Returns:
        The method name exactly as sent, or an empty string if absent.
        Matching is case-sensitive; ``get`` is not ``GET``.
    """
    return str(event.get("httpMethod") or "")


def decode_body(event: Mapping[str, Any]) -> str:
    """Return the raw request body as text.

    Bodies flagged ``isBase64Encoded`` are decoded to UTF-8 first.

    Raises:
        RequestBodyError: If the body is missing or cannot be decoded.
    """
    body = event.get("body")
    if body is None:
        raise RequestBodyError("Request body is required")
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise RequestBodyError(f"Invalid base64 body: {exc}") from exc
    return str(body)


def _reject_constant(name: str) -> Any:
    """Refuse ``NaN`` and ``Infinity``, which are not valid JSON."""
    raise RequestBodyError(f"Invalid JSON constant: {name}")


def parse_json_body(event: Mapping[str, Any]) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Numbers with a fractional part are parsed as ``Decimal`` because the
    DynamoDB resource layer rejects floats.

    Args:
        event: The Lambda event.

    Returns:
        The parsed object.

    Raises:
        RequestBodyError: If the body is missing, malformed, or not an object.
    """
    text = decode_body(event)
    try:
        payload = json.loads(
            text, parse_float=Decimal, parse_constant=_reject_constant
        )
    except json.JSONDecodeError as exc:
        raise RequestBodyError(str(exc)) from exc

    if not isinstance(payload, dict):
        raise RequestBodyError("Request body must be a JSON object")
    return payload
