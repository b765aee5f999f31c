"""Utility modules for the records API."""

from app.utils.parsers import (
    decode_body,
    get_http_method,
    parse_json_body,
)
from app.utils.responses import get_cors_headers, json_response
from app.utils.logging import (
    configure_logging,
    get_logger,
    set_request_context,
    clear_request_context,
)

__all__ = [
    "clear_request_context",
    "configure_logging",
    "decode_body",
    "get_cors_headers",
    "get_http_method",
    "get_logger",
    "json_response",
    "parse_json_body",
    "set_request_context",
]
