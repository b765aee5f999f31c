"""Lambda handler for the records API.

``POST`` stores the JSON body as a new record and ``GET`` lists every
record with a single table scan. Any other method is rejected with 405.
"""

from __future__ import annotations

import time
from typing import Any
from typing import Callable
from typing import Mapping
from typing import Optional

from app.api.schemas import MessageSchema
from app.db.record_store import RecordStore
from app.db.record_store import get_record_store
from app.exceptions import AppError
from app.utils import json_response
from app.utils.logging import clear_request_context
from app.utils.logging import configure_logging
from app.utils.logging import get_logger
from app.utils.logging import log_lambda_event
from app.utils.logging import log_response
from app.utils.logging import set_request_context
from app.utils.parsers import get_http_method
from app.utils.parsers import parse_json_body

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

ID_FIELD = "id"


def generate_record_id(clock: Callable[[], float] = time.time) -> str:
    """Return a record id: milliseconds since the epoch, as a string."""
    return str(int(clock() * 1000))


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Handle an API Gateway proxy request for the records API."""

    request_id = (event.get("requestContext") or {}).get("requestId") or getattr(
        context, "aws_request_id", ""
    )
    set_request_context(req_id=request_id)
    start_time = time.perf_counter()

    try:
        log_lambda_event(logger, event)
        response = handle(event)
        log_response(
            logger,
            response["statusCode"],
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return response
    finally:
        clear_request_context()


def handle(
    event: Mapping[str, Any],
    store: Optional[RecordStore] = None,
    clock: Callable[[], float] = time.time,
) -> dict[str, Any]:
    """Dispatch a request on its HTTP method.

    Args:
        event: API Gateway proxy event.
        store: Record store; defaults to the process-wide DynamoDB store.
        clock: Time source used for generated ids.

    Returns:
        API Gateway response dictionary.
    """
    method = get_http_method(event)

    if method not in ("GET", "POST"):
        logger.info(f"Rejected method: {method or '<none>'}")
        return json_response(405, MessageSchema(message="Method Not Allowed"))

    try:
        active_store = store if store is not None else get_record_store()
        if method == "POST":
            return json_response(201, create_record(event, active_store, clock))
        return json_response(200, list_records(active_store))
    except AppError as exc:
        logger.exception(
            f"Request failed: {exc.message}",
            extra={"error_type": type(exc).__name__, "detail": exc.detail},
        )
        return json_response(500, exc.to_dict())
    except Exception as exc:
        logger.exception("Unexpected error in records handler")
        return json_response(
            500, MessageSchema(message="Internal Server Error", error=str(exc))
        )


def create_record(
    event: Mapping[str, Any],
    store: RecordStore,
    clock: Callable[[], float] = time.time,
) -> dict[str, Any]:
    """Build a record from the request body and write it.

    The generated id is the base and body fields are laid over it, so a
    body that carries its own ``id`` keeps it.
    """
    body = parse_json_body(event)
    record = {ID_FIELD: generate_record_id(clock), **body}
    store.put(record)
    logger.info(f"Record created: {record[ID_FIELD]}")
    return record


def list_records(store: RecordStore) -> list[dict[str, Any]]:
    """Return every record from one scan of the table."""
    items = store.scan()
    logger.info(f"Records listed: {len(items)} items", extra={"count": len(items)})
    return items
