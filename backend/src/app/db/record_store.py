"""DynamoDB-backed record store.

The store is the only collaborator the records handler talks to. It exposes
exactly two operations, an unconditional put and a single unfiltered scan.
"""

from __future__ import annotations

import os
from typing import Any
from typing import Optional
from typing import Protocol

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from app.exceptions import ConfigurationError
from app.exceptions import StoreError
from app.services.aws_clients import get_dynamodb_resource
from app.utils.logging import get_logger

logger = get_logger(__name__)

_STORE_CACHE: dict[str, "DynamoRecordStore"] = {}


class RecordStore(Protocol):
    """Interface for the record store collaborator."""

    def put(self, item: dict[str, Any]) -> None:
        ...

    def scan(self) -> list[dict[str, Any]]:
        ...


class DynamoRecordStore:
    """Record store backed by a boto3 DynamoDB ``Table`` resource."""

    def __init__(self, table: Any):
        """Initialize the store.

        Args:
            table: A boto3 ``dynamodb.Table`` resource (or a test double).
        """
        self._table = table

    @property
    def table_name(self) -> str:
        """Name of the underlying table."""
        return str(getattr(self._table, "name", ""))

    def put(self, item: dict[str, Any]) -> None:
        """Write an item with no overwrite check.

        Args:
            item: The record to store. Must contain the ``id`` key.

        Raises:
            StoreError: If the DynamoDB call fails.
        """
        try:
            self._table.put_item(Item=item)
        except (ClientError, BotoCoreError) as exc:
            logger.error(f"put_item failed on {self.table_name}: {exc}")
            raise StoreError(str(exc), detail=_error_code(exc)) from exc

    def scan(self) -> list[dict[str, Any]]:
        """Return the items from a single unfiltered scan.

        Only one page is read. When DynamoDB truncates the result the
        continuation key is logged and dropped.

        Raises:
            StoreError: If the DynamoDB call fails.
        """
        try:
            response = self._table.scan()
        except (ClientError, BotoCoreError) as exc:
            logger.error(f"scan failed on {self.table_name}: {exc}")
            raise StoreError(str(exc), detail=_error_code(exc)) from exc

        items = response.get("Items", [])
        if response.get("LastEvaluatedKey"):
            logger.warning(
                "Scan result truncated; remaining items are not returned",
                extra={
                    "table": self.table_name,
                    "returned": len(items),
                    "last_evaluated_key": response["LastEvaluatedKey"],
                },
            )
        return list(items)


def get_table_name() -> str:
    """Return the target table name from the environment.

    Raises:
        ConfigurationError: If ``TABLE_NAME`` is not set.
    """
    table_name = os.getenv("TABLE_NAME")
    if not table_name:
        raise ConfigurationError("TABLE_NAME")
    return table_name


def get_record_store(table_name: Optional[str] = None) -> DynamoRecordStore:
    """Return the process-wide store for a table, creating it on first use."""
    name = table_name or get_table_name()
    if name in _STORE_CACHE:
        return _STORE_CACHE[name]
    store = DynamoRecordStore(get_dynamodb_resource().Table(name))
    _STORE_CACHE[name] = store
    return store


def clear_store_cache() -> None:
    """Clear cached stores (useful in tests)."""
    _STORE_CACHE.clear()


def _error_code(exc: Exception) -> str:
    """Return the DynamoDB error code, or the exception name."""
    if isinstance(exc, ClientError):
        return str(exc.response.get("Error", {}).get("Code") or type(exc).__name__)
    return type(exc).__name__
