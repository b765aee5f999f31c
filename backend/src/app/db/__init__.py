"""Record storage."""

from app.db.record_store import DynamoRecordStore
from app.db.record_store import RecordStore
from app.db.record_store import clear_store_cache
from app.db.record_store import get_record_store
from app.db.record_store import get_table_name

__all__ = [
    "DynamoRecordStore",
    "RecordStore",
    "clear_store_cache",
    "get_record_store",
    "get_table_name",
]
