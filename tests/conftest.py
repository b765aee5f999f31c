"""Pytest configuration and fixtures for backend tests.

This module provides shared fixtures for testing the records API,
including API Gateway events and an in-memory record store.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


# --- Store Fixtures ---


class FakeRecordStore:
    """In-memory record store that counts collaborator calls."""

    def __init__(self, items: list[dict[str, Any]] | None = None):
        self.items: list[dict[str, Any]] = list(items or [])
        self.put_calls = 0
        self.scan_calls = 0

    @property
    def call_count(self) -> int:
        return self.put_calls + self.scan_calls

    def put(self, item: dict[str, Any]) -> None:
        self.put_calls += 1
        self.items = [
            existing for existing in self.items if existing.get('id') != item['id']
        ]
        self.items.append(dict(item))

    def scan(self) -> list[dict[str, Any]]:
        self.scan_calls += 1
        return [dict(item) for item in self.items]


class FailingRecordStore(FakeRecordStore):
    """Record store whose every call raises."""

    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    def put(self, item: dict[str, Any]) -> None:
        self.put_calls += 1
        raise self.error

    def scan(self) -> list[dict[str, Any]]:
        self.scan_calls += 1
        raise self.error


@pytest.fixture
def record_store() -> FakeRecordStore:
    """Empty in-memory record store."""
    return FakeRecordStore()


@pytest.fixture(autouse=True)
def clear_caches():
    """Reset process-wide boto3 and store caches between tests."""
    from app.db.record_store import clear_store_cache
    from app.services.aws_clients import clear_client_cache

    clear_store_cache()
    clear_client_cache()
    yield
    clear_store_cache()
    clear_client_cache()


@pytest.fixture
def table_name(monkeypatch) -> str:
    """Set TABLE_NAME for the duration of a test."""
    monkeypatch.setenv('TABLE_NAME', 'records-test')
    return 'records-test'


# --- API Event Fixtures ---


@pytest.fixture
def api_gateway_event() -> dict:
    """Base API Gateway event structure."""
    return {
        'httpMethod': 'GET',
        'path': '/records',
        'queryStringParameters': None,
        'multiValueQueryStringParameters': None,
        'headers': {'Content-Type': 'application/json'},
        'requestContext': {
            'requestId': str(uuid4()),
        },
        'body': None,
        'isBase64Encoded': False,
    }


def make_event(base: dict, method: str, body: str | None = None) -> dict:
    """Copy an event with a different method and body."""
    event = dict(base)
    event['httpMethod'] = method
    event['body'] = body
    return event
