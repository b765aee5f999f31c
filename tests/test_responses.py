"""Tests for response helpers."""

from __future__ import annotations

import json
import sys
from decimal import Decimal
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from app.api.schemas import MessageSchema  # noqa: E402
from app.utils.responses import get_cors_headers, json_response  # noqa: E402


class TestJsonResponse:
    """Tests for json_response function."""

    def test_builds_proxy_response(self) -> None:
        response = json_response(200, {'ok': True})

        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'ok': True}

    def test_always_includes_cors_headers(self) -> None:
        response = json_response(201, {})

        assert response['headers'] == {
            'Content-Type': 'application/json',
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': 'GET, POST, OPTIONS',
            'Access-Control-Allow-Headers': 'Content-Type',
        }

    def test_cors_headers_override_extra_headers(self) -> None:
        response = json_response(
            200,
            {},
            headers={'Access-Control-Allow-Origin': 'https://example.com', 'X-Extra': '1'},
        )

        assert response['headers']['Access-Control-Allow-Origin'] == '*'
        assert response['headers']['X-Extra'] == '1'

    def test_serializes_pydantic_model_without_nulls(self) -> None:
        response = json_response(405, MessageSchema(message='Method Not Allowed'))

        assert json.loads(response['body']) == {'message': 'Method Not Allowed'}

    def test_serializes_decimals_as_numbers(self) -> None:
        response = json_response(200, [{'a': Decimal('3'), 'b': Decimal('0.5')}])

        assert response['body'] == '[{"a": 3, "b": 0.5}]'

    def test_serializes_sets_as_lists(self) -> None:
        response = json_response(200, {'tags': {'b', 'a'}})

        assert json.loads(response['body']) == {'tags': ['a', 'b']}


def test_get_cors_headers_returns_copy() -> None:
    """Ensure callers cannot mutate the shared header table."""

    headers = get_cors_headers()
    headers['Access-Control-Allow-Origin'] = 'mutated'

    assert get_cors_headers()['Access-Control-Allow-Origin'] == '*'
