# tests/utils/test_cache_serializer.py
"""Tests for app/utils/cache_serializer.py module."""

from datetime import UTC, datetime
from uuid import UUID

import pytest
from pydantic import BaseModel, Field

from app.errors import CacheDeserializationError
from app.utils.cache_serializer import deserialize, serialize


class AliasedModel(BaseModel):
    """Model whose field has a camelCase alias."""

    view_count: int = Field(alias="viewCount")


class TestSerialize:
    """Tests for serialize."""

    def test_pydantic_models_use_aliases(self) -> None:
        assert serialize(AliasedModel(viewCount=3)) == '{"viewCount":3}'

    def test_uuid_and_datetime(self) -> None:
        value = {
            "id": UUID("12345678-1234-5678-1234-567812345678"),
            "at": datetime(2025, 1, 1, tzinfo=UTC),
        }
        payload = serialize(value)
        assert '"12345678-1234-5678-1234-567812345678"' in payload
        assert "2025-01-01T00:00:00" in payload

    def test_output_is_compact(self) -> None:
        assert serialize({"a": [1, 2]}) == '{"a":[1,2]}'


class TestDeserialize:
    """Tests for deserialize."""

    def test_parses_json(self) -> None:
        assert deserialize('{"a":[1,2]}') == {"a": [1, 2]}

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(CacheDeserializationError):
            deserialize("{not json")
