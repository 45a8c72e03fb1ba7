"""
Serialization utilities for the response cache.

Uses orjson for high-performance JSON serialization. Cached payloads are
stored as the exact JSON text that was sent to the client, so a cache hit can
replay it byte for byte.
"""

from logging import getLogger
from typing import Any

from fastapi.encoders import jsonable_encoder
from orjson import OPT_NON_STR_KEYS, JSONDecodeError
from orjson import dumps as orjson_dumps
from orjson import loads as orjson_loads
from pydantic_core import PydanticSerializationError

from app.configs import file_logger
from app.errors.cache import CacheDeserializationError, CacheSerializationError

logger = file_logger(getLogger(__name__))


def serialize(value: object) -> str:
    """
    Serialize value to JSON string.

    Pydantic models are dumped by alias, the same way FastAPI renders them.

    Args:
        value: Value to serialize.

    Returns:
        JSON serialized string.

    Raises:
        CacheSerializationError: If serialization fails.
    """
    try:
        encoded = jsonable_encoder(value, by_alias=True)
        return orjson_dumps(encoded, default=str, option=OPT_NON_STR_KEYS).decode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        logger.exception("Serialization failed")
        raise CacheSerializationError from e


def deserialize(value: str) -> Any:  # noqa: ANN401
    """
    Deserialize JSON string to value.

    Args:
        value: JSON string to deserialize.

    Returns:
        Deserialized value.

    Raises:
        CacheDeserializationError: If deserialization fails.
    """
    try:
        return orjson_loads(value)
    except (JSONDecodeError, TypeError) as e:
        logger.exception("Deserialization failed")
        raise CacheDeserializationError from e
