# tests/routes/test_cache_routes.py
"""Tests for the cache administration routes."""

from collections.abc import Callable

from httpx import AsyncClient

from app.managers.response_cache import ResponseCache
from app.models import PostDB

CACHE = "/api/cache"


async def test_stats_reflect_traffic(
    client: AsyncClient,
    make_post: Callable[..., PostDB],
) -> None:
    make_post()
    await client.get("/api/posts")
    await client.get("/api/posts")

    response = await client.get(f"{CACHE}/stats")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    data = body["data"]
    assert data["hits"] == 1
    assert data["misses"] == 1
    assert data["sets"] == 1
    assert data["hit_rate"] == "50.00%"
    assert data["size"] == 1


async def test_reset_stats(client: AsyncClient, response_cache: ResponseCache) -> None:
    response_cache.get_payload("missing")

    response = await client.post(f"{CACHE}/reset-stats")

    assert response.json() == {"message": "Cache statistics reset"}
    assert response_cache.get_statistics()["misses"] == 0


async def test_clear_removes_everything(
    client: AsyncClient,
    response_cache: ResponseCache,
) -> None:
    response_cache.set_payload("a", "{}")
    response_cache.set_payload("b", "{}")

    response = await client.delete(f"{CACHE}/clear")

    body = response.json()
    assert body["message"] == "Cache cleared successfully"
    assert body["removed"] == 2
    assert response_cache.size == 0
