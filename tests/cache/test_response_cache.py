# tests/cache/test_response_cache.py
"""Tests for app/managers/response_cache.py module."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from pytest_mock import MockerFixture

from app.configs import CacheConfig
from app.managers.response_cache import ResponseCache
from app.utils.cache_keys import build_cache_key

PREFIX = "/api/posts"


@pytest.fixture
def cache() -> ResponseCache:
    return ResponseCache(config=CacheConfig(max_entries=50), resource_prefix=PREFIX)


def fill(cache: ResponseCache, *keys: str) -> None:
    for key in keys:
        cache.set_payload(key, '{"ok":true}')


class TestPayloads:
    """Tests for get_payload and set_payload."""

    def test_miss_then_hit(self, cache: ResponseCache) -> None:
        key = build_cache_key(PREFIX)
        assert cache.get_payload(key) is None
        cache.set_payload(key, '{"posts":[]}')
        assert cache.get_payload(key) == '{"posts":[]}'

        stats = cache.get_statistics()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["sets"] == 1
        assert stats["hit_rate"] == "50.00%"

    def test_default_ttl_applied(self, cache: ResponseCache, mocker: MockerFixture) -> None:
        store_set = mocker.spy(cache.client, "set")
        cache.set_payload("k", "{}")
        store_set.assert_called_once_with("k", "{}", ex=cache.config.ttl_default)

    def test_explicit_ttl(self, cache: ResponseCache, mocker: MockerFixture) -> None:
        store_set = mocker.spy(cache.client, "set")
        cache.set_payload("k", "{}", ttl=5)
        store_set.assert_called_once_with("k", "{}", ex=5)

    def test_get_and_set_json_values(self, cache: ResponseCache) -> None:
        assert cache.set("k", {"a": 1}) is True
        assert cache.get("k") == {"a": 1}

    def test_corrupt_entry_is_dropped(self, cache: ResponseCache) -> None:
        cache.set_payload("k", "{broken")
        assert cache.get("k") is None
        assert cache.client.get("k") is None
        assert cache.get_statistics()["errors"] == 1

    def test_evictions_are_counted(self) -> None:
        cache = ResponseCache(config=CacheConfig(max_entries=2), resource_prefix=PREFIX)
        fill(cache, "a", "b", "c")
        assert cache.size == 2
        assert cache.get_statistics()["evictions"] == 1


class TestFailures:
    """Store failures degrade to misses and no-ops."""

    def test_get_failure_is_a_miss(self) -> None:
        client = MagicMock()
        client.get.side_effect = RuntimeError("boom")
        cache = ResponseCache(config=CacheConfig(), resource_prefix=PREFIX, client=client)
        assert cache.get_payload("k") is None
        assert cache.get_statistics()["errors"] == 1

    def test_set_failure_returns_false(self) -> None:
        client = MagicMock()
        client.set.side_effect = ConnectionError("down")
        cache = ResponseCache(config=CacheConfig(), resource_prefix=PREFIX, client=client)
        assert cache.set_payload("k", "{}") is False

    def test_invalidate_failure_returns_zero(self) -> None:
        client = MagicMock()
        client.delete_where.side_effect = RuntimeError("boom")
        cache = ResponseCache(config=CacheConfig(), resource_prefix=PREFIX, client=client)
        assert cache.invalidate_list() == 0

    def test_corrupt_entry_with_failing_delete_is_a_miss(
        self,
        cache: ResponseCache,
        mocker: MockerFixture,
    ) -> None:
        cache.set_payload("k", "{broken")
        mocker.patch.object(cache.client, "delete", side_effect=RuntimeError("store gone"))

        assert cache.get("k") is None
        assert cache.get_statistics()["errors"] == 2


class TestInvalidateList:
    """Tests for invalidate_list."""

    def test_drops_listings_only(self, cache: ResponseCache) -> None:
        user_id = uuid4()
        listings = [
            build_cache_key(PREFIX),
            build_cache_key(PREFIX, None, {"page": "2"}),
            build_cache_key(f"{PREFIX}/my-posts", user_id),
            build_cache_key(f"{PREFIX}/saved", user_id),
        ]
        single = build_cache_key(f"{PREFIX}/hello-world")
        other = build_cache_key("/api/tags")
        fill(cache, *listings, single, other)

        assert cache.invalidate_list() == len(listings)
        assert sorted(cache.keys()) == sorted([single, other])


class TestInvalidateResource:
    """Tests for invalidate_resource and invalidate_post."""

    def test_drops_resource_and_nested_paths(self, cache: ResponseCache) -> None:
        post_id = uuid4()
        doomed = [
            build_cache_key(f"{PREFIX}/{post_id}"),
            build_cache_key(f"{PREFIX}/{post_id}/comments"),
        ]
        kept = [
            build_cache_key(PREFIX),
            build_cache_key(f"{PREFIX}/{uuid4()}/comments"),
        ]
        fill(cache, *doomed, *kept)

        assert cache.invalidate_resource(post_id) == 2
        assert sorted(cache.keys()) == sorted(kept)

    def test_prefix_of_other_slug_is_not_matched(self, cache: ResponseCache) -> None:
        fill(cache, build_cache_key(f"{PREFIX}/hello"), build_cache_key(f"{PREFIX}/hello-world"))
        assert cache.invalidate_resource("hello") == 1
        assert cache.keys() == [build_cache_key(f"{PREFIX}/hello-world")]

    def test_drops_draft_view(self, cache: ResponseCache) -> None:
        user_id = uuid4()
        fill(cache, build_cache_key(f"{PREFIX}/drafts/my-draft", user_id))
        assert cache.invalidate_resource("my-draft") == 1

    def test_empty_identifier_is_a_noop(self, cache: ResponseCache) -> None:
        fill(cache, build_cache_key(PREFIX))
        assert cache.invalidate_resource("") == 0
        assert cache.size == 1

    def test_invalidate_post_covers_id_and_slugs(self, cache: ResponseCache) -> None:
        post_id = uuid4()
        fill(
            cache,
            build_cache_key(f"{PREFIX}/{post_id}/comments"),
            build_cache_key(f"{PREFIX}/new-title"),
            build_cache_key(f"{PREFIX}/old-title"),
        )
        assert cache.invalidate_post(post_id, "new-title", "old-title") == 3
        assert cache.size == 0


class TestInvalidateUser:
    """Tests for invalidate_user."""

    def test_drops_only_that_users_entries(self, cache: ResponseCache) -> None:
        alice, bob = uuid4(), uuid4()
        fill(
            cache,
            build_cache_key(f"{PREFIX}/my-posts", alice),
            build_cache_key(f"{PREFIX}/saved", alice),
            build_cache_key(f"{PREFIX}/my-posts", bob),
            build_cache_key(PREFIX),
        )
        assert cache.invalidate_user(alice) == 2
        assert cache.size == 2

    def test_invalidations_are_counted(self, cache: ResponseCache) -> None:
        user_id = uuid4()
        fill(cache, build_cache_key(f"{PREFIX}/saved", user_id))
        cache.invalidate_user(user_id)
        assert cache.get_statistics()["invalidations"] == 1


class TestAdministration:
    """Tests for invalidate_all, health_check and statistics."""

    def test_invalidate_all(self, cache: ResponseCache) -> None:
        fill(cache, "a", "b")
        assert cache.invalidate_all() == 2
        assert cache.size == 0

    def test_health_check(self, cache: ResponseCache) -> None:
        health = cache.health_check()
        assert health["status"] == "healthy"
        assert health["backend"] == "in-memory"
        assert health["enabled"] is True
        assert "statistics" in health

    def test_reset_statistics(self, cache: ResponseCache) -> None:
        cache.get_payload("missing")
        cache.reset_statistics()
        stats = cache.get_statistics()
        assert stats["misses"] == 0
        assert stats["total_requests"] == 0

    def test_statistics_include_size(self, cache: ResponseCache) -> None:
        fill(cache, "a")
        stats = cache.get_statistics()
        assert stats["size"] == 1
        assert stats["max_entries"] == 50

    async def test_initialize_and_shutdown(self, cache: ResponseCache) -> None:
        await cache.initialize()
        assert cache.health_check()["status"] == "healthy"
        await cache.shutdown()
        assert cache.health_check()["status"] == "unhealthy"
