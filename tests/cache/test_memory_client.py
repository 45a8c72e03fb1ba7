# tests/cache/test_memory_client.py
"""Tests for app/clients/memory_client.py module."""

import pytest

from app.clients.memory_client import MemoryClient


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client(clock: FakeClock) -> MemoryClient:
    return MemoryClient(max_entries=3, clock=clock)


class TestBasicOperations:
    """Tests for get, set and delete."""

    def test_set_and_get(self, client: MemoryClient) -> None:
        client.set("k", "v")
        assert client.get("k") == "v"

    def test_get_missing(self, client: MemoryClient) -> None:
        assert client.get("missing") is None

    def test_set_replaces_value(self, client: MemoryClient) -> None:
        client.set("k", "one")
        client.set("k", "two")
        assert client.get("k") == "two"
        assert len(client) == 1

    def test_delete_counts_existing_keys(self, client: MemoryClient) -> None:
        client.set("a", "1")
        client.set("b", "2")
        assert client.delete("a", "b", "c") == 2
        assert client.get("a") is None

    def test_delete_where(self, client: MemoryClient) -> None:
        client.set("/api/posts:anonymous:", "1")
        client.set("/api/posts/x:anonymous:", "2")
        client.set("/api/tags:anonymous:", "3")
        removed = client.delete_where(lambda key: key.startswith("/api/posts"))
        assert removed == 2
        assert client.keys() == ["/api/tags:anonymous:"]

    def test_flush_all(self, client: MemoryClient) -> None:
        client.set("a", "1")
        client.set("b", "2")
        assert client.flush_all() == 2
        assert len(client) == 0

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError, match="max_entries"):
            MemoryClient(max_entries=0)


class TestExpiry:
    """Tests for per-key TTL."""

    def test_entry_expires(self, client: MemoryClient, clock: FakeClock) -> None:
        client.set("k", "v", ex=10)
        clock.advance(9)
        assert client.get("k") == "v"
        clock.advance(2)
        assert client.get("k") is None

    def test_entry_without_ttl_never_expires(self, client: MemoryClient, clock: FakeClock) -> None:
        client.set("forever", "v")
        clock.advance(10**6)
        assert client.get("forever") == "v"
        assert client.active_expire() == 0

    def test_expired_keys_are_hidden(self, client: MemoryClient, clock: FakeClock) -> None:
        client.set("k", "v", ex=1)
        clock.advance(5)
        assert client.keys() == []

    def test_active_expire_removes_expired(self, client: MemoryClient, clock: FakeClock) -> None:
        client.set("a", "1", ex=1)
        client.set("b", "2", ex=100)
        clock.advance(5)
        assert client.active_expire() == 1
        assert len(client) == 1


class TestEviction:
    """Tests for the entry and memory limits."""

    def test_least_recently_used_is_evicted(self, client: MemoryClient) -> None:
        client.set("a", "1")
        client.set("b", "2")
        client.set("c", "3")
        client.get("a")
        evicted = client.set("d", "4")
        assert evicted == 1
        assert client.get("b") is None
        assert client.get("a") == "1"
        assert client.evicted == 1

    def test_never_exceeds_capacity(self, client: MemoryClient) -> None:
        for i in range(10):
            client.set(f"k{i}", "v")
        assert len(client) == client.max_entries

    def test_memory_limit_evicts_oldest(self) -> None:
        client = MemoryClient(max_entries=100, max_memory_mb=1)
        half = "x" * (600 * 1024)
        client.set("first", half)
        evicted = client.set("second", half)
        assert evicted == 1
        assert client.get("first") is None
        assert client.get("second") == half

    def test_entry_larger_than_memory_limit_is_skipped(self) -> None:
        client = MemoryClient(max_entries=100, max_memory_mb=1)
        client.set("small", "v")

        evicted = client.set("huge", "y" * (2 * 1024 * 1024))

        assert evicted == 0
        assert client.get("huge") is None
        assert client.get("small") == "v"
        assert client.info()["used_memory_bytes"] <= 1024 * 1024

    def test_oversized_write_drops_previous_value(self) -> None:
        client = MemoryClient(max_entries=100, max_memory_mb=1)
        client.set("k", "old")
        client.set("k", "y" * (2 * 1024 * 1024))
        assert client.get("k") is None


class TestLifecycle:
    """Tests for background expiry start and stop."""

    async def test_start_and_close(self, client: MemoryClient) -> None:
        await client.start_lifecycle()
        assert client.ping() is True
        await client.close()
        assert client.ping() is False

    def test_info_reports_usage(self, client: MemoryClient) -> None:
        client.set("a", "1")
        info = client.info()
        assert info["server"] == "In-Memory Cache"
