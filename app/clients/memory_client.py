"""In-memory key-value store backing the response cache."""

from asyncio import CancelledError, Task, create_task
from asyncio import sleep as asyncio_sleep
from collections import OrderedDict
from collections.abc import Callable
from contextlib import suppress
from logging import DEBUG, getLogger
from sys import getsizeof
from threading import Lock
from time import monotonic

from app.configs import file_logger

logger = file_logger(getLogger(__name__))


class MemoryClient:
    """
    A thread-safe in-memory key-value store with expiry and LRU eviction.

    Every public operation is synchronous and holds a ``threading.Lock`` for
    its whole duration, so callers on the event loop never suspend inside it.

    Features:
        - Per-key expiry, enforced lazily on access and by a background sweep
        - Entry count and memory limits with LRU eviction
        - Predicate-based bulk deletion
    """

    DEFAULT_MAX_ENTRIES: int = 1000
    DEFAULT_MAX_MEMORY_MB: int = 100
    DEFAULT_CLEANUP_INTERVAL: int = 60  # seconds
    DEFAULT_CLEANUP_BATCH_SIZE: int = 1000

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_memory_mb: int = DEFAULT_MAX_MEMORY_MB,
        cleanup_interval: int = DEFAULT_CLEANUP_INTERVAL,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        """
        Initialize the MemoryClient with configurable limits.

        Args:
            max_entries: Maximum number of entries before LRU eviction.
            max_memory_mb: Maximum memory usage in megabytes before eviction.
            cleanup_interval: Interval in seconds for the background sweep.
            clock: Monotonic time source, replaceable in tests.
        """
        if max_entries < 1:
            mssg = "max_entries must be at least 1"
            raise ValueError(mssg)

        # OrderedDict keeps recency order for LRU eviction
        self._cache: OrderedDict[str, str] = OrderedDict()
        self._expires_at: dict[str, float] = {}
        self._clock = clock
        self.is_connected: bool = True
        self._cleanup_task: Task[None] | None = None

        self._max_entries = max_entries
        self._max_memory_bytes = max_memory_mb * 1024 * 1024
        self._cleanup_interval = cleanup_interval
        self._cleanup_batch_size = self.DEFAULT_CLEANUP_BATCH_SIZE

        self._current_memory: int = 0
        self._evicted: int = 0
        self._lock = Lock()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def evicted(self) -> int:
        """Total number of entries dropped to respect the size limits."""
        return self._evicted

    async def start_lifecycle(self) -> None:
        """Start the background expiry sweep."""
        if not self._cleanup_task:
            self.is_connected = True
            self._cleanup_task = create_task(self._cleanup_loop())
            logger.info("MemoryClient active expiration task started.")

    async def _cleanup_loop(self) -> None:
        while self.is_connected:
            try:
                await asyncio_sleep(self._cleanup_interval)
                self.active_expire()
            except CancelledError:
                break
            except Exception:
                logger.exception("Error in memory cleanup loop")

    def active_expire(self) -> int:
        """Scan and remove expired keys in batches. Returns the number removed."""
        with self._lock:
            if not self._expires_at:
                return 0

            keys = list(self._expires_at.keys())
            expired_keys: list[str] = []

            for i in range(0, len(keys), self._cleanup_batch_size):
                batch = keys[i : i + self._cleanup_batch_size]
                expired_keys.extend(k for k in batch if self._is_expired(k))

            count = self._delete_internal(*expired_keys) if expired_keys else 0

        if count and logger.isEnabledFor(DEBUG):
            logger.debug("Memory cleanup: removed %d expired keys.", count)
        return count

    def _is_expired(self, key: str) -> bool:
        """Check if a key has expired (caller holds the lock)."""
        deadline = self._expires_at.get(key)
        return deadline is not None and self._clock() >= deadline

    def _estimate_entry_size(self, key: str, value: str) -> int:
        return getsizeof(key) + getsizeof(value)

    def _evict_oldest(self) -> None:
        """Evict the least recently used entry (caller holds the lock)."""
        if self._cache:
            key, value = self._cache.popitem(last=False)
            self._current_memory -= self._estimate_entry_size(key, value)
            self._expires_at.pop(key, None)
            self._evicted += 1

    def _delete_internal(self, *keys: str) -> int:
        count = 0
        for key in keys:
            if key in self._cache:
                value = self._cache.pop(key)
                self._current_memory -= self._estimate_entry_size(key, value)
                self._expires_at.pop(key, None)
                count += 1
        return count

    def get(self, key: str) -> str | None:
        """Get a value, or None when absent or expired."""
        with self._lock:
            if self._is_expired(key):
                self._delete_internal(key)
                return None
            value = self._cache.get(key)
            if value is not None:
                self._cache.move_to_end(key)
            return value

    def set(self, key: str, value: str, ex: int | None = None) -> int:
        """
        Store a value, replacing any previous entry for the key.

        Args:
            key: Cache key.
            value: Serialized value.
            ex: Time to live in seconds. None or 0 stores without expiry.

        Returns:
            Number of entries evicted to make room. An entry larger than the
            whole memory limit is not stored and evicts nothing.
        """
        with self._lock:
            evicted_before = self._evicted
            entry_size = self._estimate_entry_size(key, value)

            if key in self._cache:
                self._delete_internal(key)

            if entry_size > self._max_memory_bytes:
                logger.warning("Skipping cache entry %s: %d bytes exceeds the memory limit", key, entry_size)
                return 0

            while self._cache and (
                len(self._cache) >= self._max_entries
                or self._current_memory + entry_size > self._max_memory_bytes
            ):
                self._evict_oldest()

            self._cache[key] = value
            self._current_memory += entry_size

            if ex:
                self._expires_at[key] = self._clock() + ex

            return self._evicted - evicted_before

    def delete(self, *keys: str) -> int:
        """Delete one or more keys. Returns how many existed."""
        with self._lock:
            return self._delete_internal(*keys)

    def delete_where(self, predicate: Callable[[str], bool]) -> int:
        """Delete every key for which ``predicate`` is true. Returns the count."""
        with self._lock:
            doomed = [key for key in self._cache if predicate(key)]
            return self._delete_internal(*doomed)

    def keys(self) -> list[str]:
        """Snapshot of the live (unexpired) keys, least recently used first."""
        with self._lock:
            return [key for key in self._cache if not self._is_expired(key)]

    def flush_all(self) -> int:
        """Clear the store. Returns how many entries were removed."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._expires_at.clear()
            self._current_memory = 0
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def ping(self) -> bool:
        return self.is_connected

    def info(self) -> dict[str, str | int]:
        """Get information about the in-memory store."""
        with self._lock:
            return {
                "server": "In-Memory Cache",
                "used_memory_bytes": self._current_memory,
                "used_memory_human": f"{self._current_memory / 1024 / 1024:.2f}MB",
                "total_keys": len(self._cache),
                "max_entries": self._max_entries,
                "max_memory_mb": self._max_memory_bytes // 1024 // 1024,
                "evicted_keys": self._evicted,
            }

    async def close(self) -> None:
        """Stop the background sweep."""
        self.is_connected = False
        if self._cleanup_task:
            self._cleanup_task.cancel()
            with suppress(CancelledError):
                await self._cleanup_task
            self._cleanup_task = None
