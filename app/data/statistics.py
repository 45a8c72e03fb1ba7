"""Response cache statistics."""

from dataclasses import dataclass, field
from threading import Lock

from app.utils.helpers import today_str


@dataclass
class CacheStatistics:
    """Counters for response cache activity, safe to update from any thread."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    invalidations: int = 0
    evictions: int = 0
    errors: int = 0
    total_bytes_written: int = 0
    total_bytes_read: int = 0
    created_at: str = field(default_factory=today_str)
    last_updated_at: str = field(default_factory=today_str)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def record_hit(self, bytes_read: int = 0) -> None:
        with self._lock:
            self.hits += 1
            self.total_bytes_read += bytes_read
            self.last_updated_at = today_str()

    def record_miss(self) -> None:
        with self._lock:
            self.misses += 1
            self.last_updated_at = today_str()

    def record_set(self, bytes_written: int = 0) -> None:
        """
        Record cache set operation.

        Args:
            bytes_written: Number of bytes written.
        """
        with self._lock:
            self.sets += 1
            self.total_bytes_written += bytes_written
            self.last_updated_at = today_str()

    def record_invalidation(self, removed: int) -> None:
        """
        Record keys removed by an invalidation pass.

        Args:
            removed: Number of keys removed.
        """
        with self._lock:
            self.invalidations += removed
            self.last_updated_at = today_str()

    def record_eviction(self, count: int = 1) -> None:
        with self._lock:
            self.evictions += count
            self.last_updated_at = today_str()

    def record_error(self) -> None:
        with self._lock:
            self.errors += 1
            self.last_updated_at = today_str()

    @property
    def hit_rate(self) -> float:
        """
        Calculate cache hit rate.

        Returns:
            Hit rate as percentage (0-100).
        """
        total = self.hits + self.misses
        return (self.hits / total * 100) if total > 0 else 0.0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    def reset(self) -> None:
        """Reset statistics."""
        with self._lock:
            self.hits = 0
            self.misses = 0
            self.sets = 0
            self.invalidations = 0
            self.evictions = 0
            self.errors = 0
            self.total_bytes_written = 0
            self.total_bytes_read = 0
            self.created_at = today_str()
            self.last_updated_at = today_str()

    def to_dict(self) -> dict[str, int | float | str]:
        """
        Convert statistics to dictionary.

        Returns:
            Dictionary representation of statistics.
        """
        with self._lock:
            return {
                "hits": self.hits,
                "misses": self.misses,
                "sets": self.sets,
                "invalidations": self.invalidations,
                "evictions": self.evictions,
                "errors": self.errors,
                "total_bytes_written": self.total_bytes_written,
                "total_bytes_read": self.total_bytes_read,
                "hit_rate": f"{self.hit_rate:.2f}%",
                "total_requests": self.total_requests,
                "created_at": self.created_at,
                "last_updated_at": self.last_updated_at,
            }
