"""
Request metrics for the blog API.

Counts requests, errors and response times per endpoint, plus rate limit
rejections, and samples host CPU, memory and disk usage for `/metrics`.

Features:
    - Thread-safe counters using threading.Lock
    - Memory-efficient circular buffer using deque for response times
    - System metrics collection (CPU, memory, disk)
"""

from asyncio import to_thread
from collections import defaultdict, deque
from dataclasses import dataclass, field
from logging import getLogger
from threading import Lock
from typing import Any

from psutil import cpu_percent as get_cpu_percent
from psutil import disk_usage, virtual_memory

from app.configs import file_logger

logger = file_logger(getLogger(__name__))


# Constants
_BYTES_PER_MB: int = 1024 * 1024
_MAX_RESPONSE_TIMES: int = 1000
_CPU_SAMPLE_INTERVAL: float = 0.1


@dataclass(slots=True)
class ResponseTimeStats:
    """
    Statistics for response times with O(1) operations.

    Uses deque for automatic circular buffer behavior (memory-efficient).
    Pre-calculates sum for O(1) average computation.
    """

    times: deque[float] = field(default_factory=lambda: deque(maxlen=_MAX_RESPONSE_TIMES))
    _sum: float = field(default=0.0, repr=False)

    def add(self, duration: float) -> None:
        """Add a response time, maintaining running sum for O(1) average."""
        if len(self.times) == self.times.maxlen:
            # Remove oldest value from sum before it's evicted
            self._sum -= self.times[0]
        self.times.append(duration)
        self._sum += duration

    @property
    def average(self) -> float:
        """Get average response time in O(1)."""
        return self._sum / len(self.times) if self.times else 0.0

    @property
    def count(self) -> int:
        """Get number of recorded times."""
        return len(self.times)

    def clear(self) -> None:
        """Clear all recorded times."""
        self.times.clear()
        self._sum = 0.0


class MetricsManager:
    """
    Thread-safe metrics collector for API performance tracking.

    All counter operations are protected by locks for thread safety.
    Uses memory-efficient data structures (deque, slots).
    """

    __slots__ = (
        "_lock",
        "_request_counts",
        "_error_counts",
        "_response_times",
        "_rate_limit_hits",
    )

    def __init__(self) -> None:
        """Initialize thread-safe metrics collector."""
        self._lock = Lock()
        self._request_counts: dict[str, int] = defaultdict(int)
        self._error_counts: dict[str, int] = defaultdict(int)
        self._response_times: dict[str, ResponseTimeStats] = defaultdict(ResponseTimeStats)
        self._rate_limit_hits: int = 0

    def record_request(self, endpoint: str) -> None:
        """
        Record an API request (thread-safe).

        Args:
            endpoint: API endpoint path.
        """
        with self._lock:
            self._request_counts[endpoint] += 1

    def record_error(self, endpoint: str) -> None:
        """
        Record an API error (thread-safe).

        Args:
            endpoint: API endpoint path.
        """
        with self._lock:
            self._error_counts[endpoint] += 1

    def record_response_time(self, endpoint: str, duration: float) -> None:
        """
        Record response time for an endpoint (thread-safe).

        Uses deque with maxlen for automatic memory management.

        Args:
            endpoint: API endpoint path.
            duration: Response time in seconds.
        """
        with self._lock:
            self._response_times[endpoint].add(duration)

    def record_rate_limit_hit(self) -> None:
        with self._lock:
            self._rate_limit_hits += 1

    def get_metrics(self) -> dict[str, Any]:
        """
        Get current metrics summary (thread-safe snapshot).

        Returns:
            Dictionary containing all metrics with computed statistics.
        """
        with self._lock:
            avg_response_times = {
                endpoint: stats.average
                for endpoint, stats in self._response_times.items()
                if stats.count > 0
            }
            return {
                "request_counts": dict(self._request_counts),
                "error_counts": dict(self._error_counts),
                "avg_response_times": avg_response_times,
                "rate_limit_hits": self._rate_limit_hits,
            }

    def reset_metrics(self) -> None:
        """Reset all metrics (thread-safe)."""
        with self._lock:
            self._request_counts.clear()
            self._error_counts.clear()
            self._response_times.clear()
            self._rate_limit_hits = 0
        logger.info("Metrics reset")


# Global metrics collector instance (singleton pattern)
metrics_manager = MetricsManager()


@dataclass(slots=True, frozen=True)
class SystemMetrics:
    """Immutable system metrics snapshot."""

    cpu_percent: float
    memory_percent: float
    memory_used_mb: float
    memory_total_mb: float
    disk_percent: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary format for API response."""
        return {
            "cpu_percent": self.cpu_percent,
            "memory": {
                "percent": self.memory_percent,
                "used_mb": self.memory_used_mb,
                "total_mb": self.memory_total_mb,
            },
            "disk_percent": self.disk_percent,
        }


async def get_system_metrics() -> dict[str, Any]:
    """
    Get system-level metrics asynchronously.

    Runs blocking psutil calls in a thread pool to avoid blocking the event loop.

    Returns:
        Dictionary containing system metrics or error information.
    """

    def _collect_metrics() -> SystemMetrics:
        """Collect system metrics (blocking operation)."""
        memory = virtual_memory()
        disk = disk_usage("/")

        # percpu=False (default) returns float, not list

        return SystemMetrics(
            cpu_percent=get_cpu_percent(interval=_CPU_SAMPLE_INTERVAL),
            memory_percent=memory.percent,
            memory_used_mb=round(memory.used / _BYTES_PER_MB, 2),
            memory_total_mb=round(memory.total / _BYTES_PER_MB, 2),
            disk_percent=disk.percent,
        )

    try:
        # Run blocking psutil calls in thread pool
        system_metrics = await to_thread(_collect_metrics)
        return system_metrics.to_dict()

    except OSError as e:
        logger.exception("Failed to get system metrics: OS error")
        return {"error": f"Failed to collect system metrics: {e}"}
    except Exception:
        logger.exception("Failed to get system metrics: unexpected error")
        return {"error": "Failed to collect system metrics"}
