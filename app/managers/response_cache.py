# app/managers/response_cache.py
"""In-process response cache with targeted invalidation."""

from collections.abc import Callable
from logging import DEBUG, getLogger
from typing import Any
from uuid import UUID

from app.clients.memory_client import MemoryClient
from app.configs import CacheConfig, file_logger, settings
from app.data import CacheStatistics
from app.errors import BASE_EXCEPTION, CacheExceptionError
from app.utils.cache_keys import split_cache_key
from app.utils.cache_serializer import deserialize, serialize

logger = file_logger(getLogger(__name__))

CACHE_FAILURES = (CacheExceptionError, ValueError, TypeError, *BASE_EXCEPTION)


class ResponseCache:
    """
    Best-effort cache of rendered GET responses keyed by request fingerprint.

    Keys come from ``app.utils.cache_keys.build_cache_key``. Values are the
    JSON text of a successful response. Mutating routes call the
    ``invalidate_*`` methods after their write commits so the next read is
    recomputed.

    No operation raises: internal failures are logged, counted in the
    statistics and reported as a miss (reads) or a no-op (writes).

    Features:
        - Per-entry TTL with lazy and background expiry
        - Global entry limit with LRU eviction
        - Invalidation by listing, by resource and by user identity
        - Statistics tracking
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        resource_prefix: str | None = None,
        client: MemoryClient | None = None,
    ) -> None:
        """
        Initialize the response cache.

        Args:
            config: Cache configuration. Read from the environment if omitted.
            resource_prefix: Path prefix of the post collection, for example
                ``/api/posts``. Listing and resource invalidation match
                against it.
            client: Backing store. Built from ``config`` if omitted.
        """
        self.config = config or CacheConfig()
        self.resource_prefix = (resource_prefix or f"{settings.API_PREFIX}/posts").rstrip("/")
        self.client = client or MemoryClient(
            max_entries=self.config.max_entries,
            cleanup_interval=self.config.cleanup_interval,
        )
        self.statistics = CacheStatistics()
        self._list_paths = frozenset(
            {
                self.resource_prefix,
                f"{self.resource_prefix}/my-posts",
                f"{self.resource_prefix}/saved",
            },
        )

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def size(self) -> int:
        return len(self.client)

    async def initialize(self) -> None:
        """Start background expiry."""
        await self.client.start_lifecycle()
        logger.info(
            "Response cache initialized (enabled=%s, max_entries=%d).",
            self.enabled,
            self.config.max_entries,
        )

    async def shutdown(self) -> None:
        await self.client.close()
        logger.info("Response cache shutdown successfully.")

    def get_payload(self, key: str) -> str | None:
        """
        Return the cached JSON text for ``key``.

        Args:
            key: Request fingerprint.

        Returns:
            The stored JSON text, or None on a miss, an expired entry or an
            internal failure.
        """
        try:
            payload = self.client.get(key)
        except CACHE_FAILURES:
            logger.exception("Cache get failed for key: %s", key)
            self.statistics.record_error()
            return None

        if payload is None:
            self.statistics.record_miss()
            return None

        self.statistics.record_hit(len(payload.encode("utf-8")))
        if logger.isEnabledFor(DEBUG):
            logger.debug("Cache hit for key: %s", key)
        return payload

    def set_payload(self, key: str, payload: str, ttl: int | None = None) -> bool:
        """
        Store JSON text under ``key``, replacing any previous entry.

        Args:
            key: Request fingerprint.
            payload: JSON text to replay on later hits.
            ttl: Seconds to live. Defaults to ``CacheConfig.ttl_default``.

        Returns:
            True if the entry was stored.
        """
        ex = ttl if ttl is not None else self.config.ttl_default
        try:
            evicted = self.client.set(key, payload, ex=ex)
        except CACHE_FAILURES:
            logger.exception("Cache set failed for key %s", key)
            self.statistics.record_error()
            return False

        self.statistics.record_set(len(payload.encode("utf-8")))
        if evicted:
            self.statistics.record_eviction(evicted)
        return True

    def get(self, key: str) -> Any | None:  # noqa: ANN401
        """Return the cached value for ``key`` decoded from JSON, or None."""
        payload = self.get_payload(key)
        if payload is None:
            return None
        try:
            return deserialize(payload)
        except CacheExceptionError:
            self.statistics.record_error()
            self.delete(key)
            return None

    def set(self, key: str, value: object, ttl: int | None = None) -> bool:
        """Serialize ``value`` to JSON and store it under ``key``."""
        try:
            payload = serialize(value)
        except CacheExceptionError:
            self.statistics.record_error()
            return False
        return self.set_payload(key, payload, ttl)

    def delete(self, *keys: str) -> int:
        try:
            removed = self.client.delete(*keys)
        except CACHE_FAILURES:
            logger.exception("Cache delete failed for keys: %s", keys)
            self.statistics.record_error()
            return 0
        self.statistics.record_invalidation(removed)
        return removed

    def keys(self) -> list[str]:
        return self.client.keys()

    def _invalidate(self, reason: str, predicate: Callable[[str], bool]) -> int:
        try:
            removed = self.client.delete_where(predicate)
        except CACHE_FAILURES:
            logger.exception("Cache invalidation failed (%s)", reason)
            self.statistics.record_error()
            return 0

        self.statistics.record_invalidation(removed)
        if removed:
            logger.info("Invalidated %d cache entries (%s).", removed, reason)
        return removed

    def invalidate_list(self) -> int:
        """
        Drop every cached collection listing.

        Covers the public post listing under any query string plus the
        per-user ``my-posts`` and ``saved`` listings. Single-resource entries
        nested under the prefix are left alone.

        Returns:
            Number of entries removed.
        """
        return self._invalidate(
            "listings",
            lambda key: split_cache_key(key).path in self._list_paths,
        )

    def invalidate_resource(self, identifier: str | UUID) -> int:
        """
        Drop cached reads of one resource and everything nested under it.

        Matches ``{prefix}/{identifier}``, any path below it (such as its
        comments) and the owner's draft view ``{prefix}/drafts/{identifier}``.

        Args:
            identifier: Slug or id of the resource.

        Returns:
            Number of entries removed.
        """
        ident = str(identifier).strip("/")
        if not ident:
            return 0

        target = f"{self.resource_prefix}/{ident}"
        draft = f"{self.resource_prefix}/drafts/{ident}"

        def matches(key: str) -> bool:
            path = split_cache_key(key).path
            return path in (target, draft) or path.startswith(f"{target}/")

        return self._invalidate(f"resource {ident}", matches)

    def invalidate_post(self, post_id: str | UUID, *slugs: str) -> int:
        """Drop single reads and comment threads of one post, by id and by each slug."""
        return sum(self.invalidate_resource(identifier) for identifier in (post_id, *slugs))

    def invalidate_user(self, user_id: str | UUID) -> int:
        """
        Drop every entry cached for a specific requesting user.

        Args:
            user_id: Identity segment to match.

        Returns:
            Number of entries removed.
        """
        identity = str(user_id)
        if not identity:
            return 0
        return self._invalidate(
            f"user {identity}",
            lambda key: split_cache_key(key).identity == identity,
        )

    def invalidate_all(self) -> int:
        """Clear the whole cache."""
        try:
            removed = self.client.flush_all()
        except CACHE_FAILURES:
            logger.exception("Cache clear failed")
            self.statistics.record_error()
            return 0
        self.statistics.record_invalidation(removed)
        logger.info("Response cache cleared (%d entries).", removed)
        return removed

    def health_check(self) -> dict[str, Any]:
        """
        Report cache health.

        Returns:
            Dictionary with status, backend info and statistics.
        """
        result: dict[str, Any] = {
            "backend": "in-memory",
            "enabled": self.enabled,
            "statistics": self.get_statistics(),
        }
        try:
            result["status"] = "healthy" if self.client.ping() else "unhealthy"
            result["info"] = self.client.info()
        except BASE_EXCEPTION as e:
            result["status"] = "unhealthy"
            result["error"] = str(e)
        return result

    def get_statistics(self) -> dict[str, int | float | str]:
        stats = self.statistics.to_dict()
        stats["size"] = self.size
        stats["max_entries"] = self.config.max_entries
        return stats

    def reset_statistics(self) -> None:
        self.statistics.reset()
        logger.info("Cache statistics reset.")
