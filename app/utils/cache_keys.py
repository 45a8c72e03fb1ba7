"""
Cache key builders for the response cache.

A response cache key is the request fingerprint
``{path}:{identity}:{query}`` where ``path`` is the request path without its
query string, ``identity`` is the requesting user's id (``anonymous`` when the
route resolved no user) and ``query`` is every query parameter rendered as
``name:value``, sorted by name and joined with ``:``. Sorting makes the key
independent of parameter order, so routes and invalidation code agree on it.
"""

from collections.abc import Iterable, Mapping
from typing import NamedTuple
from uuid import UUID

from fastapi import Request

ANONYMOUS = "anonymous"
SEPARATOR = ":"


class CacheKeyParts(NamedTuple):
    """The three segments of a response cache key."""

    path: str
    identity: str
    query: str


def _normalize_query(query_params: Mapping[str, str] | Iterable[tuple[str, str]]) -> str:
    items = query_params.items() if isinstance(query_params, Mapping) else query_params
    grouped: dict[str, list[str]] = {}
    for name, value in items:
        grouped.setdefault(name, []).append(str(value))
    return SEPARATOR.join(
        f"{name}{SEPARATOR}{','.join(grouped[name])}" for name in sorted(grouped)
    )


def build_cache_key(
    path: str,
    user_id: UUID | str | None = None,
    query_params: Mapping[str, str] | Iterable[tuple[str, str]] = (),
) -> str:
    """
    Build the response cache key for a request.

    Args:
        path: Request path. Anything after ``?`` is ignored.
        user_id: Authenticated user id, or None for anonymous requests.
        query_params: Query parameters as a mapping or ``(name, value)`` pairs.
            Repeated names keep their values in arrival order.

    Returns:
        The cache key string.

    Examples:
        >>> build_cache_key("/api/posts", None, {"page": "1", "limit": "10"})
        '/api/posts:anonymous:limit:10:page:1'
    """
    normalized_path = path.split("?", 1)[0]
    identity = str(user_id) if user_id else ANONYMOUS
    return SEPARATOR.join((normalized_path, identity, _normalize_query(query_params)))


def request_cache_key(request: Request) -> str:
    """Build the cache key for an incoming FastAPI request."""
    user_id = getattr(request.state, "user_id", None)
    return build_cache_key(
        request.url.path,
        user_id,
        request.query_params.multi_items(),
    )


def split_cache_key(key: str) -> CacheKeyParts:
    """Split a key produced by ``build_cache_key`` back into its segments."""
    path, identity, query = (key.split(SEPARATOR, 2) + ["", ""])[:3]
    return CacheKeyParts(path, identity, query)
