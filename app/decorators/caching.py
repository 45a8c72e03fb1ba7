# app/decorators/caching.py
"""FastAPI decorator for caching GET responses in the response cache."""

from collections.abc import Awaitable, Callable
from functools import wraps
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal

from fastapi import Request, Response
from starlette.status import HTTP_200_OK

from app.configs import file_logger
from app.errors import CacheExceptionError
from app.utils.cache_keys import request_cache_key
from app.utils.cache_serializer import serialize

if TYPE_CHECKING:
    from app.managers.response_cache import ResponseCache

logger = file_logger(getLogger(__name__))

CACHE_HEADER = "X-Cache"
JSON_MEDIA_TYPE = "application/json"

TtlName = Literal["ttl_default", "ttl_posts_list", "ttl_posts_single"]


def _find_request(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Request | None:
    request = kwargs.get("request")
    if isinstance(request, Request):
        return request
    return next((arg for arg in args if isinstance(arg, Request)), None)


def get_cache(request: Request) -> "ResponseCache | None":
    """Return the response cache attached to the app, if any."""
    return getattr(request.app.state, "response_cache", None)


def cached_response(
    ttl: int | None = None,
    ttl_name: TtlName = "ttl_default",
) -> Callable:
    """
    Cache a GET endpoint's JSON body in the app's response cache.

    The key is the request fingerprint from ``request_cache_key``, so the
    decorated endpoint must take ``request: Request``. Any auth dependency
    must run first and set ``request.state.user_id`` to make the entry
    per-user.

    A hit replays the stored JSON text unchanged. A miss runs the endpoint,
    renders its result to JSON, stores that text and returns it. Exceptions
    propagate and are never cached, and neither is a non-200 ``Response``.
    Non-GET requests, a missing cache and a disabled cache all pass straight
    through to the endpoint.

    Args:
        ttl: Seconds to keep the entry. Overrides ``ttl_name``.
        ttl_name: ``CacheConfig`` field holding the TTL to use.

    Returns:
        Decorated function.

    Example:
        @router.get("/posts/{slug}")
        @cached_response(ttl_name="ttl_posts_single")
        async def get_post(request: Request, slug: str) -> PostEnvelope:
            ...
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
            request = _find_request(args, kwargs)
            cache = get_cache(request) if request else None

            if request is None or cache is None or not cache.enabled or request.method != "GET":
                return await func(*args, **kwargs)

            cache_key = request_cache_key(request)
            if (payload := cache.get_payload(cache_key)) is not None:
                return Response(
                    content=payload,
                    media_type=JSON_MEDIA_TYPE,
                    headers={CACHE_HEADER: "HIT"},
                )

            result = await func(*args, **kwargs)

            if isinstance(result, Response):
                if result.status_code == HTTP_200_OK and result.media_type == JSON_MEDIA_TYPE:
                    cache.set_payload(cache_key, bytes(result.body).decode("utf-8"), _ttl(cache))
                result.headers[CACHE_HEADER] = "MISS"
                return result

            try:
                payload = serialize(result)
            except CacheExceptionError:
                logger.warning(f"Response for {cache_key} is not cacheable")
                return result

            cache.set_payload(cache_key, payload, _ttl(cache))
            return Response(
                content=payload,
                media_type=JSON_MEDIA_TYPE,
                headers={CACHE_HEADER: "MISS"},
            )

        def _ttl(cache: "ResponseCache") -> int:
            return ttl if ttl is not None else getattr(cache.config, ttl_name)

        return wrapper

    return decorator
