# app/routes/cache.py
"""Response cache inspection and maintenance endpoints."""

from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from app.configs import file_logger
from app.decorators import timed
from app.dependencies import CacheDep
from app.managers import limiter
from app.schemas import CacheClearResponse, CacheStatsResponse
from app.schemas.common import MessageResponse
from app.utils.helpers import host

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/cache", tags=["🗄️ Cache"])


# --- Routes ---
@router.get(
    "/stats",
    response_model=CacheStatsResponse,
    summary="Get cache statistics",
    response_class=ORJSONResponse,
)
@timed("/cache/stats")
@limiter.limit("10/minute")
async def get_cache_stats(request: Request, cache: CacheDep) -> ORJSONResponse:
    """
    Get cache statistics.

    Returns:
        Cache statistics.
    """
    response = CacheStatsResponse(status="success", data=cache.get_statistics())
    return ORJSONResponse(content=response.model_dump())


@router.post(
    "/reset-stats",
    response_model=MessageResponse,
    summary="Reset cache statistics",
    response_class=ORJSONResponse,
)
@timed("/cache/reset-stats")
@limiter.limit("5/hour")
async def reset_stats(request: Request, cache: CacheDep) -> ORJSONResponse:
    cache.reset_statistics()
    return ORJSONResponse(content=MessageResponse(message="Cache statistics reset").model_dump())


@router.delete(
    "/clear",
    response_model=CacheClearResponse,
    summary="Clear all cache entries",
    response_class=ORJSONResponse,
)
@timed("/cache/clear")
@limiter.limit("2/hour")
async def clear_cache(request: Request, cache: CacheDep) -> ORJSONResponse:
    """
    Clear all cache entries.

    Returns:
        Clear operation result with the number of entries removed.
    """
    removed = cache.invalidate_all()
    logger.info(f"Cache cleared by {host(request)}")
    response = CacheClearResponse(
        status="success",
        message="Cache cleared successfully",
        removed=removed,
    )
    return ORJSONResponse(content=response.model_dump())
