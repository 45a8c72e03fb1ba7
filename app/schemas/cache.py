from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheStatistics(BaseModel):
    """Response cache statistics model."""

    model_config = ConfigDict(ser_json_timedelta="iso8601", ser_json_bytes="utf8")

    hits: int
    misses: int
    sets: int
    invalidations: int
    evictions: int
    errors: int
    total_bytes_written: int
    total_bytes_read: int
    hit_rate: str
    total_requests: int
    created_at: str
    last_updated_at: str
    size: int
    max_entries: int


class CacheHealthResponse(BaseModel):
    """Cache health response model (nested in HealthCheckResponse)."""

    model_config = ConfigDict(ser_json_timedelta="iso8601", ser_json_bytes="utf8")

    backend: str
    enabled: bool
    status: str
    statistics: CacheStatistics
    info: dict[str, Any] | None = None
    error: str | None = None


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    model_config = ConfigDict(ser_json_timedelta="iso8601", ser_json_bytes="utf8")

    status: str = Field(description="Overall health status", examples=["OK"])
    timestamp: str = Field(description="Current timestamp")
    uptime: float = Field(description="Seconds since the process started")
    version: str = Field(description="API version")
    cache: CacheHealthResponse | None = Field(
        default=None,
        description="Cache health information",
    )


class CacheStatsResponse(BaseModel):
    """Cache statistics response model."""

    status: str
    data: CacheStatistics


class CacheClearResponse(BaseModel):
    """Cache clear response model."""

    status: str
    message: str
    removed: int = 0
