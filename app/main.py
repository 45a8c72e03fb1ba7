# app/main.py

"""Inkwell Blog Backend - blog API with response caching and threaded comments."""

from logging import getLogger
from time import perf_counter

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import file_logger, settings
from app.errors import (
    BlogError,
    CacheExceptionError,
    DatabaseError,
    PasswordHashingError,
    UserAuthenticationError,
    auth_exception_handler,
    blog_exception_handler,
    cache_exception_handler,
    create_internal_error_handler,
    database_exception_handler,
    password_hashing_exception_handler,
    validation_exception_handler,
)
from app.managers import (
    get_system_metrics,
    limiter,
    metrics_manager,
    rate_limit_exceeded_handler,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import (
    auth_router,
    cache_router,
    categories_router,
    comments_router,
    posts_router,
    tags_router,
    users_router,
)
from app.schemas import CacheHealthResponse, HealthCheckResponse
from app.utils.helpers import today_str, utc_now

logger = file_logger(getLogger(__name__))

app = FastAPI(
    title=settings.APP_NAME,
    description="Inkwell blog API: posts, threaded comments, likes, bookmarks and follows",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


routes = [
    auth_router,
    posts_router,
    comments_router,
    users_router,
    categories_router,
    tags_router,
    cache_router,
]

_ = [app.include_router(router, prefix=settings.API_PREFIX) for router in routes]

errors = [
    (BlogError, blog_exception_handler),
    (UserAuthenticationError, auth_exception_handler),
    (DatabaseError, database_exception_handler),
    (CacheExceptionError, cache_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, create_internal_error_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "OK",
                        "timestamp": "2025-01-01T00:00:00+00:00",
                        "uptime": 12.5,
                        "version": "1.0.0",
                        "cache": {"backend": "in-memory", "enabled": True, "status": "healthy"},
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Status, uptime and response cache health.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"status": "OK", "timestamp": "...", "uptime": 12.5, "version": "1.0.0", "cache": { ... }}
    """
    started_at = getattr(request.app.state, "started_at", None)
    cache = getattr(request.app.state, "response_cache", None)

    response = HealthCheckResponse(
        status="OK",
        timestamp=utc_now().isoformat(),
        uptime=round(perf_counter() - started_at, 3) if started_at is not None else 0.0,
        version=app.version,
        cache=CacheHealthResponse(**cache.health_check()) if cache else None,
    )
    return ORJSONResponse(response.model_dump())


@app.get(
    "/metrics",
    tags=["📈 Metrics"],
    response_class=ORJSONResponse,
    summary="Get metrics",
    description="Get API performance metrics.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "timestamp": "2025-01-01",
                        "api_metrics": {"request_counts": {"/posts": 100}},
                        "cache_metrics": {"hits": 80, "misses": 20},
                        "system_metrics": {"cpu_percent": 4.2},
                    },
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Too Many Requests"}}},
        },
    },
    operation_id="get_metrics",
)
@limiter.limit("5/minute")
async def get_metrics(request: Request, response: Response) -> ORJSONResponse:
    """
    Get API performance metrics.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Current response context.

    Returns
    -------
    ORJSONResponse
        Request counters, response cache statistics and host usage.

    Notes
    -----
    Rate limited to 5 requests per minute.
    """
    cache = getattr(request.app.state, "response_cache", None)

    return ORJSONResponse(
        content={
            "timestamp": today_str(),
            "api_metrics": metrics_manager.get_metrics(),
            "cache_metrics": cache.get_statistics() if cache else {},
            "system_metrics": await get_system_metrics(),
        },
    )


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    response_class=JSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Welcome to Inkwell Blog Backend"},
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"detail": "Too Many Requests"}}},
        },
    },
    operation_id="root_access",
)
@limiter.limit("5/minute")
async def root(request: Request, response: Response) -> JSONResponse:
    """
    Root endpoint.

    Returns
    -------
    JSONResponse
        Welcome message payload.
    """
    return JSONResponse(content={"message": f"Welcome to {settings.APP_NAME}"})
