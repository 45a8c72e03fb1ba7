from collections.abc import Awaitable, Callable
from functools import wraps
from time import perf_counter
from typing import ParamSpec, TypeVar

from app.errors.base import BaseAppError
from app.managers.metrics import MetricsManager, metrics_manager

P = ParamSpec("P")
R = TypeVar("R")


def _is_server_fault(exc: BaseException) -> bool:
    # Domain errors such as a missing post or a forbidden edit are expected
    # outcomes of a request and do not count against the endpoint.
    return not (isinstance(exc, BaseAppError) and exc.status_code < 500)


def timed(
    endpoint: str | None = None,
    metrics: MetricsManager | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Record request count, latency and server faults for a route handler.

    Args:
        endpoint: Label used in the metrics snapshot (defaults to the function name).
        metrics: Metrics manager to record into (defaults to the global instance).

    Returns:
        Decorated handler.

    Example:
        @timed("/posts/detail")
        async def get_post(...) -> PostResponse:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        label = endpoint or func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            recorder = metrics or metrics_manager
            recorder.record_request(label)
            started = perf_counter()
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                if _is_server_fault(exc):
                    recorder.record_error(label)
                raise
            finally:
                recorder.record_response_time(label, perf_counter() - started)

        return wrapper

    return decorator
