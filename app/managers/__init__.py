from app.managers.metrics import get_system_metrics, metrics_manager
from app.managers.rate_limiter import close_limiter, limiter, rate_limit_exceeded_handler
from app.managers.response_cache import ResponseCache

__all__ = [
    "ResponseCache",
    "close_limiter",
    "get_system_metrics",
    "limiter",
    "metrics_manager",
    "rate_limit_exceeded_handler",
]
