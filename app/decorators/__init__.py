from app.decorators.caching import cached_response, get_cache
from app.decorators.metrics import timed
from app.decorators.with_retry import with_retry

__all__ = [
    "cached_response",
    "get_cache",
    "timed",
    "with_retry",
]
