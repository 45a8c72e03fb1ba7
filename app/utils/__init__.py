"""Utility helper functions."""

from app.utils.cache_keys import build_cache_key, request_cache_key, split_cache_key
from app.utils.helpers import generate_slug, get_summary, host, today_str, total_pages, utc_now

__all__ = [
    "build_cache_key",
    "request_cache_key",
    "split_cache_key",
    "generate_slug",
    "get_summary",
    "host",
    "today_str",
    "total_pages",
    "utc_now",
]
