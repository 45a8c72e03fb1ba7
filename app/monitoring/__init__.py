"""
Structured logging helpers for Inkwell Blog Backend.

Usage
-----
>>> from app.monitoring import get_logger, bind_request_id
>>> logger = get_logger(__name__)
>>> bind_request_id("abc-123")
>>> logger.info("Post created", post_id="...")
"""

from app.monitoring.logging import (
    RequestIdFilter,
    bind_request_id,
    clear_context,
    configure_structlog,
    get_logger,
    get_request_id,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "RequestIdFilter",
    "bind_request_id",
    "clear_context",
    "configure_structlog",
    "get_logger",
    "get_request_id",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
]
