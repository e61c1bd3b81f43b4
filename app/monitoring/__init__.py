"""
Logging setup for the posts API.

Usage
-----
>>> from app.monitoring import configure_logging, get_logger
>>> configure_logging()
>>> get_logger(__name__).info("ready")
"""

from app.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
    get_request_id,
    redact_pii,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "bind_request_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "redact_pii",
    "sanitize_headers",
    "sanitize_log_message",
]
