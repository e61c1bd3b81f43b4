"""Utility helper functions."""

from app.utils.helpers import get_summary, host, last_page, today_str
from app.utils.html import html_to_text, remove_html_and_shorten, sanitize_html

__all__ = [
    "get_summary",
    "host",
    "html_to_text",
    "last_page",
    "remove_html_and_shorten",
    "sanitize_html",
    "today_str",
]
