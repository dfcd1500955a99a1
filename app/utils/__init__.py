"""Utility helper functions."""

from app.utils.helpers import as_utc, host, today_str, utc_now
from app.utils.slug import create_slug, placeholder_slug

__all__ = [
    "as_utc",
    "create_slug",
    "host",
    "placeholder_slug",
    "today_str",
    "utc_now",
]
