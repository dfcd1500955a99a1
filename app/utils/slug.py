"""
URL slug generation.

Slugs are lowercase runs of ``[a-z0-9]`` joined by single hyphens. Text
that contains no usable characters falls back to a timestamped
placeholder so a post always ends up with a non-empty slug.
"""

from re import compile as re_compile
from time import time_ns

_NON_ALNUM = re_compile(r"[^a-z0-9]+")
_REPEATED_HYPHENS = re_compile(r"-{2,}")

PLACEHOLDER_PREFIX = "blog"


def placeholder_slug(timestamp_ms: int | None = None) -> str:
    """
    Build the fallback slug ``blog-<milliseconds since epoch>``.

    Args:
        timestamp_ms: Timestamp to embed (defaults to now)

    Returns:
        str: Placeholder slug
    """
    if timestamp_ms is None:
        timestamp_ms = time_ns() // 1_000_000
    return f"{PLACEHOLDER_PREFIX}-{timestamp_ms}"


def create_slug(value: object = "", *, timestamp_ms: int | None = None) -> str:
    """
    Turn arbitrary text into a URL-safe slug.

    Args:
        value: Source text, usually a title or an explicit slug
        timestamp_ms: Timestamp used by the placeholder fallback

    Returns:
        str: Normalized slug, never empty

    Examples:
    --------
    >>> create_slug("Hello, World!")
    'hello-world'
    >>> create_slug("***", timestamp_ms=1700000000000)
    'blog-1700000000000'
    """
    text = "" if value is None else str(value)
    normalized = _NON_ALNUM.sub("-", text.strip().lower())
    normalized = _REPEATED_HYPHENS.sub("-", normalized.strip("-"))
    return normalized or placeholder_slug(timestamp_ms)
