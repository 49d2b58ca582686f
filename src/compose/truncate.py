"""
Status truncation.

Fits a composed status into the server's character limit while keeping a
URL (permalink, liked or reposted URL) visible at the end of the status.
"""
import logging
from typing import Optional


logger = logging.getLogger(__name__)

ELLIPSIS = "…"
DEFAULT_CHARACTER_LIMIT = 500


def truncate_status(
    status: str,
    url: Optional[str] = None,
    limit: int = DEFAULT_CHARACTER_LIMIT,
    separator: str = "\n\n",
    marker: str = "",
    append: bool = True
) -> str:
    """Truncate a status to a character limit, preserving a trailing URL.

    The URL is kept verbatim as the suffix ``separator + marker + url``.
    When the status is too long, the body is cut so that the body, a single
    ellipsis character and the suffix together fit the limit.

    Args:
        status: Composed status text
        url: URL that must stay visible (optional)
        limit: Maximum status length in characters
        separator: Text between body and URL (blank line or a space)
        marker: Decorative prefix for the URL (e.g. "❤️ ")
        append: Whether to append the URL to a status that fits but does
            not contain it yet

    Returns:
        Status no longer than ``limit``

    Example:
        >>> truncate_status("Hello", "https://me.example/p/1", 50)
        'Hello\\n\\nhttps://me.example/p/1'
        >>> truncate_status("a" * 20, "https://me.example/p/1", 30)
        'aaaaa…\\n\\nhttps://me.example/p/1'
    """
    if limit <= 0:
        return ""

    suffix = f"{separator}{marker}{url}" if url else ""

    if url and url in status:
        if len(status) <= limit:
            return status
    elif len(status) <= limit:
        if not suffix or not append:
            return status
        if len(status) + len(suffix) <= limit:
            return status + suffix

    if not suffix or len(suffix) + len(ELLIPSIS) > limit:
        # URL alone does not fit; fall back to cutting the text
        if len(status) <= limit:
            return status
        if suffix:
            logger.warning(f"Cannot keep {url} within {limit} characters, truncating text only")
        return status[:limit - len(ELLIPSIS)].rstrip() + ELLIPSIS

    body = status
    tail = f"{marker}{url}"
    if body.endswith(tail):
        body = body[:-len(tail)]

    available = limit - len(suffix) - len(ELLIPSIS)
    body = body[:available].rstrip()

    return f"{body}{ELLIPSIS}{suffix}"
