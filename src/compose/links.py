"""
URL helpers for status composition.

Extracts external links from HTML and compares hosts so that links back
to the destination Mastodon server (mentions, hashtags) can be told apart
from content links.
"""
import logging
import posixpath
import re
from html import unescape
from typing import List, Optional
from urllib.parse import urljoin, urlparse


logger = logging.getLogger(__name__)

# Attribute match rather than a full parse: double-quoted absolute hrefs only
HREF_PATTERN = re.compile(r'href="(https?://.+?)"')


def get_hostname(url: str) -> Optional[str]:
    """Return the lower-cased host of an absolute URL.

    Args:
        url: URL to parse

    Returns:
        Host name without port, or None if the URL has no host

    Raises:
        ValueError: If the URL cannot be parsed (e.g. invalid IPv6 literal)
    """
    return urlparse(url).hostname


def is_same_origin(url: Optional[str], other: Optional[str]) -> bool:
    """Check whether two URLs share the same host.

    Never raises: URLs that cannot be parsed or have no host are never
    considered the same origin.

    Example:
        >>> is_same_origin("https://mastodon.example/@me/1", "https://mastodon.example")
        True
        >>> is_same_origin("https://other.example/post/9", "https://mastodon.example")
        False
    """
    if not url or not other:
        return False

    try:
        host = get_hostname(url)
        other_host = get_hostname(other)
    except ValueError as e:
        logger.debug(f"Cannot compare origins of {url} and {other}: {e}")
        return False

    return bool(host) and host == other_host


def get_status_id_from_url(url: str) -> str:
    """Get the status ID from a Mastodon status URL.

    The ID is the final segment of the URL path.

    Args:
        url: Mastodon status URL (e.g., https://mastodon.example/@me/109876)

    Returns:
        Status ID (e.g., "109876")

    Raises:
        ValueError: If the URL is not absolute
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError(f"Not an absolute URL: {url!r}")

    return posixpath.basename(parsed.path.rstrip("/"))


def get_canonical_url(url: str, me: Optional[str]) -> str:
    """Resolve a possibly relative URL against the publication URL."""
    if not me:
        return url
    return urljoin(me, url)


def extract_external_links(html: str, server_url: Optional[str] = None) -> List[str]:
    """Extract external link targets from an HTML fragment.

    Links pointing at the destination server's host are dropped since they
    are mentions or hashtags rather than content. A link whose host cannot
    be parsed is kept.

    Args:
        html: HTML fragment
        server_url: Mastodon server URL (optional)

    Returns:
        Distinct absolute URLs in document order

    Example:
        >>> extract_external_links(
        ...     '<a href="https://example.com/x">x</a> <a href="https://mastodon.example/tags/a">#a</a>',
        ...     "https://mastodon.example",
        ... )
        ['https://example.com/x']
    """
    if not html:
        return []

    # Attribute values are matched raw, so entities such as &amp; are still escaped
    urls = [unescape(url) for url in HREF_PATTERN.findall(html)]

    if server_url:
        try:
            server_host = get_hostname(server_url)
        except ValueError:
            server_host = None

        if server_host:
            kept = []
            for url in urls:
                try:
                    if get_hostname(url) == server_host:
                        continue
                except ValueError:
                    logger.debug(f"Keeping unparseable link {url}")
                kept.append(url)
            urls = kept

    # dict preserves insertion order
    return list(dict.fromkeys(urls))
