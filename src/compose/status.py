"""
Mastodon status composition.

Builds the keyword arguments for Mastodon.py's ``status_post`` from a JF2
post record. Three variants exist:

    create_status: plain post (note, reply, title with link, or a post
        quoting a status on the same server)
    create_like_status: a like of an external URL, annotated with ❤️
    create_repost_status: a repost of an external URL, annotated with 🔁

Every variant truncates its text to the character limit while keeping the
relevant URL at the end of the status.

Usage:
    >>> options = ComposeOptions(character_limit=500, server_url="https://mastodon.example")
    >>> create_like_status({}, "https://other.example/post/9", options)
    {'status': '❤️ https://other.example/post/9'}
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from compose.links import get_hostname, get_status_id_from_url
from compose.relations import get_body_text
from compose.truncate import DEFAULT_CHARACTER_LIMIT, truncate_status


logger = logging.getLogger(__name__)

LIKE_MARKER = "❤️ "
REPOST_MARKER = "🔁 "


@dataclass
class ComposeOptions:
    """Per-account options for status composition.

    Attributes:
        character_limit: Maximum status length (falls back to 500 when unset)
        server_url: Mastodon server URL, used for same-host comparisons
        include_permalink: Always append the post's permalink to plain statuses;
            when False the permalink is only added if the text must be truncated
        media_ids: Uploaded Mastodon media IDs to attach (at most four)
    """

    character_limit: Optional[int] = DEFAULT_CHARACTER_LIMIT
    server_url: Optional[str] = None
    include_permalink: bool = False
    media_ids: List[str] = field(default_factory=list)

    @property
    def limit(self) -> int:
        return self.character_limit or DEFAULT_CHARACTER_LIMIT


def get_in_reply_to_id(in_reply_to: str, server_url: Optional[str]) -> Optional[str]:
    """Return the status ID of a reply target on the destination server.

    Returns None when the target lives elsewhere or either URL cannot be
    parsed; replies to other servers are syndicated as plain statuses.
    """
    try:
        if not server_url or get_hostname(in_reply_to) != get_hostname(server_url):
            return None
        return get_status_id_from_url(in_reply_to) or None
    except (AttributeError, TypeError, ValueError) as e:
        logger.debug(f"Skipping reply linkage for {in_reply_to!r}: {e}")
        return None


def _add_common_parameters(parameters: Dict[str, Any], properties: Dict[str, Any], options: ComposeOptions) -> None:
    if options.media_ids:
        parameters["media_ids"] = list(options.media_ids)

    if properties.get("visibility"):
        parameters["visibility"] = properties["visibility"]


def create_status(properties: Dict[str, Any], options: Optional[ComposeOptions] = None) -> Dict[str, Any]:
    """Get status parameters from JF2 properties.

    Text selection (first match wins):
        1. Body text and repost-of: text followed by the reposted URL
        2. No body text but a name: name followed by the post URL
        3. Body text: the text, with the permalink per include_permalink

    Args:
        properties: JF2 properties
        options: Composition options

    Returns:
        Status parameters (status, media_ids, in_reply_to_id, visibility);
        "status" is absent when the post has no text to syndicate
    """
    options = options or ComposeOptions()
    parameters: Dict[str, Any] = {}

    text = get_body_text(properties, options.server_url)
    repost_of = properties.get("repost-of")
    name = properties.get("name")
    permalink = properties.get("url")

    status = None
    if text and repost_of:
        status = truncate_status(f"{text} {repost_of}", repost_of, options.limit, separator=" ")
    elif name and not text:
        status = f"{name} {permalink}" if permalink else name
        status = truncate_status(status, permalink, options.limit, separator=" ")
    elif text:
        status = truncate_status(text, permalink, options.limit, append=options.include_permalink)

    if status:
        logger.debug(f"Composed status ({len(status)}/{options.limit} characters)")
        parameters["status"] = status

    _add_common_parameters(parameters, properties, options)

    in_reply_to = properties.get("in-reply-to")
    if in_reply_to:
        in_reply_to_id = get_in_reply_to_id(in_reply_to, options.server_url)
        if in_reply_to_id:
            parameters["in_reply_to_id"] = in_reply_to_id

    return parameters


def _create_annotated_status(
    properties: Dict[str, Any],
    related_url: str,
    marker: str,
    options: Optional[ComposeOptions]
) -> Dict[str, Any]:
    options = options or ComposeOptions()
    parameters: Dict[str, Any] = {}

    text = get_body_text(properties, options.server_url)
    if text:
        status = truncate_status(text, related_url, options.limit, marker=marker)
    else:
        status = truncate_status(f"{marker}{related_url}", related_url, options.limit)

    parameters["status"] = status
    _add_common_parameters(parameters, properties, options)
    return parameters


def create_like_status(
    properties: Dict[str, Any],
    liked_url: str,
    options: Optional[ComposeOptions] = None
) -> Dict[str, Any]:
    """Create status parameters for a like of an external URL.

    The post's content (if any) is followed by a blank line and the liked
    URL prefixed with ❤️.
    """
    return _create_annotated_status(properties, liked_url, LIKE_MARKER, options)


def create_repost_status(
    properties: Dict[str, Any],
    reposted_url: str,
    options: Optional[ComposeOptions] = None
) -> Dict[str, Any]:
    """Create status parameters for a repost of an external URL.

    The post's content (if any) is followed by a blank line and the reposted
    URL prefixed with 🔁.
    """
    return _create_annotated_status(properties, reposted_url, REPOST_MARKER, options)
