"""
Post relation classification.

A JF2 post is syndicated differently depending on what it relates to:
a repost, a like, or neither (a note, possibly a reply). The kind is
resolved once from the post's properties.
"""
from enum import Enum
from typing import Any, Dict, Optional

from compose.text import html_to_status_text


class PostKind(Enum):
    """Relation kind of a JF2 post."""

    REPOST = "repost-of"
    LIKE = "like-of"
    NOTE = "note"


def classify_post(properties: Dict[str, Any]) -> PostKind:
    """Return the relation kind of a post; reposts win over likes.

    Example:
        >>> classify_post({"like-of": "https://other.example/post/9"})
        <PostKind.LIKE: 'like-of'>
        >>> classify_post({"content": {"text": "Hi"}})
        <PostKind.NOTE: 'note'>
    """
    if properties.get("repost-of"):
        return PostKind.REPOST
    if properties.get("like-of"):
        return PostKind.LIKE
    return PostKind.NOTE


def get_related_url(properties: Dict[str, Any], kind: PostKind) -> Optional[str]:
    """Return the URL a repost or like points at, None for notes."""
    if kind is PostKind.NOTE:
        return None
    return properties.get(kind.value)


def get_body_text(properties: Dict[str, Any], server_url: Optional[str] = None) -> str:
    """Return the post's body as status text.

    HTML content wins over plain text content. Returns an empty string
    when the post has no content.
    """
    content = properties.get("content")
    if isinstance(content, str):
        return content
    if not isinstance(content, dict):
        return ""

    if content.get("html"):
        return html_to_status_text(content["html"], server_url)
    return content.get("text") or ""
