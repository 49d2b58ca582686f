"""
Status Composition Module for the Syndicator.

This module turns a JF2 post record into the parameters of a Mastodon
status: it reduces HTML to plain text, keeps external links visible,
and truncates the result to the server's character limit while keeping
the permalink (or the liked/reposted URL) intact.

Usage:
    >>> from compose import create_status, ComposeOptions
    >>> options = ComposeOptions(server_url="https://mastodon.example")
    >>> create_status({"content": {"text": "Hello"}}, options)
    {'status': 'Hello'}
"""

from .links import extract_external_links, get_status_id_from_url, is_same_origin
from .relations import PostKind, classify_post, get_body_text
from .status import ComposeOptions, create_status, create_like_status, create_repost_status
from .text import html_to_status_text
from .truncate import truncate_status, ELLIPSIS

__all__ = [
    "ComposeOptions",
    "ELLIPSIS",
    "PostKind",
    "classify_post",
    "create_like_status",
    "create_repost_status",
    "create_status",
    "extract_external_links",
    "get_body_text",
    "get_status_id_from_url",
    "html_to_status_text",
    "is_same_origin",
    "truncate_status",
]
