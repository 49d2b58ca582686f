"""
Social Media Integration Module for the Syndicator.

This module provides base classes and common functionality for syndication
clients, and the Mastodon client built on them.
"""

from .base_client import SocialMediaClient, SyndicationError, MediaFetchError
from .mastodon_client import MastodonClient

__all__ = ['SocialMediaClient', 'SyndicationError', 'MediaFetchError', 'MastodonClient']
