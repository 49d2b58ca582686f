"""
Syndication Receiver Package.

Flask application accepting JF2 post records over HTTP and syndicating
them to the configured Mastodon accounts.

Usage:
    >>> from receiver import create_app
    >>> app = create_app(config, mastodon_clients=clients)
"""

from .receiver import create_app, validate_syndication_request, SyndicationRequestValidationError

__all__ = ["create_app", "validate_syndication_request", "SyndicationRequestValidationError"]
