"""Syndicator Package.

This package provides the entry point of the syndicator, which publishes
posts from a personal site (JF2 post records) to Mastodon.

Exported Functions:
    main: Entry point for the syndicator console command
"""
from .syndicator import main

__all__ = ["main"]
