"""
Pytest configuration and shared fixtures for all tests.

This module provides shared fixtures for the test suite:
- Destination Mastodon server URL
- Composition options matching a default Mastodon account
"""

import pytest

from compose import ComposeOptions


SERVER_URL = "https://mastodon.example"


@pytest.fixture
def server_url():
    """Base URL of the destination Mastodon server."""
    return SERVER_URL


@pytest.fixture
def compose_options():
    """Composition options for a default 500 character Mastodon account."""
    return ComposeOptions(character_limit=500, server_url=SERVER_URL)
