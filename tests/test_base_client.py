"""
Tests for Base Social Media Client Module.

This test suite validates the common functionality in the base client,
particularly enabling logic and media fetching.

Test Coverage:
    - Enabled/disabled state from configuration and credentials
    - Platform default and per-account post length
    - Media fetch with MIME type detection
    - Media fetch errors
"""
import unittest
from unittest.mock import patch, MagicMock

import requests

from social.base_client import SocialMediaClient, MediaFetchError


class ConcreteClient(SocialMediaClient):
    """Concrete implementation of SocialMediaClient for testing."""

    def _initialize_api(self):
        """Mock API initialization."""
        self.api = MagicMock()

    def syndicate(self, properties, me=None):
        """Mock syndicate method."""
        return "https://example.com/status/1"


class FailingClient(ConcreteClient):
    """Client whose API initialization fails."""

    def _initialize_api(self):
        raise RuntimeError("boom")


class TestBaseClient(unittest.TestCase):
    """Test suite for SocialMediaClient base class."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = ConcreteClient(
            instance_url="https://example.com",
            access_token="test_token"
        )

    def test_enabled_with_credentials(self):
        """Test that a client with URL and token is enabled."""
        self.assertTrue(self.client.enabled)
        self.assertIsNotNone(self.client.api)
        self.assertEqual(self.client.account_name, "unnamed")

    def test_disabled_without_token(self):
        """Test that a client without token is disabled."""
        client = ConcreteClient(instance_url="https://example.com")
        self.assertFalse(client.enabled)
        self.assertIsNone(client.api)

    def test_disabled_via_config(self):
        """Test that config_enabled=False disables the client."""
        client = ConcreteClient(instance_url="https://example.com", access_token="t", config_enabled=False)
        self.assertFalse(client.enabled)

    def test_failed_initialization_disables_client(self):
        """Test that API initialization errors disable the client."""
        client = FailingClient(instance_url="https://example.com", access_token="t")
        self.assertFalse(client.enabled)
        self.assertIsNone(client.api)

    def test_max_post_length(self):
        """Test platform default and per-account override of the post length."""
        self.assertEqual(self.client.max_post_length, 500)
        client = ConcreteClient(instance_url="https://example.com", access_token="t", max_post_length=1000)
        self.assertEqual(client.max_post_length, 1000)

    @patch("social.base_client.requests.get")
    def test_fetch_media(self, mock_get):
        """Test fetching a media file returns its bytes and MIME type."""
        response = MagicMock()
        response.ok = True
        response.content = b"fake_image_data"
        response.headers = {"Content-Type": "image/jpeg"}
        mock_get.return_value = response

        data, mime_type = self.client._fetch_media("https://example.com/image.jpg")

        mock_get.assert_called_once_with("https://example.com/image.jpg", timeout=30)
        self.assertEqual(data, b"fake_image_data")
        self.assertEqual(mime_type, "image/jpeg")

    @patch("social.base_client.requests.get")
    def test_fetch_media_without_content_type(self, mock_get):
        """Test that a missing Content-Type yields no MIME type."""
        response = MagicMock()
        response.ok = True
        response.content = b"data"
        response.headers = {}
        mock_get.return_value = response

        _, mime_type = self.client._fetch_media("https://example.com/image")

        self.assertIsNone(mime_type)

    @patch("social.base_client.requests.get")
    def test_fetch_media_error_status(self, mock_get):
        """Test that a non-success response raises MediaFetchError."""
        response = MagicMock()
        response.ok = False
        response.status_code = 404
        response.reason = "Not Found"
        mock_get.return_value = response

        with self.assertRaises(MediaFetchError) as context:
            self.client._fetch_media("https://example.com/missing.jpg")

        self.assertEqual(context.exception.status_code, 404)
        self.assertEqual(context.exception.url, "https://example.com/missing.jpg")
        self.assertIn("404 Not Found", str(context.exception))

    @patch("social.base_client.requests.get")
    def test_fetch_media_connection_error_propagates(self, mock_get):
        """Test that transport errors are not wrapped."""
        mock_get.side_effect = requests.ConnectionError("unreachable")

        with self.assertRaises(requests.ConnectionError):
            self.client._fetch_media("https://example.com/image.jpg")


if __name__ == "__main__":
    unittest.main()
