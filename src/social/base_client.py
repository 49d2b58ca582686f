"""
Base Social Media Client for the Syndicator.

This module provides a base class for syndication clients with common
authentication, configuration and media fetching functionality that can be
inherited by platform-specific implementations.
"""
import logging
from typing import Optional, Dict, Any, List, Tuple
from abc import ABC, abstractmethod
import requests


logger = logging.getLogger(__name__)


class SyndicationError(Exception):
    """Raised when a post could not be syndicated."""


class MediaFetchError(Exception):
    """Raised when a media file could not be fetched from the publication.

    Attributes:
        url: URL of the media file
        status_code: HTTP status code of the response
    """

    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.url = url
        self.status_code = status_code
        message = f"{status_code} {reason}".strip()
        super().__init__(f"Failed to fetch {url}: {message}")


class SocialMediaClient(ABC):
    """Abstract base class for syndication clients.

    This class provides common functionality for authentication and media
    retrieval. Platform-specific implementations should inherit from this
    class and implement the abstract methods.

    Attributes:
        instance_url: URL of the social media instance/server
        access_token: Access token for authenticated API calls
        enabled: Whether syndication is enabled for this client
        api: Platform-specific API client instance (None if not enabled)

    Example:
        >>> class MyClient(SocialMediaClient):
        ...     def _initialize_api(self):
        ...         # Platform-specific initialization
        ...         pass
        ...
        ...     def syndicate(self, properties, me=None):
        ...         # Platform-specific syndication
        ...         pass
    """

    MEDIA_DOWNLOAD_TIMEOUT = 30  # seconds

    # Default character limit, overridden per platform or account
    MAX_POST_LENGTH = 500

    def __init__(
        self,
        instance_url: str,
        access_token: Optional[str] = None,
        config_enabled: bool = True,
        account_name: Optional[str] = None,
        max_post_length: Optional[int] = None
    ):
        """Initialize social media client with credentials.

        Args:
            instance_url: URL of the social media instance (e.g., https://mastodon.social)
            access_token: Access token for API authentication
            config_enabled: Whether syndication is enabled in config.yml (default: True)
            account_name: Optional name for this account (for logging)
            max_post_length: Optional maximum post length for this account (uses platform default if None)

        Note:
            Syndication will be disabled if:
            - config_enabled is False
            - instance_url is not provided
            - access_token is missing
        """
        self.instance_url = instance_url
        self.access_token = access_token
        self.api: Optional[Any] = None
        self.account_name = account_name or "unnamed"

        if max_post_length is not None:
            self.max_post_length = max_post_length
        else:
            self.max_post_length = self.__class__.MAX_POST_LENGTH

        self.enabled = bool(
            config_enabled and
            instance_url and
            access_token is not None
        )

        if not config_enabled:
            logger.info(f"{self.__class__.__name__} '{self.account_name}' disabled via config.yml")
        elif not self.enabled:
            logger.warning(
                f"{self.__class__.__name__} '{self.account_name}' disabled: missing instance URL or access token"
            )
        else:
            try:
                self._initialize_api()
                logger.info(f"{self.__class__.__name__} '{self.account_name}' initialized for {self.instance_url}")
            except Exception as e:
                logger.error(f"Failed to initialize {self.__class__.__name__} '{self.account_name}': {e}")
                self.enabled = False
                self.api = None

    def _fetch_media(self, url: str) -> Tuple[bytes, Optional[str]]:
        """Fetch a media file from the publication.

        Args:
            url: Absolute URL of the media file

        Returns:
            Tuple of (file contents, MIME type from the Content-Type header or None)

        Raises:
            MediaFetchError: If the server responds with a non-success status
            requests.RequestException: If the request itself fails
        """
        response = requests.get(url, timeout=self.MEDIA_DOWNLOAD_TIMEOUT)
        if not response.ok:
            raise MediaFetchError(url, response.status_code, response.reason or "")

        content_type = response.headers.get("Content-Type")
        mime_type = content_type.split(";")[0].strip() if content_type else None
        logger.debug(f"Fetched {len(response.content)} bytes of {mime_type or 'unknown type'} from {url}")
        return response.content, mime_type

    @abstractmethod
    def _initialize_api(self) -> None:
        """Initialize the platform-specific API client.

        The implementation should set self.api to the initialized client.

        Raises:
            Exception: If API initialization fails
        """
        pass

    @classmethod
    def _options_from_config(cls, account_config: Dict[str, Any]) -> Dict[str, Any]:
        """Return platform-specific constructor arguments for an account."""
        return {}

    @classmethod
    def from_config(cls, config: Dict[str, Any], platform_key: str) -> List["SocialMediaClient"]:
        """Create clients from configuration dictionary.

        This factory method reads configuration from config.yml and loads
        credentials from Docker secrets. Supports multiple accounts per platform.

        Configuration Format:
            platform:
              accounts:
                - name: "personal"
                  instance_url: "https://instance.com"
                  access_token_file: "/run/secrets/token"
                  max_post_length: 500

        Args:
            config: Configuration dictionary from load_config()
            platform_key: Key in config dict for this platform (e.g., "mastodon")

        Returns:
            List of client instances configured from config.yml and secrets.
            Returns empty list if no accounts are configured.
        """
        from config import read_secret_file

        platform_config = config.get(platform_key) or {}
        accounts_config = platform_config.get("accounts") or []

        clients = []
        for account_config in accounts_config:
            account_name = account_config.get("name", "unnamed")
            instance_url = account_config.get("instance_url", "")
            access_token_file = account_config.get("access_token_file")
            access_token = read_secret_file(access_token_file) if access_token_file else None
            max_post_length = account_config.get("max_post_length")

            enabled = bool(instance_url and access_token)

            client = cls(
                instance_url=instance_url,
                access_token=access_token,
                config_enabled=enabled,
                account_name=account_name,
                max_post_length=max_post_length,
                **cls._options_from_config(account_config)
            )
            clients.append(client)

        return clients

    @abstractmethod
    def syndicate(
        self,
        properties: Dict[str, Any],
        me: Optional[str] = None
    ) -> Optional[str]:
        """Syndicate a JF2 post to the platform.

        Args:
            properties: JF2 properties of the post
            me: Publication URL, used to resolve relative media URLs

        Returns:
            URL of the syndicated item, or None if nothing was syndicated
        """
        pass
