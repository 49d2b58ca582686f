"""
Mastodon Client for the Syndicator.

This module syndicates JF2 posts to Mastodon accounts. Depending on what a
post relates to, syndication results in a new status, a native reblog or a
native favourite:

    repost-of (same server, with text)  -> new status quoting the status
    repost-of (same server, no text)    -> reblog
    repost-of (other server)            -> nothing, or a 🔁 status if enabled
    like-of (same server)               -> favourite
    like-of (other server)              -> ❤️ status if enabled (default)
    anything else                       -> new status

Mastodon Configuration:
    Configure via config.yml:
    - mastodon.accounts[].instance_url: URL of the Mastodon instance
    - mastodon.accounts[].access_token_file: Path to Docker secret for access token
    - mastodon.accounts[].max_post_length: Server character limit (default: 500)
    - mastodon.accounts[].include_permalink: Always append the post permalink
    - mastodon.accounts[].syndicate_external_likes: Post likes of other sites (default: true)
    - mastodon.accounts[].syndicate_external_reposts: Post reposts of other sites (default: false)

Usage:
    >>> from config import load_config
    >>> config = load_config()
    >>> for client in MastodonClient.from_config(config):
    ...     if client.enabled:
    ...         url = client.syndicate({"content": {"text": "Hello"}}, "https://me.example")

API Reference:
    Mastodon API: https://docs.joinmastodon.org/api/
    Mastodon.py: https://mastodonpy.readthedocs.io/
"""
import logging
import mimetypes
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Dict, Any, List
from mastodon import Mastodon, MastodonError

from compose import (
    ComposeOptions,
    PostKind,
    classify_post,
    create_like_status,
    create_repost_status,
    create_status,
    get_body_text,
    get_status_id_from_url,
    is_same_origin,
)
from compose.links import get_canonical_url
from compose.relations import get_related_url
from social.base_client import SocialMediaClient, SyndicationError, MediaFetchError

logger = logging.getLogger(__name__)


class MastodonClient(SocialMediaClient):
    """Client for syndicating posts to Mastodon instances.

    Attributes:
        include_permalink: Always append the post's permalink to statuses
        syndicate_external_likes: Post likes of non-Mastodon URLs as statuses
        syndicate_external_reposts: Post reposts of non-Mastodon URLs as statuses

    Example:
        >>> client = MastodonClient(
        ...     instance_url="https://mastodon.social",
        ...     access_token="your_access_token"
        ... )
        >>> if client.enabled:
        ...     client.syndicate({"like-of": "https://mastodon.social/@someone/1"})
    """

    # Mastodon character limit (500 for most instances)
    MAX_POST_LENGTH = 500

    # Mastodon rejects statuses with more than four attachments
    MAX_MEDIA_ATTACHMENTS = 4

    # Upload type when neither the response nor the URL reveal one
    DEFAULT_MIME_TYPE = "application/octet-stream"

    def __init__(
        self,
        include_permalink: bool = False,
        syndicate_external_likes: bool = True,
        syndicate_external_reposts: bool = False,
        **kwargs
    ):
        """Initialize MastodonClient.

        Args:
            include_permalink: Always append the post's permalink
            syndicate_external_likes: Post likes of external URLs as statuses
            syndicate_external_reposts: Post reposts of external URLs as statuses
            **kwargs: Arguments passed to SocialMediaClient parent class
        """
        self.include_permalink = include_permalink
        self.syndicate_external_likes = syndicate_external_likes
        self.syndicate_external_reposts = syndicate_external_reposts
        super().__init__(**kwargs)

    def _initialize_api(self) -> None:
        """Initialize the Mastodon API client.

        Raises:
            Exception: If the access token is rejected
        """
        self.api = Mastodon(
            access_token=self.access_token,
            api_base_url=self.instance_url
        )

        # Verify credentials immediately to catch authentication issues
        try:
            account = self.api.account_verify_credentials()
            logger.info(f"MastodonClient '{self.account_name}' authenticated as @{account['username']}")
        except MastodonError as e:
            error_msg = f"Authentication failed for '{self.account_name}': {e}"
            logger.error(error_msg)
            raise Exception(error_msg)

    @classmethod
    def _options_from_config(cls, account_config: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "include_permalink": bool(account_config.get("include_permalink", False)),
            "syndicate_external_likes": account_config.get("syndicate_external_likes") is not False,
            "syndicate_external_reposts": bool(account_config.get("syndicate_external_reposts", False)),
        }

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> List["MastodonClient"]:
        """Create MastodonClient instances from configuration dictionary.

        Args:
            config: Configuration dictionary from load_config()

        Returns:
            List of MastodonClient instances, one per configured account
        """
        return super(MastodonClient, cls).from_config(config, "mastodon")

    def compose_options(self, media_ids: Optional[List[str]] = None) -> ComposeOptions:
        """Return the status composition options for this account."""
        return ComposeOptions(
            character_limit=self.max_post_length,
            server_url=self.instance_url,
            include_permalink=self.include_permalink,
            media_ids=media_ids or []
        )

    def post_favourite(self, status_url: str) -> str:
        """Favourite a status.

        Args:
            status_url: URL of status to favourite

        Returns:
            Mastodon status URL
        """
        status_id = get_status_id_from_url(status_url)
        status = self.api.status_favourite(status_id)
        logger.info(f"Favourited Mastodon status {status['url']}")
        return status["url"]

    def post_reblog(self, status_url: str) -> str:
        """Reblog a status.

        Args:
            status_url: URL of status to reblog

        Returns:
            Mastodon status URL
        """
        status_id = get_status_id_from_url(status_url)
        status = self.api.status_reblog(status_id)
        logger.info(f"Reblogged Mastodon status {status['url']}")
        return status["url"]

    def post_status(self, parameters: Dict[str, Any]) -> str:
        """Post a status.

        Args:
            parameters: Status parameters from compose.create_status()

        Returns:
            Mastodon status URL
        """
        logger.debug(f"Posting status to Mastodon '{self.account_name}': {parameters.get('status')!r}")
        status = self.api.status_post(**parameters)
        logger.info(f"Successfully posted status to Mastodon: {status['url']}")
        return status["url"]

    def upload_media(self, media: Any, me: Optional[str] = None) -> Optional[str]:
        """Upload media and return Mastodon media ID.

        Args:
            media: JF2 media object ({"url": ..., "alt": ...}) or a bare URL
            me: Publication URL, used to resolve relative media URLs

        Returns:
            Mastodon media ID, or None if the media object has no URL

        Raises:
            SyndicationError: If the media file could not be fetched
            MastodonError: If Mastodon rejected the upload
        """
        if isinstance(media, str):
            media = {"url": media}

        url = media.get("url") if isinstance(media, dict) else None
        if not isinstance(url, str):
            logger.warning(f"Skipping media without URL: {media!r}")
            return None

        media_url = get_canonical_url(url, me)
        try:
            data, mime_type = self._fetch_media(media_url)
        except MediaFetchError as e:
            logger.error(f"Failed to fetch media for Mastodon '{self.account_name}': {e}")
            raise SyndicationError(str(e)) from e

        if not mime_type:
            mime_type = mimetypes.guess_type(media_url)[0] or self.DEFAULT_MIME_TYPE
            logger.debug(f"No Content-Type for {media_url}, uploading as {mime_type}")

        attachment = self.api.media_post(data, mime_type=mime_type, description=media.get("alt"))
        logger.debug(f"Uploaded media {media_url} with ID {attachment['id']}")
        return attachment["id"]

    def upload_photos(self, photos: List[Any], me: Optional[str] = None) -> List[str]:
        """Upload up to four photos concurrently.

        Returns:
            Media IDs in the order of the photos

        Raises:
            SyndicationError, MastodonError: If any upload fails
        """
        photos = photos[:self.MAX_MEDIA_ATTACHMENTS]
        if not photos:
            return []

        with ThreadPoolExecutor(max_workers=len(photos)) as executor:
            results = list(executor.map(lambda photo: self.upload_media(photo, me), photos))

        return [media_id for media_id in results if media_id]

    def syndicate(self, properties: Dict[str, Any], me: Optional[str] = None) -> Optional[str]:
        """Syndicate a JF2 post to Mastodon.

        Args:
            properties: JF2 properties
            me: Publication URL

        Returns:
            URL of the syndicated status, or None if the post was not syndicated

        Raises:
            SyndicationError: If a media file could not be fetched
            MastodonError: If a Mastodon API call fails
        """
        if not self.enabled or not self.api:
            logger.warning(f"Cannot syndicate to Mastodon '{self.account_name}': client not enabled")
            return None

        photos = properties.get("photo") or []
        if not isinstance(photos, list):
            photos = [photos]
        media_ids = self.upload_photos(photos, me)

        options = self.compose_options(media_ids)
        kind = classify_post(properties)

        if kind is PostKind.REPOST:
            return self._syndicate_repost(properties, get_related_url(properties, kind), options)
        if kind is PostKind.LIKE:
            return self._syndicate_like(properties, get_related_url(properties, kind), options)

        parameters = create_status(properties, options)
        if parameters.get("status"):
            return self.post_status(parameters)

        logger.info(f"Nothing to syndicate to Mastodon '{self.account_name}': post has no text")
        return None

    def _syndicate_repost(self, properties: Dict[str, Any], repost_of: str, options: ComposeOptions) -> Optional[str]:
        if is_same_origin(repost_of, self.instance_url):
            if get_body_text(properties, self.instance_url):
                return self.post_status(create_status(properties, options))
            return self.post_reblog(repost_of)

        if self.syndicate_external_reposts:
            parameters = create_repost_status(properties, repost_of, options)
            if parameters.get("status"):
                return self.post_status(parameters)

        logger.info(f"Not syndicating repost of {repost_of} to Mastodon '{self.account_name}'")
        return None

    def _syndicate_like(self, properties: Dict[str, Any], like_of: str, options: ComposeOptions) -> Optional[str]:
        if is_same_origin(like_of, self.instance_url):
            return self.post_favourite(like_of)

        if self.syndicate_external_likes:
            parameters = create_like_status(properties, like_of, options)
            if parameters.get("status"):
                return self.post_status(parameters)

        logger.info(f"Not syndicating like of {like_of} to Mastodon '{self.account_name}'")
        return None
