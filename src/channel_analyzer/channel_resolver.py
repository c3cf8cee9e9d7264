"""Resolution of channel references into channel IDs."""

from src.utils.logging import get_logger

from .errors import ResolutionError, YouTubeAPIError
from .schemas import ChannelReference, ReferenceKind
from .youtube_client import YouTubeDataClient

logger = get_logger(__name__)


class ChannelResolver:
    """Turns a ChannelReference into a channel ID.

    ID references resolve without any network call. Handles are resolved with
    a channel-type search and legacy usernames with the forUsername lookup; in
    both cases the first result wins. A lookup with no results leaves the
    channel unresolved (None) instead of failing.
    """

    def __init__(self, youtube_client: YouTubeDataClient):
        self.youtube_client = youtube_client

    async def resolve(self, reference: ChannelReference | None) -> str | None:
        """Resolve a reference to a channel ID.

        Args:
            reference: Output of the URL classifier.

        Returns:
            The channel ID, or None if the lookup found no channel.

        Raises:
            ResolutionError: If the reference is missing or the lookup fails.
        """
        if reference is None:
            raise ResolutionError("invalid reference")

        if reference.kind is ReferenceKind.ID:
            return reference.value

        logger.info("resolving_channel", kind=reference.kind.value, value=reference.value)

        try:
            if reference.kind is ReferenceKind.HANDLE:
                channel_id = await self._resolve_handle(reference.value)
            else:
                channel_id = await self._resolve_username(reference.value)
        except YouTubeAPIError as e:
            logger.warning(
                "channel_resolution_failed",
                kind=reference.kind.value,
                status_code=e.status_code,
            )
            raise ResolutionError(
                f"Could not resolve {reference.value}: {e.message}",
                status_code=e.status_code,
            ) from e

        if channel_id is None:
            logger.warning("channel_unresolved", kind=reference.kind.value, value=reference.value)
        else:
            logger.info("channel_resolved", kind=reference.kind.value, channel_id=channel_id)
        return channel_id

    async def _resolve_handle(self, handle: str) -> str | None:
        items = await self.youtube_client.get(
            "search",
            {
                "part": "snippet",
                "q": handle,
                "type": "channel",
                "maxResults": 1,
                "order": "relevance",
            },
        )
        if not items:
            return None
        try:
            return items[0]["snippet"]["channelId"]
        except (KeyError, TypeError) as e:
            raise YouTubeAPIError("search response item has no snippet.channelId") from e

    async def _resolve_username(self, username: str) -> str | None:
        items = await self.youtube_client.get(
            "channels",
            {"part": "id", "forUsername": username},
        )
        if not items:
            return None
        try:
            return items[0]["id"]
        except (KeyError, TypeError) as e:
            raise YouTubeAPIError("channels response item has no id") from e
