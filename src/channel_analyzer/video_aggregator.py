"""Aggregation of a channel's latest videos with their metadata."""

from typing import Any

from pydantic import ValidationError

from src.utils.logging import get_logger

from .errors import AggregationError, YouTubeAPIError
from .schemas import VideoRecord
from .youtube_client import YouTubeDataClient

logger = get_logger(__name__)

PAGE_SIZE = 5
DETAIL_PARTS = "snippet,contentDetails,statistics"


class VideoAggregator:
    """Fetches the latest videos of a channel in two calls.

    The first call searches the channel's videos by publish date. The second
    fetches snippet, content details and statistics for all returned IDs in a
    single batched request.
    """

    def __init__(self, youtube_client: YouTubeDataClient):
        self.youtube_client = youtube_client

    async def aggregate(self, channel_id: str) -> list[VideoRecord]:
        """Fetch the most recent videos of a channel.

        Args:
            channel_id: Resolved YouTube channel ID.

        Returns:
            Up to PAGE_SIZE VideoRecords, most recent first. Empty when the
            channel has no videos.

        Raises:
            AggregationError: If either stage fails; ``stage`` is "search" or
                "details".
        """
        logger.info("video_search_started", channel_id=channel_id, page_size=PAGE_SIZE)

        video_ids = await self._search_video_ids(channel_id)
        logger.info("video_search_completed", channel_id=channel_id, count=len(video_ids))

        if not video_ids:
            return []

        details = await self._fetch_details(video_ids)
        records = self._merge(video_ids, details)

        logger.info("videos_aggregated", channel_id=channel_id, count=len(records))
        return records

    async def _search_video_ids(self, channel_id: str) -> list[str]:
        try:
            items = await self.youtube_client.get(
                "search",
                {
                    "part": "snippet",
                    "channelId": channel_id,
                    "maxResults": PAGE_SIZE,
                    "order": "date",
                    "type": "video",
                },
            )
            return [item["id"]["videoId"] for item in items]
        except YouTubeAPIError as e:
            raise self._stage_error("search", e.message, e.status_code) from e
        except (KeyError, TypeError) as e:
            raise self._stage_error("search", "search item has no id.videoId", None) from e

    async def _fetch_details(self, video_ids: list[str]) -> list[dict[str, Any]]:
        try:
            return await self.youtube_client.get(
                "videos",
                {"part": DETAIL_PARTS, "id": ",".join(video_ids)},
            )
        except YouTubeAPIError as e:
            raise self._stage_error("details", e.message, e.status_code) from e

    def _merge(self, video_ids: list[str], details: list[dict[str, Any]]) -> list[VideoRecord]:
        """Build records from detail items, ordered like the search results."""
        position = {video_id: index for index, video_id in enumerate(video_ids)}

        try:
            ordered = sorted(
                (item for item in details if item.get("id") in position),
                key=lambda item: position[item["id"]],
            )
            return [
                VideoRecord(
                    title=item["snippet"]["title"],
                    description=item["snippet"].get("description", ""),
                    duration=item["contentDetails"]["duration"],
                    view_count=item.get("statistics", {}).get("viewCount", "0"),
                )
                for item in ordered
            ]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise self._stage_error(
                "details", "video item has missing or malformed metadata", None
            ) from e

    @staticmethod
    def _stage_error(stage: str, message: str, status_code: int | None) -> AggregationError:
        logger.warning("video_aggregation_failed", stage=stage, status_code=status_code)
        return AggregationError(
            f"Video {stage} failed: {message}", stage=stage, status_code=status_code
        )
