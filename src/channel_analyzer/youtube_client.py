"""Thin async wrapper around the YouTube Data API v3."""

from typing import Any

from httpx import AsyncClient, HTTPError

from src.utils.logging import get_logger

from .config import ChannelAnalyzerConfig
from .errors import YouTubeAPIError

logger = get_logger(__name__)


class YouTubeDataClient:
    """Issues GET requests against YouTube Data API resources.

    The API key is appended to every request. Non-2xx responses, transport
    failures and non-JSON bodies are all reported as YouTubeAPIError so that
    the resolver and the aggregator can translate them into their own errors.
    """

    def __init__(self, config: ChannelAnalyzerConfig, http_client: AsyncClient):
        """Initialize the client.

        Args:
            config: Configuration with the API key and base URL.
            http_client: Shared httpx client used for all requests.
        """
        self.config = config
        self.http_client = http_client
        self.base_url = config.youtube_api_base_url.rstrip("/")

    async def get(self, resource: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Fetch one page of a resource and return its items.

        Args:
            resource: API resource name ("search", "channels", "videos").
            params: Query parameters, without the API key.

        Returns:
            The ``items`` list of the response (empty if the key is absent).

        Raises:
            YouTubeAPIError: On transport failure, non-2xx status or malformed body.
        """
        url = f"{self.base_url}/{resource}"
        logger.debug("youtube_request_started", resource=resource, params=params)

        try:
            response = await self.http_client.get(
                url, params={**params, "key": self.config.youtube_api_key}
            )
        except HTTPError as e:
            logger.warning(
                "youtube_request_failed",
                resource=resource,
                error_type=type(e).__name__,
            )
            raise YouTubeAPIError(f"{resource} request failed: {type(e).__name__}") from e

        if not response.is_success:
            logger.warning(
                "youtube_request_rejected",
                resource=resource,
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            raise YouTubeAPIError(
                f"{resource} request returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise YouTubeAPIError(
                f"{resource} response is not valid JSON", status_code=response.status_code
            ) from e

        items = payload.get("items", []) if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise YouTubeAPIError(
                f"{resource} response has no item list", status_code=response.status_code
            )

        logger.debug("youtube_request_completed", resource=resource, items=len(items))
        return items
