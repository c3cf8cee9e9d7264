"""Unit tests for channel reference resolution."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.channel_analyzer.channel_resolver import ChannelResolver
from src.channel_analyzer.errors import ResolutionError, YouTubeAPIError
from src.channel_analyzer.schemas import ChannelReference, ReferenceKind


@pytest.mark.unit
class TestChannelResolver:
    """Test suite for ChannelResolver class."""

    @pytest.fixture
    def youtube_client(self) -> MagicMock:
        """Create mock YouTube data client."""
        client = MagicMock()
        client.get = AsyncMock(return_value=[])
        return client

    @pytest.fixture
    def resolver(self, youtube_client: MagicMock) -> ChannelResolver:
        return ChannelResolver(youtube_client)

    @pytest.mark.asyncio
    async def test_missing_reference_fails(self, resolver: ChannelResolver) -> None:
        """Test that an absent reference is rejected immediately."""
        with pytest.raises(ResolutionError) as exc_info:
            await resolver.resolve(None)

        assert exc_info.value.message == "invalid reference"
        assert exc_info.value.stage == "resolve"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("channel_id", ["UC123", "not-even-a-real-id"])
    async def test_id_reference_short_circuits(
        self, resolver: ChannelResolver, youtube_client: MagicMock, channel_id: str
    ) -> None:
        """Test that ID references resolve to themselves with no API call."""
        reference = ChannelReference(kind=ReferenceKind.ID, value=channel_id)

        assert await resolver.resolve(reference) == channel_id
        youtube_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_handle_resolves_via_channel_search(
        self, resolver: ChannelResolver, youtube_client: MagicMock
    ) -> None:
        """Test handle resolution takes the first search result."""
        youtube_client.get.return_value = [
            {"id": {"channelId": "UCfound"}, "snippet": {"channelId": "UCfound", "title": "T"}}
        ]
        reference = ChannelReference(kind=ReferenceKind.HANDLE, value="@creator")

        channel_id = await resolver.resolve(reference)

        assert channel_id == "UCfound"
        youtube_client.get.assert_awaited_once_with(
            "search",
            {
                "part": "snippet",
                "q": "@creator",
                "type": "channel",
                "maxResults": 1,
                "order": "relevance",
            },
        )

    @pytest.mark.asyncio
    async def test_username_resolves_via_for_username(
        self, resolver: ChannelResolver, youtube_client: MagicMock
    ) -> None:
        """Test legacy username resolution takes the first channel's id."""
        youtube_client.get.return_value = [{"id": "UClegacy"}]
        reference = ChannelReference(kind=ReferenceKind.USERNAME, value="oldname")

        channel_id = await resolver.resolve(reference)

        assert channel_id == "UClegacy"
        youtube_client.get.assert_awaited_once_with(
            "channels", {"part": "id", "forUsername": "oldname"}
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind, value",
        [(ReferenceKind.HANDLE, "@nobody"), (ReferenceKind.USERNAME, "nobody")],
    )
    async def test_zero_results_leave_channel_unresolved(
        self, resolver: ChannelResolver, youtube_client: MagicMock, kind: ReferenceKind, value: str
    ) -> None:
        """Test that an empty lookup yields None rather than an error."""
        youtube_client.get.return_value = []

        assert await resolver.resolve(ChannelReference(kind=kind, value=value)) is None

    @pytest.mark.asyncio
    async def test_upstream_failure_becomes_resolution_error(
        self, resolver: ChannelResolver, youtube_client: MagicMock
    ) -> None:
        """Test that API errors keep their status as ResolutionError."""
        youtube_client.get.side_effect = YouTubeAPIError("search request returned HTTP 403", 403)
        reference = ChannelReference(kind=ReferenceKind.HANDLE, value="@creator")

        with pytest.raises(ResolutionError) as exc_info:
            await resolver.resolve(reference)

        assert exc_info.value.status_code == 403
        assert exc_info.value.stage == "resolve"

    @pytest.mark.asyncio
    async def test_malformed_search_item_becomes_resolution_error(
        self, resolver: ChannelResolver, youtube_client: MagicMock
    ) -> None:
        """Test that a result without snippet.channelId is a failure."""
        youtube_client.get.return_value = [{"id": {"kind": "youtube#channel"}}]
        reference = ChannelReference(kind=ReferenceKind.HANDLE, value="@creator")

        with pytest.raises(ResolutionError):
            await resolver.resolve(reference)

    @pytest.mark.asyncio
    async def test_upstream_failure_is_not_retried(
        self, resolver: ChannelResolver, youtube_client: MagicMock
    ) -> None:
        """Test that a failed lookup is attempted exactly once."""
        youtube_client.get.side_effect = YouTubeAPIError("boom", 500)
        reference = ChannelReference(kind=ReferenceKind.USERNAME, value="oldname")

        with pytest.raises(ResolutionError):
            await resolver.resolve(reference)

        assert youtube_client.get.await_count == 1
