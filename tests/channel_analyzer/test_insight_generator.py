"""Unit tests for prompt construction and the completion call."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from openai import APIConnectionError, RateLimitError

from src.channel_analyzer.config import ChannelAnalyzerConfig
from src.channel_analyzer.errors import GenerationError
from src.channel_analyzer.insight_generator import (
    MAX_OUTPUT_TOKENS,
    InsightGenerator,
    build_prompt,
    serialize_video,
)
from src.channel_analyzer.schemas import VideoRecord

COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


def completion_response(*contents: str | None) -> MagicMock:
    """Create a mock chat completion with one choice per content."""
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content)) for content in contents]
    return response


@pytest.mark.unit
class TestPromptBuilding:
    """Test suite for serialize_video() and build_prompt()."""

    @pytest.fixture
    def records(self) -> list[VideoRecord]:
        """Create sample video records."""
        return [
            VideoRecord(
                title="Why the sky is blue",
                description="Rayleigh scattering explained",
                duration="PT12M3S",
                view_count="120345",
            ),
            VideoRecord(
                title="Building a telescope",
                description="",
                duration="PT1H2M",
                view_count="987",
            ),
        ]

    def test_serialize_video_four_lines(self, records: list[VideoRecord]) -> None:
        """Test the fixed Title/Description/Views/Duration block."""
        assert serialize_video(records[0]) == (
            "Title: Why the sky is blue\n"
            "Description: Rayleigh scattering explained\n"
            "Views: 120345\n"
            "Duration: PT12M3S"
        )

    def test_prompt_contains_fixed_questions(self, records: list[VideoRecord]) -> None:
        """Test that the prompt starts with the seven numbered questions."""
        prompt = build_prompt(records)

        assert prompt.startswith(
            "\nAnalyze the following YouTube videos and respond with:\n"
            "1. What type of channel is this?\n"
            "2. Is the content useful or a waste of time? Why?\n"
            "3. Summarize the common theme.\n"
            "4. How can the channel improve?\n"
            "5. How many videos are there in total?\n"
            "6. What is the average length?\n"
            "7. What is the average number of views?\n"
            "Videos:\n"
        )

    def test_prompt_keeps_video_order(self, records: list[VideoRecord]) -> None:
        """Test that videos appear in input order separated by one newline."""
        prompt = build_prompt(records)

        expected_videos = serialize_video(records[0]) + "\n" + serialize_video(records[1])
        assert prompt.endswith("Videos:\n" + expected_videos + "\n")
        assert prompt.index("Why the sky is blue") < prompt.index("Building a telescope")

    def test_prompt_with_no_videos(self) -> None:
        """Test that an empty video list still yields the question template."""
        prompt = build_prompt([])

        assert prompt.endswith("7. What is the average number of views?\nVideos:\n\n")


@pytest.mark.unit
class TestInsightGenerator:
    """Test suite for InsightGenerator class."""

    @pytest.fixture
    def config(self) -> ChannelAnalyzerConfig:
        """Create test configuration."""
        return ChannelAnalyzerConfig(llm_api_key="test_llm_key", llm_model="gpt-4-turbo")

    @pytest.fixture
    def client(self) -> MagicMock:
        """Create mock OpenAI client."""
        client = MagicMock()
        client.chat.completions.create = AsyncMock()
        return client

    @pytest.fixture
    def records(self) -> list[VideoRecord]:
        return [
            VideoRecord(title="Intro", description="Hello", duration="PT1M", view_count="10"),
        ]

    @pytest.mark.asyncio
    async def test_generate_success(
        self,
        config: ChannelAnalyzerConfig,
        client: MagicMock,
        records: list[VideoRecord],
    ) -> None:
        """Test a single user-message request returning the first choice."""
        client.chat.completions.create.return_value = completion_response(
            "  1. A\n2. B  ", "ignored second choice"
        )
        generator = InsightGenerator(config, client)

        raw = await generator.generate(records)

        # Returned verbatim, without trimming
        assert raw == "  1. A\n2. B  "
        client.chat.completions.create.assert_awaited_once_with(
            model="gpt-4-turbo",
            messages=[{"role": "user", "content": build_prompt(records)}],
            max_tokens=500,
        )

    def test_token_budget_is_fixed(self) -> None:
        assert MAX_OUTPUT_TOKENS == 500

    @pytest.mark.asyncio
    async def test_no_choices_raises(
        self, config: ChannelAnalyzerConfig, client: MagicMock, records: list[VideoRecord]
    ) -> None:
        """Test that a response with no choices is a failure."""
        client.chat.completions.create.return_value = completion_response()
        generator = InsightGenerator(config, client)

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate(records)

        assert exc_info.value.stage == "generate"

    @pytest.mark.asyncio
    async def test_empty_message_raises(
        self, config: ChannelAnalyzerConfig, client: MagicMock, records: list[VideoRecord]
    ) -> None:
        """Test that a choice without content is a failure."""
        client.chat.completions.create.return_value = completion_response(None)
        generator = InsightGenerator(config, client)

        with pytest.raises(GenerationError):
            await generator.generate(records)

    @pytest.mark.asyncio
    async def test_rate_limit_fails_without_retry(
        self, config: ChannelAnalyzerConfig, client: MagicMock, records: list[VideoRecord]
    ) -> None:
        """Test that a 429 is surfaced immediately with its status."""
        response = httpx.Response(429, request=httpx.Request("POST", COMPLETIONS_URL))
        client.chat.completions.create.side_effect = RateLimitError(
            "Rate limit reached", response=response, body=None
        )
        generator = InsightGenerator(config, client)

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate(records)

        assert exc_info.value.status_code == 429
        assert client.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_connection_error_raises_without_status(
        self, config: ChannelAnalyzerConfig, client: MagicMock, records: list[VideoRecord]
    ) -> None:
        """Test that transport failures become GenerationError."""
        client.chat.completions.create.side_effect = APIConnectionError(
            request=httpx.Request("POST", COMPLETIONS_URL)
        )
        generator = InsightGenerator(config, client)

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate(records)

        assert exc_info.value.status_code is None
