"""Main pipeline orchestrator for channel analysis."""

from types import TracebackType

from httpx import AsyncClient
from openai import AsyncOpenAI

from src.utils.clients import get_completion_client, get_youtube_http_client
from src.utils.logging import get_logger

from .answer_segmenter import segment
from .channel_resolver import ChannelResolver
from .config import ChannelAnalyzerConfig, get_config
from .errors import ChannelAnalysisError, ClassificationFailure
from .insight_generator import InsightGenerator
from .schemas import AnalysisResult
from .url_classifier import classify
from .video_aggregator import VideoAggregator
from .youtube_client import YouTubeDataClient

logger = get_logger(__name__)


class ChannelAnalysisPipeline:
    """Orchestrates one channel analysis from URL to answers.

    The stages run strictly in sequence: classify, resolve, aggregate,
    generate, segment. Each run keeps its intermediate results local, so one
    pipeline instance can serve concurrent analyses.
    """

    def __init__(
        self,
        config: ChannelAnalyzerConfig | None = None,
        http_client: AsyncClient | None = None,
        completion_client: AsyncOpenAI | None = None,
    ):
        """Initialize pipeline with all required services.

        Args:
            config: Configuration object. If None, loads from environment.
            http_client: Client for YouTube requests. Created if None.
            completion_client: OpenAI client. Created if None.
        """
        self.config = config or get_config()

        # Clients created here are closed by aclose(); injected ones are not
        self._owned_clients: list[AsyncClient | AsyncOpenAI] = []
        if http_client is None:
            http_client = get_youtube_http_client()
            self._owned_clients.append(http_client)
        if completion_client is None:
            completion_client = get_completion_client(self.config)
            self._owned_clients.append(completion_client)

        self.http_client = http_client
        self.completion_client = completion_client

        youtube_client = YouTubeDataClient(self.config, http_client)
        self.resolver = ChannelResolver(youtube_client)
        self.aggregator = VideoAggregator(youtube_client)
        self.generator = InsightGenerator(self.config, completion_client)

        logger.info("pipeline_initialized", model=self.config.llm_model)

    async def analyze(self, channel_url: str) -> AnalysisResult:
        """Analyze the channel behind a URL.

        An unresolved channel or a channel without videos still produces a
        result (the model is asked about an empty video list), as does a reply
        that splits into fewer than seven answers. Check
        ``AnalysisResult.is_degraded`` to tell these apart from a full result.

        Args:
            channel_url: Channel URL as typed by the user.

        Returns:
            AnalysisResult with the videos, raw completion and answers.

        Raises:
            ClassificationFailure: If the URL is not a recognized channel URL.
            ResolutionError: If the channel lookup fails.
            AggregationError: If the video search or details lookup fails.
            GenerationError: If the completion call fails.
        """
        logger.info("analysis_started", channel_url=channel_url)

        try:
            # 1. Classify the URL
            reference = classify(channel_url)
            if reference is None:
                raise ClassificationFailure("Invalid YouTube URL")

            # 2. Resolve the channel ID
            channel_id = await self.resolver.resolve(reference)

            # 3. Fetch the latest videos
            videos = await self.aggregator.aggregate(channel_id) if channel_id else []

            # 4. Ask the model
            raw_completion = await self.generator.generate(videos)

            # 5. Split the reply into answers
            answers = segment(raw_completion)

        except ChannelAnalysisError as e:
            logger.warning(
                "analysis_failed",
                channel_url=channel_url,
                error_type=type(e).__name__,
                stage=e.stage,
                status_code=e.status_code,
            )
            raise

        result = AnalysisResult(
            channel_url=channel_url,
            reference=reference,
            channel_id=channel_id,
            videos=tuple(videos),
            raw_completion=raw_completion,
            answers=answers,
        )

        logger.info(
            "analysis_completed",
            channel_id=channel_id,
            videos=len(videos),
            missing_answers=answers.missing,
            degraded=result.is_degraded,
        )
        return result

    async def aclose(self) -> None:
        """Close the clients this pipeline created itself."""
        for client in self._owned_clients:
            if isinstance(client, AsyncOpenAI):
                await client.close()
            else:
                await client.aclose()
        self._owned_clients = []

    async def __aenter__(self) -> "ChannelAnalysisPipeline":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
