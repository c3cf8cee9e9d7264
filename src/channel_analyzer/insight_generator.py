"""Insight generation: prompt construction and the completion call."""

from openai import APIError, APIStatusError, AsyncOpenAI

from src.utils.logging import get_logger

from .config import ChannelAnalyzerConfig
from .errors import GenerationError
from .schemas import QUESTIONS, VideoRecord

logger = get_logger(__name__)

MAX_OUTPUT_TOKENS = 500

# ==============================================================================
# Prompt
# ==============================================================================

ANALYSIS_PROMPT_TEMPLATE = """
Analyze the following YouTube videos and respond with:
{questions}
Videos:
{videos}
"""


def serialize_video(record: VideoRecord) -> str:
    """Render one video as the four-line block used in the prompt.

    Examples:
        >>> print(serialize_video(VideoRecord(
        ...     title="Intro", description="Hi", duration="PT1M", view_count="10")))
        Title: Intro
        Description: Hi
        Views: 10
        Duration: PT1M
    """
    return (
        f"Title: {record.title}\n"
        f"Description: {record.description}\n"
        f"Views: {record.view_count}\n"
        f"Duration: {record.duration}"
    )


def build_prompt(records: list[VideoRecord]) -> str:
    """Build the analysis prompt for a list of videos, keeping their order."""
    questions = "\n".join(
        f"{number}. {question}" for number, question in enumerate(QUESTIONS, start=1)
    )
    videos = "\n".join(serialize_video(record) for record in records)
    return ANALYSIS_PROMPT_TEMPLATE.format(questions=questions, videos=videos)


# ==============================================================================
# Service
# ==============================================================================


class InsightGenerator:
    """Submits the analysis prompt to an OpenAI chat completion endpoint.

    One request per analysis: a single user message, a fixed output budget,
    no streaming and no retries.
    """

    def __init__(self, config: ChannelAnalyzerConfig, client: AsyncOpenAI):
        """Initialize the generator.

        Args:
            config: Configuration with the model name.
            client: OpenAI-compatible client, built with retries disabled.
        """
        self.config = config
        self.client = client

    async def generate(self, records: list[VideoRecord]) -> str:
        """Ask the model about the given videos.

        Args:
            records: Aggregated videos, most recent first.

        Returns:
            Text of the first completion choice, unmodified.

        Raises:
            GenerationError: If the request fails or the response has no content.
        """
        prompt = build_prompt(records)
        logger.info(
            "completion_started",
            model=self.config.llm_model,
            videos=len(records),
            prompt_length=len(prompt),
        )

        try:
            response = await self.client.chat.completions.create(
                model=self.config.llm_model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=MAX_OUTPUT_TOKENS,
            )
        except APIStatusError as e:
            logger.warning("completion_rejected", status_code=e.status_code)
            raise GenerationError(
                f"Completion request returned HTTP {e.status_code}", status_code=e.status_code
            ) from e
        except APIError as e:
            logger.warning("completion_failed", error_type=type(e).__name__)
            raise GenerationError(f"Completion request failed: {type(e).__name__}") from e

        if not response.choices:
            raise GenerationError("Completion returned no choices")

        content = response.choices[0].message.content
        if content is None:
            raise GenerationError("Completion returned an empty message")

        logger.info("completion_completed", completion_length=len(content))
        return content
