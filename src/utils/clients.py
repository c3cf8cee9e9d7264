"""Client initialization utilities.

Provides the HTTP client for the YouTube Data API and the OpenAI client used
for completions.
"""

from httpx import AsyncClient
from openai import AsyncOpenAI

from src.channel_analyzer.config import ChannelAnalyzerConfig


def get_youtube_http_client() -> AsyncClient:
    """Create the HTTP client for YouTube Data API requests.

    Library default timeouts apply; the analyzer adds none of its own.
    """
    return AsyncClient()


def get_completion_client(config: ChannelAnalyzerConfig) -> AsyncOpenAI:
    """Create the OpenAI client used for completions.

    Retries are disabled: a rate-limited or failed completion ends the
    analysis instead of being re-sent.

    Args:
        config: Analyzer configuration with the LLM endpoint and key.

    Returns:
        AsyncOpenAI client.
    """
    return AsyncOpenAI(
        base_url=config.llm_base_url,
        api_key=config.llm_api_key,
        max_retries=0,
    )
