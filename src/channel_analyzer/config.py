"""Configuration module for the channel analyzer."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Check if we're in production
is_production = os.getenv("ENVIRONMENT") == "production"

if not is_production:
    # Development: prioritize .env file
    project_root = Path(__file__).resolve().parent.parent.parent
    load_dotenv(project_root / ".env", override=True)
else:
    # Production: use cloud platform env vars only
    load_dotenv()


class ChannelAnalyzerConfig(BaseModel):
    """Configuration for the channel analysis pipeline.

    Holds the credentials and endpoints of the two external services the
    pipeline talks to. All settings can be overridden via environment variables.
    """

    # YouTube Data API settings
    youtube_api_key: str = Field(default_factory=lambda: os.getenv("YOUTUBE_API_KEY", ""))
    youtube_api_base_url: str = Field(
        default_factory=lambda: os.getenv(
            "YOUTUBE_API_BASE_URL", "https://www.googleapis.com/youtube/v3"
        )
    )

    # Completion settings
    llm_api_key: str = Field(default_factory=lambda: os.getenv("LLM_API_KEY", ""))
    llm_base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL", "https://api.openai.com/v1")
    )
    llm_model: str = Field(default_factory=lambda: os.getenv("LLM_CHOICE", "gpt-4-turbo"))

    def validate_credentials(self) -> None:
        """Ensure both API keys are present.

        Raises:
            ValueError: If one or both keys are empty, naming the variables.
        """
        missing = []
        if not self.youtube_api_key:
            missing.append("YOUTUBE_API_KEY")
        if not self.llm_api_key:
            missing.append("LLM_API_KEY")

        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")


def get_config() -> ChannelAnalyzerConfig:
    """Get configuration instance.

    Returns:
        ChannelAnalyzerConfig: Configuration object with all settings.
    """
    return ChannelAnalyzerConfig()
