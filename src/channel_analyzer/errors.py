"""Typed failures raised by the channel analysis pipeline.

Every stage raises its own error type so the caller can tell which step
failed and, where an upstream service was involved, with which HTTP status.
"""

from typing import Any


class ChannelAnalysisError(Exception):
    """Base class for all terminal pipeline failures.

    Attributes:
        message: Human-readable description of the failure.
        stage: Name of the pipeline stage that failed.
        status_code: Upstream HTTP status, if the failure came from a response.
    """

    stage = "pipeline"

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        if stage is not None:
            self.stage = stage

    def to_dict(self) -> dict[str, Any]:
        """Serialize the failure for presentation layers."""
        return {
            "error": type(self).__name__,
            "stage": self.stage,
            "status_code": self.status_code,
            "message": self.message,
        }


class ClassificationFailure(ChannelAnalysisError):
    """The input is not a URL, or not a recognized channel URL shape."""

    stage = "classify"


class ResolutionError(ChannelAnalysisError):
    """A channel reference could not be turned into a channel ID."""

    stage = "resolve"


class AggregationError(ChannelAnalysisError):
    """The video search or the video details lookup failed."""

    stage = "aggregate"


class GenerationError(ChannelAnalysisError):
    """The completion call failed or returned nothing usable."""

    stage = "generate"


class YouTubeAPIError(Exception):
    """Low-level YouTube Data API failure.

    Raised by the HTTP client wrapper only. Callers translate it into the
    error type of their own stage.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
