"""FastAPI application for the YouTube Channel Analyzer.

Exposes a health check and a single analysis endpoint that runs the channel
analysis pipeline and returns its answers as question cards.
"""

from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.channel_analyzer.config import get_config
from src.channel_analyzer.errors import ChannelAnalysisError, ClassificationFailure
from src.channel_analyzer.pipeline import ChannelAnalysisPipeline
from src.channel_analyzer.schemas import AnalysisResult
from src.utils.logging import get_logger

logger = get_logger(__name__)

# Global pipeline initialized in lifespan
pipeline: ChannelAnalysisPipeline | None = None


# ==============================================================================
# Lifespan Management
# ==============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for the FastAPI application.

    Builds the pipeline and its clients on startup and closes them on shutdown.
    """
    global pipeline

    logger.info("application_startup_started")

    try:
        config = get_config()
        config.validate_credentials()
        pipeline = ChannelAnalysisPipeline(config)
        logger.info("application_startup_completed", model=config.llm_model)
    except Exception:
        logger.exception("application_startup_failed")
        raise

    yield  # Application runs here

    logger.info("application_shutdown_started")

    if pipeline:
        await pipeline.aclose()
        pipeline = None

    logger.info("application_shutdown_completed")


# ==============================================================================
# FastAPI Application Setup
# ==============================================================================

app = FastAPI(
    title="YouTube Channel Analyzer API",
    description="Answers seven fixed questions about a channel's latest videos",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==============================================================================
# Request/Response Models
# ==============================================================================


class AnalyzeRequest(BaseModel):
    """Request model for the analyze endpoint."""

    channel_url: str


class AnswerCard(BaseModel):
    """One question with its answer, or null when the answer is missing."""

    number: int
    question: str
    answer: str | None


class AnalyzeResponse(BaseModel):
    """Response model for the analyze endpoint.

    ``degraded`` is true when the result is usable but incomplete: the channel
    was not found, it had no videos, or some answers are missing.
    """

    channel_id: str | None
    video_count: int
    degraded: bool
    answers: list[AnswerCard]

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalyzeResponse":
        return cls(
            channel_id=result.channel_id,
            video_count=len(result.videos),
            degraded=result.is_degraded,
            answers=[
                AnswerCard(number=answer.number, question=answer.question, answer=answer.text)
                for answer in result.answers.answers
            ],
        )


# ==============================================================================
# Error Handling
# ==============================================================================


@app.exception_handler(ChannelAnalysisError)
async def analysis_error_handler(request: Request, exc: ChannelAnalysisError) -> JSONResponse:
    """Map pipeline failures to JSON error bodies.

    Bad input is a client error; every other stage failed on an upstream
    service.
    """
    status_code = 400 if isinstance(exc, ClassificationFailure) else 502
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# ==============================================================================
# API Endpoints
# ==============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint.

    Returns:
        Health status and timestamp.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "services": {
            "pipeline": pipeline is not None,
        },
    }


@app.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze_endpoint(request: AnalyzeRequest):
    """Analyze one channel.

    Args:
        request: Request containing the channel URL.

    Returns:
        AnalyzeResponse with one card per question.
    """
    if pipeline is None:
        logger.error("analyze_request_failed", reason="pipeline_not_initialized")
        return JSONResponse(
            status_code=500,
            content={
                "error": "PipelineNotInitialized",
                "stage": "pipeline",
                "status_code": None,
                "message": "Pipeline not initialized",
            },
        )

    logger.info("analyze_request_started", channel_url=request.channel_url)
    result = await pipeline.analyze(request.channel_url)
    logger.info(
        "analyze_request_completed",
        channel_id=result.channel_id,
        degraded=result.is_degraded,
    )
    return AnalyzeResponse.from_result(result)
