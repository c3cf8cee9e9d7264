"""Command-line interface for analyzing a YouTube channel."""

import argparse
import asyncio
import sys

from src.utils.logging import get_logger

from .config import get_config
from .errors import ChannelAnalysisError
from .pipeline import ChannelAnalysisPipeline
from .schemas import AnalysisResult

logger = get_logger(__name__)

NO_ANSWER = "(no answer)"
FALLBACK_ERROR = "Something went wrong"


def render_cards(result: AnalysisResult) -> str:
    """Render the answers as one text card per question."""
    cards = []
    for answer in result.answers.answers:
        text = answer.text if answer.text is not None else NO_ANSWER
        cards.append(f"{answer.heading}\n{'-' * len(answer.heading)}\n{text}")
    return "\n\n".join(cards)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="YouTube Channel Analyzer - ask an LLM about a channel's latest videos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a channel by handle
  python -m src.channel_analyzer.cli https://www.youtube.com/@veritasium

  # Analyze by channel ID and also print the model's raw reply
  python -m src.channel_analyzer.cli https://www.youtube.com/channel/UCHnyfMqiRRG1u-2MsSQLbXA --raw
        """,
    )
    parser.add_argument("channel_url", help="YouTube channel URL")
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Also print the unparsed completion text",
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Process exit status: 0 on success (including degraded results),
        1 on any failure.
    """
    args = build_parser().parse_args(argv)

    config = get_config()
    try:
        config.validate_credentials()
    except ValueError as e:
        print(f"\n❌ {e}")
        return 1

    logger.info("cli_started", channel_url=args.channel_url)

    async with ChannelAnalysisPipeline(config) as pipeline:
        try:
            result = await pipeline.analyze(args.channel_url)
        except ChannelAnalysisError as e:
            print(f"\n❌ {e.message or FALLBACK_ERROR}")
            return 1
        except Exception as e:
            logger.exception("cli_analysis_failed", error_type=type(e).__name__)
            print(f"\n❌ {FALLBACK_ERROR}")
            return 1

    print("\n" + "=" * 60)
    print("YouTube Channel Analyzer")
    print("=" * 60)
    print(f"Channel: {result.channel_id or 'unresolved'}")
    print(f"Videos analyzed: {len(result.videos)}")
    if result.is_degraded:
        print("\n⚠️  Partial result - some answers or data are missing")
    print("=" * 60 + "\n")

    print(render_cards(result))

    if args.raw:
        print("\n" + "=" * 60)
        print("Raw completion")
        print("=" * 60)
        print(result.raw_completion)

    print()
    logger.info(
        "cli_completed",
        channel_id=result.channel_id,
        missing_answers=result.answers.missing,
    )
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
