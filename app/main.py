"""Command line entry point.

Usage:
    python -m app price BTC
    python -m app technical ETH --timeframe 1m
    python -m app sentiment BTC
    python -m app recommend SOL --timeframe hourly --days 7
    python -m app recommend BTC --config analysis.yaml
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import yaml

from app.analysis_config import load_analysis_config
from app.config import get_settings
from app.services import MarketAnalysisService
from core.models import AnalysisConfig, OperationResult, Timeframe

logger = logging.getLogger(__name__)

COMMANDS = ("price", "technical", "sentiment", "recommend")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def parse_positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}")
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"Must be positive: {value}")
    return parsed


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="python -m app",
        description="Technical + sentiment trading signal synthesis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m app price BTC
  python -m app technical ETH --timeframe 1m
  python -m app recommend SOL --timeframe hourly --days 7
        """,
    )
    parser.add_argument("command", choices=COMMANDS, help="What to compute")
    parser.add_argument("symbol", help="Base asset symbol (e.g., BTC, ETH, SOL)")
    parser.add_argument(
        "--timeframe",
        type=Timeframe,
        choices=list(Timeframe),
        default=Timeframe(settings.default_timeframe),
        metavar="{" + ",".join(t.value for t in Timeframe) + "}",
        help=f"Analysis timeframe (default: {settings.default_timeframe})",
    )
    parser.add_argument(
        "--days",
        type=parse_positive_int,
        default=settings.default_days,
        help=f"Days of history to analyze (default: {settings.default_days})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to analysis.yaml with threshold overrides",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, config: AnalysisConfig) -> OperationResult:
    async with MarketAnalysisService(config=config) as service:
        if args.command == "price":
            return await service.get_price(args.symbol)
        if args.command == "technical":
            return await service.analyze_technical(args.symbol, args.timeframe, args.days)
        if args.command == "sentiment":
            return await service.analyze_sentiment(args.symbol)
        return await service.recommend(args.symbol, args.timeframe, args.days)


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(argv)
    except ValueError as e:
        # Bad environment settings (e.g. DEFAULT_TIMEFRAME)
        configure_logging("INFO")
        logger.error(f"Invalid settings: {e}")
        return 1
    configure_logging(args.log_level)

    try:
        config = load_analysis_config(args.config)
    except (ValueError, OSError, yaml.YAMLError) as e:
        logger.error(f"Invalid analysis config {args.config or 'analysis.yaml'}: {e}")
        return 1

    result = asyncio.run(run(args, config))
    print(result.model_dump_json(indent=2))

    if not result.ok:
        logger.error(f"{args.command} {args.symbol} failed: {result.message}")
        return 1
    return 0
