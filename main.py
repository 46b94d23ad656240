# main.py
"""Command-line entry point for rating a trading journal."""
import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import date, timedelta
from pathlib import Path

from dotenv import load_dotenv

from src.config.settings import Settings
from src.engine import RatingEngine, RatingReport
from src.journal import TradeStore


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/settings.yaml"


def configure_logging(settings: Settings) -> None:
    """Configure root logging from the logging settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log.level.upper(), logging.INFO),
        format=settings.log.format,
        datefmt=settings.log.datefmt,
    )


def load_config(config_path: Path | None = None) -> Settings:
    """Load configuration.

    The path comes from the argument, then VRATING_CONFIG, then
    config/settings.yaml. A missing file falls back to defaults.

    Returns:
        Settings object.

    Raises:
        SystemExit: If the YAML cannot be parsed or fails validation.
    """
    load_dotenv()

    path = config_path or Path(os.getenv("VRATING_CONFIG", DEFAULT_CONFIG_PATH))
    if not path.exists():
        logger.info(f"{path} not found, using default settings")
        return Settings()

    try:
        settings = Settings.from_yaml(path)
        logger.info(f"✓ Settings loaded from {path}")
    except Exception as e:
        logger.error(f"Failed to parse {path}: {e}")
        sys.exit(1)

    return settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rate a trading journal")
    parser.add_argument("--config", type=Path, default=None, help="Path to settings YAML")
    parser.add_argument("--data-dir", default=None, help="Directory of daily trade JSON files")
    parser.add_argument("--start", type=date.fromisoformat, default=None, help="First day (YYYY-MM-DD)")
    parser.add_argument("--end", type=date.fromisoformat, default=None, help="Last day (YYYY-MM-DD)")
    parser.add_argument("--precision", type=int, default=2, help="Decimal places in the output")
    return parser.parse_args(argv)


async def build_report(
    settings: Settings, start: date, end: date, data_dir: str | None = None
) -> RatingReport:
    """Load trades for the period and rate them."""
    journal_settings = settings.journal
    if data_dir:
        journal_settings = journal_settings.model_copy(update={"data_dir": data_dir})

    store = TradeStore(journal_settings)
    trades = await store.get_trades_for_period(start, end)

    engine = RatingEngine(settings)
    return engine.rate(trades)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_config(args.config)
    configure_logging(settings)

    end = args.end or date.today()
    start = args.start or end - timedelta(days=settings.journal.default_period_days - 1)
    if start > end:
        logger.error(f"Start date {start} is after end date {end}")
        return 1

    logger.info(f"Starting {settings.system.name} v{settings.system.version}")

    report = asyncio.run(build_report(settings, start, end, args.data_dir))
    print(json.dumps(report.to_dict(args.precision), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
