"""Trade store for reading journal trades from daily JSON files."""
import json
import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

import aiofiles

from src.journal.models import Trade, coerce_quantity
from src.journal.settings import JournalSettings

logger = logging.getLogger(__name__)


class TradeStore:
    """Reads trades persisted as daily JSON files.

    Files live at {data_dir}/{YYYY-MM-DD}.json and hold a JSON array of trade
    objects. Records are converted leniently: unknown keys are ignored and
    malformed fields become None.
    """

    def __init__(self, settings: JournalSettings) -> None:
        """Initialize the trade store.

        Args:
            settings: Journal configuration settings.
        """
        self._settings = settings
        self._data_dir = Path(settings.data_dir)

    def _get_file_path(self, trade_date: date) -> Path:
        """Get the JSON file path for a specific date."""
        return self._data_dir / f"{trade_date.isoformat()}.json"

    async def _read_records(self, trade_date: date) -> list[dict]:
        """Read raw records from the JSON file for a date."""
        file_path = self._get_file_path(trade_date)
        if not file_path.exists():
            return []

        try:
            async with aiofiles.open(file_path, "r") as f:
                content = await f.read()
            data = json.loads(content)
        except (OSError, ValueError) as e:
            logger.warning(f"Skipping unreadable journal file {file_path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Skipping journal file {file_path}: expected a JSON array")
            return []

        return [record for record in data if isinstance(record, dict)]

    async def get_trades_for_date(self, query_date: date) -> list[Trade]:
        """Get all trades for a specific date.

        Args:
            query_date: The date to retrieve trades for.

        Returns:
            List of Trade objects in file order.
        """
        records = await self._read_records(query_date)
        return [trade_from_dict(r, default_date=query_date) for r in records]

    async def get_trades_for_period(
        self, start_date: date, end_date: date
    ) -> list[Trade]:
        """Get all trades within a date range in chronological order.

        Args:
            start_date: Start of the period (inclusive).
            end_date: End of the period (inclusive).

        Returns:
            List of Trade objects within the period.
        """
        all_trades: list[Trade] = []
        current_date = start_date

        while current_date <= end_date:
            trades = await self.get_trades_for_date(current_date)
            all_trades.extend(trades)
            current_date += timedelta(days=1)

        logger.info(
            f"Loaded {len(all_trades)} trades from {start_date} to {end_date}"
        )
        return all_trades


def trade_from_dict(data: dict[str, Any], default_date: date | None = None) -> Trade:
    """Convert a stored trade record to a Trade.

    Args:
        data: Raw record. pnl may be a number or a numeric string.
        default_date: Date used when the record has no parseable trade_date.

    Returns:
        Trade built from the recognised fields.
    """
    strategy = data.get("strategy")
    if strategy is None and isinstance(data.get("strategies"), dict):
        strategy = data["strategies"].get("name")

    return Trade(
        pnl=data.get("pnl"),
        trade_date=_parse_date(data.get("trade_date")) or default_date,
        entry_time=_parse_time(data.get("entry_time")),
        exit_time=_parse_time(data.get("exit_time")),
        emotional_state=data.get("emotional_state"),
        symbol=data.get("symbol") if isinstance(data.get("symbol"), str) else None,
        quantity=coerce_quantity(data.get("quantity")),
        notes=data.get("notes") if isinstance(data.get("notes"), str) else None,
        strategy=strategy if isinstance(strategy, str) else None,
    )


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def _parse_time(value: Any) -> datetime | str | None:
    """Keep full datetimes, pass time-of-day strings through unchanged."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return value.strip()
    return None
