# tests/journal/test_trade_store.py
"""Tests for TradeStore."""
import json
from datetime import date, datetime
from pathlib import Path

from src.journal.settings import JournalSettings
from src.journal.trade_store import TradeStore, trade_from_dict


def make_store(tmp_path: Path) -> TradeStore:
    """Create a TradeStore reading from tmp_path."""
    return TradeStore(JournalSettings(data_dir=str(tmp_path)))


def write_day(tmp_path: Path, day: date, records) -> Path:
    """Write a daily journal file."""
    file_path = tmp_path / f"{day.isoformat()}.json"
    file_path.write_text(json.dumps(records))
    return file_path


class TestTradeStore:
    """Tests for TradeStore."""

    async def test_get_trades_for_date(self, tmp_path: Path) -> None:
        """get_trades_for_date should load every record in file order."""
        day = date(2026, 1, 15)
        write_day(tmp_path, day, [
            {"pnl": 100, "symbol": "NVDA", "emotional_state": "CALM"},
            {"pnl": "-25.5", "symbol": "AAPL", "emotional_state": ["FOMO"]},
        ])
        store = make_store(tmp_path)

        trades = await store.get_trades_for_date(day)

        assert [t.symbol for t in trades] == ["NVDA", "AAPL"]
        assert trades[1].pnl_value == -25.5
        assert trades[0].trade_date == day

    async def test_get_trades_for_missing_date(self, tmp_path: Path) -> None:
        """A day without a file should have no trades."""
        store = make_store(tmp_path)

        trades = await store.get_trades_for_date(date(2026, 1, 15))

        assert trades == []

    async def test_get_trades_for_period(self, tmp_path: Path) -> None:
        """get_trades_for_period should concatenate days chronologically."""
        write_day(tmp_path, date(2026, 1, 16), [{"pnl": 2}])
        write_day(tmp_path, date(2026, 1, 15), [{"pnl": 1}])
        write_day(tmp_path, date(2026, 1, 18), [{"pnl": 4}])
        store = make_store(tmp_path)

        trades = await store.get_trades_for_period(date(2026, 1, 15), date(2026, 1, 17))

        assert [t.pnl for t in trades] == [1, 2]

    async def test_unreadable_file_is_skipped(self, tmp_path: Path) -> None:
        """Corrupt JSON should be skipped rather than raised."""
        (tmp_path / "2026-01-15.json").write_text("{not json")
        store = make_store(tmp_path)

        trades = await store.get_trades_for_date(date(2026, 1, 15))

        assert trades == []

    async def test_non_array_file_is_skipped(self, tmp_path: Path) -> None:
        """A file not holding a JSON array should be skipped."""
        write_day(tmp_path, date(2026, 1, 15), {"pnl": 10})
        store = make_store(tmp_path)

        trades = await store.get_trades_for_date(date(2026, 1, 15))

        assert trades == []

    async def test_non_object_records_are_ignored(self, tmp_path: Path) -> None:
        """Records that are not objects should be dropped."""
        write_day(tmp_path, date(2026, 1, 15), [{"pnl": 10}, "junk", 5])
        store = make_store(tmp_path)

        trades = await store.get_trades_for_date(date(2026, 1, 15))

        assert len(trades) == 1


class TestTradeFromDict:
    """Tests for trade_from_dict."""

    def test_full_record(self) -> None:
        """Every recognised field should be converted."""
        trade = trade_from_dict({
            "pnl": "12.5",
            "trade_date": "2026-01-15",
            "entry_time": "2026-01-15T09:30:00",
            "exit_time": "2026-01-15T10:45:00",
            "emotional_state": {"primary_emotion": "CALM"},
            "symbol": "NVDA",
            "quantity": "100",
            "notes": "Breakout",
            "strategy": "momentum",
            "unknown": "ignored",
        })

        assert trade.pnl_value == 12.5
        assert trade.trade_date == date(2026, 1, 15)
        assert trade.entry_time == datetime(2026, 1, 15, 9, 30)
        assert trade.exit_time == datetime(2026, 1, 15, 10, 45)
        assert trade.quantity == 100.0
        assert trade.notes == "Breakout"
        assert trade.strategy == "momentum"

    def test_strategy_from_relation(self) -> None:
        """strategy should fall back to the joined strategies name."""
        trade = trade_from_dict({"pnl": 1, "strategies": {"name": "scalp"}})

        assert trade.strategy == "scalp"

    def test_lenient_fields(self) -> None:
        """Malformed optional fields should become None."""
        trade = trade_from_dict(
            {"pnl": 1, "trade_date": "not a date", "quantity": "nan", "symbol": 5},
            default_date=date(2026, 1, 20),
        )

        assert trade.trade_date == date(2026, 1, 20)
        assert trade.quantity is None
        assert trade.symbol is None

    def test_time_of_day_kept_as_string(self) -> None:
        """Time-of-day strings should pass through unchanged."""
        trade = trade_from_dict({"pnl": 1, "entry_time": "9:30 AM", "exit_time": ""})

        assert trade.entry_time == "9:30 AM"
        assert trade.exit_time is None
