"""Data models for the trading journal."""
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any


def _finite_float(value: Any) -> float | None:
    """Numbers and numeric strings as a finite float, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def coerce_pnl(value: Any) -> float:
    """Convert a raw P&L value to a finite float.

    Missing, non-numeric and non-finite values are treated as 0.
    """
    result = _finite_float(value)
    return 0.0 if result is None else result


def coerce_quantity(value: Any) -> float | None:
    """Convert a raw position size to a finite float, or None when unusable."""
    return _finite_float(value)


def coerce_text(value: Any) -> str | None:
    """Stripped text of a free-form journal field, or None when blank or not text.

    A mapping with a "name" entry (a joined strategy record) yields that name.
    """
    if isinstance(value, Mapping):
        value = value.get("name")
    if not isinstance(value, str):
        return None
    return value.strip() or None


@dataclass(frozen=True)
class Trade:
    """A single closed trade as recorded in the journal.

    Only pnl, trade_date and emotional_state feed the core rating; the
    remaining journal fields are used for journaling-adherence and
    risk-management category scores.
    """

    pnl: Any = None
    trade_date: date | None = None
    entry_time: datetime | str | None = None
    exit_time: datetime | str | None = None
    emotional_state: Any = None

    symbol: str | None = None
    quantity: float | None = None
    notes: str | None = None
    strategy: str | None = None

    @property
    def pnl_value(self) -> float:
        """P&L as a finite float (0 when absent or malformed)."""
        return coerce_pnl(self.pnl)

    @property
    def quantity_value(self) -> float | None:
        """Position size as a finite float, None when absent or malformed."""
        return coerce_quantity(self.quantity)

    @property
    def notes_text(self) -> str | None:
        return coerce_text(self.notes)

    @property
    def strategy_text(self) -> str | None:
        return coerce_text(self.strategy)

    @property
    def is_winner(self) -> bool:
        return self.pnl_value > 0

    @property
    def is_loser(self) -> bool:
        return self.pnl_value < 0


@dataclass(frozen=True)
class ParsedEmotionalState:
    """Primary and secondary emotion tags extracted from a trade."""

    primary_emotion: str | None = None
    secondary_emotion: str | None = None

    @property
    def tags(self) -> list[str]:
        """Non-null tags in primary, secondary order."""
        return [t for t in (self.primary_emotion, self.secondary_emotion) if t]


@dataclass(frozen=True)
class StatSnapshot:
    """Core trade statistics.

    profit_factor and recovery_factor use math.inf as a sentinel when the
    denominator is zero and the numerator is positive.
    """

    total_trades: int
    winning_trades: int
    losing_trades: int

    total_pnl: float
    gross_profit: float
    gross_loss: float

    win_rate: float  # 0-100
    profit_factor: float
    expectancy: float

    avg_win: float
    avg_loss: float

    max_drawdown: float
    recovery_factor: float
    sharpe_ratio: float

    @classmethod
    def empty(cls) -> "StatSnapshot":
        """Snapshot with zero values for an empty trade list."""
        return cls(
            total_trades=0,
            winning_trades=0,
            losing_trades=0,
            total_pnl=0.0,
            gross_profit=0.0,
            gross_loss=0.0,
            win_rate=0.0,
            profit_factor=0.0,
            expectancy=0.0,
            avg_win=0.0,
            avg_loss=0.0,
            max_drawdown=0.0,
            recovery_factor=0.0,
            sharpe_ratio=0.0,
        )

    def to_dict(self, precision: int = 2) -> dict:
        """Render for presentation, rounding and spelling infinity as "inf"."""

        def present(value: float) -> float | str:
            if math.isinf(value):
                return "inf"
            return round(value, precision)

        return {
            "totalTrades": self.total_trades,
            "winningTrades": self.winning_trades,
            "losingTrades": self.losing_trades,
            "totalPnl": present(self.total_pnl),
            "grossProfit": present(self.gross_profit),
            "grossLoss": present(self.gross_loss),
            "winRate": present(self.win_rate),
            "profitFactor": present(self.profit_factor),
            "expectancy": present(self.expectancy),
            "avgWin": present(self.avg_win),
            "avgLoss": present(self.avg_loss),
            "maxDrawdown": present(self.max_drawdown),
            "recoveryFactor": present(self.recovery_factor),
            "sharpeRatio": present(self.sharpe_ratio),
        }


@dataclass(frozen=True)
class EmotionMetrics:
    """Emotional-discipline metrics derived from emotion tags.

    Attributes:
        positive_pct: Weighted positive share of all logged emotions (0-100).
        negative_impact_pct: Share of negative tags on losing trades (0-100).
        win_correlation_pct: Weighted share of positive tags on winners (0-100).
        logging_completeness_pct: Share of trades with a recognised tag (0-100).
        positive_count: Number of positive tags seen.
        neutral_count: Number of neutral tags seen.
        normal_trading_count: Number of normal-trading tags seen.
        negative_count: Number of negative tags seen.
        total_emotions: Every non-null tag, recognised or not.
        total_trades: Number of trades classified.
        frequencies: Occurrences of each recognised tag.
    """

    positive_pct: float = 0.0
    negative_impact_pct: float = 0.0
    win_correlation_pct: float = 0.0
    logging_completeness_pct: float = 0.0

    positive_count: int = 0
    neutral_count: int = 0
    normal_trading_count: int = 0
    negative_count: int = 0
    total_emotions: int = 0
    total_trades: int = 0

    frequencies: dict[str, int] = field(default_factory=dict)

    def to_dict(self, precision: int = 2) -> dict:
        return {
            "positivePct": round(self.positive_pct, precision),
            "negativeImpactPct": round(self.negative_impact_pct, precision),
            "winCorrelationPct": round(self.win_correlation_pct, precision),
            "loggingCompletenessPct": round(self.logging_completeness_pct, precision),
            "frequencies": dict(self.frequencies),
        }
