"""Category scorers deriving rating categories directly from trades."""
import logging
from collections import defaultdict
from datetime import date, datetime, time

from src.journal.emotion_parser import is_blank
from src.journal.models import EmotionMetrics, Trade
from src.scoring.banding import clamp_score, lerp, population_std_dev, safe_percentage
from src.scoring.emotional_discipline import EmotionalDisciplineScorer
from src.scoring.models import (
    CategoryScores,
    ConsistencyMetrics,
    JournalingAdherenceMetrics,
    ProfitabilityMetrics,
    RiskManagementMetrics,
)
from src.scoring.settings import CategoryScoringSettings

logger = logging.getLogger(__name__)


class CategoryScorer:
    """Scores the five rating categories from a chronological trade list.

    Each category follows the same pattern: collect metrics, pick the band
    they fall into, interpolate within the band, then apply bonuses and
    penalties and clamp to [0, 10].
    """

    def __init__(
        self,
        settings: CategoryScoringSettings | None = None,
        emotional_scorer: EmotionalDisciplineScorer | None = None,
    ) -> None:
        """Initialize the category scorer.

        Args:
            settings: Large-loss and oversized-trade thresholds.
            emotional_scorer: Scorer for the emotional-discipline category.
        """
        self._settings = settings or CategoryScoringSettings()
        self._emotional_scorer = emotional_scorer or EmotionalDisciplineScorer()

    def score_all(self, trades: list[Trade], emotion_metrics: EmotionMetrics) -> CategoryScores:
        """Score every category.

        Args:
            trades: Trades in chronological order.
            emotion_metrics: Emotion metrics of the same trades.

        Returns:
            CategoryScores; all zero for an empty trade list.
        """
        if not trades:
            return CategoryScores()

        total_pnl = sum(t.pnl_value for t in trades)

        scores = CategoryScores(
            profitability=self.profitability_score(self.profitability_metrics(trades)),
            risk_management=self.risk_management_score(self.risk_management_metrics(trades)),
            consistency=self.consistency_score(self.consistency_metrics(trades)),
            emotional_discipline=self._emotional_scorer.score(emotion_metrics, total_pnl),
            journaling_adherence=self.journaling_adherence_score(
                self.journaling_adherence_metrics(trades)
            ),
        )
        logger.debug(f"Category scores: {scores}")
        return scores

    # Profitability

    def profitability_metrics(self, trades: list[Trade]) -> ProfitabilityMetrics:
        if not trades:
            return ProfitabilityMetrics(0.0, 0.0, 0.0, 0.0, 0.0, {})

        pnls = [t.pnl_value for t in trades]
        total_profit = sum(p for p in pnls if p > 0)
        total_loss = abs(sum(p for p in pnls if p < 0))
        winning_trades = sum(1 for p in pnls if p > 0)

        monthly_pl = _monthly_pl(trades)
        positive_months = sum(1 for pl in monthly_pl.values() if pl > 0)

        return ProfitabilityMetrics(
            net_pl_percentage=(total_profit - total_loss) / len(trades) * 100,
            win_rate=safe_percentage(winning_trades, len(trades)),
            total_profit=total_profit,
            total_loss=total_loss,
            positive_months_percentage=safe_percentage(positive_months, len(monthly_pl)),
            monthly_pl=monthly_pl,
        )

    def profitability_score(self, metrics: ProfitabilityMetrics) -> float:
        net = metrics.net_pl_percentage
        win_rate = metrics.win_rate

        if net > 50 and win_rate > 70:
            score = 10.0
        elif net >= 30 and win_rate >= 60:
            score = lerp(8.0, 9.9, min((net - 30) / 20, (win_rate - 60) / 10))
        elif net >= 10 and win_rate >= 50:
            score = min(6.0 + (net - 10) * 0.1, 7.9)
        elif 0 <= net <= 10 or 40 <= win_rate < 50:
            score = lerp(4.0, 5.9, min(net / 10, (win_rate - 40) / 10))
        elif -10 <= net < 0 or 30 <= win_rate < 40:
            score = lerp(2.0, 3.9, min((net + 10) / 10, (win_rate - 30) / 10))
        else:
            score = lerp(1.0, 1.9, net / -10)

        if metrics.positive_months_percentage > 80:
            score += 0.5

        return clamp_score(score)

    # Risk management

    def risk_management_metrics(self, trades: list[Trade]) -> RiskManagementMetrics:
        if not trades:
            return RiskManagementMetrics(0.0, 0.0, 0.0, 0.0, 0.0)

        cumulative = 0.0
        peak = 0.0
        max_drawdown = 0.0
        for trade in trades:
            cumulative += trade.pnl_value
            peak = max(peak, cumulative)
            max_drawdown = max(max_drawdown, peak - cumulative)

        large_losses = sum(
            1 for t in trades if t.pnl_value < self._settings.large_loss_threshold
        )

        quantities = [
            q for q in (t.quantity_value for t in trades) if q is not None and q > 0
        ]
        avg_quantity = sum(quantities) / len(quantities) if quantities else 0.0
        quantity_variability = (
            population_std_dev(quantities) / avg_quantity * 100 if avg_quantity > 0 else 0.0
        )
        oversized = sum(
            1 for q in quantities if q > avg_quantity * self._settings.oversized_multiple
        )

        durations = [d for d in (_duration_hours(t) for t in trades) if d > 0]
        average_duration = sum(durations) / len(durations) if durations else 0.0

        return RiskManagementMetrics(
            max_drawdown_percentage=max_drawdown / peak * 100 if peak > 0 else 0.0,
            large_loss_percentage=safe_percentage(large_losses, len(trades)),
            quantity_variability=quantity_variability,
            average_trade_duration_hours=average_duration,
            oversized_trades_percentage=safe_percentage(oversized, len(quantities)),
        )

    def risk_management_score(self, metrics: RiskManagementMetrics) -> float:
        drawdown = metrics.max_drawdown_percentage
        large_loss = metrics.large_loss_percentage
        variability = metrics.quantity_variability
        duration = metrics.average_trade_duration_hours

        if drawdown < 10 and large_loss < 10 and variability < 30 and duration > 12:
            score = lerp(9.0, 10.0, min(
                (10 - drawdown) / 10,
                (10 - large_loss) / 10,
                (30 - variability) / 30,
                (duration - 12) / 48,
            ))
        elif (
            10 <= drawdown <= 20 and 10 <= large_loss <= 20
            and 30 <= variability <= 50 and 6 <= duration <= 12
        ):
            score = lerp(7.0, 8.9, min(
                (20 - drawdown) / 10,
                (20 - large_loss) / 10,
                (50 - variability) / 20,
                (duration - 6) / 6,
            ))
        elif (
            20 <= drawdown <= 30 and 20 <= large_loss <= 30
            and 50 <= variability <= 70 and 1 <= duration <= 6
        ):
            score = lerp(5.0, 6.9, min(
                (30 - drawdown) / 10,
                (30 - large_loss) / 10,
                (70 - variability) / 20,
                duration / 6,
            ))
        elif (
            30 <= drawdown <= 40 and 30 <= large_loss <= 40
            and 70 <= variability <= 80 and duration < 1
        ):
            score = lerp(3.0, 4.9, min(
                (40 - drawdown) / 10,
                (40 - large_loss) / 10,
                (80 - variability) / 10,
                duration,
            ))
        else:
            score = lerp(1.0, 2.9, min(
                max(0.0, (50 - drawdown) / 50),
                max(0.0, (60 - large_loss) / 60),
            ))

        if metrics.oversized_trades_percentage > 10:
            score -= 1.0

        return clamp_score(score)

    # Consistency

    def consistency_metrics(self, trades: list[Trade]) -> ConsistencyMetrics:
        if not trades:
            return ConsistencyMetrics(0.0, 0, 0)

        pnls = [t.pnl_value for t in trades]
        avg_pnl = sum(pnls) / len(pnls)
        std_dev = population_std_dev(pnls)

        current_streak = 0
        longest_streak = 0
        for pnl in pnls:
            if pnl < 0:
                current_streak += 1
                longest_streak = max(longest_streak, current_streak)
            else:
                current_streak = 0

        positive_months = sum(1 for pl in _monthly_pl(trades).values() if pl > 0)

        return ConsistencyMetrics(
            pl_std_dev_percentage=std_dev / abs(avg_pnl) * 100 if avg_pnl != 0 else 0.0,
            longest_loss_streak=longest_streak,
            positive_months=positive_months,
        )

    def consistency_score(self, metrics: ConsistencyMetrics) -> float:
        std_pct = metrics.pl_std_dev_percentage
        streak = metrics.longest_loss_streak
        months = metrics.positive_months

        if std_pct < 5 and streak <= 3 and months > 5:
            score = 10.0
        elif 5 <= std_pct <= 10 and 4 <= streak <= 5 and 3 <= months <= 5:
            score = lerp(8.0, 9.9, min((10 - std_pct) / 5, 5 - streak, (months - 3) / 2))
        elif 10 <= std_pct <= 15 and 6 <= streak <= 7 and 2 <= months <= 3:
            score = lerp(6.0, 7.9, min((15 - std_pct) / 5, 7 - streak, months - 2))
        elif 15 <= std_pct <= 20 and 8 <= streak <= 10 and 1 <= months <= 2:
            score = lerp(4.0, 5.9, min((20 - std_pct) / 5, (10 - streak) / 2, months - 1))
        else:
            score = lerp(2.0, 3.9, min(
                max(0.0, (25 - std_pct) / 25),
                max(0.0, (10 - streak) / 10),
                max(0, months),
            ))

        return clamp_score(score)

    # Journaling adherence

    def journaling_adherence_metrics(self, trades: list[Trade]) -> JournalingAdherenceMetrics:
        if not trades:
            return JournalingAdherenceMetrics(0.0, 0.0, 0.0, 0.0)

        strategy_count = sum(1 for t in trades if t.strategy_text)
        notes_count = sum(1 for t in trades if t.notes_text)
        emotion_count = sum(1 for t in trades if not is_blank(t.emotional_state))

        strategy_usage = safe_percentage(strategy_count, len(trades))
        notes_usage = safe_percentage(notes_count, len(trades))
        emotion_usage = safe_percentage(emotion_count, len(trades))

        return JournalingAdherenceMetrics(
            completeness_percentage=(strategy_usage + notes_usage + emotion_usage) / 3,
            strategy_usage=strategy_usage,
            notes_usage=notes_usage,
            emotion_usage=emotion_usage,
        )

    def journaling_adherence_score(self, metrics: JournalingAdherenceMetrics) -> float:
        completeness = metrics.completeness_percentage

        if completeness > 95:
            score = 10.0
        elif completeness >= 80:
            score = lerp(8.0, 9.9, (completeness - 80) / 15)
        elif completeness >= 60:
            score = lerp(6.0, 7.9, (completeness - 60) / 20)
        elif completeness >= 40:
            score = lerp(4.0, 5.9, (completeness - 40) / 20)
        else:
            score = lerp(2.0, 3.9, completeness / 20)

        if metrics.emotion_usage >= 100:
            score += 0.5

        return clamp_score(score)


def _monthly_pl(trades: list[Trade]) -> dict[str, float]:
    """Net P&L per YYYY-MM; trades without a date are skipped."""
    monthly: dict[str, float] = defaultdict(float)
    for trade in trades:
        if not isinstance(trade.trade_date, date):
            continue
        monthly[f"{trade.trade_date.year}-{trade.trade_date.month:02d}"] += trade.pnl_value
    return dict(monthly)


def _to_datetime(value: datetime | str | None, trade_date: date | None) -> datetime | None:
    """Resolve an entry/exit timestamp; time-of-day strings use trade_date."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    if not isinstance(trade_date, date):
        return None
    try:
        return datetime.combine(trade_date, time.fromisoformat(value))
    except ValueError:
        return None


def _duration_hours(trade: Trade) -> float:
    entry = _to_datetime(trade.entry_time, trade.trade_date)
    exit_ = _to_datetime(trade.exit_time, trade.trade_date)
    if entry is None or exit_ is None:
        return 0.0
    try:
        return (exit_ - entry).total_seconds() / 3600
    except TypeError:
        # naive vs aware timestamps
        return 0.0
