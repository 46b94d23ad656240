"""Rating engine composing statistics, emotions, coupling and the VRating."""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from src.config.settings import Settings
from src.journal.emotion_classifier import EmotionClassifier, EmotionTaxonomy
from src.journal.metrics_calculator import MetricsCalculator
from src.journal.models import EmotionMetrics, StatSnapshot, Trade
from src.scoring.category_scorer import CategoryScorer
from src.scoring.discipline_coupler import DisciplineCoupler
from src.scoring.models import (
    CategoryName,
    CategoryScores,
    DisciplinePair,
    VRatingResult,
)
from src.scoring.single_trade import SingleTradeRater
from src.scoring.vrating_aggregator import VRatingAggregator, describe_rating

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingReport:
    """Everything computed for one trade history."""

    stats: StatSnapshot
    emotion_metrics: EmotionMetrics
    discipline: DisciplinePair
    category_scores: CategoryScores
    vrating: VRatingResult
    description: str
    improvements: dict[CategoryName, list[str]]
    discipline_warnings: list[str]
    trade_count: int
    start_date: date | None
    end_date: date | None

    def to_dict(self, precision: int = 2) -> dict:
        return {
            "vrating": self.vrating.to_dict(precision),
            "description": self.description,
            "stats": self.stats.to_dict(precision),
            "emotionMetrics": self.emotion_metrics.to_dict(precision),
            "discipline": self.discipline.to_dict(precision),
            "improvements": {k.value: v for k, v in self.improvements.items()},
            "disciplineWarnings": list(self.discipline_warnings),
            "tradeCount": self.trade_count,
            "period": {
                "startDate": self.start_date.isoformat() if self.start_date else None,
                "endDate": self.end_date.isoformat() if self.end_date else None,
            },
        }


class RatingEngine:
    """Composes every rating component behind one interface.

    Coordinates MetricsCalculator, EmotionClassifier, DisciplineCoupler,
    CategoryScorer, VRatingAggregator and SingleTradeRater. Holds no
    per-request state, so one engine may serve any number of concurrent
    computations.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the engine with all components.

        Args:
            settings: Engine configuration. Defaults to the canonical settings.
        """
        self._settings = settings or Settings()
        self._metrics_calculator = MetricsCalculator()
        self._emotion_classifier = EmotionClassifier(EmotionTaxonomy(self._settings.emotions))
        self._discipline_coupler = DisciplineCoupler(self._settings.coupling)
        self._category_scorer = CategoryScorer(self._settings.categories)
        self._aggregator = VRatingAggregator(self._settings.vrating)
        self._single_trade_rater = SingleTradeRater(self._emotion_classifier.taxonomy)

    @property
    def settings(self) -> Settings:
        return self._settings

    def compute_stat_snapshot(self, pnls: Iterable[Any]) -> StatSnapshot:
        return self._metrics_calculator.calculate(pnls)

    def compute_emotion_metrics(self, trades: list[Trade]) -> EmotionMetrics:
        return self._emotion_classifier.classify(trades)

    def compute_discipline_pair(
        self, emotion_metrics: EmotionMetrics, total_trades: int
    ) -> DisciplinePair:
        return self._discipline_coupler.compute(emotion_metrics, total_trades)

    def compute_vrating(
        self, category_scores: CategoryScores | Mapping[str, Any]
    ) -> VRatingResult:
        return self._aggregator.aggregate(to_category_scores(category_scores))

    def rate_trade(self, trade: Trade) -> float:
        """Quick 0-10 rating of one trade on its own."""
        return self._single_trade_rater.rate(trade)

    def rate(self, trades: list[Trade]) -> RatingReport:
        """Run the full pipeline over one user's trades.

        Args:
            trades: Trades in chronological order. The order is used as given.

        Returns:
            RatingReport with the composite rating and all intermediate results.
        """
        trades = list(trades or [])

        stats = self.compute_stat_snapshot(t.pnl for t in trades)
        emotion_metrics = self.compute_emotion_metrics(trades)
        discipline = self.compute_discipline_pair(emotion_metrics, len(trades))
        discipline_warnings = self._discipline_coupler.check(discipline)
        category_scores = self._category_scorer.score_all(trades, emotion_metrics)
        vrating = self._aggregator.aggregate(category_scores)

        dates = [_as_date(t.trade_date) for t in trades if isinstance(t.trade_date, date)]

        logger.info(
            f"Rated {len(trades)} trades: VRating {vrating.overall_score:.2f} "
            f"({vrating.tier.value})"
        )

        return RatingReport(
            stats=stats,
            emotion_metrics=emotion_metrics,
            discipline=discipline,
            category_scores=category_scores,
            vrating=vrating,
            description=describe_rating(vrating.overall_score),
            improvements=self._aggregator.improvement_suggestions(category_scores)
            if trades
            else {},
            discipline_warnings=discipline_warnings,
            trade_count=len(trades),
            start_date=min(dates) if dates else None,
            end_date=max(dates) if dates else None,
        )


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def to_category_scores(scores: CategoryScores | Mapping[str, Any]) -> CategoryScores:
    """Accept CategoryScores or a mapping keyed by JSON or snake_case names.

    Missing categories score 0.
    """
    if isinstance(scores, CategoryScores):
        return scores
    if not isinstance(scores, Mapping):
        return CategoryScores()

    def pick(name: CategoryName, snake: str) -> Any:
        if name.value in scores:
            return scores[name.value]
        return scores.get(snake, 0.0)

    return CategoryScores(
        profitability=pick(CategoryName.PROFITABILITY, "profitability"),
        risk_management=pick(CategoryName.RISK_MANAGEMENT, "risk_management"),
        consistency=pick(CategoryName.CONSISTENCY, "consistency"),
        emotional_discipline=pick(CategoryName.EMOTIONAL_DISCIPLINE, "emotional_discipline"),
        journaling_adherence=pick(CategoryName.JOURNALING_ADHERENCE, "journaling_adherence"),
    )


def compute_stat_snapshot(pnls: Iterable[Any], settings: Settings | None = None) -> StatSnapshot:
    """Core trade statistics for a chronological P&L sequence."""
    return RatingEngine(settings).compute_stat_snapshot(pnls)


def compute_emotion_metrics(trades: list[Trade], settings: Settings | None = None) -> EmotionMetrics:
    """Emotional-discipline metrics for a trade list."""
    return RatingEngine(settings).compute_emotion_metrics(trades)


def compute_discipline_pair(
    emotion_metrics: EmotionMetrics,
    total_trades: int,
    settings: Settings | None = None,
) -> DisciplinePair:
    """Coupled discipline level and tilt control."""
    return RatingEngine(settings).compute_discipline_pair(emotion_metrics, total_trades)


def compute_vrating(
    category_scores: CategoryScores | Mapping[str, Any],
    settings: Settings | None = None,
) -> VRatingResult:
    """Composite VRating from five category scores."""
    return RatingEngine(settings).compute_vrating(category_scores)


def rate_trade(trade: Trade, settings: Settings | None = None) -> float:
    """Quick 0-10 rating of a single trade."""
    return RatingEngine(settings).rate_trade(trade)
