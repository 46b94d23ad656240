"""Aggregator combining category scores into the composite VRating."""
import logging
from typing import Any

from src.scoring.banding import clamp_score
from src.scoring.models import (
    CategoryName,
    CategoryScores,
    VRatingCategory,
    VRatingResult,
    VRatingTier,
)
from src.scoring.settings import VRatingSettings

logger = logging.getLogger(__name__)


RATING_DESCRIPTIONS: list[tuple[float, str]] = [
    (9.0, "Exceptional - Elite trading performance"),
    (8.0, "Excellent - Superior trading skills"),
    (7.0, "Very Good - Above average performance"),
    (6.0, "Good - Competent trading"),
    (5.0, "Average - Room for improvement"),
    (4.0, "Below Average - Needs significant work"),
    (3.0, "Poor - Major improvements needed"),
    (2.0, "Very Poor - Fundamental issues"),
]

IMPROVEMENT_SUGGESTIONS: dict[CategoryName, list[str]] = {
    CategoryName.PROFITABILITY: [
        "Focus on improving win rate through better entry/exit strategies",
        "Consider reducing position size to minimize losses",
        "Review losing trades to identify common patterns",
        "Implement stricter risk-reward ratios",
    ],
    CategoryName.RISK_MANAGEMENT: [
        "Implement stop-loss orders consistently",
        "Reduce position size variability",
        "Avoid oversized trades (>2x average)",
        "Consider longer holding periods for better risk management",
    ],
    CategoryName.CONSISTENCY: [
        "Focus on reducing P&L volatility",
        "Work on shorter loss streaks",
        "Improve monthly consistency with more positive months",
    ],
    CategoryName.EMOTIONAL_DISCIPLINE: [
        "Focus on reducing negative emotional impact on trades",
        "Take breaks after emotional trades",
        "Develop pre-trade emotional checklist",
        "Work on improving emotional correlation with winning trades",
    ],
    CategoryName.JOURNALING_ADHERENCE: [
        "Use journaling templates for consistency",
        "Focus on complete emotional logging",
        "Review journal entries weekly for insights",
        "Improve strategy usage documentation",
    ],
}


class VRatingAggregator:
    """Combines five category scores into one weighted 0-10 rating.

    Default weights:
        - Profitability: 0.30
        - Risk management: 0.25
        - Consistency: 0.20
        - Emotional discipline: 0.15
        - Journaling adherence: 0.10
    """

    def __init__(self, settings: VRatingSettings | None = None) -> None:
        """Initialize the aggregator.

        Args:
            settings: Category weights and improvement threshold.
        """
        self._settings = settings or VRatingSettings()

    @property
    def weights(self) -> dict[CategoryName, float]:
        return {
            CategoryName.PROFITABILITY: self._settings.profitability_weight,
            CategoryName.RISK_MANAGEMENT: self._settings.risk_management_weight,
            CategoryName.CONSISTENCY: self._settings.consistency_weight,
            CategoryName.EMOTIONAL_DISCIPLINE: self._settings.emotional_discipline_weight,
            CategoryName.JOURNALING_ADHERENCE: self._settings.journaling_adherence_weight,
        }

    def aggregate(self, scores: CategoryScores) -> VRatingResult:
        """Calculate the composite rating.

        Args:
            scores: Category scores. Each is clamped to [0, 10]; non-finite
                scores count as 0.

        Returns:
            VRatingResult with overall_score = sum(score * weight).
        """
        weights = self.weights
        categories = []
        for name, raw_score in scores.by_name().items():
            score = clamp_score(_as_float(raw_score))
            weight = weights[name]
            categories.append(
                VRatingCategory(
                    name=name,
                    score=score,
                    weight=weight,
                    contribution=score * weight,
                )
            )

        overall_score = clamp_score(sum(c.contribution for c in categories))
        tier = VRatingTier.from_score(overall_score)

        logger.debug(f"VRating {overall_score:.2f} ({tier.value})")
        return VRatingResult(
            overall_score=overall_score,
            categories=tuple(categories),
            tier=tier,
        )

    def improvement_suggestions(self, scores: CategoryScores) -> dict[CategoryName, list[str]]:
        """Suggestions for every category scoring below the threshold."""
        threshold = self._settings.improvement_threshold
        return {
            name: list(IMPROVEMENT_SUGGESTIONS[name])
            for name, score in scores.by_name().items()
            if clamp_score(_as_float(score)) < threshold
        }


def describe_rating(rating: float) -> str:
    """Human-readable description of an overall rating."""
    for threshold, description in RATING_DESCRIPTIONS:
        if rating >= threshold:
            return description
    return "Critical - Complete review required"


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
