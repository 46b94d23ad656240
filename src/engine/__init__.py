"""Engine module exposing the rating pipeline."""

from .rating_engine import (
    RatingEngine,
    RatingReport,
    compute_discipline_pair,
    compute_emotion_metrics,
    compute_stat_snapshot,
    compute_vrating,
    rate_trade,
    to_category_scores,
)

__all__ = [
    "RatingEngine",
    "RatingReport",
    "compute_discipline_pair",
    "compute_emotion_metrics",
    "compute_stat_snapshot",
    "compute_vrating",
    "rate_trade",
    "to_category_scores",
]
