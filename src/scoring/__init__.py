"""Scoring module for the composite VRating."""

from .models import (
    CategoryName,
    CategoryScores,
    DisciplinePair,
    VRatingCategory,
    VRatingResult,
    VRatingTier,
)
from .settings import CategoryScoringSettings, CouplingSettings, VRatingSettings
from .discipline_coupler import DisciplineCoupler
from .emotional_discipline import EmotionalDisciplineScorer
from .category_scorer import CategoryScorer
from .single_trade import SingleTradeRater
from .vrating_aggregator import VRatingAggregator, describe_rating

__all__ = [
    "CategoryName",
    "CategoryScorer",
    "CategoryScores",
    "CategoryScoringSettings",
    "CouplingSettings",
    "DisciplineCoupler",
    "DisciplinePair",
    "EmotionalDisciplineScorer",
    "SingleTradeRater",
    "VRatingAggregator",
    "VRatingCategory",
    "VRatingResult",
    "VRatingSettings",
    "VRatingTier",
    "describe_rating",
]
