# src/journal/__init__.py
"""Journal module for trade history, statistics and emotion metrics."""

from .emotion_classifier import EmotionCategory, EmotionClassifier, EmotionTaxonomy
from .emotion_parser import parse_emotional_state
from .metrics_calculator import MetricsCalculator
from .models import EmotionMetrics, ParsedEmotionalState, StatSnapshot, Trade, coerce_pnl
from .settings import EmotionTaxonomySettings, JournalSettings
from .trade_store import TradeStore, trade_from_dict

__all__ = [
    "EmotionCategory",
    "EmotionClassifier",
    "EmotionMetrics",
    "EmotionTaxonomy",
    "EmotionTaxonomySettings",
    "JournalSettings",
    "MetricsCalculator",
    "ParsedEmotionalState",
    "StatSnapshot",
    "Trade",
    "TradeStore",
    "coerce_pnl",
    "parse_emotional_state",
    "trade_from_dict",
]
