"""Classifier turning emotion tags into emotional-discipline metrics."""
import logging
from collections import Counter
from enum import Enum

from src.journal.emotion_parser import is_blank, normalize_tag, parse_emotional_state
from src.journal.models import EmotionMetrics, Trade
from src.journal.settings import EmotionTaxonomySettings

logger = logging.getLogger(__name__)


class EmotionCategory(str, Enum):
    """Bucket an emotion tag belongs to."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    NORMAL_TRADING = "normal_trading"


class EmotionTaxonomy:
    """Lookup from tag to category and positive-bucket weight.

    Negative tags carry no positive weight; they are tracked separately.
    """

    def __init__(self, settings: EmotionTaxonomySettings | None = None) -> None:
        """Initialize the taxonomy.

        Args:
            settings: Emotion vocabulary and weights. Defaults to the
                canonical taxonomy.
        """
        self._settings = settings or EmotionTaxonomySettings()
        self._categories: dict[str, EmotionCategory] = {}
        for tag in self._settings.positive:
            self._categories[tag] = EmotionCategory.POSITIVE
        for tag in self._settings.negative:
            self._categories[tag] = EmotionCategory.NEGATIVE
        for tag in self._settings.neutral:
            self._categories[tag] = EmotionCategory.NEUTRAL
        for tag in self._settings.normal_trading:
            self._categories[tag] = EmotionCategory.NORMAL_TRADING

        self._weights = {
            EmotionCategory.POSITIVE: self._settings.positive_weight,
            EmotionCategory.NEUTRAL: self._settings.neutral_weight,
            EmotionCategory.NORMAL_TRADING: self._settings.normal_trading_weight,
            EmotionCategory.NEGATIVE: 0.0,
        }

    def category_of(self, tag: str | None) -> EmotionCategory | None:
        """Return the category of a tag, or None when unrecognised."""
        normalized = normalize_tag(tag)
        if normalized is None:
            return None
        return self._categories.get(normalized)

    def positive_weight(self, category: EmotionCategory) -> float:
        """Weight a tag of this category contributes to the positive bucket."""
        return self._weights[category]


class EmotionClassifier:
    """Computes EmotionMetrics from the emotion tags of a trade list."""

    def __init__(self, taxonomy: EmotionTaxonomy | None = None) -> None:
        self._taxonomy = taxonomy or EmotionTaxonomy()

    @property
    def taxonomy(self) -> EmotionTaxonomy:
        return self._taxonomy

    def classify(self, trades: list[Trade]) -> EmotionMetrics:
        """Classify the emotion tags of every trade.

        Primary and secondary tags count independently. Every non-null tag
        counts toward the total; an emotional_state that cannot be parsed
        counts once toward the total and nowhere else.

        Args:
            trades: Trades to classify, in any order.

        Returns:
            EmotionMetrics with all percentages in [0, 100].
        """
        if not trades:
            return EmotionMetrics()

        total_emotions = 0
        weighted_positive = 0.0
        weighted_positive_wins = 0.0
        negative_count = 0
        negative_losses = 0
        trades_with_recognized = 0
        counts: Counter[EmotionCategory] = Counter()
        frequencies: Counter[str] = Counter()

        for trade in trades:
            parsed = parse_emotional_state(trade.emotional_state)
            if parsed is None:
                if not is_blank(trade.emotional_state):
                    total_emotions += 1
                continue

            recognized = False
            for tag in parsed.tags:
                total_emotions += 1
                category = self._taxonomy.category_of(tag)
                if category is None:
                    continue

                recognized = True
                counts[category] += 1
                frequencies[tag] += 1

                if category == EmotionCategory.NEGATIVE:
                    negative_count += 1
                    if trade.is_loser:
                        negative_losses += 1
                    continue

                weight = self._taxonomy.positive_weight(category)
                weighted_positive += weight
                if trade.is_winner:
                    weighted_positive_wins += weight

            if recognized:
                trades_with_recognized += 1

        metrics = EmotionMetrics(
            positive_pct=_percentage(weighted_positive, total_emotions),
            negative_impact_pct=_percentage(negative_losses, negative_count),
            win_correlation_pct=_percentage(weighted_positive_wins, weighted_positive),
            logging_completeness_pct=_percentage(trades_with_recognized, len(trades)),
            positive_count=counts[EmotionCategory.POSITIVE],
            neutral_count=counts[EmotionCategory.NEUTRAL],
            normal_trading_count=counts[EmotionCategory.NORMAL_TRADING],
            negative_count=negative_count,
            total_emotions=total_emotions,
            total_trades=len(trades),
            frequencies=dict(sorted(frequencies.items())),
        )

        logger.debug(
            f"Classified {total_emotions} emotions across {len(trades)} trades: "
            f"positive={metrics.positive_pct:.2f}% "
            f"negative_impact={metrics.negative_impact_pct:.2f}%"
        )
        return metrics

    def frequencies(self, trades: list[Trade]) -> dict[str, int]:
        """Count occurrences of each recognised tag, sorted by tag name."""
        return self.classify(trades).frequencies


def _percentage(value: float, total: float) -> float:
    """value / total * 100, 0 when total is 0, clamped to [0, 100]."""
    if total <= 0:
        return 0.0
    return max(0.0, min(100.0, value / total * 100))
