"""Quick rating of one trade in isolation."""
import logging

from src.journal.emotion_classifier import EmotionCategory, EmotionTaxonomy
from src.journal.emotion_parser import is_blank, parse_emotional_state
from src.journal.models import Trade
from src.scoring.banding import clamp_score

logger = logging.getLogger(__name__)


class SingleTradeRater:
    """Rates a single trade on a 0-10 scale.

    With only one trade there is no history to band, so the rating starts at
    a neutral base and is adjusted by:
        - P&L: winners add pnl / 10 (at most 2.0), losers lose |pnl| / 5
          (at most 3.0)
        - primary emotion: +0.5 when positive, -0.5 when negative
        - journaling: +0.3 strategy, +0.3 notes, +0.4 emotional state
    """

    BASE_SCORE = 5.0
    MAX_WIN_CREDIT = 2.0
    WIN_DIVISOR = 10.0
    MAX_LOSS_PENALTY = 3.0
    LOSS_DIVISOR = 5.0
    EMOTION_ADJUSTMENT = 0.5
    STRATEGY_CREDIT = 0.3
    NOTES_CREDIT = 0.3
    EMOTION_CREDIT = 0.4

    def __init__(self, taxonomy: EmotionTaxonomy | None = None) -> None:
        """Initialize the rater.

        Args:
            taxonomy: Emotion vocabulary used to judge the primary emotion.
        """
        self._taxonomy = taxonomy or EmotionTaxonomy()

    def rate(self, trade: Trade) -> float:
        """Rate one trade.

        Args:
            trade: The trade to rate. Malformed fields count as missing.

        Returns:
            Rating from 0-10, rounded to two decimals.
        """
        score = self.BASE_SCORE

        pnl = trade.pnl_value
        if pnl > 0:
            score += min(self.MAX_WIN_CREDIT, pnl / self.WIN_DIVISOR)
        elif pnl < 0:
            score -= min(self.MAX_LOSS_PENALTY, abs(pnl) / self.LOSS_DIVISOR)

        parsed = parse_emotional_state(trade.emotional_state)
        if parsed is not None:
            category = self._taxonomy.category_of(parsed.primary_emotion)
            if category == EmotionCategory.POSITIVE:
                score += self.EMOTION_ADJUSTMENT
            elif category == EmotionCategory.NEGATIVE:
                score -= self.EMOTION_ADJUSTMENT

        if trade.strategy_text:
            score += self.STRATEGY_CREDIT
        if trade.notes_text:
            score += self.NOTES_CREDIT
        if not is_blank(trade.emotional_state):
            score += self.EMOTION_CREDIT

        rating = clamp_score(round(score, 2))
        logger.debug(f"Single trade rating {rating:.2f} (pnl={pnl})")
        return rating
