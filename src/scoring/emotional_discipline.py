"""Banded scorer for the emotional-discipline rating category."""
import logging

from src.journal.models import EmotionMetrics, coerce_pnl
from src.scoring.banding import clamp_score, lerp

logger = logging.getLogger(__name__)


class EmotionalDisciplineScorer:
    """Scores emotional discipline on a 0-10 scale.

    Bands (positive %, negative impact %):
        - > 80 and < 15: 10.0
        - 65-80 and 15-25: 8.5-9.9
        - 50-65 and 25-40: 7.0-8.4
        - 35-50 and 40-55: 5.5-6.9
        - anything else: 4.0-5.4

    Bonuses:
        - +1.0 if win correlation > 70, else +0.5 if > 60
        - +1.0 if logging completeness > 95
        - +0.5 if total P&L is positive and the running score is below 8.0
    """

    EXCELLENT_CORRELATION = 70.0
    GOOD_CORRELATION = 60.0
    COMPLETE_LOGGING = 95.0
    PROFITABILITY_CREDIT_CEILING = 8.0

    def score(self, metrics: EmotionMetrics, total_pnl: float = 0.0) -> float:
        """Calculate the emotional-discipline category score.

        Args:
            metrics: Emotion metrics of the trade list.
            total_pnl: Net P&L of the same trades.

        Returns:
            Score from 0-10.
        """
        positive = metrics.positive_pct
        negative = metrics.negative_impact_pct

        if positive > 80 and negative < 15:
            score = 10.0
            band = 1
        elif 65 <= positive <= 80 and 15 <= negative <= 25:
            score = lerp(8.5, 9.9, min((positive - 65) / 15, (25 - negative) / 10))
            band = 2
        elif 50 <= positive <= 65 and 25 <= negative <= 40:
            score = lerp(7.0, 8.4, min((positive - 50) / 15, (40 - negative) / 15))
            band = 3
        elif 35 <= positive <= 50 and 40 <= negative <= 55:
            score = lerp(5.5, 6.9, min((positive - 35) / 15, (55 - negative) / 15))
            band = 4
        else:
            score = lerp(4.0, 5.4, min(positive / 8, max(0.0, (60 - negative) / 60)))
            band = 5

        if metrics.win_correlation_pct > self.EXCELLENT_CORRELATION:
            score += 1.0
        elif metrics.win_correlation_pct > self.GOOD_CORRELATION:
            score += 0.5

        if metrics.logging_completeness_pct > self.COMPLETE_LOGGING:
            score += 1.0

        if coerce_pnl(total_pnl) > 0 and score < self.PROFITABILITY_CREDIT_CEILING:
            score += 0.5

        final_score = clamp_score(score)
        logger.debug(f"Emotional discipline band {band}, score {final_score:.2f}")
        return final_score
