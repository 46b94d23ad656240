"""Coupler producing consistent discipline and tilt-control scores."""
import logging
import math

from src.journal.models import EmotionMetrics
from src.scoring.models import DisciplinePair
from src.scoring.settings import CouplingSettings

logger = logging.getLogger(__name__)


class DisciplineCoupler:
    """Converts emotion metrics into a coupled discipline / tilt-control pair.

    Both scores derive from one psychological stability index (PSI), so they
    start equal. Any later divergence is reconciled here: the two may never
    differ by more than max_deviation.

    Coupling:
        ESI = positive% * 2.0 + neutral% * 1.0 - negative% * 1.5
            (percentages of the total trade count)
        PSI = clamp((ESI + 100) / 2, 0, 100)
        score = clamp(PSI + PSI * coupling_factor * (1 - PSI / 100), 0, 100)
    """

    def __init__(self, settings: CouplingSettings | None = None) -> None:
        """Initialize the coupler.

        Args:
            settings: Coupling factor, deviation limit and ESI multipliers.
        """
        self._settings = settings or CouplingSettings()

    def emotional_sentiment_index(
        self, metrics: EmotionMetrics, total_trades: int
    ) -> float:
        """Signed sentiment index normalised by trade count.

        Dividing by trades rather than by logged emotions penalises sparse
        logging.
        """
        if total_trades <= 0:
            return 0.0

        positive_pct = metrics.positive_count / total_trades * 100
        neutral_pct = metrics.neutral_count / total_trades * 100
        negative_pct = metrics.negative_count / total_trades * 100

        return (
            positive_pct * self._settings.positive_multiplier
            + neutral_pct * self._settings.neutral_multiplier
            - negative_pct * self._settings.negative_multiplier
        )

    def stability_index(self, metrics: EmotionMetrics, total_trades: int) -> float:
        """PSI on a 0-100 scale."""
        esi = self.emotional_sentiment_index(metrics, total_trades)
        return _clamp((esi + 100) / 2, 0.0, 100.0)

    def compute(self, metrics: EmotionMetrics, total_trades: int) -> DisciplinePair:
        """Compute the coupled discipline pair.

        Args:
            metrics: Emotion metrics of the trade list.
            total_trades: Number of trades the metrics were computed over.

        Returns:
            DisciplinePair, or the neutral default for both values when there
            are no trades or no logged emotions.
        """
        if total_trades <= 0 or metrics.total_emotions <= 0:
            neutral = self._settings.neutral_default
            return DisciplinePair(discipline_level=neutral, tilt_control=neutral)

        psi = self.stability_index(metrics, total_trades)

        discipline_level = self._amplify(psi)
        tilt_control = self._amplify(psi)

        logger.debug(
            f"Coupling PSI={psi:.2f} -> discipline={discipline_level:.2f} "
            f"tilt_control={tilt_control:.2f}"
        )
        return self.reconcile(discipline_level, tilt_control)

    def reconcile(self, discipline_level: float, tilt_control: float) -> DisciplinePair:
        """Enforce the maximum deviation between the two scores.

        When the gap exceeds max_deviation, the lower score is moved to
        within max_deviation of the higher one; the higher score is kept.

        Args:
            discipline_level: Discipline level, any value.
            tilt_control: Tilt control, any value.

        Returns:
            DisciplinePair within [0, 100] and within max_deviation.
        """
        neutral = self._settings.neutral_default
        discipline_level = _clamp(_finite_or(discipline_level, neutral), 0.0, 100.0)
        tilt_control = _clamp(_finite_or(tilt_control, neutral), 0.0, 100.0)
        max_deviation = self._settings.max_deviation

        if abs(discipline_level - tilt_control) > max_deviation:
            logger.info(
                f"Reconciling discipline={discipline_level:.2f} "
                f"tilt_control={tilt_control:.2f} (max deviation {max_deviation})"
            )
            if discipline_level > tilt_control:
                tilt_control = discipline_level - max_deviation
            else:
                discipline_level = tilt_control - max_deviation

        return DisciplinePair(
            discipline_level=_clamp(discipline_level, 0.0, 100.0),
            tilt_control=_clamp(tilt_control, 0.0, 100.0),
        )

    def check(self, pair: DisciplinePair) -> list[str]:
        """Report consistency problems in a discipline pair.

        Args:
            pair: Pair to inspect.

        Returns:
            Human-readable warnings; empty when the pair is consistent.
        """
        warnings: list[str] = []
        max_deviation = self._settings.max_deviation

        if pair.deviation > max_deviation:
            warnings.append(
                f"Large deviation ({pair.deviation:.1f}%) between discipline level "
                f"and tilt control. Maximum allowed: {max_deviation}%"
            )

        if pair.discipline_level > 90 and pair.tilt_control < 10:
            warnings.append(
                "Impossible psychological state: very high discipline with very low tilt control"
            )
        if pair.discipline_level < 10 and pair.tilt_control > 90:
            warnings.append(
                "Impossible psychological state: very low discipline with very high tilt control"
            )

        if pair.stability_index < self._settings.min_stability_index:
            warnings.append(
                f"Psychological stability index ({pair.stability_index:.1f}%) is below "
                f"minimum threshold ({self._settings.min_stability_index}%)"
            )

        for warning in warnings:
            logger.warning(warning)

        return warnings

    def _amplify(self, base: float) -> float:
        adjustment = base * self._settings.coupling_factor * (1 - base / 100)
        return _clamp(base + adjustment, 0.0, 100.0)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _finite_or(value: float, default: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return default
    return value if math.isfinite(value) else default
