# tests/scoring/test_discipline_coupler.py
"""Tests for DisciplineCoupler."""
import itertools

import pytest

from src.journal.models import EmotionMetrics
from src.scoring.discipline_coupler import DisciplineCoupler
from src.scoring.models import DisciplinePair
from src.scoring.settings import CouplingSettings


def make_metrics(positive: int = 0, neutral: int = 0, negative: int = 0, unknown: int = 0) -> EmotionMetrics:
    """Create emotion metrics with the given bucket counts."""
    return EmotionMetrics(
        positive_count=positive,
        neutral_count=neutral,
        negative_count=negative,
        total_emotions=positive + neutral + negative + unknown,
    )


class TestSentimentIndex:
    """Tests for the emotional sentiment and stability indices."""

    def test_sentiment_index_normalised_by_trades(self) -> None:
        """ESI should use percentages of the trade count."""
        coupler = DisciplineCoupler()

        esi = coupler.emotional_sentiment_index(make_metrics(1, 1, 1), total_trades=4)

        # 25 * 2.0 + 25 * 1.0 - 25 * 1.5
        assert esi == pytest.approx(37.5)

    def test_stability_index_is_clamped(self) -> None:
        """PSI should stay within [0, 100]."""
        coupler = DisciplineCoupler()

        assert coupler.stability_index(make_metrics(positive=4), 4) == 100.0
        assert coupler.stability_index(make_metrics(negative=3), 3) == 0.0
        assert coupler.stability_index(make_metrics(1, 1, 1), 4) == pytest.approx(68.75)

    def test_sentiment_index_without_trades(self) -> None:
        """ESI should be 0 without trades."""
        coupler = DisciplineCoupler()

        assert coupler.emotional_sentiment_index(make_metrics(positive=2), 0) == 0.0


class TestCompute:
    """Tests for DisciplineCoupler.compute."""

    def test_all_positive_emotions(self) -> None:
        """Fully positive logging should max out both scores."""
        coupler = DisciplineCoupler()

        pair = coupler.compute(make_metrics(positive=4), total_trades=4)

        assert pair == DisciplinePair(discipline_level=100.0, tilt_control=100.0)

    def test_all_negative_emotions(self) -> None:
        """Fully negative logging should floor both scores."""
        coupler = DisciplineCoupler()

        pair = coupler.compute(make_metrics(negative=3), total_trades=3)

        assert pair == DisciplinePair(discipline_level=0.0, tilt_control=0.0)

    def test_mixed_emotions_are_amplified(self) -> None:
        """A mid-range PSI should be pulled toward 100 by the coupling factor."""
        coupler = DisciplineCoupler()

        pair = coupler.compute(make_metrics(1, 1, 1), total_trades=4)

        expected = 68.75 + 68.75 * 0.6 * (1 - 0.6875)
        assert pair.discipline_level == pytest.approx(expected)
        assert pair.tilt_control == pytest.approx(expected)

    def test_neutral_default_without_trades(self) -> None:
        """No trades should give the neutral default."""
        coupler = DisciplineCoupler()

        pair = coupler.compute(make_metrics(), total_trades=0)

        assert pair == DisciplinePair(50.0, 50.0)

    def test_neutral_default_without_emotions(self) -> None:
        """Trades with no logged emotions should give the neutral default."""
        coupler = DisciplineCoupler()

        pair = coupler.compute(make_metrics(), total_trades=10)

        assert pair == DisciplinePair(50.0, 50.0)

    def test_unrecognized_emotions_only(self) -> None:
        """Only unrecognised tags should leave PSI at its midpoint."""
        coupler = DisciplineCoupler()

        pair = coupler.compute(make_metrics(unknown=2), total_trades=2)

        assert pair.discipline_level == pytest.approx(50 + 50 * 0.6 * 0.5)

    def test_custom_neutral_default(self) -> None:
        """neutral_default should be configurable."""
        coupler = DisciplineCoupler(CouplingSettings(neutral_default=40.0))

        assert coupler.compute(make_metrics(), 0) == DisciplinePair(40.0, 40.0)


class TestReconcile:
    """Tests for DisciplineCoupler.reconcile."""

    def test_raises_lower_tilt_control(self) -> None:
        """A gap beyond max_deviation should raise the lower score."""
        coupler = DisciplineCoupler()

        pair = coupler.reconcile(90.0, 40.0)

        assert pair == DisciplinePair(discipline_level=90.0, tilt_control=60.0)

    def test_raises_lower_discipline_level(self) -> None:
        """Reconciliation should be symmetric."""
        coupler = DisciplineCoupler()

        pair = coupler.reconcile(40.0, 90.0)

        assert pair == DisciplinePair(discipline_level=60.0, tilt_control=90.0)

    def test_small_gap_untouched(self) -> None:
        """A gap within max_deviation should be kept."""
        coupler = DisciplineCoupler()

        assert coupler.reconcile(70.0, 45.0) == DisciplinePair(70.0, 45.0)

    def test_out_of_range_inputs_are_clamped(self) -> None:
        """Inputs outside [0, 100] should be clamped before reconciling."""
        coupler = DisciplineCoupler()

        pair = coupler.reconcile(150.0, -20.0)

        assert pair == DisciplinePair(100.0, 70.0)

    def test_non_finite_inputs_use_neutral(self) -> None:
        """NaN inputs should fall back to the neutral default."""
        coupler = DisciplineCoupler()

        pair = coupler.reconcile(float("nan"), 50.0)

        assert pair == DisciplinePair(50.0, 50.0)

    def test_invariants_hold_over_grid(self) -> None:
        """Every reconciled pair should be in range and within max_deviation."""
        coupler = DisciplineCoupler()
        values = [-50.0, 0.0, 10.0, 29.9, 30.0, 45.5, 70.0, 99.9, 100.0, 250.0]

        for discipline, tilt in itertools.product(values, repeat=2):
            pair = coupler.reconcile(discipline, tilt)

            assert 0.0 <= pair.discipline_level <= 100.0
            assert 0.0 <= pair.tilt_control <= 100.0
            assert pair.deviation <= 30.0 + 1e-9

    def test_custom_max_deviation(self) -> None:
        """max_deviation should be configurable."""
        coupler = DisciplineCoupler(CouplingSettings(max_deviation=10.0))

        assert coupler.reconcile(80.0, 20.0) == DisciplinePair(80.0, 70.0)


class TestCheck:
    """Tests for DisciplineCoupler.check."""

    def test_consistent_pair(self) -> None:
        """A consistent pair should produce no warnings."""
        coupler = DisciplineCoupler()

        assert coupler.check(DisciplinePair(70.0, 65.0)) == []

    def test_impossible_state(self) -> None:
        """Extreme divergence should report deviation and an impossible state."""
        coupler = DisciplineCoupler()

        warnings = coupler.check(DisciplinePair(95.0, 5.0))

        assert len(warnings) == 2
        assert "Large deviation" in warnings[0]
        assert "very high discipline with very low tilt control" in warnings[1]

    def test_reverse_impossible_state(self) -> None:
        """Very low discipline with very high tilt control is also impossible."""
        coupler = DisciplineCoupler()

        warnings = coupler.check(DisciplinePair(5.0, 95.0))

        assert any("very low discipline" in w for w in warnings)

    def test_low_stability(self) -> None:
        """A stability index below the minimum should be reported."""
        coupler = DisciplineCoupler()

        warnings = coupler.check(DisciplinePair(10.0, 10.0))

        assert len(warnings) == 1
        assert "stability index" in warnings[0]


class TestDisciplinePair:
    """Tests for DisciplinePair."""

    def test_derived_values(self) -> None:
        """deviation and stability_index should derive from the two scores."""
        pair = DisciplinePair(80.0, 60.0)

        assert pair.deviation == 20.0
        assert pair.stability_index == 70.0
        assert pair.to_dict() == {"disciplineLevel": 80.0, "tiltControl": 60.0}
