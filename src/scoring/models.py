"""Data models for the rating system."""
from dataclasses import dataclass
from enum import Enum


class VRatingTier(str, Enum):
    """Qualitative tier for a composite rating."""

    ELITE = "Elite"
    ADVANCED = "Advanced"
    COMPETENT = "Competent"
    DEVELOPING = "Developing"
    STRUGGLING = "Struggling"
    CRITICAL = "Critical"

    @classmethod
    def from_score(cls, score: float) -> "VRatingTier":
        """Get the tier for an overall score.

        Args:
            score: Overall rating from 0-10.

        Returns:
            VRatingTier based on thresholds:
                - score >= 9.0 -> ELITE
                - score >= 7.5 -> ADVANCED
                - score >= 6.0 -> COMPETENT
                - score >= 4.5 -> DEVELOPING
                - score >= 3.0 -> STRUGGLING
                - score < 3.0 -> CRITICAL
        """
        if score >= 9.0:
            return cls.ELITE
        elif score >= 7.5:
            return cls.ADVANCED
        elif score >= 6.0:
            return cls.COMPETENT
        elif score >= 4.5:
            return cls.DEVELOPING
        elif score >= 3.0:
            return cls.STRUGGLING
        else:
            return cls.CRITICAL


class CategoryName(str, Enum):
    """The five rating categories, valued by their stable JSON names."""

    PROFITABILITY = "profitability"
    RISK_MANAGEMENT = "riskManagement"
    CONSISTENCY = "consistency"
    EMOTIONAL_DISCIPLINE = "emotionalDiscipline"
    JOURNALING_ADHERENCE = "journalingAdherence"


@dataclass(frozen=True)
class CategoryScores:
    """Per-category scores, each on a 0-10 scale."""

    profitability: float = 0.0
    risk_management: float = 0.0
    consistency: float = 0.0
    emotional_discipline: float = 0.0
    journaling_adherence: float = 0.0

    def by_name(self) -> dict[CategoryName, float]:
        return {
            CategoryName.PROFITABILITY: self.profitability,
            CategoryName.RISK_MANAGEMENT: self.risk_management,
            CategoryName.CONSISTENCY: self.consistency,
            CategoryName.EMOTIONAL_DISCIPLINE: self.emotional_discipline,
            CategoryName.JOURNALING_ADHERENCE: self.journaling_adherence,
        }


@dataclass(frozen=True)
class VRatingCategory:
    """One weighted category of the composite rating.

    Attributes:
        name: Category name.
        score: Category score (0-10).
        weight: Category weight (0-1].
        contribution: score * weight.
    """

    name: CategoryName
    score: float  # 0-10
    weight: float  # 0-1
    contribution: float

    def to_dict(self, precision: int = 2) -> dict:
        return {
            "name": self.name.value,
            "score": round(self.score, precision),
            "weight": self.weight,
            "contribution": round(self.contribution, precision),
        }


@dataclass(frozen=True)
class VRatingResult:
    """Composite rating for one trade history.

    Attributes:
        overall_score: Weighted composite score from 0-10.
        categories: The five weighted categories.
        tier: Qualitative tier of overall_score.
    """

    overall_score: float  # 0-10
    categories: tuple[VRatingCategory, ...]
    tier: VRatingTier

    def category(self, name: CategoryName) -> VRatingCategory:
        """Look up a category by name."""
        for category in self.categories:
            if category.name == name:
                return category
        raise KeyError(name)

    def to_dict(self, precision: int = 2) -> dict:
        """Render the stable JSON shape."""
        return {
            "overallScore": round(self.overall_score, precision),
            "categories": [c.to_dict(precision) for c in self.categories],
            "tier": self.tier.value,
        }


@dataclass(frozen=True)
class DisciplinePair:
    """Coupled discipline level and tilt control, each 0-100."""

    discipline_level: float
    tilt_control: float

    @property
    def deviation(self) -> float:
        return abs(self.discipline_level - self.tilt_control)

    @property
    def stability_index(self) -> float:
        """Psychological stability index: mean of the two scores."""
        return (self.discipline_level + self.tilt_control) / 2

    def to_dict(self, precision: int = 2) -> dict:
        return {
            "disciplineLevel": round(self.discipline_level, precision),
            "tiltControl": round(self.tilt_control, precision),
        }


@dataclass(frozen=True)
class ProfitabilityMetrics:
    """Inputs to the profitability category score."""

    net_pl_percentage: float
    win_rate: float  # 0-100
    total_profit: float
    total_loss: float
    positive_months_percentage: float  # 0-100
    monthly_pl: dict[str, float]


@dataclass(frozen=True)
class RiskManagementMetrics:
    """Inputs to the risk-management category score."""

    max_drawdown_percentage: float
    large_loss_percentage: float  # 0-100
    quantity_variability: float
    average_trade_duration_hours: float
    oversized_trades_percentage: float  # 0-100


@dataclass(frozen=True)
class ConsistencyMetrics:
    """Inputs to the consistency category score."""

    pl_std_dev_percentage: float
    longest_loss_streak: int
    positive_months: int


@dataclass(frozen=True)
class JournalingAdherenceMetrics:
    """Inputs to the journaling-adherence category score."""

    completeness_percentage: float  # 0-100
    strategy_usage: float  # 0-100
    notes_usage: float  # 0-100
    emotion_usage: float  # 0-100
