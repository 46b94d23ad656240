"""Settings for the scoring module."""
from pydantic import BaseModel, ConfigDict, Field, model_validator


class CouplingSettings(BaseModel):
    """Settings for the discipline / tilt-control coupling.

    Attributes:
        coupling_factor: Strength of the pull of each base score toward 100.
        max_deviation: Largest allowed gap between the two scores.
        min_stability_index: Stability index below which a warning is raised.
        neutral_default: Score used for both values when nothing was logged.
        positive_multiplier: ESI multiplier for positive emotions.
        neutral_multiplier: ESI multiplier for neutral emotions.
        negative_multiplier: ESI penalty multiplier for negative emotions.
    """

    model_config = ConfigDict(frozen=True)

    coupling_factor: float = Field(default=0.6, ge=0, le=1)
    max_deviation: float = Field(default=30.0, ge=0, le=100)
    min_stability_index: float = Field(default=20.0, ge=0, le=100)
    neutral_default: float = Field(default=50.0, ge=0, le=100)

    positive_multiplier: float = Field(default=2.0, ge=0)
    neutral_multiplier: float = Field(default=1.0, ge=0)
    negative_multiplier: float = Field(default=1.5, ge=0)


class VRatingSettings(BaseModel):
    """Category weights for the composite rating."""

    model_config = ConfigDict(frozen=True)

    profitability_weight: float = Field(default=0.30, gt=0, le=1)
    risk_management_weight: float = Field(default=0.25, gt=0, le=1)
    consistency_weight: float = Field(default=0.20, gt=0, le=1)
    emotional_discipline_weight: float = Field(default=0.15, gt=0, le=1)
    journaling_adherence_weight: float = Field(default=0.10, gt=0, le=1)

    # Categories scoring below this get improvement suggestions
    improvement_threshold: float = Field(default=6.0, ge=0, le=10)

    @model_validator(mode="after")
    def check_weights_sum(self) -> "VRatingSettings":
        """Category weights must sum to 1.0."""
        total = (
            self.profitability_weight
            + self.risk_management_weight
            + self.consistency_weight
            + self.emotional_discipline_weight
            + self.journaling_adherence_weight
        )
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Category weights must sum to 1.0, got {total}")
        return self


class CategoryScoringSettings(BaseModel):
    """Thresholds used when category scores are derived from trades."""

    model_config = ConfigDict(frozen=True)

    large_loss_threshold: float = Field(default=-50.0, le=0)
    oversized_multiple: float = Field(default=2.0, gt=1)
