"""Settings for the journal module."""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class JournalSettings(BaseModel):
    """Configuration settings for reading the trading journal.

    Attributes:
        data_dir: Directory holding the daily trade JSON files.
        default_period_days: Default look-back window for rating reports.
    """

    data_dir: str = "data/trades"
    default_period_days: int = Field(default=30, ge=1, le=365)


class EmotionTaxonomySettings(BaseModel):
    """Canonical emotion vocabulary and bucket weights.

    Attributes:
        positive: Tags counted fully toward the positive bucket.
        negative: Tags counted against the trader.
        neutral: Tags counted at neutral_weight toward the positive bucket.
        normal_trading: Mild-risk tags counted at normal_trading_weight.
        positive_weight: Weight of a positive tag.
        neutral_weight: Weight of a neutral tag.
        normal_trading_weight: Weight of a normal-trading tag.
    """

    model_config = ConfigDict(frozen=True)

    positive: tuple[str, ...] = (
        "PATIENCE",
        "DISCIPLINE",
        "CONFIDENT",
        "CONFIDENCE",
        "FOCUSED",
        "CALM",
    )
    negative: tuple[str, ...] = ("FOMO", "REVENGE", "TILT", "GREED", "IMPATIENCE")
    neutral: tuple[str, ...] = ("NEUTRAL", "ANALYTICAL", "OBJECTIVE")
    normal_trading: tuple[str, ...] = ("OVERRISK", "ANXIOUS", "FEAR")

    positive_weight: float = Field(default=1.0, gt=0, le=1)
    neutral_weight: float = Field(default=0.5, ge=0, le=1)
    normal_trading_weight: float = Field(default=0.25, ge=0, le=1)

    @field_validator("positive", "negative", "neutral", "normal_trading")
    @classmethod
    def normalize_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Store tags upper-cased so matching is case-insensitive."""
        return tuple(tag.strip().upper() for tag in v if tag and tag.strip())

    @model_validator(mode="after")
    def check_disjoint(self) -> "EmotionTaxonomySettings":
        """The four emotion sets must not share any tag."""
        seen: dict[str, str] = {}
        for bucket in ("positive", "negative", "neutral", "normal_trading"):
            for tag in getattr(self, bucket):
                if tag in seen and seen[tag] != bucket:
                    raise ValueError(
                        f"Emotion {tag} is listed in both {seen[tag]} and {bucket}"
                    )
                seen[tag] = bucket
        return self
