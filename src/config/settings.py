# src/config/settings.py
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.journal.settings import EmotionTaxonomySettings, JournalSettings
from src.scoring.settings import CategoryScoringSettings, CouplingSettings, VRatingSettings


class SystemConfig(BaseModel):
    name: str = "VRating Engine"
    version: str = "1.0.0"
    taxonomy_version: str = "2024.1"


class LoggingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VRATING_LOG_")

    level: str = "INFO"
    format: str = "[%(asctime)s] %(levelname)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    emotions: EmotionTaxonomySettings = Field(default_factory=EmotionTaxonomySettings)
    coupling: CouplingSettings = Field(default_factory=CouplingSettings)
    vrating: VRatingSettings = Field(default_factory=VRatingSettings)
    categories: CategoryScoringSettings = Field(default_factory=CategoryScoringSettings)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    log: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides for logging."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        data.pop("log", None)
        log = LoggingConfig()

        return cls(
            **data,
            log=log,
        )
