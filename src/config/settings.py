# src/config/settings.py
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.analytics.settings import AnalyticsSettings
from src.journal.settings import JournalSettings

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SystemConfig(BaseModel):
    name: str = "Trade Journal Analytics"
    version: str = "1.0.0"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


class JournalEnvConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JOURNAL_")

    base_currency: Optional[str] = None
    log_level: Optional[str] = None


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    journal: JournalSettings = Field(default_factory=JournalSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        env = JournalEnvConfig()
        if env.base_currency:
            data["journal"] = {**data.get("journal", {}), "base_currency": env.base_currency}
        if env.log_level:
            data["system"] = {**data.get("system", {}), "log_level": env.log_level}

        return cls(**data)
