"""Configuration models and helpers for cosmicengine settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

CURRENT_SETTINGS_SCHEMA_VERSION = 1
CONFIG_FILENAME = "config.yaml"
DEFAULT_DATABASE_URL = "sqlite:///./cosmicengine.db"

# -------------------- Settings Schema --------------------


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore")


class EphemerisCfg(_Section):
    """Swiss ephemeris location and reference observer."""

    path: Optional[str] = None
    prefer_moshier: bool = False
    reference_latitude: float = Field(default=51.4772, ge=-90.0, le=90.0)
    reference_longitude: float = Field(default=0.0, ge=-180.0, le=180.0)


class TransitionsCfg(_Section):
    """Tunables for the sign ingress search."""

    precision_seconds: int = 60
    max_extensions: int = 5
    lookahead_days: int = 3

    @field_validator("precision_seconds", mode="before")
    @classmethod
    def _clamp_precision(cls, value: int) -> int:
        return max(1, min(3600, int(value)))

    @field_validator("max_extensions", mode="before")
    @classmethod
    def _clamp_extensions(cls, value: int) -> int:
        return max(0, min(20, int(value)))

    @field_validator("lookahead_days", mode="before")
    @classmethod
    def _clamp_lookahead(cls, value: int) -> int:
        return max(0, min(14, int(value)))


class PatternsCfg(_Section):
    """Thresholds used by the pattern analyzers and insight cache."""

    staleness_threshold: int = Field(default=5, ge=1)
    min_sightings_for_correlation: int = Field(default=5, ge=1)
    top_n: int = Field(default=3, ge=1)
    trend_threshold_pct: int = Field(default=10, ge=0)


def _default_database_url() -> str:
    return os.environ.get("DATABASE_URL") or DEFAULT_DATABASE_URL


class DatabaseCfg(_Section):
    """Relational store holding sightings and cached insights."""

    url: str = Field(default_factory=_default_database_url)


class LoggingCfg(_Section):
    level: str = "INFO"


class Settings(_Section):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    ephemeris: EphemerisCfg = Field(default_factory=EphemerisCfg)
    transitions: TransitionsCfg = Field(default_factory=TransitionsCfg)
    patterns: PatternsCfg = Field(default_factory=PatternsCfg)
    database: DatabaseCfg = Field(default_factory=DatabaseCfg)
    logging: LoggingCfg = Field(default_factory=LoggingCfg)


# -------------------- Persistence helpers --------------------


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("COSMICENGINE_HOME", str(Path.home() / ".cosmicengine")))


def config_path() -> Path:
    """Return the full path to the configuration file."""

    return get_config_home() / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, falling back to defaults when missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        return default_settings()
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    return Settings(**raw)
