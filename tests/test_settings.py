from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import yaml

from cosmicengine.config import Settings, load_settings, save_settings
from cosmicengine.config.settings import DEFAULT_DATABASE_URL, config_path
from cosmicengine.detectors.transitions import TransitionSearch
from cosmicengine.patterns.cache import InsightCache
from cosmicengine.patterns.models import PatternThresholds


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings()
    assert settings.transitions.precision_seconds == 60
    assert settings.transitions.max_extensions == 5
    assert settings.transitions.lookahead_days == 3
    assert settings.patterns.staleness_threshold == 5
    assert settings.database.url == DEFAULT_DATABASE_URL
    assert settings.logging.level == "INFO"


def test_database_url_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./elsewhere.db")
    assert Settings().database.url == "sqlite:///./elsewhere.db"


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    target = tmp_path / "absent.yaml"
    assert load_settings(target) == Settings()
    assert not target.exists()


def test_config_home_from_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("COSMICENGINE_HOME", str(tmp_path))
    assert config_path() == tmp_path / "config.yaml"


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    settings = Settings()
    settings.patterns.top_n = 5
    settings.ephemeris.prefer_moshier = True

    path = save_settings(settings, tmp_path / "nested" / "config.yaml")

    assert path.exists()
    assert load_settings(path) == settings


def test_transition_tunables_are_clamped(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "transitions": {"precision_seconds": 0, "max_extensions": 99, "lookahead_days": -2},
                "unknown_section": {"ignored": True},
            }
        ),
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.transitions.precision_seconds == 1
    assert settings.transitions.max_extensions == 20
    assert settings.transitions.lookahead_days == 0


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path).patterns.top_n == 3


def test_components_built_from_settings(session_factory) -> None:
    settings = Settings()
    settings.transitions.precision_seconds = 30
    settings.ephemeris.reference_latitude = 40.0
    settings.patterns.trend_threshold_pct = 20
    settings.patterns.staleness_threshold = 8

    search = TransitionSearch.from_settings(settings)
    thresholds = PatternThresholds.from_settings(settings)
    cache = InsightCache.from_settings(settings, session_factory)

    assert search.precision == timedelta(seconds=30)
    assert search.location.latitude_deg == 40.0
    assert thresholds.trend_threshold_pct == 20
    assert cache.staleness_threshold == 8
