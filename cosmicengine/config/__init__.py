"""Configuration helpers exposed at :mod:`cosmicengine.config`."""

from __future__ import annotations

from .settings import (
    DatabaseCfg,
    EphemerisCfg,
    LoggingCfg,
    PatternsCfg,
    Settings,
    TransitionsCfg,
    config_path,
    default_settings,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "DatabaseCfg",
    "EphemerisCfg",
    "LoggingCfg",
    "PatternsCfg",
    "Settings",
    "TransitionsCfg",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "save_settings",
]
