"""Pattern analyzers over a user's sighting log and their insight cache."""

from __future__ import annotations

from .activity import compute_activity_correlation
from .cache import STALENESS_THRESHOLD, InsightCache, is_patterns_stale
from .compute import compute_all_patterns
from .models import (
    ComputedPatterns,
    InsightType,
    PatternInsight,
    PatternThresholds,
    SightingEvent,
    Trend,
)
from .mood import compute_mood_correlation
from .service import PatternService
from .sources import SightingReader, SqlSightingReader
from .time import compute_time_distribution
from .trends import classify_trend, compute_frequency_trends, percentage_change

__all__ = [
    "STALENESS_THRESHOLD",
    "ComputedPatterns",
    "InsightCache",
    "InsightType",
    "PatternInsight",
    "PatternService",
    "PatternThresholds",
    "SightingEvent",
    "SightingReader",
    "SqlSightingReader",
    "Trend",
    "classify_trend",
    "compute_activity_correlation",
    "compute_all_patterns",
    "compute_frequency_trends",
    "compute_mood_correlation",
    "compute_time_distribution",
    "is_patterns_stale",
    "percentage_change",
]
