"""Run every pattern analyzer over one user's sighting log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from ..core.time import ensure_utc
from ..observability import PATTERN_COMPUTE_DURATION
from .activity import compute_activity_correlation
from .models import ComputedPatterns, PatternThresholds, SightingEvent
from .mood import compute_mood_correlation
from .time import compute_time_distribution
from .trends import compute_frequency_trends

__all__ = ["compute_all_patterns"]


def compute_all_patterns(
    events: Sequence[SightingEvent],
    total_count: int,
    *,
    now: datetime | None = None,
    thresholds: PatternThresholds | None = None,
) -> ComputedPatterns:
    """Return a fresh :class:`ComputedPatterns` bundle stamped with ``now``."""

    computed_at = ensure_utc(now) if now else datetime.now(UTC)
    limits = thresholds or PatternThresholds()
    with PATTERN_COMPUTE_DURATION.time():
        return ComputedPatterns(
            time_distribution=compute_time_distribution(events, total_count, now=computed_at),
            mood_correlation=compute_mood_correlation(
                events, total_count, now=computed_at, thresholds=limits
            ),
            activity_correlation=compute_activity_correlation(
                events, total_count, now=computed_at, thresholds=limits
            ),
            frequency_trend=compute_frequency_trends(
                events, total_count, now=computed_at, thresholds=limits
            ),
            is_stale=False,
            last_computed_at=computed_at,
            sighting_count=total_count,
        )
