"""Activity correlation insights."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from .correlation import TagCorrelation
from .models import (
    NumbersForActivityValue,
    PatternInsight,
    PatternThresholds,
    SightingEvent,
    TopActivityValue,
)

__all__ = ["compute_activity_correlation"]


def _activity(event: SightingEvent) -> tuple[str, ...]:
    return (event.activity,) if event.activity else ()


def compute_activity_correlation(
    events: Sequence[SightingEvent],
    total_count: int,
    *,
    now: datetime | None = None,
    thresholds: PatternThresholds | None = None,
) -> list[PatternInsight]:
    """Return ``<activity>_numbers`` then ``top_activity_<number>`` insights."""

    limits = thresholds or PatternThresholds()
    table = TagCorrelation.build(events, _activity)
    if table.sample_size < limits.min_sightings_for_correlation:
        return []

    computed_at = now or datetime.now(UTC)
    insights = [
        PatternInsight.build(
            f"{activity}_numbers",
            NumbersForActivityValue(activity=activity, numbers=shares),
            computed_at=computed_at,
            sighting_count=total_count,
        )
        for activity, shares in table.numbers_per_tag(
            limits.min_sightings_for_correlation, limits.top_n
        )
    ]
    insights.extend(
        PatternInsight.build(
            f"top_activity_{number}",
            TopActivityValue(number=number, activity=activity, count=count, percentage=pct),
            computed_at=computed_at,
            sighting_count=total_count,
        )
        for number, activity, count, pct in table.top_tag_per_number(limits.top_n)
    )
    return insights
