"""Mood correlation insights."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from .correlation import TagCorrelation
from .models import NumbersForMoodValue, PatternInsight, PatternThresholds, SightingEvent, TopMoodValue

__all__ = ["compute_mood_correlation"]


def compute_mood_correlation(
    events: Sequence[SightingEvent],
    total_count: int,
    *,
    now: datetime | None = None,
    thresholds: PatternThresholds | None = None,
) -> list[PatternInsight]:
    """Return ``top_mood_<number>`` then ``<mood>_numbers`` insights.

    Nothing is emitted until at least ``min_sightings_for_correlation``
    sightings carry a mood tag.
    """

    limits = thresholds or PatternThresholds()
    table = TagCorrelation.build(events, lambda event: event.mood_tags)
    if table.sample_size < limits.min_sightings_for_correlation:
        return []

    computed_at = now or datetime.now(UTC)
    insights = [
        PatternInsight.build(
            f"top_mood_{number}",
            TopMoodValue(number=number, mood=mood, count=count, percentage=pct),
            computed_at=computed_at,
            sighting_count=total_count,
        )
        for number, mood, count, pct in table.top_tag_per_number(limits.top_n)
    ]
    insights.extend(
        PatternInsight.build(
            f"{mood}_numbers",
            NumbersForMoodValue(mood=mood, numbers=shares),
            computed_at=computed_at,
            sighting_count=total_count,
        )
        for mood, shares in table.numbers_per_tag(limits.min_sightings_for_correlation, limits.top_n)
    )
    return insights
