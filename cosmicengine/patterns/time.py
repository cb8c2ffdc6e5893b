"""Time-of-day and day-of-week distribution of sightings."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..utils.angles import round_half_up
from .models import DayOfWeekValue, PatternInsight, PeakHourValue, SightingEvent

__all__ = [
    "DAY_NAMES",
    "HOUR_LABELS",
    "compute_time_distribution",
    "local_hour_and_day",
]

LOG = logging.getLogger(__name__)

HOUR_LABELS: tuple[str, ...] = tuple(
    f"{(hour % 12) or 12}{'am' if hour < 12 else 'pm'}" for hour in range(24)
)

# Sunday first so day indices match the stored payloads (0 = Sunday).
DAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


@lru_cache(maxsize=128)
def _zone(name: str | None):
    if not name:
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        LOG.debug("unknown sighting timezone %r; bucketing in UTC", name)
        return UTC


def local_hour_and_day(event: SightingEvent) -> tuple[int, int]:
    """Return ``(hour, day)`` of ``event`` in its own timezone, Sunday = 0."""

    local = event.timestamp.astimezone(_zone(event.tz))
    return local.hour, (local.weekday() + 1) % 7


def _peak(counts: Sequence[int]) -> int:
    # ties go to the earliest bucket
    return max(range(len(counts)), key=lambda idx: (counts[idx], -idx))


def compute_time_distribution(
    events: Sequence[SightingEvent],
    total_count: int,
    *,
    now: datetime | None = None,
) -> list[PatternInsight]:
    """Return the ``peak_hour`` and ``day_of_week`` insights.

    Percentages are relative to ``len(events)``; ``total_count`` is only
    recorded on each insight.
    """

    if not events:
        return []

    computed_at = now or datetime.now(UTC)
    hours = [0] * 24
    days = [0] * 7
    for event in events:
        hour, day = local_hour_and_day(event)
        hours[hour] += 1
        days[day] += 1

    sample = len(events)
    insights: list[PatternInsight] = []

    peak_hour = _peak(hours)
    if hours[peak_hour]:
        insights.append(
            PatternInsight.build(
                "peak_hour",
                PeakHourValue(
                    hour=peak_hour,
                    count=hours[peak_hour],
                    percentage=int(round_half_up(hours[peak_hour] / sample * 100)),
                    label=HOUR_LABELS[peak_hour],
                ),
                computed_at=computed_at,
                sighting_count=total_count,
            )
        )

    peak_day = _peak(days)
    if days[peak_day]:
        insights.append(
            PatternInsight.build(
                "day_of_week",
                DayOfWeekValue(
                    day=peak_day,
                    day_name=DAY_NAMES[peak_day],
                    count=days[peak_day],
                    percentage=int(round_half_up(days[peak_day] / sample * 100)),
                ),
                computed_at=computed_at,
                sighting_count=total_count,
            )
        )

    return insights
