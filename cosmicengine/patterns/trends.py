"""Week-over-week sighting frequency trends."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from ..core.time import ensure_utc
from ..utils.angles import round_half_up
from .correlation import rank
from .models import OverallTrendValue, PatternInsight, PatternThresholds, SightingEvent, Trend, WeeklyTrendValue

__all__ = [
    "classify_trend",
    "compute_frequency_trends",
    "percentage_change",
]

WINDOW = timedelta(days=7)


def classify_trend(current: int, previous: int, threshold_pct: int = 10) -> Trend:
    """Classify the change from ``previous`` to ``current``.

    A change of exactly ``threshold_pct`` percent is still stable. Compared
    in integers so 10 -> 11 never drifts over a 10% threshold.
    """

    if previous == 0:
        return Trend.increasing if current > 0 else Trend.stable
    delta = (current - previous) * 100
    if delta > threshold_pct * previous:
        return Trend.increasing
    if delta < -threshold_pct * previous:
        return Trend.decreasing
    return Trend.stable


def percentage_change(current: int, previous: int) -> int:
    if previous == 0:
        return 100 if current > 0 else 0
    return int(round_half_up((current - previous) / previous * 100))


def compute_frequency_trends(
    events: Sequence[SightingEvent],
    total_count: int,
    *,
    now: datetime | None = None,
    thresholds: PatternThresholds | None = None,
) -> list[PatternInsight]:
    """Return ``overall_trend`` plus ``<number>_weekly_trend`` insights.

    The current window is ``[now - 7d, ...)`` and the previous window
    ``[now - 14d, now - 7d)``.
    """

    if not events:
        return []

    limits = thresholds or PatternThresholds()
    computed_at = ensure_utc(now) if now else datetime.now(UTC)
    week_start = computed_at - WINDOW
    prior_start = week_start - WINDOW

    current: Counter[str] = Counter()
    previous: Counter[str] = Counter()
    for event in events:
        if event.timestamp >= week_start:
            current[event.number] += 1
        elif event.timestamp >= prior_start:
            previous[event.number] += 1

    last_7 = sum(current.values())
    prev_7 = sum(previous.values())
    insights = [
        PatternInsight.build(
            "overall_trend",
            OverallTrendValue(
                last_7_days=last_7,
                previous_7_days=prev_7,
                trend=classify_trend(last_7, prev_7, limits.trend_threshold_pct),
                percentage_change=percentage_change(last_7, prev_7),
                average_per_day=round_half_up(last_7 / 7, 1),
            ),
            computed_at=computed_at,
            sighting_count=total_count,
        )
    ]

    overall = Counter(event.number for event in events)
    for number, _ in rank(overall, limits.top_n):
        cur, prev = current[number], previous[number]
        if cur == 0 and prev == 0:
            continue
        insights.append(
            PatternInsight.build(
                f"{number}_weekly_trend",
                WeeklyTrendValue(
                    number=number,
                    current_week_count=cur,
                    previous_week_count=prev,
                    trend=classify_trend(cur, prev, limits.trend_threshold_pct),
                    percentage_change=percentage_change(cur, prev),
                ),
                computed_at=computed_at,
                sighting_count=total_count,
            )
        )
    return insights
