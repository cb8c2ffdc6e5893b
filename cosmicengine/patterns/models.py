"""Typed pattern insights.

Each analyzer output is one :class:`PatternInsight` whose ``value`` is a
member of a discriminated union keyed by ``kind``. The union round-trips
through the JSON column of the insight cache, so cached rows are validated
against the same schema that produced them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Iterable, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.time import ensure_utc

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config.settings import Settings

__all__ = [
    "ComputedPatterns",
    "DayOfWeekValue",
    "InsightType",
    "InsightValue",
    "NumberShare",
    "NumbersForActivityValue",
    "NumbersForMoodValue",
    "OverallTrendValue",
    "PatternInsight",
    "PatternThresholds",
    "PeakHourValue",
    "SightingEvent",
    "TopActivityValue",
    "TopMoodValue",
    "Trend",
    "WeeklyTrendValue",
]


class InsightType(str, enum.Enum):
    time_distribution = "time_distribution"
    mood_correlation = "mood_correlation"
    activity_correlation = "activity_correlation"
    frequency_trend = "frequency_trend"


class Trend(str, enum.Enum):
    increasing = "increasing"
    decreasing = "decreasing"
    stable = "stable"


@dataclass(frozen=True)
class PatternThresholds:
    """Sample-size and ranking thresholds shared by the analyzers."""

    min_sightings_for_correlation: int = 5
    top_n: int = 3
    trend_threshold_pct: int = 10

    @classmethod
    def from_settings(cls, settings: Settings) -> PatternThresholds:
        cfg = settings.patterns
        return cls(
            min_sightings_for_correlation=cfg.min_sightings_for_correlation,
            top_n=cfg.top_n,
            trend_threshold_pct=cfg.trend_threshold_pct,
        )


# -------------------- Input --------------------


class SightingEvent(BaseModel):
    """Read-only view of one logged sighting."""

    model_config = ConfigDict(frozen=True)

    number: str
    timestamp: datetime
    mood_tags: tuple[str, ...] | None = None
    activity: str | None = None
    tz: str | None = None

    @field_validator("number", mode="before")
    @classmethod
    def _coerce_number(cls, value: object) -> str:
        return str(value).strip()

    @field_validator("timestamp")
    @classmethod
    def _utc_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)


# -------------------- Insight values --------------------


class _Value(BaseModel):
    model_config = ConfigDict(frozen=True)


class PeakHourValue(_Value):
    kind: Literal["peak_hour"] = "peak_hour"
    hour: int = Field(ge=0, le=23)
    count: int = Field(ge=0)
    percentage: int
    label: str


class DayOfWeekValue(_Value):
    kind: Literal["day_of_week"] = "day_of_week"
    day: int = Field(ge=0, le=6, description="0 = Sunday")
    day_name: str
    count: int = Field(ge=0)
    percentage: int


class NumberShare(_Value):
    number: str
    count: int = Field(ge=0)
    percentage: int


class TopMoodValue(_Value):
    kind: Literal["top_mood"] = "top_mood"
    number: str
    mood: str
    count: int = Field(ge=0)
    percentage: int


class NumbersForMoodValue(_Value):
    kind: Literal["numbers_for_mood"] = "numbers_for_mood"
    mood: str
    numbers: tuple[NumberShare, ...]


class NumbersForActivityValue(_Value):
    kind: Literal["numbers_for_activity"] = "numbers_for_activity"
    activity: str
    numbers: tuple[NumberShare, ...]


class TopActivityValue(_Value):
    kind: Literal["top_activity"] = "top_activity"
    number: str
    activity: str
    count: int = Field(ge=0)
    percentage: int


class OverallTrendValue(_Value):
    kind: Literal["overall_trend"] = "overall_trend"
    last_7_days: int = Field(ge=0)
    previous_7_days: int = Field(ge=0)
    trend: Trend
    percentage_change: int
    average_per_day: float


class WeeklyTrendValue(_Value):
    kind: Literal["weekly_trend"] = "weekly_trend"
    number: str
    current_week_count: int = Field(ge=0)
    previous_week_count: int = Field(ge=0)
    trend: Trend
    percentage_change: int


InsightValue = Annotated[
    Union[
        PeakHourValue,
        DayOfWeekValue,
        TopMoodValue,
        NumbersForMoodValue,
        NumbersForActivityValue,
        TopActivityValue,
        OverallTrendValue,
        WeeklyTrendValue,
    ],
    Field(discriminator="kind"),
]

_KIND_TYPE: Mapping[str, InsightType] = {
    "peak_hour": InsightType.time_distribution,
    "day_of_week": InsightType.time_distribution,
    "top_mood": InsightType.mood_correlation,
    "numbers_for_mood": InsightType.mood_correlation,
    "numbers_for_activity": InsightType.activity_correlation,
    "top_activity": InsightType.activity_correlation,
    "overall_trend": InsightType.frequency_trend,
    "weekly_trend": InsightType.frequency_trend,
}


class PatternInsight(BaseModel):
    """One derived fact about a user's sighting history."""

    model_config = ConfigDict(frozen=True)

    type: InsightType
    key: str = Field(min_length=1)
    computed_at: datetime
    sighting_count_at_computation: int = Field(ge=0)
    value: InsightValue

    @field_validator("computed_at")
    @classmethod
    def _utc_computed_at(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _value_matches_type(self) -> PatternInsight:
        expected = _KIND_TYPE[self.value.kind]
        if expected is not self.type:
            raise ValueError(
                f"insight value '{self.value.kind}' belongs to {expected.value}, not {self.type.value}"
            )
        return self

    @classmethod
    def build(
        cls,
        key: str,
        value: InsightValue,
        *,
        computed_at: datetime,
        sighting_count: int,
    ) -> PatternInsight:
        """Create an insight whose ``type`` is derived from ``value``."""

        return cls(
            type=_KIND_TYPE[value.kind],
            key=key,
            computed_at=computed_at,
            sighting_count_at_computation=sighting_count,
            value=value,
        )


# -------------------- Bundle --------------------


class ComputedPatterns(BaseModel):
    """All insights for one user grouped by analyzer."""

    time_distribution: list[PatternInsight] = Field(default_factory=list)
    mood_correlation: list[PatternInsight] = Field(default_factory=list)
    activity_correlation: list[PatternInsight] = Field(default_factory=list)
    frequency_trend: list[PatternInsight] = Field(default_factory=list)
    is_stale: bool = False
    last_computed_at: datetime | None = None
    sighting_count: int = Field(default=0, ge=0)

    @classmethod
    def from_insights(
        cls,
        insights: Iterable[PatternInsight],
        *,
        is_stale: bool = False,
        last_computed_at: datetime | None = None,
        sighting_count: int = 0,
    ) -> ComputedPatterns:
        groups: dict[InsightType, list[PatternInsight]] = {kind: [] for kind in InsightType}
        for insight in insights:
            groups[insight.type].append(insight)
        return cls(
            time_distribution=groups[InsightType.time_distribution],
            mood_correlation=groups[InsightType.mood_correlation],
            activity_correlation=groups[InsightType.activity_correlation],
            frequency_trend=groups[InsightType.frequency_trend],
            is_stale=is_stale,
            last_computed_at=last_computed_at,
            sighting_count=sighting_count,
        )

    def insights(self) -> list[PatternInsight]:
        """Flatten the bundle back into a single list, analyzer by analyzer."""

        return [
            *self.time_distribution,
            *self.mood_correlation,
            *self.activity_correlation,
            *self.frequency_trend,
        ]
