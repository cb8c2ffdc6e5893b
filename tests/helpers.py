"""Test doubles shared across the suite."""

from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime, timedelta
from typing import Mapping, Sequence

from cosmicengine.core.bodies import Body
from cosmicengine.ephemeris.oracle import GREENWICH, EphemerisError, ObserverLocation
from cosmicengine.patterns.models import SightingEvent
from cosmicengine.utils.angles import forward_separation, norm360

EPOCH = datetime(2024, 1, 1, tzinfo=UTC)
FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


class LinearOracle:
    """Deterministic ephemeris stand-in where each body moves at a constant speed."""

    def __init__(
        self,
        *,
        speeds: Mapping[Body, float] | None = None,
        origins: Mapping[Body, float] | None = None,
        epoch: datetime = EPOCH,
    ) -> None:
        self.speeds = {Body.sun: 0.9856, Body.moon: 13.176, **(speeds or {})}
        self.origins = {Body.sun: 280.0, Body.moon: 100.0, **(origins or {})}
        self.epoch = epoch
        self.calls: Counter[Body] = Counter()
        self.locations: set[ObserverLocation] = set()

    def longitude(
        self, body: Body, instant: datetime, location: ObserverLocation = GREENWICH
    ) -> float:
        self.calls[body] += 1
        self.locations.add(location)
        return self.position(body, instant)

    def position(self, body: Body, instant: datetime) -> float:
        """Longitude without counting a probe."""

        days = (instant - self.epoch).total_seconds() / 86_400.0
        return norm360(self.origins[body] + self.speeds[body] * days)

    def crossing_after(self, body: Body, instant: datetime) -> datetime:
        """Analytic instant of the next 30-degree boundary after ``instant``."""

        lon = self.position(body, instant)
        boundary = (int(lon // 30.0) + 1) * 30.0
        days = forward_separation(lon, boundary) / self.speeds[body]
        return instant + timedelta(days=days)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


class FailingOracle(LinearOracle):
    """Raises :class:`EphemerisError` once ``budget`` probes have been served."""

    def __init__(self, budget: int, **kwargs) -> None:
        super().__init__(**kwargs)
        self.budget = budget

    def longitude(
        self, body: Body, instant: datetime, location: ObserverLocation = GREENWICH
    ) -> float:
        if self.total_calls >= self.budget:
            raise EphemerisError("backend unavailable")
        return super().longitude(body, instant, location)


def sighting(
    number: str,
    timestamp: datetime,
    *,
    moods: Sequence[str] | None = None,
    activity: str | None = None,
    tz: str | None = None,
) -> SightingEvent:
    return SightingEvent(
        number=number,
        timestamp=timestamp,
        mood_tags=tuple(moods) if moods is not None else None,
        activity=activity,
        tz=tz,
    )


def hours_ago(now: datetime, hours: float) -> datetime:
    return now - timedelta(hours=hours)
