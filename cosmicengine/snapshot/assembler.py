"""Display-ready cosmic snapshots for a single instant."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.bodies import Body
from ..core.time import ensure_utc, to_iso
from ..core.zodiac import ZodiacSign, sign_of
from ..detectors.transitions import TransitionSearch
from ..ephemeris.oracle import GREENWICH, EphemerisOracle, ObserverLocation, probe_longitude
from ..events import TransitionEvent
from ..utils.angles import norm360, round_half_up
from .phases import MoonPhase, classify_moon_phase, lunar_elongation, moon_phase_emoji, moon_phase_name

__all__ = [
    "BodyPlacement",
    "CosmicSnapshot",
    "LuminaryPositions",
    "assemble_snapshot",
    "format_degree",
    "luminary_positions",
    "snapshot_at",
]


@dataclass(frozen=True)
class BodyPlacement:
    """Longitude of one body with its sign and degree inside that sign."""

    longitude: float
    sign: ZodiacSign
    degree: float

    @classmethod
    def from_longitude(cls, longitude: float) -> BodyPlacement:
        lon = norm360(longitude)
        return cls(
            longitude=lon,
            sign=sign_of(lon),
            degree=round_half_up(lon % 30.0, 2),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"longitude": self.longitude, "sign": self.sign.value, "degree": self.degree}


@dataclass(frozen=True)
class LuminaryPositions:
    sun: float
    moon: float


@dataclass(frozen=True)
class CosmicSnapshot:
    """Immutable view of the luminaries at ``instant``."""

    instant: datetime
    sun: BodyPlacement
    moon: BodyPlacement
    moon_phase: MoonPhase
    lunar_elongation: float
    sun_transition: TransitionEvent | None = None
    moon_transition: TransitionEvent | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "instant": to_iso(self.instant),
            "sun": self.sun.to_dict(),
            "moon": {
                **self.moon.to_dict(),
                "phase": self.moon_phase.value,
                "phase_name": moon_phase_name(self.moon_phase),
                "phase_emoji": moon_phase_emoji(self.moon_phase),
            },
            "lunar_elongation": self.lunar_elongation,
            "transitions": {
                "sun": self.sun_transition.to_dict() if self.sun_transition else None,
                "moon": self.moon_transition.to_dict() if self.moon_transition else None,
            },
        }


def luminary_positions(
    oracle: EphemerisOracle,
    instant: datetime,
    location: ObserverLocation = GREENWICH,
) -> LuminaryPositions:
    """Probe the oracle once per luminary at ``instant``."""

    return LuminaryPositions(
        sun=probe_longitude(oracle, Body.sun, instant, location),
        moon=probe_longitude(oracle, Body.moon, instant, location),
    )


def assemble_snapshot(
    instant: datetime,
    sun_longitude: float,
    moon_longitude: float,
    *,
    sun_transition: TransitionEvent | None = None,
    moon_transition: TransitionEvent | None = None,
) -> CosmicSnapshot:
    """Combine luminary longitudes and known transitions into a snapshot."""

    return CosmicSnapshot(
        instant=ensure_utc(instant),
        sun=BodyPlacement.from_longitude(sun_longitude),
        moon=BodyPlacement.from_longitude(moon_longitude),
        moon_phase=classify_moon_phase(sun_longitude, moon_longitude),
        lunar_elongation=round_half_up(lunar_elongation(sun_longitude, moon_longitude), 2),
        sun_transition=sun_transition,
        moon_transition=moon_transition,
    )


def snapshot_at(
    oracle: EphemerisOracle,
    instant: datetime,
    *,
    with_transitions: bool = True,
    search: TransitionSearch | None = None,
) -> CosmicSnapshot:
    """Compute a snapshot at ``instant``, searching transitions directly.

    Suited to one-off lookups; calendar ranges should go through
    :func:`cosmicengine.scheduling.batch_snapshots` which shares the
    transition searches across dates.
    """

    search = search or TransitionSearch()
    moment = ensure_utc(instant)
    positions = luminary_positions(oracle, moment, search.location)
    sun_transition = moon_transition = None
    if with_transitions:
        found = search.find(oracle, Body.sun, positions.sun, moment)
        sun_transition = found if isinstance(found, TransitionEvent) else None
        found = search.find(oracle, Body.moon, positions.moon, moment)
        moon_transition = found if isinstance(found, TransitionEvent) else None
    return assemble_snapshot(
        moment,
        positions.sun,
        positions.moon,
        sun_transition=sun_transition,
        moon_transition=moon_transition,
    )


def format_degree(degree: float) -> str:
    """Render ``degree`` as whole degrees and arc minutes, e.g. ``12° 30'``."""

    whole = math.floor(degree)
    minutes = int(round_half_up((degree - whole) * 60.0))
    if minutes == 60:
        whole, minutes = whole + 1, 0
    return f"{whole}\N{DEGREE SIGN} {minutes}'"
