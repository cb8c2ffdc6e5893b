"""Eight-phase lunar classification from the Sun-Moon elongation."""

from __future__ import annotations

import enum
from typing import Mapping

from ..utils.angles import forward_separation

__all__ = [
    "MoonPhase",
    "PHASE_BOUNDARIES",
    "classify_moon_phase",
    "lunar_elongation",
    "moon_phase_emoji",
    "moon_phase_name",
]


class MoonPhase(str, enum.Enum):
    new_moon = "new_moon"
    waxing_crescent = "waxing_crescent"
    first_quarter = "first_quarter"
    waxing_gibbous = "waxing_gibbous"
    full_moon = "full_moon"
    waning_gibbous = "waning_gibbous"
    last_quarter = "last_quarter"
    waning_crescent = "waning_crescent"


# Upper (exclusive) edge of each 45-degree arc centred on a multiple of 45.
# New Moon owns both [337.5, 360) and [0, 22.5).
PHASE_BOUNDARIES: tuple[tuple[float, MoonPhase], ...] = (
    (22.5, MoonPhase.new_moon),
    (67.5, MoonPhase.waxing_crescent),
    (112.5, MoonPhase.first_quarter),
    (157.5, MoonPhase.waxing_gibbous),
    (202.5, MoonPhase.full_moon),
    (247.5, MoonPhase.waning_gibbous),
    (292.5, MoonPhase.last_quarter),
    (337.5, MoonPhase.waning_crescent),
)

_NAMES: Mapping[MoonPhase, str] = {
    MoonPhase.new_moon: "New Moon",
    MoonPhase.waxing_crescent: "Waxing Crescent",
    MoonPhase.first_quarter: "First Quarter",
    MoonPhase.waxing_gibbous: "Waxing Gibbous",
    MoonPhase.full_moon: "Full Moon",
    MoonPhase.waning_gibbous: "Waning Gibbous",
    MoonPhase.last_quarter: "Last Quarter",
    MoonPhase.waning_crescent: "Waning Crescent",
}

_EMOJI: Mapping[MoonPhase, str] = {
    MoonPhase.new_moon: "\N{NEW MOON SYMBOL}",
    MoonPhase.waxing_crescent: "\N{WAXING CRESCENT MOON SYMBOL}",
    MoonPhase.first_quarter: "\N{FIRST QUARTER MOON SYMBOL}",
    MoonPhase.waxing_gibbous: "\N{WAXING GIBBOUS MOON SYMBOL}",
    MoonPhase.full_moon: "\N{FULL MOON SYMBOL}",
    MoonPhase.waning_gibbous: "\N{WANING GIBBOUS MOON SYMBOL}",
    MoonPhase.last_quarter: "\N{LAST QUARTER MOON SYMBOL}",
    MoonPhase.waning_crescent: "\N{WANING CRESCENT MOON SYMBOL}",
}


def lunar_elongation(sun_longitude: float, moon_longitude: float) -> float:
    """Return the Moon's angular lead over the Sun in ``[0, 360)``."""

    return forward_separation(sun_longitude, moon_longitude)


def classify_moon_phase(sun_longitude: float, moon_longitude: float) -> MoonPhase:
    """Return the :class:`MoonPhase` for the given luminary longitudes."""

    separation = lunar_elongation(sun_longitude, moon_longitude)
    for upper, phase in PHASE_BOUNDARIES:
        if separation < upper:
            return phase
    return MoonPhase.new_moon


def moon_phase_name(phase: MoonPhase | str) -> str:
    return _NAMES[MoonPhase(phase)]


def moon_phase_emoji(phase: MoonPhase | str) -> str:
    return _EMOJI[MoonPhase(phase)]
