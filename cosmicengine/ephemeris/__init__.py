"""Ephemeris oracle contract and the Swiss Ephemeris implementation."""

from __future__ import annotations

from .oracle import (
    GREENWICH,
    EphemerisError,
    EphemerisOracle,
    ObserverLocation,
    probe_longitude,
)
from .swe import has_swe
from .swiss import SwissEphemerisOracle, get_se_ephe_path

__all__ = [
    "EphemerisError",
    "EphemerisOracle",
    "GREENWICH",
    "ObserverLocation",
    "SwissEphemerisOracle",
    "get_se_ephe_path",
    "has_swe",
    "probe_longitude",
]
