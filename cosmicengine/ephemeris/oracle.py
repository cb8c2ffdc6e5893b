"""Contract for the external ephemeris consumed by the numeric core."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from ..core.bodies import Body
from ..core.time import ensure_utc
from ..observability import EPHEMERIS_PROBES
from ..utils.angles import norm360

__all__ = [
    "EphemerisError",
    "EphemerisOracle",
    "GREENWICH",
    "ObserverLocation",
    "probe_longitude",
]


class EphemerisError(RuntimeError):
    """Raised by oracle implementations when the backend cannot answer."""


@dataclass(frozen=True, slots=True)
class ObserverLocation:
    """Geographic location passed through to the oracle.

    Geocentric longitudes do not depend on it; only house and angle
    calculations would.
    """

    latitude_deg: float
    longitude_deg: float
    name: str | None = None


GREENWICH = ObserverLocation(latitude_deg=51.4772, longitude_deg=0.0, name="Greenwich")


@runtime_checkable
class EphemerisOracle(Protocol):
    """Return the ecliptic longitude of ``body`` at ``instant`` in [0, 360)."""

    def longitude(
        self, body: Body, instant: datetime, location: ObserverLocation = GREENWICH
    ) -> float: ...


def probe_longitude(
    oracle: EphemerisOracle,
    body: Body,
    instant: datetime,
    location: ObserverLocation = GREENWICH,
) -> float:
    """Query ``oracle`` once, counting the probe and normalising the result."""

    EPHEMERIS_PROBES.labels(body=body.value).inc()
    return norm360(float(oracle.longitude(body, ensure_utc(instant), location)))
