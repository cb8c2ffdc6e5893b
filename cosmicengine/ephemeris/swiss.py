"""Swiss Ephemeris backed implementation of :class:`EphemerisOracle`."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from time import perf_counter
from typing import TYPE_CHECKING, ClassVar, Iterable

from ..core.bodies import Body
from ..observability import COMPUTE_ERRORS, EPHEMERIS_COMPUTE_DURATION
from .oracle import GREENWICH, EphemerisError, ObserverLocation
from .swe import swe as _swe

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config.settings import Settings

__all__ = [
    "DEFAULT_ENV_KEYS",
    "SwissEphemerisOracle",
    "get_se_ephe_path",
]

LOG = logging.getLogger(__name__)

DEFAULT_ENV_KEYS: tuple[str, ...] = (
    "SE_EPHE_PATH",
    "SWE_EPH_PATH",
    "COSMICENGINE_EPHEMERIS_PATH",
)
"""Environment variables checked (in order) for Swiss ephemeris paths."""


def _first_env(keys: Iterable[str]) -> str | None:
    for key in keys:
        value = os.environ.get(key)
        if value:
            return value
    return None


def get_se_ephe_path(explicit: str | os.PathLike[str] | None = None) -> str | None:
    """Return the first existing ephemeris directory from ``explicit`` or the env."""

    for candidate in (explicit, _first_env(DEFAULT_ENV_KEYS)):
        if not candidate:
            continue
        path = Path(candidate).expanduser()
        if path.is_dir():
            return str(path)
    return None


class SwissEphemerisOracle:
    """Geocentric tropical longitudes from :mod:`pyswisseph`.

    Falls back to the analytical Moshier ephemeris when the Swiss data files
    are missing, which keeps the Sun and Moon accurate to well under an
    arc-second for the years the engine is used with.
    """

    _DEFAULT_PATHS: ClassVar[tuple[Path, ...]] = (
        Path("/usr/share/sweph"),
        Path("/usr/share/libswisseph"),
        Path.home() / ".sweph",
    )

    def __init__(
        self,
        ephemeris_path: str | os.PathLike[str] | None = None,
        *,
        prefer_moshier: bool = False,
        location: ObserverLocation = GREENWICH,
    ) -> None:
        swe = _swe()
        self.location = location
        self._codes = {Body.sun: swe.SUN, Body.moon: swe.MOON}
        self._fallback_flags = swe.FLG_MOSEPH | swe.FLG_SPEED
        self._calc_flags = self._fallback_flags if prefer_moshier else swe.FLG_SWIEPH | swe.FLG_SPEED
        self.ephemeris_path = self._configure_ephemeris_path(ephemeris_path)

    @classmethod
    def from_settings(cls, settings: Settings) -> SwissEphemerisOracle:
        cfg = settings.ephemeris
        return cls(
            cfg.path,
            prefer_moshier=cfg.prefer_moshier,
            location=ObserverLocation(
                latitude_deg=cfg.reference_latitude,
                longitude_deg=cfg.reference_longitude,
            ),
        )

    def _configure_ephemeris_path(
        self, ephemeris_path: str | os.PathLike[str] | None
    ) -> str | None:
        swe = _swe()
        resolved = get_se_ephe_path(ephemeris_path)
        if resolved is None:
            for candidate in self._DEFAULT_PATHS:
                if candidate.exists():
                    resolved = str(candidate)
                    break
        if resolved is not None:
            swe.set_ephe_path(resolved)
        else:
            LOG.debug("no Swiss ephemeris files found; Moshier fallback will be used")
        return resolved

    @staticmethod
    def julian_day(moment: datetime) -> float:
        """Return the Julian day (UT) for a timezone-aware ``moment``."""

        if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
            raise ValueError("datetime must be timezone-aware in UTC or convertible to UTC")
        moment_utc = moment.astimezone(UTC)
        hour = (
            moment_utc.hour
            + moment_utc.minute / 60.0
            + moment_utc.second / 3600.0
            + moment_utc.microsecond / 3.6e9
        )
        return _swe().julday(moment_utc.year, moment_utc.month, moment_utc.day, hour)

    def longitude(
        self, body: Body, instant: datetime, location: ObserverLocation = GREENWICH
    ) -> float:
        swe = _swe()
        member = Body.parse(body)
        code = self._codes[member]
        jd_ut = self.julian_day(instant)
        start = perf_counter()
        try:
            try:
                xx = swe.calc_ut(jd_ut, code, self._calc_flags)[0]
            except Exception:
                if self._calc_flags == self._fallback_flags:
                    raise
                xx = swe.calc_ut(jd_ut, code, self._fallback_flags)[0]
        except Exception as exc:
            COMPUTE_ERRORS.labels(component="ephemeris", error=exc.__class__.__name__).inc()
            raise EphemerisError(f"Swiss Ephemeris failed for {member.value} at {instant}: {exc}") from exc
        finally:
            EPHEMERIS_COMPUTE_DURATION.labels(body=member.value).observe(perf_counter() - start)
        return float(xx[0]) % 360.0
