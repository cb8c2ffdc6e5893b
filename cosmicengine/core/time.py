"""Time helpers used across cosmicengine.

Every instant handled by the numeric core is a timezone-aware UTC
:class:`~datetime.datetime`. Timezones are only consulted when a calendar
date has to be resolved to local noon (see :mod:`cosmicengine.scheduling`).
"""

from __future__ import annotations

import datetime as _dt
from typing import Final

__all__ = [
    "SECONDS_PER_DAY",
    "ensure_utc",
    "from_iso",
    "to_iso",
]


SECONDS_PER_DAY: Final[float] = 86_400.0


def ensure_utc(moment: _dt.datetime) -> _dt.datetime:
    """Return ``moment`` converted to UTC; naive values are assumed UTC."""

    tzinfo = moment.tzinfo
    if tzinfo is None:
        return moment.replace(tzinfo=_dt.UTC)
    return moment.astimezone(_dt.UTC)


def to_iso(moment: _dt.datetime) -> str:
    """Render ``moment`` as an ISO-8601 UTC timestamp with a ``Z`` suffix."""

    return ensure_utc(moment).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def from_iso(value: str) -> _dt.datetime:
    """Parse an ISO-8601 timestamp (``Z`` suffix accepted) into UTC."""

    return ensure_utc(_dt.datetime.fromisoformat(value.replace("Z", "+00:00")))
