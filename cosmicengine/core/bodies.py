"""Luminaries tracked by the transition search and their motion constants."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping

__all__ = [
    "Body",
    "BodyMotion",
    "motion_for",
]


class Body(str, enum.Enum):
    """Bodies whose sign ingresses are tracked."""

    sun = "sun"
    moon = "moon"

    @classmethod
    def parse(cls, value: str | Body) -> Body:
        """Return the member matching ``value`` case-insensitively."""

        if isinstance(value, Body):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            options = ", ".join(member.value for member in cls)
            raise ValueError(f"unknown body '{value}'. Expected one of: {options}") from exc


@dataclass(frozen=True, slots=True)
class BodyMotion:
    """Average motion used to seed the ingress search bracket.

    ``degrees_per_day`` only positions the initial bracket; correctness of
    the search never depends on it. ``max_search`` bounds every search so a
    transition that cannot be bracketed is reported as missing.
    """

    degrees_per_day: float
    max_search: timedelta


_MOTION: Mapping[Body, BodyMotion] = {
    # the Moon moves 12-15 degrees a day and changes sign every ~2.5 days
    Body.moon: BodyMotion(degrees_per_day=13.2, max_search=timedelta(days=3)),
    # the Sun changes sign roughly every 30 days
    Body.sun: BodyMotion(degrees_per_day=1.0, max_search=timedelta(days=32)),
}


def motion_for(body: Body | str) -> BodyMotion:
    """Return the :class:`BodyMotion` constants for ``body``."""

    return _MOTION[Body.parse(body)]
