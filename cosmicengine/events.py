"""Canonical event values produced by the transition search."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .core.bodies import Body
from .core.time import to_iso
from .core.zodiac import ZodiacSign

__all__ = [
    "TransitionEvent",
    "TransitionFailureReason",
    "TransitionNotFound",
    "TransitionResult",
]


@dataclass(frozen=True)
class TransitionEvent:
    """A body crossing from ``from_sign`` into the following sign.

    ``instant`` is the first probed moment found in ``to_sign``; the true
    crossing lies at most one precision step earlier.
    """

    body: Body
    from_sign: ZodiacSign
    to_sign: ZodiacSign
    instant: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "body": self.body.value,
            "from_sign": self.from_sign.value,
            "to_sign": self.to_sign.value,
            "instant": to_iso(self.instant),
        }


class TransitionFailureReason(str, enum.Enum):
    horizon_exceeded = "horizon_exceeded"
    extension_cap = "extension_cap"
    ephemeris_error = "ephemeris_error"


@dataclass(frozen=True)
class TransitionNotFound:
    """Returned when no ingress could be bracketed inside the search horizon."""

    body: Body
    from_instant: datetime
    reason: TransitionFailureReason
    detail: str | None = None

    def __bool__(self) -> bool:
        return False


TransitionResult = TransitionEvent | TransitionNotFound
