"""Angle and rounding utilities shared across cosmicengine modules."""

from __future__ import annotations

import math

__all__ = [
    "norm360",
    "forward_separation",
    "round_half_up",
]


def norm360(x: float) -> float:
    """Normalize angle to [0, 360)."""

    y = math.fmod(x, 360.0)
    y = y + 360.0 if y < 0 else y
    # fmod of a tiny negative value can round up to exactly 360.0
    return 0.0 if y >= 360.0 else y


def forward_separation(a: float, b: float) -> float:
    """Return the forward angular distance travelled from ``a`` to ``b``.

    The result lies in [0, 360), e.g. ``forward_separation(350, 80) == 90``.
    """

    return norm360(b - a)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` decimals with halves rounded upward.

    :func:`round` uses banker's rounding which would report 2.5 as 2; the
    insight payloads are expected to read 3.
    """

    factor = 10.0**digits
    return math.floor(value * factor + 0.5) / factor
