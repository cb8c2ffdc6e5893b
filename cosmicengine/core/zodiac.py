"""Zodiac sign helpers."""

from __future__ import annotations

import enum
import math

from ..utils.angles import norm360

__all__ = [
    "ZodiacSign",
    "sign_index",
    "sign_of",
    "next_sign",
]


class ZodiacSign(str, enum.Enum):
    """The twelve 30° arcs of ecliptic longitude in cyclic order."""

    aries = "aries"
    taurus = "taurus"
    gemini = "gemini"
    cancer = "cancer"
    leo = "leo"
    virgo = "virgo"
    libra = "libra"
    scorpio = "scorpio"
    sagittarius = "sagittarius"
    capricorn = "capricorn"
    aquarius = "aquarius"
    pisces = "pisces"

    @property
    def index(self) -> int:
        """Zero-based position of the sign (0 = Aries)."""

        return _ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value.capitalize()


_ORDER: tuple[ZodiacSign, ...] = tuple(ZodiacSign)


def sign_index(longitude: float) -> int:
    """Return the zero-based zodiac sign index for ``longitude`` in degrees."""

    return int(math.floor(norm360(longitude) / 30.0)) % 12


def sign_of(longitude: float) -> ZodiacSign:
    """Return the :class:`ZodiacSign` containing ``longitude``."""

    return _ORDER[sign_index(longitude)]


def next_sign(sign: ZodiacSign) -> ZodiacSign:
    """Return the sign that follows ``sign`` (Pisces wraps to Aries)."""

    return _ORDER[(sign.index + 1) % 12]
