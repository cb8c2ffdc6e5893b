"""Core value types for the cosmic event engine."""

from __future__ import annotations

from .bodies import Body, BodyMotion, motion_for
from .time import SECONDS_PER_DAY, ensure_utc, to_iso
from .zodiac import ZodiacSign, next_sign, sign_index, sign_of

__all__ = [
    "Body",
    "BodyMotion",
    "SECONDS_PER_DAY",
    "ZodiacSign",
    "ensure_utc",
    "motion_for",
    "next_sign",
    "sign_index",
    "sign_of",
    "to_iso",
]
