"""Cosmic snapshot assembly and moon phase classification."""

from __future__ import annotations

from .assembler import (
    BodyPlacement,
    CosmicSnapshot,
    LuminaryPositions,
    assemble_snapshot,
    format_degree,
    luminary_positions,
    snapshot_at,
)
from .phases import (
    MoonPhase,
    classify_moon_phase,
    lunar_elongation,
    moon_phase_emoji,
    moon_phase_name,
)

__all__ = [
    "BodyPlacement",
    "CosmicSnapshot",
    "LuminaryPositions",
    "MoonPhase",
    "assemble_snapshot",
    "classify_moon_phase",
    "format_degree",
    "luminary_positions",
    "lunar_elongation",
    "moon_phase_emoji",
    "moon_phase_name",
    "snapshot_at",
]
