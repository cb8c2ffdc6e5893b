"""cosmicengine package bootstrap and curated public API surface."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

from .core import Body, ZodiacSign, next_sign, sign_of
from .detectors import TransitionSearch, build_timeline, find_next_transition, iter_transitions
from .ephemeris import EphemerisError, EphemerisOracle, ObserverLocation, SwissEphemerisOracle
from .events import TransitionEvent, TransitionFailureReason, TransitionNotFound
from .patterns import (
    STALENESS_THRESHOLD,
    ComputedPatterns,
    InsightCache,
    PatternInsight,
    PatternService,
    SightingEvent,
    compute_all_patterns,
    is_patterns_stale,
)
from .scheduling import BatchEphemerisScheduler, batch_snapshots, noon_in_timezone
from .snapshot import CosmicSnapshot, MoonPhase, assemble_snapshot, classify_moon_phase, snapshot_at

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("cosmicengine")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"


def get_version() -> str:
    """Return the resolved cosmicengine package version."""

    return __version__


__all__ = [
    "BatchEphemerisScheduler",
    "Body",
    "ComputedPatterns",
    "CosmicSnapshot",
    "EphemerisError",
    "EphemerisOracle",
    "InsightCache",
    "MoonPhase",
    "ObserverLocation",
    "PatternInsight",
    "PatternService",
    "STALENESS_THRESHOLD",
    "SightingEvent",
    "SwissEphemerisOracle",
    "TransitionEvent",
    "TransitionFailureReason",
    "TransitionNotFound",
    "TransitionSearch",
    "ZodiacSign",
    "__version__",
    "assemble_snapshot",
    "batch_snapshots",
    "build_timeline",
    "classify_moon_phase",
    "compute_all_patterns",
    "find_next_transition",
    "get_version",
    "is_patterns_stale",
    "iter_transitions",
    "next_sign",
    "noon_in_timezone",
    "sign_of",
    "snapshot_at",
]
