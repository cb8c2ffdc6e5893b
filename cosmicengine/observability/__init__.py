"""Runtime observability primitives for cosmicengine modules."""

from __future__ import annotations

from .metrics import (
    COMPUTE_ERRORS,
    EPHEMERIS_COMPUTE_DURATION,
    EPHEMERIS_PROBES,
    INSIGHT_CACHE_READS,
    PATTERN_COMPUTE_DURATION,
    TRANSITION_SEARCH_DURATION,
    TRANSITION_SEARCH_FAILURES,
    ensure_metrics_registered,
)

__all__ = [
    "COMPUTE_ERRORS",
    "EPHEMERIS_COMPUTE_DURATION",
    "EPHEMERIS_PROBES",
    "INSIGHT_CACHE_READS",
    "PATTERN_COMPUTE_DURATION",
    "TRANSITION_SEARCH_DURATION",
    "TRANSITION_SEARCH_FAILURES",
    "ensure_metrics_registered",
]
