"""Prometheus metric definitions shared across cosmicengine components."""

from __future__ import annotations

from collections.abc import Iterable

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

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


EPHEMERIS_PROBES = Counter(
    "cosmicengine_ephemeris_probes_total",
    "Total longitude probes issued to the ephemeris oracle by the numeric core.",
    ("body",),
    registry=None,
)

EPHEMERIS_COMPUTE_DURATION = Histogram(
    "cosmicengine_ephemeris_compute_duration_seconds",
    "Duration of Swiss ephemeris longitude computations.",
    ("body",),
    registry=None,
)

TRANSITION_SEARCH_DURATION = Histogram(
    "cosmicengine_transition_search_duration_seconds",
    "Duration of next sign ingress searches.",
    ("body",),
    registry=None,
)

TRANSITION_SEARCH_FAILURES = Counter(
    "cosmicengine_transition_search_failures_total",
    "Sign ingress searches that could not bracket a transition.",
    ("body", "reason"),
    registry=None,
)

INSIGHT_CACHE_READS = Counter(
    "cosmicengine_insight_cache_reads_total",
    "Insight cache reads grouped by outcome (miss, fresh, stale).",
    ("outcome",),
    registry=None,
)

PATTERN_COMPUTE_DURATION = Histogram(
    "cosmicengine_pattern_compute_duration_seconds",
    "Duration of full pattern analyzer runs over a user's sighting log.",
    registry=None,
)

COMPUTE_ERRORS = Counter(
    "cosmicengine_compute_errors_total",
    "Count of runtime failures across compute-heavy routines.",
    ("component", "error"),
    registry=None,
)


def _iter_metrics() -> Iterable[Counter | Histogram]:
    yield EPHEMERIS_PROBES
    yield EPHEMERIS_COMPUTE_DURATION
    yield TRANSITION_SEARCH_DURATION
    yield TRANSITION_SEARCH_FAILURES
    yield INSIGHT_CACHE_READS
    yield PATTERN_COMPUTE_DURATION
    yield COMPUTE_ERRORS


def ensure_metrics_registered(
    registry: CollectorRegistry | None = None,
) -> None:
    """Register shared metrics with ``registry`` if not already present."""

    target = registry or REGISTRY
    for metric in _iter_metrics():
        try:
            target.register(metric)
        except ValueError:
            # Prometheus raises when a metric name already exists in the registry.
            continue
