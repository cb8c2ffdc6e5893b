"""Batch scheduling of cosmic snapshots over calendar ranges."""

from __future__ import annotations

from .batch import (
    BatchEphemerisScheduler,
    IndexedTimeline,
    batch_snapshots,
    lookup_transition,
    noon_in_timezone,
    parse_date_key,
)

__all__ = [
    "BatchEphemerisScheduler",
    "IndexedTimeline",
    "batch_snapshots",
    "lookup_transition",
    "noon_in_timezone",
    "parse_date_key",
]
