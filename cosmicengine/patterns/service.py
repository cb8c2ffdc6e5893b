"""Serve cached pattern insights, recomputing when the cache is stale."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from .cache import InsightCache
from .compute import compute_all_patterns
from .models import ComputedPatterns, PatternThresholds
from .sources import SightingReader

__all__ = ["PatternService"]

LOG = logging.getLogger(__name__)


class PatternService:
    """Read-through orchestration of the sighting log, analyzers and cache."""

    def __init__(
        self,
        reader: SightingReader,
        cache: InsightCache,
        *,
        thresholds: PatternThresholds | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.reader = reader
        self.cache = cache
        self.thresholds = thresholds or PatternThresholds()
        self._clock = clock or (lambda: datetime.now(UTC))

    def get_patterns(self, user_id: str) -> ComputedPatterns:
        """Return fresh insights for ``user_id``.

        The cached bundle is served while fewer than the staleness threshold
        of new sightings have been logged; otherwise the whole log is
        re-analysed and the cache replaced before returning.
        """

        count = self.reader.count(user_id)
        cached = self.cache.read(user_id, count)
        if cached is not None and not cached.is_stale:
            return cached
        return self.recompute(user_id, count)

    def recompute(self, user_id: str, count: int | None = None) -> ComputedPatterns:
        if count is None:
            count = self.reader.count(user_id)
        events = self.reader.events(user_id)
        bundle = compute_all_patterns(
            events, count, now=self._clock(), thresholds=self.thresholds
        )
        written = self.cache.write(user_id, bundle)
        LOG.info(
            "recomputed %d pattern insights for user %s from %d sightings",
            written,
            user_id,
            len(events),
        )
        return bundle
