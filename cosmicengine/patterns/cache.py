"""Per-user insight cache with count-based staleness.

Rows for a user always come from a single computation. A write replaces
the whole set inside one transaction, serialised per user, so readers see
either the previous or the new set and never a half-written one.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from ..db.models import UserPatternInsight, ensure_utc_column
from ..db.session import SessionFactory, build_engine, make_session_factory, session_scope
from ..observability import INSIGHT_CACHE_READS
from .models import ComputedPatterns, PatternInsight

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config.settings import Settings

__all__ = [
    "STALENESS_THRESHOLD",
    "InsightCache",
    "is_patterns_stale",
]

LOG = logging.getLogger(__name__)

STALENESS_THRESHOLD = 5
"""New sightings needed before cached insights are recomputed."""


def is_patterns_stale(
    cached_count: int | None,
    current_count: int,
    threshold: int = STALENESS_THRESHOLD,
) -> bool:
    """Return ``True`` when the log grew by ``threshold`` or more since caching.

    A missing cache (``cached_count is None``) is always stale.
    """

    if cached_count is None:
        return True
    return current_count - cached_count >= threshold


class InsightCache:
    """Stores each user's :class:`ComputedPatterns` as insight rows."""

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        staleness_threshold: int = STALENESS_THRESHOLD,
    ) -> None:
        self._session_factory = session_factory
        self.staleness_threshold = staleness_threshold
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_factory: SessionFactory | None = None,
    ) -> InsightCache:
        factory = session_factory or make_session_factory(build_engine(settings.database.url))
        return cls(factory, staleness_threshold=settings.patterns.staleness_threshold)

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(user_id, threading.Lock())

    # ---- Public API ----

    def read(self, user_id: str, current_count: int) -> ComputedPatterns | None:
        """Return the cached bundle for ``user_id`` or ``None`` when absent."""

        with session_scope(self._session_factory) as session:
            rows = session.scalars(
                select(UserPatternInsight)
                .where(UserPatternInsight.user_id == user_id)
                .order_by(UserPatternInsight.id)
            ).all()
            insights = [
                PatternInsight(
                    type=row.insight_type,
                    key=row.insight_key,
                    computed_at=ensure_utc_column(row.computed_at),
                    sighting_count_at_computation=row.sighting_count_at_computation,
                    value=row.insight_value,
                )
                for row in rows
            ]

        if not insights:
            INSIGHT_CACHE_READS.labels(outcome="miss").inc()
            LOG.debug("insight cache miss for user %s", user_id)
            return None

        cached_count = max(item.sighting_count_at_computation for item in insights)
        stale = is_patterns_stale(cached_count, current_count, self.staleness_threshold)
        outcome = "stale" if stale else "fresh"
        INSIGHT_CACHE_READS.labels(outcome=outcome).inc()
        LOG.debug(
            "insight cache %s for user %s (cached=%d current=%d)",
            outcome,
            user_id,
            cached_count,
            current_count,
        )
        return ComputedPatterns.from_insights(
            insights,
            is_stale=stale,
            last_computed_at=max(item.computed_at for item in insights),
            sighting_count=cached_count,
        )

    def write(self, user_id: str, bundle: ComputedPatterns) -> int:
        """Replace every cached row for ``user_id``; return the rows written."""

        rows = [
            UserPatternInsight(
                user_id=user_id,
                insight_type=insight.type.value,
                insight_key=insight.key,
                insight_value=insight.value.model_dump(mode="json"),
                computed_at=insight.computed_at,
                sighting_count_at_computation=insight.sighting_count_at_computation,
            )
            for insight in bundle.insights()
        ]
        with self._lock_for(user_id), session_scope(self._session_factory) as session:
            session.execute(delete(UserPatternInsight).where(UserPatternInsight.user_id == user_id))
            session.add_all(rows)
        return len(rows)

    def clear(self, user_id: str) -> int:
        """Delete all cached rows for ``user_id``; return how many were removed."""

        with self._lock_for(user_id), session_scope(self._session_factory) as session:
            result = session.execute(
                delete(UserPatternInsight).where(UserPatternInsight.user_id == user_id)
            )
        return int(result.rowcount or 0)
