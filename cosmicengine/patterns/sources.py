"""Readers for the user's sighting log."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sqlalchemy import func, select

from ..db.models import SignalSighting, ensure_utc_column
from ..db.session import SessionFactory, session_scope
from .models import SightingEvent

__all__ = ["SightingReader", "SqlSightingReader"]


@runtime_checkable
class SightingReader(Protocol):
    """Read-only access to one user's sightings."""

    def count(self, user_id: str) -> int: ...

    def events(self, user_id: str) -> list[SightingEvent]: ...


class SqlSightingReader:
    """:class:`SightingReader` over the ``signal_sightings`` table."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def count(self, user_id: str) -> int:
        with session_scope(self._session_factory) as session:
            total = session.scalar(
                select(func.count()).select_from(SignalSighting).where(SignalSighting.user_id == user_id)
            )
        return int(total or 0)

    def events(self, user_id: str) -> list[SightingEvent]:
        with session_scope(self._session_factory) as session:
            rows = session.execute(
                select(
                    SignalSighting.number,
                    SignalSighting.timestamp,
                    SignalSighting.mood_tags,
                    SignalSighting.activity,
                    SignalSighting.tz,
                ).where(SignalSighting.user_id == user_id)
            ).all()
        return [
            SightingEvent(
                number=row.number,
                timestamp=ensure_utc_column(row.timestamp),
                mood_tags=row.mood_tags,
                activity=row.activity,
                tz=row.tz,
            )
            for row in rows
        ]
