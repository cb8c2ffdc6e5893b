"""SQLAlchemy models for cached pattern insights and the sighting log.

``user_pattern_insights`` is owned by the insight cache. ``signal_sightings``
belongs to the event-logging subsystem; it is mapped here read-only so the
pattern service can count and load a user's sightings.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import Base

__all__ = ["SignalSighting", "UserPatternInsight", "ensure_utc_column"]


def ensure_utc_column(dt: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on ``DateTime(timezone=True)``; restore UTC."""

    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _uuid_hex() -> str:
    return uuid4().hex


class UserPatternInsight(Base):
    """One cached insight row; a user's rows always come from one computation."""

    __tablename__ = "user_pattern_insights"
    __table_args__ = (
        Index("ix_user_pattern_insights_user_type", "user_id", "insight_type"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    insight_type: Mapped[str] = mapped_column(String(32), nullable=False)
    insight_key: Mapped[str] = mapped_column(String(128), nullable=False)
    insight_value: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    computed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sighting_count_at_computation: Mapped[int] = mapped_column(Integer, nullable=False)


class SignalSighting(Base):
    """A number sighting logged by a user."""

    __tablename__ = "signal_sightings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_uuid_hex)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    number: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    mood_tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    activity: Mapped[str | None] = mapped_column(String(64), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )
    tz: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
