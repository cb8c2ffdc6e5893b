"""Persistence layer: declarative models, sessions and migrations."""

from __future__ import annotations

from .base import NAMING, Base
from .migrate import Migrator, downgrade_database, upgrade_database
from .models import SignalSighting, UserPatternInsight
from .session import SessionFactory, build_engine, make_session_factory, session_scope

__all__ = [
    "Base",
    "Migrator",
    "NAMING",
    "SessionFactory",
    "SignalSighting",
    "UserPatternInsight",
    "build_engine",
    "downgrade_database",
    "make_session_factory",
    "session_scope",
    "upgrade_database",
]
