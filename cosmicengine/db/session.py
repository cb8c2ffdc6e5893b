"""Engine and session helpers; callers inject the session factory."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config.settings import DEFAULT_DATABASE_URL

__all__ = [
    "SessionFactory",
    "build_engine",
    "make_session_factory",
    "session_scope",
]

SessionFactory = sessionmaker[Session]


def _postgres_engine_kwargs() -> dict[str, Any]:
    """Return connection pooling settings for Postgres."""

    return {
        "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
        "max_overflow": int(os.getenv("DB_POOL_MAX_OVERFLOW", "10")),
        "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT", "30")),
        "pool_recycle": int(os.getenv("DB_POOL_RECYCLE", "1800")),
        "pool_pre_ping": True,
    }


def build_engine(db_url: str | URL | None = None) -> Engine:
    """Create a SQLAlchemy engine configured from the provided or default URL."""

    resolved_url = make_url(str(db_url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)))
    engine_kwargs: dict[str, Any] = {"echo": False, "future": True}
    backend = resolved_url.get_backend_name()

    if backend in {"postgresql", "postgres"}:
        engine_kwargs.update(_postgres_engine_kwargs())
    elif backend == "sqlite" and resolved_url.database in (None, "", ":memory:"):
        # one shared connection, otherwise every checkout sees an empty database
        engine_kwargs.update(
            poolclass=StaticPool, connect_args={"check_same_thread": False}
        )

    engine = create_engine(resolved_url, **engine_kwargs)

    if backend == "sqlite":

        @event.listens_for(engine, "connect")
        def _sqlite_configure(dbapi_connection, connection_record):  # pragma: no cover - depends on driver
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA journal_mode=WAL;")
                cursor.execute("PRAGMA synchronous=NORMAL;")
            finally:
                cursor.close()

    return engine


def make_session_factory(engine: Engine) -> SessionFactory:
    return sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True
    )


@contextmanager
def session_scope(factory: SessionFactory) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""

    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
