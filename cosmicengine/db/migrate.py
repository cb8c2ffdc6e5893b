"""Alembic helpers for the cosmicengine schema."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from typing import TYPE_CHECKING

from sqlalchemy.engine import make_url

if TYPE_CHECKING:  # pragma: no cover - imported for static type checking only.
    from alembic.config import Config

__all__ = [
    "Migrator",
    "downgrade_database",
    "get_alembic_config",
    "upgrade_database",
]


def get_alembic_config(db_url: str) -> Config:
    """Build an in-memory Alembic config targeting ``db_url``."""

    from alembic.config import Config

    cfg = Config()
    migrations_root = resources.files(__package__) / "migrations"
    cfg.set_main_option("script_location", str(migrations_root))
    cfg.set_main_option("sqlalchemy.url", make_url(db_url).render_as_string(hide_password=False))
    cfg.set_main_option("timezone", "UTC")
    cfg.attributes.setdefault("configure_logger", False)
    return cfg


@dataclass(slots=True)
class Migrator:
    """Convenience wrapper for applying migrations to one database."""

    db_url: str

    def upgrade(self, revision: str = "head") -> None:
        from alembic import command

        command.upgrade(get_alembic_config(self.db_url), revision)

    def downgrade(self, revision: str = "base") -> None:
        from alembic import command

        command.downgrade(get_alembic_config(self.db_url), revision)

    def current(self) -> str | None:
        """Return the Alembic revision recorded in the database."""

        from alembic.runtime.migration import MigrationContext
        from sqlalchemy import create_engine
        from sqlalchemy.pool import NullPool

        engine = create_engine(self.db_url, future=True, poolclass=NullPool)
        try:
            with engine.begin() as conn:
                return MigrationContext.configure(conn).get_current_revision()
        finally:
            engine.dispose()


def upgrade_database(db_url: str, revision: str = "head") -> None:
    Migrator(db_url).upgrade(revision)


def downgrade_database(db_url: str, revision: str = "base") -> None:
    Migrator(db_url).downgrade(revision)
