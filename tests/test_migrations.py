from __future__ import annotations

from pathlib import Path

from sqlalchemy import inspect

from cosmicengine.db.migrate import Migrator, downgrade_database, upgrade_database
from cosmicengine.db.session import build_engine, make_session_factory
from cosmicengine.patterns.cache import InsightCache
from cosmicengine.patterns.compute import compute_all_patterns

from .helpers import sighting


def _tables(url: str) -> set[str]:
    engine = build_engine(url)
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


def test_upgrade_and_downgrade(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"

    upgrade_database(url)

    assert Migrator(url).current() == "20261017_0001"
    assert {"user_pattern_insights", "signal_sightings"} <= _tables(url)
    engine = build_engine(url)
    indexes = {index["name"] for index in inspect(engine).get_indexes("user_pattern_insights")}
    engine.dispose()
    assert "ix_user_pattern_insights_user_type" in indexes

    downgrade_database(url)

    assert Migrator(url).current() is None
    assert not {"user_pattern_insights", "signal_sightings"} & _tables(url)


def test_cache_runs_on_migrated_schema(tmp_path: Path, now) -> None:
    url = f"sqlite:///{tmp_path / 'cache.db'}"
    upgrade_database(url)
    engine = build_engine(url)
    cache = InsightCache(make_session_factory(engine))
    bundle = compute_all_patterns([sighting("7", now)], 1, now=now)

    try:
        cache.write("u1", bundle)
        assert cache.read("u1", 1).insights() == bundle.insights()
    finally:
        engine.dispose()
