from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cosmicengine.cli import CliState, app
from cosmicengine.config import Settings
from cosmicengine.config.settings import LoggingCfg
from cosmicengine.core.bodies import Body
from cosmicengine.db.models import SignalSighting
from cosmicengine.db.session import build_engine, make_session_factory, session_scope
from cosmicengine.ephemeris.oracle import EphemerisError

from .helpers import LinearOracle

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet(monkeypatch, restore_root_logging):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield


def _state(oracle: LinearOracle | None = None) -> CliState:
    return CliState(
        settings=Settings(logging=LoggingCfg(level="ERROR")),
        oracle_factory=lambda _settings: oracle or LinearOracle(),
    )


def _invoke(args: list[str], state: CliState | None = None):
    return runner.invoke(app, args, obj=state or _state())


def test_help_without_command() -> None:
    result = _invoke([])
    assert result.exit_code == 0
    assert "transition" in result.stdout


def test_transition() -> None:
    result = _invoke(["transition", "Moon", "--at", "2024-01-01T00:00:00Z"])

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["body"] == "moon"
    assert (payload["from_sign"], payload["to_sign"]) == ("cancer", "leo")
    assert payload["from_longitude"] == 100.0
    assert payload["instant"].startswith("2024-01-02T")


def test_transition_not_found_exits_one() -> None:
    stuck = LinearOracle(speeds={Body.moon: 0.0})
    result = _invoke(["transition", "moon", "--at", "2024-01-01T00:00:00Z"], _state(stuck))

    assert result.exit_code == 1
    assert json.loads(result.stdout)["error"] == "horizon_exceeded"


@pytest.mark.parametrize("args", [["transition", "pluto"], ["transition", "sun", "--at", "noonish"]])
def test_transition_rejects_bad_input(args: list[str]) -> None:
    assert _invoke(args).exit_code == 2


def test_unavailable_ephemeris_exits_two() -> None:
    def broken(_settings):
        raise EphemerisError("no pyswisseph")

    state = CliState(settings=Settings(logging=LoggingCfg(level="ERROR")), oracle_factory=broken)
    result = _invoke(["transition", "sun"], state)
    assert result.exit_code == 2


def test_snapshots() -> None:
    result = _invoke(["snapshots", "2024-01-02", "2024-01-01", "--tz", "Asia/Kolkata"])

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert list(payload) == ["2024-01-02", "2024-01-01"]
    day = payload["2024-01-01"]
    assert day["instant"] == "2024-01-01T06:30:00Z"
    assert day["sun"]["sign"] == "capricorn"
    assert day["transitions"]["moon"]["to_sign"] == "leo"


def test_snapshots_rejects_bad_date() -> None:
    assert _invoke(["snapshots", "2024-02-30"]).exit_code == 2


def test_migrate_then_patterns(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    migrated = _invoke(["migrate", "--database-url", url])
    assert migrated.exit_code == 0, migrated.stdout

    engine = build_engine(url)
    now = datetime.now(UTC)
    with session_scope(make_session_factory(engine)) as session:
        session.add_all(
            SignalSighting(user_id="u1", number="7", timestamp=now - timedelta(hours=idx), mood_tags=["calm"])
            for idx in range(6)
        )
    engine.dispose()

    result = _invoke(["patterns", "u1", "--database-url", url])

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["sighting_count"] == 6
    assert payload["is_stale"] is False
    assert [item["key"] for item in payload["mood_correlation"]] == ["top_mood_7", "calm_numbers"]

    refreshed = _invoke(["patterns", "u1", "--database-url", url, "--refresh"])
    assert refreshed.exit_code == 0
