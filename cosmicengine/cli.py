"""Developer command line interface for cosmicengine."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, List, Optional

import typer

from .boot import configure_logging
from .config.settings import Settings, load_settings
from .core.bodies import Body
from .core.time import from_iso
from .db.migrate import upgrade_database
from .db.session import build_engine, make_session_factory
from .detectors.transitions import TransitionSearch
from .ephemeris.oracle import EphemerisError, EphemerisOracle, probe_longitude
from .ephemeris.swiss import SwissEphemerisOracle
from .events import TransitionNotFound
from .patterns.cache import InsightCache
from .patterns.models import PatternThresholds
from .patterns.service import PatternService
from .patterns.sources import SqlSightingReader
from .scheduling.batch import BatchEphemerisScheduler, parse_date_key

__all__ = ["CliState", "app"]

app = typer.Typer(help="Cosmic event and pattern insight engine.")


@dataclass
class CliState:
    """Objects shared by every command; tests may pass their own via ``obj``."""

    settings: Settings = field(default_factory=Settings)
    oracle_factory: Callable[[Settings], EphemerisOracle] = SwissEphemerisOracle.from_settings

    def oracle(self) -> EphemerisOracle:
        try:
            return self.oracle_factory(self.settings)
        except EphemerisError as exc:
            typer.echo(f"ephemeris unavailable: {exc}", err=True)
            raise typer.Exit(code=2) from exc


def _emit(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _state(ctx: typer.Context) -> CliState:
    return ctx.ensure_object(CliState)


@app.callback(invoke_without_command=True)
def _bootstrap(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", help="Settings YAML file (defaults to $COSMICENGINE_HOME/config.yaml)."
    ),
) -> None:
    """Load settings and configure logging before executing subcommands."""

    if not isinstance(ctx.obj, CliState):
        ctx.obj = CliState(settings=load_settings(config))
    configure_logging(level=ctx.obj.settings.logging.level)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("transition")
def transition(
    ctx: typer.Context,
    body: str = typer.Argument(..., help="Body to search: sun or moon."),
    at: Optional[str] = typer.Option(None, "--at", help="Start instant (ISO-8601, default now)."),
) -> None:
    """Print the next sign ingress of BODY after the start instant."""

    state = _state(ctx)
    try:
        member = Body.parse(body)
        moment = from_iso(at) if at else datetime.now(UTC)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    search = TransitionSearch.from_settings(state.settings)
    oracle = state.oracle()
    longitude = probe_longitude(oracle, member, moment, search.location)
    result = search.find(oracle, member, longitude, moment)
    if isinstance(result, TransitionNotFound):
        _emit({"body": member.value, "error": result.reason.value, "detail": result.detail})
        raise typer.Exit(code=1)
    _emit({**result.to_dict(), "from_longitude": round(longitude, 4)})


@app.command("snapshots")
def snapshots(
    ctx: typer.Context,
    dates: List[str] = typer.Argument(..., help="Calendar dates (YYYY-MM-DD)."),
    tz: str = typer.Option("UTC", "--tz", help="IANA timezone used to resolve local noon."),
) -> None:
    """Print one cosmic snapshot per date, resolved at local noon."""

    state = _state(ctx)
    for value in dates:
        try:
            parse_date_key(value)
        except ValueError as exc:
            raise typer.BadParameter(f"invalid date '{value}': {exc}") from exc

    settings = state.settings
    scheduler = BatchEphemerisScheduler(
        state.oracle(),
        search=TransitionSearch.from_settings(settings),
        lookahead=timedelta(days=settings.transitions.lookahead_days),
    )
    results = scheduler.snapshots(dates, tz)
    _emit({key: snapshot.to_dict() for key, snapshot in results.items()})


@app.command("patterns")
def patterns(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="User whose sightings are analysed."),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Override the database URL."),
    refresh: bool = typer.Option(False, "--refresh", help="Recompute even when the cache is fresh."),
) -> None:
    """Print the user's pattern insights, recomputing stale caches."""

    settings = _state(ctx).settings
    factory = make_session_factory(build_engine(database_url or settings.database.url))
    service = PatternService(
        SqlSightingReader(factory),
        InsightCache.from_settings(settings, factory),
        thresholds=PatternThresholds.from_settings(settings),
    )
    bundle = service.recompute(user_id) if refresh else service.get_patterns(user_id)
    _emit(bundle.model_dump(mode="json"))


@app.command("migrate")
def migrate(
    ctx: typer.Context,
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Override the database URL."),
    revision: str = typer.Option("head", "--revision", help="Target Alembic revision."),
) -> None:
    """Apply schema migrations to the configured database."""

    url = database_url or _state(ctx).settings.database.url
    upgrade_database(url, revision)
    typer.echo(f"database at {revision}: {url}")
