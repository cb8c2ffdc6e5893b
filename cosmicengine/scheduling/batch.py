"""Calendar batches of cosmic snapshots sharing one timeline per body.

Looking up the next ingress independently for every day of a month view
costs several ephemeris probes per day and body. The scheduler instead
builds one ingress timeline per luminary covering the whole requested span
and answers each date from those timelines, so the per-date cost drops to
the two longitude probes needed for the date's own chart.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.bodies import Body
from ..core.time import ensure_utc
from ..detectors.timeline import DEFAULT_LOOKAHEAD, build_timeline
from ..detectors.transitions import TransitionSearch
from ..ephemeris.oracle import EphemerisOracle
from ..events import TransitionEvent
from ..snapshot.assembler import CosmicSnapshot, assemble_snapshot, luminary_positions

__all__ = [
    "BatchEphemerisScheduler",
    "DateKey",
    "IndexedTimeline",
    "batch_snapshots",
    "lookup_transition",
    "noon_in_timezone",
    "parse_date_key",
]

LOG = logging.getLogger(__name__)

DateKey = str | date

_NOON = time(12, 0)


def parse_date_key(key: DateKey) -> date:
    """Return the calendar date for ``key`` (``YYYY-MM-DD`` or a :class:`date`).

    Raises :class:`ValueError` for malformed strings.
    """

    if isinstance(key, datetime):
        return key.date()
    if isinstance(key, date):
        return key
    return date.fromisoformat(str(key).strip())


def _resolve_zone(timezone: str) -> ZoneInfo | None:
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        LOG.warning(
            "unknown timezone %r; using UTC noon",
            timezone,
            extra={"err_code": "TIMEZONE_FALLBACK", "timezone": timezone, "error": str(exc)},
        )
        return None


def noon_in_timezone(key: DateKey, timezone: str) -> datetime:
    """Return the UTC instant of local noon on ``key`` in ``timezone``.

    The zone's UTC offset is taken at UTC noon of the same date. Unknown
    zones fall back to UTC noon.
    """

    noon_utc = datetime.combine(parse_date_key(key), _NOON, tzinfo=UTC)
    zone = _resolve_zone(timezone)
    if zone is None:
        return noon_utc
    offset = noon_utc.astimezone(zone).utcoffset() or timedelta(0)
    return noon_utc - offset


@dataclass(frozen=True)
class IndexedTimeline:
    """A timeline paired with its sorted instants for bisection."""

    events: tuple[TransitionEvent, ...]
    instants: tuple[datetime, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "instants", tuple(event.instant for event in self.events))

    @classmethod
    def from_events(cls, events: Iterable[TransitionEvent]) -> IndexedTimeline:
        return cls(tuple(sorted(events, key=lambda event: event.instant)))

    def __len__(self) -> int:
        return len(self.events)


def lookup_transition(timeline: IndexedTimeline, query: datetime) -> TransitionEvent | None:
    """Return the earliest event strictly after ``query`` or ``None``."""

    idx = bisect_right(timeline.instants, ensure_utc(query))
    if idx >= len(timeline.events):
        return None
    return timeline.events[idx]


class BatchEphemerisScheduler:
    """Resolve many calendar dates against shared per-body timelines."""

    def __init__(
        self,
        oracle: EphemerisOracle,
        *,
        search: TransitionSearch | None = None,
        lookahead: timedelta = DEFAULT_LOOKAHEAD,
    ) -> None:
        self.oracle = oracle
        self.search = search or TransitionSearch()
        self.lookahead = lookahead

    def timelines(self, start: datetime, end: datetime) -> dict[Body, IndexedTimeline]:
        return {
            body: IndexedTimeline.from_events(
                build_timeline(
                    self.oracle,
                    body,
                    start,
                    end,
                    lookahead=self.lookahead,
                    search=self.search,
                )
            )
            for body in (Body.moon, Body.sun)
        }

    def snapshots(
        self, date_keys: Sequence[DateKey], timezone: str
    ) -> dict[str, CosmicSnapshot]:
        """Return one :class:`CosmicSnapshot` per date key, in input order."""

        if not date_keys:
            return {}

        noons = {
            (key if isinstance(key, str) else parse_date_key(key).isoformat()): noon_in_timezone(
                key, timezone
            )
            for key in date_keys
        }
        timelines = self.timelines(min(noons.values()), max(noons.values()))
        LOG.debug(
            "batch of %d dates resolved against %d moon / %d sun ingresses",
            len(noons),
            len(timelines[Body.moon]),
            len(timelines[Body.sun]),
        )

        results: dict[str, CosmicSnapshot] = {}
        for key, noon in noons.items():
            positions = luminary_positions(self.oracle, noon, self.search.location)
            results[key] = assemble_snapshot(
                noon,
                positions.sun,
                positions.moon,
                sun_transition=lookup_transition(timelines[Body.sun], noon),
                moon_transition=lookup_transition(timelines[Body.moon], noon),
            )
        return results


def batch_snapshots(
    oracle: EphemerisOracle,
    date_keys: Sequence[DateKey],
    timezone: str,
    *,
    search: TransitionSearch | None = None,
    lookahead: timedelta = DEFAULT_LOOKAHEAD,
) -> dict[str, CosmicSnapshot]:
    """Functional shortcut for :meth:`BatchEphemerisScheduler.snapshots`."""

    scheduler = BatchEphemerisScheduler(oracle, search=search, lookahead=lookahead)
    return scheduler.snapshots(date_keys, timezone)
