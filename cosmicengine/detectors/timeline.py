"""Ordered ingress timelines built from repeated transition searches."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime, timedelta
from itertools import takewhile

from ..core.bodies import Body
from ..core.time import ensure_utc
from ..ephemeris.oracle import EphemerisError, EphemerisOracle, probe_longitude
from ..events import TransitionEvent, TransitionNotFound
from .transitions import TransitionSearch

__all__ = [
    "DEFAULT_LOOKAHEAD",
    "RESUME_OFFSET",
    "build_timeline",
    "iter_transitions",
]

LOG = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD = timedelta(days=3)
RESUME_OFFSET = timedelta(minutes=1)


def iter_transitions(
    oracle: EphemerisOracle,
    body: Body | str,
    start: datetime,
    *,
    search: TransitionSearch | None = None,
) -> Iterator[TransitionEvent]:
    """Yield successive ingresses of ``body`` after ``start``.

    Each search resumes one minute past the previous ingress so the same
    crossing is never reported twice. The iterator ends at the first search
    failure; otherwise it is unbounded and callers must stop consuming.
    """

    member = Body.parse(body)
    search = search or TransitionSearch()
    cursor = ensure_utc(start)
    while True:
        try:
            longitude = probe_longitude(oracle, member, cursor, search.location)
        except EphemerisError as exc:
            LOG.warning(
                "timeline for %s stopped at %s: %s",
                member.value,
                cursor.isoformat(),
                exc,
                extra={"err_code": "EPHEMERIS_ERROR", "body": member.value},
            )
            return
        result = search.find(oracle, member, longitude, cursor)
        if isinstance(result, TransitionNotFound):
            LOG.debug(
                "timeline for %s stopped at %s (%s)",
                member.value,
                cursor.isoformat(),
                result.reason.value,
            )
            return
        yield result
        cursor = result.instant + RESUME_OFFSET


def build_timeline(
    oracle: EphemerisOracle,
    body: Body | str,
    start: datetime,
    end: datetime,
    *,
    lookahead: timedelta = DEFAULT_LOOKAHEAD,
    search: TransitionSearch | None = None,
) -> list[TransitionEvent]:
    """Return every ingress of ``body`` from ``start`` up to ``end + lookahead``.

    A failed search truncates the timeline; the partial list is returned.
    """

    limit = ensure_utc(end) + lookahead
    events = iter_transitions(oracle, body, start, search=search)
    return list(takewhile(lambda event: event.instant <= limit, events))
