"""Sign ingress search for the luminaries.

The search seeds a time bracket from the body's average daily motion,
verifies that the lower bound still lies in the current sign and the upper
bound already lies in the following sign, then bisects until the bracket is
narrower than the requested precision. Only the bisection invariant decides
the answer; the motion estimate merely keeps the number of probes small.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from time import perf_counter
from typing import TYPE_CHECKING

from ..core.bodies import Body, motion_for
from ..core.time import ensure_utc
from ..core.zodiac import ZodiacSign, next_sign, sign_of
from ..ephemeris.oracle import GREENWICH, EphemerisError, EphemerisOracle, ObserverLocation, probe_longitude
from ..events import TransitionEvent, TransitionFailureReason, TransitionNotFound, TransitionResult
from ..observability import TRANSITION_SEARCH_DURATION, TRANSITION_SEARCH_FAILURES
from ..utils.angles import norm360

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config.settings import Settings

__all__ = [
    "DEFAULT_MAX_EXTENSIONS",
    "DEFAULT_PRECISION",
    "TransitionSearch",
    "find_next_transition",
]

LOG = logging.getLogger(__name__)

DEFAULT_PRECISION = timedelta(seconds=60)
DEFAULT_MAX_EXTENSIONS = 5

_EARLY_FACTOR = 0.8
_LATE_FACTOR = 1.5
_EXTENSION_FACTOR = 0.5


@dataclass(frozen=True)
class TransitionSearch:
    """Tunables for :func:`find_next_transition` bundled for reuse."""

    precision: timedelta = DEFAULT_PRECISION
    max_extensions: int = DEFAULT_MAX_EXTENSIONS
    location: ObserverLocation = GREENWICH

    @classmethod
    def from_settings(cls, settings: Settings) -> TransitionSearch:
        eph = settings.ephemeris
        return cls(
            precision=timedelta(seconds=settings.transitions.precision_seconds),
            max_extensions=settings.transitions.max_extensions,
            location=ObserverLocation(
                latitude_deg=eph.reference_latitude,
                longitude_deg=eph.reference_longitude,
            ),
        )

    def find(
        self,
        oracle: EphemerisOracle,
        body: Body | str,
        current_longitude: float,
        from_instant: datetime,
    ) -> TransitionResult:
        member = Body.parse(body)
        start = perf_counter()
        try:
            return self._search(oracle, member, current_longitude, ensure_utc(from_instant))
        except EphemerisError as exc:
            return self._failure(
                member, from_instant, TransitionFailureReason.ephemeris_error, str(exc)
            )
        finally:
            TRANSITION_SEARCH_DURATION.labels(body=member.value).observe(perf_counter() - start)

    # ---- internals ----

    def _sign_at(self, oracle: EphemerisOracle, body: Body, instant: datetime) -> ZodiacSign:
        return sign_of(probe_longitude(oracle, body, instant, self.location))

    def _search(
        self,
        oracle: EphemerisOracle,
        body: Body,
        current_longitude: float,
        from_instant: datetime,
    ) -> TransitionResult:
        motion = motion_for(body)
        current_longitude = norm360(current_longitude)
        current = sign_of(current_longitude)
        target = next_sign(current)

        degrees_remaining = 30.0 - (current_longitude % 30.0)
        # never narrower than one precision step
        estimate = max(timedelta(days=degrees_remaining / motion.degrees_per_day), self.precision)
        horizon = from_instant + motion.max_search

        low = max(from_instant + estimate * _EARLY_FACTOR, from_instant)
        high = min(from_instant + estimate * _LATE_FACTOR, horizon)
        if low > high:
            low = from_instant

        if self._sign_at(oracle, body, low) is not current:
            low = from_instant

        high_sign = self._sign_at(oracle, body, high)
        extensions = 0
        while high_sign is not target and extensions < self.max_extensions:
            high += estimate * _EXTENSION_FACTOR
            if high > horizon:
                return self._failure(
                    body,
                    from_instant,
                    TransitionFailureReason.horizon_exceeded,
                    f"no {target.value} ingress within {motion.max_search}",
                )
            high_sign = self._sign_at(oracle, body, high)
            extensions += 1

        if high_sign is not target:
            return self._failure(
                body,
                from_instant,
                TransitionFailureReason.extension_cap,
                f"{body.value} not in {target.value} after {extensions} extensions",
            )

        while high - low > self.precision:
            mid = low + (high - low) // 2
            if self._sign_at(oracle, body, mid) is current:
                low = mid
            else:
                high = mid

        return TransitionEvent(body=body, from_sign=current, to_sign=target, instant=high)

    def _failure(
        self,
        body: Body,
        from_instant: datetime,
        reason: TransitionFailureReason,
        detail: str,
    ) -> TransitionNotFound:
        TRANSITION_SEARCH_FAILURES.labels(body=body.value, reason=reason.value).inc()
        LOG.warning(
            "sign transition not found for %s from %s: %s",
            body.value,
            from_instant.isoformat(),
            detail,
            extra={"err_code": "TRANSITION_NOT_FOUND", "body": body.value, "reason": reason.value},
        )
        return TransitionNotFound(
            body=body, from_instant=ensure_utc(from_instant), reason=reason, detail=detail
        )


_DEFAULT_SEARCH = TransitionSearch()


def find_next_transition(
    oracle: EphemerisOracle,
    body: Body | str,
    current_longitude: float,
    from_instant: datetime,
    *,
    search: TransitionSearch | None = None,
) -> TransitionResult:
    """Return the next sign ingress of ``body`` after ``from_instant``.

    ``current_longitude`` is the body's longitude at ``from_instant``. The
    result is a :class:`TransitionEvent` whose ``instant`` lies within
    ``search.precision`` after the true crossing, or a
    :class:`TransitionNotFound` when the ingress cannot be bracketed inside
    the body's search horizon or the oracle fails.
    """

    return (search or _DEFAULT_SEARCH).find(oracle, body, current_longitude, from_instant)
