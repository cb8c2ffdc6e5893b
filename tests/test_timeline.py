from __future__ import annotations

from datetime import timedelta
from itertools import islice

from cosmicengine.core.bodies import Body
from cosmicengine.core.zodiac import ZodiacSign, next_sign
from cosmicengine.detectors.timeline import (
    DEFAULT_LOOKAHEAD,
    RESUME_OFFSET,
    build_timeline,
    iter_transitions,
)

from .helpers import EPOCH, FailingOracle, LinearOracle


def test_moon_timeline_is_ordered_and_adjacent(oracle: LinearOracle) -> None:
    events = build_timeline(oracle, Body.moon, EPOCH, EPOCH + timedelta(days=30))

    assert len(events) >= 12
    for before, after in zip(events, events[1:]):
        assert before.instant < after.instant
        assert after.instant - before.instant > RESUME_OFFSET
        assert before.to_sign is after.from_sign
    for event in events:
        assert event.to_sign is next_sign(event.from_sign)


def test_moon_visits_every_sign_in_a_month(oracle: LinearOracle) -> None:
    events = build_timeline(oracle, "moon", EPOCH, EPOCH + timedelta(days=28))
    assert {event.to_sign for event in events} == set(ZodiacSign)


def test_events_match_analytic_crossings(oracle: LinearOracle) -> None:
    events = build_timeline(oracle, Body.moon, EPOCH, EPOCH + timedelta(days=10))
    cursor = EPOCH
    for event in events:
        expected = oracle.crossing_after(Body.moon, cursor)
        assert timedelta(0) <= event.instant - expected <= timedelta(seconds=61)
        cursor = event.instant + RESUME_OFFSET


def test_timeline_respects_lookahead(oracle: LinearOracle) -> None:
    end = EPOCH + timedelta(days=10)
    events = build_timeline(oracle, Body.moon, EPOCH, end)
    assert events
    assert all(event.instant <= end + DEFAULT_LOOKAHEAD for event in events)
    # the first crossing after the window is still covered
    assert events[-1].instant > end

    short = build_timeline(oracle, Body.moon, EPOCH, end, lookahead=timedelta(0))
    assert all(event.instant <= end for event in short)
    assert len(short) < len(events)


def test_sun_timeline_over_a_quarter() -> None:
    oracle = LinearOracle()
    events = build_timeline(oracle, Body.sun, EPOCH, EPOCH + timedelta(days=90))
    assert [event.to_sign for event in events] == [
        ZodiacSign.aquarius,
        ZodiacSign.pisces,
        ZodiacSign.aries,
    ]


def test_failure_truncates_timeline() -> None:
    full = build_timeline(LinearOracle(), Body.moon, EPOCH, EPOCH + timedelta(days=20))
    failing = FailingOracle(budget=60)

    partial = build_timeline(failing, Body.moon, EPOCH, EPOCH + timedelta(days=20))

    assert 0 < len(partial) < len(full)
    assert [event.instant for event in partial] == [event.instant for event in full[: len(partial)]]


def test_iter_transitions_is_lazy(make_oracle) -> None:
    few, many = make_oracle(), make_oracle()
    list(islice(iter_transitions(few, Body.moon, EPOCH), 2))
    list(islice(iter_transitions(many, Body.moon, EPOCH), 6))
    assert 0 < few.total_calls < many.total_calls


def test_empty_window_still_reports_next_ingress(oracle: LinearOracle) -> None:
    events = build_timeline(oracle, Body.moon, EPOCH, EPOCH)
    # moon at 100 degrees reaches Leo about 1.5 days later
    assert [event.to_sign for event in events] == [ZodiacSign.leo]
