from __future__ import annotations

from datetime import timedelta

import pytest

from cosmicengine.core.bodies import Body
from cosmicengine.core.zodiac import next_sign, sign_of
from cosmicengine.detectors.transitions import find_next_transition
from cosmicengine.events import TransitionEvent

from ..helpers import EPOCH, LinearOracle

hypothesis = pytest.importorskip("hypothesis")
given = hypothesis.given
settings = hypothesis.settings
st = hypothesis.strategies

ORIGINS = st.floats(min_value=0.0, max_value=359.999, allow_nan=False, allow_infinity=False)
OFFSETS = st.integers(min_value=0, max_value=86_400 * 365)
SLACK = timedelta(seconds=1)


def _check(body: Body, speed: float, origin: float, offset: int) -> None:
    oracle = LinearOracle(speeds={body: speed}, origins={body: origin})
    start = EPOCH + timedelta(seconds=offset)
    longitude = oracle.position(body, start)

    result = find_next_transition(oracle, body, longitude, start)

    assert isinstance(result, TransitionEvent)
    assert result.to_sign is next_sign(sign_of(longitude))
    delta = result.instant - oracle.crossing_after(body, start)
    assert -SLACK <= delta <= timedelta(seconds=60) + SLACK


@settings(deadline=None, max_examples=60)
@given(
    speed=st.floats(min_value=0.95, max_value=1.02),
    origin=ORIGINS,
    offset=OFFSETS,
)
def test_sun_speed_transitions_within_a_minute(speed: float, origin: float, offset: int) -> None:
    _check(Body.sun, speed, origin, offset)


@settings(deadline=None, max_examples=60)
@given(
    speed=st.floats(min_value=12.0, max_value=15.0),
    origin=ORIGINS,
    offset=OFFSETS,
)
def test_moon_speed_transitions_within_a_minute(speed: float, origin: float, offset: int) -> None:
    _check(Body.moon, speed, origin, offset)
