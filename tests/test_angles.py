from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from cosmicengine.core.time import ensure_utc, from_iso, to_iso
from cosmicengine.utils.angles import forward_separation, norm360, round_half_up


@pytest.mark.parametrize(
    "angle, expected",
    [(0.0, 0.0), (360.0, 0.0), (-30.0, 330.0), (725.0, 5.0), (-1e-18, 0.0)],
)
def test_norm360(angle: float, expected: float) -> None:
    result = norm360(angle)
    assert 0.0 <= result < 360.0
    assert result == pytest.approx(expected)


def test_forward_separation_wraps() -> None:
    assert forward_separation(350.0, 80.0) == pytest.approx(90.0)
    assert forward_separation(0.0, 180.0) == pytest.approx(180.0)
    assert forward_separation(80.0, 350.0) == pytest.approx(270.0)


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (2.5, 0, 3.0),
        (-2.5, 0, -2.0),
        (-87.5, 0, -87.0),
        (1.5714, 1, 1.6),
        (10.126, 2, 10.13),
    ],
)
def test_round_half_up(value: float, digits: int, expected: float) -> None:
    assert round_half_up(value, digits) == pytest.approx(expected)


def test_time_helpers_normalise_to_utc() -> None:
    naive = datetime(2024, 1, 1, 12, 0)
    assert ensure_utc(naive).tzinfo is UTC
    plus_two = datetime(2024, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert ensure_utc(plus_two) == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    assert to_iso(plus_two.replace(microsecond=500)) == "2024-01-01T12:00:00Z"
    assert from_iso("2024-01-01T12:00:00Z") == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
