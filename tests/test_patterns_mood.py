from __future__ import annotations

from datetime import datetime

from cosmicengine.patterns.models import InsightType, PatternThresholds
from cosmicengine.patterns.mood import compute_mood_correlation

from .helpers import hours_ago, sighting


def _log(now: datetime, *rows: tuple[str, list[str] | None]):
    return [sighting(number, hours_ago(now, idx + 1), moods=moods) for idx, (number, moods) in enumerate(rows)]


def test_gate_counts_only_tagged_sightings(now: datetime) -> None:
    events = _log(
        now,
        ("7", ["calm"]),
        ("7", ["calm"]),
        ("3", ["happy"]),
        ("3", ["calm"]),
        ("3", None),
        ("9", []),
    )
    assert compute_mood_correlation(events, 6, now=now) == []


def test_four_tagged_for_a_mood_emits_no_mood_numbers(now: datetime) -> None:
    events = _log(
        now,
        ("7", ["calm"]),
        ("7", ["calm"]),
        ("7", ["calm"]),
        ("7", ["happy"]),
        ("3", ["calm"]),
    )

    insights = compute_mood_correlation(events, 5, now=now)

    assert [insight.key for insight in insights] == ["top_mood_7", "top_mood_3"]
    top_7 = insights[0].value
    assert (top_7.mood, top_7.count, top_7.percentage) == ("calm", 3, 75)
    assert insights[1].value.percentage == 100
    assert all(insight.type is InsightType.mood_correlation for insight in insights)


def test_five_tagged_for_a_mood_emits_mood_numbers(now: datetime) -> None:
    events = _log(
        now,
        ("7", ["calm"]),
        ("7", ["calm"]),
        ("7", ["calm"]),
        ("7", ["happy"]),
        ("3", ["calm"]),
        ("3", ["calm"]),
    )

    insights = compute_mood_correlation(events, 6, now=now)

    keys = [insight.key for insight in insights]
    assert keys == ["top_mood_7", "top_mood_3", "calm_numbers"]
    shares = insights[-1].value.numbers
    assert [(share.number, share.count, share.percentage) for share in shares] == [
        ("7", 3, 60),
        ("3", 2, 40),
    ]
    assert sum(share.percentage for share in shares) <= 100


def test_ties_break_on_smaller_key(now: datetime) -> None:
    events = _log(
        now,
        ("7", ["joy"]),
        ("7", ["awe"]),
        ("11", ["calm"]),
        ("11", ["calm"]),
        ("5", ["calm"]),
        ("5", ["calm"]),
    )

    insights = compute_mood_correlation(events, 6, now=now)

    top = [insight for insight in insights if insight.key.startswith("top_mood_")]
    assert [insight.key for insight in top] == ["top_mood_11", "top_mood_5", "top_mood_7"]
    assert top[-1].value.mood == "awe"


def test_top_n_limits_numbers(now: datetime) -> None:
    events = _log(now, *[(str(number), ["calm"]) for number in range(6)])
    insights = compute_mood_correlation(
        events, 6, now=now, thresholds=PatternThresholds(top_n=2)
    )
    assert [insight.key for insight in insights] == ["top_mood_0", "top_mood_1", "calm_numbers"]
    assert len(insights[-1].value.numbers) == 2


def test_duplicate_tags_count_once(now: datetime) -> None:
    events = _log(now, *[("7", ["calm", "calm"]) for _ in range(5)])

    insights = compute_mood_correlation(events, 5, now=now)

    assert insights[0].value.count == 5
    assert insights[0].value.percentage == 100
    assert insights[-1].value.numbers[0].count == 5


def test_moods_are_emitted_in_sorted_order(now: datetime) -> None:
    events = _log(now, *[("7", ["zen", "angst"]) for _ in range(5)])
    keys = [insight.key for insight in compute_mood_correlation(events, 5, now=now)]
    assert keys == ["top_mood_7", "angst_numbers", "zen_numbers"]
