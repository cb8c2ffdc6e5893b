"""Bidirectional number/tag frequency tables shared by mood and activity."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from ..utils.angles import round_half_up
from .models import NumberShare, SightingEvent

__all__ = [
    "TagCorrelation",
    "percentage",
    "rank",
]


def percentage(count: int, total: int) -> int:
    """Integer percentage of ``count`` in ``total``, halves rounded up."""

    if total <= 0:
        return 0
    return int(round_half_up(count / total * 100))


def rank(counts: Counter[str], limit: int) -> list[tuple[str, int]]:
    """Return the ``limit`` highest counts; ties break on the smaller key."""

    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]


@dataclass
class TagCorrelation:
    """Frequency tables between sighted numbers and one categorical field.

    ``number_totals`` counts tagged sightings per number, ``by_number``
    counts tags per number, and ``by_tag`` counts numbers per tag. A
    sighting listing the same tag twice counts once.
    """

    sample_size: int = 0
    number_totals: Counter[str] = field(default_factory=Counter)
    by_number: dict[str, Counter[str]] = field(default_factory=lambda: defaultdict(Counter))
    by_tag: dict[str, Counter[str]] = field(default_factory=lambda: defaultdict(Counter))

    @classmethod
    def build(
        cls,
        events: Iterable[SightingEvent],
        tags_of: Callable[[SightingEvent], Sequence[str] | None],
    ) -> TagCorrelation:
        table = cls()
        for event in events:
            tags = [tag for tag in dict.fromkeys(tags_of(event) or ()) if tag]
            if not tags:
                continue
            table.sample_size += 1
            table.number_totals[event.number] += 1
            for tag in tags:
                table.by_number[event.number][tag] += 1
                table.by_tag[tag][event.number] += 1
        return table

    def top_tag_per_number(self, limit: int) -> list[tuple[str, str, int, int]]:
        """``(number, tag, count, percentage)`` for the ``limit`` busiest numbers.

        The percentage is relative to that number's tagged sightings.
        """

        rows: list[tuple[str, str, int, int]] = []
        for number, total in rank(self.number_totals, limit):
            tags = self.by_number.get(number)
            if not tags:
                continue
            tag, count = rank(tags, 1)[0]
            rows.append((number, tag, count, percentage(count, total)))
        return rows

    def numbers_per_tag(self, minimum: int, limit: int) -> list[tuple[str, tuple[NumberShare, ...]]]:
        """Top numbers for every tag seen at least ``minimum`` times, tags sorted."""

        rows: list[tuple[str, tuple[NumberShare, ...]]] = []
        for tag in sorted(self.by_tag):
            numbers = self.by_tag[tag]
            tag_total = sum(numbers.values())
            if tag_total < minimum:
                continue
            shares = tuple(
                NumberShare(number=number, count=count, percentage=percentage(count, tag_total))
                for number, count in rank(numbers, limit)
            )
            if shares:
                rows.append((tag, shares))
        return rows
