"""Overlap detection across a trip's sections."""

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from itertools import combinations
from typing import Generic, TypeVar

from backend.app.scheduling.dates import DateRange, overlaps

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class OverlapResult(Generic[K]):
    """Keys whose range overlaps at least one other range.

    ``candidate_overlaps`` reports whether the unkeyed candidate range, if one
    was supplied, overlaps any keyed range.
    """

    overlapping: frozenset[K]
    candidate_overlaps: bool = False

    def flags_for(self, keys: Iterable[K]) -> dict[K, bool]:
        """Expand into a ``{key: has_overlap}`` mapping over ``keys``."""
        return {key: key in self.overlapping for key in keys}


def detect_overlaps(
    ranges: Mapping[K, DateRange], candidate: DateRange | None = None
) -> OverlapResult[K]:
    """Find every range that overlaps another one.

    Pairwise over all unordered pairs; section counts per trip are small.
    The candidate (a range being created or edited, not yet persisted) marks
    the keyed ranges it touches and is reported back as a boolean.

    Args:
        ranges: Identity key to date range
        candidate: Optional unkeyed range to test against the others

    Returns:
        OverlapResult with overlapping keys and the candidate flag
    """
    overlapping: set[K] = set()

    for (key_a, range_a), (key_b, range_b) in combinations(ranges.items(), 2):
        if overlaps(range_a, range_b):
            overlapping.add(key_a)
            overlapping.add(key_b)

    candidate_overlaps = False
    if candidate is not None:
        for key, keyed_range in ranges.items():
            if overlaps(candidate, keyed_range):
                overlapping.add(key)
                candidate_overlaps = True

    return OverlapResult(overlapping=frozenset(overlapping), candidate_overlaps=candidate_overlaps)
