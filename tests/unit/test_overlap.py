"""Tests for overlap detection across sections."""

import itertools
from datetime import date

from backend.app.scheduling.dates import DateRange, overlaps
from backend.app.scheduling.overlap import detect_overlaps


def _r(start_day: int, end_day: int) -> DateRange:
    return DateRange(date(2026, 8, start_day), date(2026, 8, end_day))


def test_no_sections_no_overlaps() -> None:
    result = detect_overlaps({})

    assert result.overlapping == frozenset()
    assert result.candidate_overlaps is False


def test_disjoint_sections_are_not_flagged() -> None:
    result = detect_overlaps({"a": _r(1, 3), "b": _r(4, 6), "c": _r(7, 9)})

    assert result.overlapping == frozenset()


def test_both_members_of_overlapping_pair_are_flagged() -> None:
    result = detect_overlaps({"a": _r(1, 5), "b": _r(5, 8), "c": _r(10, 12)})

    assert result.overlapping == {"a", "b"}
    assert result.flags_for(["a", "b", "c"]) == {"a": True, "b": True, "c": False}


def test_flag_matches_pairwise_definition() -> None:
    """A key is flagged iff it overlaps at least one other key."""
    ranges = {
        "a": _r(1, 4),
        "b": _r(3, 6),
        "c": _r(8, 8),
        "d": _r(8, 12),
        "e": _r(14, 15),
        "f": _r(1, 1),
    }

    result = detect_overlaps(ranges)

    expected = set()
    for (ka, ra), (kb, rb) in itertools.combinations(ranges.items(), 2):
        if overlaps(ra, rb):
            expected.update({ka, kb})
    assert result.overlapping == expected
    assert result.overlapping == {"a", "b", "c", "d", "f"}


def test_candidate_marks_existing_sections_it_touches() -> None:
    result = detect_overlaps({"a": _r(1, 3), "b": _r(10, 12)}, candidate=_r(3, 5))

    assert result.candidate_overlaps is True
    assert result.overlapping == {"a"}


def test_candidate_without_overlap() -> None:
    result = detect_overlaps({"a": _r(1, 3)}, candidate=_r(4, 5))

    assert result.candidate_overlaps is False
    assert result.overlapping == frozenset()


def test_detection_is_idempotent() -> None:
    ranges = {"a": _r(1, 5), "b": _r(4, 6), "c": _r(20, 21)}

    assert detect_overlaps(ranges) == detect_overlaps(ranges)
