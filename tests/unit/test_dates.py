"""Tests for closed date interval helpers."""

from datetime import date

from backend.app.models.common import TripStatus
from backend.app.scheduling.dates import (
    DateRange,
    contains,
    derive_trip_status,
    inclusive_day_count,
    iter_days,
    overlaps,
)


def test_single_day_range_counts_one_day() -> None:
    assert inclusive_day_count(date(2026, 3, 1), date(2026, 3, 1)) == 1


def test_day_count_is_inclusive_across_month_end() -> None:
    assert inclusive_day_count(date(2026, 1, 30), date(2026, 2, 2)) == 4


def test_iter_days_yields_every_day_in_order() -> None:
    days = list(iter_days(date(2026, 2, 27), date(2026, 3, 2)))

    assert days == [
        date(2026, 2, 27),
        date(2026, 2, 28),
        date(2026, 3, 1),
        date(2026, 3, 2),
    ]


def test_ranges_touching_on_boundary_day_overlap() -> None:
    """Shared boundary days count as overlap."""
    a = DateRange(date(2026, 1, 1), date(2026, 1, 5))
    b = DateRange(date(2026, 1, 5), date(2026, 1, 8))

    assert overlaps(a, b)
    assert overlaps(b, a)


def test_adjacent_ranges_do_not_overlap() -> None:
    a = DateRange(date(2026, 1, 1), date(2026, 1, 5))
    b = DateRange(date(2026, 1, 6), date(2026, 1, 8))

    assert not overlaps(a, b)
    assert not overlaps(b, a)


def test_every_range_overlaps_itself() -> None:
    week = DateRange(date(2026, 1, 1), date(2026, 1, 7))
    single_day = DateRange(date(2026, 2, 28), date(2026, 2, 28))

    assert overlaps(week, week)
    assert overlaps(single_day, single_day)


def test_contains_includes_equal_bounds() -> None:
    outer = DateRange(date(2026, 1, 1), date(2026, 1, 10))

    assert contains(outer, outer)
    assert contains(outer, DateRange(date(2026, 1, 3), date(2026, 1, 4)))
    assert not contains(outer, DateRange(date(2025, 12, 31), date(2026, 1, 4)))
    assert not contains(outer, DateRange(date(2026, 1, 3), date(2026, 1, 11)))


class TestDeriveTripStatus:
    """Trip status is derived from dates and a reference day."""

    start = date(2026, 7, 1)
    end = date(2026, 7, 10)

    def test_upcoming_before_start(self) -> None:
        assert derive_trip_status(self.start, self.end, date(2026, 6, 30)) == TripStatus.UPCOMING

    def test_ongoing_on_start_day(self) -> None:
        assert derive_trip_status(self.start, self.end, self.start) == TripStatus.ONGOING

    def test_ongoing_on_end_day(self) -> None:
        assert derive_trip_status(self.start, self.end, self.end) == TripStatus.ONGOING

    def test_completed_after_end(self) -> None:
        assert derive_trip_status(self.start, self.end, date(2026, 7, 11)) == TripStatus.COMPLETED
