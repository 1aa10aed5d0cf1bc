"""Closed date interval helpers.

All ranges are inclusive on both ends and have day granularity. Callers are
expected to have rejected ranges with ``start > end`` through the validator;
nothing here checks for it.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta

from backend.app.models.common import TripStatus


@dataclass(frozen=True)
class DateRange:
    """Closed date interval ``[start, end]``."""

    start: date
    end: date


def contains(outer: DateRange, inner: DateRange) -> bool:
    """Return True if ``inner`` lies entirely within ``outer``."""
    return outer.start <= inner.start and inner.end <= outer.end


def overlaps(a: DateRange, b: DateRange) -> bool:
    """Return True if the two ranges share at least one day.

    Ranges touching on a single boundary day overlap.
    """
    return a.start <= b.end and b.start <= a.end


def inclusive_day_count(start: date, end: date) -> int:
    """Number of calendar days in ``[start, end]``; a single-day range is 1."""
    return (end - start).days + 1


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""
    for offset in range(inclusive_day_count(start, end)):
        yield start + timedelta(days=offset)


def derive_trip_status(start: date, end: date, today: date) -> TripStatus:
    """Derive a trip's status from its dates.

    Args:
        start: Trip start date
        end: Trip end date (inclusive)
        today: Reference day

    Returns:
        UPCOMING before the trip, COMPLETED after it, ONGOING otherwise
    """
    if today < start:
        return TripStatus.UPCOMING
    if today > end:
        return TripStatus.COMPLETED
    return TripStatus.ONGOING
