"""Duration-preserving date translation for trip duplication."""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from datetime import date

from backend.app.scheduling.dates import DateRange


@dataclass(frozen=True)
class ShiftedRange:
    """A range translated to a new anchor start date."""

    new_start: date
    new_end: date


@dataclass(frozen=True)
class SectionShiftInput:
    """A section's original dates and its instances' original dates."""

    key: Hashable
    start: date
    end: date
    instance_dates: dict[Hashable, date] = field(default_factory=dict)


@dataclass
class TripShiftPlan:
    """New dates for a trip subtree translated to an anchor date."""

    trip: ShiftedRange
    sections: dict[Hashable, ShiftedRange] = field(default_factory=dict)
    instances: dict[Hashable, date] = field(default_factory=dict)


def shift_range(original_start: date, original_end: date, anchor: date) -> ShiftedRange:
    """Translate a range so it starts on ``anchor``, keeping its length.

    Args:
        original_start: Original start
        original_end: Original end (inclusive)
        anchor: New start date

    Returns:
        ShiftedRange starting on ``anchor``
    """
    return ShiftedRange(new_start=anchor, new_end=anchor + (original_end - original_start))


def shift_trip(
    trip_range: DateRange, sections: Iterable[SectionShiftInput], anchor: date
) -> TripShiftPlan:
    """Translate a trip, its sections and its instances to a new start date.

    Sections keep their offset from trip start and their duration; instances
    keep their offset from trip start.

    Args:
        trip_range: Original trip dates
        sections: Original section and instance dates
        anchor: New trip start date

    Returns:
        TripShiftPlan keyed by the caller's section and instance keys
    """
    plan = TripShiftPlan(trip=shift_range(trip_range.start, trip_range.end, anchor))
    new_trip_start = plan.trip.new_start

    for section in sections:
        section_offset = section.start - trip_range.start
        plan.sections[section.key] = shift_range(
            section.start, section.end, new_trip_start + section_offset
        )

        for instance_key, instance_date in section.instance_dates.items():
            plan.instances[instance_key] = new_trip_start + (instance_date - trip_range.start)

    return plan
