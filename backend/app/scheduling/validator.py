"""Nested date range containment checks.

Every check returns a ``RangeValidation`` instead of raising; the mutation
path aborts on the first failure before touching any state.
"""

from collections.abc import Iterable
from datetime import date

from backend.app.models.common import RangeErrorKind
from backend.app.models.validation import RangeValidation


def validate_range_order(start: date, end: date) -> RangeValidation:
    """Check that a range does not end before it starts.

    Args:
        start: Range start
        end: Range end (inclusive)

    Returns:
        RANGE_ORDER_INVALID failure if ``end < start``, else success
    """
    if end < start:
        return RangeValidation.fail(
            RangeErrorKind.RANGE_ORDER_INVALID,
            "End date must not be before start date.",
        )
    return RangeValidation.ok()


def validate_section_within_trip(
    section_start: date, section_end: date, trip_start: date, trip_end: date
) -> RangeValidation:
    """Check that a section's range is well-ordered and inside its trip.

    Args:
        section_start: Section start
        section_end: Section end (inclusive)
        trip_start: Trip start
        trip_end: Trip end (inclusive)

    Returns:
        RANGE_ORDER_INVALID if the section ends before it starts,
        OUT_OF_PARENT_BOUNDS if it leaves the trip's dates, else success
    """
    if section_end < section_start:
        return RangeValidation.fail(
            RangeErrorKind.RANGE_ORDER_INVALID,
            "Section end date must not be before its start date.",
        )

    if section_start < trip_start:
        return RangeValidation.fail(
            RangeErrorKind.OUT_OF_PARENT_BOUNDS,
            "Section start date must be within trip dates.",
        )

    if section_end > trip_end:
        return RangeValidation.fail(
            RangeErrorKind.OUT_OF_PARENT_BOUNDS,
            "Section end date must be within trip dates.",
        )

    return RangeValidation.ok()


def validate_instance_within_section(
    instance_date: date, section_start: date, section_end: date
) -> RangeValidation:
    """Check that an activity's scheduled date lies within its section.

    Args:
        instance_date: Scheduled date of the activity instance
        section_start: Section start
        section_end: Section end (inclusive)

    Returns:
        OUT_OF_PARENT_BOUNDS if outside the section, else success
    """
    if instance_date < section_start or instance_date > section_end:
        return RangeValidation.fail(
            RangeErrorKind.OUT_OF_PARENT_BOUNDS,
            "Scheduled date must be within section date range.",
        )
    return RangeValidation.ok()


def first_failure(validations: Iterable[RangeValidation]) -> RangeValidation:
    """Return the first failed validation, or success if all passed."""
    for validation in validations:
        if not validation.valid:
            return validation
    return RangeValidation.ok()
