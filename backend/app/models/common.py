"""Common types and enums shared across all models."""

from enum import Enum


class Category(str, Enum):
    """Activity and section category.

    Declaration order is significant: it is the tie-break order used when
    inferring a section's dominant category.
    """

    TRAVEL = "TRAVEL"
    STAY = "STAY"
    EXPERIENCE = "EXPERIENCE"
    BUFFER = "BUFFER"


class TripStatus(str, Enum):
    """Trip status, derived from the trip's dates relative to today."""

    UPCOMING = "UPCOMING"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"


class RangeErrorKind(str, Enum):
    """Date range validation failure kinds."""

    RANGE_ORDER_INVALID = "RANGE_ORDER_INVALID"
    OUT_OF_PARENT_BOUNDS = "OUT_OF_PARENT_BOUNDS"
