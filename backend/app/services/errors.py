"""Itinerary service exceptions.

The scheduling engine returns validation failures as values. The service
layer turns a failed validation into ``ScheduleRejectedError`` so the whole
mutation is abandoned, and route handlers translate every exception here
into an HTTP response.
"""

from enum import Enum

from backend.app.models.common import RangeErrorKind
from backend.app.models.validation import RangeValidation


class ErrorCode(str, Enum):
    """Error codes for client-facing error messages."""

    TRIP_NOT_FOUND = "TRIP_NOT_FOUND"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    ACTIVITY_INSTANCE_NOT_FOUND = "ACTIVITY_INSTANCE_NOT_FOUND"
    CATALOG_ACTIVITY_NOT_FOUND = "CATALOG_ACTIVITY_NOT_FOUND"
    CITY_NOT_FOUND = "CITY_NOT_FOUND"
    PUBLIC_TRIP_NOT_FOUND = "PUBLIC_TRIP_NOT_FOUND"
    SCHEDULE_REJECTED = "SCHEDULE_REJECTED"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.TRIP_NOT_FOUND: "Trip not found.",
    ErrorCode.SECTION_NOT_FOUND: "Section not found.",
    ErrorCode.ACTIVITY_INSTANCE_NOT_FOUND: "Section activity not found.",
    ErrorCode.CATALOG_ACTIVITY_NOT_FOUND: "Activity not found.",
    ErrorCode.CITY_NOT_FOUND: "City not found.",
    ErrorCode.PUBLIC_TRIP_NOT_FOUND: "Public trip not found.",
    ErrorCode.SCHEDULE_REJECTED: "The requested dates are not valid for this itinerary.",
}


class ItineraryError(Exception):
    """Base exception for itinerary service errors."""

    code: ErrorCode = ErrorCode.SCHEDULE_REJECTED

    def __init__(self, message: str | None = None) -> None:
        self.message = message or USER_MESSAGES[self.code]
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES[self.code]


class NotFoundError(ItineraryError):
    """A referenced record does not exist or is not visible to the caller."""


class TripNotFoundError(NotFoundError):
    code = ErrorCode.TRIP_NOT_FOUND


class SectionNotFoundError(NotFoundError):
    code = ErrorCode.SECTION_NOT_FOUND


class ActivityInstanceNotFoundError(NotFoundError):
    code = ErrorCode.ACTIVITY_INSTANCE_NOT_FOUND


class CatalogActivityNotFoundError(NotFoundError):
    code = ErrorCode.CATALOG_ACTIVITY_NOT_FOUND


class CityNotFoundError(NotFoundError):
    code = ErrorCode.CITY_NOT_FOUND


class PublicTripNotFoundError(NotFoundError):
    code = ErrorCode.PUBLIC_TRIP_NOT_FOUND


class ScheduleRejectedError(ItineraryError):
    """A date range check failed; the mutation was not applied."""

    code = ErrorCode.SCHEDULE_REJECTED

    def __init__(self, validation: RangeValidation) -> None:
        self.validation = validation
        super().__init__(validation.message)

    @property
    def error_kind(self) -> RangeErrorKind | None:
        return self.validation.error_kind

    @property
    def user_message(self) -> str:
        return self.validation.message or USER_MESSAGES[self.code]
