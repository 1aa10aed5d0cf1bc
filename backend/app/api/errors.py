"""Translate itinerary service errors into HTTP errors."""

from fastapi import HTTPException, status

from backend.app.services.errors import ItineraryError, NotFoundError, ScheduleRejectedError


def to_http_error(error: ItineraryError) -> HTTPException:
    """Map a service error to an HTTPException.

    Not-found errors become 404 with the user message. Rejected schedules
    become 400 with the range error kind, so clients can tell a reversed
    range from one that leaves its parent.
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.user_message)

    if isinstance(error, ScheduleRejectedError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error_kind": error.error_kind.value if error.error_kind else None,
                "message": error.user_message,
            },
        )

    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.user_message)
