"""Section activity endpoints - schedule catalog activities within a section."""

import logging
from datetime import date, time
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from backend.app.api.deps import get_itinerary_service
from backend.app.api.errors import to_http_error
from backend.app.models.trip import ActivityInstanceView
from backend.app.services.errors import ItineraryError
from backend.app.services.itinerary import ItineraryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sections/{section_id}/activities", tags=["activities"])


class AddActivityRequest(BaseModel):
    """Request body for POST /sections/{section_id}/activities."""

    activity_id: UUID
    scheduled_date: date
    scheduled_time: time | None = None
    expense: Decimal | None = Field(
        None, ge=0, description="Expense override; catalog cost is used when omitted or zero"
    )
    order: int | None = Field(None, ge=0)


class UpdateActivityRequest(BaseModel):
    """Request body for PUT /sections/{section_id}/activities/{instance_id}.

    Omitted fields are unchanged. An explicit null clears the time, or the
    expense override so the catalog cost applies.
    """

    scheduled_date: date | None = None
    scheduled_time: time | None = None
    expense: Decimal | None = Field(None, ge=0)
    order: int | None = Field(None, ge=0)


@router.post("", response_model=ActivityInstanceView, status_code=status.HTTP_201_CREATED)
async def add_activity(
    section_id: UUID,
    request: AddActivityRequest,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> ActivityInstanceView:
    """Schedule a catalog activity on a date within the section.

    Raises:
        HTTPException: 404 if the section or activity is not found,
            400 if the date is outside the section
    """
    logger.info(
        f"[POST /sections/{section_id}/activities] activity_id={request.activity_id}, "
        f"date={request.scheduled_date}"
    )

    try:
        return await service.add_activity(
            section_id,
            activity_id=request.activity_id,
            scheduled_date=request.scheduled_date,
            scheduled_time=request.scheduled_time,
            expense=request.expense,
            order=request.order,
        )
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.put("/{instance_id}", response_model=ActivityInstanceView)
async def update_activity(
    section_id: UUID,
    instance_id: UUID,
    request: UpdateActivityRequest,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> ActivityInstanceView:
    """Reschedule or re-price a scheduled activity."""
    logger.info(f"[PUT /sections/{section_id}/activities/{instance_id}]")

    try:
        return await service.update_activity(
            section_id,
            instance_id,
            **request.model_dump(exclude_unset=True),
        )
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.delete("/{instance_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_activity(
    section_id: UUID,
    instance_id: UUID,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> Response:
    """Remove a scheduled activity from its section."""
    logger.info(f"[DELETE /sections/{section_id}/activities/{instance_id}]")

    try:
        await service.remove_activity(section_id, instance_id)
    except ItineraryError as e:
        raise to_http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
