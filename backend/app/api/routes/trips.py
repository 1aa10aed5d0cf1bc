"""Trip endpoints - CRUD for trips and the budget report."""

import logging
from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field

from backend.app.api.deps import get_itinerary_service
from backend.app.api.errors import to_http_error
from backend.app.models.budget import TripBudgetReport
from backend.app.models.common import TripStatus
from backend.app.models.trip import TripView
from backend.app.services.errors import ItineraryError
from backend.app.services.itinerary import ItineraryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


class CreateTripRequest(BaseModel):
    """Request body for POST /trips."""

    name: str = Field(..., min_length=1, max_length=200, description="Trip name")
    start_date: date
    end_date: date
    budget: Decimal = Field(Decimal("0"), ge=0, description="Total trip budget")


class UpdateTripRequest(BaseModel):
    """Request body for PUT /trips/{trip_id}; omitted fields are unchanged."""

    name: str | None = Field(None, min_length=1, max_length=200)
    start_date: date | None = None
    end_date: date | None = None
    budget: Decimal | None = Field(None, ge=0)


class TripListResponse(BaseModel):
    """Response for GET /trips."""

    trips: list[TripView]


@router.post("", response_model=TripView, status_code=status.HTTP_201_CREATED)
async def create_trip(
    request: CreateTripRequest,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> TripView:
    """Create an empty trip.

    Returns:
        Created trip

    Raises:
        HTTPException: 400 if the end date is before the start date
    """
    logger.info(f"[POST /trips] dates={request.start_date}..{request.end_date}")

    try:
        return await service.create_trip(
            name=request.name,
            start_date=request.start_date,
            end_date=request.end_date,
            budget=request.budget,
        )
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.get("", response_model=TripListResponse)
async def list_trips(
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
    trip_status: Annotated[TripStatus | None, Query(alias="status")] = None,
) -> TripListResponse:
    """List the caller's trips, newest first.

    Args:
        service: Itinerary service for the caller
        trip_status: Optional filter on derived status

    Returns:
        Trips with their full itineraries
    """
    return TripListResponse(trips=await service.list_trips(trip_status))


@router.get("/{trip_id}", response_model=TripView)
async def get_trip(
    trip_id: UUID,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> TripView:
    """Get one trip with sections and scheduled activities."""
    try:
        return await service.get_trip(trip_id)
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.put("/{trip_id}", response_model=TripView)
async def update_trip(
    trip_id: UUID,
    request: UpdateTripRequest,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> TripView:
    """Update a trip.

    New dates must still contain every section of the trip.

    Raises:
        HTTPException: 404 if not found, 400 if the new dates are rejected
    """
    logger.info(f"[PUT /trips/{trip_id}]")

    try:
        return await service.update_trip(
            trip_id,
            name=request.name,
            start_date=request.start_date,
            end_date=request.end_date,
            budget=request.budget,
        )
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip(
    trip_id: UUID,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> Response:
    """Delete a trip and everything under it."""
    logger.info(f"[DELETE /trips/{trip_id}]")

    try:
        await service.delete_trip(trip_id)
    except ItineraryError as e:
        raise to_http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{trip_id}/budget", response_model=TripBudgetReport)
async def get_trip_budget(
    trip_id: UUID,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> TripBudgetReport:
    """Budget report: per-day spend, per-section totals and trip totals."""
    try:
        return await service.get_trip_budget(trip_id)
    except ItineraryError as e:
        raise to_http_error(e) from e
