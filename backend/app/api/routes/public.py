"""Public trip endpoints - publish, community listing and copy."""

import logging
from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.deps import get_itinerary_service, get_today
from backend.app.api.errors import to_http_error
from backend.app.config import Settings, get_settings
from backend.app.db.engine import get_session
from backend.app.models.trip import PublicShareView, PublicTripView, TripView
from backend.app.services.errors import ItineraryError
from backend.app.services.itinerary import ItineraryService
from backend.app.services.sharing import get_public_trip, list_public_trips

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/public/trips", tags=["public"])


class PublicTripListResponse(BaseModel):
    """Response for GET /public/trips."""

    trips: list[PublicTripView]


@router.post("/{trip_id}/publish", response_model=PublicShareView)
async def publish_trip(
    trip_id: UUID,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> PublicShareView:
    """Publish one of the caller's trips under a shareable slug."""
    logger.info(f"[POST /public/trips/{trip_id}/publish]")

    try:
        return await service.publish_trip(trip_id)
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.get("", response_model=PublicTripListResponse)
async def list_public_trips_endpoint(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    today: Annotated[date, Depends(get_today)],
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> PublicTripListResponse:
    """List published trips, most recent first.

    Args:
        session: Database session
        settings: Application settings
        today: Reference date for derived trip status
        limit: Maximum number of trips (defaults to settings)

    Returns:
        Published trips
    """
    trips = await list_public_trips(
        session, limit=limit or settings.public_trips_default_limit, today=today
    )
    return PublicTripListResponse(trips=trips)


@router.get("/{slug}", response_model=PublicTripView)
async def get_public_trip_endpoint(
    slug: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    today: Annotated[date, Depends(get_today)],
) -> PublicTripView:
    """Get a published trip by slug. No ownership required."""
    try:
        return await get_public_trip(session, slug, today)
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.post("/{slug}/copy", response_model=TripView, status_code=status.HTTP_201_CREATED)
async def copy_public_trip(
    slug: str,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
    anchor: date | None = None,
) -> TripView:
    """Copy a published trip into the caller's trips.

    Args:
        slug: Public slug of the source trip
        service: Itinerary service for the caller
        anchor: Start date of the copy (defaults to today)

    Returns:
        The new trip, with dates shifted to the anchor
    """
    logger.info(f"[POST /public/trips/{slug}/copy] anchor={anchor}")

    try:
        return await service.copy_public_trip(slug, anchor)
    except ItineraryError as e:
        raise to_http_error(e) from e
