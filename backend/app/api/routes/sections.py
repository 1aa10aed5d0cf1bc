"""Section endpoints - sections of a trip and range previews."""

import logging
from datetime import date
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from backend.app.api.deps import get_itinerary_service
from backend.app.api.errors import to_http_error
from backend.app.models.trip import SectionPreview, SectionView
from backend.app.services.errors import ItineraryError
from backend.app.services.itinerary import ItineraryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips/{trip_id}/sections", tags=["sections"])


class CreateSectionRequest(BaseModel):
    """Request body for POST /trips/{trip_id}/sections."""

    start_date: date
    end_date: date
    budget: Decimal = Field(Decimal("0"), ge=0, description="Section budget")
    title: str | None = Field(None, max_length=200)
    notes: str | None = None
    order: int | None = Field(None, ge=0, description="Display order; appended when omitted")


class UpdateSectionRequest(BaseModel):
    """Request body for PUT /trips/{trip_id}/sections/{section_id}.

    Omitted fields are unchanged. An explicit null clears title or notes.
    """

    start_date: date | None = None
    end_date: date | None = None
    budget: Decimal | None = Field(None, ge=0)
    title: str | None = Field(None, max_length=200)
    notes: str | None = None
    order: int | None = Field(None, ge=0)


class PreviewSectionRequest(BaseModel):
    """Request body for POST /trips/{trip_id}/sections/preview."""

    start_date: date
    end_date: date
    section_id: UUID | None = Field(
        None, description="Section being edited; excluded from the overlap check"
    )


@router.post("", response_model=SectionView, status_code=status.HTTP_201_CREATED)
async def create_section(
    trip_id: UUID,
    request: CreateSectionRequest,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> SectionView:
    """Add a section to a trip.

    Overlap with other sections is allowed and reported through
    ``has_overlap_warning``; leaving the trip's dates is rejected.

    Raises:
        HTTPException: 404 if the trip is not found, 400 if the dates are rejected
    """
    logger.info(
        f"[POST /trips/{trip_id}/sections] dates={request.start_date}..{request.end_date}"
    )

    try:
        return await service.create_section(
            trip_id,
            start_date=request.start_date,
            end_date=request.end_date,
            budget=request.budget,
            title=request.title,
            notes=request.notes,
            order=request.order,
        )
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.post("/preview", response_model=SectionPreview)
async def preview_section(
    trip_id: UUID,
    request: PreviewSectionRequest,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> SectionPreview:
    """Check a section range before saving it. Nothing is persisted."""
    try:
        return await service.preview_section(
            trip_id,
            start_date=request.start_date,
            end_date=request.end_date,
            section_id=request.section_id,
        )
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.put("/{section_id}", response_model=SectionView)
async def update_section(
    trip_id: UUID,
    section_id: UUID,
    request: UpdateSectionRequest,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> SectionView:
    """Update a section.

    New dates must stay inside the trip and keep every scheduled activity
    inside the section.
    """
    logger.info(f"[PUT /trips/{trip_id}/sections/{section_id}]")

    try:
        return await service.update_section(
            trip_id,
            section_id,
            **request.model_dump(exclude_unset=True),
        )
    except ItineraryError as e:
        raise to_http_error(e) from e


@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_section(
    trip_id: UUID,
    section_id: UUID,
    service: Annotated[ItineraryService, Depends(get_itinerary_service)],
) -> Response:
    """Delete a section and its scheduled activities."""
    logger.info(f"[DELETE /trips/{trip_id}/sections/{section_id}]")

    try:
        await service.delete_section(trip_id, section_id)
    except ItineraryError as e:
        raise to_http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
