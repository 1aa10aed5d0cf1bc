"""Shared FastAPI dependencies for the itinerary routes."""

from datetime import date
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.auth import get_current_context
from backend.app.cache import ExternalCache
from backend.app.config import Settings, get_settings
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.services.external import ExternalLookupService
from backend.app.services.itinerary import ItineraryService


def get_today() -> date:
    """Reference date for derived trip status and copy anchors."""
    return date.today()


def get_external_cache(request: Request) -> ExternalCache:
    """Cache handle created at application startup."""
    cache: ExternalCache = request.app.state.external_cache
    return cache


async def get_itinerary_service(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    session: Annotated[AsyncSession, Depends(get_session)],
    today: Annotated[date, Depends(get_today)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ItineraryService:
    return ItineraryService(session, ctx, today=today, settings=settings)


async def get_external_service(
    cache: Annotated[ExternalCache, Depends(get_external_cache)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ExternalLookupService:
    return ExternalLookupService(cache, settings)
