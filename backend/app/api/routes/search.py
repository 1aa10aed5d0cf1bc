"""Catalog search endpoints - GET /search/cities, GET /search/activities."""

from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import Settings, get_settings
from backend.app.db.engine import get_session
from backend.app.models.catalog import CatalogActivityView, CityView
from backend.app.models.common import Category
from backend.app.services.catalog import search_activities, search_cities

router = APIRouter(prefix="/search", tags=["search"])


class CitySearchResponse(BaseModel):
    """Response for GET /search/cities."""

    cities: list[CityView]


class ActivitySearchResponse(BaseModel):
    """Response for GET /search/activities."""

    activities: list[CatalogActivityView]


@router.get("/cities", response_model=CitySearchResponse)
async def search_cities_endpoint(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    query: Annotated[str | None, Query(max_length=200)] = None,
    country: Annotated[str | None, Query(max_length=200)] = None,
) -> CitySearchResponse:
    """Search catalog cities by name or country.

    Args:
        session: Database session
        settings: Application settings
        query: Matches city name or country, case-insensitive
        country: Restricts to countries matching this text

    Returns:
        Cities ordered by popularity, then name
    """
    cities = await search_cities(
        session, query=query, country=country, limit=settings.city_search_limit
    )
    return CitySearchResponse(cities=cities)


@router.get("/activities", response_model=ActivitySearchResponse)
async def search_activities_endpoint(
    session: Annotated[AsyncSession, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    query: Annotated[str | None, Query(max_length=200)] = None,
    category: Category | None = None,
    city_id: UUID | None = None,
    max_cost: Annotated[Decimal | None, Query(ge=0)] = None,
) -> ActivitySearchResponse:
    """Search catalog activities.

    Args:
        session: Database session
        settings: Application settings
        query: Matches activity name or description, case-insensitive
        category: Exact category
        city_id: Restrict to one city
        max_cost: Maximum base cost

    Returns:
        Activities ordered by cost, then name
    """
    activities = await search_activities(
        session,
        query=query,
        category=category,
        city_id=city_id,
        max_cost=max_cost,
        limit=settings.activity_search_limit,
    )
    return ActivitySearchResponse(activities=activities)
