"""External lookup endpoints - country facts, city weather and geocoding."""

import logging
from typing import Annotated
from uuid import UUID

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.deps import get_external_service
from backend.app.api.errors import to_http_error
from backend.app.db.engine import get_session
from backend.app.models.external import CountryLookup, GeocodeLookup, WeatherLookup
from backend.app.services.catalog import get_city
from backend.app.services.errors import ItineraryError
from backend.app.services.external import ExternalLookupService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/external", tags=["external"])


def _upstream_error(source: str, error: httpx.HTTPError) -> HTTPException:
    logger.warning(
        f"Upstream lookup failed: {source}",
        extra={"structured": {"source": source, "error": type(error).__name__}},
    )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Upstream service unavailable: {source}",
    )


@router.get("/countries/{name}", response_model=CountryLookup)
async def get_country(
    name: str,
    service: Annotated[ExternalLookupService, Depends(get_external_service)],
) -> CountryLookup:
    """Country facts (currencies, languages, timezones) by full name."""
    try:
        country, cache_hit = await service.country(name)
    except httpx.HTTPError as e:
        raise _upstream_error("countries", e) from e

    if country is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Country not found.")
    return CountryLookup(source="countries", cache_hit=cache_hit, country=country)


@router.get("/cities/{city_id}/weather", response_model=WeatherLookup)
async def get_city_weather(
    city_id: UUID,
    session: Annotated[AsyncSession, Depends(get_session)],
    service: Annotated[ExternalLookupService, Depends(get_external_service)],
    days: Annotated[int, Query(ge=1, le=16)] = 7,
) -> WeatherLookup:
    """Daily forecast for a catalog city."""
    try:
        city = await get_city(session, city_id)
    except ItineraryError as e:
        raise to_http_error(e) from e

    if city.latitude is None or city.longitude is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="City has no coordinates."
        )

    try:
        forecast, cache_hit = await service.city_weather(city, days=days)
    except httpx.HTTPError as e:
        raise _upstream_error("weather", e) from e

    return WeatherLookup(source="weather", cache_hit=cache_hit, city_id=city_id, forecast=forecast)


@router.get("/geocode", response_model=GeocodeLookup)
async def geocode(
    service: Annotated[ExternalLookupService, Depends(get_external_service)],
    city: Annotated[str, Query(min_length=1, max_length=200)],
    country: Annotated[str | None, Query(max_length=200)] = None,
) -> GeocodeLookup:
    """Coordinates for a city name."""
    try:
        result, cache_hit = await service.geocode(city, country)
    except httpx.HTTPError as e:
        raise _upstream_error("geocode", e) from e

    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Place not found.")
    return GeocodeLookup(source="geocode", cache_hit=cache_hit, result=result)
