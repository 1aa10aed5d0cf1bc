"""Catalog search - read-only queries over cities and activities."""

from decimal import Decimal
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backend.app.db.models import Activity, City
from backend.app.models.catalog import CatalogActivityView, CityView
from backend.app.models.common import Category
from backend.app.services.errors import CityNotFoundError
from backend.app.services.views import catalog_activity_view, city_view


async def get_city(session: AsyncSession, city_id: UUID) -> City:
    """Load a catalog city.

    Raises:
        CityNotFoundError: If the city does not exist
    """
    city = await session.get(City, city_id)
    if city is None:
        raise CityNotFoundError()
    return city


async def search_cities(
    session: AsyncSession,
    *,
    query: str | None = None,
    country: str | None = None,
    limit: int = 50,
) -> list[CityView]:
    """Search cities by name or country, most popular first.

    Args:
        session: Async database session
        query: Case-insensitive substring of the city name or country
        country: Case-insensitive substring of the country
        limit: Maximum number of results

    Returns:
        Matching cities ordered by popularity, then name
    """
    stmt = select(City)
    if query:
        pattern = f"%{query}%"
        stmt = stmt.where(or_(City.name.ilike(pattern), City.country.ilike(pattern)))
    if country:
        stmt = stmt.where(City.country.ilike(f"%{country}%"))

    stmt = stmt.order_by(City.popularity_score.desc(), City.name.asc()).limit(limit)
    result = await session.execute(stmt)
    return [city_view(city) for city in result.scalars()]


async def search_activities(
    session: AsyncSession,
    *,
    query: str | None = None,
    category: Category | None = None,
    city_id: UUID | None = None,
    max_cost: Decimal | None = None,
    limit: int = 100,
) -> list[CatalogActivityView]:
    """Search catalog activities, cheapest first.

    Args:
        session: Async database session
        query: Case-insensitive substring of the name or description
        category: Exact category filter
        city_id: Restrict to one city
        max_cost: Upper bound on base cost (inclusive)
        limit: Maximum number of results

    Returns:
        Matching activities ordered by cost, then name
    """
    stmt = select(Activity).options(selectinload(Activity.city))
    if query:
        pattern = f"%{query}%"
        stmt = stmt.where(
            or_(Activity.name.ilike(pattern), Activity.description.ilike(pattern))
        )
    if category is not None:
        stmt = stmt.where(Activity.category == category)
    if city_id is not None:
        stmt = stmt.where(Activity.city_id == city_id)
    if max_cost is not None:
        stmt = stmt.where(Activity.cost <= max_cost)

    stmt = stmt.order_by(Activity.cost.asc(), Activity.name.asc()).limit(limit)
    result = await session.execute(stmt)
    return [catalog_activity_view(activity) for activity in result.scalars()]
