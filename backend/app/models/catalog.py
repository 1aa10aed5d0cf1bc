"""Catalog models - shared cities and activities."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from backend.app.models.common import Category


class CityView(BaseModel):
    """Catalog city."""

    city_id: UUID
    name: str
    country: str
    latitude: float | None
    longitude: float | None
    popularity_score: int


class CatalogActivityView(BaseModel):
    """Catalog activity with its base cost and category."""

    activity_id: UUID
    city_id: UUID
    city_name: str
    name: str
    description: str | None
    category: Category
    cost: Decimal
    duration_hours: float | None
