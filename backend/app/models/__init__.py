"""Models package - re-exports for convenience."""

from backend.app.models.budget import DayBudget, SectionBudget, TripBudgetReport
from backend.app.models.catalog import CatalogActivityView, CityView
from backend.app.models.common import Category, RangeErrorKind, TripStatus
from backend.app.models.external import CountryInfo, GeocodeResult, WeatherDay
from backend.app.models.trip import (
    ActivityInstanceView,
    PublicShareView,
    PublicTripView,
    SectionPreview,
    SectionView,
    TripView,
)
from backend.app.models.validation import RangeValidation

__all__ = [
    # Common
    "Category",
    "TripStatus",
    "RangeErrorKind",
    "RangeValidation",
    # Trips
    "TripView",
    "SectionView",
    "ActivityInstanceView",
    "SectionPreview",
    "PublicShareView",
    "PublicTripView",
    # Budget
    "TripBudgetReport",
    "DayBudget",
    "SectionBudget",
    # Catalog
    "CityView",
    "CatalogActivityView",
    # External
    "CountryInfo",
    "WeatherDay",
    "GeocodeResult",
]
