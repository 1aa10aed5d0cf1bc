"""Site-wide usage statistics for the admin dashboard."""

from datetime import date

from pydantic import BaseModel

from backend.app.models.catalog import CatalogActivityView, CityView
from backend.app.models.common import Category, TripStatus


class CategoryCount(BaseModel):
    category: Category
    count: int


class TripStatusCount(BaseModel):
    status: TripStatus
    count: int


class ActivityUsage(BaseModel):
    """A catalog activity and how many section activities schedule it."""

    activity: CatalogActivityView
    usage_count: int


class SignupDay(BaseModel):
    day: date
    count: int


class AdminStats(BaseModel):
    """Counts and rankings across every traveler's data.

    Category and status distributions list every value in declaration order,
    including zero counts.
    """

    user_count: int
    trip_count: int
    top_cities: list[CityView]
    top_activities: list[ActivityUsage]
    category_distribution: list[CategoryCount]
    trip_status_distribution: list[TripStatusCount]
    signups: list[SignupDay]
