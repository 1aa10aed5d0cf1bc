"""Itinerary service against a real PostgreSQL database.

Skipped unless DATABASE_URL points at PostgreSQL.
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.context import RequestContext
from backend.app.db.models import Activity, City
from backend.app.models.common import Category
from backend.app.services.itinerary import ItineraryService

pytestmark = [pytest.mark.integration, pytest.mark.postgres]


@pytest.mark.asyncio
async def test_schedule_and_budget_on_postgres(postgres_session: AsyncSession) -> None:
    city = City(city_id=uuid.uuid4(), name=f"Porto-{uuid.uuid4().hex[:6]}", country="Portugal")
    tram = Activity(
        activity_id=uuid.uuid4(),
        city_id=city.city_id,
        name="Tram 28",
        category=Category.TRAVEL,
        cost=Decimal("3.50"),
    )
    postgres_session.add_all([city, tram])
    await postgres_session.commit()

    service = ItineraryService(
        postgres_session, RequestContext(user_id=uuid.uuid4()), today=date(2026, 6, 1)
    )
    trip = await service.create_trip(
        name="Porto", start_date=date(2026, 9, 1), end_date=date(2026, 9, 4), budget=Decimal("40")
    )
    first = await service.create_section(
        trip.trip_id, start_date=date(2026, 9, 1), end_date=date(2026, 9, 2)
    )
    await service.create_section(
        trip.trip_id, start_date=date(2026, 9, 2), end_date=date(2026, 9, 4)
    )
    await service.add_activity(
        first.section_id, activity_id=tram.activity_id, scheduled_date=date(2026, 9, 1)
    )

    view = await service.get_trip(trip.trip_id)
    report = await service.get_trip_budget(trip.trip_id)

    assert [section.has_overlap_warning for section in view.sections] == [True, True]
    assert view.sections[0].category == Category.TRAVEL
    assert report.trip_total == Decimal("3.50")
    assert report.per_day[0].is_over_budget is False
