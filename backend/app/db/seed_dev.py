"""Dev seeding helper for stub authentication and the starter catalog."""

import asyncio
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.catalog_seed import ACTIVITY_TEMPLATES, CITIES, CITY_ACTIVITIES, ActivitySeed
from backend.app.db.engine import get_async_engine
from backend.app.db.models import Activity, City, User

logger = logging.getLogger(__name__)

# Fixed ID matching stub auth in backend/app/api/auth.py
DEV_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")


async def seed_dev_user(session: AsyncSession) -> User:
    """Seed the dev user for stub authentication.

    Idempotent - returns the existing user if already present.
    """
    user = await session.get(User, DEV_USER_ID)
    if user is None:
        logger.info(f"Creating dev user with id {DEV_USER_ID}")
        user = User(user_id=DEV_USER_ID, email="dev@example.com", username="dev")
        session.add(user)
    return user


async def seed_catalog(session: AsyncSession) -> tuple[int, int]:
    """Upsert the starter catalog.

    Cities are matched on (name, country) and activities on (city, name);
    existing rows are left untouched.

    Returns:
        (cities_created, activities_created)
    """
    cities_created = 0
    activities_created = 0

    for seed in CITIES:
        result = await session.execute(
            select(City).where(City.name == seed.name, City.country == seed.country)
        )
        city = result.scalar_one_or_none()
        if city is None:
            city = City(
                city_id=uuid.uuid4(),
                name=seed.name,
                country=seed.country,
                latitude=seed.latitude,
                longitude=seed.longitude,
                popularity_score=seed.popularity_score,
            )
            session.add(city)
            cities_created += 1

        existing = set(
            (
                await session.execute(select(Activity.name).where(Activity.city_id == city.city_id))
            ).scalars()
        )
        specific = CITY_ACTIVITIES.get(seed.name, [])
        specific_names = {activity.name for activity in specific}
        templates = [t for t in ACTIVITY_TEMPLATES if t.name not in specific_names]

        for activity in [*specific, *templates]:
            if activity.name in existing:
                continue
            session.add(_activity_row(city, activity))
            activities_created += 1

    return cities_created, activities_created


def _activity_row(city: City, seed: ActivitySeed) -> Activity:
    return Activity(
        activity_id=uuid.uuid4(),
        city_id=city.city_id,
        name=seed.name,
        description=f"{seed.name} in {city.name}, {city.country}",
        category=seed.category,
        cost=seed.cost,
        duration_hours=round(seed.duration_minutes / 60, 2),
    )


async def seed_dev() -> None:
    """Seed the dev user and the starter catalog, then commit."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        await seed_dev_user(session)
        cities, activities = await seed_catalog(session)
        await session.commit()
        logger.info(f"Dev seeding complete: {cities} cities, {activities} activities created")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed_dev())
