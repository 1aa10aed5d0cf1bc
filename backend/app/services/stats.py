"""Read-only aggregation behind GET /admin/stats."""

from collections import Counter
from datetime import UTC, date, datetime, time, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from backend.app.db.models import Activity, City, SectionActivity, Trip, User
from backend.app.models.common import Category, TripStatus
from backend.app.models.stats import (
    ActivityUsage,
    AdminStats,
    CategoryCount,
    SignupDay,
    TripStatusCount,
)
from backend.app.scheduling.dates import derive_trip_status
from backend.app.services.views import catalog_activity_view, city_view


async def _count(session: AsyncSession, model: type[User] | type[Trip]) -> int:
    return await session.scalar(select(func.count()).select_from(model)) or 0


async def _top_activities(session: AsyncSession, limit: int) -> list[ActivityUsage]:
    usage = func.count(SectionActivity.instance_id).label("usage")
    stmt = (
        select(Activity, usage)
        .join(SectionActivity, SectionActivity.activity_id == Activity.activity_id)
        .group_by(Activity.activity_id)
        .order_by(usage.desc(), Activity.name.asc())
        .limit(limit)
        .options(selectinload(Activity.city))
    )
    rows = (await session.execute(stmt)).all()
    return [
        ActivityUsage(activity=catalog_activity_view(activity), usage_count=count)
        for activity, count in rows
    ]


async def _category_distribution(session: AsyncSession) -> list[CategoryCount]:
    stmt = select(Activity.category, func.count()).group_by(Activity.category)
    counts = dict((await session.execute(stmt)).tuples().all())
    return [
        CategoryCount(category=category, count=counts.get(category, 0)) for category in Category
    ]


async def _trip_status_distribution(session: AsyncSession, today: date) -> list[TripStatusCount]:
    rows = await session.execute(select(Trip.start_date, Trip.end_date))
    counts = Counter(derive_trip_status(start, end, today) for start, end in rows)
    return [TripStatusCount(status=status, count=counts[status]) for status in TripStatus]


async def _signups(session: AsyncSession, today: date, days: int) -> list[SignupDay]:
    window_start = datetime.combine(today - timedelta(days=days), time.min, tzinfo=UTC)
    window_end = datetime.combine(today + timedelta(days=1), time.min, tzinfo=UTC)
    stmt = select(User.created_at).where(
        User.created_at >= window_start, User.created_at < window_end
    )
    per_day = Counter(created_at.date() for created_at in (await session.scalars(stmt)))
    return [SignupDay(day=day, count=per_day[day]) for day in sorted(per_day)]


async def collect_admin_stats(
    session: AsyncSession, *, today: date, top_n: int = 10, signup_days: int = 30
) -> AdminStats:
    """Aggregate user, trip and catalog statistics.

    Args:
        session: Async database session
        today: Reference day for trip status and the signup window
        top_n: Length of the city and activity rankings
        signup_days: Days before ``today`` covered by the signup series

    Returns:
        AdminStats; top cities are ranked by popularity, top activities by how
        often they are scheduled, each with name as the tie-break
    """
    cities = await session.scalars(
        select(City).order_by(City.popularity_score.desc(), City.name.asc()).limit(top_n)
    )
    return AdminStats(
        user_count=await _count(session, User),
        trip_count=await _count(session, Trip),
        top_cities=[city_view(city) for city in cities],
        top_activities=await _top_activities(session, top_n),
        category_distribution=await _category_distribution(session),
        trip_status_distribution=await _trip_status_distribution(session, today),
        signups=await _signups(session, today, signup_days),
    )
