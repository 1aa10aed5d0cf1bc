"""Public trip reads - community listing and shared trip lookup."""

import re
from datetime import date
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db.models import PublicShare
from backend.app.db.queries import query_public_share, query_public_shares
from backend.app.models.trip import PublicTripView
from backend.app.services.errors import PublicTripNotFoundError
from backend.app.services.views import trip_view

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def make_slug(name: str, trip_id: UUID) -> str:
    """Build a readable, collision-resistant slug for a trip.

    Example: "Paris & Rome!" -> "paris-rome-1a2b3c4d"
    """
    base = _NON_SLUG_CHARS.sub("-", name.lower()).strip("-") or "trip"
    return f"{base}-{trip_id.hex[:8]}"


async def load_public_share(session: AsyncSession, slug: str) -> PublicShare:
    """Load a published share with the shared trip's full subtree.

    Raises:
        PublicTripNotFoundError: If no public share has this slug
    """
    result = await session.execute(query_public_share(slug))
    share = result.scalar_one_or_none()
    if share is None:
        raise PublicTripNotFoundError()
    return share


def _public_trip_view(share: PublicShare, today: date) -> PublicTripView:
    return PublicTripView(
        slug=share.slug,
        owner_username=share.trip.user.username if share.trip.user else None,
        trip=trip_view(share.trip, today),
    )


async def get_public_trip(session: AsyncSession, slug: str, today: date) -> PublicTripView:
    """Read a published trip by slug."""
    share = await load_public_share(session, slug)
    return _public_trip_view(share, today)


async def list_public_trips(
    session: AsyncSession, *, limit: int, today: date
) -> list[PublicTripView]:
    """List published trips, most recently published first.

    Args:
        session: Async database session
        limit: Maximum number of trips to return
        today: Reference date for derived trip status

    Returns:
        Published trips with their full itineraries
    """
    stmt = query_public_shares().order_by(PublicShare.created_at.desc()).limit(limit)
    return [_public_trip_view(share, today) for share in (await session.execute(stmt)).scalars()]
