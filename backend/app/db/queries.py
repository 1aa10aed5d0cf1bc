"""Ownership-safe query helpers."""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from backend.app.db.context import RequestContext
from backend.app.db.models import PublicShare, SectionActivity, Trip, TripSection


def trip_subtree_options() -> list[LoaderOption]:
    """Eager-load options for a full trip aggregate.

    Loads sections, their activity instances, each instance's catalog
    activity and the public share, so the aggregate can be worked on without
    lazy loads.
    """
    return [
        selectinload(Trip.sections)
        .selectinload(TripSection.activities)
        .selectinload(SectionActivity.activity),
        selectinload(Trip.public_share),
    ]


def query_trips(ctx: RequestContext) -> Select[tuple[Trip]]:
    """Select trips with user scoping enforced.

    Args:
        ctx: Request context with user_id

    Returns:
        Select filtered by owner, with the full subtree eager-loaded
    """
    return select(Trip).where(Trip.user_id == ctx.user_id).options(*trip_subtree_options())


def query_trip(trip_id: UUID, ctx: RequestContext) -> Select[tuple[Trip]]:
    """Select one owned trip with its full subtree."""
    return query_trips(ctx).where(Trip.trip_id == trip_id)


def query_trip_for_section(section_id: UUID, ctx: RequestContext) -> Select[tuple[Trip]]:
    """Select the owned trip containing a section, with its full subtree."""
    return query_trips(ctx).join(Trip.sections).where(TripSection.section_id == section_id)


def query_public_shares() -> Select[tuple[PublicShare]]:
    """Select published shares with the owner and the shared trip's full subtree."""
    return (
        select(PublicShare)
        .where(PublicShare.is_public.is_(True))
        .options(
            selectinload(PublicShare.trip)
            .selectinload(Trip.sections)
            .selectinload(TripSection.activities)
            .selectinload(SectionActivity.activity),
            selectinload(PublicShare.trip).selectinload(Trip.user),
        )
    )


def query_public_share(slug: str) -> Select[tuple[PublicShare]]:
    """Select one published share by slug."""
    return query_public_shares().where(PublicShare.slug == slug)
