"""Itinerary service - the single mutation path for trips.

Every mutation follows the same unit of work:

1. Load the full trip aggregate (sections, instances, catalog activities).
2. Validate the requested dates; on failure raise ``ScheduleRejectedError``
   before any ORM state is touched.
3. Apply the change.
4. Recompute every section's overlap flag and category.
5. Commit once.

Derived section fields are therefore never stale after a committed mutation.
"""

import uuid
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Final
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import Settings, get_settings
from backend.app.db.context import RequestContext
from backend.app.db.models import Activity, PublicShare, SectionActivity, Trip, TripSection, User
from backend.app.db.queries import query_trip, query_trip_for_section, query_trips
from backend.app.models.budget import TripBudgetReport
from backend.app.models.common import TripStatus
from backend.app.models.trip import (
    ActivityInstanceView,
    PublicShareView,
    SectionPreview,
    SectionView,
    TripView,
)
from backend.app.models.validation import RangeValidation
from backend.app.scheduling.budget import compute_trip_budget
from backend.app.scheduling.classifier import classify_sections
from backend.app.scheduling.dates import DateRange
from backend.app.scheduling.overlap import OverlapResult, detect_overlaps
from backend.app.scheduling.shifter import SectionShiftInput, shift_trip
from backend.app.scheduling.validator import (
    first_failure,
    validate_instance_within_section,
    validate_range_order,
    validate_section_within_trip,
)
from backend.app.services.errors import (
    ActivityInstanceNotFoundError,
    CatalogActivityNotFoundError,
    ScheduleRejectedError,
    SectionNotFoundError,
    TripNotFoundError,
)
from backend.app.services.sharing import load_public_share, make_slug
from backend.app.services.views import (
    instance_records,
    instance_view,
    public_share_view,
    section_records,
    section_view,
    trip_record,
    trip_view,
)
from backend.app.utils.logging import StructuredMutationLogger
from backend.app.utils.metrics import PrometheusItineraryMetrics


class _Unset(Enum):
    TOKEN = 0


# Default for fields that may be cleared to None; omitted means unchanged
UNSET: Final = _Unset.TOKEN


def refresh_derived_fields(trip: Trip) -> OverlapResult[UUID]:
    """Recompute overlap flags and categories for every section of a trip.

    Args:
        trip: Trip aggregate with sections, instances and catalog activities loaded

    Returns:
        The overlap result the flags were taken from
    """
    ranges = {
        section.section_id: DateRange(section.start_date, section.end_date)
        for section in trip.sections
    }
    overlap = detect_overlaps(ranges)
    categories = classify_sections(ranges.keys(), instance_records(trip))

    for section in trip.sections:
        section.has_overlap_warning = section.section_id in overlap.overlapping
        section.category = categories[section.section_id]

    return overlap


def _find_section(trip: Trip, section_id: UUID) -> TripSection:
    for section in trip.sections:
        if section.section_id == section_id:
            return section
    raise SectionNotFoundError()


def _find_instance(section: TripSection, instance_id: UUID) -> SectionActivity:
    for instance in section.activities:
        if instance.instance_id == instance_id:
            return instance
    raise ActivityInstanceNotFoundError()


class ItineraryService:
    """Owner-scoped trip operations for one request.

    Args:
        session: Async database session, owned by the caller
        ctx: Request context of the acting user
        today: Reference date for derived trip status and copy anchors
        settings: Application settings
        mutation_logger: Structured mutation logger
        metrics: Itinerary metrics sink
    """

    def __init__(
        self,
        session: AsyncSession,
        ctx: RequestContext,
        *,
        today: date | None = None,
        settings: Settings | None = None,
        mutation_logger: StructuredMutationLogger | None = None,
        metrics: PrometheusItineraryMetrics | None = None,
    ) -> None:
        self.session = session
        self.ctx = ctx
        self.today = today or date.today()
        self.settings = settings or get_settings()
        self.mutation_logger = mutation_logger or StructuredMutationLogger()
        self.metrics = metrics or PrometheusItineraryMetrics()

    # Loading

    async def _load_trip(self, trip_id: UUID, *, refresh: bool = False) -> Trip:
        stmt = query_trip(trip_id, self.ctx)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        trip = (await self.session.execute(stmt)).scalar_one_or_none()
        if trip is None:
            raise TripNotFoundError()
        return trip

    async def _load_trip_for_section(self, section_id: UUID) -> tuple[Trip, TripSection]:
        result = await self.session.execute(query_trip_for_section(section_id, self.ctx))
        trip = result.scalar_one_or_none()
        if trip is None:
            raise SectionNotFoundError()
        return trip, _find_section(trip, section_id)

    async def _ensure_owner(self) -> None:
        """Provision a user row for the acting user on first write."""
        if await self.session.get(User, self.ctx.user_id) is not None:
            return
        self.session.add(
            User(
                user_id=self.ctx.user_id,
                email=self.ctx.placeholder_email,
                username=self.ctx.placeholder_username,
            )
        )

    # Unit of work

    def _ensure_valid(
        self, operation: str, trip_id: UUID | None, validation: RangeValidation
    ) -> None:
        if validation.valid:
            return

        error_kind = validation.error_kind
        self.metrics.inc_rejection(operation, error_kind.value if error_kind else "unknown")
        self.mutation_logger.log_mutation(
            self.ctx, operation, trip_id, "rejected", error_kind=error_kind
        )
        raise ScheduleRejectedError(validation)

    async def _commit(self, operation: str, trip: Trip, *, deleted: bool = False) -> None:
        trip_id = trip.trip_id
        overlap = None if deleted else refresh_derived_fields(trip)
        # Read before commit; collections of new rows are not loaded afterwards
        section_count = None if deleted else len(trip.sections)
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            self.metrics.inc_mutation(operation, "failed")
            self.mutation_logger.log_mutation(self.ctx, operation, trip_id, "failed")
            raise

        self.metrics.inc_mutation(operation, "committed")
        self.mutation_logger.log_mutation(
            self.ctx,
            operation,
            trip_id,
            "committed",
            section_count=section_count,
            overlapping_count=len(overlap.overlapping) if overlap else None,
        )

    # Trips

    async def list_trips(self, status: TripStatus | None = None) -> list[TripView]:
        """List the caller's trips, newest first, optionally by derived status."""
        stmt = query_trips(self.ctx).order_by(Trip.created_at.desc())
        trips = (await self.session.execute(stmt)).scalars().all()
        views = [trip_view(trip, self.today) for trip in trips]
        if status is None:
            return views
        return [view for view in views if view.status == status]

    async def get_trip(self, trip_id: UUID) -> TripView:
        return trip_view(await self._load_trip(trip_id), self.today)

    async def create_trip(
        self, *, name: str, start_date: date, end_date: date, budget: Decimal = Decimal("0")
    ) -> TripView:
        """Create an empty trip.

        Raises:
            ScheduleRejectedError: If ``end_date`` is before ``start_date``
        """
        self._ensure_valid("create_trip", None, validate_range_order(start_date, end_date))

        await self._ensure_owner()
        trip = Trip(
            trip_id=uuid.uuid4(),
            user_id=self.ctx.user_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            budget=budget,
            sections=[],
        )
        self.session.add(trip)
        await self._commit("create_trip", trip)
        return trip_view(await self._load_trip(trip.trip_id, refresh=True), self.today)

    async def update_trip(
        self,
        trip_id: UUID,
        *,
        name: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        budget: Decimal | None = None,
    ) -> TripView:
        """Update trip fields; ``None`` leaves a field unchanged.

        New trip dates must still contain every existing section.

        Raises:
            TripNotFoundError: If the trip is not owned by the caller
            ScheduleRejectedError: If the new dates are invalid
        """
        trip = await self._load_trip(trip_id)
        new_start = start_date or trip.start_date
        new_end = end_date or trip.end_date

        validation = validate_range_order(new_start, new_end)
        if validation.valid:
            validation = first_failure(
                validate_section_within_trip(
                    section.start_date, section.end_date, new_start, new_end
                )
                for section in trip.sections
            )
        self._ensure_valid("update_trip", trip_id, validation)

        if name is not None:
            trip.name = name
        if budget is not None:
            trip.budget = budget
        trip.start_date = new_start
        trip.end_date = new_end

        await self._commit("update_trip", trip)
        return trip_view(await self._load_trip(trip_id, refresh=True), self.today)

    async def delete_trip(self, trip_id: UUID) -> None:
        """Delete a trip with its sections, instances and public share."""
        trip = await self._load_trip(trip_id)
        await self.session.delete(trip)
        await self._commit("delete_trip", trip, deleted=True)

    async def get_trip_budget(self, trip_id: UUID) -> TripBudgetReport:
        """Compute the budget report of a trip."""
        trip = await self._load_trip(trip_id)
        return compute_trip_budget(trip_record(trip), section_records(trip), instance_records(trip))

    # Sections

    async def create_section(
        self,
        trip_id: UUID,
        *,
        start_date: date,
        end_date: date,
        budget: Decimal = Decimal("0"),
        title: str | None = None,
        notes: str | None = None,
        order: int | None = None,
    ) -> SectionView:
        """Add a section to a trip.

        Raises:
            TripNotFoundError: If the trip is not owned by the caller
            ScheduleRejectedError: If the section's dates are invalid or leave the trip
        """
        trip = await self._load_trip(trip_id)
        self._ensure_valid(
            "create_section",
            trip_id,
            validate_section_within_trip(start_date, end_date, trip.start_date, trip.end_date),
        )

        section = TripSection(
            section_id=uuid.uuid4(),
            trip_id=trip.trip_id,
            title=title,
            notes=notes,
            start_date=start_date,
            end_date=end_date,
            budget=budget,
            order=len(trip.sections) if order is None else order,
            activities=[],
        )
        trip.sections.append(section)

        await self._commit("create_section", trip)
        trip = await self._load_trip(trip_id, refresh=True)
        return section_view(_find_section(trip, section.section_id))

    async def update_section(
        self,
        trip_id: UUID,
        section_id: UUID,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
        budget: Decimal | None = None,
        title: str | None | _Unset = UNSET,
        notes: str | None | _Unset = UNSET,
        order: int | None = None,
    ) -> SectionView:
        """Update section fields.

        ``None`` leaves dates, budget and order unchanged. ``title`` and
        ``notes`` are only touched when passed, and ``None`` clears them.

        New section dates must stay inside the trip and still contain every
        scheduled activity of the section.

        Raises:
            TripNotFoundError: If the trip is not owned by the caller
            SectionNotFoundError: If the section is not part of the trip
            ScheduleRejectedError: If the new dates are invalid
        """
        trip = await self._load_trip(trip_id)
        section = _find_section(trip, section_id)
        new_start = start_date or section.start_date
        new_end = end_date or section.end_date

        validation = validate_section_within_trip(
            new_start, new_end, trip.start_date, trip.end_date
        )
        if validation.valid:
            validation = first_failure(
                validate_instance_within_section(instance.scheduled_date, new_start, new_end)
                for instance in section.activities
            )
        self._ensure_valid("update_section", trip_id, validation)

        section.start_date = new_start
        section.end_date = new_end
        if budget is not None:
            section.budget = budget
        if title is not UNSET:
            section.title = title
        if notes is not UNSET:
            section.notes = notes
        if order is not None:
            section.order = order

        await self._commit("update_section", trip)
        trip = await self._load_trip(trip_id, refresh=True)
        return section_view(_find_section(trip, section_id))

    async def delete_section(self, trip_id: UUID, section_id: UUID) -> None:
        """Remove a section and its activity instances."""
        trip = await self._load_trip(trip_id)
        trip.sections.remove(_find_section(trip, section_id))
        await self._commit("delete_section", trip)

    async def preview_section(
        self,
        trip_id: UUID,
        *,
        start_date: date,
        end_date: date,
        section_id: UUID | None = None,
    ) -> SectionPreview:
        """Check a not-yet-saved section range without changing anything.

        Args:
            trip_id: Trip the section belongs to
            start_date: Candidate start
            end_date: Candidate end (inclusive)
            section_id: Section being edited, excluded from the comparison

        Returns:
            SectionPreview with the validation outcome and the sections that
            would carry an overlap warning
        """
        trip = await self._load_trip(trip_id)
        if section_id is not None:
            _find_section(trip, section_id)

        validation = validate_section_within_trip(
            start_date, end_date, trip.start_date, trip.end_date
        )
        ranges = {
            section.section_id: DateRange(section.start_date, section.end_date)
            for section in trip.sections
            if section.section_id != section_id
        }
        candidate = DateRange(start_date, end_date) if validation.valid else None
        overlap = detect_overlaps(ranges, candidate=candidate)

        return SectionPreview(
            valid=validation.valid,
            error_kind=validation.error_kind,
            message=validation.message,
            overlaps=overlap.candidate_overlaps,
            flagged_section_ids=sorted(overlap.overlapping, key=str),
        )

    # Activity instances

    async def add_activity(
        self,
        section_id: UUID,
        *,
        activity_id: UUID,
        scheduled_date: date,
        scheduled_time: time | None = None,
        expense: Decimal | None = None,
        order: int | None = None,
    ) -> ActivityInstanceView:
        """Schedule a catalog activity within a section.

        Raises:
            SectionNotFoundError: If the section is not in a trip owned by the caller
            CatalogActivityNotFoundError: If the catalog activity does not exist
            ScheduleRejectedError: If the date is outside the section
        """
        trip, section = await self._load_trip_for_section(section_id)
        activity = await self.session.get(Activity, activity_id)
        if activity is None:
            raise CatalogActivityNotFoundError()

        self._ensure_valid(
            "add_activity",
            trip.trip_id,
            validate_instance_within_section(
                scheduled_date, section.start_date, section.end_date
            ),
        )

        instance = SectionActivity(
            instance_id=uuid.uuid4(),
            section_id=section.section_id,
            activity_id=activity.activity_id,
            activity=activity,
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            expense=expense,
            order=len(section.activities) if order is None else order,
        )
        section.activities.append(instance)

        await self._commit("add_activity", trip)
        trip = await self._load_trip(trip.trip_id, refresh=True)
        return instance_view(
            _find_instance(_find_section(trip, section_id), instance.instance_id)
        )

    async def update_activity(
        self,
        section_id: UUID,
        instance_id: UUID,
        *,
        scheduled_date: date | None = None,
        scheduled_time: time | None | _Unset = UNSET,
        expense: Decimal | None | _Unset = UNSET,
        order: int | None = None,
    ) -> ActivityInstanceView:
        """Update a scheduled activity.

        ``None`` leaves the date and order unchanged. ``scheduled_time`` and
        ``expense`` are only touched when passed; ``None`` clears the time, or
        drops the expense override so the catalog cost applies again.

        Raises:
            SectionNotFoundError: If the section is not in a trip owned by the caller
            ActivityInstanceNotFoundError: If the instance is not in the section
            ScheduleRejectedError: If the new date is outside the section
        """
        trip, section = await self._load_trip_for_section(section_id)
        instance = _find_instance(section, instance_id)
        new_date = scheduled_date or instance.scheduled_date

        self._ensure_valid(
            "update_activity",
            trip.trip_id,
            validate_instance_within_section(new_date, section.start_date, section.end_date),
        )

        instance.scheduled_date = new_date
        if scheduled_time is not UNSET:
            instance.scheduled_time = scheduled_time
        if expense is not UNSET:
            instance.expense = expense
        if order is not None:
            instance.order = order

        await self._commit("update_activity", trip)
        trip = await self._load_trip(trip.trip_id, refresh=True)
        return instance_view(_find_instance(_find_section(trip, section_id), instance_id))

    async def remove_activity(self, section_id: UUID, instance_id: UUID) -> None:
        """Remove a scheduled activity from its section."""
        trip, section = await self._load_trip_for_section(section_id)
        section.activities.remove(_find_instance(section, instance_id))
        await self._commit("remove_activity", trip)

    # Sharing

    async def publish_trip(self, trip_id: UUID) -> PublicShareView:
        """Publish a trip, or re-publish it under its existing slug."""
        trip = await self._load_trip(trip_id)
        if trip.public_share is None:
            trip.public_share = PublicShare(
                share_id=uuid.uuid4(),
                trip_id=trip.trip_id,
                slug=make_slug(trip.name, trip.trip_id),
            )
        trip.public_share.is_public = True

        await self._commit("publish_trip", trip)
        return public_share_view(trip.public_share)

    async def copy_public_trip(self, slug: str, anchor: date | None = None) -> TripView:
        """Duplicate a published trip into the caller's trips.

        The copy starts on ``anchor`` (today by default). Sections keep their
        offsets and durations, instances keep their offsets from trip start,
        and derived fields are recomputed on the copy.

        Raises:
            PublicTripNotFoundError: If no public trip has this slug
        """
        share = await load_public_share(self.session, slug)
        source = share.trip
        anchor = anchor or self.today

        plan = shift_trip(
            DateRange(source.start_date, source.end_date),
            [
                SectionShiftInput(
                    key=section.section_id,
                    start=section.start_date,
                    end=section.end_date,
                    instance_dates={
                        instance.instance_id: instance.scheduled_date
                        for instance in section.activities
                    },
                )
                for section in source.sections
            ],
            anchor,
        )

        await self._ensure_owner()
        copy = Trip(
            trip_id=uuid.uuid4(),
            user_id=self.ctx.user_id,
            name=f"{source.name}{self.settings.copy_name_suffix}",
            start_date=plan.trip.new_start,
            end_date=plan.trip.new_end,
            budget=source.budget,
            sections=[],
        )
        for section in source.sections:
            shifted = plan.sections[section.section_id]
            section_copy = TripSection(
                section_id=uuid.uuid4(),
                trip_id=copy.trip_id,
                title=section.title,
                notes=section.notes,
                start_date=shifted.new_start,
                end_date=shifted.new_end,
                budget=section.budget,
                order=section.order,
                activities=[],
            )
            for instance in section.activities:
                section_copy.activities.append(
                    SectionActivity(
                        instance_id=uuid.uuid4(),
                        section_id=section_copy.section_id,
                        activity_id=instance.activity_id,
                        activity=instance.activity,
                        scheduled_date=plan.instances[instance.instance_id],
                        scheduled_time=instance.scheduled_time,
                        expense=instance.expense,
                        order=instance.order,
                    )
                )
            copy.sections.append(section_copy)

        self.session.add(copy)
        await self._commit("copy_public_trip", copy)
        return trip_view(await self._load_trip(copy.trip_id, refresh=True), self.today)
