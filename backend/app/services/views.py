"""ORM-to-domain conversion for itinerary reads.

Services return these pydantic views, never ORM instances. Every function
here expects the trip subtree to be eager-loaded.
"""

from datetime import date

from backend.app.db.models import Activity, City, PublicShare, SectionActivity, Trip, TripSection
from backend.app.models.catalog import CatalogActivityView, CityView
from backend.app.models.trip import (
    ActivityInstanceView,
    PublicShareView,
    SectionView,
    TripView,
)
from backend.app.scheduling.dates import derive_trip_status
from backend.app.scheduling.records import InstanceRecord, SectionRecord, TripRecord


def trip_record(trip: Trip) -> TripRecord:
    return TripRecord(start=trip.start_date, end=trip.end_date, budget=trip.budget)


def section_records(trip: Trip) -> list[SectionRecord]:
    return [
        SectionRecord(
            id=section.section_id,
            start=section.start_date,
            end=section.end_date,
            budget=section.budget,
        )
        for section in trip.sections
    ]


def instance_record(instance: SectionActivity) -> InstanceRecord:
    return InstanceRecord(
        id=instance.instance_id,
        section_id=instance.section_id,
        scheduled_date=instance.scheduled_date,
        expense_override=instance.expense,
        catalog_cost=instance.activity.cost,
        catalog_category=instance.activity.category,
    )


def instance_records(trip: Trip) -> list[InstanceRecord]:
    """Flatten every activity instance of a trip into engine records."""
    return [
        instance_record(instance)
        for section in trip.sections
        for instance in section.activities
    ]


def instance_view(instance: SectionActivity) -> ActivityInstanceView:
    record = instance_record(instance)
    return ActivityInstanceView(
        instance_id=instance.instance_id,
        section_id=instance.section_id,
        activity_id=instance.activity_id,
        activity_name=instance.activity.name,
        category=instance.activity.category,
        catalog_cost=instance.activity.cost,
        scheduled_date=instance.scheduled_date,
        scheduled_time=instance.scheduled_time,
        expense=instance.expense,
        effective_expense=record.effective_expense,
        order=instance.order,
    )


def section_view(section: TripSection) -> SectionView:
    return SectionView(
        section_id=section.section_id,
        trip_id=section.trip_id,
        title=section.title,
        notes=section.notes,
        start_date=section.start_date,
        end_date=section.end_date,
        budget=section.budget,
        category=section.category,
        has_overlap_warning=section.has_overlap_warning,
        order=section.order,
        activities=[instance_view(instance) for instance in section.activities],
    )


def trip_view(trip: Trip, today: date) -> TripView:
    """Convert a trip aggregate, deriving its status relative to ``today``."""
    return TripView(
        trip_id=trip.trip_id,
        user_id=trip.user_id,
        name=trip.name,
        start_date=trip.start_date,
        end_date=trip.end_date,
        budget=trip.budget,
        status=derive_trip_status(trip.start_date, trip.end_date, today),
        created_at=trip.created_at,
        sections=[section_view(section) for section in trip.sections],
    )


def public_share_view(share: PublicShare) -> PublicShareView:
    return PublicShareView(
        trip_id=share.trip_id,
        slug=share.slug,
        is_public=share.is_public,
        created_at=share.created_at,
    )


def city_view(city: City) -> CityView:
    return CityView(
        city_id=city.city_id,
        name=city.name,
        country=city.country,
        latitude=city.latitude,
        longitude=city.longitude,
        popularity_score=city.popularity_score,
    )


def catalog_activity_view(activity: Activity) -> CatalogActivityView:
    return CatalogActivityView(
        activity_id=activity.activity_id,
        city_id=activity.city_id,
        city_name=activity.city.name,
        name=activity.name,
        description=activity.description,
        category=activity.category,
        cost=activity.cost,
        duration_hours=activity.duration_hours,
    )
