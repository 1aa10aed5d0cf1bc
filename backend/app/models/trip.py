"""Trip models - itinerary views returned to clients."""

from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from backend.app.models.common import Category, RangeErrorKind, TripStatus


class ActivityInstanceView(BaseModel):
    """A catalog activity scheduled within a section."""

    instance_id: UUID
    section_id: UUID
    activity_id: UUID
    activity_name: str
    category: Category
    catalog_cost: Decimal
    scheduled_date: date
    scheduled_time: time | None
    expense: Decimal | None
    effective_expense: Decimal
    order: int


class SectionView(BaseModel):
    """A date-bounded section of a trip with its derived fields."""

    section_id: UUID
    trip_id: UUID
    title: str | None
    notes: str | None
    start_date: date
    end_date: date
    budget: Decimal
    category: Category
    has_overlap_warning: bool
    order: int
    activities: list[ActivityInstanceView] = Field(default_factory=list)


class TripView(BaseModel):
    """A trip with its sections, in display order."""

    trip_id: UUID
    user_id: UUID
    name: str
    start_date: date
    end_date: date
    budget: Decimal
    status: TripStatus
    created_at: datetime
    sections: list[SectionView] = Field(default_factory=list)


class SectionPreview(BaseModel):
    """Validation and overlap outcome for a not-yet-saved section range."""

    valid: bool
    error_kind: RangeErrorKind | None = None
    message: str | None = None
    overlaps: bool
    flagged_section_ids: list[UUID]


class PublicShareView(BaseModel):
    """Publication record for a shared trip."""

    trip_id: UUID
    slug: str
    is_public: bool
    created_at: datetime


class PublicTripView(BaseModel):
    """A published trip as shown to other users."""

    slug: str
    owner_username: str | None
    trip: TripView
