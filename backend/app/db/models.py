"""SQLAlchemy ORM models for users, the activity catalog and trips."""

import uuid
from datetime import UTC, date, datetime, time
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    Time,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from backend.app.models.common import Category


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class User(Base):
    """User table - trip owners."""

    __tablename__ = "user"

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    username: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    # Relationships
    trips: Mapped[list["Trip"]] = relationship(
        "Trip", back_populates="user", cascade="all, delete-orphan"
    )


class City(Base):
    """City table - shared catalog, unique per (name, country)."""

    __tablename__ = "city"
    __table_args__ = (UniqueConstraint("name", "country", name="uq_city_name_country"),)

    city_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    country: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    popularity_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    activities: Mapped[list["Activity"]] = relationship(
        "Activity", back_populates="city", cascade="all, delete-orphan"
    )


class Activity(Base):
    """Activity table - shared catalog entries, immutable to the scheduler."""

    __tablename__ = "activity"
    __table_args__ = (
        UniqueConstraint("city_id", "name", name="uq_activity_city_name"),
        Index("idx_activity_category", "category"),
    )

    activity_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    city_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("city.city_id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[Category] = mapped_column(
        Enum(Category, name="category"), nullable=False
    )
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    duration_hours: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Relationships
    city: Mapped["City"] = relationship("City", back_populates="activities")


class Trip(Base):
    """Trip table - root aggregate of the itinerary."""

    __tablename__ = "trip"
    __table_args__ = (Index("idx_trip_user_created", "user_id", "created_at"),)

    trip_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("user.user_id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    budget: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="trips")
    sections: Mapped[list["TripSection"]] = relationship(
        "TripSection",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="TripSection.order",
    )
    public_share: Mapped["PublicShare | None"] = relationship(
        "PublicShare", back_populates="trip", cascade="all, delete-orphan", uselist=False
    )


class TripSection(Base):
    """Trip section table - a date-bounded part of a trip."""

    __tablename__ = "trip_section"
    __table_args__ = (Index("idx_section_trip_order", "trip_id", "order"),)

    section_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    budget: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    # Derived, recomputed on every mutation of the trip
    category: Mapped[Category] = mapped_column(
        Enum(Category, name="category"), default=Category.BUFFER, nullable=False
    )
    has_overlap_warning: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="sections")
    activities: Mapped[list["SectionActivity"]] = relationship(
        "SectionActivity",
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="SectionActivity.order",
    )


class SectionActivity(Base):
    """Section activity table - a catalog activity scheduled within a section."""

    __tablename__ = "section_activity"
    __table_args__ = (Index("idx_section_activity_section", "section_id", "order"),)

    instance_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    section_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip_section.section_id", ondelete="CASCADE"), nullable=False
    )
    activity_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("activity.activity_id"), nullable=False
    )
    scheduled_date: Mapped[date] = mapped_column(Date, nullable=False)
    scheduled_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    expense: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Relationships
    section: Mapped["TripSection"] = relationship("TripSection", back_populates="activities")
    activity: Mapped["Activity"] = relationship("Activity")


class PublicShare(Base):
    """Public share table - published, copyable trips."""

    __tablename__ = "public_share"

    share_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("trip.trip_id", ondelete="CASCADE"), nullable=False, unique=True
    )
    slug: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    # Relationships
    trip: Mapped["Trip"] = relationship("Trip", back_populates="public_share")
