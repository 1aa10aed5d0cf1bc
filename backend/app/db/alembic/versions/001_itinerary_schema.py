"""Itinerary schema

Revision ID: 001
Revises:
Create Date: 2026-10-17

Creates the itinerary tables:
- user
- city, activity (shared catalog)
- trip, trip_section, section_activity
- public_share
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CATEGORY = sa.Enum("TRAVEL", "STAY", "EXPERIENCE", "BUFFER", name="category")


def upgrade() -> None:
    """Create all tables."""
    # user table
    op.create_table(
        "user",
        sa.Column("user_id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.Text(), nullable=False, unique=True),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # city table
    op.create_table(
        "city",
        sa.Column("city_id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("country", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("popularity_score", sa.Integer(), nullable=False),
        sa.UniqueConstraint("name", "country", name="uq_city_name_country"),
    )

    # activity table
    op.create_table(
        "activity",
        sa.Column("activity_id", sa.Uuid(), primary_key=True),
        sa.Column("city_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", CATEGORY, nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("duration_hours", sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(["city_id"], ["city.city_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("city_id", "name", name="uq_activity_city_name"),
    )
    op.create_index("idx_activity_category", "activity", ["category"])

    # trip table
    op.create_table(
        "trip",
        sa.Column("trip_id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("budget", sa.Numeric(12, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.user_id"], ondelete="CASCADE"),
    )
    op.create_index("idx_trip_user_created", "trip", ["user_id", "created_at"])

    # trip_section table
    op.create_table(
        "trip_section",
        sa.Column("section_id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("budget", sa.Numeric(12, 2), nullable=False),
        sa.Column("category", CATEGORY, nullable=False),
        sa.Column("has_overlap_warning", sa.Boolean(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trip.trip_id"], ondelete="CASCADE"),
    )
    op.create_index("idx_section_trip_order", "trip_section", ["trip_id", "order"])

    # section_activity table
    op.create_table(
        "section_activity",
        sa.Column("instance_id", sa.Uuid(), primary_key=True),
        sa.Column("section_id", sa.Uuid(), nullable=False),
        sa.Column("activity_id", sa.Uuid(), nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("scheduled_time", sa.Time(), nullable=True),
        sa.Column("expense", sa.Numeric(12, 2), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["section_id"], ["trip_section.section_id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["activity_id"], ["activity.activity_id"]),
    )
    op.create_index(
        "idx_section_activity_section", "section_activity", ["section_id", "order"]
    )

    # public_share table
    op.create_table(
        "public_share",
        sa.Column("share_id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False, unique=True),
        sa.Column("slug", sa.Text(), nullable=False, unique=True),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trip.trip_id"], ondelete="CASCADE"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("public_share")
    op.drop_table("section_activity")
    op.drop_table("trip_section")
    op.drop_table("trip")
    op.drop_table("activity")
    op.drop_table("city")
    op.drop_table("user")
    CATEGORY.drop(op.get_bind(), checkfirst=True)
