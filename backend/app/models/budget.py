"""Budget report models - read-only expense rollups for a trip."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel


class DayBudget(BaseModel):
    """Expense total for one calendar day of a trip."""

    date: date
    total_expense: Decimal
    daily_budget: Decimal
    is_over_budget: bool


class SectionBudget(BaseModel):
    """Expense total for one section, compared on average daily spend."""

    section_id: UUID
    total_expense: Decimal
    budget: Decimal
    daily_budget: Decimal
    days: int
    is_over_budget: bool


class TripBudgetReport(BaseModel):
    """Per-day, per-section and trip-level expense rollup."""

    trip_total: Decimal
    trip_budget: Decimal
    avg_per_day: Decimal
    days: int
    per_day: list[DayBudget]
    per_section: list[SectionBudget]
