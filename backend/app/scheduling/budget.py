"""Budget and expense rollups for a trip.

Two over-budget checks coexist and are intentionally not unified:

- a trip day is over budget when that day's absolute total exceeds the trip's
  daily budget;
- a section is over budget when its average daily spend exceeds the section's
  own daily budget.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from uuid import UUID

from backend.app.models.budget import DayBudget, SectionBudget, TripBudgetReport
from backend.app.scheduling.dates import inclusive_day_count, iter_days
from backend.app.scheduling.records import InstanceRecord, SectionRecord, TripRecord

ZERO = Decimal("0")


def compute_daily_budget(budget: Decimal, num_days: int) -> Decimal:
    """Split a budget evenly across days; zero days yields zero."""
    if num_days <= 0:
        return ZERO
    return budget / num_days


def is_day_over_budget(day_expense: Decimal, daily_budget: Decimal) -> bool:
    """A day is over budget only when strictly above its share."""
    return day_expense > daily_budget


def compute_section_budget(
    section: SectionRecord, instances: Iterable[InstanceRecord]
) -> SectionBudget:
    """Roll up one section's own activity expenses.

    Args:
        section: Section dates and budget
        instances: The section's activity instances

    Returns:
        SectionBudget comparing average daily spend to the section's daily budget
    """
    days = inclusive_day_count(section.start, section.end)
    daily_budget = compute_daily_budget(section.budget, days)
    total = sum((instance.effective_expense for instance in instances), ZERO)
    daily_spend = total / days if days > 0 else ZERO

    return SectionBudget(
        section_id=section.id,
        total_expense=total,
        budget=section.budget,
        daily_budget=daily_budget,
        days=days,
        is_over_budget=daily_spend > daily_budget,
    )


def compute_trip_budget(
    trip: TripRecord,
    sections: Sequence[SectionRecord],
    instances: Sequence[InstanceRecord],
) -> TripBudgetReport:
    """Compute per-day, per-section and trip totals.

    Args:
        trip: Trip dates and budget
        sections: All sections of the trip, in display order
        instances: All activity instances of the trip

    Returns:
        TripBudgetReport; nothing is persisted
    """
    num_days = inclusive_day_count(trip.start, trip.end)
    trip_daily_budget = compute_daily_budget(trip.budget, num_days)

    day_expenses: dict[date, Decimal] = defaultdict(lambda: ZERO)
    by_section: dict[UUID, list[InstanceRecord]] = defaultdict(list)
    for instance in instances:
        day_expenses[instance.scheduled_date] += instance.effective_expense
        by_section[instance.section_id].append(instance)

    per_day = [
        DayBudget(
            date=day,
            total_expense=day_expenses.get(day, ZERO),
            daily_budget=trip_daily_budget,
            is_over_budget=is_day_over_budget(day_expenses.get(day, ZERO), trip_daily_budget),
        )
        for day in iter_days(trip.start, trip.end)
    ]

    per_section = [
        compute_section_budget(section, by_section.get(section.id, []))
        for section in sections
    ]

    trip_total = sum((day.total_expense for day in per_day), ZERO)
    avg_per_day = trip_total / num_days if num_days > 0 else ZERO

    return TripBudgetReport(
        trip_total=trip_total,
        trip_budget=trip.budget,
        avg_per_day=avg_per_day,
        days=num_days,
        per_day=per_day,
        per_section=per_section,
    )
