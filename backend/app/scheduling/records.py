"""Plain input records consumed by the scheduling engine.

These are loaded from storage by the service layer and handed to the pure
functions in this package; the engine never touches ORM objects.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from backend.app.models.common import Category
from backend.app.scheduling.dates import DateRange


@dataclass(frozen=True)
class TripRecord:
    """Trip dates and budget."""

    start: date
    end: date
    budget: Decimal

    @property
    def range(self) -> DateRange:
        return DateRange(self.start, self.end)


@dataclass(frozen=True)
class SectionRecord:
    """Section dates and budget."""

    id: UUID
    start: date
    end: date
    budget: Decimal

    @property
    def range(self) -> DateRange:
        return DateRange(self.start, self.end)


@dataclass(frozen=True)
class InstanceRecord:
    """A scheduled activity instance with its catalog cost and category."""

    id: UUID
    section_id: UUID
    scheduled_date: date
    expense_override: Decimal | None
    catalog_cost: Decimal
    catalog_category: Category

    @property
    def effective_expense(self) -> Decimal:
        """Override when present and non-zero, otherwise the catalog base cost."""
        if self.expense_override:
            return self.expense_override
        return self.catalog_cost
