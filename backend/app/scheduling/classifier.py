"""Section category inference from the activities it contains."""

from collections import Counter
from collections.abc import Iterable
from uuid import UUID

from backend.app.models.common import Category
from backend.app.scheduling.records import InstanceRecord


def infer_section_category(categories: Iterable[Category]) -> Category:
    """Return the dominant category among a section's activities.

    Ties go to the category declared first in ``Category`` (TRAVEL, STAY,
    EXPERIENCE, BUFFER). A section with no activities is BUFFER.

    Args:
        categories: Catalog categories of the section's activity instances

    Returns:
        Dominant category
    """
    counts = Counter(categories)
    if not counts:
        return Category.BUFFER

    max_count = max(counts.values())
    for category in Category:
        if counts[category] == max_count:
            return category

    # Unreachable: every counted key is a Category member
    return Category.BUFFER


def classify_sections(
    section_ids: Iterable[UUID], instances: Iterable[InstanceRecord]
) -> dict[UUID, Category]:
    """Infer the category of every section of a trip.

    Args:
        section_ids: All section ids of the trip (sections without instances included)
        instances: All activity instances of the trip

    Returns:
        Mapping of section id to inferred category
    """
    by_section: dict[UUID, list[Category]] = {section_id: [] for section_id in section_ids}
    for instance in instances:
        by_section.setdefault(instance.section_id, []).append(instance.catalog_category)

    return {
        section_id: infer_section_category(categories)
        for section_id, categories in by_section.items()
    }
