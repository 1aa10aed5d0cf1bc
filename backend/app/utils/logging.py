"""Structured logging for itinerary mutations."""

import logging
from typing import Any
from uuid import UUID

from backend.app.db.context import RequestContext
from backend.app.models.common import RangeErrorKind

logger = logging.getLogger(__name__)


class StructuredMutationLogger:
    """Structured logger for orchestrated trip mutations."""

    def log_mutation(
        self,
        ctx: RequestContext,
        operation: str,
        trip_id: UUID | None,
        outcome: str,
        section_count: int | None = None,
        overlapping_count: int | None = None,
        error_kind: RangeErrorKind | None = None,
    ) -> None:
        """Log one mutation with structured data."""
        log_data: dict[str, Any] = {
            "user_id": str(ctx.user_id),
            "operation": operation,
            "trip_id": str(trip_id) if trip_id else None,
            "outcome": outcome,
        }

        if section_count is not None:
            log_data["section_count"] = section_count
        if overlapping_count is not None:
            log_data["overlapping_count"] = overlapping_count
        if error_kind:
            log_data["error_kind"] = error_kind.value

        log_msg = f"Trip mutation: {operation} - {outcome}"

        if outcome == "committed":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
