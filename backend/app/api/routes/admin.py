"""Admin endpoints - GET /admin/stats."""

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.auth import require_admin
from backend.app.api.deps import get_today
from backend.app.db.context import RequestContext
from backend.app.db.engine import get_session
from backend.app.models.stats import AdminStats
from backend.app.services.stats import collect_admin_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=AdminStats)
async def admin_stats(
    ctx: Annotated[RequestContext, Depends(require_admin)],
    session: Annotated[AsyncSession, Depends(get_session)],
    today: Annotated[date, Depends(get_today)],
) -> AdminStats:
    """Site-wide counts, rankings and the 30-day signup series.

    Raises:
        HTTPException: 403 if the caller is not an admin
    """
    logger.info(f"[GET /admin/stats] user_id={ctx.user_id}")
    return await collect_admin_stats(session, today=today)
