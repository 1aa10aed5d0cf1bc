"""Liveness and readiness probes.

``/health`` answers as long as the process is up. ``/healthz`` also checks
the itinerary database and the external lookup cache, and reports the size
of the seeded city catalog without failing on an empty one.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.api.deps import get_external_cache
from backend.app.cache import ExternalCache
from backend.app.db.engine import get_session
from backend.app.db.models import City

router = APIRouter()


async def check_db(session: AsyncSession) -> tuple[bool, str]:
    """Count catalog cities, which also proves the schema is migrated.

    Returns:
        (is_ok, status_message)
    """
    try:
        cities = await session.scalar(select(func.count()).select_from(City))
    except Exception as e:
        return (False, f"error: {type(e).__name__}")
    return (True, "ok" if cities else "ok (empty catalog)")


async def check_cache(cache: ExternalCache) -> tuple[bool, str]:
    """Ping the lookup cache backend.

    Returns:
        (is_ok, status_message)
    """
    try:
        reachable = await cache.ping()
    except Exception as e:
        return (False, f"error: {type(e).__name__}")
    if not reachable:
        return (False, f"unreachable ({cache.backend_name})")
    return (True, f"ok ({cache.backend_name})")


@router.get("/health")
async def health() -> dict[str, str]:
    """Process liveness for container probes."""
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz(
    session: Annotated[AsyncSession, Depends(get_session)],
    cache: Annotated[ExternalCache, Depends(get_external_cache)],
) -> dict[str, Any] | JSONResponse:
    """Readiness of the database and the lookup cache.

    Returns:
        200 with component status when both are reachable, 503 otherwise
    """
    checks = {
        "db": await check_db(session),
        "cache": await check_cache(cache),
    }
    healthy = all(ok for ok, _ in checks.values())
    body = {
        "status": "ok" if healthy else "degraded",
        "components": {name: message for name, (_, message) in checks.items()},
    }

    if not healthy:
        return JSONResponse(body, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return body
