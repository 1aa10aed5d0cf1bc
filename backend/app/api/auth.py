"""Traveler identity for incoming requests.

There is no login flow in this service. A caller identifies as a traveler by
sending ``Authorization: Bearer <user_id>``; requests without the header act
as the seeded development traveler.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from backend.app.config import Settings, get_settings
from backend.app.db.context import RequestContext

DEV_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_context(
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Resolve the acting traveler.

    Raises:
        HTTPException: 401 if the header is not a bearer token or the token
            is not a UUID
    """
    if not authorization:
        return RequestContext(user_id=DEV_USER_ID)

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Invalid authorization header format")

    try:
        user_id = uuid.UUID(token.strip())
    except ValueError as e:
        raise _unauthorized("Invalid token format (expected user_id)") from e
    return RequestContext(user_id=user_id)


async def require_admin(
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RequestContext:
    """Allow the dev traveler and travelers listed in ``ADMIN_USER_IDS``.

    Raises:
        HTTPException: 403 for any other traveler
    """
    if ctx.user_id != DEV_USER_ID and ctx.user_id not in settings.admin_user_ids:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return ctx
