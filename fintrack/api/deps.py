# fintrack/api/deps.py
from typing import Optional
import uuid
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.core.database import get_async_session
from fintrack.core.auth import AuthSession, resolve_session

async def get_current_session(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
) -> AuthSession:
    """
    Resolve the session from this request's headers (session cookie or
    Authorization: Bearer). Every protected handler depends on this; there is
    no per-request cache shared with the route guard.
    """
    auth_session = await resolve_session(request.headers, db)
    if auth_session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No session found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_session

# Optional version of get_current_session that doesn't raise exceptions
async def get_optional_session(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
) -> Optional[AuthSession]:
    return await resolve_session(request.headers, db)

def parse_resource_id(value: str) -> Optional[uuid.UUID]:
    """Path ids that are not UUIDs can't name an existing row."""
    try:
        return uuid.UUID(value)
    except ValueError:
        return None
