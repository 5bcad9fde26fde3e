# fintrack/api/routes/auth.py
from typing import Optional
from fastapi import APIRouter, Depends

from fintrack.core.auth import AuthSession
from fintrack.api.deps import get_optional_session
from fintrack.schemas.session import SessionInfo, SessionResponse, SessionUser

router = APIRouter(tags=["Authentication"])

@router.get("/session", response_model=Optional[SessionResponse])
async def read_session(
    auth_session: Optional[AuthSession] = Depends(get_optional_session),
):
    """
    Current session and user for the credential on this request, or null.
    Never raises 401 so clients can poll it to learn whether they are signed in.
    """
    if auth_session is None:
        return None
    return SessionResponse(
        session=SessionInfo(
            user_id=auth_session.user_id,
            created_at=auth_session.created_at,
            expires_at=auth_session.expires_at,
        ),
        user=SessionUser.model_validate(auth_session.user),
    )
