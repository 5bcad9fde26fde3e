# fintrack/api/middleware.py
import logging

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from fintrack.core.auth import resolve_session
from fintrack.core.database import AsyncSessionLocal
from fintrack.core.routing import SIGN_IN_PATH, is_guard_exempt

logger = logging.getLogger(__name__)

class AuthGuardMiddleware(BaseHTTPMiddleware):
    """
    Runs before every navigation. API routes and the public sign-in/sign-up
    pages pass straight through; everything else needs a session or gets
    redirected to the sign-in page.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if is_guard_exempt(path):
            return await call_next(request)

        async with AsyncSessionLocal() as db:
            auth_session = await resolve_session(request.headers, db)

        if auth_session is None:
            logger.info(f"No session for {path}, redirecting to {SIGN_IN_PATH}")
            return RedirectResponse(url=SIGN_IN_PATH, status_code=status.HTTP_302_FOUND)

        return await call_next(request)
