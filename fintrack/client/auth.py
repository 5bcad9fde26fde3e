# fintrack/client/auth.py
import logging
from typing import Awaitable, Callable, Mapping, Optional

import httpx

from fintrack.client.http import CLIENT_ERRORS, ApiError, request_json
from fintrack.client.signals import SessionSignal
from fintrack.core.routing import API_PREFIX, SIGN_IN_PATH
from fintrack.schemas.session import SessionInfo, SessionResponse, SessionUser

logger = logging.getLogger(__name__)

AUTH_URL = f"{API_PREFIX}/auth"

class AuthClient:
    """
    Thin wrapper over /api/auth. The session cookie lives in the httpx cookie
    jar; every call that may change it fires the session signal.
    """

    def __init__(self, http: httpx.AsyncClient, signal: SessionSignal):
        self._http = http
        self.signal = signal

    async def sign_in_email(self, email: str, password: str) -> None:
        await request_json(
            self._http, "POST", f"{AUTH_URL}/login",
            data={"username": email, "password": password},
        )
        await self.signal.emit()

    async def sign_up_email(self, name: str, email: str, password: str) -> SessionUser:
        """Register, then sign straight in."""
        data = await request_json(
            self._http, "POST", f"{AUTH_URL}/register",
            json={"name": name, "email": email, "password": password},
        )
        await self.sign_in_email(email, password)
        return SessionUser.model_validate(data)

    async def sign_out(self) -> None:
        try:
            await request_json(self._http, "POST", f"{AUTH_URL}/logout")
        except ApiError as e:
            if e.status_code != 401:
                raise
            # Already signed out server-side
            self._http.cookies.clear()
        await self.signal.emit()

    async def get_session(self, headers: Optional[Mapping[str, str]] = None) -> Optional[SessionResponse]:
        data = await request_json(self._http, "GET", f"{AUTH_URL}/session", headers=headers)
        return SessionResponse.model_validate(data) if data else None

class AuthState:
    """Session and user for one client session, kept in sync through the session signal."""

    def __init__(self, client: AuthClient):
        self._client = client
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._navigate: Optional[Callable[[str], Awaitable[str]]] = None
        self.session: Optional[SessionInfo] = None
        self.user: Optional[SessionUser] = None

    @property
    def logged_in(self) -> bool:
        return self.session is not None

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def bind_navigator(self, navigate: Callable[[str], Awaitable[str]]) -> None:
        self._navigate = navigate

    def attach(self) -> None:
        """Start re-fetching the session whenever the signal fires."""
        if self._unsubscribe is None:
            self._unsubscribe = self._client.signal.subscribe(self._on_session_signal)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_session_signal(self) -> None:
        await self.fetch_session()

    async def fetch_session(self, headers: Optional[Mapping[str, str]] = None) -> Optional[SessionInfo]:
        """
        Re-read the session. Pass the incoming request's headers when running
        server-side; otherwise the cookie jar supplies the credential.
        """
        try:
            result = await self._client.get_session(headers)
        except CLIENT_ERRORS as e:
            logger.error(f"Error fetching session: {e}")
            result = None
        self.session = result.session if result else None
        self.user = result.user if result else None
        return self.session

    async def sign_in(self, email: str, password: str) -> None:
        await self._client.sign_in_email(email, password)

    async def sign_up(self, name: str, email: str, password: str) -> SessionUser:
        return await self._client.sign_up_email(name, email, password)

    async def sign_out(self) -> None:
        await self._client.sign_out()
        if self._navigate is not None:
            await self._navigate(SIGN_IN_PATH)
