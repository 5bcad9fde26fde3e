# fintrack/client/navigation.py
from typing import List, Optional
from urllib.parse import urlsplit

from fintrack.client.auth import AuthState
from fintrack.core.routing import SIGN_IN_PATH, is_guard_exempt

class Navigator:
    """
    Client-side counterpart of the guard middleware. Client navigations don't
    see what the server resolved, so the session is re-fetched before every
    protected page.
    """

    def __init__(self, auth: AuthState):
        self._auth = auth
        self.current_path: Optional[str] = None
        self.history: List[str] = []

    async def resolve(self, path: str) -> str:
        """Where a navigation to `path` actually lands."""
        if is_guard_exempt(urlsplit(path).path):
            return path

        await self._auth.fetch_session()
        if not self._auth.logged_in:
            return SIGN_IN_PATH
        return path

    async def navigate(self, path: str) -> str:
        target = await self.resolve(path)
        self.current_path = target
        self.history.append(target)
        return target
