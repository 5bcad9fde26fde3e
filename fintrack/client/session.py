# fintrack/client/session.py
from typing import Optional

import httpx

from fintrack.client.auth import AuthClient, AuthState
from fintrack.client.categories import CategoryStore
from fintrack.client.navigation import Navigator
from fintrack.client.signals import SessionSignal
from fintrack.client.transactions import TransactionStore

class ClientSession:
    """
    Everything one signed-in client holds: HTTP connection and cookie jar,
    auth state, cached lists, current page. Nothing here is shared between
    instances.

        async with ClientSession("http://localhost:8000") as client:
            await client.auth.sign_in("me@example.com", "s3cret-passw0rd")
            await client.categories.fetch_categories()
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self.signal = SessionSignal()
        self.auth = AuthState(AuthClient(self.http, self.signal))
        self.navigator = Navigator(self.auth)
        self.auth.bind_navigator(self.navigator.navigate)
        self.categories = CategoryStore(self.http)
        self.transactions = TransactionStore(self.http)

    async def __aenter__(self) -> "ClientSession":
        self.auth.attach()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        self.auth.detach()
        await self.http.aclose()
