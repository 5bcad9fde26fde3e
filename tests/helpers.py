"""Request helpers shared by the test modules."""

from typing import Any, Dict

import httpx

from fintrack.main import app

BASE_URL = "http://testserver"
PASSWORD = "correct-horse-battery"
SESSION_COOKIE = "fintrack_session"


def make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=BASE_URL)


async def sign_up(client: httpx.AsyncClient, email: str, name: str, password: str = PASSWORD) -> Dict[str, Any]:
    """Register and sign in; the session cookie ends up in the client's jar."""
    response = await client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201, response.text
    user = response.json()

    response = await client.post("/api/auth/login", data={"username": email, "password": password})
    assert response.status_code == 204, response.text
    return user


async def current_user_id(client: httpx.AsyncClient) -> str:
    response = await client.get("/api/auth/session")
    assert response.status_code == 200, response.text
    return response.json()["user"]["id"]


async def create_category(client: httpx.AsyncClient, name: str = "Groceries", type: str = "expense") -> Dict[str, Any]:
    response = await client.post("/api/categories", json={"name": name, "type": type})
    assert response.status_code == 201, response.text
    return response.json()


def transaction_body(category_id: str, **overrides) -> Dict[str, Any]:
    body = {
        "categoryId": category_id,
        "type": "expense",
        "amount": 10,
        "description": "Weekly shop",
        "date": "2030-06-15T12:00:00Z",
    }
    body.update(overrides)
    return body


async def create_transaction(client: httpx.AsyncClient, category_id: str, **overrides) -> Dict[str, Any]:
    response = await client.post("/api/transactions", json=transaction_body(category_id, **overrides))
    assert response.status_code == 201, response.text
    return response.json()
