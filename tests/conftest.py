"""
Shared fixtures.

Every test runs against the real app over httpx's ASGI transport and a
throwaway SQLite database; tables are created before and dropped after each
test. Settings are read at import time, so the environment is set up before
anything from fintrack is imported.
"""

import os
import tempfile
from pathlib import Path

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="fintrack-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'fintrack.db'}"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["SESSION_COOKIE_SECURE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest_asyncio

from fintrack.core.database import Base, engine
from helpers import make_client, sign_up


@pytest_asyncio.fixture(autouse=True)
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def client():
    """Anonymous client."""
    async with make_client() as c:
        yield c


@pytest_asyncio.fixture
async def alice():
    """Client signed in as alice (session cookie in its jar)."""
    async with make_client() as c:
        await sign_up(c, "alice@example.com", "Alice")
        yield c


@pytest_asyncio.fixture
async def bob():
    """Client signed in as bob."""
    async with make_client() as c:
        await sign_up(c, "bob@example.com", "Bob")
        yield c
