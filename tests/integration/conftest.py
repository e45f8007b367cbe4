"""Integration-test fixtures.

Requires a PostgreSQL reachable at settings.DATABASE_URL with
`alembic upgrade head` applied; every test here is skipped otherwise.

All integration tests share a single event loop so that the module-level
SQLAlchemy async engine pool (created at import time) stays valid across
the whole session.
"""

import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError

from src.main import app
from src.vm_common.database import engine


@pytest_asyncio.fixture(loop_scope="session", scope="session", autouse=True)
async def _database_available() -> None:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM users LIMIT 1"))
    except (OSError, DBAPIError) as exc:
        pytest.skip(f"PostgreSQL with migrations not available: {exc}")


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


RegisterFn = Callable[[str], Awaitable[dict[str, str]]]


@pytest.fixture
def register(client: AsyncClient) -> RegisterFn:
    """Register a fresh user with the given role; return its auth headers."""

    async def _register(role: str) -> dict[str, str]:
        username = f"{role}_{uuid.uuid4().hex[:10]}"
        password = "VendPass123"
        resp = await client.post(
            "/api/v1/auth/register",
            json={"username": username, "password": password, "role": role},
        )
        assert resp.status_code == 201, resp.text
        login = await client.post(
            "/api/v1/auth/login", json={"username": username, "password": password}
        )
        token = login.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _register
