"""Test fixtures — a fresh in-memory SQLite database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own engine on `sqlite+aiosqlite://` (in memory).
   StaticPool keeps the single connection alive, so every session in the
   test sees the same database.
2. Tables are created from the ORM metadata; nothing survives the test.
3. The app's get_db is overridden to yield the test session; auth is NOT
   overridden, so every request goes through the real token gate.

Environment is set before blogapi is imported: settings are read once.
"""

import os

os.environ.setdefault("BLOGAPI_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BLOGAPI_JWT_SECRET", "test-secret")
os.environ.setdefault("BLOGAPI_BCRYPT_ROUNDS", "4")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from blogapi.db.engine import get_db  # noqa: E402
from blogapi.db.models import Base  # noqa: E402
from blogapi.main import app  # noqa: E402


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(db_engine):
    session = AsyncSession(bind=db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client against the real app, with only get_db overridden."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def register_user(client, username="alice", email="alice@example.com", password="secret1"):
    """Register through the API and return the response JSON."""
    r = await client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert r.status_code == 201, r.text
    return r.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture()
async def alice(client):
    """A registered user: {"token", "user"}."""
    return await register_user(client)


@pytest_asyncio.fixture()
async def bob(client):
    return await register_user(client, username="bob", email="bob@example.com", password="hunter22")
