"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - app.state.context points at an AppContext built around the test engine,
      so the real get_db/get_store dependencies run against it
    - get_settings overridden with an admin token; `client` sends it,
      `anon_client` does not

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the schema
      created by the fixture is visible to every session
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from club_ledger.config import Settings, get_settings
from club_ledger.db.base import Base
from club_ledger.infrastructure.app_context import AppContext
from club_ledger.infrastructure.database import DatabaseSessionManager
from club_ledger.infrastructure.ledger_store import SqlLedgerStore
from club_ledger.main import app

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlLedgerStore(test_db)


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        admin_token=ADMIN_TOKEN,
        ranking_limit=5,
        previous_ranking_limit=3,
        host_leaderboard_limit=5,
    )


@pytest.fixture
async def app_context(test_engine, test_settings):
    """Attach an AppContext around the test engine for the duration of a test."""
    context = AppContext(
        settings=test_settings,
        db=DatabaseSessionManager.from_engine(test_engine),
    )
    original = getattr(app.state, "context", None)
    app.state.context = context
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield context
    app.dependency_overrides.clear()
    app.state.context = original


@pytest.fixture
async def client(app_context):
    """Privileged client: sends the admin token on every request."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Admin-Token": ADMIN_TOKEN},
    ) as c:
        yield c


@pytest.fixture
async def anon_client(app_context):
    """Client without the admin token."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def seed(client):
    """Add members through the API and return their ids."""
    async def _seed(*names: str, joined_at: str = "2026-01-10") -> list[str]:
        ids = []
        for name in names:
            res = await client.post(
                "/api/v1/members",
                json={"id": name.lower(), "name": name, "joined_at": joined_at},
            )
            assert res.status_code == 200, res.text
            ids.append(name.lower())
        return ids
    return _seed
