"""
Snippetbox — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    ├── clock:          Controllable UTC clock (move time past an expiry)
    ├── engine:         In-memory SQLite engine with the schema created
    ├── db_session:     AsyncSession bound to that engine
    ├── store:          SnippetStore over db_session + clock
    ├── stub_store:     Mock store with AsyncMock insert/get/latest
    ├── session_store:  Server-side session store on the test database
    ├── app:            A fresh FastAPI app using that session store
    ├── test_client:    HTTPX AsyncClient talking to the app, store stubbed
    └── live_client:    HTTPX AsyncClient with the app wired to the SQLite engine
"""

import os
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
# Why: the database engine is created from settings at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from snippetbox.database import Base, get_db_session
from snippetbox.dependencies import get_snippet_store
from snippetbox.main import create_app
from snippetbox.models.session import SessionRecord  # noqa: F401
from snippetbox.models.snippet import Snippet  # noqa: F401
from snippetbox.services.session_store import DatabaseSessionStore
from snippetbox.services.snippet_store import SnippetStore


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest_asyncio.fixture
async def engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps the single in-memory connection alive; without it each
    checkout would see an empty database.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session, clock):
    return SnippetStore(db_session, clock=clock)


@pytest.fixture
def stub_store():
    """
    Stands in for SnippetStore in handler tests.

    Every method is an AsyncMock, so tests can both script results and
    assert whether the store was touched at all.
    """
    stub = MagicMock(spec=SnippetStore)
    stub.insert = AsyncMock()
    stub.get = AsyncMock()
    stub.latest = AsyncMock(return_value=[])
    return stub


@pytest.fixture
def session_store(session_factory):
    return DatabaseSessionStore(session_factory)


@pytest.fixture
def app(session_store):
    """A new app per test, so dependency overrides never leak between tests."""
    return create_app(session_store=session_store)


@pytest_asyncio.fixture
async def test_client(app, stub_store):
    """
    HTTPX AsyncClient with the store replaced by `stub_store`.

    Usage:
        async def test_home(test_client, stub_store):
            stub_store.latest.return_value = [...]
            response = await test_client.get("/")
    """
    app.dependency_overrides[get_snippet_store] = lambda: stub_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def live_client(app, session_factory):
    """HTTPX AsyncClient whose requests hit the real store on the test database."""

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
