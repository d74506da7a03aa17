"""Pytest configuration and shared fixtures.

Usage Guide:
- For ORM and datastore tests: use `db_session` / `session_factory`
- For tracker tests: use the in-memory `store` and `remote` fakes
- For GitHub API payloads: import builders from tests.factories
"""

from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from repo_tracker.db.models import Base
from repo_tracker.tracker import CredentialPool
from tests.fakes import FakeRemote, InMemoryStore

# -----------------------------------------------------------------------------
# Test Timeline Constants
#
# Consistent "test epoch" for deterministic date matching across tests.
# -----------------------------------------------------------------------------
JAN_10 = datetime(2024, 1, 10, 9, 0, 0, tzinfo=UTC)   # Oldest issue opened
JAN_15 = datetime(2024, 1, 15, 10, 0, 0, tzinfo=UTC)  # Second issue opened
JAN_16 = datetime(2024, 1, 16, 14, 0, 0, tzinfo=UTC)  # Newest issue opened

JAN_10_ISO = "2024-01-10T09:00:00Z"
JAN_15_ISO = "2024-01-15T10:00:00Z"
JAN_16_ISO = "2024-01-16T14:00:00Z"

REPO_URL = "https://github.com/prebid/prebid-server"
OTHER_REPO_URL = "https://github.com/prebid/Prebid.js"


# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
async def test_engine():
    """Create an in-memory SQLite engine for tests.

    Each test gets a fresh database with all tables created. StaticPool
    keeps every session on the same in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_factory):
    """Create an async session with auto-rollback.

    Changes are rolled back after each test to ensure isolation.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


# -----------------------------------------------------------------------------
# Tracker Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory tracker datastore."""
    return InMemoryStore()


@pytest.fixture
def remote() -> FakeRemote:
    """GitHub remote with no repositories configured."""
    return FakeRemote()


@pytest.fixture
def pool() -> CredentialPool:
    """Pool of two credentials."""
    return CredentialPool(["token-a", "token-b"])
