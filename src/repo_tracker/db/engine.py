"""Async SQLAlchemy engine and session factory.

Every tracker store operation opens its own session from the shared factory,
so concurrent repositories write through separate SQLite connections. Each
connection waits on a locked database instead of failing at once, and enforces
foreign keys so deleting a repository removes its issues.
"""

from typing import Any

from sqlalchemy import event, pool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from repo_tracker.config import get_settings
from repo_tracker.db.models import Base

# Milliseconds a connection waits for a competing writer's lock
SQLITE_BUSY_TIMEOUT_MS = 5000

_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _set_sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
    cursor.close()


def configure_sqlite(engine: AsyncEngine) -> AsyncEngine:
    """Apply tracker connection pragmas to a SQLite engine.

    Non-SQLite engines are returned untouched.
    """
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _set_sqlite_pragmas)
    return engine


def get_engine() -> AsyncEngine:
    """Get or create the async engine for the configured database URL."""
    global _engine
    if _engine is None:
        _engine = configure_sqlite(
            create_async_engine(
                get_settings().database_url,
                poolclass=pool.NullPool,  # one connection per session; no shared SQLite handle
            )
        )
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory used by SQLTrackerStore."""
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            bind=get_engine(),
            expire_on_commit=False,
            autoflush=False,
        )
    return _async_session_factory


async def create_tables() -> None:
    """Create the repositories and issues tables if they do not exist."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Dispose the engine so the next call to get_engine() starts fresh."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
