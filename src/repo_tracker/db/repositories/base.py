"""Base repository pattern implementation for async SQLAlchemy.

Provides common session handling and CRUD operations that can be
shared across all repositories.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repo_tracker.db.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Base repository with common async session handling.

    All repositories should inherit from this class to get
    consistent session management and common query patterns.

    Usage:
        class IssueRepository(BaseRepository[Issue]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(session, Issue)

            async def get_by_url(self, url: str) -> Issue | None:
                return await self._get_by_field("url", url)

    Sessions are owned by the caller. Repositories never commit; they only
    flush so generated values and constraint errors surface early.
    """

    def __init__(self, session: AsyncSession, model_class: type[ModelT]) -> None:
        """Initialize the repository with a session.

        Args:
            session: Async SQLAlchemy session (caller manages lifecycle)
            model_class: The SQLAlchemy model class this repository manages
        """
        self._session = session
        self._model_class = model_class

    # -------------------------------------------------------------------------
    # Common Read Operations
    # -------------------------------------------------------------------------

    async def get_by_id(self, id: Any) -> ModelT | None:
        """Get an entity by its primary key.

        Args:
            id: Primary key value

        Returns:
            Entity or None if not found
        """
        return await self._session.get(self._model_class, id)

    async def _get_by_field(self, field_name: str, value: object) -> ModelT | None:
        """Get an entity by a specific field value.

        Args:
            field_name: Name of the model field
            value: Value to match

        Returns:
            First matching entity or None
        """
        stmt = select(self._model_class).where(getattr(self._model_class, field_name) == value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    # -------------------------------------------------------------------------
    # Common Write Operations
    # -------------------------------------------------------------------------

    def add(self, entity: ModelT) -> ModelT:
        """Add an entity to the session (does not flush)."""
        self._session.add(entity)
        return entity

    async def flush(self) -> None:
        """Flush pending changes to the database.

        This executes SQL but does not commit the transaction.
        """
        await self._session.flush()

    async def delete(self, entity: ModelT) -> None:
        """Mark an entity for deletion.

        The deletion happens on commit/flush.
        """
        await self._session.delete(entity)
