"""Repository for GitHub Repository model CRUD operations."""

import uuid
from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from repo_tracker.db.models import Repository

from .base import BaseRepository


class RepositoryRepository(BaseRepository[Repository]):
    """Repository for tracked GitHub repository entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Repository)

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    async def get_by_url(self, url: str) -> Repository | None:
        """Get a repository by its canonical URL."""
        return await self._get_by_field("url", url)

    async def get_due(self, tracked_before: datetime) -> list[Repository]:
        """Get repositories that are due for tracking.

        A repository is due if it was never tracked or was last tracked
        before the given threshold.

        Args:
            tracked_before: Repositories tracked after this instant are skipped

        Returns:
            Due repositories, least recently tracked first
        """
        stmt = (
            select(Repository)
            .where(
                or_(
                    Repository.last_tracked_at.is_(None),
                    Repository.last_tracked_at < tracked_before,
                )
            )
            .order_by(Repository.last_tracked_at.asc().nulls_first(), Repository.url)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_all(self) -> list[Repository]:
        """Get all repositories ordered by URL."""
        result = await self._session.execute(select(Repository).order_by(Repository.url))
        return list(result.scalars().all())

    # -------------------------------------------------------------------------
    # Create/Update Methods
    # -------------------------------------------------------------------------

    async def get_or_create(self, url: str) -> tuple[Repository, bool]:
        """Get existing repository or register a new one.

        Returns:
            Tuple of (repository, created) where created is True if new
        """
        existing = await self.get_by_url(url)
        if existing is not None:
            return existing, False

        repo = self.add(Repository(url=url))
        await self.flush()
        return repo, True

    async def update_github_data(
        self,
        repository_id: uuid.UUID,
        *,
        topics: list[str] | None,
        languages: list[str] | None,
        stars: int | None,
        digest: str | None,
    ) -> Repository | None:
        """Overwrite the GitHub-sourced fields of a repository.

        Returns:
            Updated repository or None if not found
        """
        repo = await self.get_by_id(repository_id)
        if repo is None:
            return None

        repo.topics = topics
        repo.languages = languages
        repo.stars = stars
        repo.digest = digest
        await self.flush()
        return repo

    async def update_last_tracked(
        self,
        repository_id: uuid.UUID,
        tracked_at: datetime,
    ) -> Repository | None:
        """Update the last_tracked_at timestamp for a repository.

        Returns:
            Updated repository or None if not found
        """
        repo = await self.get_by_id(repository_id)
        if repo is None:
            return None

        repo.last_tracked_at = tracked_at
        await self.flush()
        return repo
