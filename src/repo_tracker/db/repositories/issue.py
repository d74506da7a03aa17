"""Repository for Issue model CRUD operations."""

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repo_tracker.db.models import Issue

from .base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    """Repository for open issue entities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Issue)

    async def get_by_repository(self, repository_id: uuid.UUID) -> list[Issue]:
        """Get all stored issues of a repository ordered by number."""
        stmt = (
            select(Issue)
            .where(Issue.repository_id == repository_id)
            .order_by(Issue.number)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def upsert(
        self,
        repository_id: uuid.UUID,
        *,
        issue_id: int,
        title: str,
        url: str,
        number: int,
        labels: list[str],
        published_at: datetime,
        digest: str | None,
    ) -> tuple[Issue, bool]:
        """Insert an issue or overwrite the stored one with the same id.

        Returns:
            Tuple of (issue, created) where created is True if inserted
        """
        issue = await self.get_by_id(issue_id)
        created = issue is None
        if issue is None:
            issue = self.add(Issue(issue_id=issue_id, repository_id=repository_id))

        issue.repository_id = repository_id
        issue.title = title
        issue.url = url
        issue.number = number
        issue.labels = list(labels)
        issue.published_at = published_at
        issue.digest = digest
        await self.flush()
        return issue, created

    async def delete_by_id(self, issue_id: int) -> bool:
        """Delete an issue by id.

        Returns:
            True if an issue was deleted
        """
        issue = await self.get_by_id(issue_id)
        if issue is None:
            return False
        await self.delete(issue)
        await self.flush()
        return True
