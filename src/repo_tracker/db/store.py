"""SQL-backed datastore used by the tracker.

Every operation runs in its own session and commits before returning, so
one store instance can be shared by concurrently running tracker units.
"""

from __future__ import annotations

import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from repo_tracker.exceptions import DatastoreWriteError
from repo_tracker.schemas import RepositoryRead, TrackedIssue, TrackedRepository

from .repositories import IssueRepository, RepositoryRepository


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (the storage convention)."""
    return datetime.now(UTC).replace(tzinfo=None)


def _to_storage(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class SQLTrackerStore:
    """Datastore for tracked repositories and their open issues.

    Usage:
        store = SQLTrackerStore(get_session_factory(), track_interval=timedelta(hours=1))
        due = await store.get_repositories_to_track()
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        track_interval: timedelta = timedelta(hours=1),
    ) -> None:
        """Initialize the store.

        Args:
            session_factory: Factory for new sessions (one per operation)
            track_interval: Time after the last track before a repository is due
        """
        self._session_factory = session_factory
        self._track_interval = track_interval

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    @asynccontextmanager
    async def _write(self, action: str) -> AsyncIterator[AsyncSession]:
        """Session for a write; commits on success and wraps database errors."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatastoreWriteError(f"{action} failed: {e}") from e

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    async def get_repositories_to_track(self) -> list[TrackedRepository]:
        """Get repositories never tracked or tracked longer than the interval ago."""
        threshold = utc_now() - self._track_interval
        async with self._session() as session:
            rows = await RepositoryRepository(session).get_due(threshold)
            return TrackedRepository.from_orm_list(rows)

    async def update_repository_metadata(self, repository: TrackedRepository) -> None:
        """Persist the GitHub-sourced fields and digest of a repository."""
        async with self._write("update repository metadata") as session:
            updated = await RepositoryRepository(session).update_github_data(
                repository.repository_id,
                topics=repository.topics,
                languages=repository.languages,
                stars=repository.stars,
                digest=repository.digest,
            )
            if updated is None:
                raise DatastoreWriteError(f"repository {repository.repository_id} not found")

    async def update_repository_last_track_timestamp(self, repository_id: uuid.UUID) -> None:
        """Mark a repository as tracked now."""
        async with self._write("update last track timestamp") as session:
            updated = await RepositoryRepository(session).update_last_tracked(
                repository_id, utc_now()
            )
            if updated is None:
                raise DatastoreWriteError(f"repository {repository_id} not found")

    async def register_repository(self, url: str) -> tuple[RepositoryRead, bool]:
        """Register a repository for tracking (no-op if already registered)."""
        async with self._write("register repository") as session:
            repo, created = await RepositoryRepository(session).get_or_create(url)
            await session.refresh(repo)
            return RepositoryRead.model_validate(repo), created

    async def list_repositories(self) -> list[RepositoryRead]:
        """Get all registered repositories."""
        async with self._session() as session:
            rows = await RepositoryRepository(session).list_all()
            return RepositoryRead.from_orm_list(rows)

    # -------------------------------------------------------------------------
    # Issues
    # -------------------------------------------------------------------------

    async def get_repository_issues(self, repository_id: uuid.UUID) -> list[TrackedIssue]:
        """Get the stored open issues of a repository."""
        async with self._session() as session:
            rows = await IssueRepository(session).get_by_repository(repository_id)
            return TrackedIssue.from_orm_list(rows)

    async def upsert_issue(self, repository_id: uuid.UUID, issue: TrackedIssue) -> bool:
        """Insert or update an issue, carrying its digest.

        Returns:
            True if the issue was inserted
        """
        async with self._write(f"upsert issue #{issue.number}") as session:
            _row, created = await IssueRepository(session).upsert(
                repository_id,
                issue_id=issue.issue_id,
                title=issue.title,
                url=issue.url,
                number=issue.number,
                labels=issue.labels,
                published_at=_to_storage(issue.published_at),
                digest=issue.digest,
            )
            return created

    async def delete_issue(self, issue_id: int) -> None:
        """Delete an issue no longer open on GitHub."""
        async with self._write(f"delete issue {issue_id}") as session:
            await IssueRepository(session).delete_by_id(issue_id)
