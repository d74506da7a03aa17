"""Interfaces the tracker consumes.

SQLTrackerStore and GitHubRemote are the production implementations;
tests substitute in-memory fakes.
"""

from __future__ import annotations

import typing as typ
import uuid

if typ.TYPE_CHECKING:
    from repo_tracker.github.rate_limit.schemas import RateLimitSnapshot
    from repo_tracker.schemas import GitHubRepositoryView, TrackedIssue, TrackedRepository

    from .credentials import Credential


class TrackerStore(typ.Protocol):
    """Datastore operations used while tracking repositories.

    Implementations must be safe for concurrent use by many units.
    """

    async def get_repositories_to_track(self) -> list[TrackedRepository]:
        """Return repositories currently due for tracking."""
        ...

    async def update_repository_metadata(self, repository: TrackedRepository) -> None:
        """Persist topics, languages, stars and digest of a repository."""
        ...

    async def update_repository_last_track_timestamp(self, repository_id: uuid.UUID) -> None:
        """Mark a repository as tracked now."""
        ...

    async def get_repository_issues(self, repository_id: uuid.UUID) -> list[TrackedIssue]:
        """Return the stored open issues of a repository."""
        ...

    async def upsert_issue(self, repository_id: uuid.UUID, issue: TrackedIssue) -> bool:
        """Insert or update an issue; True if inserted."""
        ...

    async def delete_issue(self, issue_id: int) -> None:
        """Delete an issue."""
        ...


class RemoteAPI(typ.Protocol):
    """GitHub operations used while tracking repositories."""

    async def fetch_repository(self, credential: Credential, url: str) -> GitHubRepositoryView:
        """Fetch metadata and the full open issues collection of a repository."""
        ...

    async def check_rate_limit(self, credential: Credential) -> RateLimitSnapshot:
        """Return the current rate limit snapshot of a credential."""
        ...
