"""Repository Sync Service - Fetch → Diff → Update for one repository.

One call tracks exactly one repository with one checked-out credential.
Errors propagate to the caller; the scheduler turns them into that
repository's failure without affecting others.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from repo_tracker.logging import bind_repository

from .reconciler import IssueReconciler
from .results import RepositoryTrackResult

if TYPE_CHECKING:
    from repo_tracker.schemas import TrackedRepository

    from .credentials import Credential
    from .ports import RemoteAPI, TrackerStore


class RepositorySyncService:
    """Service for tracking a single repository.

    Usage:
        service = RepositorySyncService(store, remote)
        async with pool.checkout() as credential:
            result = await service.track_repository(repository, credential)
    """

    def __init__(self, store: TrackerStore, remote: RemoteAPI) -> None:
        """Initialize the sync service.

        Args:
            store: Datastore for repositories and issues
            remote: GitHub API
        """
        self._store = store
        self._remote = remote
        self._reconciler = IssueReconciler(store)

    async def track_repository(
        self,
        repository: TrackedRepository,
        credential: Credential,
    ) -> RepositoryTrackResult:
        """Bring a repository's stored state up to date with GitHub.

        Flow:
            1. Fetch metadata and open issues from GitHub
            2. Recompute the digest; write metadata only if it changed
            3. Reconcile open issues with stored issues
            4. Update the last-tracked timestamp (always)

        Args:
            repository: Repository as last stored (mutated in place)
            credential: Credential checked out for this unit

        Returns:
            RepositoryTrackResult describing the writes made

        Raises:
            GitHubClientError: If fetching from GitHub fails
            DigestError: If the repository digest cannot be computed
            DatastoreWriteError: If a datastore write fails
            IssueDigestMissingError: If a fetched issue has no digest
        """
        start = time.monotonic()
        log = bind_repository(repository.url)
        log.debug("Started (credential {})", credential.index)
        result = RepositoryTrackResult(url=repository.url)

        # Step 1: Fetch repository data from GitHub
        view = await self._remote.fetch_repository(credential, repository.url)

        # Step 2: Update GitHub data in the datastore if needed
        if repository.update_github_data(view):
            await self._store.update_repository_metadata(repository)
            result.metadata_updated = True
            log.debug("GitHub data updated in database")

        # Step 3: Sync open issues
        plan = await self._reconciler.reconcile(repository.repository_id, view.issues(), log)
        result.issues_created = len(plan.new)
        result.issues_updated = len(plan.changed)
        result.issues_deleted = len(plan.removed)
        result.issues_unchanged = len(plan.unchanged)

        # Step 4: Update last track timestamp
        await self._store.update_repository_last_track_timestamp(repository.repository_id)

        result.duration_seconds = time.monotonic() - start
        log.debug(
            "Completed in {}ms (metadata_updated={}, created={}, updated={}, deleted={})",
            int(result.duration_seconds * 1000),
            result.metadata_updated,
            result.issues_created,
            result.issues_updated,
            result.issues_deleted,
        )
        return result
