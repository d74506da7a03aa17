"""Tracking Scheduler - track every due repository with bounded concurrency.

Runs one unit of work per due repository. At most `concurrency` units run
at once, each holding a pooled credential and bounded by a deadline.
Units fail independently; failures are collected and reported together
once every unit has finished.
"""

from __future__ import annotations

import asyncio
import time
from enum import StrEnum
from typing import TYPE_CHECKING

from repo_tracker.exceptions import TrackerRunError, TrackTimeoutError
from repo_tracker.logging import get_logger

from .results import RepositoryOutcome, TrackerRunResult
from .sync import RepositorySyncService

if TYPE_CHECKING:
    from repo_tracker.schemas import TrackedRepository

    from .credentials import CredentialPool
    from .ports import RemoteAPI, TrackerStore
    from .quota import QuotaReporter

logger = get_logger(__name__)

DEFAULT_REPOSITORY_TIMEOUT = 300.0


class TrackerState(StrEnum):
    """Phase of a tracker run."""

    IDLE = "idle"
    FETCHING_DUE_LIST = "fetching_due_list"
    DISPATCHING = "dispatching"
    DRAINING = "draining"
    REPORTING = "reporting"
    DONE = "done"


class TrackingScheduler:
    """Tracks all repositories due for tracking.

    Usage:
        pool = CredentialPool(settings.github_tokens)
        async with GitHubRemote() as remote:
            scheduler = TrackingScheduler(
                store=SQLTrackerStore(get_session_factory()),
                remote=remote,
                pool=pool,
                concurrency=settings.tracker.concurrency,
                quota_reporter=QuotaReporter(remote),
            )
            result = await scheduler.run()  # raises TrackerRunError on failures
    """

    def __init__(
        self,
        store: TrackerStore,
        remote: RemoteAPI,
        pool: CredentialPool,
        *,
        concurrency: int,
        repository_timeout: float = DEFAULT_REPOSITORY_TIMEOUT,
        quota_reporter: QuotaReporter | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            store: Datastore for repositories and issues
            remote: GitHub API
            pool: Credential pool shared by all units
            concurrency: Maximum units running at once
            repository_timeout: Seconds a single unit may take
            quota_reporter: Optional reporter run once after draining

        Raises:
            ValueError: If concurrency or timeout is not positive
        """
        if concurrency < 1:
            raise ValueError("concurrency must be a positive integer")
        if repository_timeout <= 0:
            raise ValueError("repository_timeout must be positive")

        self._store = store
        self._pool = pool
        self._concurrency = concurrency
        self._timeout = repository_timeout
        self._quota_reporter = quota_reporter
        self._sync_service = RepositorySyncService(store, remote)
        self._state = TrackerState.IDLE

    @property
    def state(self) -> TrackerState:
        """Current phase of the run."""
        return self._state

    async def run(self) -> TrackerRunResult:
        """Track every repository currently due.

        Returns:
            TrackerRunResult when every repository succeeded (or none was due)

        Raises:
            TrackerRunError: If one or more repositories failed. Carries the
                full result; writes made by successful repositories remain.
        """
        start = time.monotonic()
        result = TrackerRunResult()

        self._state = TrackerState.FETCHING_DUE_LIST
        logger.debug("Getting repositories to track")
        repositories = await self._store.get_repositories_to_track()
        if not repositories:
            logger.info("No repositories to track")
            self._state = TrackerState.DONE
            return result

        self._state = TrackerState.DISPATCHING
        logger.info(
            "Tracking {} repositories (concurrency={}, credentials={})",
            len(repositories),
            self._concurrency,
            self._pool.size,
        )
        semaphore = asyncio.Semaphore(self._concurrency)
        tasks = [
            asyncio.create_task(self._track_one(semaphore, repository))
            for repository in repositories
        ]

        self._state = TrackerState.DRAINING
        result.outcomes = list(await asyncio.gather(*tasks))

        self._state = TrackerState.REPORTING
        if self._quota_reporter is not None:
            result.quota_reports = await self._quota_reporter.report(self._pool.credentials)

        result.duration_seconds = time.monotonic() - start
        self._state = TrackerState.DONE
        logger.info(
            "Tracker finished: repos={}, succeeded={}, failed={} ({:.1f}s)",
            len(result.outcomes),
            len(result.succeeded),
            len(result.failures),
            result.duration_seconds,
        )

        if not result.success:
            raise TrackerRunError(result)
        return result

    async def _track_one(
        self,
        semaphore: asyncio.Semaphore,
        repository: TrackedRepository,
    ) -> RepositoryOutcome:
        """Run one unit of work, turning any failure into its outcome."""
        url = repository.url
        async with semaphore, self._pool.checkout() as credential:
            deadline = asyncio.timeout(self._timeout)
            try:
                async with deadline:
                    track_result = await self._sync_service.track_repository(
                        repository, credential
                    )
            except TimeoutError as e:
                # Timeouts raised inside the unit (e.g. a socket read) keep their own error
                error = TrackTimeoutError(self._timeout) if deadline.expired() else e
                logger.error("Error tracking repository {}: {}", url, error)
                return RepositoryOutcome(url=url, error=error)
            except Exception as e:
                logger.error("Error tracking repository {}: {}", url, e)
                return RepositoryOutcome(url=url, error=e)

        return RepositoryOutcome(url=url, result=track_result)
