"""Issue reconciliation between GitHub and the datastore.

Open issues on GitHub and stored issues are compared as sets keyed by
issue id. Issue numbers and titles are never used as join keys, so a
renamed issue updates its existing row instead of creating a new one.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from repo_tracker.exceptions import IssueDigestMissingError
from repo_tracker.logging import get_logger
from repo_tracker.schemas import TrackedIssue

if TYPE_CHECKING:
    from loguru import Logger

    from .ports import TrackerStore

logger = get_logger(__name__)


@dataclass
class ReconciliationPlan:
    """Classification of every issue on either side."""

    new: list[TrackedIssue] = field(default_factory=list)
    """On GitHub, not stored yet."""

    changed: list[TrackedIssue] = field(default_factory=list)
    """On both sides, digest differs (or the stored one has no digest)."""

    removed: list[TrackedIssue] = field(default_factory=list)
    """Stored but no longer open on GitHub."""

    unchanged: list[TrackedIssue] = field(default_factory=list)
    """On both sides with matching digests."""

    @property
    def upserts(self) -> list[TrackedIssue]:
        """Issues to register or update."""
        return self.new + self.changed

    @property
    def has_changes(self) -> bool:
        """Whether applying the plan writes anything."""
        return bool(self.new or self.changed or self.removed)


class IssueReconciler:
    """Converge a repository's stored issues to its open issues on GitHub.

    Usage:
        reconciler = IssueReconciler(store)
        plan = await reconciler.reconcile(repository_id, view.issues())
    """

    def __init__(self, store: TrackerStore) -> None:
        self._store = store

    @staticmethod
    def plan(remote: list[TrackedIssue], local: list[TrackedIssue]) -> ReconciliationPlan:
        """Classify remote and local issues.

        Raises:
            IssueDigestMissingError: If a remote issue has no digest
        """
        local_by_id = {issue.issue_id: issue for issue in local}
        remote_by_id: dict[int, TrackedIssue] = {}
        for issue in remote:
            if issue.digest is None:
                raise IssueDigestMissingError(issue.issue_id, issue.number)
            remote_by_id[issue.issue_id] = issue

        plan = ReconciliationPlan()
        for issue_id, issue in remote_by_id.items():
            stored = local_by_id.get(issue_id)
            if stored is None:
                plan.new.append(issue)
            elif stored.digest is None or stored.digest != issue.digest:
                plan.changed.append(issue)
            else:
                plan.unchanged.append(issue)

        plan.removed = [issue for issue in local if issue.issue_id not in remote_by_id]
        return plan

    async def apply(
        self,
        repository_id: uuid.UUID,
        plan: ReconciliationPlan,
        log: Logger | None = None,
    ) -> None:
        """Write the plan to the datastore: upserts first, then deletes."""
        log = log or logger
        for issue in plan.upserts:
            await self._store.upsert_issue(repository_id, issue)
            log.debug("Registered issue #{}", issue.number)

        for issue in plan.removed:
            await self._store.delete_issue(issue.issue_id)
            log.debug("Unregistered issue #{}", issue.number)

    async def reconcile(
        self,
        repository_id: uuid.UUID,
        remote: list[TrackedIssue],
        log: Logger | None = None,
    ) -> ReconciliationPlan:
        """Load stored issues, plan against the remote ones, and apply."""
        local = await self._store.get_repository_issues(repository_id)
        plan = self.plan(remote, local)
        await self.apply(repository_id, plan, log)
        return plan
