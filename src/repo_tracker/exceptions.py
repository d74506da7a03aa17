"""Tracker exceptions.

Per-repository errors are caught at the unit-of-work boundary by the
scheduler and folded into a single TrackerRunError at the end of a run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repo_tracker.tracker.results import TrackerRunResult


class TrackerError(Exception):
    """Base exception for tracker errors."""

    pass


class CredentialsMissingError(TrackerError):
    """Raised before any work starts when no GitHub tokens are configured."""

    pass


class DigestError(TrackerError):
    """Raised when an entity's fields cannot be serialized for digesting."""

    pass


class DatastoreWriteError(TrackerError):
    """Raised when a datastore write fails."""

    pass


class IssueDigestMissingError(TrackerError):
    """Raised when a GitHub-derived issue reaches reconciliation without a digest.

    Issues built from GitHub responses always get a digest, so this
    indicates a bug in response decoding rather than a data condition.
    """

    def __init__(self, issue_id: int, number: int) -> None:
        super().__init__(f"issue #{number} (id {issue_id}) has no digest")
        self.issue_id = issue_id
        self.number = number


class TrackTimeoutError(TrackerError):
    """Raised when tracking a single repository exceeds its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"timed out after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


class TrackerRunError(TrackerError):
    """Raised when one or more repositories failed during a tracker run.

    The message lists every failure, one per line. Repositories that
    succeeded keep their writes; this error only reports.
    """

    def __init__(self, result: TrackerRunResult) -> None:
        super().__init__(result.failure_message())
        self.result = result
