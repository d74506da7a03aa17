"""Result objects for tracker runs.

Structured results provide consistent interfaces for logging,
error reporting, and CLI output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from repo_tracker.github.rate_limit.schemas import RateLimitPool, RateLimitSnapshot


@dataclass
class RepositoryTrackResult:
    """Outcome of tracking one repository successfully."""

    url: str
    """Repository URL."""

    metadata_updated: bool = False
    """True if topics/languages/stars changed and were written."""

    issues_created: int = 0
    """Issues seen for the first time."""

    issues_updated: int = 0
    """Stored issues whose digest changed."""

    issues_deleted: int = 0
    """Stored issues no longer open on GitHub."""

    issues_unchanged: int = 0
    """Issues present on both sides with matching digests."""

    duration_seconds: float = 0.0
    """Time taken to track this repository."""

    @property
    def writes(self) -> int:
        """Number of datastore writes besides the last-tracked timestamp."""
        return (
            int(self.metadata_updated)
            + self.issues_created
            + self.issues_updated
            + self.issues_deleted
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "url": self.url,
            "metadata_updated": self.metadata_updated,
            "issues_created": self.issues_created,
            "issues_updated": self.issues_updated,
            "issues_deleted": self.issues_deleted,
            "issues_unchanged": self.issues_unchanged,
            "duration_seconds": round(self.duration_seconds, 2),
        }


@dataclass
class RepositoryOutcome:
    """Result or error of one unit of work."""

    url: str
    result: RepositoryTrackResult | None = None
    error: Exception | None = None

    @property
    def success(self) -> bool:
        """Check if the unit completed without errors."""
        return self.error is None

    def describe_error(self) -> str:
        """One-line description of the failure, including its cause chain."""
        if self.error is None:
            return ""
        parts = [str(self.error) or type(self.error).__name__]
        cause = self.error.__cause__
        while cause is not None:
            text = str(cause)
            if text and text not in parts[-1]:
                parts.append(text)
            cause = cause.__cause__
        return ": ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"url": self.url, "success": self.success}
        if self.result is not None:
            data.update(self.result.to_dict())
        if self.error is not None:
            data["error"] = self.describe_error()
            data["error_type"] = type(self.error).__name__
        return data


@dataclass
class QuotaReport:
    """Rate limit status of one credential after a run."""

    credential_index: int
    snapshot: RateLimitSnapshot | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"credential": self.credential_index}
        if self.snapshot is not None:
            for pool in (RateLimitPool.CORE, RateLimitPool.GRAPHQL):
                limit = self.snapshot.get_pool(pool)
                if limit is not None:
                    data[pool.value] = {
                        "limit": limit.limit,
                        "remaining": limit.remaining,
                        "reset_at": limit.reset_at.isoformat(),
                    }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class TrackerRunResult:
    """Aggregated result of one tracker run."""

    outcomes: list[RepositoryOutcome] = field(default_factory=list)
    """One outcome per repository that was due."""

    quota_reports: list[QuotaReport] = field(default_factory=list)
    """Rate limit status per credential, collected after draining."""

    duration_seconds: float = 0.0
    """Total time taken for the run."""

    @property
    def succeeded(self) -> list[RepositoryOutcome]:
        """Outcomes of repositories tracked successfully."""
        return [o for o in self.outcomes if o.success]

    @property
    def failures(self) -> list[RepositoryOutcome]:
        """Outcomes of repositories that failed."""
        return [o for o in self.outcomes if not o.success]

    @property
    def success(self) -> bool:
        """True if every due repository was tracked."""
        return not self.failures

    def failure_message(self) -> str:
        """Combined message listing every failure, one per line."""
        return "\n".join(
            f"error tracking repository {o.url}: {o.describe_error()}" for o in self.failures
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": {
                "total_repos": len(self.outcomes),
                "repos_succeeded": len(self.succeeded),
                "repos_failed": len(self.failures),
                "duration_seconds": round(self.duration_seconds, 2),
            },
            "repositories": [o.to_dict() for o in self.outcomes],
            "quota": [q.to_dict() for q in self.quota_reports],
        }
