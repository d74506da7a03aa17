"""Pydantic schema for tracked issues."""

from datetime import datetime

from pydantic import Field

from repo_tracker.digest import issue_digest
from repo_tracker.exceptions import DigestError
from repo_tracker.logging import get_logger

from .base import SchemaBase

logger = get_logger(__name__)


class TrackedIssue(SchemaBase):
    """Open issue of a tracked repository.

    The digest covers (title, labels): the fields whose changes are
    worth a datastore write.
    """

    issue_id: int = Field(description="GitHub database id (join key for reconciliation)")
    title: str
    url: str
    number: int = Field(description="Issue number, stable within a repository")
    labels: list[str] = Field(default_factory=list)
    published_at: datetime
    digest: str | None = None

    def update_digest(self) -> None:
        """Recompute the digest, keeping the previous one if encoding fails."""
        try:
            self.digest = issue_digest(self.title, self.labels)
        except DigestError as e:
            logger.warning("Could not compute digest for issue #{}: {}", self.number, e)
