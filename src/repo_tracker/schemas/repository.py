"""Pydantic schemas for tracked repositories."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from repo_tracker.digest import repository_digest

from .base import SchemaBase

if TYPE_CHECKING:
    from .github_api import GitHubRepositoryView


def parse_repository_url(url: str) -> tuple[str, str]:
    """Extract (owner, name) from a GitHub repository URL.

    Accepts "https://github.com/owner/name" with an optional trailing
    slash or ".git" suffix.

    Raises:
        ValueError: If the URL does not point at a repository
    """
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"invalid repository url: {url}")
    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) != 2:
        raise ValueError(f"invalid repository url: {url}")
    owner, name = parts
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not owner or not name:
        raise ValueError(f"invalid repository url: {url}")
    return owner, name


class TrackedRepository(SchemaBase):
    """Working copy of a tracked repository during one sync.

    The digest covers (topics, languages, stars). It is None only until
    the first successful fetch from GitHub.
    """

    repository_id: uuid.UUID
    url: str
    topics: list[str] | None = None
    languages: list[str] | None = None
    stars: int | None = None
    digest: str | None = None

    def update_digest(self) -> None:
        """Recompute the digest from the current field values.

        Raises:
            DigestError: If the fields cannot be encoded
        """
        self.digest = repository_digest(self.topics, self.languages, self.stars)

    def update_github_data(self, view: GitHubRepositoryView) -> bool:
        """Overwrite GitHub-sourced fields from a fetched view.

        Returns:
            True if the digest changed (or was previously unset)

        Raises:
            DigestError: If the new fields cannot be encoded
        """
        self.topics = view.topics
        self.languages = view.languages
        self.stars = view.stargazer_count

        previous = self.digest
        self.update_digest()
        return self.digest != previous


class RepositoryRead(SchemaBase):
    """Schema for reading repository data (CLI listings)."""

    repository_id: uuid.UUID
    url: str
    topics: list[str] | None
    languages: list[str] | None
    stars: int | None
    last_tracked_at: datetime | None
    created_at: datetime
