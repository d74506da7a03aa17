"""GitHub client exceptions.

Any of these raised while fetching a repository fails that repository's
unit of work only.
"""

from datetime import datetime


class GitHubClientError(Exception):
    """Base exception for GitHub client errors (transport, API, response shape)."""

    pass


class GitHubAuthenticationError(GitHubClientError):
    """Raised when authentication fails (401)."""

    pass


class GitHubRateLimitError(GitHubClientError):
    """Raised when a token's rate limit is exceeded."""

    def __init__(self, message: str, reset_at: datetime | None = None) -> None:
        super().__init__(message)
        self.reset_at = reset_at


class GitHubNotFoundError(GitHubClientError):
    """Raised when a repository is not found (404 or GraphQL NOT_FOUND)."""

    pass
