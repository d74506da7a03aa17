"""GitHub API client module.

This module provides:
- GitHubClient: Async GitHub client bound to one token
- GitHubRemote: Credential-aware remote used by the tracker
- Rate limit schemas: RateLimitSnapshot, RateLimitStatus, etc.
"""

from .client import GitHubClient
from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from .rate_limit import (
    PoolRateLimit,
    RateLimitPool,
    RateLimitSnapshot,
    RateLimitStatus,
)
from .remote import GitHubRemote

__all__ = [
    # Client
    "GitHubClient",
    "GitHubRemote",
    # Exceptions
    "GitHubAuthenticationError",
    "GitHubClientError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    # Rate limits
    "PoolRateLimit",
    "RateLimitPool",
    "RateLimitSnapshot",
    "RateLimitStatus",
]
