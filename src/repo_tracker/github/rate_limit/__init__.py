"""Rate limit reporting for GitHub API tokens."""

from .schemas import (
    PoolRateLimit,
    RateLimitPool,
    RateLimitSnapshot,
    RateLimitStatus,
)

__all__ = [
    "PoolRateLimit",
    "RateLimitPool",
    "RateLimitSnapshot",
    "RateLimitStatus",
]
