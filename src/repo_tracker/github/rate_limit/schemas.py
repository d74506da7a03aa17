"""Pydantic schemas for GitHub API rate limit data.

These schemas represent the response of the GET /rate_limit endpoint,
which does not count against the quota.
"""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, Field, computed_field


class RateLimitPool(StrEnum):
    """GitHub rate limit resource pools reported by the tracker.

    Each pool has its own quota. The tracker spends 'graphql'; 'core'
    covers REST calls.
    """

    CORE = "core"
    GRAPHQL = "graphql"
    SEARCH = "search"


class RateLimitStatus(StrEnum):
    """Rate limit health status.

    Defaults:
    - HEALTHY: >= 50% remaining
    - WARNING: 20-50% remaining
    - CRITICAL: below 20% remaining
    - EXHAUSTED: 0 remaining
    """

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    EXHAUSTED = "exhausted"


class PoolRateLimit(BaseModel):
    """Quota state of one resource pool."""

    pool: RateLimitPool = Field(description="Resource pool name")
    limit: int = Field(ge=0, description="Maximum requests allowed per hour")
    remaining: int = Field(ge=0, description="Requests remaining in current window")
    used: int = Field(ge=0, description="Requests used in current window")
    reset_at: datetime = Field(description="UTC datetime when limit resets")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_percent(self) -> float:
        """Percentage of rate limit remaining (0.0 to 100.0)."""
        if self.limit == 0:
            return 0.0
        return (self.remaining / self.limit) * 100

    def get_status(
        self,
        healthy_threshold: float = 50.0,
        warning_threshold: float = 20.0,
    ) -> RateLimitStatus:
        """Classify the remaining quota.

        Args:
            healthy_threshold: % remaining at or above which is HEALTHY
            warning_threshold: % remaining at or above which is WARNING

        Returns:
            RateLimitStatus enum value
        """
        if self.remaining == 0:
            return RateLimitStatus.EXHAUSTED
        if self.remaining_percent >= healthy_threshold:
            return RateLimitStatus.HEALTHY
        if self.remaining_percent >= warning_threshold:
            return RateLimitStatus.WARNING
        return RateLimitStatus.CRITICAL


class RateLimitSnapshot(BaseModel):
    """Point-in-time rate limits of one token across pools."""

    timestamp: datetime = Field(description="When this snapshot was taken")
    pools: dict[RateLimitPool, PoolRateLimit] = Field(
        default_factory=dict, description="Rate limits by pool"
    )

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Self:
        """Parse from a GitHub /rate_limit API response.

        Args:
            data: Raw API response dict with 'resources' key

        Returns:
            RateLimitSnapshot instance (pools absent from the response are skipped)
        """
        pools: dict[RateLimitPool, PoolRateLimit] = {}
        resources = data.get("resources") or {}

        for pool in RateLimitPool:
            r = resources.get(pool.value)
            if not r:
                continue
            pools[pool] = PoolRateLimit(
                pool=pool,
                limit=r["limit"],
                remaining=r["remaining"],
                used=r["used"],
                reset_at=datetime.fromtimestamp(r["reset"], tz=UTC),
            )

        return cls(timestamp=datetime.now(UTC), pools=pools)

    def get_pool(self, pool: RateLimitPool) -> PoolRateLimit | None:
        """Get rate limit for a specific pool."""
        return self.pools.get(pool)
