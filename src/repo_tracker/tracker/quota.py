"""Post-run rate limit reporting for every configured credential."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from repo_tracker.config import RateLimitConfig
from repo_tracker.github.rate_limit.schemas import RateLimitPool, RateLimitStatus
from repo_tracker.logging import get_logger

from .results import QuotaReport

if TYPE_CHECKING:
    from .credentials import Credential
    from .ports import RemoteAPI

logger = get_logger(__name__)

_REPORTED_POOLS = (RateLimitPool.CORE, RateLimitPool.GRAPHQL)


class QuotaReporter:
    """Logs the remaining GitHub quota of each credential.

    Best effort: a failed check is logged and recorded in the report,
    never raised.
    """

    def __init__(self, remote: RemoteAPI, config: RateLimitConfig | None = None) -> None:
        self._remote = remote
        self._config = config or RateLimitConfig()

    async def report(self, credentials: Sequence[Credential]) -> list[QuotaReport]:
        """Check and log the rate limit of every credential independently."""
        reports: list[QuotaReport] = []
        for credential in credentials:
            try:
                snapshot = await self._remote.check_rate_limit(credential)
            except Exception as e:
                logger.warning("Token [{}] rate limit check failed: {}", credential.index, e)
                reports.append(QuotaReport(credential.index, error=str(e)))
                continue

            for pool in _REPORTED_POOLS:
                limit = snapshot.get_pool(pool)
                if limit is None:
                    continue
                status = limit.get_status(
                    self._config.healthy_threshold_pct,
                    self._config.warning_threshold_pct,
                )
                level = "DEBUG" if status == RateLimitStatus.HEALTHY else "WARNING"
                logger.log(
                    level,
                    "Token [{}] github rate limit [{}]: {}/{} remaining, resets at {} ({})",
                    credential.index,
                    pool.value,
                    limit.remaining,
                    limit.limit,
                    limit.reset_at.strftime("%H:%M:%S UTC"),
                    status.value,
                )
            reports.append(QuotaReport(credential.index, snapshot=snapshot))
        return reports
