"""GitHub remote used by the tracker.

Maps pooled credentials to token-bound GitHubClient instances.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .client import GitHubClient

if TYPE_CHECKING:
    from repo_tracker.schemas import GitHubRepositoryView
    from repo_tracker.tracker.credentials import Credential

    from .rate_limit.schemas import RateLimitSnapshot


class GitHubRemote:
    """Remote API backed by one GitHubClient per credential.

    Usage:
        async with GitHubRemote() as remote:
            view = await remote.fetch_repository(credential, url)
    """

    def __init__(self) -> None:
        self._clients: dict[int, GitHubClient] = {}

    def _client_for(self, credential: Credential) -> GitHubClient:
        client = self._clients.get(credential.index)
        if client is None:
            client = GitHubClient(credential.token)
            self._clients[credential.index] = client
        return client

    async def fetch_repository(self, credential: Credential, url: str) -> GitHubRepositoryView:
        """Fetch repository metadata and open issues using the given credential."""
        return await self._client_for(credential).get_repository(url)

    async def check_rate_limit(self, credential: Credential) -> RateLimitSnapshot:
        """Get the rate limit snapshot of the given credential."""
        return await self._client_for(credential).get_rate_limit()

    async def close(self) -> None:
        """Close every client created so far."""
        for client in self._clients.values():
            await client.close()
        self._clients.clear()

    async def __aenter__(self) -> GitHubRemote:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()
