"""Pool of GitHub credentials shared by tracker units.

A credential is checked out for the whole duration of one repository's
tracking and returned afterward. Callers wait (without blocking the
event loop) while every credential is in use.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from repo_tracker.exceptions import CredentialsMissingError
from repo_tracker.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Credential:
    """A GitHub token and its position in the pool.

    The token is excluded from repr so credentials are safe to log.
    """

    index: int
    token: str = field(repr=False)


class CredentialPool:
    """Fixed-size pool of interchangeable credentials.

    A counting semaphore guards a FIFO deque of available credentials.

    Usage:
        pool = CredentialPool(settings.github_tokens)

        async with pool.checkout() as credential:
            await remote.fetch_repository(credential, url)
    """

    def __init__(self, tokens: Sequence[str]) -> None:
        """Initialize the pool.

        Args:
            tokens: GitHub tokens, one credential each

        Raises:
            CredentialsMissingError: If no tokens are provided
        """
        if not tokens:
            raise CredentialsMissingError(
                "GitHub tokens not found in configuration (GITHUB_TOKENS)"
            )
        self._credentials = tuple(Credential(i, token) for i, token in enumerate(tokens))
        self._available: deque[Credential] = deque(self._credentials)
        self._checked_out: set[int] = set()
        self._semaphore = asyncio.Semaphore(len(self._credentials))

    @property
    def credentials(self) -> tuple[Credential, ...]:
        """All credentials in the pool, in configuration order."""
        return self._credentials

    @property
    def size(self) -> int:
        """Number of credentials in the pool."""
        return len(self._credentials)

    @property
    def available(self) -> int:
        """Number of credentials not currently checked out."""
        return len(self._available)

    @property
    def in_use(self) -> int:
        """Number of credentials currently checked out."""
        return len(self._checked_out)

    async def acquire(self) -> Credential:
        """Check out a credential, waiting until one is free."""
        await self._semaphore.acquire()
        credential = self._available.popleft()
        self._checked_out.add(credential.index)
        return credential

    def release(self, credential: Credential) -> None:
        """Return a checked-out credential to the pool.

        Releasing a credential that is not checked out is ignored, so a
        double release never grows the pool's capacity.
        """
        if credential.index not in self._checked_out:
            logger.warning("Ignoring release of credential {} not checked out", credential.index)
            return
        self._checked_out.discard(credential.index)
        self._available.append(credential)
        self._semaphore.release()

    @asynccontextmanager
    async def checkout(self) -> AsyncIterator[Credential]:
        """Check out a credential for the duration of the block."""
        credential = await self.acquire()
        try:
            yield credential
        finally:
            self.release(credential)
