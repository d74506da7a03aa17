"""Async GitHub API client wrapper using githubkit.

This module provides a typed async interface to the GitHub GraphQL API
for repository metadata and open issues, plus the REST rate limit
endpoint used for quota reporting.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from githubkit import GitHub
from githubkit.exception import GitHubException, GraphQLFailed, RequestFailed
from pydantic import ValidationError

from repo_tracker.logging import get_logger
from repo_tracker.schemas import (
    GitHubRepositoryNode,
    GitHubRepositoryView,
    parse_repository_url,
)

from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from .rate_limit.schemas import RateLimitSnapshot

logger = get_logger(__name__)

# Maximum number of pages of open issues fetched for one repository.
MAX_ISSUE_PAGES = 50

REPOSITORY_VIEW_QUERY = """
query($owner: String!, $name: String!, $after: String) {
  repository(owner: $owner, name: $name) {
    stargazerCount
    repositoryTopics(first: 100) {
      nodes {
        topic { name }
      }
    }
    languages(first: 100, orderBy: {field: SIZE, direction: DESC}) {
      nodes { name }
    }
    issues(
      first: 100
      after: $after
      states: OPEN
      orderBy: {field: CREATED_AT, direction: DESC}
    ) {
      pageInfo {
        hasNextPage
        endCursor
      }
      nodes {
        databaseId
        number
        title
        url
        createdAt
        labels(first: 100) {
          nodes { name }
        }
      }
    }
  }
}
"""


class GitHubClient:
    """Async GitHub API client bound to a single token.

    Usage:
        async with GitHubClient(token) as client:
            view = await client.get_repository("https://github.com/owner/repo")
            print(view.stargazer_count, len(view.open_issues))
    """

    def __init__(self, token: str) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub personal access token

        Raises:
            GitHubAuthenticationError: If the token is empty
        """
        if not token:
            raise GitHubAuthenticationError("GitHub token required")
        self._token = token
        self._client: GitHub[Any] | None = None

    @property
    def _github(self) -> GitHub[Any]:
        """Get or create the githubkit client instance."""
        if self._client is None:
            self._client = GitHub(self._token)
        return self._client

    async def close(self) -> None:
        """Release the underlying githubkit client."""
        self._client = None

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Rate Limit Info
    # -------------------------------------------------------------------------
    async def get_rate_limit(self) -> RateLimitSnapshot:
        """Get the current rate limit snapshot for this token.

        The /rate_limit endpoint does not count against the quota.
        """
        try:
            resp = await self._github.rest.rate_limit.async_get()
        except RequestFailed as e:
            raise self._handle_error(e) from e
        except GitHubException as e:
            raise GitHubClientError(f"GitHub request error: {e}") from e
        return RateLimitSnapshot.from_api_response(resp.parsed_data.model_dump())

    # -------------------------------------------------------------------------
    # Repository View
    # -------------------------------------------------------------------------
    async def get_repository(self, url: str) -> GitHubRepositoryView:
        """Fetch repository metadata and all of its open issues.

        Issues are paginated 100 at a time; metadata comes from the first page.

        Args:
            url: Repository URL (https://github.com/owner/name)

        Returns:
            GitHubRepositoryView with the full open issues collection

        Raises:
            GitHubNotFoundError: If the repository doesn't exist
            GitHubClientError: On any other API or transport failure, or when
                the open issues span more than MAX_ISSUE_PAGES pages
        """
        try:
            owner, name = parse_repository_url(url)
        except ValueError as e:
            raise GitHubNotFoundError(str(e)) from e

        node = await self._fetch_repository_page(owner, name, None)
        view = GitHubRepositoryView.from_node(node)

        page = 1
        while node.issues.page_info.has_next_page:
            if page >= MAX_ISSUE_PAGES:
                # A partial collection would make reconciliation delete open issues
                raise GitHubClientError(
                    f"{owner}/{name} has more than {MAX_ISSUE_PAGES} pages of open issues"
                )
            page += 1
            logger.debug("Fetching page {} of open issues for {}/{}", page, owner, name)
            node = await self._fetch_repository_page(owner, name, node.issues.page_info.end_cursor)
            view.open_issues.extend(n for n in node.issues.nodes if n is not None)

        return view

    async def _fetch_repository_page(
        self,
        owner: str,
        name: str,
        after: str | None,
    ) -> GitHubRepositoryNode:
        """Run one page of the repository view query."""
        try:
            data = await self._github.async_graphql(
                REPOSITORY_VIEW_QUERY,
                variables={"owner": owner, "name": name, "after": after},
            )
        except GraphQLFailed as e:
            raise self._handle_graphql_error(e, owner, name) from e
        except RequestFailed as e:
            raise self._handle_error(e) from e
        except GitHubException as e:
            raise GitHubClientError(f"GitHub request error: {e}") from e

        repository = (data or {}).get("repository")
        if repository is None:
            raise GitHubNotFoundError(f"Repository {owner}/{name} not found")

        try:
            return GitHubRepositoryNode.model_validate(repository)
        except ValidationError as e:
            raise GitHubClientError(f"Unexpected repository response shape: {e}") from e

    # -------------------------------------------------------------------------
    # Error Handling
    # -------------------------------------------------------------------------
    def _handle_graphql_error(
        self, error: GraphQLFailed, owner: str, name: str
    ) -> GitHubClientError:
        """Convert GraphQL error payloads to our custom exceptions."""
        errors = getattr(error.response, "errors", None) or []
        types = {getattr(err, "type", None) for err in errors}
        if "NOT_FOUND" in types:
            return GitHubNotFoundError(f"Repository {owner}/{name} not found")
        if "RATE_LIMITED" in types:
            return GitHubRateLimitError("GitHub GraphQL rate limit exceeded")
        messages = "; ".join(str(getattr(err, "message", err)) for err in errors)
        return GitHubClientError(f"GitHub GraphQL errors: {messages or error}")

    def _handle_error(self, error: RequestFailed) -> GitHubClientError:
        """Convert githubkit HTTP failures to our custom exceptions."""
        status = error.response.status_code

        if status == 401:
            return GitHubAuthenticationError("Invalid GitHub token")
        if status in (403, 429):
            headers = error.response.headers
            if headers.get("x-ratelimit-remaining") == "0" or status == 429:
                reset_ts = int(headers.get("x-ratelimit-reset", "0") or 0)
                reset_at = datetime.fromtimestamp(reset_ts, tz=UTC) if reset_ts else None
                return GitHubRateLimitError("GitHub rate limit exceeded", reset_at=reset_at)
            return GitHubClientError(f"Access forbidden: {error}")
        if status == 404:
            return GitHubNotFoundError(str(error))
        return GitHubClientError(f"GitHub API error ({status}): {error}")
