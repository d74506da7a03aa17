"""Tests for GitHubClient.

Tests cover:
- Repository view fetch and pagination of open issues
- Missing repository and malformed URL handling
- GraphQL and HTTP error mapping
- Rate limit snapshot retrieval
"""

import copy
from datetime import UTC
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from githubkit.exception import GraphQLFailed, RequestFailed

from repo_tracker.github.client import MAX_ISSUE_PAGES, REPOSITORY_VIEW_QUERY, GitHubClient
from repo_tracker.github.exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from repo_tracker.github.rate_limit import RateLimitPool
from tests.fixtures import (
    GRAPHQL_MISSING_REPOSITORY_RESPONSE,
    GRAPHQL_REPOSITORY_PAGE_1,
    GRAPHQL_REPOSITORY_PAGE_2,
    GRAPHQL_REPOSITORY_RESPONSE,
    RATE_LIMIT_RESPONSE_HEALTHY,
)

REPO_URL = "https://github.com/prebid/prebid-server"


# -----------------------------------------------------------------------------
# Test Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_github() -> MagicMock:
    """Create a mock githubkit GitHub client."""
    mock = MagicMock()
    mock.async_graphql = AsyncMock()
    mock.rest.rate_limit.async_get = AsyncMock()
    return mock


@pytest.fixture
def client(mock_github) -> GitHubClient:
    client = GitHubClient(token="test-token")
    client._client = mock_github
    return client


def graphql_error(error_type: str | None, message: str = "Something went wrong") -> GraphQLFailed:
    error = MagicMock()
    error.type = error_type
    error.message = message
    response = MagicMock()
    response.errors = [error]
    return GraphQLFailed(response)


def request_failed(status: int, headers: dict[str, str] | None = None) -> RequestFailed:
    response = MagicMock()
    response.status_code = status
    response.headers = headers or {}
    return RequestFailed(response)


# -----------------------------------------------------------------------------
# Test: Initialization
# -----------------------------------------------------------------------------
class TestGitHubClientInit:
    """Tests for GitHubClient initialization."""

    def test_init_with_token(self):
        client = GitHubClient(token="test-token")
        assert client._token == "test-token"

    def test_init_without_token_raises(self):
        with pytest.raises(GitHubAuthenticationError):
            GitHubClient(token="")

    def test_githubkit_client_created_lazily(self):
        with patch("repo_tracker.github.client.GitHub") as mock_class:
            client = GitHubClient(token="test-token")
            mock_class.assert_not_called()

            assert client._github is mock_class.return_value
            mock_class.assert_called_once_with("test-token")

    async def test_context_manager_closes(self, client):
        async with client:
            pass
        assert client._client is None


# -----------------------------------------------------------------------------
# Test: get_repository
# -----------------------------------------------------------------------------
class TestGetRepository:
    """Tests for fetching the repository view."""

    async def test_single_page(self, client, mock_github):
        mock_github.async_graphql.return_value = copy.deepcopy(GRAPHQL_REPOSITORY_RESPONSE)

        view = await client.get_repository(REPO_URL)

        assert view.stargazer_count == 412
        assert view.topics == ["advertising", "header-bidding"]
        assert view.languages == ["Go", "Shell"]
        assert [i.issue_id for i in view.issues()] == [2101, 2054]
        mock_github.async_graphql.assert_awaited_once_with(
            REPOSITORY_VIEW_QUERY,
            variables={"owner": "prebid", "name": "prebid-server", "after": None},
        )

    async def test_paginates_open_issues(self, client, mock_github):
        """All pages are fetched; metadata comes from the first page."""
        mock_github.async_graphql.side_effect = [
            copy.deepcopy(GRAPHQL_REPOSITORY_PAGE_1),
            copy.deepcopy(GRAPHQL_REPOSITORY_PAGE_2),
        ]

        view = await client.get_repository(REPO_URL)

        assert [i.number for i in view.open_issues] == [3410, 3011]
        second_call = mock_github.async_graphql.await_args_list[1]
        assert second_call.kwargs["variables"]["after"] == "Y3Vyc29yOjE="

    async def test_page_limit_raises(self, client, mock_github):
        """More open issues than the page limit allows fails the fetch."""
        mock_github.async_graphql.return_value = copy.deepcopy(GRAPHQL_REPOSITORY_PAGE_1)

        with pytest.raises(GitHubClientError, match="more than 50 pages"):
            await client.get_repository(REPO_URL)

        assert mock_github.async_graphql.await_count == MAX_ISSUE_PAGES

    async def test_last_allowed_page_completes(self, client, mock_github):
        """A collection ending exactly on the last allowed page is returned whole."""
        pages = [copy.deepcopy(GRAPHQL_REPOSITORY_PAGE_1) for _ in range(MAX_ISSUE_PAGES - 1)]
        pages.append(copy.deepcopy(GRAPHQL_REPOSITORY_PAGE_2))
        mock_github.async_graphql.side_effect = pages

        view = await client.get_repository(REPO_URL)

        assert mock_github.async_graphql.await_count == MAX_ISSUE_PAGES
        assert len(view.open_issues) == MAX_ISSUE_PAGES

    async def test_missing_repository(self, client, mock_github):
        mock_github.async_graphql.return_value = GRAPHQL_MISSING_REPOSITORY_RESPONSE

        with pytest.raises(GitHubNotFoundError, match="prebid/prebid-server"):
            await client.get_repository(REPO_URL)

    async def test_invalid_url(self, client, mock_github):
        with pytest.raises(GitHubNotFoundError):
            await client.get_repository("not a url")
        mock_github.async_graphql.assert_not_awaited()

    async def test_unexpected_shape(self, client, mock_github):
        mock_github.async_graphql.return_value = {"repository": {"stargazerCount": "many"}}

        with pytest.raises(GitHubClientError, match="Unexpected repository response"):
            await client.get_repository(REPO_URL)


# -----------------------------------------------------------------------------
# Test: Error Handling
# -----------------------------------------------------------------------------
class TestGitHubClientErrorHandling:
    """Tests for error mapping."""

    async def test_graphql_not_found(self, client, mock_github):
        mock_github.async_graphql.side_effect = graphql_error("NOT_FOUND")

        with pytest.raises(GitHubNotFoundError):
            await client.get_repository(REPO_URL)

    async def test_graphql_rate_limited(self, client, mock_github):
        mock_github.async_graphql.side_effect = graphql_error("RATE_LIMITED")

        with pytest.raises(GitHubRateLimitError):
            await client.get_repository(REPO_URL)

    async def test_graphql_other_error(self, client, mock_github):
        mock_github.async_graphql.side_effect = graphql_error(None, "Field 'x' doesn't exist")

        with pytest.raises(GitHubClientError, match="Field 'x' doesn't exist"):
            await client.get_repository(REPO_URL)

    async def test_http_error_during_fetch(self, client, mock_github):
        mock_github.async_graphql.side_effect = request_failed(401)

        with pytest.raises(GitHubAuthenticationError):
            await client.get_repository(REPO_URL)

    def test_handle_403_rate_limit_error(self, client):
        result = client._handle_error(
            request_failed(403, {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1704067200"})
        )

        assert isinstance(result, GitHubRateLimitError)
        assert result.reset_at is not None
        assert result.reset_at.tzinfo == UTC

    def test_handle_403_forbidden(self, client):
        result = client._handle_error(request_failed(403, {"x-ratelimit-remaining": "10"}))

        assert type(result) is GitHubClientError
        assert "forbidden" in str(result)

    def test_handle_429(self, client):
        assert isinstance(client._handle_error(request_failed(429)), GitHubRateLimitError)

    def test_handle_404(self, client):
        assert isinstance(client._handle_error(request_failed(404)), GitHubNotFoundError)

    def test_handle_generic_error(self, client):
        result = client._handle_error(request_failed(502))

        assert type(result) is GitHubClientError
        assert "502" in str(result)


# -----------------------------------------------------------------------------
# Test: Rate Limit
# -----------------------------------------------------------------------------
class TestGetRateLimit:
    """Tests for rate limit retrieval."""

    async def test_get_rate_limit(self, client, mock_github):
        response = MagicMock()
        response.parsed_data.model_dump.return_value = RATE_LIMIT_RESPONSE_HEALTHY
        mock_github.rest.rate_limit.async_get.return_value = response

        snapshot = await client.get_rate_limit()

        assert snapshot.get_pool(RateLimitPool.CORE).remaining == 4500
        assert snapshot.get_pool(RateLimitPool.GRAPHQL).remaining == 4800

    async def test_get_rate_limit_auth_failure(self, client, mock_github):
        mock_github.rest.rate_limit.async_get.side_effect = request_failed(401)

        with pytest.raises(GitHubAuthenticationError):
            await client.get_rate_limit()
