"""Test fixtures for Repository Tracker."""

from .github_responses import (
    GRAPHQL_EMPTY_REPOSITORY_RESPONSE,
    GRAPHQL_MISSING_REPOSITORY_RESPONSE,
    GRAPHQL_REPOSITORY_PAGE_1,
    GRAPHQL_REPOSITORY_PAGE_2,
    GRAPHQL_REPOSITORY_RESPONSE,
)
from .rate_limit_responses import (
    RATE_LIMIT_RESPONSE_EXHAUSTED,
    RATE_LIMIT_RESPONSE_GRAPHQL_CRITICAL,
    RATE_LIMIT_RESPONSE_GRAPHQL_WARNING,
    RATE_LIMIT_RESPONSE_HEALTHY,
    RATE_LIMIT_RESPONSE_MINIMAL,
    make_rate_limit_response,
)

__all__ = [
    # Mock GraphQL responses
    "GRAPHQL_EMPTY_REPOSITORY_RESPONSE",
    "GRAPHQL_MISSING_REPOSITORY_RESPONSE",
    "GRAPHQL_REPOSITORY_PAGE_1",
    "GRAPHQL_REPOSITORY_PAGE_2",
    "GRAPHQL_REPOSITORY_RESPONSE",
    # Mock rate limit responses
    "RATE_LIMIT_RESPONSE_EXHAUSTED",
    "RATE_LIMIT_RESPONSE_GRAPHQL_CRITICAL",
    "RATE_LIMIT_RESPONSE_GRAPHQL_WARNING",
    "RATE_LIMIT_RESPONSE_HEALTHY",
    "RATE_LIMIT_RESPONSE_MINIMAL",
    "make_rate_limit_response",
]
