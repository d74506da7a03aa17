"""Pydantic schemas for Repository Tracker.

This module provides the tracker's working models and the parsers for
GitHub GraphQL responses.
"""

from .base import SchemaBase
from .github_api import (
    GitHubIssueNode,
    GitHubRepositoryNode,
    GitHubRepositoryView,
)
from .issue import TrackedIssue
from .repository import RepositoryRead, TrackedRepository, parse_repository_url

__all__ = [
    # Base
    "SchemaBase",
    # GitHub API
    "GitHubIssueNode",
    "GitHubRepositoryNode",
    "GitHubRepositoryView",
    # Tracker models
    "RepositoryRead",
    "TrackedIssue",
    "TrackedRepository",
    "parse_repository_url",
]
