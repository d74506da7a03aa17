"""Database module for Repository Tracker."""

from repo_tracker.db.engine import (
    create_tables,
    dispose_engine,
    get_engine,
    get_session_factory,
)
from repo_tracker.db.models import Base, Issue, Repository
from repo_tracker.db.repositories import (
    BaseRepository,
    IssueRepository,
    RepositoryRepository,
)
from repo_tracker.db.store import SQLTrackerStore

__all__ = [
    # Models
    "Base",
    "Issue",
    "Repository",
    # Engine
    "create_tables",
    "dispose_engine",
    "get_engine",
    "get_session_factory",
    # Repositories
    "BaseRepository",
    "IssueRepository",
    "RepositoryRepository",
    # Tracker datastore
    "SQLTrackerStore",
]
