"""Tracking orchestrator - keep stored repositories in sync with GitHub.

Services:
- TrackingScheduler: bounded-concurrency run over all due repositories
- RepositorySyncService: fetch → diff → update for one repository
- IssueReconciler: set-diff of open issues against stored issues
- CredentialPool: shared pool of GitHub tokens
- QuotaReporter: post-run rate limit report per token
"""

from .credentials import Credential, CredentialPool
from .ports import RemoteAPI, TrackerStore
from .quota import QuotaReporter
from .reconciler import IssueReconciler, ReconciliationPlan
from .results import (
    QuotaReport,
    RepositoryOutcome,
    RepositoryTrackResult,
    TrackerRunResult,
)
from .scheduler import TrackerState, TrackingScheduler
from .sync import RepositorySyncService

__all__ = [
    # Scheduling
    "TrackerState",
    "TrackingScheduler",
    # Per-repository work
    "IssueReconciler",
    "ReconciliationPlan",
    "RepositorySyncService",
    # Credentials
    "Credential",
    "CredentialPool",
    # Reporting
    "QuotaReport",
    "QuotaReporter",
    "RepositoryOutcome",
    "RepositoryTrackResult",
    "TrackerRunResult",
    # Interfaces
    "RemoteAPI",
    "TrackerStore",
]
