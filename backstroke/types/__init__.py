"""Backstroke type definitions.

This module exports all data model types used by the engine.
"""

from backstroke.types.pulls import MergeResult, PullRequest
from backstroke.types.repos import Branch, ParentRepository, RepoRef, Repository
from backstroke.types.sync import (
    FORK_ALL,
    DivergenceResult,
    SyncError,
    SyncLinkConfig,
    SyncOutcome,
    TargetResult,
    WebhookEvent,
)

__all__ = [
    # Repository types
    "Repository",
    "ParentRepository",
    "Branch",
    "RepoRef",
    # Pull request types
    "PullRequest",
    "MergeResult",
    # Sync types
    "FORK_ALL",
    "DivergenceResult",
    "SyncLinkConfig",
    "WebhookEvent",
    "SyncError",
    "TargetResult",
    "SyncOutcome",
]
