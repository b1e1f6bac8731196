"""Backstroke testing utilities.

Provides a mock GitHub client and fixtures for testing code built on the
sync engine.
"""

from backstroke.testing.fixtures import (
    add_fork_pair,
    create_mock_pull_request,
    create_mock_repo_ref,
    create_mock_repository,
)
from backstroke.testing.mock import MockCall, MockGitHubClient

__all__ = [
    # Mock client
    "MockGitHubClient",
    "MockCall",
    # Helper functions
    "create_mock_repository",
    "create_mock_pull_request",
    "create_mock_repo_ref",
    "add_fork_pair",
]
