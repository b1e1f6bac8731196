"""
Pytest plugin for Backstroke testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
discovered by pytest. Add this to your top-level conftest.py:

    pytest_plugins = ["backstroke.testing.conftest"]

Or import the fixtures directly:

    from backstroke.testing.fixtures import mock_client, sample_fork
"""

# Re-export all fixtures for pytest auto-discovery
from backstroke.testing.fixtures import (
    bot_client,
    detector,
    diverged_client,
    mock_client,
    platforms,
    publisher,
    sample_fork,
    sample_pull_request,
    sample_upstream,
)

__all__ = [
    "mock_client",
    "bot_client",
    "platforms",
    "detector",
    "publisher",
    "sample_upstream",
    "sample_fork",
    "sample_pull_request",
    "diverged_client",
]
