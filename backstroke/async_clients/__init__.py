"""Backstroke async resource clients."""

from backstroke.async_clients.access import AsyncAccessClient
from backstroke.async_clients.pulls import AsyncPullsClient
from backstroke.async_clients.repos import AsyncReposClient

__all__ = [
    "AsyncReposClient",
    "AsyncPullsClient",
    "AsyncAccessClient",
]
