"""
Backstroke async GitHub client.

The capability interface every sync component is handed at construction
time: repository metadata, branches, forks, pull requests and collaborator
access, all asynchronous.
"""

import os
from typing import Any

from backstroke.async_clients import (
    AsyncAccessClient,
    AsyncPullsClient,
    AsyncReposClient,
)
from backstroke.logging import get_logger
from backstroke.transport import AsyncHTTPTransport, RetryConfig

logger = get_logger()


class AsyncGitHubClient:
    """
    Async client for the GitHub REST API.

    Aggregates the async resource clients and handles authentication.
    Uses httpx for async HTTP operations.

    Example:
        ```python
        import asyncio
        from backstroke import AsyncGitHubClient

        async def main():
            async with AsyncGitHubClient(token="ghp_...") as client:
                repo = await client.repos.get("octo", "app")
                forks = await client.repos.list_forks("octo", "app")

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the async GitHub client.

        Args:
            token: OAuth or personal access token (anonymous when None)
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
        )

        self.repos = AsyncReposClient(self._transport)
        self.pulls = AsyncPullsClient(self._transport)
        self.access = AsyncAccessClient(self._transport)

    @classmethod
    def from_env(
        cls,
        token_variable: str = "GITHUB_TOKEN",
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncGitHubClient":
        """
        Create an async client from environment variables.

        Environment variables:
            GITHUB_TOKEN: API token (optional; anonymous requests are heavily rate limited)
            GITHUB_API_URL: Base URL for API (optional, default: https://api.github.com)

        Args:
            token_variable: Name of the variable holding the token (default: GITHUB_TOKEN)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)

        Returns:
            Configured AsyncGitHubClient instance
        """
        token = os.environ.get(token_variable)
        base_url = os.environ.get("GITHUB_API_URL", cls.DEFAULT_BASE_URL)

        if not token:
            logger.warning("No github token specified in %s.", token_variable)

        return cls(
            token=token,
            base_url=base_url,
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
