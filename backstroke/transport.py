"""
Async HTTP transport for the GitHub API.

Handles async HTTP communication with automatic retry logic, rate-limit
backoff and error handling using the httpx async client.
"""

import asyncio
import random
import time
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any

import httpx

from backstroke.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackstrokeError,
    ConflictError,
    NotFoundError,
    RateLimitedError,
    RemoteFetchError,
    ServerError,
    ValidationError,
)
from backstroke.logging import log_http_request, log_http_response


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class AsyncHTTPTransport:
    """
    Async HTTP transport layer with token auth and retry logic.

    Handles:
    - Token authentication and GitHub media-type headers
    - Exponential backoff with jitter for retries
    - Retry-After / X-RateLimit-Reset header respect for rate limiting
    - Error response parsing into typed exceptions

    The transport (and its rate-limit budget) is shared by every component
    using the same client; nothing outside this class touches it.
    """

    USER_AGENT = "backstroke"

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: OAuth or personal access token (anonymous when None)
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.USER_AGENT,
        }
        if token:
            headers["Authorization"] = f"token {token}"

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make an API request with automatic retry.

        Args:
            method: HTTP method
            path: API path (e.g., "/repos/octo/app")
            params: Query parameters
            body: JSON request body (for POST/PUT/PATCH)

        Returns:
            Parsed JSON response, or None for empty responses

        Raises:
            RemoteFetchError: On API errors
        """
        url = f"{self.base_url}{path}"

        async def make_request() -> httpx.Response:
            log_http_request(method, url, dict(self._client.headers), body)
            started = time.monotonic()
            response = await self._client.request(method, path, params=params, json=body)
            log_http_response(
                response.status_code, url, elapsed_ms=(time.monotonic() - started) * 1000
            )
            return response

        return await self._execute_with_retry(make_request)

    async def _execute_with_retry(
        self, request_fn: Callable[[], Coroutine[Any, Any, httpx.Response]]
    ) -> Any:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Async function that makes the HTTP request

        Returns:
            Parsed JSON response

        Raises:
            RemoteFetchError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = await request_fn()

                if response.status_code < 400:
                    if response.status_code == 204 or not response.content:
                        return None
                    return response.json()

                error = self._parse_error_response(response)
                status_code = 429 if isinstance(error, RateLimitedError) else response.status_code

                if not self._should_retry(status_code, attempt):
                    raise error

                last_error = error

                wait_time = self._get_backoff_time(attempt, self._retry_after(response))
                await asyncio.sleep(wait_time)

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                wait_time = self._get_backoff_time(attempt, None)
                await asyncio.sleep(wait_time)

        # Should not reach here, but just in case
        if last_error:
            if isinstance(last_error, BackstrokeError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code (403s caused by quota exhaustion count as 429)
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    @staticmethod
    def _retry_after(response: httpx.Response) -> str | None:
        """Seconds to wait as advertised by the response, if any."""
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            return retry_after

        if response.headers.get("X-RateLimit-Remaining") == "0":
            reset = response.headers.get("X-RateLimit-Reset")
            try:
                return str(max(0, int(reset) - int(time.time())))
            except (TypeError, ValueError):
                return None

        return None

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return min(float(retry_after), self.retry_config.max_backoff)
            except ValueError:
                pass  # Fall through to exponential backoff

        # Exponential backoff: backoff_factor ^ attempt
        base_wait = self.retry_config.backoff_factor ** attempt

        # Apply jitter (±jitter%)
        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)

    def _parse_error_response(self, response: httpx.Response) -> RemoteFetchError:
        """
        Parse an error response into a typed exception.

        GitHub error bodies look like
        ``{"message": "...", "errors": [{"message": "..."}], "documentation_url": "..."}``.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate RemoteFetchError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        message = data.get("message") or f"HTTP {response.status_code}"
        details = [
            item["message"]
            for item in data.get("errors") or []
            if isinstance(item, dict) and item.get("message")
        ]
        if details:
            message = f"{message}: {'; '.join(details)}"

        request_id = response.headers.get("X-GitHub-Request-Id")
        status_code = response.status_code

        if status_code == 429 or (
            status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
        ):
            retry_after_str = self._retry_after(response) or "60"
            try:
                retry_after = int(float(retry_after_str))
            except ValueError:
                retry_after = 60
            return RateLimitedError("RATE_LIMITED", message, retry_after, request_id, status_code)
        elif status_code == 401:
            return AuthenticationError("UNAUTHORIZED", message, request_id, status_code)
        elif status_code == 403:
            return AuthorizationError("FORBIDDEN", message, request_id, status_code)
        elif status_code == 404:
            return NotFoundError("NOT_FOUND", message, request_id, status_code)
        elif status_code == 409:
            return ConflictError("CONFLICT", message, request_id, status_code)
        elif status_code >= 500:
            return ServerError("SERVER_ERROR", message, request_id, status_code)
        else:
            return ValidationError("UNPROCESSABLE", message, request_id, status_code)
