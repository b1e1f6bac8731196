"""Backstroke exception classes."""


class BackstrokeError(Exception):
    """Base exception for all Backstroke errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(BackstrokeError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class InvalidEventError(BackstrokeError):
    """Raised when a webhook payload cannot be understood."""

    def __init__(self, message: str) -> None:
        super().__init__("INVALID_EVENT", message)


class UnsupportedPlatformError(BackstrokeError):
    """Raised for a hosting platform with no registered implementation."""

    def __init__(self, platform: str) -> None:
        super().__init__("UNSUPPORTED_PLATFORM", f"No such platform {platform}")
        self.platform = platform


class NotAForkError(BackstrokeError):
    """Raised when a fork-only operation targets a repository with no parent."""

    def __init__(self, full_name: str) -> None:
        super().__init__("NOT_A_FORK", f"The repository {full_name} isn't a fork.")
        self.full_name = full_name


class NoRepositoryError(BackstrokeError):
    """Raised when an operation is handed no repository at all."""

    def __init__(self, message: str = "No repository found") -> None:
        super().__init__("NO_REPOSITORY", message)


class DuplicateProposalError(BackstrokeError):
    """
    Raised when an equivalent pull request is already open.

    Callers treat this as a successful no-op.
    """

    def __init__(self, full_name: str, head_sha: str | None = None) -> None:
        super().__init__(
            "DUPLICATE_PROPOSAL",
            f"A pull request for {full_name} has already been made.",
        )
        self.full_name = full_name
        self.head_sha = head_sha


class RemoteFetchError(BackstrokeError):
    """Raised when a call to the hosting API fails."""

    def __init__(
        self,
        code: str,
        message: str,
        request_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.status_code = status_code


class AuthenticationError(RemoteFetchError):
    """Raised when the API token is rejected."""

    pass


class AuthorizationError(RemoteFetchError):
    """Raised when access is denied."""

    pass


class NotFoundError(RemoteFetchError):
    """Raised when a resource is not found."""

    pass


class ConflictError(RemoteFetchError):
    """Raised on conflicts (merge conflicts, stale heads, etc.)."""

    pass


class RateLimitedError(RemoteFetchError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(code, message, request_id, status_code)
        self.retry_after = retry_after


class ValidationError(RemoteFetchError):
    """Raised on validation errors (HTTP 422 and other 4xx)."""

    pass


class ServerError(RemoteFetchError):
    """Raised on server errors (5xx) and connection failures."""

    pass
