"""Backstroke - keeps forks in sync with their upstream."""

from backstroke.async_client import AsyncGitHubClient
from backstroke.config import SyncSettings
from backstroke.detector import DivergenceDetector
from backstroke.dispatcher import SyncDispatcher
from backstroke.ephemeral import EphemeralRepoManager, generate_ephemeral_repo_name
from backstroke.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackstrokeError,
    ConfigurationError,
    ConflictError,
    DuplicateProposalError,
    InvalidEventError,
    NoRepositoryError,
    NotAForkError,
    NotFoundError,
    RateLimitedError,
    RemoteFetchError,
    ServerError,
    UnsupportedPlatformError,
    ValidationError,
)
from backstroke.links import InMemoryLinkConfigSource, LinkConfigSource
from backstroke.logging import configure_logging, get_logger
from backstroke.platforms import GitHubPlatform, Platform, PlatformRegistry
from backstroke.publisher import ProposalPublisher
from backstroke.service import open_dispatcher
from backstroke.transport import AsyncHTTPTransport, RetryConfig

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Client
    "AsyncGitHubClient",
    # Sync engine
    "DivergenceDetector",
    "ProposalPublisher",
    "EphemeralRepoManager",
    "generate_ephemeral_repo_name",
    "SyncDispatcher",
    "open_dispatcher",
    # Platforms
    "Platform",
    "PlatformRegistry",
    "GitHubPlatform",
    # Links
    "LinkConfigSource",
    "InMemoryLinkConfigSource",
    # Configuration
    "SyncSettings",
    # Exceptions
    "BackstrokeError",
    "ConfigurationError",
    "InvalidEventError",
    "UnsupportedPlatformError",
    "NotAForkError",
    "NoRepositoryError",
    "DuplicateProposalError",
    "RemoteFetchError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    # Transport
    "AsyncHTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
