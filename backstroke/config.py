"""
Runtime configuration for the sync engine.

Settings are read from the environment once, at process start, and handed
to ``open_dispatcher``.
"""

import os
from dataclasses import dataclass

from backstroke.exceptions import ConfigurationError
from backstroke.logging import get_logger

logger = get_logger()

DEFAULT_SERVICE_ACCOUNT = "backstroke-bot"


@dataclass(frozen=True)
class SyncSettings:
    """Configuration for a sync engine instance."""

    github_token: str | None = None
    bot_token: str | None = None
    service_account: str = DEFAULT_SERVICE_ACCOUNT
    api_url: str = "https://api.github.com"
    max_concurrency: int = 8
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "SyncSettings":
        """
        Load settings from environment variables.

        Environment variables:
            GITHUB_TOKEN: Token for the regular account (optional)
            BACKSTROKE_BOT_TOKEN: Token for the ephemeral-repo service account (optional)
            BACKSTROKE_BOT_LOGIN: Service account login (default: backstroke-bot)
            GITHUB_API_URL: API base URL (default: https://api.github.com)
            BACKSTROKE_MAX_CONCURRENCY: Forks processed at once (default: 8)
            BACKSTROKE_TIMEOUT: Request timeout in seconds (default: 30)

        Raises:
            ConfigurationError: If a numeric variable is malformed
        """
        github_token = os.environ.get("GITHUB_TOKEN") or None
        if not github_token:
            logger.warning("Warning: No github token specified.")

        return cls(
            github_token=github_token,
            bot_token=os.environ.get("BACKSTROKE_BOT_TOKEN") or None,
            service_account=os.environ.get("BACKSTROKE_BOT_LOGIN", DEFAULT_SERVICE_ACCOUNT),
            api_url=os.environ.get("GITHUB_API_URL", "https://api.github.com"),
            max_concurrency=_positive_int("BACKSTROKE_MAX_CONCURRENCY", 8),
            timeout=_positive_float("BACKSTROKE_TIMEOUT", 30.0),
        )


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {value}")
    return value


def _positive_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value
