"""Hosting platform implementations."""

from backstroke.platforms.base import Platform, PlatformRegistry
from backstroke.platforms.github import GitHubPlatform, generate_update_body

__all__ = [
    "Platform",
    "PlatformRegistry",
    "GitHubPlatform",
    "generate_update_body",
]
