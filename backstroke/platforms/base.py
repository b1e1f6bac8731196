"""Hosting platform abstraction."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from backstroke.exceptions import UnsupportedPlatformError
from backstroke.types.pulls import PullRequest
from backstroke.types.repos import Repository
from backstroke.types.sync import DivergenceResult


class Platform(ABC):
    """
    One hosting platform's implementation of the two sync primitives.

    Supporting another host means adding a subclass and registering it.
    """

    name: str

    @abstractmethod
    async def detect_divergence(self, owner: str, repo: str) -> DivergenceResult:
        """Compare a fork's default branch head with its parent's."""

    @abstractmethod
    async def post_proposal(self, repo: Repository | None, upstream_sha: str) -> PullRequest:
        """Open a pull request bringing the parent's default branch into ``repo``."""


class PlatformRegistry:
    """Platforms by name."""

    def __init__(self, platforms: Iterable[Platform] = ()) -> None:
        self._platforms: dict[str, Platform] = {}
        for platform in platforms:
            self.register(platform)

    def register(self, platform: Platform) -> None:
        self._platforms[platform.name] = platform

    def get(self, name: str) -> Platform:
        """
        Look up a platform.

        Raises:
            UnsupportedPlatformError: If nothing is registered under ``name``
        """
        try:
            return self._platforms[name]
        except KeyError:
            raise UnsupportedPlatformError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._platforms

    def names(self) -> list[str]:
        return sorted(self._platforms)
