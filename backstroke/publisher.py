"""Duplicate-safe pull request publishing."""

from backstroke.platforms.base import PlatformRegistry
from backstroke.types.pulls import PullRequest
from backstroke.types.repos import Repository


class ProposalPublisher:
    """Opens the pull request that brings a fork up to date with its parent."""

    def __init__(self, platforms: PlatformRegistry) -> None:
        self.platforms = platforms

    async def publish(
        self, platform: str, repo: Repository | None, upstream_sha: str
    ) -> PullRequest:
        """
        Open a pull request from ``parent:default_branch`` into ``repo``.

        Args:
            platform: Hosting platform name
            repo: The fork, as returned by divergence detection
            upstream_sha: Head SHA of the parent's default branch

        Returns:
            The created pull request

        Raises:
            UnsupportedPlatformError: If the platform is unknown
            NoRepositoryError: If ``repo`` is None
            NotAForkError: If ``repo`` has no parent
            DuplicateProposalError: If an open pull request already carries ``upstream_sha``
            RemoteFetchError: If any API call fails
        """
        return await self.platforms.get(platform).post_proposal(repo, upstream_sha)
