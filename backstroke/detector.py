"""Fork divergence detection."""

from backstroke.logging import get_logger
from backstroke.platforms.base import PlatformRegistry
from backstroke.types.sync import DivergenceResult

logger = get_logger("sync")


class DivergenceDetector:
    """Tells whether a fork's default branch has fallen behind its parent's."""

    def __init__(self, platforms: PlatformRegistry) -> None:
        self.platforms = platforms

    async def detect(self, platform: str, owner: str, repo: str) -> DivergenceResult:
        """
        Compare the head of ``owner/repo``'s default branch with its parent's.

        Every call reads current state from the host; nothing is cached.

        Args:
            platform: Hosting platform name (e.g. "github")
            owner: Owner login of the fork
            repo: Repository name of the fork

        Returns:
            DivergenceResult carrying the fetched repository and both SHAs

        Raises:
            UnsupportedPlatformError: If the platform is unknown
            NotAForkError: If the repository has no parent
            RemoteFetchError: If any API call fails
        """
        result = await self.platforms.get(platform).detect_divergence(owner, repo)
        logger.debug(
            "%s/%s diverged=%s base=%s upstream=%s",
            owner, repo, result.diverged, result.base_sha, result.upstream_sha,
        )
        return result
