"""
Ephemeral mirror repositories.

When a fork cannot simply be sent a pull request, Backstroke keeps a
disposable mirror of it under a service account. The fork's owner is added
as a collaborator so merge conflicts can be fixed there without touching
the fork's own history. The mirror is created once and merged forward on
every later sync.
"""

import asyncio
import dataclasses
from typing import TYPE_CHECKING

from backstroke.config import DEFAULT_SERVICE_ACCOUNT
from backstroke.exceptions import ConflictError, DuplicateProposalError, ValidationError
from backstroke.logging import get_logger
from backstroke.types.repos import RepoRef, Repository
from backstroke.types.sync import DivergenceResult

if TYPE_CHECKING:
    from backstroke.async_client import AsyncGitHubClient
    from backstroke.publisher import ProposalPublisher

logger = get_logger("sync")

EPHEMERAL_DESCRIPTION = "A temporary backstroke repo to fix merge conflicts."
EPHEMERAL_MERGE_TITLE = "Merge in new changes from the upstream into this ephemeral snapshot"


def generate_ephemeral_repo_name(owner: str, repo: str) -> str:
    """
    Name of the mirror kept for ``owner/repo``.

    GitHub logins never contain two hyphens in a row, so distinct sources
    always map to distinct names.
    """
    return f"{owner}--{repo}".lower()


class EphemeralRepoManager:
    """Creates the mirror on first use and merges new changes into it afterwards."""

    def __init__(
        self,
        service_client: "AsyncGitHubClient",
        regular_client: "AsyncGitHubClient",
        service_account: str = DEFAULT_SERVICE_ACCOUNT,
        publisher: "ProposalPublisher | None" = None,
        platform: str = "github",
    ) -> None:
        """
        Args:
            service_client: Client authenticated as the service account (owns mirrors)
            regular_client: Client used to look mirrors up
            service_account: Login of the service account
            publisher: Opens the upstream pull request on a newly created mirror
            platform: Platform name handed to the publisher
        """
        self.service_client = service_client
        self.regular_client = regular_client
        self.service_account = service_account
        self.publisher = publisher
        self.platform = platform

    async def ensure_and_sync(
        self, source: RepoRef, upstream: DivergenceResult | None = None
    ) -> RepoRef:
        """
        Make sure the mirror of ``source`` exists and is up to date.

        Args:
            source: The repository (and branch) being mirrored
            upstream: Divergence of ``source`` from its parent; when given, a
                newly created mirror gets the upstream pull request opened on it

        Returns:
            Reference to the mirror (``type="repo"``, ``fork=True``)

        Raises:
            RemoteFetchError: If the host fails for any reason other than the
                mirror not existing yet
        """
        ephemeral_name = generate_ephemeral_repo_name(source.owner, source.name)
        existing = await self.regular_client.repos.find(self.service_account, ephemeral_name)

        if existing is None:
            mirror = await asyncio.shield(self._create_mirror(source, ephemeral_name))
            logger.info("Created ephemeral repo %s for %s", mirror.full_name, source.full_name)
            if self.publisher is not None and upstream is not None and upstream.diverged:
                await self._open_upstream_proposal(mirror, source, upstream)
            return self._mirror_ref(source, mirror.name, mirror.private)

        await asyncio.shield(self._merge_into_mirror(source, existing.name))
        return self._mirror_ref(source, existing.name, existing.private)

    async def _create_mirror(self, source: RepoRef, ephemeral_name: str) -> Repository:
        fork = await self.service_client.repos.fork(source.owner, source.name)
        mirror = await self.service_client.repos.edit(
            fork.owner,
            fork.name,
            name=ephemeral_name,
            description=EPHEMERAL_DESCRIPTION,
            homepage=f"https://github.com/{source.owner}/{source.name}",
            private=source.private,
            has_issues=False,
            has_wiki=False,
            has_downloads=False,
        )
        await self.service_client.access.add_collaborator(
            self.service_account, mirror.name, source.owner, permission="push"
        )
        return mirror

    async def _merge_into_mirror(self, source: RepoRef, ephemeral_name: str) -> None:
        # An empty or conflicting merge leaves the mirror as it is; a
        # conflicting pull request stays open for the collaborator.
        try:
            pull = await self.service_client.pulls.create(
                self.service_account,
                ephemeral_name,
                title=EPHEMERAL_MERGE_TITLE,
                head=f"{source.owner}:{source.branch}",
                base=source.branch,
            )
        except ValidationError as e:
            if "No commits between" not in e.message:
                raise
            logger.info(
                "%s/%s already has every commit from %s:%s",
                self.service_account, ephemeral_name, source.owner, source.branch,
            )
            return

        try:
            await self.service_client.pulls.merge(self.service_account, ephemeral_name, pull.number)
        except (ConflictError, ValidationError) as e:
            if isinstance(e, ValidationError) and "not mergeable" not in e.message:
                raise
            logger.warning(
                "Could not merge #%s into %s/%s, left open for resolution: %s",
                pull.number, self.service_account, ephemeral_name, e,
            )
            return

        logger.info(
            "Merged %s:%s into %s/%s (#%s)",
            source.owner, source.branch, self.service_account, ephemeral_name, pull.number,
        )

    async def _open_upstream_proposal(
        self, mirror: Repository, source: RepoRef, upstream: DivergenceResult
    ) -> None:
        # The mirror's own parent on the host is the source fork; the pull
        # request has to come from the source's upstream instead.
        target = dataclasses.replace(
            mirror, default_branch=source.branch, parent=upstream.repo.parent
        )
        try:
            await self.publisher.publish(self.platform, target, upstream.upstream_sha)
        except DuplicateProposalError:
            logger.info("%s already has an open pull request from upstream", mirror.full_name)

    def _mirror_ref(self, source: RepoRef, name: str, private: bool) -> RepoRef:
        return RepoRef(
            provider=source.provider,
            owner=self.service_account,
            name=name,
            branch=source.branch,
            fork=True,
            private=private,
        )
