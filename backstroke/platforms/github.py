"""GitHub implementation of the sync primitives."""

import asyncio
from typing import TYPE_CHECKING

from backstroke.exceptions import (
    DuplicateProposalError,
    NoRepositoryError,
    NotAForkError,
    ValidationError,
)
from backstroke.logging import get_logger
from backstroke.platforms.base import Platform
from backstroke.types.pulls import PullRequest
from backstroke.types.repos import Repository
from backstroke.types.sync import DivergenceResult

if TYPE_CHECKING:
    from backstroke.async_client import AsyncGitHubClient

logger = get_logger("sync")


def generate_update_body(full_remote: str) -> str:
    """Body of the pull request opened on a fork that fell behind ``full_remote``."""
    return (
        "Hello!\n"
        f"The remote `{full_remote}` has some new changes that aren't in this fork.\n"
        "\n"
        "So, here they are, ready to be merged.\n"
        "\n"
        "If this pull request can be merged without conflict, you can publish your "
        "software with these new changes. If not, this branch is a great place to "
        "fix any issues.\n"
        "\n"
        "Have fun!\n"
        "--------\n"
        "Created by [Backstroke](http://backstroke.us)\n"
    )


class GitHubPlatform(Platform):
    """Divergence detection and pull request publishing against GitHub."""

    name = "github"

    def __init__(self, client: "AsyncGitHubClient") -> None:
        self.client = client

    async def detect_divergence(self, owner: str, repo: str) -> DivergenceResult:
        repository = await self.client.repos.get(owner, repo)
        parent = repository.parent
        if parent is None:
            raise NotAForkError(repository.full_name)

        # Both heads are fetched at once; either failing fails the detection.
        base, upstream = await asyncio.gather(
            self.client.repos.get_branch(owner, repo, repository.default_branch),
            self.client.repos.get_branch(parent.owner, parent.name, parent.default_branch),
        )

        return DivergenceResult(
            repo=repository,
            diverged=base.sha != upstream.sha,
            base_sha=base.sha,
            upstream_sha=upstream.sha,
        )

    async def post_proposal(self, repo: Repository | None, upstream_sha: str) -> PullRequest:
        if repo is None:
            raise NoRepositoryError()
        parent = repo.parent
        if parent is None:
            raise NotAForkError(repo.full_name)

        head = f"{parent.owner}:{parent.default_branch}"

        # Listing and creating are two calls; a concurrent delivery can slip in
        # between them. GitHub's own duplicate check below catches that case.
        existing = await self.client.pulls.list_open(repo.owner, repo.name, head=head)
        if any(pull.head_sha == upstream_sha for pull in existing):
            raise DuplicateProposalError(repo.full_name, upstream_sha)

        create = self.client.pulls.create(
            repo.owner,
            repo.name,
            title=f"Update from upstream repo {parent.full_name}",
            head=head,
            base=repo.default_branch,
            body=generate_update_body(parent.full_name),
        )
        try:
            pull = await asyncio.shield(create)
        except ValidationError as e:
            if "already exists" in e.message:
                raise DuplicateProposalError(repo.full_name, upstream_sha) from e
            raise

        logger.info("Opened pull request #%s on %s from %s", pull.number, repo.full_name, head)
        return pull
