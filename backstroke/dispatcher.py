"""
Webhook dispatch.

A push to a fork syncs that fork. A push to anything else syncs every fork
of it, concurrently, with each fork's failure recorded in the outcome rather
than raised. Nothing is retried here: the next push re-derives the state
from the host and tries again.
"""

import asyncio
from typing import TYPE_CHECKING, Any

from backstroke.exceptions import BackstrokeError, DuplicateProposalError
from backstroke.logging import get_logger, mask_sensitive_data
from backstroke.types.repos import RepoRef, Repository
from backstroke.types.sync import (
    SyncLinkConfig,
    SyncOutcome,
    TargetResult,
    WebhookEvent,
)

if TYPE_CHECKING:
    from backstroke.async_client import AsyncGitHubClient
    from backstroke.detector import DivergenceDetector
    from backstroke.ephemeral import EphemeralRepoManager
    from backstroke.links import LinkConfigSource
    from backstroke.publisher import ProposalPublisher

logger = get_logger("sync")


class SyncDispatcher:
    """Entry point for push webhooks."""

    DEFAULT_MAX_CONCURRENCY = 8

    def __init__(
        self,
        client: "AsyncGitHubClient",
        detector: "DivergenceDetector",
        publisher: "ProposalPublisher",
        ephemeral: "EphemeralRepoManager | None" = None,
        links: "LinkConfigSource | None" = None,
        platform: str = "github",
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        """
        Args:
            client: Client used to enumerate forks
            detector: Divergence detector
            publisher: Pull request publisher
            ephemeral: Mirror manager for links that ask for an ephemeral repo
            links: Source of sync link configuration (no links when None)
            platform: Hosting platform the webhooks come from
            max_concurrency: Forks processed at once during fan-out
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.client = client
        self.detector = detector
        self.publisher = publisher
        self.ephemeral = ephemeral
        self.links = links
        self.platform = platform
        self.max_concurrency = max_concurrency

    async def handle_webhook(self, payload: Any) -> SyncOutcome:
        """
        Handle one push webhook delivery.

        Args:
            payload: Decoded webhook JSON

        Returns:
            Counts of pull requests opened, forks skipped and forks that failed

        Raises:
            InvalidEventError: If the payload does not describe a repository
        """
        event = WebhookEvent.from_payload(payload)

        if event.fork:
            result = await self._sync_fork(event.owner, event.name)
            outcome = SyncOutcome.from_results([result])
        else:
            outcome = await self._sync_all_forks(event)

        logger.info(
            "Push to %s: opened=%d skipped=%d errors=%d",
            event.full_name, outcome.proposals_opened, outcome.skipped, len(outcome.errors),
        )
        return outcome

    async def _sync_all_forks(self, event: WebhookEvent) -> SyncOutcome:
        try:
            forks = await self.client.repos.list_forks(event.owner, event.name)
        except BackstrokeError as e:
            logger.warning("Could not list forks of %s: %s", event.full_name, e)
            return SyncOutcome.from_results(
                [TargetResult(fork=event.full_name, status="error", reason=_describe(e))]
            )

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(fork: Repository) -> TargetResult:
            async with semaphore:
                return await self._sync_fork(fork.owner, fork.name)

        # _sync_fork never raises ordinary exceptions, so one fork cannot
        # abort the others; cancellation still reaches every task.
        results = await asyncio.gather(*(bounded(fork) for fork in forks))
        return SyncOutcome.from_results(results)

    async def _sync_fork(self, owner: str, name: str) -> TargetResult:
        full_name = f"{owner}/{name}"
        try:
            divergence = await self.detector.detect(self.platform, owner, name)
            if not divergence.diverged:
                logger.info("%s is up to date with its upstream", full_name)
                return TargetResult(fork=full_name, status="skipped", reason="up to date")

            link = await self._find_link(divergence.repo)
            if link is not None and not link.enabled:
                logger.info("Link for %s is disabled", full_name)
                return TargetResult(fork=full_name, status="skipped", reason="link disabled")

            if link is not None and link.ephemeral_repo and self.ephemeral is not None:
                source = RepoRef.from_repository(divergence.repo, provider=self.platform)
                mirror = await self.ephemeral.ensure_and_sync(source, upstream=divergence)
                return TargetResult(fork=full_name, status="opened", ephemeral_repo=mirror)

            pull = await self.publisher.publish(
                self.platform, divergence.repo, divergence.upstream_sha
            )
            return TargetResult(fork=full_name, status="opened", pull_request=pull)

        except DuplicateProposalError:
            logger.info("%s already has an open pull request for this change", full_name)
            return TargetResult(fork=full_name, status="skipped", reason="already proposed")
        except BackstrokeError as e:
            logger.warning("Syncing %s failed: %s", full_name, e)
            return TargetResult(fork=full_name, status="error", reason=_describe(e))
        except Exception:
            logger.exception("Unexpected error syncing %s", full_name)
            return TargetResult(fork=full_name, status="error", reason="internal error")

    async def _find_link(self, repo: Repository) -> SyncLinkConfig | None:
        if self.links is None or repo.parent is None:
            return None
        return await self.links.find_link(repo.parent.full_name, repo.full_name)


def _describe(error: BackstrokeError) -> str:
    return mask_sensitive_data(str(error))
