"""Wiring of a ready-to-use dispatcher."""

from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

from backstroke.async_client import AsyncGitHubClient
from backstroke.config import SyncSettings
from backstroke.detector import DivergenceDetector
from backstroke.dispatcher import SyncDispatcher
from backstroke.ephemeral import EphemeralRepoManager
from backstroke.links import LinkConfigSource
from backstroke.logging import get_logger
from backstroke.platforms import GitHubPlatform, PlatformRegistry
from backstroke.publisher import ProposalPublisher
from backstroke.transport import RetryConfig

logger = get_logger()


@asynccontextmanager
async def open_dispatcher(
    settings: SyncSettings,
    links: LinkConfigSource | None = None,
    retry_config: RetryConfig | None = None,
) -> AsyncIterator[SyncDispatcher]:
    """
    Build a SyncDispatcher and its clients; close the clients on exit.

    Without a service account token, links asking for an ephemeral repo get
    a plain pull request instead.

    Example:
        ```python
        async with open_dispatcher(SyncSettings.from_env()) as dispatcher:
            outcome = await dispatcher.handle_webhook(payload)
            print(outcome.acknowledgment())
        ```
    """
    async with AsyncExitStack() as stack:
        client = await stack.enter_async_context(
            AsyncGitHubClient(
                token=settings.github_token,
                base_url=settings.api_url,
                timeout=settings.timeout,
                retry_config=retry_config,
            )
        )

        platforms = PlatformRegistry([GitHubPlatform(client)])
        publisher = ProposalPublisher(platforms)

        ephemeral = None
        if settings.bot_token:
            bot_client = await stack.enter_async_context(
                AsyncGitHubClient(
                    token=settings.bot_token,
                    base_url=settings.api_url,
                    timeout=settings.timeout,
                    retry_config=retry_config,
                )
            )
            ephemeral = EphemeralRepoManager(
                service_client=bot_client,
                regular_client=client,
                service_account=settings.service_account,
                publisher=ProposalPublisher(PlatformRegistry([GitHubPlatform(bot_client)])),
            )
        else:
            logger.info("No service account token; ephemeral repos are disabled.")

        yield SyncDispatcher(
            client=client,
            detector=DivergenceDetector(platforms),
            publisher=publisher,
            ephemeral=ephemeral,
            links=links,
            max_concurrency=settings.max_concurrency,
        )
