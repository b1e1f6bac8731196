"""Read-only access to configured sync links."""

from collections.abc import Iterable
from typing import Protocol

from backstroke.types.sync import SyncLinkConfig


class LinkConfigSource(Protocol):
    """Where the dispatcher looks up how an upstream/fork pair is linked."""

    async def find_link(
        self, upstream_full_name: str, fork_full_name: str
    ) -> SyncLinkConfig | None:
        ...


class InMemoryLinkConfigSource:
    """
    Links held in memory.

    A link whose ``to`` side names the fork wins over a ``fork-all`` link on
    the same upstream.
    """

    def __init__(self, links: Iterable[SyncLinkConfig] = ()) -> None:
        self._links = list(links)

    def add(self, link: SyncLinkConfig) -> None:
        self._links.append(link)

    async def find_link(
        self, upstream_full_name: str, fork_full_name: str
    ) -> SyncLinkConfig | None:
        upstream = upstream_full_name.lower()
        fork = fork_full_name.lower()
        fallback = None
        for link in self._links:
            if link.from_repo.full_name.lower() != upstream:
                continue
            if link.is_fork_all:
                fallback = fallback or link
            elif link.to_repo.full_name.lower() == fork:
                return link
        return fallback
