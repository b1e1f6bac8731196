"""Async collaborator access resource client."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from backstroke.transport import AsyncHTTPTransport


class AsyncAccessClient:
    """Async client for repository collaborator operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async access client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def add_collaborator(
        self,
        owner: str,
        repo: str,
        collaborator: str,
        permission: str = "push",
    ) -> None:
        """
        Invite a user as collaborator on a repository.

        Args:
            owner: Owner login
            repo: Repository name
            collaborator: Login of the user to add
            permission: "pull", "triage", "push", "maintain" or "admin"
        """
        await self.transport.request(
            "PUT",
            f"/repos/{owner}/{repo}/collaborators/{collaborator}",
            body={"permission": permission},
        )
