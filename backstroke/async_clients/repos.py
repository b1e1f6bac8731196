"""Async Repositories resource client."""

from typing import TYPE_CHECKING, Any

from backstroke.exceptions import NotFoundError
from backstroke.types.repos import Branch, ParentRepository, Repository

if TYPE_CHECKING:
    from backstroke.transport import AsyncHTTPTransport


def parse_repository(data: dict[str, Any]) -> Repository:
    """Parse repository data from a GitHub API response."""
    parent = None
    parent_data = data.get("parent")
    if parent_data:
        parent = ParentRepository(
            owner=parent_data["owner"]["login"],
            name=parent_data["name"],
            full_name=parent_data["full_name"],
            default_branch=parent_data["default_branch"],
        )

    return Repository(
        owner=data["owner"]["login"],
        name=data["name"],
        full_name=data.get("full_name") or f"{data['owner']['login']}/{data['name']}",
        default_branch=data.get("default_branch", "master"),
        private=data.get("private", False),
        fork=data.get("fork", False),
        html_url=data.get("html_url"),
        parent=parent,
    )


class AsyncReposClient:
    """Async client for repository-related operations."""

    PAGE_SIZE = 100

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async repos client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, owner: str, repo: str) -> Repository:
        """
        Get repository information, including its parent when it is a fork.

        Args:
            owner: Owner login
            repo: Repository name

        Returns:
            Repository metadata
        """
        data = await self.transport.request("GET", f"/repos/{owner}/{repo}")
        return parse_repository(data)

    async def find(self, owner: str, repo: str) -> Repository | None:
        """
        Get repository information, or None if the repository does not exist.

        Only a not-found response maps to None; every other failure raises.
        """
        try:
            return await self.get(owner, repo)
        except NotFoundError:
            return None

    async def get_branch(self, owner: str, repo: str, branch: str) -> Branch:
        """
        Get a branch and its head commit.

        Args:
            owner: Owner login
            repo: Repository name
            branch: Branch name

        Returns:
            Branch with the head commit SHA
        """
        data = await self.transport.request(
            "GET", f"/repos/{owner}/{repo}/branches/{branch}"
        )
        return Branch(name=data["name"], sha=data["commit"]["sha"])

    async def list_forks(self, owner: str, repo: str) -> list[Repository]:
        """
        List every fork of a repository, following pagination.

        Args:
            owner: Owner login
            repo: Repository name

        Returns:
            List of Repository objects (forks do not carry parent details here)
        """
        forks: list[Repository] = []
        page = 1
        while True:
            data = await self.transport.request(
                "GET",
                f"/repos/{owner}/{repo}/forks",
                params={"per_page": self.PAGE_SIZE, "page": page},
            )
            data = data or []
            forks.extend(parse_repository(item) for item in data)
            if len(data) < self.PAGE_SIZE:
                return forks
            page += 1

    async def fork(self, owner: str, repo: str) -> Repository:
        """
        Fork a repository into the authenticated account.

        Args:
            owner: Owner login of the repository to fork
            repo: Repository name

        Returns:
            The newly created fork
        """
        data = await self.transport.request("POST", f"/repos/{owner}/{repo}/forks", body={})
        return parse_repository(data)

    async def edit(self, owner: str, repo: str, **metadata: Any) -> Repository:
        """
        Edit repository metadata (name, description, homepage, private, ...).

        Args:
            owner: Owner login
            repo: Current repository name
            **metadata: Fields accepted by ``PATCH /repos/{owner}/{repo}``

        Returns:
            The updated repository
        """
        data = await self.transport.request(
            "PATCH", f"/repos/{owner}/{repo}", body=dict(metadata)
        )
        return parse_repository(data)
