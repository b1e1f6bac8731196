"""Async Pull requests resource client."""

from typing import TYPE_CHECKING, Any

from backstroke.types.pulls import MergeResult, PullRequest

if TYPE_CHECKING:
    from backstroke.transport import AsyncHTTPTransport


class AsyncPullsClient:
    """Async client for pull request operations."""

    PAGE_SIZE = 100

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async pulls client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def create(
        self,
        owner: str,
        repo: str,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
    ) -> PullRequest:
        """
        Create a pull request.

        Args:
            owner: Owner login of the repository receiving the pull request
            repo: Repository name
            title: Pull request title
            head: Branch containing changes, as "owner:branch" for cross-repo pulls
            base: Branch to merge into
            body: Optional pull request description

        Returns:
            The created PullRequest
        """
        payload: dict[str, str] = {"title": title, "head": head, "base": base}
        if body:
            payload["body"] = body

        data = await self.transport.request(
            "POST", f"/repos/{owner}/{repo}/pulls", body=payload
        )
        return self._parse_pull_request(data)

    async def list_open(
        self,
        owner: str,
        repo: str,
        head: str | None = None,
    ) -> list[PullRequest]:
        """
        List open pull requests, following pagination.

        Args:
            owner: Owner login
            repo: Repository name
            head: Optional "owner:branch" filter on the head

        Returns:
            List of PullRequest objects
        """
        params: dict[str, Any] = {"state": "open", "per_page": self.PAGE_SIZE}
        if head:
            params["head"] = head

        pulls: list[PullRequest] = []
        page = 1
        while True:
            data = await self.transport.request(
                "GET",
                f"/repos/{owner}/{repo}/pulls",
                params={**params, "page": page},
            )
            data = data or []
            pulls.extend(self._parse_pull_request(pr) for pr in data)
            if len(data) < self.PAGE_SIZE:
                return pulls
            page += 1

    async def merge(self, owner: str, repo: str, number: int) -> MergeResult:
        """
        Merge a pull request.

        Args:
            owner: Owner login
            repo: Repository name
            number: Pull request number

        Returns:
            MergeResult with the merge commit SHA
        """
        data = await self.transport.request(
            "PUT", f"/repos/{owner}/{repo}/pulls/{number}/merge", body={}
        )
        data = data or {}
        return MergeResult(
            number=number,
            sha=data.get("sha"),
            merged=data.get("merged", True),
            message=data.get("message"),
        )

    def _parse_pull_request(self, data: dict[str, Any]) -> PullRequest:
        """Parse pull request data from API response."""
        head = data.get("head") or {}
        base = data.get("base") or {}
        return PullRequest(
            number=data["number"],
            title=data.get("title", ""),
            state=data.get("state", "open"),
            head_label=head.get("label", ""),
            head_ref=head.get("ref", ""),
            head_sha=head.get("sha", ""),
            base_ref=base.get("ref", ""),
            html_url=data.get("html_url"),
        )
