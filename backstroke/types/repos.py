"""Repository-related data models."""

from dataclasses import dataclass
from typing import Any

from backstroke.exceptions import InvalidEventError


@dataclass(frozen=True)
class ParentRepository:
    """The repository a fork was created from."""

    owner: str
    name: str
    full_name: str
    default_branch: str


@dataclass(frozen=True)
class Repository:
    """Repository metadata as reported by the hosting platform."""

    owner: str
    name: str
    full_name: str
    default_branch: str
    private: bool
    fork: bool
    html_url: str | None = None
    parent: ParentRepository | None = None


@dataclass(frozen=True)
class Branch:
    """A branch and the SHA of its head commit."""

    name: str
    sha: str


@dataclass(frozen=True)
class RepoRef:
    """
    Identifies a repository and branch on a hosting platform.

    This is the shape sync links use for their ``from`` and ``to`` sides:
    ``{"type": "repo", "name": "owner/repo", "provider": "github", ...}``.
    """

    provider: str
    owner: str
    name: str
    branch: str
    fork: bool = False
    private: bool = False
    type: str = "repo"

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_descriptor(cls, descriptor: dict[str, Any]) -> "RepoRef":
        """Build a reference from a link descriptor with an ``owner/repo`` name."""
        if not isinstance(descriptor, dict):
            raise InvalidEventError(f"Malformed repository descriptor: {descriptor!r}")
        full_name = descriptor.get("name") or ""
        owner, _, name = full_name.partition("/")
        if not owner or not name or "/" in name:
            raise InvalidEventError(f"Malformed repository name: {full_name!r}")
        if not descriptor.get("branch"):
            raise InvalidEventError(f"No branch given for {full_name}")

        return cls(
            provider=descriptor.get("provider", "github"),
            owner=owner,
            name=name,
            branch=descriptor["branch"],
            fork=bool(descriptor.get("fork", False)),
            private=bool(descriptor.get("private", False)),
            type=descriptor.get("type", "repo"),
        )

    @classmethod
    def from_repository(cls, repo: Repository, provider: str = "github") -> "RepoRef":
        """Reference a repository's default branch."""
        return cls(
            provider=provider,
            owner=repo.owner,
            name=repo.name,
            branch=repo.default_branch,
            fork=repo.fork,
            private=repo.private,
        )

    def to_descriptor(self) -> dict[str, Any]:
        """Render the link descriptor form of this reference."""
        return {
            "type": self.type,
            "name": self.full_name,
            "private": self.private,
            "provider": self.provider,
            "fork": self.fork,
            "branch": self.branch,
        }
