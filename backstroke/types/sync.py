"""Data models for a synchronization run."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from backstroke.exceptions import InvalidEventError
from backstroke.types.pulls import PullRequest
from backstroke.types.repos import RepoRef, Repository

FORK_ALL = "fork-all"


@dataclass(frozen=True)
class DivergenceResult:
    """Outcome of comparing a fork's default branch with its parent's."""

    repo: Repository
    diverged: bool
    base_sha: str
    upstream_sha: str


@dataclass(frozen=True)
class SyncLinkConfig:
    """
    A configured link between an upstream and its fork(s).

    Owned by the storage layer; only ``from_repo``, ``to_repo``, ``enabled``
    and ``ephemeral_repo`` are read here.
    """

    from_repo: RepoRef
    to_repo: RepoRef | str  # RepoRef or FORK_ALL
    owner: str | None = None
    enabled: bool = True
    ephemeral_repo: bool = False

    @property
    def is_fork_all(self) -> bool:
        return self.to_repo == FORK_ALL

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "SyncLinkConfig":
        """Parse a stored link record (``from``/``to``/``ephemeralRepo`` keys)."""
        if not record.get("from") or not record.get("to"):
            raise InvalidEventError("A link needs both a 'from' and a 'to' side")

        to = record["to"]
        to_repo: RepoRef | str
        if to == FORK_ALL:
            to_repo = FORK_ALL
        elif not isinstance(to, dict):
            raise InvalidEventError(f"Unrecognized link target: {to!r}")
        elif to.get("type") == FORK_ALL:
            to_repo = FORK_ALL
        else:
            to_repo = RepoRef.from_descriptor(to)

        return cls(
            from_repo=RepoRef.from_descriptor(record["from"]),
            to_repo=to_repo,
            owner=record.get("owner"),
            enabled=bool(record.get("enabled", True)),
            ephemeral_repo=bool(record.get("ephemeralRepo", False)),
        )


@dataclass(frozen=True)
class WebhookEvent:
    """The parts of a push webhook the dispatcher acts on."""

    owner: str
    name: str
    fork: bool
    default_branch: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_payload(cls, payload: Any) -> "WebhookEvent":
        if not isinstance(payload, dict):
            raise InvalidEventError("Webhook payload must be a JSON object")

        repository = payload.get("repository")
        if not isinstance(repository, dict):
            raise InvalidEventError("Webhook payload has no repository")

        owner = repository.get("owner")
        login = owner.get("login") if isinstance(owner, dict) else None
        name = repository.get("name")
        if not login or not name:
            raise InvalidEventError("Webhook repository has no owner login or name")

        return cls(
            owner=login,
            name=name,
            fork=bool(repository.get("fork", False)),
            default_branch=repository.get("default_branch"),
        )


@dataclass(frozen=True)
class SyncError:
    """A fork whose pipeline failed, and why."""

    fork: str
    reason: str


@dataclass(frozen=True)
class TargetResult:
    """What happened to a single fork during a dispatch."""

    fork: str
    status: str  # "opened", "skipped", "error"
    reason: str | None = None
    pull_request: PullRequest | None = None
    ephemeral_repo: RepoRef | None = None


@dataclass
class SyncOutcome:
    """Summary of one webhook dispatch."""

    proposals_opened: int = 0
    skipped: int = 0
    errors: list[SyncError] = field(default_factory=list)
    results: list[TargetResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: Iterable[TargetResult]) -> "SyncOutcome":
        outcome = cls()
        for result in results:
            outcome.results.append(result)
            if result.status == "opened":
                outcome.proposals_opened += 1
            elif result.status == "skipped":
                outcome.skipped += 1
            else:
                outcome.errors.append(SyncError(fork=result.fork, reason=result.reason or "unknown error"))
        return outcome

    def acknowledgment(self) -> str:
        """A short reply for the webhook sender. Never includes error details."""
        message = f"Opened {self.proposals_opened} pull requests on forks of this repository."
        if self.skipped:
            message += f" Skipped {self.skipped}."
        if self.errors:
            message += f" {len(self.errors)} failed."
        return message
