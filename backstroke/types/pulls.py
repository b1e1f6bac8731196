"""Pull request-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequest:
    """An open (or just created) pull request."""

    number: int
    title: str
    state: str  # "open", "closed"
    head_label: str  # "owner:branch"
    head_ref: str
    head_sha: str
    base_ref: str
    html_url: str | None = None


@dataclass(frozen=True)
class MergeResult:
    """Result of merging a pull request."""

    number: int
    sha: str | None
    merged: bool
    message: str | None = None
