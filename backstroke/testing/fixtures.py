"""
Pytest fixtures for Backstroke testing.

Provides common fixtures and factory helpers for exercising the sync engine
against a MockGitHubClient.
"""

from collections.abc import Generator

import pytest

from backstroke.detector import DivergenceDetector
from backstroke.platforms import GitHubPlatform, PlatformRegistry
from backstroke.publisher import ProposalPublisher
from backstroke.testing.mock import MockGitHubClient
from backstroke.types.pulls import PullRequest
from backstroke.types.repos import ParentRepository, RepoRef, Repository


# ============================================================================
# Factory Functions
# ============================================================================


def create_mock_repository(
    owner: str = "octo",
    name: str = "app",
    default_branch: str = "master",
    private: bool = False,
    parent: Repository | ParentRepository | None = None,
) -> Repository:
    """
    Create a Repository; passing ``parent`` makes it a fork of that repository.

    Example:
        ```python
        upstream = create_mock_repository("upstream", "app")
        fork = create_mock_repository("octo", "app", parent=upstream)
        ```
    """
    if isinstance(parent, Repository):
        parent = ParentRepository(
            owner=parent.owner,
            name=parent.name,
            full_name=parent.full_name,
            default_branch=parent.default_branch,
        )

    return Repository(
        owner=owner,
        name=name,
        full_name=f"{owner}/{name}",
        default_branch=default_branch,
        private=private,
        fork=parent is not None,
        html_url=f"https://github.com/{owner}/{name}",
        parent=parent,
    )


def create_mock_pull_request(
    number: int = 1,
    head_label: str = "upstream:master",
    head_sha: str = "sha2",
    base_ref: str = "master",
    title: str = "Update from upstream repo upstream/app",
    state: str = "open",
) -> PullRequest:
    """Create a PullRequest with sensible defaults."""
    return PullRequest(
        number=number,
        title=title,
        state=state,
        head_label=head_label,
        head_ref=head_label.rpartition(":")[2],
        head_sha=head_sha,
        base_ref=base_ref,
    )


def create_mock_repo_ref(
    owner: str = "octo",
    name: str = "app",
    branch: str = "master",
    fork: bool = True,
    private: bool = False,
) -> RepoRef:
    """Create a RepoRef on GitHub."""
    return RepoRef(
        provider="github",
        owner=owner,
        name=name,
        branch=branch,
        fork=fork,
        private=private,
    )


def add_fork_pair(
    client: MockGitHubClient,
    fork_owner: str = "octo",
    upstream_owner: str = "upstream",
    name: str = "app",
    fork_sha: str = "sha1",
    upstream_sha: str = "sha2",
    branch: str = "master",
) -> tuple[Repository, Repository]:
    """
    Register an upstream repository and one fork of it on ``client``.

    Returns:
        (upstream, fork)
    """
    upstream = client.repository(upstream_owner, name)
    if upstream is None:
        upstream = client.add_repository(
            create_mock_repository(upstream_owner, name, default_branch=branch),
            branches={branch: upstream_sha},
        )
    fork = client.add_repository(
        create_mock_repository(fork_owner, name, default_branch=branch, parent=upstream),
        branches={branch: fork_sha},
    )
    return upstream, fork


# ============================================================================
# Mock Client Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockGitHubClient, None, None]:
    """
    Provide a MockGitHubClient for testing.

    Example:
        ```python
        async def test_my_feature(mock_client):
            add_fork_pair(mock_client)
            result = await my_function(mock_client)
            assert mock_client.was_called("repos.get")
        ```
    """
    client = MockGitHubClient(login="test-user")
    yield client
    client.reset()


@pytest.fixture
def bot_client(mock_client: MockGitHubClient) -> MockGitHubClient:
    """A client acting as the service account on the same hosting state."""
    return mock_client.for_account("backstroke-bot")


@pytest.fixture
def platforms(mock_client: MockGitHubClient) -> PlatformRegistry:
    """A registry with GitHub backed by ``mock_client``."""
    return PlatformRegistry([GitHubPlatform(mock_client)])


@pytest.fixture
def detector(platforms: PlatformRegistry) -> DivergenceDetector:
    return DivergenceDetector(platforms)


@pytest.fixture
def publisher(platforms: PlatformRegistry) -> ProposalPublisher:
    return ProposalPublisher(platforms)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_upstream() -> Repository:
    """Provide an upstream repository."""
    return create_mock_repository("upstream", "app")


@pytest.fixture
def sample_fork(sample_upstream: Repository) -> Repository:
    """Provide a fork of ``sample_upstream``."""
    return create_mock_repository("octo", "app", parent=sample_upstream)


@pytest.fixture
def sample_pull_request() -> PullRequest:
    """Provide an open pull request from upstream:master."""
    return create_mock_pull_request()


@pytest.fixture
def diverged_client(mock_client: MockGitHubClient) -> MockGitHubClient:
    """Mock client holding upstream/app at sha2 and its fork octo/app at sha1."""
    add_fork_pair(mock_client)
    return mock_client
