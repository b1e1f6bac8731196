"""Tests for data model parsing."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from backstroke.exceptions import InvalidEventError
from backstroke.types import (
    FORK_ALL,
    RepoRef,
    SyncLinkConfig,
    SyncOutcome,
    TargetResult,
    WebhookEvent,
)
from backstroke.testing import create_mock_repository

segment_strategy = st.text(
    min_size=1,
    max_size=30,
    alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd"), whitelist_characters="-_."),
)


@given(owner=segment_strategy, name=segment_strategy, private=st.booleans(), fork=st.booleans())
@settings(max_examples=100)
def test_repo_ref_descriptor_roundtrip(owner: str, name: str, private: bool, fork: bool) -> None:
    ref = RepoRef(provider="github", owner=owner, name=name, branch="master", fork=fork, private=private)

    assert RepoRef.from_descriptor(ref.to_descriptor()) == ref


@pytest.mark.parametrize("name", ["", "octo", "/app", "octo/", "octo/app/extra"])
def test_repo_ref_rejects_malformed_names(name: str) -> None:
    with pytest.raises(InvalidEventError):
        RepoRef.from_descriptor({"type": "repo", "name": name, "branch": "master"})


def test_repo_ref_requires_branch() -> None:
    with pytest.raises(InvalidEventError):
        RepoRef.from_descriptor({"type": "repo", "name": "octo/app"})


def test_repo_ref_from_repository() -> None:
    upstream = create_mock_repository("upstream", "app")
    fork = create_mock_repository("octo", "app", default_branch="main", private=True, parent=upstream)

    ref = RepoRef.from_repository(fork)

    assert ref.full_name == "octo/app"
    assert ref.branch == "main"
    assert ref.fork is True
    assert ref.private is True
    assert ref.provider == "github"


def test_link_from_record() -> None:
    link = SyncLinkConfig.from_record({
        "owner": "user-1",
        "enabled": True,
        "ephemeralRepo": True,
        "from": {"type": "repo", "name": "upstream/app", "provider": "github", "branch": "master"},
        "to": {"type": "repo", "name": "octo/app", "provider": "github", "branch": "master", "fork": True},
    })

    assert link.from_repo.full_name == "upstream/app"
    assert link.to_repo.full_name == "octo/app"
    assert link.ephemeral_repo is True
    assert not link.is_fork_all


def test_fork_all_link_from_record() -> None:
    link = SyncLinkConfig.from_record({
        "from": {"type": "repo", "name": "upstream/app", "branch": "master"},
        "to": {"type": "fork-all"},
    })

    assert link.to_repo == FORK_ALL
    assert link.is_fork_all
    assert link.enabled is True
    assert link.ephemeral_repo is False


def test_link_needs_both_sides() -> None:
    with pytest.raises(InvalidEventError):
        SyncLinkConfig.from_record({"from": {"type": "repo", "name": "upstream/app", "branch": "master"}})


def test_webhook_event_from_payload() -> None:
    event = WebhookEvent.from_payload({
        "ref": "refs/heads/master",
        "repository": {
            "name": "app",
            "owner": {"login": "octo", "name": "octo"},
            "fork": True,
            "default_branch": "master",
        },
    })

    assert event == WebhookEvent(owner="octo", name="app", fork=True, default_branch="master")
    assert event.full_name == "octo/app"


def test_webhook_event_defaults_to_not_a_fork() -> None:
    event = WebhookEvent.from_payload({"repository": {"name": "app", "owner": {"login": "upstream"}}})

    assert event.fork is False


def test_outcome_counts_results() -> None:
    outcome = SyncOutcome.from_results([
        TargetResult(fork="a/app", status="opened"),
        TargetResult(fork="b/app", status="opened"),
        TargetResult(fork="c/app", status="skipped", reason="up to date"),
        TargetResult(fork="d/app", status="error", reason="[NOT_FOUND] Not Found"),
    ])

    assert outcome.proposals_opened == 2
    assert outcome.skipped == 1
    assert [(e.fork, e.reason) for e in outcome.errors] == [("d/app", "[NOT_FOUND] Not Found")]
    assert len(outcome.results) == 4
    assert outcome.acknowledgment() == (
        "Opened 2 pull requests on forks of this repository. Skipped 1. 1 failed."
    )


def test_empty_outcome_acknowledgment() -> None:
    assert SyncOutcome().acknowledgment() == "Opened 0 pull requests on forks of this repository."


def test_fork_all_link_as_bare_directive() -> None:
    link = SyncLinkConfig.from_record({
        "from": {"type": "repo", "name": "upstream/app", "branch": "master"},
        "to": "fork-all",
    })

    assert link.is_fork_all


@pytest.mark.parametrize("to", ["octo/app", ["fork-all"], 42])
def test_link_with_unrecognized_target(to: object) -> None:
    with pytest.raises(InvalidEventError):
        SyncLinkConfig.from_record({
            "from": {"type": "repo", "name": "upstream/app", "branch": "master"},
            "to": to,
        })
