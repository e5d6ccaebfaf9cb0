"""Test configuration and fixtures."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from gh_report.github_client.models import (
    GitHubIssue,
    GitHubLabel,
    GitHubMilestone,
    GitHubUser,
    IssueSnapshot,
)
from gh_report.query.collection import IssueCollection

IssueFactory = Callable[..., GitHubIssue]


def build_issue(
    number: int,
    title: str = "",
    labels: tuple[str, ...] = (),
    milestone: str | None = None,
    assignee: str | None = None,
    state: str = "open",
    pull_request: bool = False,
) -> GitHubIssue:
    """Build an issue with only the fields a test cares about."""
    return GitHubIssue(
        number=number,
        title=title or f"Issue {number}",
        html_url=f"https://github.com/testorg/testrepo/issues/{number}",
        state=state,
        pull_request=pull_request,
        labels=tuple(GitHubLabel(name=name) for name in labels),
        milestone=GitHubMilestone(title=milestone) if milestone else None,
        assignee=(
            GitHubUser(login=assignee, html_url=f"https://github.com/{assignee}")
            if assignee
            else None
        ),
    )


@pytest.fixture
def make_issue() -> IssueFactory:
    """Factory for issues with sensible defaults."""
    return build_issue


@pytest.fixture
def sample_issues() -> list[GitHubIssue]:
    """A small repository: bugs, an enhancement, a closed issue and a PR."""
    return [
        build_issue(1, "Crash on start", labels=("bug",), milestone="1.0", assignee="alice"),
        build_issue(2, "Add dark mode", labels=("enhancement",), milestone="2.0"),
        build_issue(3, "Typo in docs", labels=("bug", "area docs"), state="closed"),
        build_issue(4, "Fix crash", labels=("bug",), assignee="bob", pull_request=True),
        build_issue(5, "Untriaged report"),
    ]


@pytest.fixture
def sample_collection(sample_issues: list[GitHubIssue]) -> IssueCollection:
    """IssueCollection over ``sample_issues``."""
    return IssueCollection(sample_issues)


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[[str, list[GitHubIssue]], Path]:
    """Write a snapshot file for the given issues and return its path."""

    def _write(name: str, issues: list[GitHubIssue]) -> Path:
        snapshot = IssueSnapshot(org="testorg", repo="testrepo", issues=issues)
        path = tmp_path / name
        path.write_text(json.dumps(snapshot.model_dump(mode="json")), encoding="utf-8")
        return path

    return _write
