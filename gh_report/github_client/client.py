"""GitHub API client using PyGitHub."""

import logging
import os

from github import Auth, Github
from github.GithubException import UnknownObjectException
from github.Issue import Issue
from github.Label import Label
from github.Milestone import Milestone
from github.NamedUser import NamedUser
from github.Repository import Repository
from rich.console import Console

from .models import GitHubIssue, GitHubLabel, GitHubMilestone, GitHubUser

console = Console()
logger = logging.getLogger(__name__)


class GitHubClient:
    """GitHub API client that downloads repository issues."""

    def __init__(self, token: str | None = None):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.github = Github(auth=Auth.Token(self.token))

    def _convert_user(self, github_user: NamedUser) -> GitHubUser:
        """Convert PyGitHub user to our model."""
        return GitHubUser(login=github_user.login, html_url=github_user.html_url)

    def _convert_label(self, github_label: Label) -> GitHubLabel:
        """Convert PyGitHub label to our model."""
        return GitHubLabel(name=github_label.name)

    def _convert_milestone(self, github_milestone: Milestone) -> GitHubMilestone:
        """Convert PyGitHub milestone to our model."""
        return GitHubMilestone(title=github_milestone.title)

    def _convert_issue(self, github_issue: Issue) -> GitHubIssue:
        """Convert PyGitHub issue to our model."""
        return GitHubIssue(
            number=github_issue.number,
            title=github_issue.title,
            html_url=github_issue.html_url,
            state=github_issue.state,
            pull_request=github_issue.pull_request is not None,
            labels=tuple(self._convert_label(label) for label in github_issue.labels),
            milestone=(
                self._convert_milestone(github_issue.milestone)
                if github_issue.milestone
                else None
            ),
            assignee=(
                self._convert_user(github_issue.assignee)
                if github_issue.assignee
                else None
            ),
        )

    def get_repository(self, org: str, repo: str) -> Repository:
        """Get repository object."""
        try:
            return self.github.get_repo(f"{org}/{repo}")
        except UnknownObjectException:
            raise ValueError(f"Repository {org}/{repo} not found")

    def get_all_issues(
        self, org: str, repo: str, state: str = "all"
    ) -> list[GitHubIssue]:
        """Download every issue and pull request of a repository.

        Args:
            org: Organization name
            repo: Repository name
            state: Issue state (open, closed, all)

        Returns:
            List of GitHubIssue objects ordered by issue number
        """
        repository = self.get_repository(org, repo)
        logger.info("Fetching %s issues from %s/%s", state, org, repo)

        issues = []
        for github_issue in repository.get_issues(state=state):
            issues.append(self._convert_issue(github_issue))
            if len(issues) % 100 == 0:
                console.print(f"Fetched {len(issues)} issues...")

        issues.sort(key=lambda issue: issue.number)
        logger.info("Fetched %d issues from %s/%s", len(issues), org, repo)
        return issues
