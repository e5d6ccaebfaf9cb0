"""Pydantic models for GitHub data structures.

These models map to the subset of GitHub's REST API issue objects that the
reports and the query engine consume. Instances are frozen so a loaded
snapshot can be shared freely between queries.
API Reference: https://docs.github.com/en/rest/issues
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    model_config = ConfigDict(frozen=True)

    login: str = Field(..., description="GitHub username/login (string)")
    html_url: str = Field("", description="Profile page URL (string)")


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Maps to GitHub REST API Label object.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name of the label (string)")


class GitHubMilestone(BaseModel):
    """GitHub milestone model.

    Maps to GitHub REST API Milestone object.
    API Reference: https://docs.github.com/en/rest/issues/milestones
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title of the milestone (string)")


class GitHubIssue(BaseModel):
    """GitHub issue model representing repository issues and pull requests.

    Maps to GitHub REST API Issue object. GitHub returns pull requests from
    the issues endpoint as well; ``pull_request`` records which one this is.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., description="Issue number within the repository (integer)")
    title: str = Field(..., description="Short description/title of the issue (string)")
    html_url: str = Field(..., description="Web URL of the issue (string)")
    state: str = Field(..., description="Current state: 'open', 'closed' (string)")
    pull_request: bool = Field(
        False, description="True when the entry is a pull request (boolean)"
    )
    labels: tuple[GitHubLabel, ...] = Field(
        default_factory=tuple, description="Labels attached to the issue"
    )
    milestone: GitHubMilestone | None = Field(
        None, description="Milestone the issue belongs to"
    )
    assignee: GitHubUser | None = Field(None, description="Assigned user")

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    @property
    def is_issue_or_comment(self) -> bool:
        """True for issues, False for pull requests."""
        return not self.pull_request

    @property
    def label_names(self) -> frozenset[str]:
        return frozenset(label.name for label in self.labels)

    @property
    def milestone_title(self) -> str | None:
        return self.milestone.title if self.milestone else None

    @property
    def assignee_login(self) -> str | None:
        return self.assignee.login if self.assignee else None


class IssueSnapshot(BaseModel):
    """Model for a repository snapshot as stored in a JSON file.

    Wrapper model that includes organizational context and metadata
    for all issues of a repository captured at one point in time.
    """

    org: str = Field(..., description="GitHub organization name")
    repo: str = Field(..., description="GitHub repository name")
    issues: list[GitHubIssue] = Field(
        default_factory=list, description="All issues captured in the snapshot"
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Storage metadata (timestamp, tool_version)",
    )
