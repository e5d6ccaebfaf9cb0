"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import (
    GitHubIssue,
    GitHubLabel,
    GitHubMilestone,
    GitHubUser,
    IssueSnapshot,
)
from .search import build_issues_url, build_query_url

__all__ = [
    "GitHubClient",
    "GitHubUser",
    "GitHubLabel",
    "GitHubMilestone",
    "GitHubIssue",
    "IssueSnapshot",
    "build_issues_url",
    "build_query_url",
]
