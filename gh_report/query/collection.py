"""Issue collection with derived metadata indices."""

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..github_client.models import GitHubIssue


class IssueCollection:
    """Ordered, read-only set of issues plus lookup indices.

    The label, milestone and user indices are derived from the issues when
    the collection is built, so every name referenced by a contained issue
    is always present in the matching index.
    """

    def __init__(self, issues: Iterable["GitHubIssue"]):
        """Build the collection and its indices.

        Args:
            issues: Issues in snapshot order; numbers must be unique
        """
        self._issues: tuple["GitHubIssue", ...] = tuple(issues)
        self._by_number = {issue.number: issue for issue in self._issues}
        if len(self._by_number) != len(self._issues):
            raise ValueError("Issue numbers must be unique within a collection")

        self.labels: frozenset[str] = frozenset(
            name for issue in self._issues for name in issue.label_names
        )
        self.milestones: frozenset[str] = frozenset(
            issue.milestone_title
            for issue in self._issues
            if issue.milestone_title is not None
        )
        self.users: frozenset[str] = frozenset(
            issue.assignee_login
            for issue in self._issues
            if issue.assignee_login is not None
        )

    @property
    def issues(self) -> tuple["GitHubIssue", ...]:
        return self._issues

    @property
    def numbers(self) -> frozenset[int]:
        return frozenset(self._by_number)

    def has_label(self, name: str) -> bool:
        return name in self.labels

    def has_milestone(self, name: str) -> bool:
        return name in self.milestones

    def has_user(self, login: str) -> bool:
        return login in self.users

    def get(self, number: int) -> "GitHubIssue | None":
        return self._by_number.get(number)

    def __iter__(self) -> Iterator["GitHubIssue"]:
        return iter(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def __contains__(self, number: object) -> bool:
        return number in self._by_number
