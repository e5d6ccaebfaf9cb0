"""Tests for GitHub search link building."""

from gh_report.github_client.search import build_issues_url, build_query_url
from gh_report.query.parser import parse_query


class TestBuildIssuesUrl:
    """Test build_issues_url function."""

    def test_basic_url(self) -> None:
        """Test building a link for a simple query."""
        url = build_issues_url("test-org", "test-repo", "label:bug is:open")
        assert url == "https://github.com/test-org/test-repo/issues?q=label%3Abug+is%3Aopen"

    def test_quotes_and_negation_encoded(self) -> None:
        """Test quotes, spaces and '-' are encoded safely."""
        url = build_issues_url("o", "r", '-label:"area docs"')
        assert url == "https://github.com/o/r/issues?q=-label%3A%22area+docs%22"


class TestBuildQueryUrl:
    """Test build_query_url function."""

    def test_representable_query(self) -> None:
        """Test a conjunctive query produces a link."""
        url = build_query_url("o", "r", parse_query("label:bug NOT assignee:bob"))
        assert url == "https://github.com/o/r/issues?q=label%3Abug+-assignee%3Abob"

    def test_not_representable_query(self) -> None:
        """Test an Or query produces no link."""
        assert build_query_url("o", "r", parse_query("label:a OR label:b")) is None
