"""Tests for expression evaluation, validation and formatting."""

import itertools

import pytest

from gh_report.github_client.models import GitHubIssue
from gh_report.query.collection import IssueCollection
from gh_report.query.expressions import (
    And,
    Assignee,
    IsIssue,
    IsOpen,
    Label,
    Milestone,
    Not,
    Or,
    ValidationWarning,
    evaluate,
    filter_issues,
    format_query,
    validate,
)
from gh_report.query.parser import parse_query

from ..conftest import IssueFactory


class TestNodeConstruction:
    """Test node invariants."""

    @pytest.mark.parametrize("combinator", [And, Or])
    def test_combinator_requires_two_children(self, combinator: type) -> None:
        """Test single-child and empty combinators are rejected."""
        with pytest.raises(ValueError, match="at least two children"):
            combinator((Label("bug"),))
        with pytest.raises(ValueError):
            combinator(())

    def test_structural_equality(self) -> None:
        """Test equal trees compare equal and hash equal."""
        first = And((Label("bug"), Not(IsOpen(True))))
        second = And((Label("bug"), Not(IsOpen(True))))
        assert first == second
        assert hash(first) == hash(second)


class TestEvaluate:
    """Test evaluation of each node kind."""

    def test_label_and_is_open(self, make_issue: IssueFactory) -> None:
        """Test 'label:bug AND is:open' against open and closed bugs."""
        expression = parse_query("label:bug AND is:open")
        assert evaluate(expression, make_issue(1, labels=("bug",))) is True
        assert evaluate(expression, make_issue(2, labels=("bug",), state="closed")) is False

    def test_label_exact_match(self, make_issue: IssueFactory) -> None:
        """Test label matching is exact and case-sensitive."""
        issue = make_issue(1, labels=("Bug", "area docs"))
        assert evaluate(Label("Bug"), issue)
        assert not evaluate(Label("bug"), issue)
        assert evaluate(Label("area docs"), issue)
        assert not evaluate(Label("area"), issue)

    def test_milestone(self, make_issue: IssueFactory) -> None:
        """Test milestone equality, including issues with no milestone."""
        assert evaluate(Milestone("1.0"), make_issue(1, milestone="1.0"))
        assert not evaluate(Milestone("1.0"), make_issue(2, milestone="1.0.1"))
        assert not evaluate(Milestone("1.0"), make_issue(3))

    def test_assignee(self, make_issue: IssueFactory) -> None:
        """Test assignee login equality."""
        assert evaluate(Assignee("alice"), make_issue(1, assignee="alice"))
        assert not evaluate(Assignee("alice"), make_issue(2, assignee="bob"))
        assert not evaluate(Assignee("alice"), make_issue(3))

    def test_is_issue(self, make_issue: IssueFactory) -> None:
        """Test issue / pull request classification."""
        issue = make_issue(1)
        pull = make_issue(2, pull_request=True)
        assert evaluate(IsIssue(True), issue)
        assert not evaluate(IsIssue(True), pull)
        assert evaluate(IsIssue(False), pull)

    def test_is_open(self, make_issue: IssueFactory) -> None:
        """Test open / closed state."""
        assert evaluate(IsOpen(False), make_issue(1, state="closed"))
        assert not evaluate(IsOpen(False), make_issue(2))

    def test_combinators(self, make_issue: IssueFactory) -> None:
        """Test n-ary And/Or and Not."""
        issue = make_issue(1, labels=("bug",), milestone="1.0")
        assert evaluate(And((Label("bug"), Milestone("1.0"), IsOpen(True))), issue)
        assert not evaluate(And((Label("bug"), Milestone("2.0"), IsOpen(True))), issue)
        assert evaluate(Or((Label("x"), Label("y"), Milestone("1.0"))), issue)
        assert not evaluate(Or((Label("x"), Label("y"))), issue)
        assert evaluate(Not(Label("x")), issue)

    def test_boolean_laws(self, sample_issues: list[GitHubIssue]) -> None:
        """Test And/Or/Not agree with Python's boolean operators."""
        leaves = [Label("bug"), Milestone("1.0"), IsOpen(True), IsIssue(False)]
        for a, b in itertools.product(leaves, repeat=2):
            for issue in sample_issues:
                ea, eb = evaluate(a, issue), evaluate(b, issue)
                assert evaluate(And((a, b)), issue) == (ea and eb)
                assert evaluate(Or((a, b)), issue) == (ea or eb)
                assert evaluate(Not(a), issue) == (not ea)
                assert evaluate(Or((a, b)), issue) == evaluate(Or((b, a)), issue)
                assert evaluate(And((a, b)), issue) == evaluate(And((b, a)), issue)

    def test_associativity(self, sample_issues: list[GitHubIssue]) -> None:
        """Test grouping does not change And/Or results."""
        a, b, c = Label("bug"), IsOpen(True), Assignee("alice")
        for issue in sample_issues:
            assert evaluate(And((And((a, b)), c)), issue) == evaluate(
                And((a, And((b, c)))), issue
            )
            assert evaluate(Or((Or((a, b)), c)), issue) == evaluate(
                Or((a, Or((b, c)))), issue
            )


class TestFilterIssues:
    """Test collection filtering."""

    def test_filter_preserves_order(self, sample_collection: IssueCollection) -> None:
        """Test matching issues are returned in collection order."""
        result = filter_issues(parse_query("label:bug"), sample_collection)
        assert [issue.number for issue in result] == [1, 3, 4]

    def test_filter_list(self, sample_issues: list[GitHubIssue]) -> None:
        """Test filtering a plain list."""
        result = filter_issues(parse_query("is:open is:issue NOT label:bug"), sample_issues)
        assert [issue.number for issue in result] == [2, 5]

    def test_filter_no_matches(self, sample_collection: IssueCollection) -> None:
        """Test an unknown label matches nothing."""
        assert filter_issues(Label("typo"), sample_collection) == []


class TestValidate:
    """Test validation against collection metadata."""

    def test_unknown_label_warns_once(self, make_issue: IssueFactory) -> None:
        """Test a missing label yields one warning and never matches."""
        collection = IssueCollection([make_issue(1, labels=("bug",)), make_issue(2)])
        warnings = validate(Label("typo"), collection)

        assert warnings == [ValidationWarning("label", "typo")]
        assert str(warnings[0]) == "Label does not exist: typo"
        assert all(not evaluate(Label("typo"), issue) for issue in collection)

    def test_known_references(self, sample_collection: IssueCollection) -> None:
        """Test known names produce no warnings."""
        expression = parse_query(
            'label:bug milestone:1.0 assignee:alice label:"area docs" is:pr'
        )
        assert validate(expression, sample_collection) == []

    def test_all_kinds_in_tree_order(self, sample_collection: IssueCollection) -> None:
        """Test warnings from nested nodes, reported in tree order."""
        expression = parse_query(
            "(label:nope OR NOT milestone:9.9) AND assignee:carol is:open"
        )
        warnings = validate(expression, sample_collection)
        assert warnings == [
            ValidationWarning("label", "nope"),
            ValidationWarning("milestone", "9.9"),
            ValidationWarning("assignee", "carol"),
        ]
        assert str(warnings[1]) == "Milestone does not exist: 9.9"
        assert str(warnings[2]) == "Assignee does not exist: carol"

    def test_callback_receives_warnings(self, sample_collection: IssueCollection) -> None:
        """Test the on_warning callback is invoked per warning."""
        received: list[ValidationWarning] = []
        returned = validate(
            parse_query("label:x label:y"), sample_collection, on_warning=received.append
        )
        assert received == returned
        assert len(received) == 2

    def test_empty_collection(self) -> None:
        """Test validation against an empty collection."""
        warnings = validate(Label("bug"), IssueCollection([]))
        assert warnings == [ValidationWarning("label", "bug")]


class TestFormatQuery:
    """Test canonical query text."""

    def test_format_simple(self) -> None:
        """Test leaves and operators."""
        expression = And((Label("bug"), Not(IsOpen(True)), IsIssue(False)))
        assert format_query(expression) == "label:bug AND NOT is:open AND is:pr"

    def test_format_quotes_and_groups(self) -> None:
        """Test quoting and parenthesized nesting."""
        expression = Or((And((Label("area docs"), Milestone("1.0"))), Assignee("bob")))
        assert format_query(expression) == '(label:"area docs" AND milestone:1.0) OR assignee:bob'

    @pytest.mark.parametrize(
        "text",
        [
            "NOT (label:a OR label:b) is:closed",
            '(label:"x y" AND label:z) AND milestone:"Future Release"',
            "NOT NOT assignee:alice OR is:issue",
            'label:say"hi',
            'label:"say \\"hi\\" twice" milestone:C:\\temp',
        ],
    )
    def test_format_parses_back(self, text: str) -> None:
        """Test formatted text parses to an equal tree."""
        expression = parse_query(text)
        assert parse_query(format_query(expression)) == expression

    @pytest.mark.parametrize(
        ("expression", "text"),
        [
            (Label('say"hi'), 'label:"say\\"hi"'),
            (Label('a "b" c'), 'label:"a \\"b\\" c"'),
            (Milestone("C:\\temp"), 'milestone:"C:\\\\temp"'),
        ],
    )
    def test_format_escapes_quotes(self, expression: Label | Milestone, text: str) -> None:
        """Test embedded quotes and backslashes are escaped and read back."""
        assert format_query(expression) == text
        assert parse_query(text) == expression
