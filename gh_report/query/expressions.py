"""Expression tree for issue queries.

An expression is one of eight frozen node types. Combinators (``And``,
``Or``, ``Not``) compose predicate leaves that each test one issue
attribute. Trees are built by :func:`gh_report.query.parser.parse_query`
and are never mutated afterwards, so the same tree can be evaluated,
validated and serialized any number of times against any collection.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, TypeAlias, assert_never

if TYPE_CHECKING:
    from ..github_client.models import GitHubIssue
    from .collection import IssueCollection


@dataclass(frozen=True)
class And:
    """True when every child is true."""

    children: tuple["Expression", ...]

    def __post_init__(self) -> None:
        if len(self.children) < 2:
            raise ValueError("And requires at least two children")


@dataclass(frozen=True)
class Or:
    """True when any child is true."""

    children: tuple["Expression", ...]

    def __post_init__(self) -> None:
        if len(self.children) < 2:
            raise ValueError("Or requires at least two children")


@dataclass(frozen=True)
class Not:
    child: "Expression"


@dataclass(frozen=True)
class Label:
    name: str


@dataclass(frozen=True)
class Milestone:
    name: str


@dataclass(frozen=True)
class Assignee:
    login: str


@dataclass(frozen=True)
class IsIssue:
    """``is:issue`` when ``want_issue`` is True, ``is:pr`` otherwise."""

    want_issue: bool


@dataclass(frozen=True)
class IsOpen:
    """``is:open`` when ``want_open`` is True, ``is:closed`` otherwise."""

    want_open: bool


Expression: TypeAlias = (
    And | Or | Not | Label | Milestone | Assignee | IsIssue | IsOpen
)


def evaluate(expression: Expression, issue: "GitHubIssue") -> bool:
    """Evaluate an expression against a single issue.

    Args:
        expression: Parsed expression tree
        issue: Issue to test

    Returns:
        True if the issue matches the expression
    """
    match expression:
        case And(children):
            return all(evaluate(child, issue) for child in children)
        case Or(children):
            return any(evaluate(child, issue) for child in children)
        case Not(child):
            return not evaluate(child, issue)
        case Label(name):
            return name in issue.label_names
        case Milestone(name):
            return issue.milestone_title == name
        case Assignee(login):
            return issue.assignee_login == login
        case IsIssue(want_issue):
            return issue.is_issue_or_comment == want_issue
        case IsOpen(want_open):
            return issue.is_open == want_open
        case _:
            assert_never(expression)


def filter_issues(
    expression: Expression, issues: Iterable["GitHubIssue"]
) -> list["GitHubIssue"]:
    """Return the issues matching ``expression``, preserving input order."""
    return [issue for issue in issues if evaluate(expression, issue)]


@dataclass(frozen=True)
class ValidationWarning:
    """A predicate references a name unknown to the issue collection."""

    kind: Literal["label", "milestone", "assignee"]
    name: str

    def __str__(self) -> str:
        return f"{self.kind.capitalize()} does not exist: {self.name}"


def validate(
    expression: Expression,
    collection: "IssueCollection",
    on_warning: Callable[[ValidationWarning], None] | None = None,
) -> list[ValidationWarning]:
    """Check every predicate reference against the collection's indices.

    Unknown references are reported, never raised. A predicate naming
    something absent from the collection still evaluates (to False for
    every issue in that collection).

    Args:
        expression: Parsed expression tree
        collection: Collection whose label/milestone/user indices are checked
        on_warning: Optional callback invoked once per warning, in tree order

    Returns:
        All warnings found, in tree order
    """
    warnings: list[ValidationWarning] = []

    def report(warning: ValidationWarning) -> None:
        warnings.append(warning)
        if on_warning is not None:
            on_warning(warning)

    def visit(node: Expression) -> None:
        match node:
            case And(children) | Or(children):
                for child in children:
                    visit(child)
            case Not(child):
                visit(child)
            case Label(name):
                if not collection.has_label(name):
                    report(ValidationWarning("label", name))
            case Milestone(name):
                if not collection.has_milestone(name):
                    report(ValidationWarning("milestone", name))
            case Assignee(login):
                if not collection.has_user(login):
                    report(ValidationWarning("assignee", login))
            case IsIssue() | IsOpen():
                pass
            case _:
                assert_never(node)

    visit(expression)
    return warnings


def _format_value(value: str) -> str:
    if not value or any(ch.isspace() or ch in '()"\\' for ch in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def format_query(expression: Expression) -> str:
    """Render an expression as canonical query text.

    The output parses back to an equal tree: nested combinators are
    parenthesized and names needing it are quoted.
    """

    def wrap(node: Expression) -> str:
        text = format_query(node)
        return f"({text})" if isinstance(node, (And, Or)) else text

    match expression:
        case And(children):
            return " AND ".join(wrap(child) for child in children)
        case Or(children):
            return " OR ".join(wrap(child) for child in children)
        case Not(child):
            return f"NOT {wrap(child)}"
        case Label(name):
            return f"label:{_format_value(name)}"
        case Milestone(name):
            return f"milestone:{_format_value(name)}"
        case Assignee(login):
            return f"assignee:{_format_value(login)}"
        case IsIssue(want_issue):
            return "is:issue" if want_issue else "is:pr"
        case IsOpen(want_open):
            return "is:open" if want_open else "is:closed"
        case _:
            assert_never(expression)
