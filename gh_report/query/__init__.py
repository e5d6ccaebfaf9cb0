"""Issue query language: parsing, evaluation, validation and serialization."""

from .collection import IssueCollection
from .expressions import (
    And,
    Assignee,
    Expression,
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
from .github_query import (
    NOT_REPRESENTABLE,
    GitHubQuery,
    NotRepresentable,
    Representable,
    to_github_query,
)
from .parser import QueryParseError, parse_query

__all__ = [
    "And",
    "Assignee",
    "Expression",
    "GitHubQuery",
    "IsIssue",
    "IsOpen",
    "IssueCollection",
    "Label",
    "Milestone",
    "NOT_REPRESENTABLE",
    "Not",
    "NotRepresentable",
    "Or",
    "QueryParseError",
    "Representable",
    "ValidationWarning",
    "evaluate",
    "filter_issues",
    "format_query",
    "parse_query",
    "to_github_query",
    "validate",
]
