"""Render expression trees as native GitHub issue-search queries.

GitHub's search syntax is a flat, implicitly AND'ed list of qualifiers with
optional ``-`` negation on some of them. It has no OR between qualifiers, no
grouping and no negation of anything but a plain qualifier, so only a subset
of expression trees can be rendered. A non-representable descendant makes
every ancestor non-representable.
"""

from dataclasses import dataclass
from typing import Final, TypeAlias, assert_never

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
)


@dataclass(frozen=True)
class Representable:
    """A GitHub search fragment such as ``label:bug -label:wontfix``."""

    fragment: str


@dataclass(frozen=True)
class NotRepresentable:
    """GitHub's search syntax cannot express the query."""


NOT_REPRESENTABLE: Final = NotRepresentable()

GitHubQuery: TypeAlias = Representable | NotRepresentable


def _qualifier(key: str, value: str, negate: bool = False) -> Representable:
    # a bare value runs to the next whitespace, so only quoted values escape quotes
    if value.startswith('"') or any(ch.isspace() for ch in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        value = f'"{escaped}"'
    return Representable(f"{'-' if negate else ''}{key}:{value}")


def to_github_query(expression: Expression) -> GitHubQuery:
    """Render ``expression`` as a GitHub search fragment.

    Args:
        expression: Parsed expression tree

    Returns:
        ``Representable`` with the fragment, or ``NOT_REPRESENTABLE``

    Example:
        >>> to_github_query(parse_query("label:bug NOT milestone:v1"))
        Representable(fragment='label:bug -milestone:v1')
    """
    match expression:
        case Label(name):
            return _qualifier("label", name)
        case Milestone(name):
            return _qualifier("milestone", name)
        case Assignee(login):
            return _qualifier("assignee", login)
        case IsIssue(want_issue):
            return Representable("is:issue" if want_issue else "is:pr")
        case IsOpen(want_open):
            return Representable("is:open" if want_open else "is:closed")
        case Not(Label(name)):
            return _qualifier("label", name, negate=True)
        case Not(Milestone(name)):
            return _qualifier("milestone", name, negate=True)
        case Not(Assignee(login)):
            return _qualifier("assignee", login, negate=True)
        case Not():
            return NOT_REPRESENTABLE
        case And(children):
            fragments = []
            for child in children:
                result = to_github_query(child)
                if isinstance(result, NotRepresentable):
                    return NOT_REPRESENTABLE
                fragments.append(result.fragment)
            return Representable(" ".join(fragments))
        case Or():
            return NOT_REPRESENTABLE
        case _:
            assert_never(expression)
