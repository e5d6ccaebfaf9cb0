"""GitHub search link building."""

from urllib.parse import quote_plus

from ..query.expressions import Expression
from ..query.github_query import Representable, to_github_query

GITHUB_URL = "https://github.com"


def build_issues_url(org: str, repo: str, query: str) -> str:
    """Build a link to a repository's issue list filtered by a search query.

    Args:
        org: Organization name
        repo: Repository name
        query: GitHub search fragment, e.g. ``label:bug is:open``

    Returns:
        URL of the repository's issues page with the query encoded

    Example:
        >>> build_issues_url("dotnet", "corefx", 'label:"area infra" is:open')
        'https://github.com/dotnet/corefx/issues?q=label%3A%22area+infra%22+is%3Aopen'
    """
    return f"{GITHUB_URL}/{org}/{repo}/issues?q={quote_plus(query)}"


def build_query_url(org: str, repo: str, expression: Expression) -> str | None:
    """Build a "view on GitHub" link for an expression.

    Args:
        org: Organization name
        repo: Repository name
        expression: Parsed query

    Returns:
        The link, or None when GitHub's search syntax cannot express the query
    """
    result = to_github_query(expression)
    if isinstance(result, Representable):
        return build_issues_url(org, repo, result.fragment)
    return None
