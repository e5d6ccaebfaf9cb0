"""HTML report of named queries over one snapshot."""

import logging
from html import escape
from pathlib import Path

from ..config.models import NamedQuery
from ..github_client.search import build_query_url
from ..query.collection import IssueCollection
from ..query.expressions import (
    ValidationWarning,
    filter_issues,
    format_query,
    validate,
)
from .html import PAGE_STYLE, issue_table

logger = logging.getLogger(__name__)


class QueryReport:
    """Renders one section per named query: its issues and a GitHub link."""

    def __init__(
        self,
        queries: list[NamedQuery],
        org: str | None = None,
        repo: str | None = None,
    ):
        """Initialize the report.

        Args:
            queries: Named queries, one report section each
            org: Organization used for "view on GitHub" links
            repo: Repository used for "view on GitHub" links
        """
        self.queries = queries
        self.org = org
        self.repo = repo
        self.warnings: list[ValidationWarning] = []

    def _section(self, query: NamedQuery, collection: IssueCollection) -> str:
        for warning in validate(query.expression, collection):
            logger.warning("Query '%s': %s", query.name, warning)
            self.warnings.append(warning)

        issues = filter_issues(query.expression, collection)
        count = str(len(issues))
        if self.org and self.repo:
            url = build_query_url(self.org, self.repo, query.expression)
            if url is not None:
                count = f'<a href="{escape(url)}">{count}</a>'

        return "\n".join(
            [
                f"<h2>Query: {escape(query.name)}</h2>",
                f"<p>{escape(format_query(query.expression))}</p>",
                f"Count: {count}<br/>",
                issue_table(issues),
            ]
        )

    def render(self, collection: IssueCollection) -> str:
        """Render the full HTML page for a collection."""
        self.warnings = []
        sections = [self._section(query, collection) for query in self.queries]
        return "\n".join(
            ["<html>", "<head>", PAGE_STYLE, "</head>", "<body>", *sections, "</body></html>"]
        )

    def write(self, collection: IssueCollection, output_path: str | Path) -> Path:
        """Render the report and write it to ``output_path``."""
        output_path = Path(output_path)
        output_path.write_text(self.render(collection), encoding="utf-8")
        logger.info("Wrote query report to %s", output_path)
        return output_path
