"""Shared HTML fragments for reports and emails."""

from collections.abc import Iterable
from html import escape

from ..github_client.models import GitHubIssue

PAGE_STYLE = """\
<style>
    table { border: 1px solid black; }
    table td, table th { border: 1px solid black; padding: 2px 6px; }
    div.labels { color: #808080; font-style: italic; margin-left: 1cm; }
</style>"""


def issue_link(issue: GitHubIssue) -> str:
    return f'<a href="{escape(issue.html_url)}">#{issue.number}</a>'


def assignee_cell(issue: GitHubIssue) -> str:
    if issue.assignee is None:
        return "&nbsp;"
    login = escape(issue.assignee.login)
    if issue.assignee.html_url:
        return f'<a href="{escape(issue.assignee.html_url)}">@{login}</a>'
    return f"@{login}"


def issue_table(issues: Iterable[GitHubIssue]) -> str:
    """Render issues as a table of number, title, assignee and milestone."""
    rows = [
        '<table border="1">',
        "  <tr>",
        "    <th>Issue #</th>",
        "    <th>Title</th>",
        "    <th>Assigned To</th>",
        "    <th>Milestone</th>",
        "  </tr>",
    ]
    for issue in issues:
        rows.append("  <tr>")
        rows.append(f"    <td>{issue_link(issue)}</td>")
        rows.append("    <td>")
        rows.append(f"      {escape(issue.title)}")
        if issue.labels:
            labels = ", ".join(escape(label.name) for label in issue.labels)
            rows.append(f'      <br/><div class="labels">Labels: {labels}</div>')
        rows.append("    </td>")
        rows.append(f"    <td>{assignee_cell(issue)}</td>")
        rows.append(f"    <td>{escape(issue.milestone_title or '')}</td>")
        rows.append("  </tr>")
    rows.append("</table>")
    return "\n".join(rows)
