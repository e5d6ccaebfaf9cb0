"""Alerts on query result changes between two snapshots."""

import logging
from dataclasses import dataclass
from html import escape

from rich.console import Console
from rich.markup import escape as escape_markup

from ..config.models import Alert
from ..github_client.models import GitHubIssue
from ..github_client.search import build_query_url
from ..notify.mailer import Mailer
from ..query.collection import IssueCollection
from ..query.expressions import ValidationWarning, filter_issues, validate
from .html import PAGE_STYLE, issue_table

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class AlertDiff:
    """Issues that entered or left an alert's result set."""

    alert: Alert
    only_start: list[GitHubIssue]
    only_end: list[GitHubIssue]
    warnings: list[ValidationWarning]

    @property
    def has_changes(self) -> bool:
        return bool(self.only_start or self.only_end)


def diff_alert(
    alert: Alert, start: IssueCollection, end: IssueCollection
) -> AlertDiff:
    """Compare an alert's result sets in two snapshots.

    The query is validated against the end snapshot. Issues are matched by
    number, so an issue edited between snapshots but still matching does
    not count as a change.

    Args:
        alert: Alert to evaluate
        start: Older snapshot
        end: Newer snapshot

    Returns:
        AlertDiff with issues only matched at start and only matched at end
    """
    warnings = validate(alert.query, end)
    start_issues = filter_issues(alert.query, start)
    end_issues = filter_issues(alert.query, end)

    start_numbers = {issue.number for issue in start_issues}
    end_numbers = {issue.number for issue in end_issues}

    return AlertDiff(
        alert=alert,
        only_start=[i for i in start_issues if i.number not in end_numbers],
        only_end=[i for i in end_issues if i.number not in start_numbers],
        warnings=warnings,
    )


def render_alert_email(
    diff: AlertDiff, org: str | None = None, repo: str | None = None
) -> tuple[str, str]:
    """Return (subject, html_body) for an alert notification email."""
    alert = diff.alert
    subject = f"[gh-report] Alert: {alert.name}"

    parts = [
        "<html>",
        "<head>",
        PAGE_STYLE,
        "</head>",
        "<body>",
        f"<h2>Alert: {escape(alert.name)}</h2>",
        f"<p>Query: <code>{escape(alert.query_text)}</code></p>",
    ]
    if org and repo:
        url = build_query_url(org, repo, alert.query)
        if url is not None:
            parts.append(f'<p><a href="{escape(url)}">View current results on GitHub</a></p>')

    if diff.only_end:
        parts.append(f"<h3>New issues matching the query ({len(diff.only_end)})</h3>")
        parts.append(issue_table(diff.only_end))
    if diff.only_start:
        parts.append(
            f"<h3>Issues no longer matching the query ({len(diff.only_start)})</h3>"
        )
        parts.append(issue_table(diff.only_start))

    parts.append("</body></html>")
    return subject, "\n".join(parts)


class AlertsReport:
    """Evaluates every alert against two snapshots and notifies owners."""

    def __init__(
        self,
        alerts: list[Alert],
        start: IssueCollection,
        end: IssueCollection,
        org: str | None = None,
        repo: str | None = None,
    ):
        self.alerts = alerts
        self.start = start
        self.end = end
        self.org = org
        self.repo = repo

    def diffs(self) -> list[AlertDiff]:
        result = []
        for alert in self.alerts:
            diff = diff_alert(alert, self.start, self.end)
            for warning in diff.warnings:
                logger.warning("Alert '%s': %s", alert.name, warning)
            result.append(diff)
        return result

    def print_summary(self, diffs: list[AlertDiff]) -> None:
        """Print owners, cc and changed issues of every alert."""
        for diff in diffs:
            alert = diff.alert
            console.print(f"[bold]Alert {escape_markup(alert.name)}[/bold]")
            console.print("    Owners:")
            for user in alert.owners:
                console.print(f"        {user.name} - {user.email_address}")
            console.print("    CC:")
            for user in alert.ccs:
                console.print(f"        {user.name} - {user.email_address}")
            for warning in diff.warnings:
                console.print(f"  [yellow]WARNING: {escape_markup(str(warning))}[/yellow]")
            if diff.only_start:
                console.print("  only start:")
                for issue in diff.only_start:
                    console.print(f"    #{issue.number} - {escape_markup(issue.title)}")
            if diff.only_end:
                console.print("  only end:")
                for issue in diff.only_end:
                    console.print(f"    #{issue.number} - {escape_markup(issue.title)}")

    def send_emails(self, diffs: list[AlertDiff], mailer: Mailer) -> list[str]:
        """Email owners (To) and ccs (Cc) of every alert that changed.

        Returns:
            Names of alerts whose email could not be sent
        """
        failed = []
        for diff in diffs:
            if not diff.has_changes:
                logger.info("Alert '%s' unchanged, no email sent", diff.alert.name)
                continue
            subject, body = render_alert_email(diff, self.org, self.repo)
            try:
                mailer.send(
                    to=[user.email_address for user in diff.alert.owners],
                    cc=[user.email_address for user in diff.alert.ccs],
                    subject=subject,
                    html_body=body,
                )
                console.print(f"📧 Sent alert '{escape_markup(diff.alert.name)}'")
            except OSError as e:
                logger.error("Failed to send alert '%s': %s", diff.alert.name, e)
                console.print(f"❌ Failed to send alert '{escape_markup(diff.alert.name)}': {e}")
                failed.append(diff.alert.name)
        return failed
