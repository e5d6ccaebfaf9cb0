"""CLI command for alerting on query changes between two snapshots."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ..config.loader import load_alerts
from ..config.models import ConfigError
from ..notify.config import MailConfig
from ..notify.mailer import Mailer
from ..reports.alerts import AlertsReport
from .loading import load_snapshot_or_exit
from .options import DRY_RUN_OPTION, KIND_OPTION

console = Console()


def alerts(
    start_file: Path = typer.Argument(..., help="Older snapshot JSON file"),
    end_file: Path = typer.Argument(..., help="Newer snapshot JSON file"),
    alerts_file: Path = typer.Argument(..., help="XML file with users and alerts"),
    dry_run: bool = DRY_RUN_OPTION,
    kind: str = KIND_OPTION,
) -> None:
    """Report alert queries whose results changed and email their owners.

    Examples:
        gh-report alerts Issues_2024-01-01@10-00.json Issues_2024-01-02@10-00.json \\
            alerts.xml --dry-run
    """
    try:
        alert_list = load_alerts(alerts_file)
    except ConfigError as e:
        console.print(f"❌ Invalid configuration: {escape(str(e))}")
        if e.__cause__ is not None:
            console.print(f"   {escape(str(e.__cause__))}")
        raise typer.Exit(1)

    _, start = load_snapshot_or_exit(start_file, kind)
    end_snapshot, end = load_snapshot_or_exit(end_file, kind)

    alerts_report = AlertsReport(
        alert_list, start, end, org=end_snapshot.org, repo=end_snapshot.repo
    )
    diffs = alerts_report.diffs()
    alerts_report.print_summary(diffs)

    changed = sum(1 for diff in diffs if diff.has_changes)
    console.print(f"{changed} of {len(diffs)} alerts changed")
    if dry_run or not changed:
        return

    try:
        mailer = Mailer(MailConfig())
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    failed = alerts_report.send_emails(diffs, mailer)
    if failed:
        raise typer.Exit(1)
