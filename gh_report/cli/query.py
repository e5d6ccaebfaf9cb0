"""CLI commands for running queries against a snapshot."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config.loader import load_named_queries
from ..config.models import ConfigError
from ..github_client.search import build_query_url
from ..query.expressions import filter_issues, format_query, validate
from ..query.parser import QueryParseError, parse_query
from ..reports.query_report import QueryReport
from .loading import load_snapshot_or_exit
from .options import KIND_OPTION

console = Console()
logger = logging.getLogger(__name__)


def query(
    snapshot_file: Path = typer.Argument(..., help="Snapshot JSON file"),
    query_text: str = typer.Argument(..., help="Query, e.g. 'label:bug is:open'"),
    kind: str = KIND_OPTION,
) -> None:
    """Run one query against a snapshot and list the matching issues.

    Examples:
        gh-report query data/snapshots/Issues_2024-01-01@10-00.json "label:bug is:open"
        gh-report query snap.json "(label:bug OR label:regression) NOT milestone:Future"
    """
    snapshot, collection = load_snapshot_or_exit(snapshot_file, kind)

    try:
        expression = parse_query(query_text)
    except QueryParseError as e:
        console.print(
            f"❌ Invalid query: {escape(e.message)} "
            f"(line {e.line_number}, column {e.column + 1})"
        )
        console.print(f"   {escape(e.line)}")
        console.print(f"   {' ' * e.column}^")
        raise typer.Exit(1)

    for warning in validate(expression, collection):
        logger.warning("%s", warning)
        console.print(f"[yellow]WARNING: {escape(str(warning))}[/yellow]")

    issues = filter_issues(expression, collection)

    table = Table(title=escape(format_query(expression)))
    table.add_column("Issue #", style="cyan")
    table.add_column("Title")
    table.add_column("Assigned To", style="green")
    table.add_column("Milestone", style="magenta")
    for issue in issues:
        table.add_row(
            f"#{issue.number}",
            escape(issue.title),
            f"@{issue.assignee_login}" if issue.assignee_login else "",
            escape(issue.milestone_title or ""),
        )
    console.print(table)
    console.print(f"Count: {len(issues)}")

    url = build_query_url(snapshot.org, snapshot.repo, expression)
    if url is not None:
        console.print(f"View on GitHub: {url}")
    else:
        console.print("[dim]Query cannot be expressed as a GitHub search[/dim]")


def report(
    snapshot_file: Path = typer.Argument(..., help="Snapshot JSON file"),
    queries_file: Path = typer.Argument(..., help="XML file with named queries"),
    output_file: Path = typer.Argument(..., help="HTML file to write"),
    kind: str = KIND_OPTION,
) -> None:
    """Write an HTML report with one section per named query.

    Examples:
        gh-report report snap.json queries.xml report.html
    """
    snapshot, collection = load_snapshot_or_exit(snapshot_file, kind)

    try:
        queries = load_named_queries(queries_file)
    except ConfigError as e:
        console.print(f"❌ Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1)

    query_report = QueryReport(queries, org=snapshot.org, repo=snapshot.repo)
    path = query_report.write(collection, output_file)

    for warning in query_report.warnings:
        console.print(f"[yellow]WARNING: {escape(str(warning))}[/yellow]")
    console.print(f"✅ Wrote {len(queries)} queries to {path}")
