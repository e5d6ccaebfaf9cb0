"""CLI command for caching GitHub issues to a snapshot file."""

import typer
from rich.console import Console
from rich.table import Table

from ..github_client.client import GitHubClient
from ..storage.manager import StorageManager
from .options import DATA_DIR_OPTION, ORG_OPTION, REPO_OPTION, STATE_OPTION, TOKEN_OPTION

console = Console()


def cache(
    org: str = ORG_OPTION,
    repo: str = REPO_OPTION,
    state: str = STATE_OPTION,
    token: str | None = TOKEN_OPTION,
    data_dir: str = DATA_DIR_OPTION,
) -> None:
    """Download all issues of a repository into a timestamped snapshot.

    Examples:
        gh-report cache --org dotnet --repo corefx
        gh-report cache -o dotnet -r corefx --state open --data-dir snapshots
    """
    if state not in ("open", "closed", "all"):
        console.print(f"❌ Error: invalid state '{state}'")
        raise typer.Exit(1)

    console.print(f"🔍 Caching {state} issues from {org}/{repo}")

    try:
        client = GitHubClient(token=token)
        issues = client.get_all_issues(org, repo, state=state)
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    storage = StorageManager(data_dir)
    path = storage.save_snapshot(org, repo, issues)

    stats = storage.get_storage_stats()
    table = Table(title="Snapshot Storage")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Snapshot", path.name)
    table.add_row("Issues", str(len(issues)))
    table.add_row("Total Snapshots", str(stats["total_snapshots"]))
    table.add_row("Storage Size", f"{stats['total_size_mb']} MB")
    table.add_row("Storage Path", stats["storage_path"])
    console.print(table)
