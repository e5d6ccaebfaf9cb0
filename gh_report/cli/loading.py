"""Snapshot loading shared by the report commands."""

from pathlib import Path

import typer
from rich.console import Console

from ..github_client.models import IssueSnapshot
from ..query.collection import IssueCollection
from ..storage.manager import load_snapshot, select_kind

console = Console()


def load_snapshot_or_exit(
    path: Path, kind: str = "all"
) -> tuple[IssueSnapshot, IssueCollection]:
    """Load a snapshot and its collection, exiting with code 1 on failure."""
    if kind not in ("issue", "pr", "all"):
        console.print(f"❌ Error: invalid kind '{kind}'")
        raise typer.Exit(1)

    try:
        snapshot = load_snapshot(path)
    except (OSError, ValueError) as e:
        console.print(f"❌ Error loading snapshot {path}: {e}")
        raise typer.Exit(1)

    return snapshot, IssueCollection(select_kind(snapshot.issues, kind))
