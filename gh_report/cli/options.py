"""Standardized CLI option definitions for consistent shorthand mappings."""

import typer

ORG_OPTION = typer.Option(..., "--org", "-o", help="GitHub organization name")

REPO_OPTION = typer.Option(..., "--repo", "-r", help="GitHub repository name")

STATE_OPTION = typer.Option(
    "all", "--state", "-s", help="Issue state: open, closed, or all"
)

TOKEN_OPTION = typer.Option(
    None, "--token", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

DATA_DIR_OPTION = typer.Option(
    "data/snapshots", "--data-dir", help="Directory holding snapshot files"
)

KIND_OPTION = typer.Option(
    "all", "--kind", "-k", help="Entries to load: issue, pr, or all"
)

DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="Print alert changes without sending email"
)
