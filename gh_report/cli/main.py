"""Main CLI entry point."""

import logging

import typer
from dotenv import load_dotenv
from rich.console import Console

from .alerts import alerts
from .cache import cache
from .query import query, report

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="gh-report",
    help="GitHub issue snapshots, query reports and alerts",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """GitHub issue snapshots, query reports and alerts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


app.command(name="cache", context_settings={"help_option_names": ["-h", "--help"]})(
    cache
)
app.command(name="query", context_settings={"help_option_names": ["-h", "--help"]})(
    query
)
app.command(name="report", context_settings={"help_option_names": ["-h", "--help"]})(
    report
)
app.command(name="alerts", context_settings={"help_option_names": ["-h", "--help"]})(
    alerts
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_report import __version__

    console.print(f"GitHub Report v{__version__}")


if __name__ == "__main__":
    app()
