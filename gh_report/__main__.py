"""Allow ``python -m gh_report``."""

from .cli.main import app

app()
