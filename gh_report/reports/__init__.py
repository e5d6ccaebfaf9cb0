"""HTML query reports and snapshot alerts."""

from .alerts import AlertDiff, AlertsReport, diff_alert, render_alert_email
from .query_report import QueryReport

__all__ = [
    "AlertDiff",
    "AlertsReport",
    "QueryReport",
    "diff_alert",
    "render_alert_email",
]
