"""GitHub issue snapshots, query reports and alerts."""

__version__ = "0.1.0"
