"""Storage manager for issue snapshots."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

from rich.console import Console

from .. import __version__
from ..github_client.models import GitHubIssue, IssueSnapshot
from ..query.collection import IssueCollection

console = Console()

IssueKind = Literal["all", "issue", "pr"]

SNAPSHOT_PATTERN = "Issues_*.json"


class StorageManager:
    """Manages issue snapshots stored as JSON files."""

    def __init__(self, base_path: str | Path = "data/snapshots"):
        """Initialize storage manager.

        Args:
            base_path: Base directory for storing snapshot files
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _generate_filename(self, timestamp: datetime) -> str:
        """Generate filename for a snapshot.

        Args:
            timestamp: Capture time of the snapshot

        Returns:
            Filename string, e.g. ``Issues_2016-09-07@16-55.json``
        """
        return f"Issues_{timestamp:%Y-%m-%d@%H-%M}.json"

    def save_snapshot(
        self,
        org: str,
        repo: str,
        issues: list[GitHubIssue],
        timestamp: datetime | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Path:
        """Save all issues of a repository to one snapshot file.

        Args:
            org: Organization name
            repo: Repository name
            issues: Issues to store
            timestamp: Capture time, defaults to now
            metadata: Additional metadata to include

        Returns:
            Path to the saved file
        """
        timestamp = timestamp or datetime.now()
        metadata = dict(metadata or {})
        metadata.update(
            {
                "collection_timestamp": timestamp.isoformat(),
                "tool_version": __version__,
                "issue_count": len(issues),
            }
        )

        snapshot = IssueSnapshot(org=org, repo=repo, issues=issues, metadata=metadata)
        file_path = self.base_path / self._generate_filename(timestamp)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(snapshot.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

        console.print(f"Saved {len(issues)} issues to {file_path}")
        return file_path

    def list_snapshots(self) -> list[Path]:
        """List snapshot files, oldest first.

        Returns:
            Snapshot paths sorted by their timestamped names
        """
        return sorted(self.base_path.glob(SNAPSHOT_PATTERN))

    def get_storage_stats(self) -> dict[str, Any]:
        """Get statistics about stored snapshots.

        Returns:
            Dictionary with storage statistics
        """
        snapshots = self.list_snapshots()
        total_size = sum(f.stat().st_size for f in snapshots)

        return {
            "total_snapshots": len(snapshots),
            "latest": snapshots[-1].name if snapshots else None,
            "total_size_bytes": total_size,
            "total_size_mb": round(total_size / (1024 * 1024), 2),
            "storage_path": str(self.base_path.absolute()),
        }


def load_snapshot(path: str | Path) -> IssueSnapshot:
    """Load a snapshot file.

    Args:
        path: Path to a snapshot JSON file

    Returns:
        The parsed snapshot

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file is not a valid snapshot
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return IssueSnapshot.model_validate(data)


def select_kind(issues: list[GitHubIssue], kind: str) -> list[GitHubIssue]:
    """Keep only issues ("issue"), only pull requests ("pr"), or both ("all")."""
    if kind == "issue":
        return [issue for issue in issues if issue.is_issue_or_comment]
    if kind == "pr":
        return [issue for issue in issues if not issue.is_issue_or_comment]
    return list(issues)


def load_collection(path: str | Path, kind: IssueKind = "all") -> IssueCollection:
    """Load a snapshot file as an issue collection.

    Args:
        path: Path to a snapshot JSON file
        kind: Keep only issues ("issue"), only pull requests ("pr"), or both

    Returns:
        IssueCollection built from the snapshot's issues
    """
    return IssueCollection(select_kind(load_snapshot(path).issues, kind))
