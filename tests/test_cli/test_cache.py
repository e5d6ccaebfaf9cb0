"""Tests for the cache command."""

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from gh_report.cli.main import app
from gh_report.github_client.models import GitHubIssue
from gh_report.storage.manager import load_snapshot

runner = CliRunner()


class TestCacheCommand:
    """Test the cache command."""

    @patch("gh_report.cli.cache.GitHubClient")
    def test_cache_writes_snapshot(
        self, mock_client_class, tmp_path: Path, sample_issues: list[GitHubIssue]
    ) -> None:
        """Test issues are fetched and saved to the data directory."""
        mock_client_class.return_value.get_all_issues.return_value = sample_issues

        result = runner.invoke(
            app,
            ["cache", "-o", "testorg", "-r", "testrepo", "--data-dir", str(tmp_path)],
        )

        assert result.exit_code == 0
        mock_client_class.return_value.get_all_issues.assert_called_once_with(
            "testorg", "testrepo", state="all"
        )
        files = list(tmp_path.glob("Issues_*.json"))
        assert len(files) == 1
        snapshot = load_snapshot(files[0])
        assert snapshot.org == "testorg"
        assert [issue.number for issue in snapshot.issues] == [1, 2, 3, 4, 5]
        assert "Snapshot Storage" in result.stdout

    @patch("gh_report.cli.cache.GitHubClient")
    def test_cache_client_error(self, mock_client_class, tmp_path: Path) -> None:
        """Test a client error exits with code 1 and writes nothing."""
        mock_client_class.side_effect = ValueError("GitHub token is required")

        result = runner.invoke(
            app,
            ["cache", "-o", "testorg", "-r", "testrepo", "--data-dir", str(tmp_path)],
        )

        assert result.exit_code == 1
        assert "GitHub token is required" in result.stdout
        assert list(tmp_path.glob("Issues_*.json")) == []

    def test_cache_invalid_state(self, tmp_path: Path) -> None:
        """Test an unknown state is rejected."""
        result = runner.invoke(
            app,
            ["cache", "-o", "a", "-r", "b", "-s", "merged", "--data-dir", str(tmp_path)],
        )
        assert result.exit_code == 1
        assert "invalid state" in result.stdout
