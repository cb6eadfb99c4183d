"""Tests for CLI interface."""

from unittest.mock import patch

from typer.testing import CliRunner

from macsweep.cli import app
from macsweep.config import CleanerConfig
from macsweep.models import ScanTarget
from macsweep.scanner import aggregate

runner = CliRunner()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "macsweep version" in result.stdout

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert "macsweep version" in result.stdout


class TestHelp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "scan" in result.stdout
        assert "inspect" in result.stdout
        assert "remove" in result.stdout

    def test_remove_help(self):
        result = runner.invoke(app, ["remove", "--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.stdout


class TestScan:
    def test_scan_configured_locations(self, tmp_path):
        (tmp_path / "logs").mkdir()
        (tmp_path / "logs" / "a.log").write_bytes(b"x" * 2500)
        config = CleanerConfig(
            system_locations=[ScanTarget(path=str(tmp_path / "logs"), label="Test Logs")],
            max_workers=2,
        )

        with patch("macsweep.cli.CleanerConfig.default", return_value=config):
            result = runner.invoke(app, ["scan"])

        assert result.exit_code == 0
        assert "Test Logs" in result.stdout
        assert "Total System Data Size" in result.stdout
        assert "2.5 KB" in result.stdout

    def test_scan_nothing_found(self):
        config = CleanerConfig(system_locations=[ScanTarget(path="/nonexistent/macsweep")])

        with patch("macsweep.cli.CleanerConfig.default", return_value=config):
            result = runner.invoke(app, ["scan"])

        assert result.exit_code == 0
        assert "No system data found" in result.stdout

    def test_invalid_workers(self):
        result = runner.invoke(app, ["--workers", "0", "scan"])
        assert result.exit_code != 0


class TestInspect:
    def test_inspect_directory(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "data.bin").write_bytes(b"x" * 100)
        (tmp_path / "notes.txt").write_text("hello")

        result = runner.invoke(app, ["--workers", "2", "inspect", str(tmp_path)])

        assert result.exit_code == 0
        assert "sub" in result.stdout
        assert "notes.txt" in result.stdout
        assert "directory" in result.stdout

    def test_inspect_missing(self, tmp_path):
        result = runner.invoke(app, ["inspect", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "No such file or directory" in result.stdout

    def test_inspect_requires_path(self):
        result = runner.invoke(app, ["inspect"])
        assert result.exit_code != 0


class TestRemove:
    def test_protected_path(self):
        result = runner.invoke(app, ["remove", "/System/Library/Caches", "--yes"])
        assert result.exit_code == 1
        assert "protected" in result.stdout

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["remove", str(tmp_path / "missing"), "--yes"])
        assert result.exit_code == 1
        assert "No such file or directory" in result.stdout

    def test_dry_run_keeps_files(self, tmp_path):
        target = tmp_path / "cache"
        target.mkdir()
        (target / "blob").write_bytes(b"x" * 1500)

        result = runner.invoke(app, ["remove", str(target), "--dry-run"])

        assert result.exit_code == 0
        assert "DRY RUN" in result.stdout
        assert "1.5 KB" in result.stdout
        assert target.exists()

    def test_remove_with_yes(self, tmp_path):
        target = tmp_path / "cache"
        target.mkdir()
        (target / "blob").write_bytes(b"x" * 1500)

        result = runner.invoke(app, ["remove", str(target), "--yes"])

        assert result.exit_code == 0
        assert "Successfully removed" in result.stdout
        assert not target.exists()

    def test_remove_confirmed(self, tmp_path):
        target = tmp_path / "file.log"
        target.write_text("log line")

        result = runner.invoke(app, ["remove", str(target)], input="y\n")

        assert result.exit_code == 0
        assert not target.exists()

    def test_remove_cancelled(self, tmp_path):
        target = tmp_path / "file.log"
        target.write_text("log line")

        result = runner.invoke(app, ["remove", str(target)], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        assert target.exists()

    def test_confirmed_remove_reuses_preview_size(self, tmp_path):
        target = tmp_path / "cache"
        target.mkdir()
        (target / "blob").write_bytes(b"x" * 1500)

        with patch("macsweep.cleaner.aggregate", wraps=aggregate) as mock_aggregate:
            result = runner.invoke(app, ["remove", str(target), "--yes"])

        assert result.exit_code == 0
        assert "1.5 KB" in result.stdout
        mock_aggregate.assert_called_once_with(str(target))
        assert not target.exists()
