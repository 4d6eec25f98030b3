# SPDX-License-Identifier: MIT
"""Tests for the prepare and clean commands."""

from __future__ import annotations

import shutil
from pathlib import Path

from click.testing import CliRunner

from yunos_cli.main import cli


class TestPrepareCommand:
    """Tests for cordova-yunos prepare."""

    def test_prepare_succeeds(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        """Test that prepare reports the prepared package."""
        result = cli_runner.invoke(cli, ["-C", str(yunos_project), "prepare"])

        assert result.exit_code == 0
        assert "Prepared com.example.hello 1.2.3 for YunOS" in result.output
        assert (yunos_project / "platforms" / "yunos" / "www" / "index.html").exists()

    def test_prepare_verbose_output(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        """Test that verbose mode shows locations and pipeline steps."""
        result = cli_runner.invoke(cli, ["-v", "-C", str(yunos_project), "prepare"])

        assert result.exit_code == 0
        assert "Project:" in result.output
        assert "Platform:" in result.output
        assert "Merging project's config.xml" in result.output

    def test_prepare_quiet_by_default(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        result = cli_runner.invoke(cli, ["-C", str(yunos_project), "prepare"])

        assert result.exit_code == 0
        assert "Merging project's config.xml" not in result.output

    def test_prepare_no_project(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        """Test prepare fails gracefully outside a project."""
        result = cli_runner.invoke(cli, ["-C", str(tmp_path), "prepare"])

        assert result.exit_code == 1
        assert "Could not find project root" in result.output

    def test_prepare_missing_platform(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        shutil.rmtree(yunos_project / "platforms" / "yunos")

        result = cli_runner.invoke(cli, ["-C", str(yunos_project), "prepare"])

        assert result.exit_code == 1
        assert "YunOS platform not found" in result.output

    def test_prepare_broken_manifest(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        (yunos_project / "platforms" / "yunos" / "manifest.json").write_text("{broken")

        result = cli_runner.invoke(cli, ["-C", str(yunos_project), "prepare"])

        assert result.exit_code == 1
        assert "Prepare failed" in result.output
        assert "Invalid JSON" in result.output

    def test_prepare_custom_platform_dir(
        self, cli_runner: CliRunner, yunos_project: Path
    ) -> None:
        """Test that yunos.toml can relocate the platform project."""
        (yunos_project / "build").mkdir()
        shutil.move(
            str(yunos_project / "platforms" / "yunos"),
            str(yunos_project / "build" / "yunos"),
        )
        (yunos_project / "yunos.toml").write_text('[yunos]\nplatform_dir = "build/yunos"\n')

        result = cli_runner.invoke(cli, ["-C", str(yunos_project), "prepare"])

        assert result.exit_code == 0
        assert (yunos_project / "build" / "yunos" / "www" / "cordova.js").exists()

    def test_prepare_from_subdirectory(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        result = cli_runner.invoke(cli, ["-C", str(yunos_project / "www" / "js"), "prepare"])

        assert result.exit_code == 0


class TestCleanCommand:
    """Tests for cordova-yunos clean."""

    def test_clean_after_prepare(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        cli_runner.invoke(cli, ["-C", str(yunos_project), "prepare"])

        result = cli_runner.invoke(cli, ["-C", str(yunos_project), "clean"])

        assert result.exit_code == 0
        assert "Cleaned YunOS project" in result.output
        www = yunos_project / "platforms" / "yunos" / "www"
        assert list(www.iterdir()) == []

    def test_clean_before_prepare(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        result = cli_runner.invoke(cli, ["-C", str(yunos_project), "clean"])

        assert result.exit_code == 0
        assert "Nothing to clean" in result.output

    def test_clean_no_prepare(self, cli_runner: CliRunner, yunos_project: Path) -> None:
        cli_runner.invoke(cli, ["-C", str(yunos_project), "prepare"])

        result = cli_runner.invoke(cli, ["-C", str(yunos_project), "clean", "--no-prepare"])

        assert result.exit_code == 0
        assert "Nothing to clean" in result.output
        assert (yunos_project / "platforms" / "yunos" / "www" / "index.html").exists()

    def test_clean_no_project(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["-C", str(tmp_path), "clean"])

        assert result.exit_code == 1
