"""CLI integration tests for controlr-release."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from controlr_release.cli import app
from controlr_release.services import ToolCheck


class TestVersionCommand:
    """Tests for --version flag."""

    def test_version_shows_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "controlr-release" in result.stdout
        assert "0.1.0" in result.stdout

    def test_version_short_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "controlr-release" in result.stdout


class TestHelpCommand:
    def test_help_shows_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("agents", "image", "release", "quick", "doctor", "init"):
            assert command in result.stdout

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "Usage:" in result.output

    def test_missing_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.toml"), "agents"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestAgentsCommand:
    """Tests for the agents command."""

    def test_invalid_version(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "agents", "--version", "v1.0"])
        assert result.exit_code == 1
        assert "Invalid version format: v1.0" in result.output

    def test_unknown_platform(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app, ["--config", str(config_file), "agents", "-v", "1.0.0", "-p", "linux-arm64"]
        )
        assert result.exit_code == 1
        assert "Unknown platform: linux-arm64" in result.output

    def test_missing_dotnet_fails(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app, ["--config", str(config_file), "agents", "-v", "1.0.0", "-p", "linux-x64"]
        )
        assert result.exit_code == 1
        assert "Failed to build DesktopClient" in result.output
        assert "linux-x64" in result.output

    def test_dry_run(self, runner: CliRunner, config_file: Path, project_root: Path) -> None:
        result = runner.invoke(
            app,
            ["--config", str(config_file), "--dry-run", "agents", "-v", "1.2.3", "-p", "win-x64"],
        )
        assert result.exit_code == 0
        assert "Build completed successfully!" in result.output
        assert not (project_root / "ControlR.Web.Server" / "wwwroot").exists()

    def test_json_output(self, runner: CliRunner, config_file: Path, project_root: Path) -> None:
        result = runner.invoke(
            app,
            [
                "--json",
                "-q",
                "--config",
                str(config_file),
                "--dry-run",
                "agents",
                "-v",
                "1.2.3",
                "-p",
                "linux-x64",
            ],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "succeeded"
        assert data["version"] == "1.2.3"
        assert [a["runtime_id"] for a in data["artifacts"]] == ["linux-x64"]
        assert data["artifacts"][0]["executable"].endswith("linux-x64/agent")

    def test_json_output_is_one_document(
        self,
        runner: CliRunner,
        config_file: Path,
        project_root: Path,
        make_runner: Callable,
        fake_dotnet: Callable,
    ) -> None:
        args = ["--json", "-q", "--config", str(config_file), "agents", "-p", "linux-x64"]
        fake = make_runner(handler=fake_dotnet)
        with patch("controlr_release.core.pipeline.CommandRunner", return_value=fake):
            result = runner.invoke(app, args)
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "succeeded"
        downloads = project_root / "ControlR.Web.Server" / "wwwroot" / "downloads"
        assert (downloads / "linux-x64" / "agent").is_file()


class TestImageCommand:
    """Tests for the image command."""

    def test_no_terminal_cancels_build(self, runner: CliRunner, config_file: Path) -> None:
        """Without --yes and without a terminal the build stops cleanly."""
        result = runner.invoke(
            app, ["--config", str(config_file), "--dry-run", "image", "--tag", "v1.0.0"]
        )
        assert result.exit_code == 0
        assert result.output.count("Build cancelled") == 1

    def test_unauthenticated_non_interactive(
        self, runner: CliRunner, config_file: Path, docker_config_dir: Path
    ) -> None:
        result = runner.invoke(
            app,
            ["--config", str(config_file), "--dry-run", "image", "--tag", "1.0.0", "--yes"],
            env={"DOCKER_CONFIG": str(docker_config_dir)},
        )
        assert result.exit_code == 1
        assert "Cannot login in non-interactive mode" in result.output
        assert "docker login registry.example.com" in result.output

    def test_no_push(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app,
            ["--config", str(config_file), "--dry-run", "image", "--yes", "--no-push"],
        )
        assert result.exit_code == 0
        assert "Build completed successfully!" in result.output

    def test_json_no_push_is_one_document(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app,
            ["--json", "-q", "--config", str(config_file), "--dry-run", "image", "--yes", "--no-push"],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "succeeded"
        assert data["pushed"] == []

    def test_skip_login_pushes(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app,
            ["--config", str(config_file), "--dry-run", "image", "--yes", "--skip-login"],
        )
        assert result.exit_code == 0
        assert "Build and push completed successfully!" in result.output

    def test_docker_missing(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "image", "--yes"])
        assert result.exit_code == 1
        assert "Docker is not installed" in result.output

    def test_json_cancelled(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app, ["--json", "-q", "--config", str(config_file), "--dry-run", "image"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "cancelled"
        assert data["stage"] == "confirm-build"


class TestReleaseCommand:
    def test_invalid_version(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "release", "-v", "latest"])
        assert result.exit_code == 1
        assert "Invalid version format" in result.output

    def test_dry_run_release(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app,
            ["--config", str(config_file), "--dry-run", "release", "-v", "1.0.0", "--yes", "--no-push"],
        )
        assert result.exit_code == 0
        assert "Complete build and deploy finished!" in result.output


class TestQuickCommand:
    def test_tag_outside_git_repository(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app, ["--config", str(config_file), "--dry-run", "quick", "--yes", "--no-push"]
        )
        assert result.exit_code == 0
        assert "1.0.0-dev" in result.output


class TestInitCommand:
    """Tests for the init command."""

    def test_creates_config(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_path / "controlr-release.toml").is_file()

    def test_existing_config_is_kept(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "controlr-release.toml").write_text("# mine\n")
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert "already exists" in result.output
        assert (tmp_path / "controlr-release.toml").read_text() == "# mine\n"

    def test_dry_run_writes_nothing(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["--dry-run", "init"])
        assert result.exit_code == 0
        assert not (tmp_path / "controlr-release.toml").exists()


class TestDoctorCommand:
    """Tests for the doctor command."""

    def test_all_checks_pass(self, runner: CliRunner, config_file: Path) -> None:
        checks = [ToolCheck(name=".NET SDK", ok=True, version="10.0.100", message="found")]
        with patch("controlr_release.commands.doctor.run_toolchain_checks", return_value=checks):
            result = runner.invoke(app, ["--config", str(config_file), "doctor"])
        assert result.exit_code == 0
        assert "All required checks passed" in result.output

    def test_blocking_failure(self, runner: CliRunner, config_file: Path) -> None:
        checks = [
            ToolCheck(name="Docker", ok=False, message="Docker is not installed"),
            ToolCheck(name="Git", ok=False, required=False, message="Git not found"),
        ]
        with patch("controlr_release.commands.doctor.run_toolchain_checks", return_value=checks):
            result = runner.invoke(app, ["--config", str(config_file), "doctor"])
        assert result.exit_code == 1
        assert "Some required checks failed" in result.output

    def test_optional_failure_does_not_block(self, runner: CliRunner, config_file: Path) -> None:
        checks = [ToolCheck(name="Git", ok=False, required=False, message="Git not found")]
        with patch("controlr_release.commands.doctor.run_toolchain_checks", return_value=checks):
            result = runner.invoke(app, ["--json", "--config", str(config_file), "doctor"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["checks"][0]["name"] == "Git"
