"""Shared test fixtures for controlr-release tests."""

import io
import os
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from controlr_release.config import ProjectConfig, ReleaseConfig
from controlr_release.output import OutputContext
from controlr_release.services import CommandResult, CommandRunner, DockerClient

Handler = Callable[[list[str]], int | CommandResult]


class FakeRunner(CommandRunner):
    """CommandRunner that hands commands to a handler instead of spawning them.

    Commands skipped by dry-run are not recorded; ``calls`` holds only the
    commands that would really have executed.
    """

    def __init__(self, handler: Handler | None = None, dry_run: bool = False) -> None:
        super().__init__(dry_run=dry_run)
        self.handler = handler
        self.calls: list[list[str]] = []

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        timeout: int | None = None,
        capture: bool = True,
        mutating: bool = True,
    ) -> CommandResult:
        if self.dry_run and mutating:
            return CommandResult(args=args, returncode=0)
        self.calls.append(list(args))
        outcome = self.handler(args) if self.handler else 0
        if isinstance(outcome, CommandResult):
            return outcome
        return CommandResult(args=args, returncode=outcome)

    def commands(self, tool: str, subcommand: str | None = None) -> list[list[str]]:
        """Recorded calls of one tool, optionally filtered by subcommand."""
        return [
            c
            for c in self.calls
            if Path(c[0]).name == tool and (subcommand is None or c[1] == subcommand)
        ]


class FakeDotnet:
    """Stands in for ``dotnet publish`` by writing the files it would produce."""

    def __init__(self) -> None:
        self.fail_desktop: set[str] = set()
        self.fail_agent: set[str] = set()
        self.missing_executable: set[str] = set()
        self.agent_name = "agent"

    def __call__(self, args: list[str]) -> int:
        if args[1] != "publish":
            return 0
        rid = args[args.index("-r") + 1]
        output = Path(args[args.index("-o") + 1])
        if "-p:PublishSingleFile=true" in args:
            if rid in self.fail_agent:
                return 1
            if rid not in self.missing_executable:
                output.mkdir(parents=True, exist_ok=True)
                suffix = ".exe" if rid.startswith("win-") else ""
                (output / f"{self.agent_name}{suffix}").write_bytes(b"agent")
            return 0
        if rid in self.fail_desktop:
            return 1
        (output / "lib").mkdir(parents=True, exist_ok=True)
        (output / "ControlR.DesktopClient").write_bytes(rid.encode())
        (output / "lib" / "runtime.dll").write_bytes(b"dll")
        return 0


class FakeDocker:
    """Stands in for the docker CLI with configurable exit codes."""

    def __init__(self) -> None:
        self.build_code = 0
        self.tag_code = 0
        self.login_code = 0
        self.info_code = 0
        self.failing_pushes: set[str] = set()
        self.images_table = ""

    def __call__(self, args: list[str]) -> int | CommandResult:
        subcommand = args[1]
        if subcommand == "build":
            return self.build_code
        if subcommand == "tag":
            return self.tag_code
        if subcommand == "login":
            return self.login_code
        if subcommand == "info":
            return self.info_code
        if subcommand == "push":
            return 1 if args[2] in self.failing_pushes else 0
        if subcommand == "images":
            return CommandResult(args=args, returncode=0, stdout=self.images_table)
        return 0


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_dotnet() -> FakeDotnet:
    return FakeDotnet()


@pytest.fixture
def fake_docker() -> FakeDocker:
    return FakeDocker()


@pytest.fixture
def make_runner(
    fake_dotnet: FakeDotnet, fake_docker: FakeDocker
) -> Callable[..., FakeRunner]:
    """Factory for a FakeRunner dispatching to the fake dotnet, docker and ditto CLIs."""

    def dispatch(args: list[str]) -> int | CommandResult:
        tool = Path(args[0]).name
        if tool == "dotnet":
            return fake_dotnet(args)
        if tool == "docker":
            return fake_docker(args)
        if tool == "ditto":
            Path(args[-1]).write_bytes(b"ditto")
        return 0

    def factory(dry_run: bool = False, handler: Handler | None = None) -> FakeRunner:
        return FakeRunner(handler or dispatch, dry_run=dry_run)

    return factory


@pytest.fixture
def docker_installed(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend the docker executable is on PATH."""
    monkeypatch.setattr(DockerClient, "is_installed", lambda self: True)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Repository skeleton with the server Dockerfile in place."""
    root = tmp_path / "repo"
    dockerfile = root / "ControlR.Web.Server" / "Dockerfile"
    dockerfile.parent.mkdir(parents=True)
    dockerfile.write_text("FROM scratch\n")
    return root


@pytest.fixture
def release_config(project_root: Path) -> ReleaseConfig:
    return ReleaseConfig(project=ProjectConfig(root=project_root, agent_name="agent"))


@pytest.fixture
def config_file(project_root: Path) -> Path:
    """Config file pointing every tool at an executable that does not exist."""
    path = project_root / "controlr-release.toml"
    path.write_text(
        """[project]
root = "."
agent_name = "agent"

[docker]
registry = "registry.example.com"

[toolchain]
dotnet = "nonexistent-dotnet-xyz"
docker = "nonexistent-docker-xyz"
git = "git"
"""
    )
    return path


@pytest.fixture
def ctx() -> OutputContext:
    """Output context writing to an in-memory console."""
    return OutputContext(Console(file=io.StringIO(), width=200))


@pytest.fixture
def docker_config_dir(tmp_path: Path) -> Path:
    """Empty docker config directory (no stored credentials)."""
    path = tmp_path / "docker-config"
    path.mkdir()
    return path


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository with one commit.

    Changes cwd to the repo directory for the duration of the test.
    """
    repo = tmp_path / "git-repo"
    repo.mkdir()
    for args in (
        ["git", "init"],
        ["git", "config", "user.email", "test@test.com"],
        ["git", "config", "user.name", "Test User"],
    ):
        subprocess.run(args, cwd=repo, check=True, capture_output=True)

    (repo / "README.md").write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=repo, check=True, capture_output=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial commit"], cwd=repo, check=True, capture_output=True
    )

    original_cwd = os.getcwd()
    os.chdir(repo)
    try:
        yield repo
    finally:
        os.chdir(original_cwd)
