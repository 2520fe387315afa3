"""Docker CLI integration: build, tag, push and login."""

import shutil
from pathlib import Path

from ..constants import DOCKER_BUILD_TIMEOUT, DOCKER_PUSH_TIMEOUT, DOCKER_QUERY_TIMEOUT
from .runner import CommandError, CommandResult, CommandRunner

IMAGE_TABLE_FORMAT = "table {{.Repository}}\t{{.Tag}}\t{{.Size}}\t{{.CreatedAt}}"


def build_args(
    exec_path: str,
    image_uri: str,
    dockerfile: Path,
    context: Path,
    platform: str,
    build_arguments: dict[str, str],
    no_cache: bool = False,
) -> list[str]:
    """Build the ``docker build`` command line."""
    args = [exec_path, "build"]
    if no_cache:
        args.append("--no-cache")
    args.extend(["--platform", platform])
    for key, value in build_arguments.items():
        args.extend(["--build-arg", f"{key}={value}"])
    args.extend(["-t", image_uri, "-f", str(dockerfile), str(context)])
    return args


class DockerClient:
    """Thin wrapper over the docker CLI.

    Build, push and login inherit the terminal so the operator sees
    progress and can answer the login prompt.
    """

    def __init__(self, runner: CommandRunner, exec_path: str = "docker") -> None:
        self.runner = runner
        self.exec_path = exec_path

    def is_installed(self) -> bool:
        return shutil.which(self.exec_path) is not None

    def daemon_running(self) -> bool:
        try:
            result = self.runner.run(
                [self.exec_path, "info"], timeout=DOCKER_QUERY_TIMEOUT, mutating=False
            )
        except CommandError:
            return False
        return result.ok

    def build(
        self,
        image_uri: str,
        dockerfile: Path,
        context: Path,
        platform: str,
        build_arguments: dict[str, str],
        no_cache: bool = False,
    ) -> CommandResult:
        args = build_args(
            self.exec_path, image_uri, dockerfile, context, platform, build_arguments, no_cache
        )
        return self.runner.run(args, timeout=DOCKER_BUILD_TIMEOUT, capture=False)

    def tag(self, source: str, target: str) -> CommandResult:
        return self.runner.run(
            [self.exec_path, "tag", source, target], timeout=DOCKER_QUERY_TIMEOUT
        )

    def push(self, image_uri: str) -> CommandResult:
        return self.runner.run(
            [self.exec_path, "push", image_uri], timeout=DOCKER_PUSH_TIMEOUT, capture=False
        )

    def login(self, registry: str) -> CommandResult:
        return self.runner.run([self.exec_path, "login", registry], capture=False)

    def images(self, repository: str) -> str:
        """Return the image table for a repository, or "" if unavailable."""
        try:
            result = self.runner.run(
                [self.exec_path, "images", repository, "--format", IMAGE_TABLE_FORMAT],
                timeout=DOCKER_QUERY_TIMEOUT,
                mutating=False,
            )
        except CommandError:
            return ""
        return result.stdout.strip() if result.ok else ""
