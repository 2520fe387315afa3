"""External tool integrations for controlr-release.

This package provides interfaces to external tools and state:
- runner: Blocking subprocess execution with dry-run support
- dotnet: dotnet publish for the desktop client and agent
- archive: Bundle archiving (zip, ditto)
- docker: docker build/tag/push/login
- credentials: Docker credential store inspection
- git: Tag and commit queries
- toolchain: Host toolchain verification
"""

from .archive import ArchiveError, ditto_directory, zip_directory
from .credentials import docker_config_path, has_credentials, registry_host
from .docker import DockerClient, build_args
from .dotnet import DotnetClient, agent_publish_args, desktop_publish_args
from .git import GitError, get_latest_tag, get_short_sha, run_git
from .runner import CommandError, CommandResult, CommandRunner
from .toolchain import ToolCheck, run_toolchain_checks

__all__ = [
    "ArchiveError",
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "DockerClient",
    "DotnetClient",
    "GitError",
    "ToolCheck",
    "agent_publish_args",
    "build_args",
    "desktop_publish_args",
    "ditto_directory",
    "docker_config_path",
    "get_latest_tag",
    "get_short_sha",
    "has_credentials",
    "registry_host",
    "run_git",
    "run_toolchain_checks",
    "zip_directory",
]
