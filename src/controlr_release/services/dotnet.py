"""dotnet publish integration for the desktop client and the agent."""

from pathlib import Path

from ..constants import DOTNET_PUBLISH_TIMEOUT
from ..models import PlatformSpec, Version
from .runner import CommandResult, CommandRunner


def desktop_publish_args(
    exec_path: str,
    project: Path,
    platform: PlatformSpec,
    version: Version,
    output_dir: Path,
    configuration: str = "Release",
) -> list[str]:
    """Build the self-contained desktop client publish command."""
    return [
        exec_path,
        "publish",
        str(project),
        "-c",
        configuration,
        "-r",
        platform.runtime_id,
        "--self-contained",
        "-o",
        f"{output_dir}/",
        f"-p:Version={version.version}",
        f"-p:FileVersion={version.file_version}",
    ]


def agent_publish_args(
    exec_path: str,
    project: Path,
    platform: PlatformSpec,
    version: Version,
    output_dir: Path,
    configuration: str = "Release",
    bundle_property: str | None = None,
    bundle_archive: Path | None = None,
) -> list[str]:
    """Build the single-file, compressed, self-contained agent publish command."""
    args = [
        exec_path,
        "publish",
        str(project),
        "-c",
        configuration,
        "-r",
        platform.runtime_id,
        "--self-contained",
        "-o",
        f"{output_dir}/",
        "-p:PublishSingleFile=true",
        "-p:UseAppHost=true",
        f"-p:Version={version.version}",
        f"-p:FileVersion={version.file_version}",
        "-p:IncludeAllContentForSelfExtract=true",
        "-p:EnableCompressionInSingleFile=true",
        "-p:IncludeAppSettingsInSingleFile=true",
    ]
    if bundle_property and bundle_archive is not None:
        args.append(f"-p:{bundle_property}={bundle_archive}")
    return args


class DotnetClient:
    """Runs ``dotnet publish`` for the projects being released."""

    def __init__(self, runner: CommandRunner, exec_path: str = "dotnet") -> None:
        self.runner = runner
        self.exec_path = exec_path

    def publish_desktop_client(
        self,
        project: Path,
        platform: PlatformSpec,
        version: Version,
        output_dir: Path,
        configuration: str = "Release",
    ) -> CommandResult:
        args = desktop_publish_args(
            self.exec_path, project, platform, version, output_dir, configuration
        )
        return self.runner.run(args, timeout=DOTNET_PUBLISH_TIMEOUT)

    def publish_agent(
        self,
        project: Path,
        platform: PlatformSpec,
        version: Version,
        output_dir: Path,
        configuration: str = "Release",
        bundle_property: str | None = None,
        bundle_archive: Path | None = None,
    ) -> CommandResult:
        args = agent_publish_args(
            self.exec_path,
            project,
            platform,
            version,
            output_dir,
            configuration,
            bundle_property,
            bundle_archive,
        )
        return self.runner.run(args, timeout=DOTNET_PUBLISH_TIMEOUT)
