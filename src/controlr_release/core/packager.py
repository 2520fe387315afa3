"""Artifact packager: desktop bundle and agent publish per platform.

For each platform in the matrix, in order:
1. Clear stale bundle archives from the platform's staging directory
2. Publish the self-contained desktop client
3. Archive the bundle into the staging directory
4. Copy the archive into the shared slot read by the agent project
5. Publish the single-file agent
6. Verify the agent executable exists at its deterministic path

Every platform archives into its own directory (``staging_root/<runtime id>``).
The shared slot (``staging_root/<archive name>``) only ever holds the bundle of
the platform whose agent is being built; platforms run one at a time.
"""

import logging
import shutil
from pathlib import Path

from ..config import ProjectConfig, ToolchainConfig
from ..constants import BUNDLE_ARCHIVE_NAME, MACOS_BUNDLE_ARCHIVE_NAME, VERSION_MARKER_FILENAME
from ..errors import AgentBuildFailed, ArtifactNotFound, CompanionBuildFailed
from ..models import BuildArtifact, PackageReport, PlatformMatrix, PlatformSpec, Version
from ..output import OutputContext
from ..services import (
    ArchiveError,
    CommandError,
    CommandRunner,
    DotnetClient,
    ditto_directory,
    zip_directory,
)
from .platform_matrix import KNOWN_PLATFORMS

logger = logging.getLogger(__name__)

SHARED_ARCHIVE_NAMES = (BUNDLE_ARCHIVE_NAME, MACOS_BUNDLE_ARCHIVE_NAME)


class ArtifactPackager:
    """Builds and stages agent artifacts for a resolved platform matrix."""

    def __init__(
        self,
        project: ProjectConfig,
        toolchain: ToolchainConfig,
        version: Version,
        runner: CommandRunner,
        host_os: str,
        ctx: OutputContext,
    ) -> None:
        self.project = project
        self.toolchain = toolchain
        self.version = version
        self.runner = runner
        self.host_os = host_os
        self.ctx = ctx
        self.dotnet = DotnetClient(runner, toolchain.dotnet)

    @property
    def dry_run(self) -> bool:
        return self.runner.dry_run

    def staging_dir(self, platform: PlatformSpec) -> Path:
        return self.project.staging_root / platform.runtime_id

    def desktop_output_dir(self, platform: PlatformSpec) -> Path:
        return self.project.desktop_publish_root / platform.runtime_id

    def agent_output_dir(self, platform: PlatformSpec) -> Path:
        return self.project.output_root / platform.runtime_id

    def expected_executable(self, platform: PlatformSpec) -> Path:
        return self.agent_output_dir(platform) / platform.executable_name(self.project.agent_name)

    def uses_resource_fork_archive(self, platform: PlatformSpec) -> bool:
        """macOS targets built on macOS keep resource forks via ditto."""
        return self.host_os == "macos" and platform.is_macos

    def archive_name(self, platform: PlatformSpec) -> str:
        if self.uses_resource_fork_archive(platform):
            return MACOS_BUNDLE_ARCHIVE_NAME
        return BUNDLE_ARCHIVE_NAME

    def bundle_archive_path(self, platform: PlatformSpec) -> Path:
        return self.staging_dir(platform) / self.archive_name(platform)

    def shared_bundle_path(self, platform: PlatformSpec) -> Path:
        """Where the agent project picks up the bundle it embeds."""
        return self.project.staging_root / self.archive_name(platform)

    def clean(self) -> list[Path]:
        """Delete previous outputs so no stale artifact survives into this build.

        Removes the output root, every per-runtime staging directory and any
        archives directly in the staging root, plus the desktop and agent
        publish directories. Other files in the staging root are kept.

        Returns:
            Paths that were (or in dry-run mode would be) removed

        Raises:
            AgentBuildFailed: If a previous output cannot be removed
        """
        targets = [
            self.project.output_root,
            *(self.project.staging_root / p.runtime_id for p in KNOWN_PLATFORMS),
            self.project.desktop_publish_root,
            self.project.agent_publish_root,
        ]
        if self.project.staging_root.is_dir():
            targets.extend(sorted(self.project.staging_root.glob("*.zip")))

        removed: list[Path] = []
        for target in targets:
            if not target.exists():
                continue
            if self.dry_run:
                logger.info("[DRY RUN] Would remove: %s", target)
            else:
                try:
                    if target.is_dir():
                        shutil.rmtree(target)
                    else:
                        target.unlink()
                except OSError as e:
                    raise AgentBuildFailed(f"Failed to remove {target}: {e}") from e
            removed.append(target)
        self.ctx.success("Cleaned output directories")
        return removed

    def clear_staging(self, platform: PlatformSpec) -> None:
        """Remove archives left by earlier builds from the platform and shared slots.

        Raises:
            OSError: If an archive cannot be removed
        """
        stale: list[Path] = [
            self.project.staging_root / name
            for name in SHARED_ARCHIVE_NAMES
            if (self.project.staging_root / name).is_file()
        ]
        staging = self.staging_dir(platform)
        if staging.is_dir():
            stale.extend(staging.glob("*.zip"))
        for archive in stale:
            if self.dry_run:
                logger.info("[DRY RUN] Would remove: %s", archive)
            else:
                archive.unlink()

    def publish_companion(self, platform: PlatformSpec) -> Path | None:
        """Publish and archive the desktop client for one platform.

        Returns:
            Path to the staged archive (None in dry-run mode)

        Raises:
            CompanionBuildFailed: If publishing or archiving fails
        """
        self.ctx.info(f"Building DesktopClient for {platform.display_name}...")
        try:
            self.clear_staging(platform)
        except OSError as e:
            raise CompanionBuildFailed(
                f"Failed to clear staged bundles for {platform.display_name}: {e}",
                platform=platform.runtime_id,
            ) from e

        output_dir = self.desktop_output_dir(platform)
        try:
            result = self.dotnet.publish_desktop_client(
                self.project.desktop_dir,
                platform,
                self.version,
                output_dir,
                self.project.configuration,
            )
        except CommandError as e:
            raise CompanionBuildFailed(
                f"Failed to build DesktopClient for {platform.display_name}: {e}",
                platform=platform.runtime_id,
            ) from e
        if not result.ok:
            raise CompanionBuildFailed(
                f"Failed to build DesktopClient for {platform.display_name}",
                platform=platform.runtime_id,
                details=result.output_tail or None,
            )

        archive = self.bundle_archive_path(platform)
        try:
            if self.uses_resource_fork_archive(platform):
                ditto_directory(self.runner, output_dir, archive, self.toolchain.ditto)
            elif self.dry_run:
                logger.info("[DRY RUN] Would archive %s into %s", output_dir, archive)
                return None
            else:
                zip_directory(output_dir, archive)
        except ArchiveError as e:
            raise CompanionBuildFailed(
                f"Failed to archive DesktopClient for {platform.display_name}: {e}",
                platform=platform.runtime_id,
            ) from e

        if self.dry_run:
            return None
        self.ctx.success(f"Built DesktopClient for {platform.display_name}")
        return archive

    def stage_shared_bundle(self, platform: PlatformSpec, bundle_archive: Path | None) -> Path:
        """Copy the platform's archive into the shared slot.

        Raises:
            OSError: If the copy fails
        """
        shared = self.shared_bundle_path(platform)
        source = bundle_archive or self.bundle_archive_path(platform)
        if self.dry_run:
            logger.info("[DRY RUN] Would copy %s to %s", source, shared)
            return shared
        shutil.copyfile(source, shared)
        logger.debug("Staged %s for the %s agent build", shared, platform.runtime_id)
        return shared

    def publish_agent(self, platform: PlatformSpec, bundle_archive: Path | None) -> Path:
        """Publish the agent and verify its executable.

        Returns:
            Path to the agent executable

        Raises:
            AgentBuildFailed: If staging the bundle or the publish step fails
            ArtifactNotFound: If the publish succeeded but the executable is missing
        """
        self.ctx.info(f"Building Agent for {platform.display_name}...")
        output_dir = self.agent_output_dir(platform)
        try:
            self.stage_shared_bundle(platform, bundle_archive)
            if not self.dry_run:
                output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AgentBuildFailed(
                f"Failed to prepare Agent build for {platform.display_name}: {e}",
                platform=platform.runtime_id,
            ) from e

        try:
            result = self.dotnet.publish_agent(
                self.project.agent_dir,
                platform,
                self.version,
                output_dir,
                self.project.configuration,
                self.project.bundle_property,
                bundle_archive or self.bundle_archive_path(platform),
            )
        except CommandError as e:
            raise AgentBuildFailed(
                f"Failed to build Agent for {platform.display_name}: {e}",
                platform=platform.runtime_id,
            ) from e
        if not result.ok:
            raise AgentBuildFailed(
                f"Failed to build Agent for {platform.display_name}",
                platform=platform.runtime_id,
                details=result.output_tail or None,
            )

        executable = self.expected_executable(platform)
        if self.dry_run:
            return executable
        if not executable.is_file():
            raise ArtifactNotFound(
                f"Agent binary not found: {executable}",
                platform=platform.runtime_id,
                details="dotnet publish reported success but produced no executable",
            )
        self.ctx.success(f"Built Agent for {platform.display_name}: {executable}")
        return executable

    def package_platform(self, platform: PlatformSpec) -> BuildArtifact:
        self.ctx.heading(f"Building {platform.display_name}")
        archive = self.publish_companion(platform)
        executable = self.publish_agent(platform, archive)
        return BuildArtifact(platform=platform, bundle_archive=archive, executable=executable)

    def write_version_file(self) -> Path:
        """Write the version marker read by downstream deployment tooling."""
        path = self.project.output_root / VERSION_MARKER_FILENAME
        if self.dry_run:
            logger.info("[DRY RUN] Would write %s", path)
            return path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"{self.version.version}\n")
        except OSError as e:
            raise AgentBuildFailed(f"Failed to write version file {path}: {e}") from e
        self.ctx.success(f"Created version file: {path}")
        return path

    def package(self, matrix: PlatformMatrix) -> PackageReport:
        """Package every platform in order, stopping at the first failure.

        Raises:
            CompanionBuildFailed, AgentBuildFailed, ArtifactNotFound: From the
                failing platform. Platforms already packaged are left in place.
        """
        if not self.dry_run:
            try:
                self.project.output_root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise AgentBuildFailed(
                    f"Failed to create output directory {self.project.output_root}: {e}"
                ) from e
        artifacts = [self.package_platform(platform) for platform in matrix.platforms]
        version_file = self.write_version_file()
        return PackageReport(
            version=self.version.version,
            output_root=self.project.output_root,
            artifacts=artifacts,
            skipped=[p.runtime_id for p in matrix.skipped],
            version_file=version_file,
        )
