"""Release pipeline: sequences validation, packaging, image build and publish.

Each stage returns a StageResult; the pipeline stops at the first stage that
did not succeed. Nothing is rolled back: artifacts already packaged and tags
already pushed stay in place so a retried run can pick up from there.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any

from ..config import ReleaseConfig
from ..constants import DEFAULT_IMAGE_TAG, DEFAULT_VERSION
from ..errors import ReleaseError
from ..models import ImageReference, PipelineResult, StageResult, Version
from ..output import OutputContext
from ..prompts import AssumeYes, Confirm, terminal_confirm
from ..services import CommandRunner, DockerClient
from .image_builder import ImageBuilder
from .packager import ArtifactPackager
from .platform_matrix import ALL_PLATFORMS, detect_host_os, resolve_platforms
from .publisher import RegistryPublisher
from .versioning import validate_version

logger = logging.getLogger(__name__)

BUILD_CONFIRM_PROMPT = "Continue with build?"


@dataclass
class AgentBuildOptions:
    """Options for packaging agents."""

    version: str = DEFAULT_VERSION
    platform: str = ALL_PLATFORMS
    clean: bool = False


@dataclass
class ImageBuildOptions:
    """Options for building and publishing the server image.

    ``assume_yes`` only bypasses the build confirmation; registry login is
    governed separately by ``skip_login``.
    """

    version: str = DEFAULT_VERSION
    tag: str = DEFAULT_IMAGE_TAG
    registry: str | None = None
    platform: str | None = None
    no_cache: bool = False
    no_push: bool = False
    skip_login: bool = False
    assume_yes: bool = False


def run_stage(name: str, action: Callable[[], Any]) -> StageResult:
    """Run a stage action, turning release errors into a failed result."""
    try:
        value = action()
    except ReleaseError as e:
        logger.debug("Stage %s failed: %s", name, e.message)
        return StageResult.failure(name, e)
    return StageResult.success(name, value)


class ReleasePipeline:
    """Orchestrates agent packaging and image publishing.

    Args:
        config: Loaded release configuration
        ctx: Output context used for all progress reporting
        runner: Command runner (default: one honoring ctx.dry_run)
        host_os: Host identifier (default: detected)
        build_confirm: Confirmation for the image build (default: terminal)
        login_confirm: Confirmation for registry login (default: terminal)
        credentials_path: Docker config file to inspect (default: docker's)
    """

    def __init__(
        self,
        config: ReleaseConfig,
        ctx: OutputContext,
        runner: CommandRunner | None = None,
        host_os: str | None = None,
        build_confirm: Confirm | None = None,
        login_confirm: Confirm | None = None,
        credentials_path: Path | None = None,
    ) -> None:
        self.config = config
        self.ctx = ctx
        self.runner = runner or CommandRunner(dry_run=ctx.dry_run)
        self.host_os = host_os or detect_host_os()
        self.build_confirm = build_confirm
        self.login_confirm = login_confirm
        self.docker = DockerClient(self.runner, config.toolchain.docker)
        self.image_builder = ImageBuilder(config, self.docker, ctx)
        self.credentials_path = credentials_path

    def run_agents(self, options: AgentBuildOptions) -> PipelineResult:
        """Validate the version and package agents for the selected platforms."""
        result = PipelineResult()
        validate = partial(validate_version, options.version)
        if not result.add(run_stage("validate-version", validate)):
            return result
        self._package(result, result.value("validate-version"), options)
        return result

    def run_image(self, options: ImageBuildOptions) -> PipelineResult:
        """Validate the version, build and tag the image, then publish it."""
        result = PipelineResult()
        validate = partial(validate_version, options.version)
        if not result.add(run_stage("validate-version", validate)):
            return result
        self._image(result, result.value("validate-version"), options)
        return result

    def run_release(
        self, agent_options: AgentBuildOptions, image_options: ImageBuildOptions
    ) -> PipelineResult:
        """Package agents, then build and publish the image that serves them."""
        result = PipelineResult()
        validate = partial(validate_version, agent_options.version)
        if not result.add(run_stage("validate-version", validate)):
            return result
        version = result.value("validate-version")
        self.ctx.info("Step 1/2: Building agent binaries...")
        if not self._package(result, version, agent_options):
            return result
        self.ctx.success("Agent binaries built successfully")
        self.ctx.info("Step 2/2: Building Docker image...")
        self._image(result, version, image_options)
        return result

    def _package(
        self, result: PipelineResult, version: Version, options: AgentBuildOptions
    ) -> bool:
        resolve = partial(resolve_platforms, options.platform, self.host_os)
        if not result.add(run_stage("resolve-platforms", resolve)):
            return False
        matrix = result.value("resolve-platforms")

        packager = ArtifactPackager(
            self.config.project,
            self.config.toolchain,
            version,
            self.runner,
            self.host_os,
            self.ctx,
        )
        self.ctx.settings(
            "Agent Build",
            {
                "Version": version.version,
                "FileVersion": version.file_version,
                "Platform": options.platform,
                "Output": str(self.config.project.output_root),
            },
        )

        def package() -> Any:
            if options.clean:
                self.ctx.info("Cleaning output directories...")
                packager.clean()
            return packager.package(matrix)

        return result.add(run_stage("package", package))

    def _image(
        self, result: PipelineResult, version: Version, options: ImageBuildOptions
    ) -> bool:
        image = self.image_builder.reference(options.tag, options.registry)
        platform = options.platform or self.config.docker.platform

        if not result.add(run_stage("preflight", self.image_builder.preflight)):
            return False
        if not result.add(self._confirm_build(image, version, platform, options)):
            return False

        def build() -> ImageReference | None:
            self.image_builder.build(image, version, platform, options.no_cache)
            latest = self.image_builder.tag_latest_if_production(image)
            self.image_builder.image_details(image)
            return latest

        if not result.add(run_stage("build-image", build)):
            return False

        publisher = RegistryPublisher(
            self.docker,
            self.login_confirm or terminal_confirm(),
            self.ctx,
            credentials_path=self.credentials_path,
        )
        return result.add(publisher.publish(image, options.no_push, options.skip_login))

    def _confirm_build(
        self,
        image: ImageReference,
        version: Version,
        platform: str,
        options: ImageBuildOptions,
    ) -> StageResult:
        self.ctx.settings(
            "Docker Build Configuration",
            self.image_builder.describe(
                image, version, platform, options.no_cache, push=not options.no_push
            ),
        )
        if options.assume_yes:
            confirm: Confirm = AssumeYes()
        else:
            confirm = self.build_confirm or terminal_confirm()

        if confirm(BUILD_CONFIRM_PROMPT):
            return StageResult.success("confirm-build", True)

        message = "Build cancelled"
        if not confirm.interactive and not options.assume_yes:
            message += " (no terminal to confirm; pass --yes to build non-interactively)"
        logger.debug("Build confirmation declined")
        return StageResult.cancelled("confirm-build", message)
