"""Container image build and production tagging."""

from ..config import ReleaseConfig
from ..constants import LATEST_TAG
from ..errors import DockerfileNotFound, ImageBuildFailed, ToolchainUnavailable
from ..models import ImageReference, Version
from ..output import OutputContext
from ..services import CommandError, DockerClient
from .versioning import is_production_tag


class ImageBuilder:
    """Builds the server image and applies the ``latest`` alias for production tags."""

    def __init__(self, config: ReleaseConfig, docker: DockerClient, ctx: OutputContext) -> None:
        self.config = config
        self.docker = docker
        self.ctx = ctx

    def reference(self, tag: str, registry: str | None = None) -> ImageReference:
        return ImageReference(
            registry=registry or self.config.docker.registry,
            image_name=self.config.docker.image_name,
            tag=tag,
        )

    def preflight(self) -> None:
        """Check the Dockerfile and the docker daemon before building.

        Raises:
            DockerfileNotFound: If the configured Dockerfile does not exist
            ToolchainUnavailable: If docker is missing or its daemon is down
        """
        dockerfile = self.config.dockerfile_path
        if not dockerfile.is_file():
            raise DockerfileNotFound(
                f"Dockerfile not found at {dockerfile}",
                details="Run from the repository root or set project.root in the config",
            )
        if self.docker.runner.dry_run:
            return
        if not self.docker.is_installed():
            raise ToolchainUnavailable("Docker is not installed or not in PATH")
        if not self.docker.daemon_running():
            raise ToolchainUnavailable("Docker daemon is not running")

    def describe(
        self,
        image: ImageReference,
        version: Version,
        platform: str,
        no_cache: bool,
        push: bool,
    ) -> dict[str, str]:
        """Resolved build configuration shown before confirmation."""
        return {
            "Registry": image.registry,
            "Image": image.image_name,
            "Full Image": image.repository,
            "Tag": image.tag,
            "Version": version.version,
            "Platform": platform,
            "No Cache": str(no_cache).lower(),
            "Push": str(push).lower(),
        }

    def build(
        self, image: ImageReference, version: Version, platform: str, no_cache: bool = False
    ) -> None:
        """Build the image under its primary tag.

        Raises:
            ImageBuildFailed: If docker build fails; no tag is created
        """
        self.ctx.info("Building Docker image...")
        build_arguments = {
            "BUILD_CONFIGURATION": self.config.docker.build_configuration,
            "CURRENT_VERSION": version.version,
        }
        try:
            result = self.docker.build(
                image.uri,
                self.config.dockerfile_path,
                self.config.build_context_path,
                platform,
                build_arguments,
                no_cache=no_cache,
            )
        except CommandError as e:
            raise ImageBuildFailed(f"Docker build failed: {e}", tag=image.tag) from e
        if not result.ok:
            raise ImageBuildFailed(
                "Docker build failed",
                tag=image.tag,
                details=f"docker build exited with code {result.returncode}",
            )
        self.ctx.success("Docker image built successfully")

    def tag_latest_if_production(self, image: ImageReference) -> ImageReference | None:
        """Re-tag a production image as ``latest`` without rebuilding.

        Returns:
            The ``latest`` reference if one was created, else None

        Raises:
            ImageBuildFailed: If docker tag fails
        """
        if image.tag == LATEST_TAG:
            self.ctx.info("Building as latest tag")
            return None
        if not is_production_tag(image.tag):
            self.ctx.info("Non-production tag detected, skipping 'latest' tag")
            return None

        self.ctx.info("Production version detected, tagging as latest...")
        latest = image.with_tag(LATEST_TAG)
        try:
            result = self.docker.tag(image.uri, latest.uri)
        except CommandError as e:
            raise ImageBuildFailed(f"Failed to tag {image.uri} as latest: {e}", tag=image.tag) from e
        if not result.ok:
            raise ImageBuildFailed(
                f"Failed to tag {image.uri} as latest",
                tag=image.tag,
                details=result.output_tail or None,
            )
        self.ctx.success("Tagged as latest")
        return latest

    def image_details(self, image: ImageReference) -> None:
        table = self.docker.images(image.repository)
        if table:
            self.ctx.info("Image details:")
            self.ctx.print(table, style=None)
