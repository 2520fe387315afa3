"""Image command: build the server image and push it to the registry."""

import typer

from ..config import ReleaseConfig
from ..constants import DEFAULT_IMAGE_TAG, DEFAULT_VERSION
from ..core import ImageBuildOptions, ReleasePipeline
from ..models import PipelineResult, PublishReport
from ..output import OutputContext, get_output_context
from .common import exit_unless_succeeded, load_release_config


def report_image_success(
    ctx: OutputContext, config: ReleaseConfig, result: PipelineResult, heading: str
) -> None:
    """Print the image summary and the commands to run or deploy it."""
    publish: PublishReport = result.value("publish")
    image = publish.image
    pushed = [image.with_tag(tag).uri for tag in publish.pushed_tags]

    ctx.result(
        {
            "status": "succeeded",
            "image": image.uri,
            "pushed": pushed,
            "latest_alias": result.value("build-image") is not None,
        }
    )
    if ctx.json_mode:
        return

    ctx.success(heading)
    ctx.info(f"Image: {image.uri}")
    for uri in pushed:
        if uri != image.uri:
            ctx.info(f"Image: {uri}")

    ctx.info("To run the image locally:")
    ctx.command(f"docker run -p {config.docker.run_port}:{config.docker.run_port} {image.uri}")
    ctx.info("To use in Helm chart, update values.yaml:")
    ctx.command(
        "controlr:",
        "  image:",
        f"    repository: {image.repository}",
        f"    tag: {image.tag}",
    )


def image(
    tag: str = typer.Option(DEFAULT_IMAGE_TAG, "--tag", "-t", help="Image tag"),
    version: str = typer.Option(
        DEFAULT_VERSION, "--version", "-v", help="Application version for build"
    ),
    registry: str | None = typer.Option(None, "--registry", "-r", help="Registry URL override"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Build without using cache"),
    no_push: bool = typer.Option(False, "--no-push", help="Build only, don't push to registry"),
    skip_login: bool = typer.Option(
        False, "--skip-login", help="Skip authentication check (assumes already logged in)"
    ),
    platform: str | None = typer.Option(
        None, "--platform", help="Target platforms, e.g. linux/amd64,linux/arm64"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Build without asking for confirmation"),
) -> None:
    """Build the server Docker image and push it to the registry."""
    ctx = get_output_context()
    config = load_release_config(ctx)

    options = ImageBuildOptions(
        version=version,
        tag=tag,
        registry=registry,
        platform=platform,
        no_cache=no_cache,
        no_push=no_push,
        skip_login=skip_login,
        assume_yes=yes,
    )
    result = ReleasePipeline(config, ctx).run_image(options)
    exit_unless_succeeded(ctx, result)

    heading = "Build completed successfully!" if no_push else "Build and push completed successfully!"
    report_image_success(ctx, config, result, heading)
