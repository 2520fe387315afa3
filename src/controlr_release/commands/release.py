"""Release command: build agents and the server image in one run."""

import typer

from ..constants import DEFAULT_VERSION
from ..core import AgentBuildOptions, ImageBuildOptions, ReleasePipeline
from ..output import get_output_context
from .common import exit_unless_succeeded, load_release_config
from .image import report_image_success


def release(
    version: str = typer.Option(DEFAULT_VERSION, "--version", "-v", help="Application version"),
    tag: str | None = typer.Option(
        None, "--tag", "-t", help="Docker image tag (default: v<version>)"
    ),
    platform: str = typer.Option(
        "linux-x64", "--platform", "-p", help="Agent platform to build (or 'all')"
    ),
    image_platform: str | None = typer.Option(
        None, "--image-platform", help="Image target platforms, e.g. linux/amd64,linux/arm64"
    ),
    registry: str | None = typer.Option(None, "--registry", "-r", help="Registry URL override"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Build image without using cache"),
    no_push: bool = typer.Option(False, "--no-push", help="Build only, don't push to registry"),
    skip_login: bool = typer.Option(
        False, "--skip-login", help="Skip authentication check (assumes already logged in)"
    ),
    clean: bool = typer.Option(False, "--clean", help="Clean before building"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Build without asking for confirmation"),
) -> None:
    """Complete build and deploy: agent binaries, then the Docker image."""
    ctx = get_output_context()
    config = load_release_config(ctx)
    tag = tag or f"v{version}"

    ctx.settings(
        "Complete Build and Deploy",
        {"Version": version, "Tag": tag, "Platform": platform},
    )
    agent_options = AgentBuildOptions(version=version, platform=platform, clean=clean)
    image_options = ImageBuildOptions(
        version=version,
        tag=tag,
        registry=registry,
        platform=image_platform,
        no_cache=no_cache,
        no_push=no_push,
        skip_login=skip_login,
        assume_yes=yes,
    )
    result = ReleasePipeline(config, ctx).run_release(agent_options, image_options)
    exit_unless_succeeded(ctx, result)

    report_image_success(ctx, config, result, "Complete build and deploy finished!")
