"""Quick command: image build with the version and tag derived from git."""

import logging
from pathlib import Path

import typer

from ..constants import DEFAULT_VERSION
from ..core import ImageBuildOptions, ReleasePipeline, strip_tag_prefix
from ..output import get_output_context
from ..services import GitError, get_latest_tag, get_short_sha
from .common import exit_unless_succeeded, load_release_config
from .image import report_image_success

logger = logging.getLogger(__name__)


def derive_quick_tag(cwd: Path | None = None, git_exec: str = "git") -> tuple[str, str]:
    """Derive (version, tag) from the latest git tag and HEAD.

    The version is the latest tag without its ``v`` prefix (default 1.0.0);
    the tag is ``<version>-<short sha>`` (``dev`` outside a repository).
    """
    try:
        version = strip_tag_prefix(get_latest_tag(cwd, exec_path=git_exec))
    except GitError as e:
        logger.debug("No git tag found: %s", e)
        version = DEFAULT_VERSION
    try:
        commit = get_short_sha(cwd, exec_path=git_exec)
    except GitError as e:
        logger.debug("No git commit found: %s", e)
        commit = "dev"
    return version, f"{version}-{commit}"


def quick(
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
    """Build the Docker image tagged from the latest git tag and commit."""
    ctx = get_output_context()
    config = load_release_config(ctx)

    version, tag = derive_quick_tag(config.project.root, config.toolchain.git)
    ctx.info(f"Version: {version}")
    ctx.info(f"Tag: {tag}")

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
