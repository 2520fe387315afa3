"""Agents command: build agent binaries for the platform matrix."""

import typer

from ..constants import DEFAULT_VERSION
from ..core import ALL_PLATFORMS, AgentBuildOptions, ReleasePipeline
from ..models import PackageReport
from ..output import get_output_context
from .common import exit_unless_succeeded, load_release_config


def agents(
    version: str = typer.Option(
        DEFAULT_VERSION, "--version", "-v", help="Application version (e.g. 1.2.3-beta)"
    ),
    platform: str = typer.Option(
        ALL_PLATFORMS,
        "--platform",
        "-p",
        help="Platform to build: linux-x64, win-x64, win-x86, osx-x64, osx-arm64, all",
    ),
    clean: bool = typer.Option(False, "--clean", help="Clean output directories before building"),
) -> None:
    """Build agent binaries and stage them in the downloads directory."""
    ctx = get_output_context()
    config = load_release_config(ctx)

    pipeline = ReleasePipeline(config, ctx)
    result = pipeline.run_agents(AgentBuildOptions(version=version, platform=platform, clean=clean))
    exit_unless_succeeded(ctx, result)

    report: PackageReport = result.value("package")
    ctx.result(
        {
            "status": "succeeded",
            "version": report.version,
            "output_root": str(report.output_root),
            "artifacts": [
                {
                    "runtime_id": a.platform.runtime_id,
                    "executable": str(a.executable),
                    "bundle_archive": str(a.bundle_archive) if a.bundle_archive else None,
                }
                for a in report.artifacts
            ],
            "skipped": report.skipped,
            "version_file": str(report.version_file) if report.version_file else None,
        }
    )
    if ctx.json_mode:
        return

    ctx.success("Build completed successfully!")
    ctx.info(f"Agent binaries are in: {report.output_root}")
    ctx.info("To build Docker image with these agents:")
    ctx.command(f"controlr-release image --skip-login --version {version} --tag v{version}")
