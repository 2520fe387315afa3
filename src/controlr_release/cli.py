"""controlr-release CLI: build and release orchestrator for ControlR."""

from pathlib import Path

import typer

from controlr_release import __version__

from .commands import agents, doctor, image, init, quick, release
from .commands.common import set_config_path
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"controlr-release {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="controlr-release",
    help="Build, package and publish ControlR agents and server images",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the commands that would run without executing them",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to controlr-release.toml (default: ./controlr-release.toml)",
    ),
) -> None:
    """controlr-release - build and release orchestrator."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
    )
    set_output_context(OutputContext(console=console, json_mode=json_output, dry_run=dry_run))
    set_config_path(config)


app.command()(agents)
app.command()(image)
app.command()(release)
app.command()(quick)
app.command()(doctor)
app.command()(init)
