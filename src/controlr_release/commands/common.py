"""Helpers shared by the command implementations."""

from pathlib import Path

import typer

from ..config import ReleaseConfig, load_config
from ..errors import ConfigError
from ..models import PipelineResult, StageOutcome
from ..output import OutputContext

# Config file override (set by cli.py main callback)
_config_path: Path | None = None


def set_config_path(path: Path | None) -> None:
    """Set the --config override. Called by CLI main callback."""
    global _config_path
    _config_path = path


def load_release_config(ctx: OutputContext) -> ReleaseConfig:
    """Load configuration, exiting with code 1 if it is invalid."""
    try:
        return load_config(_config_path)
    except ConfigError as e:
        ctx.failure(e)
        raise typer.Exit(1) from None


def exit_unless_succeeded(ctx: OutputContext, result: PipelineResult) -> None:
    """Report a failed or cancelled pipeline and exit.

    Failures exit with the error's exit code. A cancelled run is a clean
    stop chosen by the operator and exits 0, printing any follow-up commands.
    Returns normally only when every stage succeeded.
    """
    last = result.last
    if result.outcome is StageOutcome.FAILED and result.error is not None:
        ctx.failure(result.error)
        raise typer.Exit(result.exit_code)

    if result.outcome is StageOutcome.CANCELLED and last is not None:
        if ctx.json_mode:
            ctx.print_json(
                {
                    "status": "cancelled",
                    "stage": last.stage,
                    "message": last.message,
                    "hints": last.hints,
                }
            )
        else:
            ctx.info(last.message)
            if last.hints:
                ctx.info("To push later, first login and then run:")
                ctx.command(*last.hints)
        raise typer.Exit(0)
