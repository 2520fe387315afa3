"""Init command implementation."""

from pathlib import Path

from ..config import write_config_template
from ..constants import CONFIG_FILENAME
from ..output import get_output_context


def init() -> None:
    """Write a controlr-release.toml template in the current directory."""
    ctx = get_output_context()
    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        ctx.console.print(f"[yellow]Config already exists:[/yellow] {config_path}")
        return

    if ctx.dry_run:
        ctx.console.print(f"[cyan][DRY RUN][/cyan] Would create config: {config_path}")
        return

    write_config_template(Path.cwd())
    ctx.success(f"Created config template: {config_path}", {"path": str(config_path)})
    if not ctx.json_mode:
        ctx.console.print("Edit project paths and the registry, then run: controlr-release doctor")
