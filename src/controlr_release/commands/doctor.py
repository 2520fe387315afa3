"""Doctor command: verify the release toolchain on this host."""

import typer

from ..core import detect_host_os
from ..output import get_output_context
from ..services import run_toolchain_checks
from .common import load_release_config


def doctor() -> None:
    """Check that dotnet, docker and friends are ready for a release build."""
    ctx = get_output_context()
    config = load_release_config(ctx)
    host_os = detect_host_os()

    checks = run_toolchain_checks(config.toolchain, host_os)
    failed = [c for c in checks if c.blocking]

    if ctx.json_mode:
        ctx.print_json(
            {
                "host_os": host_os,
                "ok": not failed,
                "checks": [c.model_dump() for c in checks],
            }
        )
        if failed:
            raise typer.Exit(1)
        return

    ctx.heading("Release Toolchain Verification")
    for check in checks:
        if check.ok:
            ctx.console.print(f"[green]✓[/green] {check.message}")
        elif check.required:
            ctx.console.print(f"[red]✗[/red] {check.message}")
        else:
            ctx.console.print(f"[yellow]⚠[/yellow] {check.message}")
        for hint in check.hints:
            ctx.console.print(f"    {hint}", style="dim")

    if failed:
        ctx.console.print("\n[red]✗ Some required checks failed[/red]")
        ctx.console.print("[yellow]Please address the errors above before building a release.[/yellow]")
        raise typer.Exit(1)

    ctx.console.print("\n[bold green]✓ All required checks passed![/bold green]")
    ctx.console.print("Next steps:")
    ctx.console.print("  controlr-release agents --version <version>")
    ctx.console.print("  controlr-release image --version <version> --tag v<version>")
