"""Output formatting for controlr-release."""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table

from .errors import ReleaseError


@dataclass
class OutputContext:
    """Context for output formatting.

    Passed explicitly to every stage so that nothing writes to a process-wide
    printer. In JSON mode human-readable output is suppressed and only the
    final result or error document is printed to stdout.
    """

    console: Console
    json_mode: bool = False
    dry_run: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message respecting output mode."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print JSON data."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def result(self, data: dict[str, Any], message: str = "") -> None:
        """Print result in appropriate format."""
        if self.json_mode:
            self.print_json(data)
        elif message:
            self.console.print(message)

    def info(self, message: str) -> None:
        """Print an informational line."""
        self.print(f"[blue]\\[INFO][/blue] {message}")

    def warning(self, message: str) -> None:
        """Print a warning line."""
        self.print(f"[yellow]\\[WARNING][/yellow] {message}")

    def heading(self, title: str) -> None:
        """Print a section heading."""
        if not self.json_mode:
            self.console.rule(f"[bold]{title}[/bold]")

    def command(self, *lines: str) -> None:
        """Print commands the operator can copy and run."""
        for line in lines:
            self.print(f"  {line}", style="cyan")

    def settings(self, title: str, rows: dict[str, str]) -> None:
        """Print a two-column settings table."""
        if self.json_mode:
            return
        self.heading(title)
        table = Table(show_header=False)
        table.add_column("Setting", style="bold")
        table.add_column("Value")
        for key, value in rows.items():
            table.add_row(key, value)
        self.console.print(table)

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode and data:
            self.print_json({"error": message, **data})
        elif self.json_mode:
            self.print_json({"error": message})
        else:
            self.console.print(f"[red]Error: {message}[/red]")

    def failure(self, exc: ReleaseError) -> None:
        """Report a release error with its context and follow-up commands."""
        if self.json_mode:
            self.print_json({"error": exc.message, **exc.to_dict()})
            return
        self.console.print(f"[red]Error: {exc.message}[/red]")
        if exc.details:
            self.console.print(f"[red]{exc.details}[/red]")
        if exc.platform:
            self.console.print(f"  Platform: {exc.platform}")
        if exc.tag:
            self.console.print(f"  Tag: {exc.tag}")
        if exc.hints:
            self.console.print("[bold]To continue manually, run:[/bold]")
            self.command(*exc.hints)

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print success message in appropriate format.

        In JSON mode only a call carrying data is a result document; plain
        progress messages print nothing.
        """
        if self.json_mode:
            if data:
                self.print_json({"success": message, **data})
        else:
            self.console.print(f"[green]{message}[/green]")


# Global output context (set by cli.py main callback)
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context.

    Returns a default OutputContext if not yet initialized by CLI.
    """
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext) -> None:
    """Set the global output context. Called by CLI main callback."""
    global _ctx
    _ctx = ctx
