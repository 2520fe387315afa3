"""Blocking subprocess runner shared by the external tool integrations."""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Command could not be run to completion (missing executable or timeout)."""

    pass


@dataclass
class CommandResult:
    """Exit status and captured output of a finished command."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output_tail(self) -> str:
        """Last lines of combined output, for error details."""
        lines = (self.stdout + self.stderr).strip().splitlines()
        return "\n".join(lines[-20:])


class CommandRunner:
    """Run external commands one at a time, waiting for each to finish.

    In dry-run mode commands that change state are logged instead of
    executed and reported as successful. Read-only queries
    (``mutating=False``) always run.
    """

    def __init__(self, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        timeout: int | None = None,
        capture: bool = True,
        mutating: bool = True,
    ) -> CommandResult:
        """Run a command and return its result.

        Args:
            args: Command and arguments
            cwd: Working directory
            timeout: Timeout in seconds (None waits indefinitely)
            capture: Capture stdout/stderr instead of inheriting the terminal
            mutating: Whether the command changes state (skipped in dry-run)

        Returns:
            CommandResult with the exit code and captured output

        Raises:
            CommandError: If the executable is missing or the command times out
        """
        command_line = shlex.join(args)
        if self.dry_run and mutating:
            logger.info("[DRY RUN] Would execute: %s", command_line)
            return CommandResult(args=args, returncode=0)

        logger.debug("Executing: %s", command_line)
        try:
            result = subprocess.run(
                args,
                cwd=cwd,
                capture_output=capture,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(f"{args[0]} timed out after {timeout} seconds") from e
        except FileNotFoundError:
            raise CommandError(f"Command not found: {args[0]}") from None

        return CommandResult(
            args=args,
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
