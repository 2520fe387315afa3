"""Operator confirmation prompts.

Prompts are an injected capability so that the pipeline never reads from the
terminal directly. Every implementation fails closed: without a terminal the
answer is always no.
"""

import sys
from typing import Protocol

import typer


class Confirm(Protocol):
    """Ask the operator a yes/no question."""

    interactive: bool

    def __call__(self, prompt: str) -> bool: ...


class TerminalConfirm:
    """Prompt on the controlling terminal, defaulting to no."""

    interactive = True

    def __call__(self, prompt: str) -> bool:
        return typer.confirm(prompt, default=False)


class NonInteractiveConfirm:
    """Used when stdin is not a terminal. Always declines."""

    interactive = False

    def __call__(self, prompt: str) -> bool:
        return False


class AssumeYes:
    """Accept every prompt. Only selected by an explicit --yes flag."""

    interactive = False

    def __call__(self, prompt: str) -> bool:
        return True


def stdin_is_interactive() -> bool:
    """Return True when stdin is attached to a terminal."""
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def terminal_confirm() -> Confirm:
    """Return the confirm capability matching the current terminal."""
    if stdin_is_interactive():
        return TerminalConfirm()
    return NonInteractiveConfirm()
