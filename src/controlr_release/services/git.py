"""Git queries used to derive quick-build versions."""

import subprocess
from pathlib import Path

from ..constants import GIT_TIMEOUT


class GitError(Exception):
    """Git command failed."""

    pass


def run_git(*args: str, cwd: Path | None = None, exec_path: str = "git") -> str:
    """Run a git command and return stripped stdout.

    Raises:
        GitError: If git is missing, times out or exits non-zero
    """
    try:
        result = subprocess.run(
            [exec_path, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT,
        )
    except subprocess.TimeoutExpired as e:
        raise GitError(f"git {args[0]} timed out after {GIT_TIMEOUT} seconds") from e
    except FileNotFoundError:
        raise GitError(f"Git executable not found: {exec_path}") from None
    if result.returncode != 0:
        raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
    return result.stdout.strip()


def get_latest_tag(cwd: Path | None = None, exec_path: str = "git") -> str:
    return run_git("describe", "--tags", "--abbrev=0", cwd=cwd, exec_path=exec_path)


def get_short_sha(cwd: Path | None = None, exec_path: str = "git") -> str:
    return run_git("rev-parse", "--short", "HEAD", cwd=cwd, exec_path=exec_path)
