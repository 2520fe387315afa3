"""Archive creation for published desktop bundles."""

import zipfile
from pathlib import Path

from .runner import CommandError, CommandRunner


class ArchiveError(Exception):
    """Archive could not be created."""

    pass


def zip_directory(source: Path, archive: Path) -> Path:
    """Zip the contents of a directory with entries relative to it.

    Args:
        source: Directory whose contents are archived
        archive: Destination zip file (parent directories are created)

    Returns:
        Path to the written archive

    Raises:
        ArchiveError: If source is not a directory or writing fails
    """
    if not source.is_dir():
        raise ArchiveError(f"Bundle directory not found: {source}")

    try:
        archive.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for file_path in sorted(source.rglob("*")):
                if file_path.is_file():
                    zf.write(file_path, file_path.relative_to(source).as_posix())
    except OSError as e:
        raise ArchiveError(f"Failed to write {archive}: {e}") from e
    return archive


def ditto_directory(
    runner: CommandRunner, source: Path, archive: Path, exec_path: str = "ditto"
) -> Path:
    """Archive a directory with ``ditto``, keeping resource forks.

    Only available on macOS hosts.

    Raises:
        ArchiveError: If ditto is unavailable or exits non-zero
    """
    if not source.is_dir() and not runner.dry_run:
        raise ArchiveError(f"Bundle directory not found: {source}")

    if not runner.dry_run:
        try:
            archive.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArchiveError(f"Failed to create {archive.parent}: {e}") from e
    args = [exec_path, "-c", "-k", "--sequesterRsrc", str(source), str(archive)]
    try:
        result = runner.run(args)
    except CommandError as e:
        raise ArchiveError(str(e)) from e
    if not result.ok:
        raise ArchiveError(f"ditto failed: {result.output_tail}")
    return archive
