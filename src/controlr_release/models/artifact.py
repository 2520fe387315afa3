"""Build artifact models produced by the packager."""

from pathlib import Path

from pydantic import BaseModel, Field

from .platform import PlatformSpec


class BuildArtifact(BaseModel):
    """Outputs of one successfully packaged platform."""

    platform: PlatformSpec
    bundle_archive: Path | None = Field(
        default=None, description="Archived desktop bundle (None in dry-run mode)"
    )
    executable: Path = Field(description="Verified agent executable")


class PackageReport(BaseModel):
    """Summary of a packager run across the matrix."""

    version: str
    output_root: Path
    artifacts: list[BuildArtifact] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list, description="Runtime ids not built")
    version_file: Path | None = None
