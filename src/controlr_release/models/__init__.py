"""Data models for controlr-release.

This package defines the data structures passed between stages:
- Validated versions (Version)
- Build matrix entries (PlatformSpec, PlatformMatrix)
- Packaged outputs (BuildArtifact, PackageReport)
- Image references and registry state (ImageReference, RegistryAuthState, PublishReport)
- Pipeline stage results (StageResult, StageOutcome, PipelineResult)

Value models are frozen Pydantic models; they are computed once per run
and never mutated afterwards.
"""

from .artifact import BuildArtifact, PackageReport
from .image import ImageReference, PublishReport, RegistryAuthState
from .platform import PlatformMatrix, PlatformSpec
from .result import PipelineResult, StageOutcome, StageResult
from .version import Version

__all__ = [
    "BuildArtifact",
    "ImageReference",
    "PackageReport",
    "PipelineResult",
    "PlatformMatrix",
    "PlatformSpec",
    "PublishReport",
    "RegistryAuthState",
    "StageOutcome",
    "StageResult",
    "Version",
]
