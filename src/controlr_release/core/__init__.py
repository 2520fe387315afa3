"""Core release logic for controlr-release.

This package contains the orchestration logic; external tools are reached
only through the services package:
- versioning: Version validation and production-tag classification
- platform_matrix: Platform selector resolution
- packager: Desktop bundle and agent publish per platform
- image_builder: Image build and ``latest`` aliasing
- publisher: Registry authentication and pushes
- pipeline: Fail-fast sequencing of the stages above
"""

from .image_builder import ImageBuilder
from .packager import ArtifactPackager
from .pipeline import (
    BUILD_CONFIRM_PROMPT,
    AgentBuildOptions,
    ImageBuildOptions,
    ReleasePipeline,
    run_stage,
)
from .platform_matrix import (
    ALL_PLATFORMS,
    KNOWN_PLATFORMS,
    detect_host_os,
    resolve_platforms,
    valid_selectors,
)
from .publisher import LOGIN_PROMPT, RegistryPublisher, push_commands
from .versioning import file_version_for, is_production_tag, strip_tag_prefix, validate_version

__all__ = [
    "ALL_PLATFORMS",
    "BUILD_CONFIRM_PROMPT",
    "KNOWN_PLATFORMS",
    "LOGIN_PROMPT",
    "AgentBuildOptions",
    "ArtifactPackager",
    "ImageBuildOptions",
    "ImageBuilder",
    "RegistryPublisher",
    "ReleasePipeline",
    "detect_host_os",
    "file_version_for",
    "is_production_tag",
    "push_commands",
    "resolve_platforms",
    "run_stage",
    "strip_tag_prefix",
    "valid_selectors",
    "validate_version",
]
