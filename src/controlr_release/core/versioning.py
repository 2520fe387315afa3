"""Version validation and tag classification."""

import re

from ..constants import LATEST_TAG
from ..errors import InvalidVersionFormat
from ..models import Version

VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\d+)(-[a-zA-Z0-9.-]+)?", re.ASCII)
PRODUCTION_TAG_PATTERN = re.compile(r"v?\d+\.\d+\.\d+", re.ASCII)


def file_version_for(version: str) -> str:
    """Derive the four-part numeric file version.

    The prerelease suffix is dropped and the fourth component is always 0,
    so ``1.2.3-beta`` becomes ``1.2.3.0``.

    Raises:
        InvalidVersionFormat: If version is not a semantic version
    """
    match = VERSION_PATTERN.fullmatch(version)
    if match is None:
        raise InvalidVersionFormat(version)
    major, minor, patch, _ = match.groups()
    return f"{major}.{minor}.{patch}.0"


def validate_version(text: str) -> Version:
    """Validate a version string and derive its file version.

    Accepts ``MAJOR.MINOR.PATCH`` with an optional ``-PRERELEASE`` suffix of
    letters, digits, dots and hyphens.

    Args:
        text: Version as given by the operator

    Returns:
        Validated Version

    Raises:
        InvalidVersionFormat: On any other input (e.g. "v1.0", "1.0", "latest")
    """
    return Version(version=text, file_version=file_version_for(text))


def is_production_tag(tag: str) -> bool:
    """Return True if an image tag should also be published as ``latest``.

    Production tags are bare semantic versions with an optional ``v`` prefix.
    """
    return tag != LATEST_TAG and PRODUCTION_TAG_PATTERN.fullmatch(tag) is not None


def strip_tag_prefix(tag: str) -> str:
    """Remove a leading ``v`` from a git tag (``v1.2.3`` -> ``1.2.3``)."""
    return tag[1:] if tag.startswith("v") else tag
