"""Platform build matrix resolution."""

import logging
import sys

from ..errors import UnknownPlatform
from ..models import PlatformMatrix, PlatformSpec

logger = logging.getLogger(__name__)

ALL_PLATFORMS = "all"

LINUX_X64 = PlatformSpec(runtime_id="linux-x64", display_name="Linux x64")
WIN_X64 = PlatformSpec(runtime_id="win-x64", display_name="Windows x64", binary_extension=".exe")
WIN_X86 = PlatformSpec(runtime_id="win-x86", display_name="Windows x86", binary_extension=".exe")
OSX_X64 = PlatformSpec(runtime_id="osx-x64", display_name="macOS x64")
OSX_ARM64 = PlatformSpec(runtime_id="osx-arm64", display_name="macOS ARM64")

# Build order for "all"
KNOWN_PLATFORMS: tuple[PlatformSpec, ...] = (LINUX_X64, WIN_X64, WIN_X86, OSX_X64, OSX_ARM64)
PLATFORMS_BY_ID = {p.runtime_id: p for p in KNOWN_PLATFORMS}


def valid_selectors() -> list[str]:
    return [*PLATFORMS_BY_ID, ALL_PLATFORMS]


def detect_host_os(platform_name: str | None = None) -> str:
    """Map sys.platform to "macos", "linux" or "windows".

    Unknown platforms are returned unchanged.
    """
    name = platform_name or sys.platform
    if name == "darwin":
        return "macos"
    if name.startswith("linux"):
        return "linux"
    if name in ("win32", "cygwin", "msys"):
        return "windows"
    return name


def resolve_platforms(selector: str, host_os: str | None = None) -> PlatformMatrix:
    """Resolve a platform selector into an ordered build matrix.

    A runtime id resolves to exactly that platform. ``all`` resolves to the
    Linux and Windows targets, plus the macOS targets only when the host is
    macOS; otherwise the macOS targets are skipped with a warning because
    they cannot be cross-compiled.

    Args:
        selector: Runtime id or "all"
        host_os: Host identifier (default: detected)

    Returns:
        PlatformMatrix with the platforms to build and those skipped

    Raises:
        UnknownPlatform: If selector is not a runtime id or "all"
    """
    host_os = host_os or detect_host_os()

    if selector in PLATFORMS_BY_ID:
        return PlatformMatrix(selector=selector, platforms=(PLATFORMS_BY_ID[selector],))

    if selector != ALL_PLATFORMS:
        raise UnknownPlatform(selector, valid_selectors())

    if host_os == "macos":
        return PlatformMatrix(selector=selector, platforms=KNOWN_PLATFORMS)

    buildable = tuple(p for p in KNOWN_PLATFORMS if not p.is_macos)
    skipped = tuple(p for p in KNOWN_PLATFORMS if p.is_macos)
    logger.warning("Skipping macOS builds (not running on macOS)")
    return PlatformMatrix(selector=selector, platforms=buildable, skipped=skipped)
