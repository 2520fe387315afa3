"""Toolchain verification for release hosts."""

import re
import shutil
import subprocess

from pydantic import BaseModel, Field

from ..config import ToolchainConfig
from ..constants import TOOL_CHECK_TIMEOUT


class ToolCheck(BaseModel):
    """Result of checking one external tool."""

    name: str
    ok: bool
    required: bool = True
    version: str | None = None
    message: str = ""
    hints: list[str] = Field(default_factory=list)

    @property
    def blocking(self) -> bool:
        """True if this check failing should fail verification."""
        return self.required and not self.ok


def _probe(cmd: list[str]) -> tuple[int, str] | None:
    """Run a version probe, returning (exit_code, stdout) or None if unavailable."""
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=TOOL_CHECK_TIMEOUT)
    except FileNotFoundError:
        return None
    except subprocess.TimeoutExpired:
        return (-1, "")
    return result.returncode, result.stdout.strip()


def _first_version(text: str) -> str | None:
    match = re.search(r"\d+\.\d+(?:\.\d+)?", text)
    return match.group(0) if match else None


def check_dotnet(exec_path: str = "dotnet", min_major: int = 10) -> ToolCheck:
    probe = _probe([exec_path, "--version"])
    if probe is None:
        return ToolCheck(
            name=".NET SDK",
            ok=False,
            message=".NET SDK not found",
            hints=["Install from: https://dotnet.microsoft.com/download"],
        )
    code, out = probe
    version = _first_version(out) if code == 0 else None
    if version is None:
        return ToolCheck(name=".NET SDK", ok=False, message="Unable to determine .NET SDK version")
    major = int(version.split(".")[0])
    if major < min_major:
        return ToolCheck(
            name=".NET SDK",
            ok=False,
            version=version,
            message=f".NET SDK version {version} is too old (required: {min_major}.0 or higher)",
            hints=["Install from: https://dotnet.microsoft.com/download"],
        )
    return ToolCheck(name=".NET SDK", ok=True, version=version, message=f".NET SDK {version} found")


def check_docker(exec_path: str = "docker") -> list[ToolCheck]:
    """Check the docker CLI and, if present, the daemon."""
    probe = _probe([exec_path, "--version"])
    if probe is None:
        return [
            ToolCheck(
                name="Docker",
                ok=False,
                message="Docker is not installed or not in PATH",
                hints=["Install Docker from: https://www.docker.com/products/docker-desktop"],
            )
        ]
    version = _first_version(probe[1])
    checks = [ToolCheck(name="Docker", ok=True, version=version, message=f"Docker {version} found")]

    info = _probe([exec_path, "info"])
    if info is not None and info[0] == 0:
        checks.append(ToolCheck(name="Docker daemon", ok=True, message="Docker daemon is running"))
    else:
        checks.append(
            ToolCheck(
                name="Docker daemon",
                ok=False,
                message="Docker is installed but daemon is not running",
                hints=[
                    "Linux: sudo systemctl start docker",
                    "macOS: Start Docker Desktop application",
                ],
            )
        )
    return checks


def check_docker_compose(exec_path: str = "docker") -> ToolCheck:
    probe = _probe([exec_path, "compose", "version", "--short"])
    if probe is not None and probe[0] == 0:
        return ToolCheck(
            name="Docker Compose",
            ok=True,
            required=False,
            version=probe[1] or None,
            message=f"Docker Compose v2 ({probe[1] or 'unknown'}) found",
        )
    if shutil.which("docker-compose"):
        return ToolCheck(
            name="Docker Compose", ok=True, required=False, message="Docker Compose v1 found"
        )
    return ToolCheck(
        name="Docker Compose",
        ok=False,
        required=False,
        message="Docker Compose not found (optional)",
        hints=["Install the docker-compose-plugin package"],
    )


def check_git(exec_path: str = "git") -> ToolCheck:
    probe = _probe([exec_path, "--version"])
    if probe is None or probe[0] != 0:
        return ToolCheck(
            name="Git",
            ok=False,
            required=False,
            message="Git not found (needed for quick builds)",
        )
    version = _first_version(probe[1])
    return ToolCheck(name="Git", ok=True, required=False, version=version, message="Git found")


def check_ditto(exec_path: str = "ditto") -> ToolCheck:
    if shutil.which(exec_path):
        return ToolCheck(name="ditto", ok=True, message="ditto found")
    return ToolCheck(
        name="ditto",
        ok=False,
        message="ditto not found (required to archive macOS bundles)",
    )


def run_toolchain_checks(toolchain: ToolchainConfig, host_os: str) -> list[ToolCheck]:
    """Run every check relevant to the host.

    Args:
        toolchain: Configured executables and version requirements
        host_os: Host identifier from detect_host_os()

    Returns:
        Checks in display order
    """
    checks = [check_dotnet(toolchain.dotnet, toolchain.dotnet_min_major)]
    checks.extend(check_docker(toolchain.docker))
    checks.append(check_docker_compose(toolchain.docker))
    checks.append(check_git(toolchain.git))
    if host_os == "macos":
        checks.append(check_ditto(toolchain.ditto))
    return checks
