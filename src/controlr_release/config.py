"""Configuration management for controlr-release."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .constants import CONFIG_FILENAME, DEFAULT_IMAGE_PLATFORM
from .errors import ConfigError


class ProjectConfig(BaseModel):
    """Layout of the application repository being released.

    All relative paths are resolved against ``root``.
    """

    root: Path = Field(default=Path("."), description="Repository root")
    desktop_project: Path = Field(
        default=Path("ControlR.DesktopClient"), description="Desktop client project directory"
    )
    agent_project: Path = Field(default=Path("ControlR.Agent"), description="Agent project directory")
    agent_name: str = Field(default="ControlR.Agent", description="Agent executable name")
    output_dir: Path = Field(
        default=Path("ControlR.Web.Server/wwwroot/downloads"),
        description="Versioned output tree served to downstream deployment",
    )
    staging_dir: Path = Field(
        default=Path("ControlR.Agent.Common/Resources"),
        description="Desktop bundle staging root (shared slot plus per-runtime directories)",
    )
    configuration: str = "Release"
    bundle_property: str = Field(
        default="",
        description=(
            "MSBuild property that also passes the per-runtime bundle path to the agent build; "
            "empty means the agent reads the shared slot in the staging root"
        ),
    )

    def resolve(self, path: Path) -> Path:
        """Resolve a project-relative path against the repository root."""
        return path if path.is_absolute() else self.root / path

    @property
    def output_root(self) -> Path:
        return self.resolve(self.output_dir)

    @property
    def staging_root(self) -> Path:
        return self.resolve(self.staging_dir)

    @property
    def desktop_dir(self) -> Path:
        return self.resolve(self.desktop_project)

    @property
    def agent_dir(self) -> Path:
        return self.resolve(self.agent_project)

    @property
    def desktop_publish_root(self) -> Path:
        """Per-runtime desktop publish output lives below this directory."""
        return self.desktop_dir / "bin" / "publish"

    @property
    def agent_publish_root(self) -> Path:
        return self.agent_dir / "bin" / "publish"


class DockerConfig(BaseModel):
    """Container image settings."""

    registry: str = "registry.ucstack.io"
    image_name: str = "controlr/server"
    dockerfile: Path = Path("ControlR.Web.Server/Dockerfile")
    build_context: Path = Path(".")
    platform: str = DEFAULT_IMAGE_PLATFORM
    build_configuration: str = "Release"
    run_port: int = 8080


class ToolchainConfig(BaseModel):
    """External executables and version requirements."""

    dotnet: str = "dotnet"
    docker: str = "docker"
    git: str = "git"
    ditto: str = "ditto"
    dotnet_min_major: int = Field(default=10, ge=1)


class ReleaseConfig(BaseModel):
    """Root configuration for controlr-release."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    docker: DockerConfig = Field(default_factory=DockerConfig)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    @property
    def dockerfile_path(self) -> Path:
        return self.project.resolve(self.docker.dockerfile)

    @property
    def build_context_path(self) -> Path:
        return self.project.resolve(self.docker.build_context)


def find_config(cwd: Path) -> Path | None:
    """Return the config file in cwd, if one exists."""
    candidate = cwd / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(config_path: Path | None = None, cwd: Path | None = None) -> ReleaseConfig:
    """Load config from controlr-release.toml.

    Args:
        config_path: Explicit config file. Must exist when given.
        cwd: Directory searched when no explicit path is given (default: cwd)

    Returns:
        Loaded configuration, or defaults if no config file exists. The
        project root is always absolute, resolved against the config file's
        directory (or cwd when there is no file).

    Raises:
        ConfigError: If the file is missing, is not valid TOML or fails validation
    """
    cwd = cwd or Path.cwd()
    if config_path is not None and not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")
    path = config_path or find_config(cwd)

    if path is None:
        config = ReleaseConfig()
        base = cwd
    else:
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e
        try:
            config = ReleaseConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}", details=str(e)) from e
        base = path.parent

    if not config.project.root.is_absolute():
        config.project.root = (base / config.project.root).resolve()
    return config


def write_config_template(directory: Path) -> Path:
    """Write default controlr-release.toml template.

    Args:
        directory: Directory to write the config file into

    Returns:
        Path to the written config file
    """
    config_path = directory / CONFIG_FILENAME
    defaults = ReleaseConfig()
    template = {
        "project": {
            "root": ".",
            "desktop_project": str(defaults.project.desktop_project),
            "agent_project": str(defaults.project.agent_project),
            "agent_name": defaults.project.agent_name,
            "output_dir": defaults.project.output_dir.as_posix(),
            "staging_dir": defaults.project.staging_dir.as_posix(),
            "configuration": defaults.project.configuration,
            "bundle_property": defaults.project.bundle_property,
        },
        "docker": {
            "registry": defaults.docker.registry,
            "image_name": defaults.docker.image_name,
            "dockerfile": defaults.docker.dockerfile.as_posix(),
            "build_context": ".",
            "platform": defaults.docker.platform,
            "build_configuration": defaults.docker.build_configuration,
            "run_port": defaults.docker.run_port,
        },
        "toolchain": {
            "dotnet": defaults.toolchain.dotnet,
            "docker": defaults.toolchain.docker,
            "git": defaults.toolchain.git,
            "ditto": defaults.toolchain.ditto,
            "dotnet_min_major": defaults.toolchain.dotnet_min_major,
        },
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
