"""Platform models for the agent build matrix."""

from pydantic import BaseModel, ConfigDict, Field


class PlatformSpec(BaseModel):
    """A single publish target.

    Attributes:
        runtime_id: Runtime identifier passed to ``dotnet publish -r``.
        display_name: Human-readable platform name.
        binary_extension: Suffix of the agent executable ("" or ".exe").
    """

    model_config = ConfigDict(frozen=True)

    runtime_id: str
    display_name: str
    binary_extension: str = ""

    @property
    def is_macos(self) -> bool:
        return self.runtime_id.startswith("osx-")

    def executable_name(self, agent_name: str) -> str:
        return f"{agent_name}{self.binary_extension}"


class PlatformMatrix(BaseModel):
    """Resolved build matrix.

    ``platforms`` are built in order; ``skipped`` were omitted because the
    host cannot build them.
    """

    model_config = ConfigDict(frozen=True)

    selector: str
    platforms: tuple[PlatformSpec, ...] = Field(default_factory=tuple)
    skipped: tuple[PlatformSpec, ...] = Field(default_factory=tuple)

    @property
    def runtime_ids(self) -> list[str]:
        return [p.runtime_id for p in self.platforms]
