"""Version model shared by the packager and the image builder."""

from pydantic import BaseModel, ConfigDict, Field


class Version(BaseModel):
    """A validated release version.

    Attributes:
        version: Semantic version, optionally with a prerelease suffix.
        file_version: Four-part numeric version stamped into binaries
            (prerelease stripped, fourth component always 0).
    """

    model_config = ConfigDict(frozen=True)

    version: str = Field(description="Semantic version (MAJOR.MINOR.PATCH[-PRERELEASE])")
    file_version: str = Field(description="Numeric file version (MAJOR.MINOR.PATCH.0)")

    @property
    def is_prerelease(self) -> bool:
        return "-" in self.version

    def __str__(self) -> str:
        return self.version
