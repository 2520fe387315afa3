"""Container image and registry models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ImageReference(BaseModel):
    """Fully-qualified container image reference."""

    model_config = ConfigDict(frozen=True)

    registry: str
    image_name: str
    tag: str

    @property
    def repository(self) -> str:
        return f"{self.registry}/{self.image_name}"

    @property
    def uri(self) -> str:
        return f"{self.repository}:{self.tag}"

    def with_tag(self, tag: str) -> "ImageReference":
        return self.model_copy(update={"tag": tag})

    def __str__(self) -> str:
        return self.uri


class RegistryAuthState(str, Enum):
    """Authentication state of the local docker client for a registry."""

    AUTHENTICATED = "authenticated"
    PROMPT_AVAILABLE = "unauthenticated-interactive-prompt-available"
    NON_INTERACTIVE = "unauthenticated-noninteractive"


class PublishReport(BaseModel):
    """Outcome of the registry publisher."""

    image: ImageReference
    pushed_tags: list[str] = Field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def pushed(self) -> bool:
        return bool(self.pushed_tags)
