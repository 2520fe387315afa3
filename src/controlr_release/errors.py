"""Release errors.

Every error is fatal to the current run. Each carries the affected platform or
tag when there is one, plus follow-up commands the operator can run by hand.
"""

from .constants import VERSION_EXAMPLES


class ReleaseError(Exception):
    """Base exception for release orchestration errors."""

    exit_code = 1

    def __init__(
        self,
        message: str,
        *,
        platform: str | None = None,
        tag: str | None = None,
        hints: list[str] | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.platform = platform
        self.tag = tag
        self.hints = hints or []
        self.details = details

    @property
    def kind(self) -> str:
        """Error kind name used in JSON output."""
        return type(self).__name__

    def to_dict(self) -> dict[str, object]:
        """Serialize for JSON output."""
        data: dict[str, object] = {"kind": self.kind, "message": self.message}
        if self.platform:
            data["platform"] = self.platform
        if self.tag:
            data["tag"] = self.tag
        if self.hints:
            data["hints"] = self.hints
        return data


class ConfigError(ReleaseError):
    """Configuration file could not be loaded."""


class ToolchainUnavailable(ReleaseError):
    """A required external tool is missing or not running."""


class InvalidVersionFormat(ReleaseError):
    """Version string does not follow semantic versioning."""

    def __init__(self, version: str) -> None:
        super().__init__(
            f"Invalid version format: {version}",
            details=f"Version must follow semantic versioning (e.g., {VERSION_EXAMPLES})",
        )
        self.version = version


class UnknownPlatform(ReleaseError):
    """Platform selector is not one of the known runtime identifiers."""

    def __init__(self, selector: str, valid: list[str]) -> None:
        super().__init__(
            f"Unknown platform: {selector}",
            details=f"Valid platforms: {', '.join(valid)}",
        )
        self.selector = selector
        self.valid = valid


class CompanionBuildFailed(ReleaseError):
    """Desktop client publish or archive failed for a platform."""


class AgentBuildFailed(ReleaseError):
    """Agent publish failed for a platform."""


class ArtifactNotFound(ReleaseError):
    """Agent publish reported success but the executable is missing."""


class DockerfileNotFound(ReleaseError):
    """Dockerfile is not where the configuration says it is."""


class ImageBuildFailed(ReleaseError):
    """Container image build failed."""


class LoginFailed(ReleaseError):
    """Interactive registry login failed."""


class AuthenticationRequiredNonInteractive(ReleaseError):
    """Registry is not authenticated and no terminal is available to log in."""


class PushFailed(ReleaseError):
    """Pushing a tag to the registry failed."""
