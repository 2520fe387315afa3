"""Constants for controlr-release."""

# Subprocess timeouts (seconds)
DOTNET_PUBLISH_TIMEOUT = 1800  # 30 minutes for a self-contained publish
DOCKER_BUILD_TIMEOUT = 3600
DOCKER_PUSH_TIMEOUT = 1800
DOCKER_QUERY_TIMEOUT = 30
GIT_TIMEOUT = 30
TOOL_CHECK_TIMEOUT = 10

DEFAULT_VERSION = "1.0.0"
DEFAULT_IMAGE_TAG = "latest"
DEFAULT_IMAGE_PLATFORM = "linux/amd64"
LATEST_TAG = "latest"

CONFIG_FILENAME = "controlr-release.toml"
VERSION_MARKER_FILENAME = "Version.txt"

# Archive names consumed by the agent build as an embedded resource
BUNDLE_ARCHIVE_NAME = "ControlR.DesktopClient.zip"
MACOS_BUNDLE_ARCHIVE_NAME = "ControlR.app.zip"

VERSION_EXAMPLES = "1.0.0, 1.2.3-beta, 2.0.0-rc1"
