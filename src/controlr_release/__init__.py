"""controlr-release: build-and-release orchestrator for ControlR agents and images."""

__version__ = "0.1.0"
