"""Tests for docker credential store inspection."""

import json
from pathlib import Path

import pytest

from controlr_release.services import docker_config_path, has_credentials, registry_host


class TestRegistryHost:
    @pytest.mark.parametrize(
        ("registry", "host"),
        [
            ("registry.example.com", "registry.example.com"),
            ("https://registry.example.com/v2/", "registry.example.com"),
            ("Registry.Example.com/team", "registry.example.com"),
            ("https://index.docker.io/v1/", "docker.io"),
            ("registry-1.docker.io", "docker.io"),
            ("localhost:5000", "localhost:5000"),
        ],
    )
    def test_normalizes(self, registry: str, host: str) -> None:
        assert registry_host(registry) == host


class TestDockerConfigPath:
    def test_honors_docker_config(self, tmp_path: Path) -> None:
        assert docker_config_path({"DOCKER_CONFIG": str(tmp_path)}) == tmp_path / "config.json"

    def test_defaults_to_home(self) -> None:
        assert docker_config_path({}) == Path.home() / ".docker" / "config.json"


class TestHasCredentials:
    """Tests for has_credentials."""

    def write(self, tmp_path: Path, data: object) -> Path:
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data))
        return path

    def test_auths_entry(self, tmp_path: Path) -> None:
        path = self.write(tmp_path, {"auths": {"https://registry.example.com": {"auth": "eA=="}}})
        assert has_credentials("registry.example.com", path)

    def test_cred_helper_entry(self, tmp_path: Path) -> None:
        path = self.write(tmp_path, {"credHelpers": {"registry.example.com": "pass"}})
        assert has_credentials("registry.example.com", path)

    def test_docker_hub_aliases(self, tmp_path: Path) -> None:
        path = self.write(tmp_path, {"auths": {"https://index.docker.io/v1/": {}}})
        assert has_credentials("docker.io", path)

    def test_other_registry_only(self, tmp_path: Path) -> None:
        path = self.write(tmp_path, {"auths": {"ghcr.io": {}}, "credsStore": "desktop"})
        assert not has_credentials("registry.example.com", path)

    def test_missing_file(self, tmp_path: Path) -> None:
        assert not has_credentials("registry.example.com", tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert not has_credentials("registry.example.com", path)

    def test_unexpected_shape(self, tmp_path: Path) -> None:
        path = self.write(tmp_path, ["auths"])
        assert not has_credentials("registry.example.com", path)

    def test_reads_docker_config_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        self.write(tmp_path, {"auths": {"registry.example.com": {}}})
        monkeypatch.setenv("DOCKER_CONFIG", str(tmp_path))
        assert has_credentials("registry.example.com")
