"""Read-only inspection of the docker credential store."""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

DOCKER_HUB_HOSTS = {"docker.io", "index.docker.io", "registry-1.docker.io"}


def docker_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Locate the docker client config file.

    Honors ``DOCKER_CONFIG`` like the docker CLI does.
    """
    env = os.environ if env is None else env
    config_dir = env.get("DOCKER_CONFIG")
    if config_dir:
        return Path(config_dir) / "config.json"
    return Path.home() / ".docker" / "config.json"


def registry_host(registry: str) -> str:
    """Normalize a registry URL or credential key to its host name.

    Examples:
        >>> registry_host("https://index.docker.io/v1/")
        'docker.io'
        >>> registry_host("registry.example.com/team")
        'registry.example.com'
    """
    host = registry.strip()
    for scheme in ("https://", "http://"):
        if host.startswith(scheme):
            host = host[len(scheme) :]
    host = host.split("/", 1)[0].lower()
    if host in DOCKER_HUB_HOSTS:
        return "docker.io"
    return host


def has_credentials(registry: str, config_path: Path | None = None) -> bool:
    """Return True if the credential store has an entry for the registry.

    Looks at ``auths`` and ``credHelpers`` in the docker config. A missing
    or unreadable config counts as not authenticated.
    """
    path = config_path or docker_config_path()
    if not path.is_file():
        return False
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Cannot read docker config %s: %s", path, e)
        return False
    if not isinstance(data, dict):
        return False

    target = registry_host(registry)
    for section in ("auths", "credHelpers"):
        entries = data.get(section) or {}
        if isinstance(entries, dict) and any(registry_host(key) == target for key in entries):
            return True
    return False
