"""Tests for host toolchain verification."""

from unittest.mock import patch

import pytest

from controlr_release.config import ToolchainConfig
from controlr_release.services.toolchain import (
    check_docker,
    check_docker_compose,
    check_dotnet,
    run_toolchain_checks,
)


class TestCheckDotnet:
    """Tests for check_dotnet."""

    def test_supported_version(self) -> None:
        with patch("controlr_release.services.toolchain._probe", return_value=(0, "10.0.100")):
            check = check_dotnet(min_major=10)
        assert check.ok
        assert check.version == "10.0.100"

    def test_too_old(self) -> None:
        with patch("controlr_release.services.toolchain._probe", return_value=(0, "8.0.404")):
            check = check_dotnet(min_major=10)
        assert check.blocking
        assert "too old" in check.message

    def test_not_installed(self) -> None:
        with patch("controlr_release.services.toolchain._probe", return_value=None):
            check = check_dotnet()
        assert check.blocking
        assert check.hints

    def test_unparseable_output(self) -> None:
        with patch("controlr_release.services.toolchain._probe", return_value=(1, "")):
            check = check_dotnet()
        assert not check.ok


class TestCheckDocker:
    """Tests for check_docker."""

    def test_installed_and_running(self) -> None:
        probes = [(0, "Docker version 27.3.1, build ce12230"), (0, "")]
        with patch("controlr_release.services.toolchain._probe", side_effect=probes):
            checks = check_docker()
        assert [c.ok for c in checks] == [True, True]
        assert checks[0].version == "27.3.1"

    def test_daemon_down(self) -> None:
        probes = [(0, "Docker version 27.3.1"), (1, "")]
        with patch("controlr_release.services.toolchain._probe", side_effect=probes):
            checks = check_docker()
        assert checks[1].blocking
        assert "daemon" in checks[1].message

    def test_not_installed(self) -> None:
        with patch("controlr_release.services.toolchain._probe", return_value=None):
            checks = check_docker()
        assert len(checks) == 1
        assert checks[0].blocking

    def test_compose_is_optional(self) -> None:
        with (
            patch("controlr_release.services.toolchain._probe", return_value=None),
            patch("controlr_release.services.toolchain.shutil.which", return_value=None),
        ):
            check = check_docker_compose()
        assert not check.ok
        assert not check.blocking


class TestRunToolchainChecks:
    @pytest.mark.parametrize(("host_os", "has_ditto"), [("macos", True), ("linux", False)])
    def test_ditto_only_on_macos(self, host_os: str, has_ditto: bool) -> None:
        with (
            patch("controlr_release.services.toolchain._probe", return_value=(0, "10.0.100")),
            patch("controlr_release.services.toolchain.shutil.which", return_value="/usr/bin/ditto"),
        ):
            checks = run_toolchain_checks(ToolchainConfig(), host_os)
        names = [c.name for c in checks]
        assert ("ditto" in names) is has_ditto
        assert names[0] == ".NET SDK"
