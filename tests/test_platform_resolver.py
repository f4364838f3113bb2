"""
Tests for platform resolution — kernel + search path → package manager.
"""

import pytest

from devstrap.core.models import PackageManager
from devstrap.core.services.platform_resolver import UnsupportedPlatform, resolve_platform


class TestDarwin:
    def test_always_homebrew(self, env):
        """macOS selects Homebrew even when brew is not installed yet."""
        assert not env.has("brew")
        p = resolve_platform("Darwin", env)
        assert p.manager is PackageManager.HOMEBREW
        assert p.kernel == "Darwin"


class TestLinux:
    """Priority order: apt-get, dnf, pacman, zypper."""

    @pytest.mark.parametrize(
        "binary, manager, distro",
        [
            ("apt-get", PackageManager.APT, "debian"),
            ("dnf", PackageManager.DNF, "fedora"),
            ("pacman", PackageManager.PACMAN, "arch"),
            ("zypper", PackageManager.ZYPPER, "suse"),
        ],
    )
    def test_single_manager(self, env, make_bin, binary, manager, distro):
        make_bin(binary)
        p = resolve_platform("Linux", env)
        assert p.manager is manager
        assert p.distro == distro

    def test_apt_wins_over_everything(self, env, make_bin):
        for name in ("zypper", "pacman", "dnf", "apt-get"):
            make_bin(name)
        assert resolve_platform("Linux", env).manager is PackageManager.APT

    def test_dnf_beats_pacman(self, env, make_bin):
        make_bin("pacman")
        make_bin("dnf")
        assert resolve_platform("Linux", env).manager is PackageManager.DNF

    def test_pacman_beats_zypper(self, env, make_bin):
        make_bin("zypper")
        make_bin("pacman")
        assert resolve_platform("Linux", env).manager is PackageManager.PACMAN

    def test_no_manager_is_fatal(self, env):
        with pytest.raises(UnsupportedPlatform, match="Unsupported Linux distribution"):
            resolve_platform("Linux", env)


class TestOtherKernels:
    @pytest.mark.parametrize("kernel", ["FreeBSD", "Windows", "SunOS", ""])
    def test_unsupported(self, env, make_bin, kernel):
        make_bin("apt-get")
        with pytest.raises(UnsupportedPlatform, match="Unsupported platform"):
            resolve_platform(kernel, env)
