"""
L2 Resolver — Install command selection.

Turns a package manager + package names into concrete commands.
Pure functions: no subprocess, no filesystem.
"""

from __future__ import annotations

from devstrap.core.models import PackageManager

# Managers that write to system prefixes and therefore want root.
# Homebrew refuses to run as root.
_NEEDS_SUDO: dict[PackageManager, bool] = {
    PackageManager.HOMEBREW: False,
    PackageManager.APT: True,
    PackageManager.DNF: True,
    PackageManager.PACMAN: True,
    PackageManager.ZYPPER: True,
}


def _build_pkg_install_cmd(packages: list[str], pm: PackageManager) -> list[str]:
    """Build a package-install command for a list of packages.

    Args:
        packages: Package names to install (already translated).
        pm: Package manager.

    Returns:
        Command list suitable for subprocess.run().
    """
    if pm is PackageManager.HOMEBREW:
        return ["brew", "install", *packages]
    if pm is PackageManager.APT:
        return ["apt-get", "install", "-y", *packages]
    if pm is PackageManager.DNF:
        return ["dnf", "install", "-y", *packages]
    if pm is PackageManager.PACMAN:
        return ["pacman", "-Sy", "--noconfirm", *packages]
    if pm is PackageManager.ZYPPER:
        return ["zypper", "install", "-y", *packages]
    raise ValueError(f"No install command for package manager '{pm}'")


def _build_refresh_cmd(pm: PackageManager) -> list[str] | None:
    """Index refresh needed before the first install, if any.

    Only apt needs one; pacman refreshes via ``-Sy`` on every install.
    """
    if pm is PackageManager.APT:
        return ["apt-get", "update", "-y"]
    return None


def _needs_sudo(pm: PackageManager) -> bool:
    return _NEEDS_SUDO[pm]
