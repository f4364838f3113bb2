"""
Platform resolver — kernel name + available binaries → package manager.

Pure decision made once at process start. macOS always means Homebrew
(even when brew is not installed yet; the bootstrap step installs it).
On Linux the first manager found in priority order wins.
"""

from __future__ import annotations

import logging
import platform as _platform

from devstrap.core.models import EnvState, PackageManager, Platform

logger = logging.getLogger(__name__)

DARWIN = "Darwin"
LINUX = "Linux"

# Debian-family → Fedora-family → Arch → openSUSE
LINUX_PRIORITY: tuple[tuple[PackageManager, str], ...] = (
    (PackageManager.APT, "debian"),
    (PackageManager.DNF, "fedora"),
    (PackageManager.PACMAN, "arch"),
    (PackageManager.ZYPPER, "suse"),
)


class UnsupportedPlatform(Exception):
    """Raised when no supported package manager can be selected."""


def resolve_platform(
    kernel: str | None = None,
    env: EnvState | None = None,
) -> Platform:
    """Select the package manager for this host.

    Args:
        kernel: Kernel name as reported by ``uname -s``. Defaults to
            ``platform.system()``.
        env: Environment whose search path is probed. Defaults to the
            current process environment.

    Returns:
        The frozen Platform for this run.

    Raises:
        UnsupportedPlatform: Unknown kernel, or a Linux host with none
            of the known package managers.
    """
    kernel = _platform.system() if kernel is None else kernel
    env = EnvState.from_environ() if env is None else env

    if kernel == DARWIN:
        selected = Platform(kernel=kernel, manager=PackageManager.HOMEBREW)
        logger.info("Resolved platform %s", selected.label())
        return selected

    if kernel == LINUX:
        for manager, distro in LINUX_PRIORITY:
            if env.has(manager.binary):
                selected = Platform(kernel=kernel, manager=manager, distro=distro)
                logger.info("Resolved platform %s", selected.label())
                return selected
        raise UnsupportedPlatform(
            "Unsupported Linux distribution: none of "
            + ", ".join(m.binary for m, _ in LINUX_PRIORITY)
            + " found on PATH. Please install dependencies manually."
        )

    raise UnsupportedPlatform(
        f"Unsupported platform '{kernel}'. Run under macOS, Linux or WSL."
    )
