"""
Platform model — which package manager this workstation uses.

Selected exactly once per run by the platform resolver and frozen
afterward. Every installer call receives the same Platform.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PackageManager(str, Enum):
    """Supported OS package managers."""

    HOMEBREW = "homebrew"
    APT = "apt"
    DNF = "dnf"
    PACMAN = "pacman"
    ZYPPER = "zypper"

    @property
    def binary(self) -> str:
        """Executable name probed on the search path."""
        return _BINARIES[self]


_BINARIES: dict[PackageManager, str] = {
    PackageManager.HOMEBREW: "brew",
    PackageManager.APT: "apt-get",
    PackageManager.DNF: "dnf",
    PackageManager.PACMAN: "pacman",
    PackageManager.ZYPPER: "zypper",
}


class Platform(BaseModel):
    """The resolved platform for this run.

    ``distro`` is cosmetic (debian, fedora, arch, suse); it is empty
    on macOS.
    """

    model_config = ConfigDict(frozen=True)

    kernel: str
    manager: PackageManager
    distro: str = ""

    @property
    def is_homebrew(self) -> bool:
        return self.manager is PackageManager.HOMEBREW

    def label(self) -> str:
        """Human-readable summary, e.g. ``Linux/arch (pacman)``."""
        name = f"{self.kernel}/{self.distro}" if self.distro else self.kernel
        return f"{name} ({self.manager.value})"

    def to_dict(self) -> dict:
        return {
            "kernel": self.kernel,
            "manager": self.manager.value,
            "binary": self.manager.binary,
            "distro": self.distro,
        }
