"""
Package models — what to install, how it went, and the environment.

PackageSpec and FallbackTool are declarations of intent. InstallResult
is the receipt for one attempt. EnvState is the process environment
threaded through every installer call: installers never touch
``os.environ``, they return an updated EnvState instead.
"""

from __future__ import annotations

import os
import shutil
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from devstrap.core.models.platform import PackageManager


class InstallOutcome(str, Enum):
    """Result of a single install attempt."""

    ALREADY_PRESENT = "already-present"
    INSTALLED = "installed"
    FAILED = "failed-non-fatal"


class PackageSpec(BaseModel):
    """A logical package plus per-manager naming differences.

    ``binary`` is what gets probed on the search path (defaults to the
    logical name). ``alt_binaries`` also count as present, e.g. Debian
    ships bat as ``batcat``.
    """

    name: str
    binary: str | None = None
    alt_binaries: list[str] = Field(default_factory=list)
    overrides: dict[PackageManager, str] = Field(default_factory=dict)
    remedy: str = ""

    def install_name(self, manager: PackageManager) -> str:
        """Package name to hand to ``manager``."""
        return self.overrides.get(manager, self.name)

    def binaries(self) -> list[str]:
        return [self.binary or self.name, *self.alt_binaries]


class FallbackTool(BaseModel):
    """A tool installed by Homebrew on macOS, else by a vendor script.

    ``script_args`` may contain ``{dest}``, replaced with the expanded
    destination directory.
    """

    name: str
    brew_formula: str
    script_url: str
    script_args: list[str] = Field(default_factory=list)
    destination: str = "~/.local/bin"

    def resolved_args(self, dest: Path | str) -> list[str]:
        return [arg.replace("{dest}", str(dest)) for arg in self.script_args]


class InstallResult(BaseModel):
    """Receipt for one install attempt. Never raised, always returned."""

    name: str
    outcome: InstallOutcome
    manager: str = ""
    method: str = ""                # brew, apt, script, cargo, ...
    detail: str = ""
    remedy: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is not InstallOutcome.FAILED

    @property
    def failed(self) -> bool:
        return self.outcome is InstallOutcome.FAILED

    @classmethod
    def present(cls, name: str, **kwargs) -> InstallResult:
        return cls(name=name, outcome=InstallOutcome.ALREADY_PRESENT, **kwargs)

    @classmethod
    def installed(cls, name: str, **kwargs) -> InstallResult:
        return cls(name=name, outcome=InstallOutcome.INSTALLED, **kwargs)

    @classmethod
    def failure(cls, name: str, detail: str, **kwargs) -> InstallResult:
        return cls(name=name, outcome=InstallOutcome.FAILED, detail=detail, **kwargs)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")


class EnvState(BaseModel):
    """Explicit environment for one provisioning run.

    ``path`` is the executable search path, highest priority first.
    ``apt_refreshed`` records that ``apt-get update`` already ran.
    """

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = ()
    home: str = ""
    apt_refreshed: bool = False

    @classmethod
    def from_environ(cls, environ: dict[str, str] | None = None) -> EnvState:
        """Snapshot the process environment."""
        environ = dict(os.environ) if environ is None else environ
        raw = environ.get("PATH", "")
        return cls(
            path=tuple(p for p in raw.split(os.pathsep) if p),
            home=environ.get("HOME") or str(Path.home()),
        )

    @property
    def search_path(self) -> str:
        return os.pathsep.join(self.path)

    @property
    def home_dir(self) -> Path:
        return Path(self.home)

    def which(self, binary: str) -> str | None:
        """Resolve ``binary`` against this state's search path only."""
        if not self.path:
            return None
        return shutil.which(binary, path=self.search_path)

    def has(self, binary: str) -> bool:
        return self.which(binary) is not None

    def expand(self, value: str) -> Path:
        """Expand a leading ``~`` against this state's home."""
        if value == "~" or value.startswith("~/"):
            return self.home_dir / value[2:]
        return Path(value)

    def with_path_prepended(self, directory: Path | str) -> EnvState:
        d = str(directory)
        if self.path and self.path[0] == d:
            return self
        rest = tuple(p for p in self.path if p != d)
        return self.model_copy(update={"path": (d, *rest)})

    def with_apt_refreshed(self) -> EnvState:
        return self.model_copy(update={"apt_refreshed": True})

    def subprocess_env(self) -> dict[str, str]:
        """Environment for child processes: inherited, with our PATH/HOME."""
        env = os.environ.copy()
        env["PATH"] = self.search_path
        env["HOME"] = self.home
        return env
