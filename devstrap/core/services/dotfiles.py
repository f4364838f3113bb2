"""
Dotfiles — copy the prompt theme and shell profile into $HOME.

The theme is always overwritten so updates are picked up. The shell
profile is personal: an existing one is only replaced after the user
confirms, and the old copy is kept under a timestamped backup name.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from devstrap.core.models import EnvState
from devstrap.core.services.install.execution.backup import backup_file

logger = logging.getLogger(__name__)

DEFAULT_DOTFILES_DIR = Path(__file__).resolve().parents[2] / "data" / "dotfiles"

THEME_NAME = "theme.json"
THEME_TARGET = "~/.config/omp/theme.json"
PROFILE_TARGET = "~/.zshrc"

# Repo checkouts carry ".zshrc"; the bundled copy is "zshrc" so it
# survives packaging.
_PROFILE_NAMES = (".zshrc", "zshrc")


class DotfileError(Exception):
    """Raised when a dotfile source is missing."""


@dataclass
class DotfileResult:
    """What happened to one dotfile."""

    target: Path
    action: str                     # installed, replaced, skipped, failed
    backup: Path | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.action != "failed"

    def to_dict(self) -> dict:
        return {
            "target": str(self.target),
            "action": self.action,
            "backup": str(self.backup) if self.backup else None,
            "error": self.error,
        }


def theme_source(dotfiles_dir: Path) -> Path:
    path = dotfiles_dir / THEME_NAME
    if not path.is_file():
        raise DotfileError(f"Theme not found: {path}")
    return path


def profile_source(dotfiles_dir: Path) -> Path:
    for name in _PROFILE_NAMES:
        path = dotfiles_dir / name
        if path.is_file():
            return path
    raise DotfileError(f"No .zshrc found in {dotfiles_dir}")


def install_theme(source: Path, env: EnvState) -> DotfileResult:
    """Copy the prompt theme into place, replacing any existing one."""
    target = env.expand(THEME_TARGET)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as e:
        logger.warning("Could not install theme to %s: %s", target, e)
        return DotfileResult(target=target, action="failed", error=str(e))
    logger.info("Installed theme to %s", target)
    return DotfileResult(target=target, action="installed")


def install_profile(
    source: Path,
    env: EnvState,
    confirm: Callable[[str], bool],
) -> DotfileResult:
    """Copy the shell profile into place.

    Args:
        source: Profile to install.
        env: Supplies the home directory.
        confirm: Asked before an existing profile is replaced. On a
            negative answer the existing file is left untouched.
    """
    target = env.expand(PROFILE_TARGET)

    if not target.exists():
        try:
            shutil.copyfile(source, target)
        except OSError as e:
            logger.warning("Could not install %s: %s", target, e)
            return DotfileResult(target=target, action="failed", error=str(e))
        logger.info("Installed %s", target)
        return DotfileResult(target=target, action="installed")

    if not confirm(
        f"An existing {target} was found. Overwrite it with the repository version?"
    ):
        logger.info("Skipping %s update", target)
        return DotfileResult(target=target, action="skipped")

    try:
        backup = backup_file(target)
    except OSError as e:
        logger.warning("Could not back up %s: %s", target, e)
        return DotfileResult(target=target, action="failed", error=str(e))

    try:
        shutil.copyfile(source, target)
    except OSError as e:
        logger.warning("Could not replace %s: %s (backup kept at %s)", target, e, backup)
        return DotfileResult(target=target, action="failed", backup=backup, error=str(e))

    logger.info("Replaced %s (backup saved to %s)", target, backup)
    return DotfileResult(target=target, action="replaced", backup=backup)
