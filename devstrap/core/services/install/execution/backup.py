"""
L4 Execution — Timestamped backups.

Moves a file aside before it is replaced. Backup names follow the
``PATH.backup.<unix-epoch>`` convention.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

logger = logging.getLogger(__name__)


def backup_path_for(path: Path, ts: int | None = None) -> Path:
    """Return a backup path for ``path`` that does not exist yet."""
    ts = int(time.time()) if ts is None else ts
    candidate = path.with_name(f"{path.name}.backup.{ts}")
    n = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.name}.backup.{ts}.{n}")
        n += 1
    return candidate


def backup_file(path: Path) -> Path:
    """Rename ``path`` to its backup name and return the new location.

    Raises:
        OSError: The rename failed. The original file is untouched.
    """
    dest = backup_path_for(path)
    path.rename(dest)
    logger.info("Backed up %s → %s", path, dest)
    return dest
