"""
L4 Execution — HTTPS downloads and vendor install scripts.

Scripts are downloaded to a tempfile and executed from disk rather
than piped from curl into a shell, so a truncated download never
runs half a script.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
import urllib.request
from pathlib import Path
from typing import Any

from devstrap import __version__
from devstrap.core.models import EnvState
from devstrap.core.services.install.data.constants import TIMEOUT_DOWNLOAD, TIMEOUT_INSTALL
from devstrap.core.services.install.execution.subprocess_runner import _run_subprocess

logger = logging.getLogger(__name__)

_USER_AGENT = f"devstrap/{__version__}"


def _fetch(url: str, timeout: int) -> bytes:
    req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return resp.read()


def download_file(
    url: str,
    dest: Path,
    *,
    timeout: int = TIMEOUT_DOWNLOAD,
) -> dict[str, Any]:
    """Download ``url`` to ``dest``, creating parent directories.

    The file is written to a sibling temp path and renamed into place,
    so a failed download never leaves a partial file behind.

    Returns:
        ``{"ok": True, "path": "...", "size_bytes": N}`` or error dict.
    """
    try:
        content = _fetch(url, timeout)
    except Exception as exc:
        return {"ok": False, "error": f"Download failed: {exc}"}

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        tmp = dest.with_name(dest.name + ".part")
        tmp.write_bytes(content)
        tmp.replace(dest)
    except OSError as exc:
        return {"ok": False, "error": f"Cannot write {dest}: {exc}"}

    logger.info("Downloaded %s → %s (%d bytes)", url, dest, len(content))
    return {"ok": True, "path": str(dest), "size_bytes": len(content)}


def download_script(url: str, *, timeout: int = TIMEOUT_DOWNLOAD) -> dict[str, Any]:
    """Download an install script to a private tempfile.

    Returns::

        {"ok": True, "path": "/tmp/xxx.sh", "sha256": "...", "size_bytes": N}
        or
        {"ok": False, "error": "..."}
    """
    try:
        content = _fetch(url, timeout)
    except Exception as exc:
        return {"ok": False, "error": f"Download failed: {exc}"}

    if not content.strip():
        return {"ok": False, "error": f"Empty script from {url}"}

    fd, path = tempfile.mkstemp(suffix=".sh", prefix="devstrap_script_")
    try:
        os.write(fd, content)
    finally:
        os.close(fd)
    os.chmod(path, 0o700)

    sha256 = hashlib.sha256(content).hexdigest()
    logger.debug("Fetched %s (sha256=%s)", url, sha256)
    return {"ok": True, "path": path, "sha256": sha256, "size_bytes": len(content)}


def cleanup_script(path: str) -> None:
    """Remove a temporary script file."""
    try:
        os.unlink(path)
    except OSError:
        pass


def run_remote_script(
    url: str,
    args: list[str] | None = None,
    *,
    env: EnvState,
    interpreter: str = "bash",
    elevate: bool = False,
    timeout: int = TIMEOUT_INSTALL,
    env_overrides: dict[str, str] | None = None,
    capture: bool = True,
) -> dict[str, Any]:
    """Download a vendor install script and run it with ``interpreter``.

    Equivalent to ``curl -fsSL URL | INTERPRETER -s -- ARGS`` but the
    script is on disk before anything executes.
    """
    fetched = download_script(url)
    if not fetched["ok"]:
        return fetched

    try:
        return _run_subprocess(
            [interpreter, fetched["path"], *(args or [])],
            env=env,
            elevate=elevate,
            timeout=timeout,
            env_overrides=env_overrides,
            capture=capture,
        )
    finally:
        cleanup_script(fetched["path"])
