"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for
install operations. Privilege elevation, environment and error
capture are centralised here.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
import time
from typing import Any

from devstrap.core.models import EnvState
from devstrap.core.services.install.data.constants import OUTPUT_TAIL, TIMEOUT_INSTALL

logger = logging.getLogger(__name__)


def _elevate(cmd: list[str], env: EnvState) -> list[str]:
    """Prefix ``sudo`` when we are not root and sudo is on the path.

    Without sudo the command runs as-is and the package manager
    reports the permission problem itself.
    """
    if os.geteuid() == 0:
        return cmd
    if env.has("sudo"):
        return ["sudo", *cmd]
    logger.debug("sudo not available, running unprivileged: %s", cmd[0])
    return cmd


def _run_subprocess(
    cmd: list[str],
    *,
    env: EnvState,
    elevate: bool = False,
    timeout: int = TIMEOUT_INSTALL,
    env_overrides: dict[str, str] | None = None,
    capture: bool = True,
) -> dict[str, Any]:
    """Run a command and report the outcome. Never raises.

    Args:
        cmd: Command list for ``subprocess.run()``.
        env: Environment supplying PATH and HOME for the child.
        elevate: Opportunistically wrap in ``sudo``.
        timeout: Seconds before ``TimeoutExpired``.
        env_overrides: Extra env vars for the child only.
        capture: Capture stdout/stderr. False attaches the child to the
            terminal so it can prompt and show progress; its stdout goes
            to our stderr, keeping ``--json`` output clean. Nothing is
            returned in ``stdout``/``stderr`` then.

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    if elevate:
        cmd = _elevate(cmd, env)

    child_env = env.subprocess_env()
    if env_overrides:
        child_env.update(env_overrides)

    logger.info("CMD %s", " ".join(shlex.quote(a) for a in cmd))

    streams: dict[str, Any] = {"capture_output": True} if capture else {"stdout": sys.stderr}

    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            **streams,
            text=True,
            timeout=timeout,
            env=child_env,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        # Binary vanished between the path probe and exec, or not executable
        return {"ok": False, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout[-OUTPUT_TAIL:] if result.stdout else ""
    stderr = result.stderr[-OUTPUT_TAIL:] if result.stderr else ""

    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if result.returncode == 0:
        return {"ok": True, "stdout": stdout, "elapsed_ms": elapsed_ms}

    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "returncode": result.returncode,
        "stderr": stderr,
        "stdout": stdout,
        "elapsed_ms": elapsed_ms,
    }


def _failure_detail(result: dict[str, Any]) -> str:
    """One-line diagnostic: the error plus the last stderr line."""
    detail = result.get("error", "unknown error")
    stderr = (result.get("stderr") or "").strip()
    if stderr:
        detail += f": {stderr.splitlines()[-1]}"
    return detail
