"""
L3 Detection — Is it already installed?

Read-only probes. A package counts as present when any of its
binaries resolves on the EnvState search path, or (on Homebrew)
when the formula is already registered.
"""

from __future__ import annotations

import logging
import subprocess

from devstrap.core.models import EnvState, PackageSpec
from devstrap.core.services.install.data.constants import TIMEOUT_PROBE

logger = logging.getLogger(__name__)


def find_binary(spec: PackageSpec, env: EnvState) -> str | None:
    """Return the path of the first of ``spec``'s binaries on the path."""
    for binary in spec.binaries():
        found = env.which(binary)
        if found:
            return found
    return None


def _is_formula_installed(formula: str, env: EnvState) -> bool:
    """Check ``brew ls --versions FORMULA``.

    Returns False when brew is missing, slow or errors out.
    """
    brew = env.which("brew")
    if brew is None:
        return False
    try:
        r = subprocess.run(
            [brew, "ls", "--versions", formula],
            capture_output=True,
            text=True,
            timeout=TIMEOUT_PROBE,
            env=env.subprocess_env(),
        )
    except subprocess.TimeoutExpired:
        logger.warning("Timeout checking formula %s with brew", formula)
        return False
    except OSError as exc:
        logger.warning("OS error checking formula %s with brew: %s", formula, exc)
        return False
    return r.returncode == 0 and bool(r.stdout.strip())
