"""
L5 Orchestration — Top-level install coordinators.

Every function here takes the current EnvState and returns the
updated one alongside its result(s), so a run is a pure chain of
(package, manager, environment) → (outcome, environment).

Nothing here raises for an install problem: failures come back as
``InstallResult`` with outcome ``failed-non-fatal`` and the caller
moves on to the next package.
"""

from __future__ import annotations

import logging
import os

from devstrap.core.models import (
    EnvState,
    FallbackTool,
    InstallResult,
    PackageManager,
    PackageSpec,
    Platform,
)
from devstrap.core.services.install.data.constants import (
    HOMEBREW_INSTALL_URL,
    HOMEBREW_PREFIXES,
    LOCAL_BIN,
    TIMEOUT_HOMEBREW,
)
from devstrap.core.services.install.detection.presence import (
    _is_formula_installed,
    find_binary,
)
from devstrap.core.services.install.execution.download import run_remote_script
from devstrap.core.services.install.execution.subprocess_runner import (
    _failure_detail,
    _run_subprocess,
)
from devstrap.core.services.install.resolver.method_selection import (
    _build_pkg_install_cmd,
    _build_refresh_cmd,
    _needs_sudo,
)

logger = logging.getLogger(__name__)


# ── Package manager bootstrap ───────────────────────────────────


def bootstrap_homebrew(
    platform: Platform,
    env: EnvState,
) -> tuple[InstallResult | None, EnvState]:
    """Install Homebrew itself when the platform needs it and it is absent.

    Returns ``(None, env)`` on non-Homebrew platforms. The official
    installer runs attached to the terminal so it can prompt for the
    sudo password and confirmation. Afterwards the Homebrew prefixes
    are put on the search path, whether or not brew was found, so later
    probes see it.
    """
    if not platform.is_homebrew:
        return None, env

    if env.has("brew"):
        return InstallResult.present("homebrew", manager=platform.manager.value), env

    logger.info("Installing Homebrew from %s", HOMEBREW_INSTALL_URL)
    result = run_remote_script(
        HOMEBREW_INSTALL_URL,
        env=env,
        timeout=TIMEOUT_HOMEBREW,
        capture=False,
    )

    for prefix in reversed(HOMEBREW_PREFIXES):
        env = env.with_path_prepended(prefix)

    if not result["ok"]:
        detail = _failure_detail(result)
        logger.warning("Homebrew installation failed: %s", detail)
        return InstallResult.failure(
            "homebrew",
            detail,
            manager=platform.manager.value,
            method="script",
            remedy="https://brew.sh",
        ), env

    return InstallResult.installed(
        "homebrew", manager=platform.manager.value, method="script",
    ), env


# ── Idempotent installer ────────────────────────────────────────


def ensure_installed(
    spec: PackageSpec,
    platform: Platform,
    env: EnvState,
) -> tuple[InstallResult, EnvState]:
    """Install ``spec`` through the platform's package manager if missing.

    1. Any of the spec's binaries on the search path → already-present,
       the manager is never invoked.
    2. On Homebrew, a registered formula also counts as present.
    3. Otherwise run the manager (with opportunistic sudo). A non-zero
       exit is reported as failed-non-fatal.
    """
    pm = platform.manager
    found = find_binary(spec, env)
    if found:
        logger.info("%s already installed (%s)", spec.name, found)
        return InstallResult.present(spec.name, manager=pm.value, detail=found), env

    pkg_name = spec.install_name(pm)

    if pm is PackageManager.HOMEBREW and _is_formula_installed(pkg_name, env):
        logger.info("%s already installed (brew)", spec.name)
        return InstallResult.present(spec.name, manager=pm.value, method="brew"), env

    refresh = _build_refresh_cmd(pm)
    if refresh and not env.apt_refreshed:
        r = _run_subprocess(refresh, env=env, elevate=_needs_sudo(pm))
        if not r["ok"]:
            # Stale indexes may still install fine; carry on.
            logger.warning("Package index refresh failed: %s", _failure_detail(r))
        env = env.with_apt_refreshed()

    cmd = _build_pkg_install_cmd([pkg_name], pm)
    result = _run_subprocess(cmd, env=env, elevate=_needs_sudo(pm))

    if not result["ok"]:
        detail = _failure_detail(result)
        # Packages with a remedy get one warning, after the loop
        log = logger.info if spec.remedy else logger.warning
        log("%s could not be installed via %s: %s", spec.name, pm.binary, detail)
        return InstallResult.failure(
            spec.name, detail, manager=pm.value, method=pm.value, remedy=spec.remedy,
        ), env

    logger.info("Installed %s via %s", spec.name, pm.binary)
    return InstallResult.installed(spec.name, manager=pm.value, method=pm.value), env


def install_packages(
    specs: list[PackageSpec],
    platform: Platform,
    env: EnvState,
) -> tuple[list[InstallResult], EnvState]:
    """Run ``ensure_installed`` over ``specs`` in order.

    A failed package never stops the loop. Afterwards, packages that
    only exist under an alternate binary name get a shim in
    ``~/.local/bin`` (e.g. ``bat`` → ``batcat`` on Debian).
    """
    results: list[InstallResult] = []
    for spec in specs:
        result, env = ensure_installed(spec, platform, env)
        results.append(result)

    for spec in specs:
        if find_binary(spec, env) is None and spec.remedy:
            logger.warning(
                "'%s' could not be installed via %s. Consider downloading from %s",
                spec.name, platform.manager.binary, spec.remedy,
            )

    env = _shim_alt_binaries(specs, env)
    return results, env


def _shim_alt_binaries(specs: list[PackageSpec], env: EnvState) -> EnvState:
    """Symlink the primary binary name to an installed alternate."""
    for spec in specs:
        primary = spec.binary or spec.name
        if not spec.alt_binaries or env.has(primary):
            continue
        for alt in spec.alt_binaries:
            target = env.which(alt)
            if target is None:
                continue
            local_bin = env.expand(LOCAL_BIN)
            link = local_bin / primary
            try:
                local_bin.mkdir(parents=True, exist_ok=True)
                if link.is_symlink() or link.exists():
                    link.unlink()
                os.symlink(target, link)
            except OSError as exc:
                logger.warning("Could not link %s → %s: %s", link, target, exc)
                break
            logger.info("Linked %s → %s", link, target)
            env = env.with_path_prepended(local_bin)
            break
    return env


# ── Fallback chain ──────────────────────────────────────────────


def run_fallback_chain(
    tool: FallbackTool,
    platform: Platform,
    env: EnvState,
) -> tuple[InstallResult, EnvState]:
    """Install ``tool`` via Homebrew, or via its vendor script elsewhere.

    The vendor script installs unprivileged into ``tool.destination``,
    which is created and put on the search path first.
    """
    pm = platform.manager
    found = env.which(tool.name)
    if found:
        logger.info("%s already installed (%s)", tool.name, found)
        return InstallResult.present(tool.name, manager=pm.value, detail=found), env

    logger.info("Installing %s", tool.name)

    if platform.is_homebrew:
        result = _run_subprocess(_build_pkg_install_cmd([tool.brew_formula], pm), env=env)
        method, remedy = "brew", f"brew install {tool.brew_formula}"
    else:
        dest = env.expand(tool.destination)
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Cannot create %s: %s", dest, exc)
        env = env.with_path_prepended(dest)
        result = run_remote_script(tool.script_url, tool.resolved_args(dest), env=env)
        method, remedy = "script", tool.script_url

    if not result["ok"]:
        detail = _failure_detail(result)
        logger.warning("%s could not be installed (%s): %s", tool.name, method, detail)
        return InstallResult.failure(
            tool.name, detail, manager=pm.value, method=method, remedy=remedy,
        ), env

    return InstallResult.installed(tool.name, manager=pm.value, method=method), env


def install_fallback_tools(
    tools: list[FallbackTool],
    platform: Platform,
    env: EnvState,
) -> tuple[list[InstallResult], EnvState]:
    """Run the fallback chain for every tool, in order."""
    results: list[InstallResult] = []
    for tool in tools:
        result, env = run_fallback_chain(tool, platform, env)
        results.append(result)
    return results, env