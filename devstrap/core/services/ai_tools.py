"""
AI tools — AIChat, its shell scripts, Ollama and model downloads.

Each installer picks the best method for the platform and reports an
InstallResult. As with the core packages, every failure here is a
warning; nothing aborts the run.
"""

from __future__ import annotations

import logging

from devstrap.core.models import EnvState, InstallResult, PackageManager, Platform
from devstrap.core.services.install.data.catalog import (
    AICHAT_CONFIG_DIR,
    AICHAT_INSTALL_DOCS,
    AICHAT_SCRIPTS,
    OLLAMA_HOMEPAGE,
    OLLAMA_INSTALL_URL,
)
from devstrap.core.services.install.execution.download import (
    download_file,
    run_remote_script,
)
from devstrap.core.services.install.execution.subprocess_runner import (
    _failure_detail,
    _run_subprocess,
)
from devstrap.core.services.install.resolver.method_selection import (
    _build_pkg_install_cmd,
    _needs_sudo,
)

logger = logging.getLogger(__name__)

# Model downloads can be many gigabytes.
_PULL_TIMEOUT = 3 * 3600


def _pick_aichat_method(platform: Platform, env: EnvState) -> str | None:
    """brew / pacman ship AIChat; elsewhere build it with cargo."""
    if platform.manager in (PackageManager.HOMEBREW, PackageManager.PACMAN):
        return platform.manager.value
    if env.has("cargo"):
        return "cargo"
    return None


def install_aichat(platform: Platform, env: EnvState) -> tuple[InstallResult, EnvState]:
    pm = platform.manager
    found = env.which("aichat")
    if found:
        logger.info("AIChat already installed (%s)", found)
        return InstallResult.present("aichat", manager=pm.value, detail=found), env

    method = _pick_aichat_method(platform, env)
    if method is None:
        logger.warning(
            "Could not find a package for AIChat on this distribution and cargo "
            "is unavailable. Please install AIChat manually (see %s).",
            AICHAT_INSTALL_DOCS,
        )
        return InstallResult.failure(
            "aichat",
            "no package for this distribution and cargo is unavailable",
            manager=pm.value,
            remedy=AICHAT_INSTALL_DOCS,
        ), env

    if method == "cargo":
        result = _run_subprocess(["cargo", "install", "aichat"], env=env)
        # cargo installs into ~/.cargo/bin
        env = env.with_path_prepended(env.expand("~/.cargo/bin"))
    else:
        result = _run_subprocess(
            _build_pkg_install_cmd(["aichat"], pm), env=env, elevate=_needs_sudo(pm),
        )

    if not result["ok"]:
        detail = _failure_detail(result)
        logger.warning("AIChat installation via %s failed: %s", method, detail)
        return InstallResult.failure(
            "aichat", detail, manager=pm.value, method=method, remedy=AICHAT_INSTALL_DOCS,
        ), env

    logger.info("Installed AIChat via %s", method)
    return InstallResult.installed("aichat", manager=pm.value, method=method), env


def fetch_aichat_scripts(env: EnvState) -> list[InstallResult]:
    """Download the shell-integration and completion scripts.

    Attempted regardless of whether AIChat itself installed, so an
    existing binary from elsewhere still gets the integration.
    """
    config_dir = env.expand(AICHAT_CONFIG_DIR)
    results: list[InstallResult] = []
    for url, rel in AICHAT_SCRIPTS:
        dest = config_dir / rel
        r = download_file(url, dest)
        if r["ok"]:
            results.append(InstallResult.installed(rel, method="download", detail=str(dest)))
        else:
            logger.warning("Failed to download %s from %s: %s", rel, url, r["error"])
            results.append(
                InstallResult.failure(rel, r["error"], method="download", remedy=url)
            )
    return results


def install_ollama(platform: Platform, env: EnvState) -> tuple[InstallResult, EnvState]:
    pm = platform.manager
    found = env.which("ollama")
    if found:
        logger.info("Ollama already installed (%s)", found)
        return InstallResult.present("ollama", manager=pm.value, detail=found), env

    if platform.is_homebrew:
        result = _run_subprocess(_build_pkg_install_cmd(["ollama"], pm), env=env)
        method = "brew"
    else:
        # The official script installs a system service and needs root
        result = run_remote_script(
            OLLAMA_INSTALL_URL, env=env, interpreter="sh", elevate=True,
        )
        method = "script"

    if not result["ok"]:
        detail = _failure_detail(result)
        logger.warning(
            "Failed to install Ollama (%s); please install manually from %s",
            detail, OLLAMA_HOMEPAGE,
        )
        return InstallResult.failure(
            "ollama", detail, manager=pm.value, method=method, remedy=OLLAMA_HOMEPAGE,
        ), env

    logger.info("Installed Ollama via %s", method)
    return InstallResult.installed("ollama", manager=pm.value, method=method), env


def pull_model(model: str, env: EnvState) -> InstallResult:
    """``ollama pull MODEL``."""
    name = f"model:{model}"
    if not env.has("ollama"):
        return InstallResult.failure(name, "ollama is not installed", method="ollama")

    # Attached to the terminal so the download progress bar is visible
    result = _run_subprocess(
        ["ollama", "pull", model], env=env, timeout=_PULL_TIMEOUT, capture=False,
    )
    if not result["ok"]:
        detail = _failure_detail(result)
        logger.warning("Failed to download model %s: %s", model, detail)
        return InstallResult.failure(
            name, detail, method="ollama", remedy=f"ollama pull {model}",
        )
    return InstallResult.installed(name, method="ollama")
