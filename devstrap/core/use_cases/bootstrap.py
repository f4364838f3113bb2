"""
Bootstrap use cases — provision a workstation end to end.

    run_bootstrap:  platform → package manager → core packages →
                    fallback tools → dotfiles
    run_init:       run_bootstrap + AIChat, its scripts, Ollama and an
                    optional model download

Only two things are fatal: an unsupported platform and an invalid
config file. Both land in ``result.error``. Every other problem is a
failed InstallResult in the summary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from devstrap.core.config.loader import ConfigError, load_config
from devstrap.core.models import BootstrapConfig, EnvState, InstallResult, Platform
from devstrap.core.services import ai_tools, dotfiles
from devstrap.core.services.dotfiles import DotfileResult
from devstrap.core.services.install import (
    CORE_PACKAGES,
    FALLBACK_TOOLS,
    bootstrap_homebrew,
    install_fallback_tools,
    install_packages,
)
from devstrap.core.services.platform_resolver import UnsupportedPlatform, resolve_platform

logger = logging.getLogger(__name__)


@dataclass
class Prompts:
    """How the run asks the user questions.

    ``confirm(question, default) -> bool`` and
    ``ask(question, default) -> str``.
    """

    confirm: Callable[[str, bool], bool]
    ask: Callable[[str, str], str]

    @classmethod
    def defaults(cls) -> Prompts:
        """Answer every question with its default."""
        return cls(confirm=lambda _q, default: default, ask=lambda _q, default: default)


@dataclass
class BootstrapResult:
    """Everything a provisioning run did."""

    platform: Platform | None = None
    config_path: Path | None = None
    error: str | None = None
    manager: InstallResult | None = None
    packages: list[InstallResult] = field(default_factory=list)
    fallback_tools: list[InstallResult] = field(default_factory=list)
    dotfiles: list[DotfileResult] = field(default_factory=list)
    ai_tools: list[InstallResult] = field(default_factory=list)
    model: str | None = None
    env: EnvState | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def installs(self) -> list[InstallResult]:
        head = [self.manager] if self.manager else []
        return head + self.packages + self.fallback_tools + self.ai_tools

    @property
    def warnings(self) -> list[str]:
        out = []
        for r in self.installs:
            if r.failed:
                hint = f" (see {r.remedy})" if r.remedy else ""
                out.append(f"{r.name}: {r.detail}{hint}")
        for d in self.dotfiles:
            if not d.ok:
                out.append(f"{d.target}: {d.error}")
        return out

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "error": self.error,
            "platform": self.platform.to_dict() if self.platform else None,
            "config_path": str(self.config_path) if self.config_path else None,
            "manager": self.manager.to_dict() if self.manager else None,
            "packages": [r.to_dict() for r in self.packages],
            "fallback_tools": [r.to_dict() for r in self.fallback_tools],
            "dotfiles": [d.to_dict() for d in self.dotfiles],
            "ai_tools": [r.to_dict() for r in self.ai_tools],
            "model": self.model,
            "warnings": self.warnings,
        }


def run_bootstrap(
    config_path: Path | None = None,
    *,
    kernel: str | None = None,
    env: EnvState | None = None,
    prompts: Prompts | None = None,
    include_ai: bool = False,
) -> BootstrapResult:
    """Provision the core workstation.

    Args:
        config_path: Explicit devstrap.yml. None searches for one.
        kernel: Override the detected kernel name.
        env: Starting environment. None snapshots ``os.environ``.
        prompts: Question answering. None answers with defaults.
        include_ai: Also run the AI tool steps (see ``run_init``).
    """
    result = BootstrapResult(config_path=config_path)
    prompts = prompts or Prompts.defaults()
    env = EnvState.from_environ() if env is None else env

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    try:
        platform = resolve_platform(kernel, env)
    except UnsupportedPlatform as e:
        result.error = str(e)
        return result
    result.platform = platform

    result.manager, env = bootstrap_homebrew(platform, env)

    specs = CORE_PACKAGES if config.packages is None else config.packages
    result.packages, env = install_packages(specs, platform, env)

    tools = FALLBACK_TOOLS if config.fallback_tools is None else config.fallback_tools
    result.fallback_tools, env = install_fallback_tools(tools, platform, env)

    result.dotfiles = _install_dotfiles(config, env, prompts)

    if include_ai and config.ai_tools:
        env = _install_ai_tools(result, config, platform, env, prompts)

    result.env = env
    return result


def run_init(
    config_path: Path | None = None,
    *,
    kernel: str | None = None,
    env: EnvState | None = None,
    prompts: Prompts | None = None,
) -> BootstrapResult:
    """Full first-run setup: bootstrap plus the AI tools."""
    return run_bootstrap(
        config_path, kernel=kernel, env=env, prompts=prompts, include_ai=True,
    )


def _install_dotfiles(
    config: BootstrapConfig,
    env: EnvState,
    prompts: Prompts,
) -> list[DotfileResult]:
    source_dir = Path(config.dotfiles_dir) if config.dotfiles_dir else dotfiles.DEFAULT_DOTFILES_DIR
    results: list[DotfileResult] = []

    try:
        results.append(dotfiles.install_theme(dotfiles.theme_source(source_dir), env))
    except dotfiles.DotfileError as e:
        logger.warning("%s", e)
        results.append(DotfileResult(
            target=env.expand(dotfiles.THEME_TARGET), action="failed", error=str(e),
        ))

    try:
        source = dotfiles.profile_source(source_dir)
    except dotfiles.DotfileError as e:
        logger.warning("%s", e)
        results.append(DotfileResult(
            target=env.expand(dotfiles.PROFILE_TARGET), action="failed", error=str(e),
        ))
        return results

    results.append(dotfiles.install_profile(
        source, env, confirm=lambda question: prompts.confirm(question, False),
    ))
    return results


def _install_ai_tools(
    result: BootstrapResult,
    config: BootstrapConfig,
    platform: Platform,
    env: EnvState,
    prompts: Prompts,
) -> EnvState:
    aichat, env = ai_tools.install_aichat(platform, env)
    result.ai_tools.append(aichat)
    result.ai_tools.extend(ai_tools.fetch_aichat_scripts(env))

    ollama, env = ai_tools.install_ollama(platform, env)
    result.ai_tools.append(ollama)

    if not env.has("ollama"):
        return env

    if not prompts.confirm("Would you like to download an Ollama model now?", True):
        logger.info("Skipping model download")
        return env

    model = prompts.ask("Enter the model name to pull", config.default_model).strip()
    model = model or config.default_model
    result.model = model
    result.ai_tools.append(ai_tools.pull_model(model, env))
    return env
