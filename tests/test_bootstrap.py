"""
Tests for the bootstrap and init use cases — full runs with every
external command replaced by a recorder.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import patch

import pytest

from devstrap.core.models import InstallOutcome, PackageManager
from devstrap.core.use_cases.bootstrap import Prompts, run_bootstrap, run_init

_ORCH = "devstrap.core.services.install.orchestration.orchestrator"
_AI = "devstrap.core.services.ai_tools"

_OK = {"ok": True, "stdout": ""}


class Calls:
    def __init__(self, failing: tuple[str, ...] = ()):
        self.commands: list[list[str]] = []
        self.scripts: list[str] = []
        self.failing = failing

    def run(self, cmd, *, env, **kwargs):
        self.commands.append(list(cmd))
        if any(name in cmd for name in self.failing):
            return {"ok": False, "error": "Command failed (exit 1)", "stderr": "not found\n"}
        return _OK

    def script(self, url, args=None, *, env, **kwargs):
        self.scripts.append(url)
        return _OK


@pytest.fixture
def dotfiles_dir(tmp_path: Path) -> Path:
    d = tmp_path / "dotfiles"
    d.mkdir()
    (d / ".zshrc").write_text("# managed\n")
    (d / "theme.json").write_text("{}\n")
    return d


@pytest.fixture
def config(tmp_path: Path, dotfiles_dir: Path) -> Path:
    path = tmp_path / "devstrap.yml"
    path.write_text(textwrap.dedent(f"""\
        packages: [zsh, fzf, eza]
        fallback_tools:
          - name: zoxide
            brew_formula: zoxide
            script_url: https://example.invalid/zoxide.sh
            script_args: ["-b", "{{dest}}"]
        dotfiles_dir: {dotfiles_dir}
    """))
    return path


def _patched(calls: Calls):
    return (
        patch(f"{_ORCH}._run_subprocess", side_effect=calls.run),
        patch(f"{_ORCH}.run_remote_script", side_effect=calls.script),
        patch(f"{_AI}._run_subprocess", side_effect=calls.run),
        patch(f"{_AI}.run_remote_script", side_effect=calls.script),
        patch(f"{_AI}.download_file", return_value={"ok": True}),
    )


def _run(fn, calls: Calls, *args, **kwargs):
    p1, p2, p3, p4, p5 = _patched(calls)
    with p1, p2, p3, p4, p5:
        return fn(*args, **kwargs)


class TestRunBootstrap:
    def test_linux_run(self, config, env, make_bin, home_dir):
        make_bin("pacman")
        make_bin("zsh")
        calls = Calls(failing=("eza",))

        result = _run(run_bootstrap, calls, config, kernel="Linux", env=env)

        assert result.ok
        assert result.platform.manager is PackageManager.PACMAN
        assert result.manager is None
        outcomes = {r.name: r.outcome for r in result.packages}
        assert outcomes == {
            "zsh": InstallOutcome.ALREADY_PRESENT,
            "fzf": InstallOutcome.INSTALLED,
            "eza": InstallOutcome.FAILED,
        }
        assert calls.scripts == ["https://example.invalid/zoxide.sh"]
        assert result.fallback_tools[0].outcome is InstallOutcome.INSTALLED
        assert (home_dir / ".zshrc").read_text() == "# managed\n"
        assert (home_dir / ".config" / "omp" / "theme.json").is_file()
        assert result.ai_tools == []
        assert any(w.startswith("eza:") for w in result.warnings)

    def test_unsupported_platform_is_fatal(self, config, env):
        calls = Calls()
        result = _run(run_bootstrap, calls, config, kernel="Plan9", env=env)
        assert not result.ok
        assert "Unsupported platform" in result.error
        assert calls.commands == []
        assert calls.scripts == []

    def test_no_manager_is_fatal(self, config, env):
        result = _run(run_bootstrap, Calls(), config, kernel="Linux", env=env)
        assert not result.ok
        assert "Unsupported Linux distribution" in result.error

    def test_bad_config_is_fatal(self, tmp_path, env, make_bin):
        make_bin("apt-get")
        bad = tmp_path / "bad.yml"
        bad.write_text("packages: [\n")
        result = _run(run_bootstrap, Calls(), bad, kernel="Linux", env=env)
        assert not result.ok
        assert "Invalid YAML" in result.error

    def test_darwin_installs_homebrew_first(self, config, env, tmp_path, make_bin):
        prefix = tmp_path / "homebrew-bin"
        calls = Calls()

        def brew_script(url, args=None, *, env, **kwargs):
            calls.scripts.append(url)
            if "Homebrew" in url:
                make_bin("brew", directory=prefix)
            return _OK

        with patch(f"{_ORCH}._run_subprocess", side_effect=calls.run), \
                patch(f"{_ORCH}.run_remote_script", side_effect=brew_script), \
                patch(f"{_ORCH}.HOMEBREW_PREFIXES", (str(prefix),)), \
                patch(f"{_ORCH}._is_formula_installed", return_value=False):
            result = run_bootstrap(config, kernel="Darwin", env=env)

        assert result.manager.outcome is InstallOutcome.INSTALLED
        assert len(calls.scripts) == 1
        assert calls.commands[0] == ["brew", "install", "zsh"]
        assert ["brew", "install", "zoxide"] in calls.commands
        assert result.env.path[0] == str(prefix)

    def test_existing_profile_declined(self, config, env, make_bin, home_dir):
        make_bin("dnf")
        profile = home_dir / ".zshrc"
        profile.write_text("# mine\n")
        prompts = Prompts(confirm=lambda _q, default: False, ask=lambda _q, d: d)

        result = _run(run_bootstrap, Calls(), config, kernel="Linux", env=env, prompts=prompts)

        assert profile.read_text() == "# mine\n"
        assert [d.action for d in result.dotfiles] == ["installed", "skipped"]

    def test_to_dict(self, config, env, make_bin):
        make_bin("zypper")
        d = _run(run_bootstrap, Calls(), config, kernel="Linux", env=env).to_dict()
        assert d["ok"] is True
        assert d["platform"]["manager"] == "zypper"
        assert [p["name"] for p in d["packages"]] == ["zsh", "fzf", "eza"]


class TestRunInit:
    def test_ai_steps_and_model_pull(self, config, env, make_bin):
        make_bin("pacman")
        make_bin("ollama")
        asked = []

        def ask(question, default):
            asked.append(default)
            return "llama3.2"

        prompts = Prompts(confirm=lambda _q, default: True, ask=ask)
        calls = Calls()
        result = _run(run_init, calls, config, kernel="Linux", env=env, prompts=prompts)

        assert result.ok
        assert asked == ["qwen3:8b"]
        assert result.model == "llama3.2"
        names = [r.name for r in result.ai_tools]
        assert names[0] == "aichat"
        assert "ollama" in names
        assert names[-1] == "model:llama3.2"
        assert ["pacman", "-Sy", "--noconfirm", "aichat"] in calls.commands
        assert ["ollama", "pull", "llama3.2"] in calls.commands

    def test_blank_answer_uses_default_model(self, config, env, make_bin):
        make_bin("apt-get")
        make_bin("ollama")
        make_bin("aichat")
        prompts = Prompts(confirm=lambda _q, default: default, ask=lambda _q, _d: "  ")
        calls = Calls()
        result = _run(run_init, calls, config, kernel="Linux", env=env, prompts=prompts)
        assert result.model == "qwen3:8b"
        assert ["ollama", "pull", "qwen3:8b"] in calls.commands

    def test_model_declined(self, config, env, make_bin):
        make_bin("apt-get")
        make_bin("ollama")
        prompts = Prompts(confirm=lambda _q, default: False, ask=lambda _q, d: d)
        calls = Calls()
        result = _run(run_init, calls, config, kernel="Linux", env=env, prompts=prompts)
        assert result.model is None
        assert not any(c[:2] == ["ollama", "pull"] for c in calls.commands)

    def test_ai_tools_disabled_in_config(self, tmp_path, env, make_bin):
        make_bin("apt-get")
        path = tmp_path / "devstrap.yml"
        path.write_text("packages: []\nfallback_tools: []\nai_tools: false\n")
        result = _run(run_init, Calls(), path, kernel="Linux", env=env)
        assert result.ai_tools == []

    def test_aichat_failure_still_installs_ollama(self, config, env, make_bin):
        make_bin("dnf")
        calls = Calls()
        result = _run(run_init, calls, config, kernel="Linux", env=env)
        by_name = {r.name: r.outcome for r in result.ai_tools}
        assert by_name["aichat"] is InstallOutcome.FAILED
        assert by_name["ollama"] is InstallOutcome.INSTALLED
        assert "https://ollama.com/install.sh" in calls.scripts
