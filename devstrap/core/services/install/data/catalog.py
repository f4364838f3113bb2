"""
L0 Data — What a fresh workstation gets.

CORE_PACKAGES go through the package manager only. FALLBACK_TOOLS
prefer Homebrew and otherwise run the vendor's install script.
Both can be replaced from devstrap.yml.
"""

from __future__ import annotations

from devstrap.core.models import FallbackTool, PackageSpec
from devstrap.core.services.install.data.constants import LOCAL_BIN

CORE_PACKAGES: list[PackageSpec] = [
    PackageSpec(name="zsh"),
    PackageSpec(name="fzf"),
    PackageSpec(name="ripgrep", binary="rg"),
    PackageSpec(name="tmux"),
    PackageSpec(name="direnv"),
    PackageSpec(name="tldr"),
    PackageSpec(
        name="eza",
        remedy="https://github.com/eza-community/eza/releases",
    ),
    # Debian/Ubuntu install the binary as batcat
    PackageSpec(
        name="bat",
        alt_binaries=["batcat"],
        remedy="https://github.com/sharkdp/bat/releases",
    ),
]

FALLBACK_TOOLS: list[FallbackTool] = [
    FallbackTool(
        name="zoxide",
        brew_formula="zoxide",
        script_url="https://raw.githubusercontent.com/ajeetdsouza/zoxide/main/install.sh",
        script_args=["-b", "{dest}"],
        destination=LOCAL_BIN,
    ),
    FallbackTool(
        name="atuin",
        brew_formula="atuin",
        script_url="https://raw.githubusercontent.com/atuinsh/atuin/main/install.sh",
        destination=LOCAL_BIN,
    ),
    FallbackTool(
        name="oh-my-posh",
        brew_formula="jandedobbeleer/oh-my-posh/oh-my-posh",
        script_url="https://ohmyposh.dev/install.sh",
        script_args=["-d", "{dest}"],
        destination=LOCAL_BIN,
    ),
]

# ── AI tools ────────────────────────────────────────────────────

AICHAT_INSTALL_DOCS = "https://github.com/sigoden/aichat#install"
AICHAT_CONFIG_DIR = "~/.config/aichat"
AICHAT_SCRIPTS: tuple[tuple[str, str], ...] = (
    (
        "https://raw.githubusercontent.com/sigoden/aichat/main/scripts/shell-integration/integration.zsh",
        "integration.zsh",
    ),
    (
        "https://raw.githubusercontent.com/sigoden/aichat/main/scripts/completions/aichat.zsh",
        "completions/aichat.zsh",
    ),
)

OLLAMA_INSTALL_URL = "https://ollama.com/install.sh"
OLLAMA_HOMEPAGE = "https://ollama.com"