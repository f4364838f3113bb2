"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Where vendor scripts and shims put user-local binaries.
LOCAL_BIN = "~/.local/bin"

# Homebrew's official installer, and where it lands on Apple silicon
# and Intel Macs respectively. Prepending both is the equivalent of
# ``eval "$(brew shellenv)"``.
HOMEBREW_INSTALL_URL = (
    "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
)
HOMEBREW_PREFIXES: tuple[str, ...] = ("/opt/homebrew/bin", "/usr/local/bin")

# Subprocess timeout tiers (seconds).
TIMEOUT_INSTALL = 600
TIMEOUT_PROBE = 30
TIMEOUT_DOWNLOAD = 60
TIMEOUT_HOMEBREW = 1800          # includes the Xcode Command Line Tools

# Tail of stdout/stderr kept in results.
OUTPUT_TAIL = 2000
