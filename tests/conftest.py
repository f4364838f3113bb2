"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path
from typing import Callable

import pytest

from devstrap.core.models import EnvState


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """A private directory that serves as the whole search path."""
    d = tmp_path / "bin"
    d.mkdir()
    return d


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """A throwaway $HOME."""
    d = tmp_path / "home"
    d.mkdir()
    return d


@pytest.fixture
def make_bin(bin_dir: Path) -> Callable[..., Path]:
    """Create a fake executable on the test search path."""

    def _make(name: str, exit_code: int = 0, directory: Path | None = None) -> Path:
        target_dir = directory or bin_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(f"#!/bin/sh\nexit {exit_code}\n")
        path.chmod(0o755)
        return path

    return _make


@pytest.fixture
def env(bin_dir: Path, home_dir: Path) -> EnvState:
    """EnvState whose search path holds only ``bin_dir``."""
    return EnvState(path=(str(bin_dir),), home=str(home_dir))


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """The CLI reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
