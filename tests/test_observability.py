"""
Tests for logging setup — level resolution and the transcript file.
"""

import logging
from pathlib import Path

from devstrap.core.observability.logging_config import (
    ENV_LEVEL,
    _parse_level,
    resolve_level,
    setup_logging,
)


class TestResolveLevel:
    def test_flags(self, monkeypatch):
        monkeypatch.delenv(ENV_LEVEL, raising=False)
        assert resolve_level(debug=True, quiet=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"
        assert resolve_level() == "WARNING"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "INFO")
        assert resolve_level() == "INFO"
        assert resolve_level(quiet=True) == "ERROR"


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("WARNING") == logging.WARNING

    def test_garbage_falls_back(self):
        assert _parse_level("loud") == logging.WARNING
        assert _parse_level(None, default=logging.DEBUG) == logging.DEBUG


class TestSetupLogging:
    def test_console_only(self):
        setup_logging("WARNING")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING

    def test_transcript_file(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "devstrap.log"
        setup_logging("WARNING", log_file=str(log_file))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("devstrap.test").debug("CMD apt-get install -y fzf")
        for h in root.handlers:
            h.flush()
        assert "CMD apt-get install -y fzf" in log_file.read_text()
