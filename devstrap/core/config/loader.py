"""
Configuration loader — reads devstrap.yml into a BootstrapConfig.

The file is optional. It is looked up from the working directory
upward, then in the user config directory. It reads YAML, validates
against the Pydantic schema, and returns a typed config object.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from devstrap.core.models.config import BootstrapConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "devstrap.yml"
USER_CONFIG = Path("~/.config/devstrap/config.yml")


class ConfigError(Exception):
    """Raised when the configuration file is invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for devstrap.yml starting from ``start_dir``, walking up.

    Falls back to ``~/.config/devstrap/config.yml``.

    Returns:
        Path to the config file, or None if there is none.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    user_config = USER_CONFIG.expanduser()
    if user_config.is_file():
        return user_config

    return None


def load_config(path: Path | None = None) -> BootstrapConfig:
    """Load and validate the configuration.

    Args:
        path: Explicit config path. If None, searches; if nothing is
            found the defaults are returned.

    Returns:
        Validated BootstrapConfig. A relative ``dotfiles_dir`` is
        resolved against the config file's directory.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return BootstrapConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = BootstrapConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    if config.dotfiles_dir:
        dotfiles = Path(config.dotfiles_dir).expanduser()
        if not dotfiles.is_absolute():
            dotfiles = (path.parent / dotfiles).resolve()
        config = config.model_copy(update={"dotfiles_dir": str(dotfiles)})

    logger.info("Loaded config from %s", path)
    return config
