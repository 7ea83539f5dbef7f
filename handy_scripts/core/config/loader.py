"""
Configuration loader — reads handy.yml into a Settings model.

The file is optional. Without one, the installer uses the defaults:
scripts from ./collection, installed into ~/handy_scripts, registered
in ~/.bashrc and ~/.zshrc.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from handy_scripts.core.errors import ConfigError
from handy_scripts.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "handy.yml"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for handy.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to handy.yml, or None if not found.
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

    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate installer settings.

    Args:
        path: Explicit path to handy.yml. If None, searches upward and
            falls back to defaults when nothing is found.

    Returns:
        Validated Settings with an absolute ``collection_root``.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return _anchor(Settings(), Path.cwd())

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return _anchor(Settings(), Path.cwd())

    logger.debug("Loading installer config from %s", path)

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
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration in {path}: {e}") from e

    settings = _anchor(settings, path.parent.resolve())
    logger.info(
        "Loaded config %s (collections=%s, target=%s)",
        path,
        settings.collection_root,
        settings.resolved_target_dir,
    )
    return settings


def _anchor(settings: Settings, base: Path) -> Settings:
    """Make a relative collection root absolute against ``base``."""
    if settings.collection_root.is_absolute():
        return settings
    return settings.model_copy(update={"collection_root": base / settings.collection_root})
