"""
Configuration loader — reads collect_inventory.yml into InventorySettings.

The settings file is optional. Everything it controls has a default,
and the CLI flags still decide what a run collects; the file only
tunes where the report lands, how long probes may take, the log
level, and package names for hosts whose repositories differ from
ours.

    output_dir: /var/tmp/inventory
    command_timeout: 15
    log_level: INFO
    packages:
      lspci: pciutils-ng
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "collect_inventory.yml"


class ConfigError(Exception):
    """Raised when the settings file is unreadable or invalid."""


class InventorySettings(BaseModel):
    """Tunables loaded from collect_inventory.yml."""

    output_dir: str | None = None
    command_timeout: int = 10
    log_level: str | None = None
    packages: dict[str, str] = Field(default_factory=dict)

    @field_validator("command_timeout")
    @classmethod
    def _positive_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("command_timeout must be a positive number of seconds")
        return v


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for collect_inventory.yml starting from a directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the settings file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> InventorySettings:
    """Load and validate settings.

    Args:
        path: Explicit path to the settings file. If None, searches upward;
            if nothing is found, defaults are returned.

    Returns:
        Validated InventorySettings.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    if path is None:
        path = find_settings_file()
        if path is None:
            return InventorySettings()

    if not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return InventorySettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = InventorySettings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
