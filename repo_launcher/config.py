"""Config loading/saving and paths.

The configuration lives in a single JSON file under ~/.get and maps
repository names to their stored editor preference.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import dacite

from .exceptions import (
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    record_error,
)
from .models import LauncherConfig, Repository, load_config_from_dict, model_to_dict

logger = logging.getLogger(__name__)

# Configuration file locations
CONFIG_DIR = Path.home() / ".get"
CONFIG_PATH = CONFIG_DIR / "config.json"

CONFIG_DIR_MODE = 0o700
CONFIG_FILE_MODE = 0o644


def load_config(path: Path | None = None) -> LauncherConfig:
    """
    Load the launcher configuration.

    Loads from ~/.get/config.json if it exists, otherwise returns a
    default LauncherConfig (default editor "code", no repositories).

    Args:
        path: Optional override for the config file location.

    Returns:
        LauncherConfig instance

    Raises:
        ConfigReadError: If the config file exists but cannot be read.
        ConfigParseError: If the config file is not valid JSON or does not
            match the expected schema.
    """
    config_path = path or CONFIG_PATH

    if not config_path.exists():
        logger.debug("No config found at %s, using defaults", config_path)
        return LauncherConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
        logger.debug("Loaded config from %s", config_path)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in config file: %s", e)
        record_error(e)
        raise ConfigParseError(
            f"Invalid JSON in config file at line {e.lineno}",
            file_path=str(config_path),
            line=e.lineno,
            cause=e,
        ) from e
    except UnicodeDecodeError as e:
        logger.error("Config file is not valid UTF-8: %s", e)
        record_error(e)
        raise ConfigParseError(
            "Config file is not valid UTF-8",
            file_path=str(config_path),
            cause=e,
        ) from e
    except OSError as e:
        logger.error("Failed to read config file: %s", e)
        record_error(e)
        raise ConfigReadError(
            "Failed to read config file",
            file_path=str(config_path),
            cause=e,
        ) from e

    if not isinstance(data, dict):
        logger.error("Config root is %s, expected an object", type(data).__name__)
        raise ConfigParseError(
            "Config file must contain a JSON object",
            file_path=str(config_path),
        )

    try:
        return load_config_from_dict(data)
    except dacite.DaciteError as e:
        logger.error("Config schema validation failed: %s", e)
        record_error(e)
        raise ConfigParseError(
            f"Config schema validation failed: {e}",
            file_path=str(config_path),
            cause=e,
        ) from e


def save_config(config: LauncherConfig, path: Path | None = None) -> None:
    """
    Save the launcher configuration.

    Writes 2-space indented JSON. The containing directory is created if
    needed and kept private (0700), even when something else created it first. The existing file is overwritten.

    Args:
        config: LauncherConfig instance to save
        path: Optional override for the config file location.

    Raises:
        ConfigWriteError: If the config cannot be saved.
    """
    config_path = path or CONFIG_PATH
    config_dir = config_path.parent

    try:
        config_dir.mkdir(mode=CONFIG_DIR_MODE, parents=True, exist_ok=True)
        config_dir.chmod(CONFIG_DIR_MODE)
    except OSError as e:
        logger.error("Failed to create config directory: %s", e)
        record_error(e)
        raise ConfigWriteError(
            f"Failed to create config directory: {config_dir}",
            file_path=str(config_dir),
            cause=e,
        ) from e

    try:
        data = model_to_dict(config)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        config_path.chmod(CONFIG_FILE_MODE)
        logger.debug("Saved config to %s", config_path)
    except OSError as e:
        logger.error("Failed to write config file: %s", e)
        record_error(e)
        raise ConfigWriteError(
            "Failed to write config file",
            file_path=str(config_path),
            cause=e,
        ) from e
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize config to JSON: %s", e)
        record_error(e)
        raise ConfigWriteError(
            "Failed to serialize config to JSON",
            file_path=str(config_path),
            cause=e,
        ) from e


def update_repository_editor(
    config: LauncherConfig, name: str, editor: str, path: str | None = None
) -> Repository:
    """Upsert a repository's editor preference in memory.

    The caller must call save_config() to persist the change.
    """
    repo = config.update_repository_editor(name, editor, path=path)
    logger.debug("Set editor for %s to %s", name, editor)
    return repo
