"""Configuration dotfile.

Remembers the development directory between runs in a dotenv-style
`DEV_DIRECTORY=<path>` file, `~/.secure-git.env` by default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values, set_key

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".secure-git.env"
CONFIG_ENV_VAR = "SECURE_GIT_CONFIG"
DEV_DIRECTORY_KEY = "DEV_DIRECTORY"


class ConfigError(Exception):
    """The configuration file is missing, unreadable or incomplete."""


@dataclass
class Config:
    dev_directory: str = ""


def config_path() -> Path:
    """Location of the dotfile, overridable through SECURE_GIT_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_FILENAME


def expand_path(value: str) -> str:
    """Strip whitespace and expand a leading `~`."""
    value = value.strip()
    if value.startswith("~"):
        value = os.path.expanduser(value)
    return value


def load_config(path: Path | None = None) -> Config:
    path = path or config_path()
    if not path.is_file():
        raise ConfigError(f"Config file does not exist: {path}")
    try:
        values = dotenv_values(path)
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}") from e

    value = values.get(DEV_DIRECTORY_KEY)
    if not value:
        raise ConfigError(f"{DEV_DIRECTORY_KEY} not found in {path}")
    return Config(dev_directory=value)


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write the config and return the file it was written to.

    Other keys already present in the file are left alone.
    """
    path = path or config_path()
    try:
        set_key(path, DEV_DIRECTORY_KEY, config.dev_directory, quote_mode="never")
    except OSError as e:
        raise ConfigError(f"Error writing config file {path}: {e}") from e
    logger.debug("Saved config to %s", path)
    return path
