"""Configuration loading for the trade journal.

Configuration lives in a TOML file, by default
``~/.config/tradejournal/config.toml``. The ``TRADEJOURNAL_CONFIG``
environment variable points at a different file.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TRADEJOURNAL_CONFIG"
CONFIG_DIR = Path.home() / ".config" / "tradejournal"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "tradejournal.db"

DEFAULT_CONFIG = {
    "storage": {
        "db_path": str(DEFAULT_DB_PATH),
    },
    "display": {
        "currency": "$",
    },
    "logging": {
        "level": "WARNING",
    },
}


def get_config_path() -> Path:
    """Path of the configuration file, honouring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    A missing or unreadable file yields the defaults.

    Args:
        config_path: Optional explicit path to the config file.

    Returns:
        Configuration dictionary with every section present.
    """
    path = config_path or get_config_path()
    loaded: dict = {}
    if path.exists():
        try:
            loaded = toml.load(path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)

    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    for section, values in loaded.items():
        if isinstance(values, dict):
            config.setdefault(section, {}).update(values)
    return config


def get_db_path(config: dict) -> Path:
    return Path(config.get("storage", {}).get("db_path", DEFAULT_DB_PATH)).expanduser()


def get_currency(config: dict) -> str:
    return config.get("display", {}).get("currency", "$")


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)
    return path
