from __future__ import annotations

"""
Session Configuration Domain.

Handles the defaults and the JSON persistence of the shell session
settings (prompt, echo behaviour, logging). Stored values are merged over
the defaults so new keys always exist.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from inodefs.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_PROMPT
from inodefs.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
ECHO_MODES = ("auto", "always", "never")


def get_config_path() -> str:
    """Return the path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default session configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Shell
        "prompt": DEFAULT_PROMPT,
        "show_prompt": True,
        "echo_mode": "auto",

        # Diagnostics
        "log_level": "WARNING",
        "log_file": "",
        "debug_flags": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the session configuration from disk.

    Args:
        path: Explicit file location. Defaults to the user data directory.

    Returns:
        Dict[str, Any]: Stored values merged over the defaults, or the
                        defaults alone when the file is missing or corrupted.
    """
    config_path = path or get_config_path()
    config = get_default_config()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Returning defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    data.pop("version", None)
    config.update(data)
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the session configuration.

    Args:
        config: The configuration dictionary to save.
        path: Explicit file location. Defaults to the user data directory.
    """
    config_path = path or get_config_path()
    payload = dict(config)
    payload["version"] = CURRENT_CONFIG_VERSION

    try:
        parent = os.path.dirname(os.path.abspath(config_path))
        os.makedirs(parent, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
