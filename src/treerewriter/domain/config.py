from __future__ import annotations

"""
Configuration Domain Management.

Holds the default rewrite parameters and the JSON persistence of user
overrides. Every parameter of a run (root, path markers, literals,
encoding) lives here rather than inside the algorithms.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from treerewriter.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_ROOT_PATH = "."
DEFAULT_EXCLUDE_SUBSTRING = "target"
DEFAULT_INCLUDE_SUBSTRING = "examples"
DEFAULT_SEARCH_LITERAL = "kwap"
DEFAULT_REPLACE_LITERAL = "toad"
DEFAULT_ENCODING = "utf-8"

TRAVERSAL_DEPTH = "depth"
TRAVERSAL_BREADTH = "breadth"
TRAVERSAL_MODES = (TRAVERSAL_DEPTH, TRAVERSAL_BREADTH)

CONFIG_KEYS = (
    "root_path",
    "exclude_substring",
    "include_substring",
    "search_literal",
    "replace_literal",
    "encoding",
    "traversal",
    "atomic_write",
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default run configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Scan
        "root_path": DEFAULT_ROOT_PATH,
        "traversal": TRAVERSAL_DEPTH,

        # Path selection
        "exclude_substring": DEFAULT_EXCLUDE_SUBSTRING,
        "include_substring": DEFAULT_INCLUDE_SUBSTRING,

        # Substitution
        "search_literal": DEFAULT_SEARCH_LITERAL,
        "replace_literal": DEFAULT_REPLACE_LITERAL,
        "encoding": DEFAULT_ENCODING,

        # Persistence
        "atomic_write": True,
    }


def get_config_file_path() -> str:
    """Default location of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None, *, strict: bool = False) -> Dict[str, Any]:
    """
    Load the configuration from disk, layered over the defaults.

    Unknown keys are ignored. In lenient mode a missing file yields the
    defaults, and an unreadable or corrupt one is logged and also yields
    the defaults. Strict mode is meant for a file the user named
    explicitly: any of those problems raises instead.

    Args:
        path: Explicit config file. Defaults to the user data directory.
        strict: Raise instead of falling back to the defaults.

    Returns:
        Dict[str, Any]: The merged configuration.

    Raises:
        FileNotFoundError: Strict mode, the file does not exist.
        OSError: Strict mode, the file cannot be read.
        ValueError: Strict mode, the file is not a JSON object.
    """
    config = get_default_config()
    config_file = path or get_config_file_path()

    if not os.path.exists(config_file):
        if strict:
            raise FileNotFoundError(2, "No such file or directory", config_file)
        logger.debug(f"Config file not found at {config_file}. Using defaults.")
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        if strict:
            raise
        logger.error(f"Failed to load config from {config_file}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        if strict:
            raise ValueError(f"Config file {config_file} must contain a JSON object.")
        logger.warning(f"Corrupted config file {config_file}. Using defaults.")
        return config

    for key in CONFIG_KEYS:
        if key in data:
            config[key] = data[key]

    logger.debug(f"Configuration loaded from {config_file}")
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> str:
    """
    Persist the known configuration keys as JSON.

    Args:
        config: Configuration to save.
        path: Explicit target file. Defaults to the user data directory.

    Returns:
        str: The file that was written.

    Raises:
        OSError: If the file cannot be written.
    """
    config_file = path or get_config_file_path()
    parent = os.path.dirname(os.path.abspath(config_file))
    os.makedirs(parent, exist_ok=True)

    payload: Dict[str, Any] = {"version": CURRENT_CONFIG_VERSION}
    payload.update({k: config[k] for k in CONFIG_KEYS if k in config})

    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=4)

    logger.debug(f"Configuration saved to {config_file}")
    return config_file
