from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization and the location of persistent application
data. Acts as a thin abstraction over the 'os' module so the rest of the
package resolves paths uniformly across Windows and Unix-like systems.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "TreeRewriter"
UNIX_APP_DIR_NAME = ".treerewriter"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir(create: bool = False) -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/TreeRewriter
    - Linux/Mac: ~/.treerewriter

    Args:
        create: If True, create the directory hierarchy when missing.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    if create:
        os.makedirs(path, exist_ok=True)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Expand a user supplied path without making it absolute or trimming it.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). The result stays relative when the input is relative,
    because enumerated paths are built by joining onto the root string
    exactly as given.

    Args:
        path: Raw input path string.
        fallback: Path to use when the input is empty.

    Returns:
        str: Expanded path.
    """
    p = path or ""
    if not p:
        p = fallback
    return os.path.expandvars(os.path.expanduser(p))


def ensure_directory(path: str) -> None:
    """
    Verify that a path exists and is a directory.

    Args:
        path: Directory to check.

    Raises:
        FileNotFoundError: If nothing exists at the path.
        NotADirectoryError: If the path is not a directory.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(2, "No such file or directory", path)
    if not os.path.isdir(path):
        raise NotADirectoryError(20, "Not a directory", path)
