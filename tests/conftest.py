from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for configuration dictionaries and sample trees.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Mirrors the structure defined in 'treerewriter.domain.config'.
    """
    return {
        "root_path": ".",
        "traversal": "depth",
        "exclude_substring": "target",
        "include_substring": "examples",
        "search_literal": "kwap",
        "replace_literal": "toad",
        "encoding": "utf-8",
        "atomic_write": True,
    }


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Create the reference tree.

    Structure:
    /tree
      /examples
        a.txt     "kwap kwap"
      /target
        b.txt     "kwap"
      /other
        c.txt     "nothing"
    """
    root = tmp_path / "tree"
    for sub in ("examples", "target", "other"):
        (root / sub).mkdir(parents=True)

    (root / "examples" / "a.txt").write_text("kwap kwap", encoding="utf-8")
    (root / "target" / "b.txt").write_text("kwap", encoding="utf-8")
    (root / "other" / "c.txt").write_text("nothing", encoding="utf-8")

    return root
