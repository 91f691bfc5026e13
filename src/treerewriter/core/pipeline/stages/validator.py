from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted inputs (CLI flags, JSON config files) and the
rewrite engine. Coerces types, injects defaults and rejects values the
engine cannot work with.
"""

import codecs
import logging
from typing import Any, Dict, List, Tuple

from treerewriter.domain.config import TRAVERSAL_MODES, get_default_config

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    In lenient mode, wrongly typed values fall back to their defaults and a
    warning is recorded for each. In strict mode the first problem raises.
    An empty search literal is rejected in both modes, since it would match
    between every pair of characters.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: Strict mode, wrongly typed value.
        ValueError: Empty search literal; strict mode, unknown encoding or
                    traversal mode.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if config is None:
        return defaults, warnings

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition
    # Paths, markers and literals keep surrounding whitespace: it is significant.
    path_fields = ["root_path"]
    literal_fields = [
        "exclude_substring", "include_substring",
        "search_literal", "replace_literal",
    ]
    string_fields = ["encoding", "traversal"]
    bool_fields = ["atomic_write"]

    # 3. Field Processing
    for field in literal_fields:
        merged[field] = _as_literal(merged.get(field), defaults[field], field, warnings, strict)

    for field in path_fields:
        merged[field] = _as_path(merged.get(field), defaults[field], field, warnings, strict)

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    # 4. Domain-Specific Checks
    if merged["search_literal"] == "":
        raise ValueError("Invalid field 'search_literal': must not be empty.")

    merged["traversal"] = _normalize_traversal(
        merged["traversal"], defaults["traversal"], warnings, strict
    )
    merged["encoding"] = _normalize_encoding(
        merged["encoding"], defaults["encoding"], warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_literal(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Accept any string verbatim, including empty ones."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_path(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Accept a path verbatim; only None or an empty string fall back."""
    literal = _as_literal(value, fallback, field, warnings, strict)
    return literal if literal else fallback


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and strip string inputs; blank values fall back."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_traversal(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    mode = value.lower()
    if mode in TRAVERSAL_MODES:
        return mode

    msg = f"Invalid traversal '{value}': expected one of {', '.join(TRAVERSAL_MODES)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback


def _normalize_encoding(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Reject codec names Python does not know."""
    try:
        codecs.lookup(value)
        return value
    except LookupError:
        msg = f"Unknown encoding '{value}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using '{fallback}'.")
        return fallback
