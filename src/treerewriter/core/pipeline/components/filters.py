from __future__ import annotations

"""
Path Selection Filter.

Selects scanned paths by plain substring containment on the full path
string. No globbing and no regular expressions: the markers are literals.
"""

from typing import Iterable, List

# -----------------------------------------------------------------------------
# PATH MATCHING
# -----------------------------------------------------------------------------

def is_selected(path: str, exclude_substring: str, include_substring: str) -> bool:
    """
    Decide whether a single path takes part in the rewrite.

    The exclude marker is a hard veto: a path containing both markers is
    rejected.

    Args:
        path: Full path as produced by the scanner.
        exclude_substring: Marker that disqualifies a path.
        include_substring: Marker a path must contain.

    Returns:
        bool: True if the path should be rewritten.
    """
    if exclude_substring in path:
        return False
    return include_substring in path


def select_paths(
        paths: Iterable[str],
        exclude_substring: str,
        include_substring: str,
) -> List[str]:
    """
    Keep the paths that contain the include marker and not the exclude marker.

    Order is preserved.

    Args:
        paths: Enumerated paths.
        exclude_substring: Marker that disqualifies a path.
        include_substring: Marker a path must contain.

    Returns:
        List[str]: Selected paths in input order.
    """
    return [p for p in paths if is_selected(p, exclude_substring, include_substring)]
