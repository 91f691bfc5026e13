from __future__ import annotations

"""
Literal Text Substitution.

Replace-all over plain strings. The search term is never interpreted as a
pattern, so characters like '.', '*' or '$' match themselves.
"""

from typing import Tuple


def replace_literal(content: str, search: str, replace: str) -> Tuple[str, int]:
    """
    Replace every non-overlapping occurrence of `search`, left to right.

    The replacement text is not rescanned, so a replacement containing the
    search term does not expand further.

    Args:
        content: Source text.
        search: Literal to find. Must not be empty.
        replace: Literal to insert.

    Returns:
        Tuple[str, int]: (New text, number of occurrences replaced).

    Raises:
        ValueError: If `search` is empty.
    """
    if not search:
        raise ValueError("Search literal must not be empty.")

    count = content.count(search)
    if count == 0:
        return content, 0
    return content.replace(search, replace), count
