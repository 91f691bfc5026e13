from __future__ import annotations

"""
File Discovery Service.

Walks a directory tree and returns the path of every non-directory entry.
Traversal uses an explicit work-list instead of recursion, so tree depth is
bounded by memory rather than by the interpreter's recursion limit.
"""

import logging
import os
from collections import deque
from typing import Deque, Iterator, List, Set, Tuple

from treerewriter.domain.config import TRAVERSAL_BREADTH, TRAVERSAL_DEPTH
from treerewriter.infra.fs import ensure_directory

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def enumerate_files(root: str, traversal: str = TRAVERSAL_DEPTH) -> List[str]:
    """
    Collect the path of every non-directory entry below `root`.

    Paths are built by joining each parent path with the entry name, so the
    result keeps the root prefix exactly as given ('.' yields './a/b.txt').
    Entries are visited in the order the directory listing returns them.
    Anything that is not a directory (regular file, symlink to a file,
    device, broken symlink) is a leaf.

    Args:
        root: Directory to scan.
        traversal: 'depth' for depth-first pre-order (a directory's subtree
                   appears where the directory sits in its parent's
                   listing), 'breadth' for level order.

    Returns:
        List[str]: Leaf paths in traversal order.

    Raises:
        FileNotFoundError: If `root` does not exist.
        NotADirectoryError: If `root` is not a directory.
        ValueError: If `traversal` is unknown.
        OSError: If a directory cannot be listed.
    """
    ensure_directory(root)

    if traversal == TRAVERSAL_DEPTH:
        paths = _walk_depth_first(root)
    elif traversal == TRAVERSAL_BREADTH:
        paths = _walk_breadth_first(root)
    else:
        raise ValueError(f"Unknown traversal mode: {traversal!r}")

    logger.debug(f"Enumerated {len(paths)} files under '{root}' ({traversal}-first)")
    return paths


# ==============================================================================
# PRIVATE HELPERS (TRAVERSAL STRATEGIES)
# ==============================================================================

def _walk_depth_first(root: str) -> List[str]:
    """
    Depth-first pre-order walk.

    The work-list holds one listing iterator per open directory, together
    with that directory's real path, which doubles as the ancestor chain
    used for cycle detection.
    """
    leaves: List[str] = []
    stack: List[Tuple[str, Iterator[str]]] = [(_real(root), _children(root))]

    while stack:
        _, entries = stack[-1]
        child = next(entries, None)
        if child is None:
            stack.pop()
            continue

        if not os.path.isdir(child):
            leaves.append(child)
            continue

        real = _real(child)
        if any(real == ancestor for ancestor, _ in stack):
            logger.warning(f"Skipping directory cycle at '{child}' -> '{real}'")
            continue

        stack.append((real, _children(child)))

    return leaves


def _walk_breadth_first(root: str) -> List[str]:
    """
    Level-order walk.

    Each queued directory carries the real paths of its ancestors so that
    symlink cycles are detected the same way as in the depth-first walk.
    """
    leaves: List[str] = []
    pending: Deque[Tuple[str, Set[str]]] = deque([(root, {_real(root)})])

    while pending:
        directory, ancestors = pending.popleft()
        for child in _children(directory):
            if not os.path.isdir(child):
                leaves.append(child)
                continue

            real = _real(child)
            if real in ancestors:
                logger.warning(f"Skipping directory cycle at '{child}' -> '{real}'")
                continue

            pending.append((child, ancestors | {real}))

    return leaves


def _children(directory: str) -> Iterator[str]:
    """List a directory eagerly and iterate over the joined child paths."""
    names = os.listdir(directory)
    return iter([os.path.join(directory, name) for name in names])


def _real(path: str) -> str:
    return os.path.realpath(path)
