from __future__ import annotations

"""
Rewrite Domain Data Models.

Data Transfer Objects describing one file in flight and the outcome of a
complete rewrite run.
"""

from dataclasses import dataclass, field
from typing import List

# -----------------------------------------------------------------------------
# PER-FILE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileRecord:
    """
    A path paired with its text content.

    Lives for a single read-transform-write cycle only.

    Attributes:
        path: Path of the file, as produced by the scanner.
        content: Decoded text content.
    """
    path: str
    content: str


@dataclass(frozen=True)
class RewriteOutcome:
    """
    Result of rewriting one file.

    Attributes:
        path: File that was rewritten.
        replacements: Number of occurrences replaced.
    """
    path: str
    replacements: int

    @property
    def changed(self) -> bool:
        return self.replacements > 0


# -----------------------------------------------------------------------------
# RUN MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RewriteResult:
    """
    Summary of a complete run.

    Attributes:
        root: Root directory that was scanned.
        enumerated: Number of leaf paths found by the scan.
        selected: Paths that passed the filter, in processing order.
        outcomes: One outcome per selected path, in processing order.
    """
    root: str
    enumerated: int
    selected: List[str] = field(default_factory=list)
    outcomes: List[RewriteOutcome] = field(default_factory=list)

    @property
    def files_rewritten(self) -> int:
        return len(self.outcomes)

    @property
    def files_changed(self) -> int:
        return sum(1 for o in self.outcomes if o.changed)

    @property
    def total_replacements(self) -> int:
        return sum(o.replacements for o in self.outcomes)
