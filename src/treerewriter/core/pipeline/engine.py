from __future__ import annotations

"""
Core rewrite pipeline.

Coordinates one run over a directory tree:
1. Validates the configuration.
2. Enumerates every leaf path below the root.
3. Filters paths by the include/exclude markers.
4. Rewrites each selected file in turn (notice, read, substitute, write).

Processing is strictly sequential and any error aborts the run: files
handled before the failure stay rewritten, the rest stay untouched.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from treerewriter.core.pipeline.components.filters import select_paths
from treerewriter.core.pipeline.components.reader import load_record
from treerewriter.core.pipeline.components.writer import write_text, write_text_atomic
from treerewriter.core.pipeline.stages.validator import validate_config
from treerewriter.core.processing.substitution import replace_literal
from treerewriter.core.services.scanner import enumerate_files
from treerewriter.domain.rewrite_models import RewriteOutcome, RewriteResult
from treerewriter.infra.fs import normalize_path

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


def rewrite_file(
        path: str,
        search: str,
        replace: str,
        *,
        encoding: str = "utf-8",
        atomic: bool = True,
        notify: Optional[Notifier] = None,
) -> RewriteOutcome:
    """
    Substitute a literal throughout one file and write the result back.

    The file is always written, even when nothing matched; with zero
    occurrences the bytes on disk are unchanged.

    Args:
        path: Existing, readable and writable file.
        search: Literal to replace.
        replace: Replacement literal.
        encoding: Text encoding used for both read and write.
        atomic: Write through a temporary file and rename.
        notify: Called with `path` before the file is touched.

    Returns:
        RewriteOutcome: Number of replacements made.

    Raises:
        OSError: If the file vanished or is not readable/writable.
        UnicodeDecodeError: If the content is not valid in `encoding`.
    """
    if notify is not None:
        notify(path)

    record = load_record(path, encoding)
    new_content, count = replace_literal(record.content, search, replace)

    if atomic:
        write_text_atomic(path, new_content, encoding)
    else:
        write_text(path, new_content, encoding)

    logger.debug(f"Rewrote '{path}' ({count} replacements)")
    return RewriteOutcome(path=path, replacements=count)


def run_rewrite(
        config: Optional[Dict[str, Any]],
        *,
        notify: Optional[Notifier] = None,
) -> RewriteResult:
    """
    Execute a full scan-filter-rewrite run.

    Args:
        config: Raw or partial configuration; missing keys take defaults.
        notify: Progress callback, called with each path before it is
                rewritten.

    Returns:
        RewriteResult: Paths selected and per-file outcomes.

    Raises:
        ValueError: If the configuration has an empty search literal.
        OSError: On the first filesystem failure.
        UnicodeDecodeError: On the first file that cannot be decoded.
    """
    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    root = normalize_path(cfg["root_path"], ".")
    logger.info(
        f"Rewriting '{cfg['search_literal']}' -> '{cfg['replace_literal']}' under '{root}'"
    )

    # -------------------------------------------------------------------------
    # 2) Discovery & Selection
    # -------------------------------------------------------------------------
    paths = enumerate_files(root, cfg["traversal"])
    selected = select_paths(paths, cfg["exclude_substring"], cfg["include_substring"])
    logger.info(f"Selected {len(selected)} of {len(paths)} files")

    # -------------------------------------------------------------------------
    # 3) Sequential Rewrite
    # -------------------------------------------------------------------------
    outcomes: List[RewriteOutcome] = []
    for path in selected:
        outcomes.append(
            rewrite_file(
                path,
                cfg["search_literal"],
                cfg["replace_literal"],
                encoding=cfg["encoding"],
                atomic=cfg["atomic_write"],
                notify=notify,
            )
        )

    result = RewriteResult(
        root=root,
        enumerated=len(paths),
        selected=selected,
        outcomes=outcomes,
    )
    logger.info(
        f"Run complete: {result.files_rewritten} files rewritten, "
        f"{result.files_changed} changed, {result.total_replacements} replacements"
    )
    return result
