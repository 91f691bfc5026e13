from __future__ import annotations

"""
Whole-File Writing Component.

Persists rewritten text back to its original path. The default strategy
stages the content in a temporary file next to the target and renames it
over the original, so an interrupted write never leaves a truncated file.
"""

import logging
import os
import shutil
import tempfile

logger = logging.getLogger(__name__)

_TEMP_SUFFIX = ".tmp"

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def write_text(file_path: str, content: str, encoding: str = "utf-8") -> None:
    """
    Overwrite a file in place with the given text.

    Not atomic: a failure mid-write can leave the file truncated.

    Args:
        file_path: Target file.
        content: Full replacement text.
        encoding: Text encoding for the output.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    with open(file_path, "w", encoding=encoding, newline="") as f:
        f.write(content)


def write_text_atomic(file_path: str, content: str, encoding: str = "utf-8") -> None:
    """
    Replace a file's content through a temporary file and an atomic rename.

    The temporary file is created in the target's own directory (a rename
    is only atomic within one filesystem), receives the original file's
    permission bits and, where the process is allowed to, its owner and
    group. It is fsynced before `os.replace`. Symlinks are resolved first
    so the link target is rewritten, not the link. A file with several
    hard links is overwritten in place instead, since a rename would detach
    it from its other names. On any error the temporary file is removed and
    the original stays untouched.

    Args:
        file_path: Existing target file.
        content: Full replacement text.
        encoding: Text encoding for the output.

    Raises:
        OSError: If the target is missing or the directory is not writable.
        UnicodeEncodeError: If `content` cannot be encoded.
    """
    target = os.path.realpath(file_path)
    directory = os.path.dirname(target)

    # Stat first so a vanished target fails before anything is staged
    st = os.stat(target)

    if st.st_nlink > 1:
        logger.debug(f"'{file_path}' has {st.st_nlink} hard links. Writing in place.")
        write_text(target, content, encoding)
        return

    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(target)}.",
        suffix=_TEMP_SUFFIX,
        dir=directory,
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        shutil.copymode(target, tmp_path)
        _copy_ownership(st, tmp_path)
        os.replace(tmp_path, target)
    except BaseException:
        logger.debug(f"Atomic write of '{file_path}' failed. Discarding '{tmp_path}'.")
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def _copy_ownership(st: os.stat_result, tmp_path: str) -> None:
    """Give the staged file the original owner and group when permitted."""
    if not hasattr(os, "chown"):
        return
    staged = os.stat(tmp_path)
    if (staged.st_uid, staged.st_gid) == (st.st_uid, st.st_gid):
        return
    try:
        os.chown(tmp_path, st.st_uid, st.st_gid)
    except PermissionError:
        logger.debug(f"Cannot keep owner {st.st_uid}:{st.st_gid} on '{tmp_path}'. Not privileged.")
