from __future__ import annotations

"""
Whole-File Reading Component.

Loads a file's complete text with a fixed encoding. Decoding is strict and
newline translation is disabled, so writing the text back unchanged
reproduces the original bytes.
"""

from treerewriter.domain.rewrite_models import FileRecord

# -----------------------------------------------------------------------------
# READ OPERATIONS
# -----------------------------------------------------------------------------

def read_text(file_path: str, encoding: str = "utf-8") -> str:
    """
    Read the entire content of a file as text.

    Args:
        file_path: Path to the target file.
        encoding: Text encoding of the file.

    Returns:
        str: Decoded content.

    Raises:
        OSError: If the file is missing or unreadable.
        UnicodeDecodeError: If the bytes are not valid in `encoding`.
    """
    with open(file_path, "r", encoding=encoding, newline="") as f:
        return f.read()


def load_record(file_path: str, encoding: str = "utf-8") -> FileRecord:
    """Read a file into a FileRecord."""
    return FileRecord(path=file_path, content=read_text(file_path, encoding))
