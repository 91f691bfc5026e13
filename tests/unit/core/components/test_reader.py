from __future__ import annotations

"""
Unit tests for the Whole-File Reading Component.

Verifies that content is read verbatim (no newline translation) and that
decoding problems surface instead of being masked.
"""

import pytest

from treerewriter.core.pipeline.components.reader import load_record, read_text
from treerewriter.domain.rewrite_models import FileRecord


def test_read_text_returns_full_content(tmp_path):
    f = tmp_path / "a.txt"
    f.write_text("line one\nline two\n", encoding="utf-8")

    assert read_text(str(f)) == "line one\nline two\n"


def test_read_text_keeps_crlf(tmp_path):
    """Windows line endings are not normalized."""
    f = tmp_path / "crlf.txt"
    f.write_bytes(b"kwap\r\nkwap\r\n")

    assert read_text(str(f)) == "kwap\r\nkwap\r\n"


def test_read_text_honours_encoding(tmp_path):
    f = tmp_path / "latin.txt"
    f.write_bytes("señal".encode("latin-1"))

    assert read_text(str(f), encoding="latin-1") == "señal"


def test_read_text_invalid_bytes_raise(tmp_path):
    """Strict decoding: undecodable bytes abort instead of being replaced."""
    f = tmp_path / "binary.bin"
    f.write_bytes(b"\xff\xfe\x00kwap")

    with pytest.raises(UnicodeDecodeError):
        read_text(str(f))


def test_read_text_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_text(str(tmp_path / "ghost.txt"))


def test_load_record_pairs_path_and_content(tmp_path):
    f = tmp_path / "r.txt"
    f.write_text("kwap", encoding="utf-8")

    record = load_record(str(f))

    assert record == FileRecord(path=str(f), content="kwap")
