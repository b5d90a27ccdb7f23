# topmark:header:start
#
#   project      : SrcTrim
#   file         : test_files.py
#   file_relpath : tests/io/test_files.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the filesystem boundary: reading, atomic writes and backups."""

from __future__ import annotations

import os
import re
import stat
from typing import TYPE_CHECKING

import pytest

from srctrim.io.files import backup_file, read_source, safe_unlink, write_atomic

if TYPE_CHECKING:
    from pathlib import Path


def test_read_preserves_crlf(tmp_path: Path) -> None:
    path = tmp_path / "a.js"
    path.write_bytes(b"a\r\nb\r\n")
    assert read_source(path) == "a\r\nb\r\n"


def test_read_rejects_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "bin.js"
    path.write_bytes(b"\xff\xfe{")
    with pytest.raises(UnicodeDecodeError):
        read_source(path)


def test_write_atomic_replaces_content(tmp_path: Path) -> None:
    path = tmp_path / "server.js"
    path.write_text("old", encoding="utf-8")
    written = write_atomic(path, "новый\n")
    assert written == len("новый\n".encode())
    assert path.read_bytes() == "новый\n".encode()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["server.js"]


def test_write_atomic_keeps_mode(tmp_path: Path) -> None:
    path = tmp_path / "server.js"
    path.write_text("old", encoding="utf-8")
    path.chmod(0o640)
    write_atomic(path, "new")
    assert stat.S_IMODE(path.stat().st_mode) == 0o640


def test_write_atomic_failure_leaves_original(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "server.js"
    path.write_text("old", encoding="utf-8")

    def boom(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", boom)
    with pytest.raises(OSError, match="disk full"):
        write_atomic(path, "new")
    assert path.read_text(encoding="utf-8") == "old"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["server.js"]


def test_backup_file_is_timestamped_copy(tmp_path: Path) -> None:
    path = tmp_path / "server.js"
    path.write_text("original", encoding="utf-8")
    first = backup_file(path)
    second = backup_file(path)

    assert re.fullmatch(r"server\.js\.bak\.\d{8}_\d{6}(\.\d+)?", first.name)
    assert first != second
    assert first.read_text(encoding="utf-8") == "original"
    assert second.read_text(encoding="utf-8") == "original"


def test_safe_unlink_tolerates_missing(tmp_path: Path) -> None:
    safe_unlink(tmp_path / "missing")
    safe_unlink(None)
    target = tmp_path / "x"
    target.write_text("", encoding="utf-8")
    safe_unlink(target)
    assert not target.exists()
