# topmark:header:start
#
#   project      : SrcTrim
#   file         : files.py
#   file_relpath : src/srctrim/io/files.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Filesystem boundary: read once, back up, write atomically.

The core transforms never touch the disk; everything that does lives here.
Newlines are preserved exactly (``newline=""``) so a no-op transform writes
back byte-identical content.

Nothing here locks the target: two runs against the same file at the same time
are not prevented and the last writer wins.
"""

from __future__ import annotations

import os
import shutil
import tempfile
import time
from pathlib import Path

from srctrim.config.logging import SrctrimLogger, get_logger

logger: SrctrimLogger = get_logger(__name__)

BACKUP_SUFFIX = ".bak"


def read_source(path: Path) -> str:
    """Read ``path`` as UTF-8 text without newline translation.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        PermissionError: If ``path`` is not readable.
        UnicodeDecodeError: If ``path`` is not valid UTF-8.
    """
    with open(path, encoding="utf-8", newline="") as fh:
        text = fh.read()
    logger.debug("read %d characters from %s", len(text), path)
    return text


def write_atomic(path: Path, text: str) -> int:
    """Replace ``path`` with ``text`` via a sibling temporary file and ``os.replace``.

    An interrupted write leaves the original file untouched. The temporary file
    is removed on failure. File permissions of an existing target are kept.

    Returns:
        int: Number of UTF-8 bytes written.
    """
    data = text.encode("utf-8")
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        safe_unlink(tmp)
        raise
    logger.debug("wrote %d bytes to %s", len(data), path)
    return len(data)


def backup_file(path: Path) -> Path:
    """Copy ``path`` to ``<name>.bak.<YYYYmmdd_HHMMSS>`` next to it and return the copy."""
    stamp = time.strftime("%Y%m%d_%H%M%S")
    target = path.with_name(f"{path.name}{BACKUP_SUFFIX}.{stamp}")
    n = 1
    while target.exists():
        target = path.with_name(f"{path.name}{BACKUP_SUFFIX}.{stamp}.{n}")
        n += 1
    shutil.copy2(path, target)
    logger.info("backup of %s saved to %s", path, target)
    return target


def safe_unlink(path: Path | None) -> None:
    """Attempt to delete a file, logging (not raising) any error."""
    if path and path.exists():
        try:
            path.unlink()
        except OSError as e:
            logger.error("Failed to delete %s: %s", path, e)
