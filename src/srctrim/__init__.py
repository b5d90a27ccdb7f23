# topmark:header:start
#
#   project      : SrcTrim
#   file         : __init__.py
#   file_relpath : src/srctrim/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim package.

SrcTrim repairs generated program source files by truncating them at a
structurally balanced boundary (or before a duplicated section) and appending
a fixed trailer. The transforms in `srctrim.core` are pure functions; the CLI
in `srctrim.cli` owns all file I/O.
"""

from __future__ import annotations
