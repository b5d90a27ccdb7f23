# topmark:header:start
#
#   project      : SrcTrim
#   file         : __main__.py
#   file_relpath : src/srctrim/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running SrcTrim via ``python -m srctrim``."""

from __future__ import annotations

from srctrim.cli.main import cli

if __name__ == "__main__":
    cli()
