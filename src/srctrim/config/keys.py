# topmark:header:start
#
#   project      : SrcTrim
#   file         : keys.py
#   file_relpath : src/srctrim/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for SrcTrim configuration.

Keys defined here are the external configuration API (``srctrim.toml`` and
``[tool.srctrim]`` in ``pyproject.toml``); renaming one is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML file names, sections and keys used by SrcTrim configuration."""

    CONFIG_FILE_NAME: Final[str] = "srctrim.toml"
    PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"

    # [tool.srctrim] inside pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
    SECTION_TOOL_NAME: Final[str] = "srctrim"

    # [recipes.<name>]
    SECTION_RECIPES: Final[str] = "recipes"

    KEY_MODE: Final[str] = "mode"
    KEY_TARGET: Final[str] = "target"
    KEY_MARKER: Final[str] = "marker"
    KEY_PHRASES: Final[str] = "phrases"
    KEY_TERMINAL: Final[str] = "terminal"
    KEY_TRAILER: Final[str] = "trailer"
    KEY_TRAILER_FILE: Final[str] = "trailer_file"
    KEY_OCCURRENCE: Final[str] = "occurrence"
    KEY_SCAN: Final[str] = "scan"
    KEY_BACKUP: Final[str] = "backup"
