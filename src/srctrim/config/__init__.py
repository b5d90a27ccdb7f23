# topmark:header:start
#
#   project      : SrcTrim
#   file         : __init__.py
#   file_relpath : src/srctrim/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for SrcTrim.

Recipes are declared in TOML (``srctrim.toml`` or ``[tool.srctrim]`` in
``pyproject.toml``) and loaded with `tomlkit`; see `srctrim.config.loaders`.
"""
