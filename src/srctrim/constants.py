# topmark:header:start
#
#   project      : SrcTrim
#   file         : constants.py
#   file_relpath : src/srctrim/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SrcTrim Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    SRCTRIM_VERSION: str = get_version("srctrim")
except PackageNotFoundError:  # running from a source checkout
    SRCTRIM_VERSION = "0.0.0"

# Name of the bundled default config inside the package `srctrim.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "srctrim.config"
DEFAULT_TOML_CONFIG_NAME: str = "srctrim-default.toml"
