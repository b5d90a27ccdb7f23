# topmark:header:start
#
#   project      : SrcTrim
#   file         : options.py
#   file_relpath : src/srctrim/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, write intent,
trailer, scanning, configuration) and their resolution logic, so commands
and the group can stay thin.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from srctrim.cli.errors import SrctrimUsageError, from_os_error
from srctrim.config.logging import TRACE_LEVEL
from srctrim.core.scanner import ScanMode

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings shared by all commands.
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output level from ``-v``/``-q`` counts.

    Returns:
        int: A logging-style level. ``-vvv`` TRACE, ``-vv`` DEBUG, ``-v`` INFO,
        ``-q`` ERROR, default WARNING.

    Raises:
        SrctrimUsageError: If both flags are used together.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise SrctrimUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count >= 3:
        return TRACE_LEVEL
    if verbose_count == 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    if quiet_count >= 1:
        return logging.ERROR
    return logging.WARNING


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase output detail. Repeat for more.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Reduce output to the essentials.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Honors ``--color``/``--no-color``, then ``FORCE_COLOR`` and ``NO_COLOR``,
    then falls back to whether stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_write_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--apply``, ``--diff`` and ``--backup`` to a mutating command."""
    f = click.option(
        "--backup",
        is_flag=True,
        help="Save a timestamped copy (<file>.bak.<stamp>) before writing.",
    )(f)
    f = click.option("--diff", is_flag=True, help="Show a unified diff of the change.")(f)
    f = click.option(
        "--apply",
        "apply_changes",
        is_flag=True,
        help="Write changes to the file (dry run by default).",
    )(f)
    return f


def common_trailer_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the mutually exclusive ``--trailer`` and ``--trailer-file`` options."""
    f = click.option(
        "--trailer-file",
        "trailer_file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Read the trailer appended after the cut from this file.",
    )(f)
    f = click.option(
        "--trailer",
        "trailer",
        default=None,
        help="Text appended after the cut.",
    )(f)
    return f


def resolve_trailer(trailer: str | None, trailer_file: Path | None) -> str:
    """Return the trailer text from ``--trailer`` or ``--trailer-file``.

    Raises:
        SrctrimUsageError: If both or neither are given.
        SrctrimCliError: If the trailer file cannot be read.
    """
    if trailer is not None and trailer_file is not None:
        raise SrctrimUsageError("Use either --trailer or --trailer-file, not both.")
    if trailer_file is not None:
        try:
            return trailer_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise from_os_error(e, trailer_file) from e
    if trailer is None:
        raise SrctrimUsageError("A trailer is required: pass --trailer or --trailer-file.")
    return trailer


def common_scan_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--scan naive|lexical``."""
    f = click.option(
        "--scan",
        "scan_mode",
        type=click.Choice([m.value for m in ScanMode]),
        default=ScanMode.NAIVE.value,
        show_default=True,
        help="Brace scanner: 'naive' counts every brace, 'lexical' skips strings/comments.",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--no-config",
        is_flag=True,
        help="Do not discover srctrim.toml / pyproject.toml files.",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        type=click.Path(dir_okay=False, path_type=Path),
        help="Additional config file(s) to merge (highest precedence).",
    )(f)
    return f
