# topmark:header:start
#
#   project      : SrcTrim
#   file         : errors.py
#   file_relpath : src/srctrim/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the SrcTrim CLI.

Each class carries a dedicated exit code. Core errors are translated with
[`from_core_error`][srctrim.cli.errors.from_core_error] at the command boundary.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from srctrim.cli.exit_codes import ExitCode
from srctrim.core.errors import (
    ConfigError,
    MalformedInputError,
    MarkerNotFoundError,
    NothingToDoError,
    SrctrimError,
    TrailerConflictError,
)


class SrctrimCliError(click.ClickException):
    """Base class for all SrcTrim CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorized later by `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class SrctrimUsageError(SrctrimCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class SrctrimConfigError(SrctrimCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class SrctrimFileNotFoundError(SrctrimCliError):
    """Error when the input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class SrctrimPermissionDeniedError(SrctrimCliError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class SrctrimIOError(SrctrimCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class SrctrimEncodingError(SrctrimCliError):
    """Error for text decoding errors."""

    exit_code = ExitCode.ENCODING_ERROR


class SrctrimMarkerNotFoundError(SrctrimCliError):
    """Error when the anchor marker or phrase is absent."""

    exit_code = ExitCode.MARKER_NOT_FOUND


class SrctrimMalformedInputError(SrctrimCliError):
    """Error when the block after the marker never balances."""

    exit_code = ExitCode.MALFORMED_INPUT


class SrctrimNothingToDo(SrctrimCliError):
    """No-op outcome reported with its own exit code."""

    exit_code = ExitCode.NOTHING_TO_DO

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Report the no-op as a warning rather than an error."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.warn(f"Nothing to do: {self.format_message()}")
                return
        super().show(file)


_CORE_TO_CLI: tuple[tuple[type[SrctrimError], type[SrctrimCliError]], ...] = (
    (MarkerNotFoundError, SrctrimMarkerNotFoundError),
    (MalformedInputError, SrctrimMalformedInputError),
    (NothingToDoError, SrctrimNothingToDo),
    (TrailerConflictError, SrctrimUsageError),
    (ConfigError, SrctrimConfigError),
)


def from_core_error(exc: SrctrimError) -> SrctrimCliError:
    """Translate a core exception into the CLI exception with the matching exit code."""
    for core_cls, cli_cls in _CORE_TO_CLI:
        if isinstance(exc, core_cls):
            return cli_cls(str(exc))
    return SrctrimCliError(str(exc))


def from_os_error(exc: OSError | UnicodeDecodeError, path: object) -> SrctrimCliError:
    """Translate a filesystem/decoding exception raised while handling ``path``."""
    if isinstance(exc, UnicodeDecodeError):
        return SrctrimEncodingError(f"{path}: not valid UTF-8 ({exc.reason})")
    if isinstance(exc, FileNotFoundError):
        return SrctrimFileNotFoundError(f"{path}: no such file")
    if isinstance(exc, PermissionError):
        return SrctrimPermissionDeniedError(f"{path}: permission denied")
    return SrctrimIOError(f"{path}: {exc.strerror or exc}")
