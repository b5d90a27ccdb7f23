# topmark:header:start
#
#   project      : SrcTrim
#   file         : exit_codes.py
#   file_relpath : src/srctrim/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the SrcTrim CLI.

Small values (0-5) report the outcome of a transform; failures that are not
about the buffer itself follow the BSD `sysexits` convention so other tooling
can interpret them consistently. ``WOULD_CHANGE = 2`` collides with Click's own
usage-error code, so tests should check the reported output as well.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the SrcTrim CLI.

    Attributes:
        SUCCESS: Transform applied, or the file is already up to date.
        FAILURE: Generic failure.
        WOULD_CHANGE: Dry run: changes would be made if ``--apply`` were set.
        NOTHING_TO_DO: Fewer than two occurrences; no action taken.
        MARKER_NOT_FOUND: The anchor marker or phrase is absent.
        MALFORMED_INPUT: The block after the marker never balances.
        USAGE_ERROR: Invalid invocation. Mirrors BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: Input is not valid UTF-8. Mirrors ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors ``EX_NOINPUT (66)``.
        IO_ERROR: Read/write failure. Mirrors ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors ``EX_NOPERM (77)``.
        CONFIG_ERROR: Invalid configuration. Mirrors ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2
    NOTHING_TO_DO = 3
    MARKER_NOT_FOUND = 4
    MALFORMED_INPUT = 5

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
