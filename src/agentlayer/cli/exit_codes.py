# topmark:header:start
#
#   project      : Agent Layer
#   file         : exit_codes.py
#   file_relpath : src/agentlayer/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Agent Layer contributors
#
# topmark:header:end

"""Exit codes for the Agent Layer CLI.

Agent Layer aligns with the BSD `sysexits` convention where practical, so that
other tooling can interpret failures consistently. The one deliberate
divergence is `WOULD_CHANGE=2`, returned by ``al sync --dry-run`` when a
generated file is out of date. Click also exits with 2 on usage errors, so
tests must assert `result.exception is None` to tell the two apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Agent Layer CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        WOULD_CHANGE: Dry-run: generated files would be updated.
        USAGE_ERROR: Command-line invocation error. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: A user-owned file (e.g. ``settings.json``) cannot be edited safely.
            Mirrors BSD ``EX_DATAERR (65)``.
        SOFTWARE_ERROR: Internal failure while rendering generated content.
            Mirrors BSD ``EX_SOFTWARE (70)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Project configuration missing or invalid. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # deliberate divergence from sysexits; see module docstring

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    SOFTWARE_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
