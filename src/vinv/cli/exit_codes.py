"""Standardized exit codes for the vinv CLI.

Codes are grouped by category:
- 0: Success
- 1-9: General errors
- 10-19: Configuration errors
- 20-29: Target/file errors
- 30-39: Tool/dependency errors
- 40-49: Persistence errors
- 50-59: Parse errors

Soft per-file failures during a scan do not change the exit code; they are
reported in the run summary and the error log.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for vinv CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Configuration errors (10-19)
    CONFIG_ERROR = 11

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20

    # Tool/dependency errors (30-39)
    FFPROBE_NOT_FOUND = 32

    # Persistence errors (40-49)
    DATABASE_ERROR = 42

    # Parse errors (50-59)
    PARSE_ERROR = 51
