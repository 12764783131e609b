"""Core utilities package.

Pure helpers with no dependencies on the rest of the package: subprocess
invocation and display formatting.
"""

from vinv.core.formatting import (
    format_duration,
    format_rate,
    format_size_mb,
    truncate_filename,
)
from vinv.core.subprocess_utils import (
    DEFAULT_TIMEOUT_SECONDS,
    CommandOutput,
    run_command,
)

__all__ = [
    # Formatting
    "format_duration",
    "format_rate",
    "format_size_mb",
    "truncate_filename",
    # Subprocess
    "DEFAULT_TIMEOUT_SECONDS",
    "CommandOutput",
    "run_command",
]
