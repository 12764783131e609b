"""Domain enums for Video Inventory.

This module contains the failure taxonomy and run terminal states shared by
the introspector, inventory sink, and scanner.
"""

from enum import Enum


class FailureKind(Enum):
    """Reason a file produced no inventory record (or a persistence problem).

    Everything except CONFIG_MISSING is a soft failure: the file is skipped,
    an error entry is recorded, and the run continues.
    """

    CONFIG_MISSING = "ConfigMissing"  # Fatal, raised before any processing
    PROBE_UNAVAILABLE = "ProbeUnavailable"  # ffprobe could not be started
    PROBE_NO_DOCUMENT = "ProbeNoDocument"  # No usable output (or timeout)
    PARSE_ERROR = "ParseError"  # Output was not a JSON object
    MISSING_FORMAT = "MissingFormat"  # No format block
    MISSING_VIDEO_STREAM = "MissingVideoStream"  # No video stream
    PERSISTENCE_FAILURE = "PersistenceFailure"  # Row or log line not written


class RunStatus(Enum):
    """Terminal state of an inventory run."""

    COMPLETED = "completed"  # Records were persisted
    NO_FILES = "no_files"  # No file matched the configured extensions
    NO_RECORDS = "no_records"  # Files matched but none produced a record
