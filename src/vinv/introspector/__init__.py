"""Introspector module for Video Inventory.

- ProbeAdapter: Protocol defining the probing interface
- FFprobeAdapter: Production implementation using ffprobe
- StubProbeAdapter: Canned-document implementation for testing
- ProbeOutput: Raw document + diagnostics from one probe
- extract_record / build_record: Probe document -> InventoryRecord
"""

from vinv.introspector.extractor import build_record, extract_record, parse_document
from vinv.introspector.ffprobe import FFPROBE_ARGS, FFprobeAdapter
from vinv.introspector.interface import (
    ProbeAdapter,
    ProbeOutput,
    ProbeUnavailableError,
)
from vinv.introspector.stub import StubProbeAdapter

__all__ = [
    "ProbeAdapter",
    "ProbeOutput",
    "ProbeUnavailableError",
    "FFprobeAdapter",
    "FFPROBE_ARGS",
    "StubProbeAdapter",
    # Extraction
    "build_record",
    "extract_record",
    "parse_document",
]
