"""Stub ProbeAdapter returning canned documents.

Used by tests and by callers that want to exercise the pipeline without
ffprobe installed.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from vinv.domain.enums import FailureKind
from vinv.introspector.interface import ProbeOutput


class StubProbeAdapter:
    """ProbeAdapter that looks documents up by file name.

    Values may be a dict (serialized to JSON), a string (returned verbatim),
    or a ready-made ProbeOutput. Files without an entry get
    PROBE_NO_DOCUMENT.
    """

    def __init__(
        self,
        documents: Mapping[str, dict[str, Any] | str | ProbeOutput] | None = None,
        diagnostics: Mapping[str, str] | None = None,
    ) -> None:
        self._documents = dict(documents or {})
        self._diagnostics = dict(diagnostics or {})
        self.calls: list[Path] = []

    def add(self, name: str, document: dict[str, Any] | str | ProbeOutput) -> None:
        """Register a document for a file name."""
        self._documents[name] = document

    def probe(self, path: Path) -> ProbeOutput:
        self.calls.append(path)
        entry = self._documents.get(path.name)
        diagnostics = self._diagnostics.get(path.name)

        if isinstance(entry, ProbeOutput):
            return entry
        if entry is None:
            return ProbeOutput(
                document=None,
                diagnostics=diagnostics,
                failure=FailureKind.PROBE_NO_DOCUMENT,
            )
        if isinstance(entry, str):
            return ProbeOutput(document=entry, diagnostics=diagnostics)
        return ProbeOutput(document=json.dumps(entry), diagnostics=diagnostics)
