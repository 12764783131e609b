"""ProbeAdapter interface for media metadata extraction."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from vinv.domain.enums import FailureKind


class ProbeUnavailableError(Exception):
    """Raised when the prober executable cannot be located or started."""

    pass


@dataclass(frozen=True)
class ProbeOutput:
    """Raw result of probing one file.

    Attributes:
        document: Structured output (JSON text) if the prober produced any.
        diagnostics: Text from the prober's diagnostic channel, if any.
        failure: Why there is no document (PROBE_UNAVAILABLE or
            PROBE_NO_DOCUMENT), None when a document is present.
    """

    document: str | None
    diagnostics: str | None = None
    failure: FailureKind | None = None

    @property
    def has_document(self) -> bool:
        return self.document is not None


class ProbeAdapter(Protocol):
    """Protocol for prober implementations.

    Implementations launch an external tool for a single file, capture its
    structured output and diagnostics separately, and wait for completion.
    Per-file problems are reported through ProbeOutput.failure, never raised.
    """

    def probe(self, path: Path) -> ProbeOutput:
        """Probe a media file.

        Args:
            path: Path to an existing regular file.

        Returns:
            ProbeOutput with the document and/or diagnostics.
        """
        ...
