"""FFprobe-based implementation of the ProbeAdapter protocol."""

from __future__ import annotations

import logging
import shutil
import subprocess  # nosec B404 - needed for TimeoutExpired
from pathlib import Path

from vinv.core.subprocess_utils import DEFAULT_TIMEOUT_SECONDS, run_command
from vinv.domain.enums import FailureKind
from vinv.introspector.interface import ProbeOutput, ProbeUnavailableError

logger = logging.getLogger(__name__)

# Arguments placed between the executable and the input file
FFPROBE_ARGS: tuple[str, ...] = (
    "-v",
    "warning",
    "-print_format",
    "json",
    "-show_format",
    "-show_streams",
)

# A JSON document always contains at least one object delimiter
_DOCUMENT_DELIMITER = "{"


class FFprobeAdapter:
    """ffprobe-based implementation of the ProbeAdapter protocol.

    Runs ffprobe with JSON output for format and stream metadata. stdout is
    treated as the document and stderr as diagnostics; a non-empty stderr
    does not invalidate a document.
    """

    def __init__(
        self,
        ffprobe_path: Path | str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the adapter.

        Args:
            ffprobe_path: Path or command name of ffprobe. Defaults to
                "ffprobe" resolved through PATH at call time.
            timeout: Seconds to wait for a single probe before giving up.
        """
        self._ffprobe_path = str(ffprobe_path) if ffprobe_path else "ffprobe"
        self._timeout = timeout

    @property
    def ffprobe_path(self) -> str:
        return self._ffprobe_path

    def is_available(self) -> bool:
        """Check whether the configured ffprobe can be found."""
        candidate = Path(self._ffprobe_path)
        if candidate.is_file():
            return True
        return shutil.which(self._ffprobe_path) is not None

    def require_available(self) -> None:
        """Raise ProbeUnavailableError if ffprobe cannot be found."""
        if not self.is_available():
            raise ProbeUnavailableError(
                f"ffprobe not found: {self._ffprobe_path}. "
                "Install ffmpeg or set tools.ffprobe / VINV_FFPROBE_PATH."
            )

    def build_command(self, path: Path) -> list[str]:
        """Build the ffprobe argument list for a file."""
        return [self._ffprobe_path, *FFPROBE_ARGS, str(path)]

    def probe(self, path: Path) -> ProbeOutput:
        """Probe a media file with ffprobe.

        Args:
            path: Path to the media file.

        Returns:
            ProbeOutput. failure is PROBE_UNAVAILABLE if ffprobe could not be
            started and PROBE_NO_DOCUMENT on timeout or when stdout holds no
            JSON object.
        """
        try:
            stdout, stderr, returncode = run_command(
                self.build_command(path), timeout=self._timeout
            )
        except subprocess.TimeoutExpired:
            return ProbeOutput(
                document=None,
                diagnostics=f"ffprobe timed out after {self._timeout}s",
                failure=FailureKind.PROBE_NO_DOCUMENT,
            )
        except OSError as e:
            logger.debug("Could not start %s: %s", self._ffprobe_path, e)
            return ProbeOutput(
                document=None,
                diagnostics=f"could not start {self._ffprobe_path}: {e}",
                failure=FailureKind.PROBE_UNAVAILABLE,
            )

        diagnostics = stderr.strip() or None
        if _DOCUMENT_DELIMITER not in stdout:
            if diagnostics is None and returncode != 0:
                diagnostics = f"ffprobe exited with status {returncode}"
            return ProbeOutput(
                document=None,
                diagnostics=diagnostics,
                failure=FailureKind.PROBE_NO_DOCUMENT,
            )

        if returncode != 0:
            logger.debug(
                "ffprobe exited with status %d but produced output for %s",
                returncode,
                path,
            )
        return ProbeOutput(document=stdout, diagnostics=diagnostics)
