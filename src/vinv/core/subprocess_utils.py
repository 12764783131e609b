"""Running ffprobe (or any external tool) with a deadline.

stdout and stderr are captured separately and decoded as UTF-8 with
replacement, so a tool that prints undecodable bytes never raises here.
A non-zero exit status is returned, not raised; interpreting it is the
caller's job.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - ffprobe is an external executable
import time
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60


class CommandOutput(NamedTuple):
    """Captured result of one command; unpacks as (stdout, stderr, code)."""

    stdout: str
    stderr: str
    returncode: int


def _short(argv: list[str], keep: int = 3) -> str:
    shown = " ".join(argv[:keep])
    return shown + " ..." if len(argv) > keep else shown


def run_command(
    args: list[str | Path],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> CommandOutput:
    """Run args to completion and capture both output channels.

    Raises:
        subprocess.TimeoutExpired: After timeout seconds. The child has
            already been killed by subprocess.run.
        OSError: If the executable cannot be started.
    """
    argv = [str(arg) for arg in args]
    tool = Path(argv[0]).name if argv else "unknown"
    started = time.monotonic()
    logger.debug("Running %s", " ".join(argv), extra={"command": tool})

    try:
        completed = subprocess.run(  # nosec B603 - argv is built by the caller
            argv,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "%s timed out after %ss: %s",
            tool,
            timeout,
            _short(argv),
            extra={"command": tool, "timeout_seconds": timeout},
        )
        raise

    logger.debug(
        "%s exited with %d",
        tool,
        completed.returncode,
        extra={
            "command": tool,
            "elapsed_seconds": round(time.monotonic() - started, 3),
        },
    )
    return CommandOutput(
        completed.stdout or "", completed.stderr or "", completed.returncode
    )
