"""Formatting utilities.

Pure functions for presenting durations, sizes, and rates on the console
and in the summary log.
"""


def format_duration(seconds: float | None) -> str:
    """Format a duration as a short human-readable string.

    Args:
        seconds: Duration in seconds.

    Returns:
        String like "45s", "3m 07s", "1h 02m", or "-" when unknown.
    """
    if seconds is None or seconds < 0:
        return "-"

    total = int(round(seconds))
    if total < 60:
        return f"{total}s"
    if total < 3600:
        minutes, secs = divmod(total, 60)
        return f"{minutes}m {secs:02d}s"
    hours, remainder = divmod(total, 3600)
    return f"{hours}h {remainder // 60:02d}m"


def format_size_mb(size_mb: float) -> str:
    """Format a size given in MiB, switching to GiB above 1024 MiB."""
    if size_mb >= 1024:
        return f"{size_mb / 1024:.2f} GiB"
    return f"{size_mb:.2f} MiB"


def format_rate(rate: float) -> str:
    """Format a files-per-second rate for display.

    Rates >= 1 are shown as comma-separated integers (e.g. '12/sec').
    Rates < 1 are shown with one decimal place (e.g. '0.3/sec').
    """
    if rate >= 1.0:
        return f"{int(rate):,}/sec"
    return f"{rate:.1f}/sec"


def truncate_filename(name: str, max_length: int) -> str:
    """Truncate a filename for single-line display, keeping its tail.

    Args:
        name: Filename to shorten.
        max_length: Maximum length of the result (including the ellipsis).

    Returns:
        The name unchanged if short enough, else "..." plus its last characters.
    """
    if len(name) <= max_length:
        return name
    if max_length <= 3:
        return name[-max_length:]
    return "..." + name[-(max_length - 3) :]
