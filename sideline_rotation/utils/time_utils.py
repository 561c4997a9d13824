"""
Clock helpers for the Sideline Rotation engine.

Every stint boundary reads the clock through :func:`now_ts` so tests can
patch a single function, and converts intervals with :func:`whole_seconds`.
"""
import time
from typing import Optional


def fmt_mmss(seconds: int) -> str:
    """
    Format seconds as MM:SS string.

    Args:
        seconds: Number of seconds to format

    Returns:
        Formatted time string in MM:SS format

    Example:
        >>> fmt_mmss(90)
        '01:30'
        >>> fmt_mmss(3661)
        '61:01'
    """
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def whole_seconds(now: float, start: Optional[float]) -> int:
    """
    Whole seconds elapsed between ``start`` and ``now``.

    Fractions are truncated and a clock that went backwards yields zero.

    Args:
        now: End of the interval in epoch seconds
        start: Start of the interval, or None when nothing is running

    Returns:
        Non-negative integer number of seconds
    """
    if start is None:
        return 0
    return max(0, int(now - start))


def now_ts() -> float:
    """Current time as floating point epoch seconds."""
    return time.time()
