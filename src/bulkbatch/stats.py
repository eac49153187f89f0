"""Process memory reporting."""

import sys
from typing import Any

import psutil

_UNITS = ["B", "KB", "MB", "GB"]

_peak_rss = 0


def format_bytes(num_bytes: float) -> str:
    """Render a byte count as e.g. ``"1.5 MB"`` (1024 base, two decimals)."""
    value = float(num_bytes)
    unit = 0
    while value > 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_UNITS[unit]}"


def current_rss() -> int:
    """Resident set size of this process, in bytes."""
    global _peak_rss
    rss = psutil.Process().memory_info().rss
    _peak_rss = max(_peak_rss, rss)
    return rss


def peak_rss() -> int:
    """Highest resident set size of this process, in bytes.

    On POSIX this is the kernel's high-water mark (``ru_maxrss``). Windows
    has no equivalent here, so it falls back to the highest value sampled
    by ``current_rss``.
    """
    if sys.platform == "win32":
        return _peak_rss
    import resource

    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports kilobytes, macOS bytes
    if sys.platform != "darwin":
        max_rss *= 1024
    return max(_peak_rss, max_rss)


def memory_usage() -> dict[str, Any]:
    """Current and peak resident memory."""
    current = current_rss()
    peak = peak_rss()
    return {
        "current": current,
        "peak": peak,
        "current_formatted": format_bytes(current),
        "peak_formatted": format_bytes(peak),
    }
