"""Process resource usage.

Example:
    >>> from bed2gff.utils.resources import get_peak_memory_mb
    >>> get_peak_memory_mb() > 0
    True
"""

from __future__ import annotations

import platform

import psutil


def get_current_memory_mb() -> float:
    """Get the resident set size of this process in MB."""
    return psutil.Process().memory_info().rss / 1024 / 1024


def get_peak_memory_mb() -> float:
    """Get the peak resident set size of this process in MB.

    Uses getrusage where available (more reliable on Linux), otherwise the
    current resident size.
    """
    if platform.system() == "Windows":
        return get_current_memory_mb()

    import resource

    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # On Linux, ru_maxrss is in KB; on macOS it's in bytes
    if platform.system() == "Darwin":
        return peak / 1024 / 1024
    return peak / 1024
