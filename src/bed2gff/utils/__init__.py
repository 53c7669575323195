"""Utility functions for bed2gff.

- Logging configuration, progress and timing
- Process memory usage

Example:
    >>> from bed2gff.utils import setup_logging
    >>> setup_logging(verbosity=2)
"""

from bed2gff.utils.logging import ProgressLogger, Timer, setup_logging
from bed2gff.utils.resources import get_current_memory_mb, get_peak_memory_mb

__all__ = [
    "ProgressLogger",
    "Timer",
    "setup_logging",
    "get_current_memory_mb",
    "get_peak_memory_mb",
]
