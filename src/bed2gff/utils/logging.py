"""Logging for bed2gff runs.

Console messages go to stderr through rich, so they never mix with a GFF3
stream on stdout. An optional log file always receives debug output.

Example:
    >>> import logging
    >>> from bed2gff.utils.logging import setup_logging
    >>> setup_logging(verbosity=2, log_file="bed2gff.log")
    >>> logging.getLogger("bed2gff.convert").debug("Parsed 10 transcripts")
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "bed2gff"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# -v / default / -q
VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def setup_logging(verbosity: int = 1, log_file: Path | str | None = None) -> None:
    """Attach handlers to the bed2gff logger, replacing earlier ones.

    Args:
        verbosity: 0=warning, 1=info, 2=debug on the console.
        log_file: File receiving every message down to debug.
    """
    console_level = VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is None:
        logger.setLevel(console_level)
        return

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)
    logger.setLevel(logging.DEBUG)


class ProgressLogger:
    """Report how many transcripts of a run have been converted.

    A message is logged every ``interval`` transcripts, after the last one,
    and once more by ``finish``.

    Example:
        >>> progress = ProgressLogger(logger, total=len(records), interval=10_000)
        >>> for record in records:
        ...     progress.update()
        >>> progress.finish()
    """

    def __init__(
        self,
        logger: logging.Logger,
        total: int,
        interval: int = 10_000,
        description: str = "Converting transcripts",
    ) -> None:
        self.logger = logger
        self.total = total
        self.interval = max(1, interval)
        self.description = description
        self.count = 0

    def update(self, n: int = 1) -> None:
        self.count += n
        if self.count % self.interval and self.count != self.total:
            return
        pct = 100 * self.count / self.total if self.total > 0 else 100
        self.logger.info(f"{self.description}: {self.count}/{self.total} ({pct:.1f}%)")

    def finish(self) -> None:
        self.logger.info(f"{self.description}: done ({self.count} transcripts)")


class Timer:
    """Measure the wall time of a block, logging it at debug level.

    Example:
        >>> with Timer("Conversion", logger) as timer:
        ...     run()
        >>> timer.elapsed
        0.42
    """

    def __init__(self, description: str, logger: logging.Logger | None = None) -> None:
        self.description = description
        self.logger = logger
        self.start_time = 0.0
        self.elapsed = 0.0

    def __enter__(self) -> Timer:
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.elapsed = time.perf_counter() - self.start_time
        if self.logger is not None:
            self.logger.debug(f"{self.description} took {self.elapsed:.2f}s")
