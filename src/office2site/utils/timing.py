#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/utils/timing.py
"""Timing of conversion runs.

:class:`FileTimer` wraps the conversion of one input file and logs how long
it took (or how long it ran before failing) at DEBUG level, which ``--trace``
turns on. The run as a whole is timed the same way and its duration ends up
in the summary.
"""

from __future__ import annotations

import logging
import time
from types import TracebackType
from typing import Optional

logger = logging.getLogger(__name__)


class FileTimer:
    """Context manager timing one step of a run.

    Parameters
    ----------
    operation : str
        What is being timed, e.g. ``"Converting guides/handbook.docx"``
    logger_instance : logging.Logger, optional
        Logger for the timing messages; defaults to this module's logger

    Examples
    --------
    >>> with FileTimer("Converting deck.pptx") as timer:  # doctest: +SKIP
    ...     render_document(path, relative, options)
    >>> timer.elapsed  # doctest: +SKIP
    0.042

    """

    def __init__(self, operation: str, logger_instance: Optional[logging.Logger] = None):
        """Initialize the timer; nothing is measured until the block is entered."""
        self.operation = operation
        self.logger = logger_instance or logger
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def __enter__(self) -> FileTimer:
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.end_time = time.perf_counter()
        if self.logger.isEnabledFor(logging.DEBUG):
            outcome = "completed in" if exc_type is None else "failed after"
            self.logger.debug(f"{self.operation} {outcome} {format_duration(self.elapsed)}")

    @property
    def elapsed(self) -> float:
        """Seconds since the block was entered (up to its exit once it has exited)."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return end - self.start_time


def format_duration(seconds: float) -> str:
    """Format a duration for status output.

    Examples
    --------
    >>> format_duration(0.123)
    '123ms'
    >>> format_duration(4.5)
    '4.5s'
    >>> format_duration(65.5)
    '1m 5.5s'

    """
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds % 60:.1f}s"
