#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the office2site command line.

Library modules only create module loggers; handlers are attached here, once,
by the entry point. Plain mode prints ``LEVEL: message`` lines to stderr.
Trace mode adds timestamps and logger names, which is what the per-file
timings logged at DEBUG are read with.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(log_level: int | str, verbose: bool = False, trace: bool = False) -> int:
    """Work out the effective level from ``--log-level``, ``--verbose`` and ``--trace``.

    ``--trace`` always means DEBUG. ``--verbose`` means DEBUG unless a level
    other than the default WARNING was asked for explicitly.

    Examples
    --------
    >>> resolve_level("ERROR", verbose=True)
    40
    >>> resolve_level("WARNING", verbose=True)
    10

    """
    if trace:
        return logging.DEBUG
    if isinstance(log_level, int):
        level = log_level
    else:
        level = logging.getLevelName(str(log_level).upper())
        if not isinstance(level, int):
            level = logging.INFO
    if verbose and level == logging.WARNING:
        return logging.DEBUG
    return level


def build_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    return logging.Formatter(PLAIN_FORMAT)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the root logger.

    Parameters
    ----------
    log_level : int | str
        Level number or name such as ``"INFO"``
    log_file : str, optional
        File that also receives every record; parent directories are created
    trace_mode : bool, default False
        Use the timestamped format

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = resolve_level(log_level)
    formatter = build_formatter(trace_mode)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            file_error = e

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if file_error is not None:
        root_logger.warning(f"Could not open log file {log_file}: {file_error}")
    elif log_file:
        root_logger.info(f"Logging to file: {log_file}")
    return root_logger
