"""Input tree traversal."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from office2site.constants import OFFICE_LOCK_FILE_PREFIX

logger = logging.getLogger(__name__)


def walk_tree(root: str | Path, extensions: Iterable[str] | None = None) -> list[Path]:
    """Recursively list the files under ``root``.

    Parameters
    ----------
    root : str or Path
        Directory to walk
    extensions : iterable of str, optional
        Lower-case extensions (with dot) to keep; all files when omitted

    Returns
    -------
    list of Path
        Matching files, sorted by their path relative to ``root``. Office
        lock/owner files (``~$report.docx``) are never returned.

    """
    root = Path(root)
    wanted = {ext.lower() for ext in extensions} if extensions is not None else None
    results: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            if name.startswith(OFFICE_LOCK_FILE_PREFIX):
                logger.debug(f"Skipping Office lock file: {Path(dirpath) / name}")
                continue
            if wanted is not None and os.path.splitext(name)[1].lower() not in wanted:
                continue
            results.append(Path(dirpath) / name)

    results.sort(key=lambda path: path.relative_to(root).as_posix())
    return results
