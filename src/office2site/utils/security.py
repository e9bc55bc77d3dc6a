#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Checks run on an office package before any part of it is read.

Office files are ZIP containers. A container is refused when a member name
escapes the package root, when it holds too many members, or when its members
inflate past a total size or compression ratio that no real deck or document
reaches.
"""

import logging
import zipfile
from pathlib import PurePosixPath

from office2site.constants import (
    DEFAULT_MAX_COMPRESSION_RATIO,
    DEFAULT_MAX_UNCOMPRESSED_SIZE,
    DEFAULT_MAX_ZIP_ENTRIES,
)
from office2site.exceptions import ZipFileSecurityError

logger = logging.getLogger(__name__)

_MEGABYTE = 1024 * 1024


def check_member_name(name: str) -> None:
    """Refuse member names that are absolute or climb out of the package.

    Raises
    ------
    ZipFileSecurityError
        For drive-letter, rooted or ``..``-containing names.

    """
    posix_name = name.replace("\\", "/")
    if posix_name[1:2] == ":":
        raise ZipFileSecurityError(f"Package member has a drive-letter path: {name}")
    if posix_name.startswith("/") or ".." in PurePosixPath(posix_name).parts:
        raise ZipFileSecurityError(f"Package member escapes the package root: {name}")


def validate_zip_archive(
    zf: zipfile.ZipFile,
    max_compression_ratio: float = DEFAULT_MAX_COMPRESSION_RATIO,
    max_uncompressed_size: int = DEFAULT_MAX_UNCOMPRESSED_SIZE,
    max_entries: int = DEFAULT_MAX_ZIP_ENTRIES,
) -> None:
    """Validate an opened office package.

    Parameters
    ----------
    zf : zipfile.ZipFile
        The opened container
    max_compression_ratio : float
        Largest accepted ratio of inflated to stored bytes, over all members
    max_uncompressed_size : int
        Largest accepted inflated size in bytes, over all members
    max_entries : int
        Largest accepted member count

    Raises
    ------
    ZipFileSecurityError
        On the first check that fails.

    """
    members = zf.infolist()
    if len(members) > max_entries:
        raise ZipFileSecurityError(f"Package has {len(members)} members, more than the limit of {max_entries}")

    inflated = 0
    stored = 0
    for member in members:
        check_member_name(member.filename)
        inflated += member.file_size
        stored += member.compress_size
        if inflated > max_uncompressed_size:
            raise ZipFileSecurityError(
                f"Package inflates to more than {max_uncompressed_size / _MEGABYTE:.1f}MB "
                f"(stopped at {member.filename})"
            )

    ratio = inflated / stored if stored else 0.0
    if ratio > max_compression_ratio:
        raise ZipFileSecurityError(f"Package has a suspicious compression ratio of {ratio:.1f}:1")

    logger.debug(f"Package passed validation ({len(members)} members, {inflated} bytes inflated)")
