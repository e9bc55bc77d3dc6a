#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/utils/archive.py
"""Zip-container access for office packages.

A :class:`SlidePackage` wraps one opened ``.pptx`` archive for the lifetime
of a conversion: entries are listed up front and decoded lazily on request,
decoded entries stay cached until the package is closed.

"""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import Path
from types import TracebackType
from typing import IO, Optional, Union

from office2site.exceptions import EntryNotFoundError, InvalidArchiveError
from office2site.utils.security import validate_zip_archive
from office2site.utils.xml import XmlNode, parse_xml

logger = logging.getLogger(__name__)

PackageSource = Union[str, Path, bytes, IO[bytes]]

# zipfile lets decompressor and encryption errors through unwrapped
_ENTRY_READ_ERRORS = (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError)


class SlidePackage:
    """Read-only view over the named entries of a zip container.

    Use :meth:`open` to construct one; the package is a context manager.

    Parameters
    ----------
    zf : zipfile.ZipFile
        Already opened and validated archive

    """

    def __init__(self, zf: zipfile.ZipFile):
        """Wrap an opened archive."""
        self._zf = zf
        self._names = {info.filename for info in zf.infolist() if not info.is_dir()}
        self._binary_cache: dict[str, bytes] = {}

    @classmethod
    def open(cls, source: PackageSource) -> SlidePackage:
        """Open a package from a path, raw bytes or a binary stream.

        Parameters
        ----------
        source : str, Path, bytes or IO[bytes]
            The package to open

        Returns
        -------
        SlidePackage
            The opened package

        Raises
        ------
        InvalidArchiveError
            If the data is not a valid zip container.
        ZipFileSecurityError
            If the archive looks like a zip bomb or contains traversal paths.

        """
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)
        try:
            zf = zipfile.ZipFile(source, "r")
        except zipfile.BadZipFile as e:
            raise InvalidArchiveError(f"Not a valid zip container: {e}", original_error=e) from e
        except OSError as e:
            raise InvalidArchiveError(f"Could not read zip container: {e}", original_error=e) from e

        try:
            validate_zip_archive(zf)
        except Exception:
            zf.close()
            raise
        return cls(zf)

    def __enter__(self) -> SlidePackage:
        """Enter the context."""
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Close the archive on exit."""
        self.close()

    def close(self) -> None:
        """Close the underlying archive and drop decoded entries."""
        self._binary_cache.clear()
        self._zf.close()

    def list_entries(self) -> set[str]:
        """Return the set of entry paths in the archive."""
        return set(self._names)

    def has_entry(self, name: str) -> bool:
        """Return True if the archive holds an entry called ``name``."""
        return name in self._names

    def read_binary(self, name: str) -> bytes:
        """Return the raw bytes of an entry.

        Raises
        ------
        EntryNotFoundError
            If the archive has no entry called ``name``.
        InvalidArchiveError
            If the entry data is corrupt.

        """
        if name not in self._names:
            raise EntryNotFoundError(name)
        cached = self._binary_cache.get(name)
        if cached is None:
            try:
                cached = self._zf.read(name)
            except _ENTRY_READ_ERRORS as e:
                raise InvalidArchiveError(f"Corrupt archive entry {name}: {e}", original_error=e) from e
            self._binary_cache[name] = cached
        return cached

    def read_text(self, name: str) -> str:
        """Return an entry decoded as UTF-8 text (a leading BOM is dropped).

        Raises
        ------
        EntryNotFoundError
            If the archive has no entry called ``name``.

        """
        return self.read_binary(name).decode("utf-8-sig", errors="replace")

    def read_xml(self, name: str) -> XmlNode:
        """Parse an entry as XML.

        Raises
        ------
        EntryNotFoundError
            If the archive has no entry called ``name``.
        MalformedXmlError
            If the entry is not well-formed XML.

        """
        return parse_xml(self.read_binary(name), part_name=name)
