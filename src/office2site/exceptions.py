#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised while turning an office tree into site content.

Everything here derives from :class:`Office2SiteError`, so a caller that
converts one file can catch that, record the failure and move on. Only
:class:`InputDirectoryNotFoundError` ends a run.

Exception Hierarchy
-------------------
- Office2SiteError

  - ValidationError (bad option or config value)

  - FileError
    - InputDirectoryNotFoundError (no input root)
    - EntryNotFoundError (package has no such part)
    - MalformedFileError (document cannot be read)
      - InvalidArchiveError (not a ZIP container)
      - MalformedXmlError (a part is not well-formed XML)

  - PathResolutionError (relationship target above the package root)

  - ElementNotFoundError (required XML element missing)

  - RenderingError
    - OutputWriteError (page, viewer or sidebar could not be written)

  - SecurityError
    - ZipFileSecurityError (package refused before reading)

"""

from typing import Any


class Office2SiteError(Exception):
    """Root of the office2site exceptions.

    Parameters
    ----------
    message : str
        What went wrong, as shown in the run summary
    original_error : Exception, optional
        Lower-level exception being wrapped

    Attributes
    ----------
    message : str
    original_error : Exception or None

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Office2SiteError):
    """An option or config-file setting was rejected.

    Parameters
    ----------
    message : str
        Why the setting was rejected
    parameter_name : str, optional
        Setting name, e.g. ``"slides_mode"``
    parameter_value : Any, optional
        Value that was given
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FileError(Office2SiteError):
    """A file, directory or package part could not be used.

    ``file_path`` is the filesystem path or package-internal name involved,
    when there is one.
    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class InputDirectoryNotFoundError(FileError):
    """The input root does not exist or is not a directory."""

    def __init__(self, file_path: str, message: str | None = None):
        super().__init__(message or f"Input directory not found: {file_path}", file_path=file_path)


class EntryNotFoundError(FileError):
    """A part name was looked up that the package does not contain.

    Parameters
    ----------
    entry_name : str
        Package-internal name, e.g. ``ppt/slides/slide3.xml``

    """

    def __init__(self, entry_name: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(
            message or f"Archive entry not found: {entry_name}", file_path=entry_name, original_error=original_error
        )
        self.entry_name = entry_name


class MalformedFileError(FileError):
    """A document could not be opened or its structure is broken."""


class InvalidArchiveError(MalformedFileError):
    """Bytes that should be an office package are not a ZIP container."""


class MalformedXmlError(MalformedFileError):
    """A package part failed to parse as XML.

    ``part_name`` names the part when the XML came from a package.
    """

    def __init__(self, message: str, part_name: str | None = None, original_error: Exception | None = None):
        super().__init__(message, file_path=part_name, original_error=original_error)
        self.part_name = part_name


class PathResolutionError(Office2SiteError):
    """A relative relationship target climbs above the package root.

    For example ``../../x.png`` resolved against ``ppt/slide1.xml``.

    Parameters
    ----------
    base_path : str
        Part the target is relative to
    target : str
        The relative target

    """

    def __init__(self, base_path: str, target: str, message: str | None = None):
        super().__init__(message or f"Reference '{target}' from '{base_path}' ascends above the archive root")
        self.base_path = base_path
        self.target = target


class ElementNotFoundError(Office2SiteError):
    """An XML element path passed to ``require`` matched nothing.

    ``path`` holds the tags that were followed and ``root_tag`` the tag of
    the element the lookup started from.
    """

    def __init__(self, path: tuple[str, ...], root_tag: str):
        super().__init__(f"Element path {'/'.join(path)!r} not found under <{root_tag}>")
        self.path = path
        self.root_tag = root_tag


class RenderingError(Office2SiteError):
    """Site output could not be produced.

    ``rendering_stage`` says which step failed, e.g. ``"file_write"``.
    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """A page, viewer file, copied workbook or sidebar could not be written.

    Parameters
    ----------
    file_path : str
        Output path
    message : str, optional
        Replaces the default message

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        super().__init__(
            message or f"Failed to write output file: {file_path}",
            rendering_stage="file_write",
            original_error=original_error,
        )
        self.file_path = file_path


class SecurityError(Office2SiteError):
    """Input was refused as unsafe."""


class ZipFileSecurityError(SecurityError):
    """An office package failed the member-name, size, count or ratio checks."""
