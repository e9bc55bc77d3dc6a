#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/site.py
"""Whole-tree conversion into VitePress content.

:func:`convert_tree` mirrors an input directory into a VitePress source
directory:

- ``.docx`` and ``.pptx`` files become ``.md`` pages with YAML frontmatter
- ``.xlsx`` files are copied unchanged so the site serves them as downloads
- in viewer mode every deck also gets a standalone HTML viewer under
  ``public/slides/`` and its page embeds that viewer in an ``<iframe>``
- the sidebar index is rewritten at the output root

Files are processed one at a time. A file that fails is recorded in the
:class:`ConversionReport` and the run carries on with the next one.

"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from html import escape
from pathlib import Path, PurePosixPath
from typing import Callable, Optional
from urllib.parse import quote

import yaml

from office2site.constants import (
    COPIED_EXTENSIONS,
    DOCX_EXTENSION,
    MARKDOWN_EXTENSION,
    PPTX_EXTENSION,
    PUBLIC_DIR_NAME,
    RECOGNIZED_EXTENSIONS,
    SLIDES_SUBDIR,
)
from office2site.exceptions import InputDirectoryNotFoundError, Office2SiteError, OutputWriteError
from office2site.model import ExtractedDeck
from office2site.options.site import SiteOptions
from office2site.parsers.docx import DocxToMarkdownConverter
from office2site.parsers.pptx import PptxExtractor
from office2site.renderers.html import SlideViewerRenderer
from office2site.renderers.markdown import SlideMarkdownRenderer
from office2site.sidebar import write_sidebar
from office2site.utils.timing import FileTimer
from office2site.utils.walk import walk_tree

logger = logging.getLogger(__name__)

# (relative source path, status, detail)
FileCallback = Callable[[str, str, Optional[str]], None]


@dataclass
class ConversionReport:
    """Outcome of a :func:`convert_tree` run.

    Parameters
    ----------
    converted : int
        Documents written as Markdown pages
    failed : int
        Documents (or copies) that could not be produced
    copied : int
        Spreadsheets copied unchanged
    failures : list of (str, str)
        Relative source path and error message per failure
    written : list of Path
        Every file written, in processing order
    sidebar_path : Path or None
        The sidebar file written at the output root
    elapsed : float
        Wall-clock duration of the run in seconds

    """

    converted: int = 0
    failed: int = 0
    copied: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    sidebar_path: Optional[Path] = None
    elapsed: float = 0.0

    @property
    def total(self) -> int:
        """Number of recognized input files."""
        return self.converted + self.failed + self.copied

    def summary(self) -> str:
        """Return the one-line completion message."""
        return f"Done. {self.converted} converted, {self.failed} failed."


def build_frontmatter(title: str, source: str) -> str:
    """Return a YAML frontmatter block with ``title`` and ``source``."""
    payload = yaml.safe_dump(
        {"title": title, "source": source},
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    return f"---\n{payload}---\n"


def viewer_url(relative: PurePosixPath, base_url: str = "/") -> str:
    """Return the site URL of a deck's HTML viewer, every path segment percent-encoded.

    Examples
    --------
    >>> viewer_url(PurePosixPath("Team A/kick off.pptx"))
    '/slides/Team%20A/kick%20off.html'

    """
    segments = [quote(part, safe="") for part in relative.with_suffix(".html").parts]
    return f"{base_url}{SLIDES_SUBDIR}/{'/'.join(segments)}"


def build_viewer_page(title: str, src: str, deck: ExtractedDeck) -> str:
    """Return the Markdown body that embeds a deck viewer in an inline frame."""
    width = round(deck.size.width_px)
    height = round(deck.size.height_px)
    return "\n".join(
        [
            f'<iframe src="{escape(src)}" title="{escape(title)}" '
            f'style="width: 100%; aspect-ratio: {width} / {height}; border: 0;" allowfullscreen></iframe>',
            "",
            f'<a href="{escape(src)}" target="_blank" rel="noopener">Open the slides in a new tab</a>',
        ]
    )


def render_document(source: Path, relative: PurePosixPath, options: SiteOptions) -> dict[Path, str]:
    """Convert one document in memory.

    Parameters
    ----------
    source : Path
        The ``.docx`` or ``.pptx`` file
    relative : PurePosixPath
        Its path relative to the input directory
    options : SiteOptions
        Run configuration

    Returns
    -------
    dict of Path to str
        Output path -> file content, nothing written yet

    Raises
    ------
    Office2SiteError
        If the document cannot be read or converted.
    ValueError
        If the extension is not convertible.

    """
    extension = source.suffix.lower()
    title = source.stem
    page_path = options.output_dir / relative.with_suffix(MARKDOWN_EXTENSION)
    outputs: dict[Path, str] = {}

    if extension == DOCX_EXTENSION:
        body = DocxToMarkdownConverter(options.docx).convert(source)
    elif extension == PPTX_EXTENSION:
        deck = PptxExtractor(options.pptx).extract(source)
        if options.slides_mode == "viewer":
            viewer_path = options.output_dir / PUBLIC_DIR_NAME / SLIDES_SUBDIR / relative.with_suffix(".html")
            outputs[viewer_path] = SlideViewerRenderer().render(title, deck) + "\n"
            body = build_viewer_page(title, viewer_url(relative, options.base_url), deck)
        else:
            body = SlideMarkdownRenderer().render(deck)
    else:
        raise ValueError(f"Unsupported document type: {source.name}")

    outputs[page_path] = build_frontmatter(title, source.name) + body + "\n"
    return outputs


def _write_outputs(outputs: dict[Path, str]) -> list[Path]:
    """Write every output of one document, removing the ones already written if any write fails."""
    written: list[Path] = []
    for path, content in outputs.items():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8", newline="\n")
        except OSError as e:
            for done in written:
                done.unlink(missing_ok=True)
            raise OutputWriteError(str(path), original_error=e) from e
        written.append(path)
    return written


def convert_tree(options: SiteOptions, on_file: Optional[FileCallback] = None) -> ConversionReport:
    """Convert every recognized file under ``options.input_dir``.

    Parameters
    ----------
    options : SiteOptions
        Run configuration
    on_file : callable, optional
        Called as ``on_file(relative_path, status, detail)`` after each file,
        with status ``"copied"``, ``"converted"`` or ``"failed"``

    Returns
    -------
    ConversionReport
        Counts, failures and written files

    Raises
    ------
    InputDirectoryNotFoundError
        If the input directory does not exist.
    OutputWriteError
        If the output directory or the sidebar cannot be written.

    """
    input_dir = options.input_dir
    output_dir = options.output_dir
    if not input_dir.is_dir():
        raise InputDirectoryNotFoundError(str(input_dir))

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(str(output_dir), "Could not create output directory", original_error=e) from e

    with FileTimer("Conversion run", logger) as run_timer:
        report = ConversionReport()
        files = walk_tree(input_dir, RECOGNIZED_EXTENSIONS)
        if not files:
            logger.info("No .docx, .pptx, or .xlsx files found.")

        copies = [path for path in files if path.suffix.lower() in COPIED_EXTENSIONS]
        documents = [path for path in files if path.suffix.lower() not in COPIED_EXTENSIONS]
        logger.info(f"Found {len(documents)} file(s) to convert, {len(copies)} file(s) to copy")

        def record(relative: str, status: str, detail: Optional[str] = None) -> None:
            if on_file is not None:
                on_file(relative, status, detail)

        for path in copies:
            relative = path.relative_to(input_dir).as_posix()
            target = output_dir / relative
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(path, target)
            except OSError as e:
                logger.error(f"Could not copy {relative}: {e}")
                report.failed += 1
                report.failures.append((relative, str(e)))
                record(relative, "failed", str(e))
                continue
            report.copied += 1
            report.written.append(target)
            record(relative, "copied", relative)

        for path in documents:
            relative_path = PurePosixPath(path.relative_to(input_dir).as_posix())
            relative = relative_path.as_posix()
            try:
                with FileTimer(f"Converting {relative}", logger):
                    outputs = render_document(path, relative_path, options)
                    written = _write_outputs(outputs)
            except Exception as e:
                message = e.message if isinstance(e, Office2SiteError) else f"{type(e).__name__}: {e}"
                logger.error(f"Failed to convert {relative}: {message}")
                report.failed += 1
                report.failures.append((relative, message))
                record(relative, "failed", message)
                continue
            report.converted += 1
            report.written.extend(written)
            record(relative, "converted", relative_path.with_suffix(MARKDOWN_EXTENSION).as_posix())

        report.sidebar_path = write_sidebar(output_dir, options.sidebar_format)
    report.elapsed = run_timer.elapsed
    logger.info(report.summary())
    return report
