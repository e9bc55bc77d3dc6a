#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/api.py
"""Single-document conversion functions.

These are the building blocks :func:`office2site.site.convert_tree` uses,
exposed for converting one file (or one in-memory document) at a time.

Examples
--------
>>> from office2site import pptx_to_markdown
>>> markdown = pptx_to_markdown("deck.pptx")  # doctest: +SKIP

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from office2site.constants import DOCX_EXTENSION, PPTX_EXTENSION
from office2site.model import ExtractedDeck
from office2site.options import DocxOptions, PptxOptions
from office2site.parsers.docx import DocxSource, DocxToMarkdownConverter
from office2site.parsers.pptx import PptxExtractor
from office2site.renderers.html import SlideViewerRenderer
from office2site.renderers.markdown import SlideMarkdownRenderer
from office2site.utils.archive import PackageSource

logger = logging.getLogger(__name__)


def convert_pptx(source: PackageSource, options: Optional[PptxOptions] = None) -> ExtractedDeck:
    """Extract the slides of a deck.

    Parameters
    ----------
    source : str, Path, bytes or IO[bytes]
        The ``.pptx`` file or its bytes
    options : PptxOptions, optional
        Extraction options

    Returns
    -------
    ExtractedDeck
        Slide size and extracted slides

    """
    return PptxExtractor(options).extract(source)


def pptx_to_markdown(source: PackageSource, options: Optional[PptxOptions] = None) -> str:
    """Convert a deck to a Markdown outline (no frontmatter)."""
    return SlideMarkdownRenderer().render(convert_pptx(source, options))


def pptx_to_html(source: PackageSource, title: Optional[str] = None, options: Optional[PptxOptions] = None) -> str:
    """Convert a deck to a standalone HTML slide viewer.

    The title defaults to the file stem for path sources and ``"Slides"`` otherwise.
    """
    if title is None:
        title = Path(source).stem if isinstance(source, (str, Path)) else "Slides"
    return SlideViewerRenderer().render(title, convert_pptx(source, options))


def docx_to_markdown(source: DocxSource, options: Optional[DocxOptions] = None) -> str:
    """Convert a Word document to Markdown (no frontmatter)."""
    return DocxToMarkdownConverter(options).convert(source)


def convert_document(
    path: Union[str, Path],
    pptx_options: Optional[PptxOptions] = None,
    docx_options: Optional[DocxOptions] = None,
) -> str:
    """Convert a ``.docx`` or ``.pptx`` file to Markdown, chosen by its extension.

    Raises
    ------
    ValueError
        If the file is neither a Word document nor a slide deck.

    """
    path = Path(path)
    extension = path.suffix.lower()
    logger.debug(f"Converting {path.name}")
    if extension == DOCX_EXTENSION:
        return docx_to_markdown(path, docx_options)
    if extension == PPTX_EXTENSION:
        return pptx_to_markdown(path, pptx_options)
    raise ValueError(f"Unsupported document type: {path.name}")
