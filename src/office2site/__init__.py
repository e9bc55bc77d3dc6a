"""office2site - Office documents to VitePress content.

Converts a tree of Word documents (``.docx``) and PowerPoint decks
(``.pptx``) into Markdown pages for a VitePress site, copies Excel workbooks
(``.xlsx``) as downloads and writes the matching sidebar configuration.

Slide decks are read straight from their OOXML parts: titles, nested
bullet text, notes, pictures and shape positions. They are published either
as a Markdown outline or as a standalone HTML slide viewer.

Examples
--------
Convert a whole tree:

    >>> from office2site import SiteOptions, convert_tree
    >>> report = convert_tree(SiteOptions(input_dir="documents", output_dir="docs"))
    >>> print(report.summary())

Convert a single deck:

    >>> from office2site import pptx_to_markdown
    >>> print(pptx_to_markdown("deck.pptx"))

"""

__version__ = "1.0.0"

from office2site.api import convert_document, convert_pptx, docx_to_markdown, pptx_to_html, pptx_to_markdown
from office2site.exceptions import (
    InputDirectoryNotFoundError,
    MalformedFileError,
    MalformedXmlError,
    Office2SiteError,
    ValidationError,
)
from office2site.model import ExtractedDeck, ExtractedSlide
from office2site.options import DocxOptions, PptxOptions, SiteOptions
from office2site.site import ConversionReport, convert_tree

__all__ = [
    "__version__",
    "ConversionReport",
    "DocxOptions",
    "ExtractedDeck",
    "ExtractedSlide",
    "InputDirectoryNotFoundError",
    "MalformedFileError",
    "MalformedXmlError",
    "Office2SiteError",
    "PptxOptions",
    "SiteOptions",
    "ValidationError",
    "convert_document",
    "convert_pptx",
    "convert_tree",
    "docx_to_markdown",
    "pptx_to_html",
    "pptx_to_markdown",
]
