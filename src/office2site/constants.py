#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for office2site.

This module centralizes hardcoded values, magic numbers, and default
configuration constants used across the package.

Constants are organized by category:
1. Type Definitions - Literal types used by the options
2. Site Layout - Input/output defaults and file classification
3. Security Constants - ZIP archive limits
4. Presentation Constants - OOXML namespaces, units and defaults
5. HTML Viewer Constants - Slide viewer geometry
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

SlidesMode = Literal["markdown", "viewer"]
BodyPlaceholderPolicy = Literal["any", "typed"]
SidebarFormat = Literal["ts", "json"]

# =============================================================================
# Site Layout
# =============================================================================

DEFAULT_INPUT_DIR = "./example-fast-process-structure"
DEFAULT_OUTPUT_DIR = "./docs"
DEFAULT_BASE_URL = "/"
DEFAULT_SLIDES_MODE: SlidesMode = "markdown"
DEFAULT_SIDEBAR_FORMAT: SidebarFormat = "ts"

DOCX_EXTENSION = ".docx"
PPTX_EXTENSION = ".pptx"
XLSX_EXTENSION = ".xlsx"
MARKDOWN_EXTENSION = ".md"

CONVERTIBLE_EXTENSIONS = frozenset({DOCX_EXTENSION, PPTX_EXTENSION})
COPIED_EXTENSIONS = frozenset({XLSX_EXTENSION})
RECOGNIZED_EXTENSIONS = CONVERTIBLE_EXTENSIONS | COPIED_EXTENSIONS

# Office writes "~$name.docx" owner files next to open documents
OFFICE_LOCK_FILE_PREFIX = "~$"

# VitePress serves <srcDir>/public at the site root
PUBLIC_DIR_NAME = "public"
SLIDES_SUBDIR = "slides"

SIDEBAR_TS_FILENAME = "sidebar.ts"
SIDEBAR_JSON_FILENAME = "sidebar.json"
SITE_INDEX_FILENAME = "index.md"
DOWNLOAD_ICON = "\U0001f4e5"

# =============================================================================
# Security Constants
# =============================================================================

DEFAULT_MAX_COMPRESSION_RATIO = 100.0  # Maximum compression ratio (uncompressed/compressed)
DEFAULT_MAX_UNCOMPRESSED_SIZE = 1024 * 1024 * 1024  # 1GB maximum uncompressed size
DEFAULT_MAX_ZIP_ENTRIES = 10000  # Maximum number of entries in a ZIP archive

# =============================================================================
# Presentation Constants
# =============================================================================

EMU_PER_INCH = 914400
CSS_PIXELS_PER_INCH = 96
HUNDREDTHS_PER_POINT = 100

# PowerPoint's default 16:9 slide (13.333in x 7.5in)
DEFAULT_SLIDE_WIDTH_EMU = 12192000
DEFAULT_SLIDE_HEIGHT_EMU = 6858000

PRESENTATION_PART = "ppt/presentation.xml"
SLIDE_PART_PATTERN = r"^ppt/slides/slide(\d+)\.xml$"
NOTES_PART_TEMPLATE = "ppt/notesSlides/notesSlide{number}.xml"
MEDIA_DIR_PREFIX = "ppt/media/"

TITLE_PLACEHOLDER_TYPES = frozenset({"title", "ctrTitle", "subTitle"})
BODY_PLACEHOLDER_TYPE = "body"
NOTES_PLACEHOLDER_IDX = "1"

REL_TYPE_SLIDE_LAYOUT = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideLayout"
REL_TYPE_SLIDE_MASTER = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideMaster"

# Namespace URI -> conventional OOXML prefix used for tag and attribute names
OOXML_NAMESPACES = {
    "http://schemas.openxmlformats.org/presentationml/2006/main": "p",
    "http://schemas.openxmlformats.org/drawingml/2006/main": "a",
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships": "r",
    "http://schemas.openxmlformats.org/package/2006/relationships": "rel",
    "http://schemas.openxmlformats.org/drawingml/2006/picture": "pic",
    "http://schemas.openxmlformats.org/drawingml/2006/chart": "c",
    "http://schemas.openxmlformats.org/markup-compatibility/2006": "mc",
    "http://schemas.microsoft.com/office/powerpoint/2010/main": "p14",
    "http://schemas.microsoft.com/office/drawing/2010/main": "a14",
    "http://www.w3.org/XML/1998/namespace": "xml",
}

IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".emf": "image/emf",
    ".wmf": "image/wmf",
}

PARAGRAPH_ALIGNMENTS = {
    "l": "left",
    "ctr": "center",
    "r": "right",
    "just": "justify",
    "dist": "justify",
}

# =============================================================================
# HTML Viewer Constants
# =============================================================================

VIEWER_FIT_MARGIN_PX = 40
VIEWER_LEVEL_INDENT_EM = 1.5
VIEWER_DEFAULT_FONT_SIZE_PT = 18

# =============================================================================
# Word Document Constants
# =============================================================================

DOCX_LIST_INDENT = "  "
DOCX_MAX_HEADING_LEVEL = 6
