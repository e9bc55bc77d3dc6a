#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/parsers/docx.py
"""Word document to Markdown conversion.

A best-effort, readable conversion built on python-docx: headings, nested
lists, bold/italic runs, hyperlinks, inline pictures and tables are kept;
page layout, styles and fields are not.

"""

from __future__ import annotations

import base64
import io
import logging
import re
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Iterator, Optional, Union

import docx
from docx.document import Document as DocxDocument
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.hyperlink import Hyperlink
from docx.text.paragraph import Paragraph

from office2site.constants import DOCX_LIST_INDENT, DOCX_MAX_HEADING_LEVEL
from office2site.exceptions import MalformedFileError
from office2site.options.docx import DocxOptions
from office2site.utils.security import validate_zip_archive

logger = logging.getLogger(__name__)

_HEADING_STYLE = re.compile(r"Heading (\d+)")
_LIST_STYLE = re.compile(r"List\s*(?P<kind>Bullet|Number)\s*(?P<level>\d+)?", re.I)
_MARKDOWN_SPECIAL = re.compile(r"([\\`*_\[\]<>])")

_BULLET_FORMATS = {"bullet", "none"}

DocxSource = Union[str, Path, bytes, IO[bytes]]


@dataclass
class _Block:
    """A rendered top-level block; consecutive list items are joined without a blank line."""

    text: str
    is_list_item: bool = False


def escape_markdown(text: str) -> str:
    r"""Backslash-escape characters with inline Markdown meaning.

    Examples
    --------
    >>> escape_markdown("a*b_c")
    'a\\*b\\_c'

    """
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def _wrap(text: str, bold: bool, italic: bool) -> str:
    """Apply emphasis markers around the non-whitespace core of ``text``."""
    core = text.strip()
    if not core or not (bold or italic):
        return text
    marker = "***" if bold and italic else "**" if bold else "_"
    leading = text[: len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()) :]
    return f"{leading}{marker}{core}{marker}{trailing}"


def get_numbering_definitions(doc: DocxDocument) -> dict[str, dict[str, str]]:
    """Map ``numId`` -> {``ilvl`` -> "bullet" or "number"} from the numbering part."""
    definitions: dict[str, dict[str, str]] = {}
    try:
        numbering_part = doc.part.numbering_part
    except NotImplementedError:
        # python-docx cannot create a missing numbering part
        logger.debug("Document has no numbering definitions")
        return definitions
    numbering_xml = numbering_part._element

    abstract_levels: dict[str, dict[str, str]] = {}
    for abstract in numbering_xml.findall(qn("w:abstractNum")):
        abstract_id = abstract.get(qn("w:abstractNumId"))
        levels: dict[str, str] = {}
        for level in abstract.findall(qn("w:lvl")):
            fmt = level.find(qn("w:numFmt"))
            if fmt is None:
                continue
            levels[level.get(qn("w:ilvl"), "0")] = "bullet" if fmt.get(qn("w:val")) in _BULLET_FORMATS else "number"
        if abstract_id is not None and levels:
            abstract_levels[abstract_id] = levels

    for num in numbering_xml.findall(qn("w:num")):
        num_id = num.get(qn("w:numId"))
        abstract_ref = num.find(qn("w:abstractNumId"))
        if num_id is None or abstract_ref is None:
            continue
        levels = abstract_levels.get(abstract_ref.get(qn("w:val")))
        if levels:
            definitions[num_id] = levels
    return definitions


def iter_block_items(doc: DocxDocument) -> Iterator[Paragraph | Table]:
    """Yield body paragraphs and tables in document order."""
    body = doc.element.body
    for child in body.iterchildren():
        if child.tag == qn("w:p"):
            yield Paragraph(child, doc)
        elif child.tag == qn("w:tbl"):
            yield Table(child, doc)


class DocxToMarkdownConverter:
    """Convert ``.docx`` documents to Markdown.

    Parameters
    ----------
    options : DocxOptions or None, default None
        Conversion options

    """

    def __init__(self, options: DocxOptions | None = None):
        """Initialize the converter with options."""
        self.options = options or DocxOptions()
        self._numbering: dict[str, dict[str, str]] = {}

    def convert(self, source: DocxSource) -> str:
        """Convert a Word document to Markdown.

        Parameters
        ----------
        source : str, Path, bytes or IO[bytes]
            The document or its bytes

        Returns
        -------
        str
            Markdown text without frontmatter, stripped of surrounding whitespace

        Raises
        ------
        MalformedFileError
            If the document cannot be opened.
        ZipFileSecurityError
            If the container fails the zip-bomb/path-traversal checks.

        """
        file_path = str(source) if isinstance(source, (str, Path)) else None
        if isinstance(source, (str, Path)):
            data = Path(source).read_bytes()
        elif isinstance(source, (bytes, bytearray)):
            data = bytes(source)
        else:
            data = source.read()

        try:
            with zipfile.ZipFile(io.BytesIO(data)) as zf:
                validate_zip_archive(zf)
        except zipfile.BadZipFile as e:
            raise MalformedFileError(f"Not a valid DOCX container: {e}", file_path=file_path, original_error=e) from e

        try:
            doc = docx.Document(io.BytesIO(data))
        except Exception as e:
            raise MalformedFileError(
                f"Failed to open DOCX document: {str(e)}", file_path=file_path, original_error=e
            ) from e

        return self.convert_document(doc)

    def convert_document(self, doc: DocxDocument) -> str:
        """Convert an opened python-docx document."""
        self._numbering = get_numbering_definitions(doc)
        blocks: list[_Block] = []

        for item in iter_block_items(doc):
            block = self._convert_table(item) if isinstance(item, Table) else self._convert_paragraph(item, doc)
            if block is not None:
                blocks.append(block)

        output: list[str] = []
        for index, block in enumerate(blocks):
            if index:
                joined_list = block.is_list_item and blocks[index - 1].is_list_item
                output.append("\n" if joined_list else "\n\n")
            output.append(block.text)
        return "".join(output).strip()

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def _convert_paragraph(self, paragraph: Paragraph, doc: DocxDocument) -> Optional[_Block]:
        text = self._convert_inline(paragraph, doc)
        if not text.strip():
            return None

        style_name = paragraph.style.name if paragraph.style is not None else ""
        if style_name == "Title":
            return _Block(f"# {text.replace(chr(10), ' ').strip()}")
        heading = _HEADING_STYLE.match(style_name or "")
        if heading:
            level = min(max(int(heading.group(1)), 1), DOCX_MAX_HEADING_LEVEL)
            return _Block(f"{'#' * level} {text.replace(chr(10), ' ').strip()}")

        list_type, level = self._detect_list(paragraph, style_name or "")
        if list_type is not None:
            marker = "1." if list_type == "number" else self.options.bullet_marker
            item = text.replace("\n", " ").strip()
            return _Block(f"{DOCX_LIST_INDENT * level}{marker} {item}", is_list_item=True)

        return _Block(text.strip().replace("\n", "  \n"))

    def _detect_list(self, paragraph: Paragraph, style_name: str) -> tuple[Optional[str], int]:
        """Return ``(list_type, zero_based_level)`` or ``(None, 0)`` for non-list paragraphs."""
        properties = paragraph._p.find(qn("w:pPr"))
        num_pr = properties.find(qn("w:numPr")) if properties is not None else None
        if num_pr is not None:
            ilvl = num_pr.find(qn("w:ilvl"))
            num_id = num_pr.find(qn("w:numId"))
            level_key = ilvl.get(qn("w:val"), "0") if ilvl is not None else "0"
            num_value = num_id.get(qn("w:val")) if num_id is not None else None
            if num_value and num_value != "0":
                levels = self._numbering.get(num_value, {})
                list_type = levels.get(level_key) or levels.get("0") or "bullet"
                return list_type, int(level_key) if level_key.isdigit() else 0

        match = _LIST_STYLE.match(style_name)
        if match:
            list_type = "bullet" if match.group("kind").lower() == "bullet" else "number"
            return list_type, max(int(match.group("level") or 1) - 1, 0)
        if style_name == "List Paragraph":
            return "bullet", 0
        return None, 0

    def _convert_inline(self, paragraph: Paragraph, doc: DocxDocument) -> str:
        """Render runs and hyperlinks, merging neighbours with identical formatting."""
        result: list[str] = []
        current_text: list[str] = []
        current_key: Optional[tuple[bool, bool, Optional[str]]] = None

        def flush_group() -> None:
            if not current_text or current_key is None:
                current_text.clear()
                return
            bold, italic, url = current_key
            rendered = _wrap(escape_markdown("".join(current_text)), bold, italic)
            if url:
                rendered = f"[{rendered.strip()}]({url})"
            result.append(rendered)
            current_text.clear()

        for content in paragraph.iter_inner_content():
            if isinstance(content, Hyperlink):
                runs = content.runs
                first = runs[0] if runs else None
                key = (bool(first and first.bold), bool(first and first.italic), content.address or None)
                text = "".join(run.text for run in runs)
            else:
                key = (bool(content.bold), bool(content.italic), None)
                text = content.text
                images = self._run_images(content, doc)
                if images:
                    flush_group()
                    current_key = None
                    if text:
                        result.append(_wrap(escape_markdown(text), key[0], key[1]))
                    result.extend(images)
                    continue

            if key != current_key:
                flush_group()
                current_key = key
            if text:
                current_text.append(text)

        flush_group()
        return "".join(result)

    def _run_images(self, run: Any, doc: DocxDocument) -> list[str]:
        """Return ``![alt](data:...)`` for each picture embedded in a run."""
        blips = run._element.xpath(".//a:blip")
        if not blips or not self.options.embed_images:
            return []

        descriptions = run._element.xpath(".//wp:docPr/@descr")
        alt_text = escape_markdown(descriptions[0]) if descriptions and descriptions[0] else "image"
        images = []
        for blip in blips:
            rel_id = blip.get(qn("r:embed"))
            if not rel_id:
                continue
            try:
                image_part = doc.part.related_parts[rel_id]
            except KeyError:
                logger.debug(f"Image relationship '{rel_id}' not found")
                continue
            content_type = getattr(image_part, "content_type", None) or "image/png"
            encoded = base64.b64encode(image_part.blob).decode("ascii")
            images.append(f"![{alt_text}](data:{content_type};base64,{encoded})")
        return images

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _convert_table(self, table: Table) -> Optional[_Block]:
        rows: list[list[str]] = []
        for row in table.rows:
            cells = []
            for cell in row.cells:
                lines = [escape_markdown(p.text).replace("\n", "<br>") for p in cell.paragraphs if p.text.strip()]
                cells.append("<br>".join(lines).replace("|", "\\|"))
            rows.append(cells)
        if not rows:
            return None

        width = max(len(row) for row in rows)
        if width == 0:
            return None
        padded = [row + [""] * (width - len(row)) for row in rows]

        lines = ["| " + " | ".join(padded[0]) + " |", "| " + " | ".join(["---"] * width) + " |"]
        lines.extend("| " + " | ".join(row) + " |" for row in padded[1:])
        return _Block("\n".join(lines))
