"""Test utilities for the office2site test suite.

This module provides builders for slide decks and Word documents used
across the unit, integration and end-to-end tests.

Two ways of building decks are offered:

- :class:`SlideDeckBuilder` writes the OOXML parts by hand, giving exact
  control over notes numbering, groups, broken relationships and malformed
  parts.
- :class:`PptxTestGenerator` uses python-pptx to produce decks the way
  PowerPoint lays them out (layouts, masters, placeholders).
"""

import base64
import io
import shutil
import struct
import tempfile
import zipfile
from pathlib import Path
from typing import Iterable, Optional, Union

import docx
from docx.shared import Inches
from pptx import Presentation
from pptx.util import Inches as PptxInches
from pptx.util import Pt

# Base64 encoded 1x1 pixel PNG for testing
MINIMAL_PNG_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/w8AAn8B9FpQHLwAAAAASUVORK5CYII="
MINIMAL_PNG_BYTES = base64.b64decode(MINIMAL_PNG_B64)
MINIMAL_PNG_DATA_URI = f"data:image/png;base64,{MINIMAL_PNG_B64}"

NS_DECL = (
    'xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main" '
    'xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships" '
    'xmlns:p="http://schemas.openxmlformats.org/presentationml/2006/main"'
)
RELS_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
REL_IMAGE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"
REL_LAYOUT = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideLayout"
REL_MASTER = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/slideMaster"
REL_HYPERLINK = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink"

Paragraph = Union[str, tuple[str, int]]
Box = tuple[int, int, int, int]


def paragraph_xml(text: str, level: int = 0, run_props: str = "", algn: Optional[str] = None) -> str:
    """Return an ``a:p`` with one run (or an empty paragraph for ``text == ""``)."""
    attrs = ""
    if level:
        attrs += f' lvl="{level}"'
    if algn:
        attrs += f' algn="{algn}"'
    ppr = f"<a:pPr{attrs}/>" if attrs else ""
    if not text:
        return f"<a:p>{ppr}</a:p>"
    return f"<a:p>{ppr}<a:r>{run_props}<a:t>{text}</a:t></a:r></a:p>"


def xfrm_xml(box: Optional[Box]) -> str:
    if box is None:
        return "<p:spPr/>"
    x, y, cx, cy = box
    return f'<p:spPr><a:xfrm><a:off x="{x}" y="{y}"/><a:ext cx="{cx}" cy="{cy}"/></a:xfrm></p:spPr>'


def text_shape(
    paragraphs: Iterable[Paragraph],
    ph_type: Optional[str] = None,
    ph_idx: Optional[str] = None,
    box: Optional[Box] = None,
    name: str = "Text",
    raw_paragraphs: bool = False,
) -> str:
    """Return a ``p:sp`` shape.

    ``paragraphs`` holds plain strings, ``(text, level)`` tuples or, with
    ``raw_paragraphs``, ready-made ``<a:p>`` markup.
    """
    ph_attrs = ""
    if ph_type is not None:
        ph_attrs += f' type="{ph_type}"'
    if ph_idx is not None:
        ph_attrs += f' idx="{ph_idx}"'
    nv_pr = f"<p:nvPr><p:ph{ph_attrs}/></p:nvPr>" if ph_type is not None or ph_idx is not None else "<p:nvPr/>"

    body = []
    for item in paragraphs:
        if raw_paragraphs:
            body.append(item)
        elif isinstance(item, tuple):
            body.append(paragraph_xml(item[0], level=item[1]))
        else:
            body.append(paragraph_xml(item))

    return (
        f'<p:sp><p:nvSpPr><p:cNvPr id="2" name="{name}"/><p:cNvSpPr/>{nv_pr}</p:nvSpPr>'
        f"{xfrm_xml(box)}<p:txBody><a:bodyPr/>{''.join(body)}</p:txBody></p:sp>"
    )


def picture_shape(rel_id: str, box: Optional[Box] = None, descr: str = "", name: str = "Picture") -> str:
    return (
        f'<p:pic><p:nvPicPr><p:cNvPr id="3" name="{name}" descr="{descr}"/><p:cNvPicPr/><p:nvPr/></p:nvPicPr>'
        f'<p:blipFill><a:blip r:embed="{rel_id}"/></p:blipFill>{xfrm_xml(box)}</p:pic>'
    )


def group_shape(children: Iterable[str], off: tuple[int, int], ext: tuple[int, int],
                ch_off: tuple[int, int], ch_ext: tuple[int, int]) -> str:
    return (
        '<p:grpSp><p:nvGrpSpPr><p:cNvPr id="4" name="Group"/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr>'
        f'<p:grpSpPr><a:xfrm><a:off x="{off[0]}" y="{off[1]}"/><a:ext cx="{ext[0]}" cy="{ext[1]}"/>'
        f'<a:chOff x="{ch_off[0]}" y="{ch_off[1]}"/><a:chExt cx="{ch_ext[0]}" cy="{ch_ext[1]}"/></a:xfrm></p:grpSpPr>'
        f"{''.join(children)}</p:grpSp>"
    )


def slide_xml(shapes: Iterable[str], background: Optional[str] = None) -> str:
    bg = ""
    if background:
        bg = f'<p:bg><p:bgPr><a:solidFill><a:srgbClr val="{background}"/></a:solidFill></p:bgPr></p:bg>'
    return (
        f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?><p:sld {NS_DECL}><p:cSld>{bg}<p:spTree>'
        '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr><p:grpSpPr/>'
        f"{''.join(shapes)}</p:spTree></p:cSld></p:sld>"
    )


def notes_xml(lines: Iterable[str], idx: str = "1") -> str:
    paragraphs = "".join(paragraph_xml(line) for line in lines)
    slide_image = (
        '<p:sp><p:nvSpPr><p:cNvPr id="2" name="Slide Image"/><p:cNvSpPr/>'
        '<p:nvPr><p:ph type="sldImg"/></p:nvPr></p:nvSpPr><p:spPr/></p:sp>'
    )
    return (
        f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?><p:notes {NS_DECL}><p:cSld><p:spTree>'
        '<p:nvGrpSpPr><p:cNvPr id="1" name=""/><p:cNvGrpSpPr/><p:nvPr/></p:nvGrpSpPr><p:grpSpPr/>'
        f"{slide_image}"
        f'<p:sp><p:nvSpPr><p:cNvPr id="3" name="Notes"/><p:cNvSpPr/><p:nvPr><p:ph type="body" idx="{idx}"/></p:nvPr>'
        f"</p:nvSpPr><p:spPr/><p:txBody><a:bodyPr/>{paragraphs}</p:txBody></p:sp>"
        "</p:spTree></p:cSld></p:notes>"
    )


def rels_xml(relationships: Iterable[tuple[str, str, str, bool]]) -> str:
    """Return a relationships part for ``(id, type, target, external)`` tuples."""
    items = []
    for rel_id, rel_type, target, external in relationships:
        mode = ' TargetMode="External"' if external else ""
        items.append(f'<Relationship Id="{rel_id}" Type="{rel_type}" Target="{target}"{mode}/>')
    return (
        f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?><Relationships xmlns="{RELS_NS}">'
        f"{''.join(items)}</Relationships>"
    )


def presentation_xml(width: int = 9144000, height: int = 6858000) -> str:
    return (
        f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?><p:presentation {NS_DECL}>'
        f'<p:sldSz cx="{width}" cy="{height}"/><p:notesSz cx="6858000" cy="9144000"/></p:presentation>'
    )


class SlideDeckBuilder:
    """Assemble a minimal ``.pptx`` package from hand-written parts.

    Examples
    --------
    >>> builder = SlideDeckBuilder()
    >>> builder.add_slide([text_shape(["Intro"], ph_type="title")], notes=["Remember X"])
    >>> data = builder.build()

    """

    def __init__(self, slide_size: Optional[tuple[int, int]] = (9144000, 6858000)):
        self.entries: dict[str, Union[str, bytes]] = {}
        if slide_size is not None:
            self.entries["ppt/presentation.xml"] = presentation_xml(*slide_size)
        self._count = 0

    def add_slide(
        self,
        shapes: Iterable[str],
        background: Optional[str] = None,
        notes: Optional[list[str]] = None,
        relationships: Iterable[tuple[str, str, str, bool]] = (),
        number: Optional[int] = None,
    ) -> int:
        """Add ``ppt/slides/slide{number}.xml`` (next number by default) and return the number."""
        self._count += 1
        number = number if number is not None else self._count
        self.entries[f"ppt/slides/slide{number}.xml"] = slide_xml(shapes, background)
        relationships = list(relationships)
        if relationships:
            self.entries[f"ppt/slides/_rels/slide{number}.xml.rels"] = rels_xml(relationships)
        if notes is not None:
            self.entries[f"ppt/notesSlides/notesSlide{number}.xml"] = notes_xml(notes)
        return number

    def add_media(self, name: str, data: bytes = MINIMAL_PNG_BYTES) -> str:
        path = f"ppt/media/{name}"
        self.entries[path] = data
        return path

    def add_entry(self, name: str, content: Union[str, bytes]) -> None:
        self.entries[name] = content

    def build(self) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("[Content_Types].xml", '<?xml version="1.0"?><Types/>')
            for name, content in self.entries.items():
                zf.writestr(name, content)
        return buffer.getvalue()

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.build())
        return path


def create_two_slide_deck() -> bytes:
    """Deck with a titled slide and an untitled slide carrying notes."""
    builder = SlideDeckBuilder()
    builder.add_slide(
        [
            text_shape(["Intro"], ph_type="title", box=(457200, 274638, 8229600, 1143000)),
            text_shape(["Point A"], ph_idx="1", box=(457200, 1600200, 8229600, 4525963)),
        ]
    )
    builder.add_slide(
        [text_shape(["Point B"], ph_idx="1", box=(457200, 1600200, 8229600, 4525963))],
        notes=["Remember X"],
    )
    return builder.build()


def corrupt_zip_entry(data: bytes, name: str) -> bytes:
    """Overwrite the compressed bytes of one deflated entry so inflating it fails."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        info = zf.getinfo(name)
    raw = bytearray(data)
    name_len, extra_len = struct.unpack("<HH", raw[info.header_offset + 26 : info.header_offset + 30])
    start = info.header_offset + 30 + name_len + extra_len
    raw[start : start + info.compress_size] = b"\xff" * info.compress_size
    return bytes(raw)


class PptxTestGenerator:
    """Generator for python-pptx decks."""

    @staticmethod
    def create_basic_presentation() -> Presentation:
        """Title slide plus a bullet slide with nested levels and formatting."""
        prs = Presentation()

        title_slide = prs.slides.add_slide(prs.slide_layouts[0])
        title_slide.shapes.title.text = "Quarterly Review"
        title_slide.placeholders[1].text = "Finance team"

        bullet_slide = prs.slides.add_slide(prs.slide_layouts[1])
        bullet_slide.shapes.title.text = "Agenda"
        frame = bullet_slide.placeholders[1].text_frame
        frame.text = "Results"
        child = frame.add_paragraph()
        child.text = "Revenue"
        child.level = 1
        grandchild = frame.add_paragraph()
        grandchild.text = "By region"
        grandchild.level = 2
        run = grandchild.runs[0]
        run.font.bold = True
        run.font.size = Pt(24)

        return prs

    @staticmethod
    def create_textbox_presentation() -> Presentation:
        """Blank-layout slide holding a free text box and a picture."""
        prs = Presentation()
        slide = prs.slides.add_slide(prs.slide_layouts[6])
        box = slide.shapes.add_textbox(PptxInches(1), PptxInches(1), PptxInches(4), PptxInches(1))
        box.text_frame.text = "Free text"
        image = io.BytesIO(MINIMAL_PNG_BYTES)
        slide.shapes.add_picture(image, PptxInches(5), PptxInches(3), PptxInches(1), PptxInches(1))
        return prs

    @staticmethod
    def to_bytes(prs: Presentation) -> bytes:
        buffer = io.BytesIO()
        prs.save(buffer)
        return buffer.getvalue()


class DocxTestGenerator:
    """Generator for Word test documents."""

    @staticmethod
    def create_structured_document() -> docx.Document:
        """Headings, formatted runs, lists and a table."""
        doc = docx.Document()
        doc.add_heading("Handbook", level=0)
        doc.add_heading("Getting started", level=1)

        paragraph = doc.add_paragraph("Read the ")
        paragraph.add_run("whole").bold = True
        paragraph.add_run(" guide ")
        paragraph.add_run("carefully").italic = True
        paragraph.add_run(".")

        doc.add_paragraph("First step", style="List Bullet")
        doc.add_paragraph("Sub step", style="List Bullet 2")
        doc.add_paragraph("Numbered", style="List Number")

        table = doc.add_table(rows=2, cols=2)
        table.cell(0, 0).text = "Name"
        table.cell(0, 1).text = "Value"
        table.cell(1, 0).text = "a|b"
        table.cell(1, 1).text = "1"

        doc.add_heading("Deep", level=9)
        return doc

    @staticmethod
    def create_image_document() -> docx.Document:
        doc = docx.Document()
        doc.add_paragraph("Logo below")
        doc.add_picture(io.BytesIO(MINIMAL_PNG_BYTES), width=Inches(1))
        return doc

    @staticmethod
    def to_bytes(doc: docx.Document) -> bytes:
        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)
