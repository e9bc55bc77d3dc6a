#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/parsers/pptx.py
"""PPTX slide extraction.

This module walks the XML parts of a PowerPoint package directly (no
python-pptx object model) and produces an :class:`~office2site.model.ExtractedDeck`:
slide titles, body paragraphs with their nesting level and run formatting,
shape geometry, embedded pictures, slide backgrounds and speaker notes.

Package layout used here::

    ppt/presentation.xml                   slide size (p:sldSz)
    ppt/slides/slideN.xml                  one part per slide
    ppt/slides/_rels/slideN.xml.rels       picture / layout relationships
    ppt/notesSlides/notesSlideN.xml        speaker notes
    ppt/media/*                            embedded images

"""

from __future__ import annotations

import base64
import logging
import posixpath
import re
from dataclasses import dataclass
from typing import Iterator, Optional

from office2site.constants import (
    BODY_PLACEHOLDER_TYPE,
    HUNDREDTHS_PER_POINT,
    IMAGE_MIME_TYPES,
    MEDIA_DIR_PREFIX,
    NOTES_PART_TEMPLATE,
    NOTES_PLACEHOLDER_IDX,
    PARAGRAPH_ALIGNMENTS,
    PRESENTATION_PART,
    REL_TYPE_SLIDE_LAYOUT,
    REL_TYPE_SLIDE_MASTER,
    SLIDE_PART_PATTERN,
    TITLE_PLACEHOLDER_TYPES,
)
from office2site.exceptions import EntryNotFoundError, MalformedXmlError, PathResolutionError
from office2site.model import (
    ExtractedDeck,
    ExtractedSlide,
    Paragraph,
    PictureShape,
    RunStyle,
    ShapeBox,
    SlideSize,
    TextRun,
    TextShape,
)
from office2site.options.pptx import PptxOptions
from office2site.utils.archive import PackageSource, SlidePackage
from office2site.utils.paths import resolve_archive_path
from office2site.utils.xml import XmlNode

logger = logging.getLogger(__name__)

_SLIDE_PART_RE = re.compile(SLIDE_PART_PATTERN)
_TRUE_VALUES = {"1", "true", "on"}

# (x, y, cx, cy) in EMU
Geometry = tuple[int, int, int, int]


@dataclass(frozen=True)
class Relationship:
    """One entry of a part's relationship manifest."""

    rel_id: str
    rel_type: str
    target: str
    external: bool = False


@dataclass(frozen=True)
class _GroupTransform:
    """Maps child coordinates of a group shape into its parent's space."""

    off_x: int
    off_y: int
    scale_x: float
    scale_y: float
    child_x: int
    child_y: int

    def apply(self, geometry: Geometry) -> Geometry:
        x, y, cx, cy = geometry
        return (
            round(self.off_x + (x - self.child_x) * self.scale_x),
            round(self.off_y + (y - self.child_y) * self.scale_y),
            round(cx * self.scale_x),
            round(cy * self.scale_y),
        )


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _is_true(value: Optional[str]) -> bool:
    return value is not None and value.lower() in _TRUE_VALUES


def rels_part_name(part_name: str) -> str:
    """Return the relationship manifest path of a part.

    Examples
    --------
    >>> rels_part_name("ppt/slides/slide1.xml")
    'ppt/slides/_rels/slide1.xml.rels'

    """
    directory, filename = posixpath.split(part_name)
    return posixpath.join(directory, "_rels", f"{filename}.rels")


def list_slide_parts(package: SlidePackage) -> list[str]:
    """Return the slide part names ordered by their numeric filename suffix."""
    numbered: list[tuple[int, str]] = []
    for name in package.list_entries():
        match = _SLIDE_PART_RE.match(name)
        if match:
            numbered.append((int(match.group(1)), name))
    return [name for _, name in sorted(numbered)]


def read_relationships(package: SlidePackage, part_name: str) -> list[Relationship]:
    """Read the relationship manifest of ``part_name``.

    Returns an empty list when the part has no manifest.

    Raises
    ------
    MalformedXmlError
        If the manifest exists but cannot be parsed.

    """
    rels_name = rels_part_name(part_name)
    if not package.has_entry(rels_name):
        return []

    relationships: list[Relationship] = []
    for node in package.read_xml(rels_name).elements("rel:Relationship"):
        rel_id = node.get("Id")
        target = node.get("Target")
        if not rel_id or not target:
            continue
        relationships.append(
            Relationship(
                rel_id=rel_id,
                rel_type=node.get("Type", ""),
                target=target,
                external=node.get("TargetMode") == "External",
            )
        )
    return relationships


def build_relationship_map(package: SlidePackage, part_name: str) -> dict[str, str]:
    """Map relationship ids of ``part_name`` to resolved archive paths.

    External targets and targets that climb out of the archive are left out.
    """
    mapping: dict[str, str] = {}
    for rel in read_relationships(package, part_name):
        if rel.external:
            continue
        try:
            mapping[rel.rel_id] = resolve_archive_path(part_name, rel.target)
        except PathResolutionError as e:
            logger.debug(f"Skipping relationship {rel.rel_id} of {part_name}: {e.message}")
    return mapping


def build_media_cache(package: SlidePackage) -> dict[str, str]:
    """Decode every recognized image under ``ppt/media/`` into a data URI."""
    cache: dict[str, str] = {}
    for name in sorted(package.list_entries()):
        if not name.startswith(MEDIA_DIR_PREFIX):
            continue
        mime_type = IMAGE_MIME_TYPES.get(posixpath.splitext(name)[1].lower())
        if mime_type is None:
            logger.debug(f"Skipping unrecognized media entry: {name}")
            continue
        encoded = base64.b64encode(package.read_binary(name)).decode("ascii")
        cache[name] = f"data:{mime_type};base64,{encoded}"
    return cache


def read_slide_size(package: SlidePackage, default: SlideSize) -> SlideSize:
    """Read ``p:sldSz`` from the presentation part, falling back to ``default``."""
    try:
        presentation = package.read_xml(PRESENTATION_PART)
    except (EntryNotFoundError, MalformedXmlError) as e:
        logger.debug(f"Using default slide size: {e.message}")
        return default

    size_node = presentation.find("p:sldSz")
    if size_node is None:
        return default
    width = _parse_int(size_node.get("cx"))
    height = _parse_int(size_node.get("cy"))
    if width is None or height is None or width <= 0 or height <= 0:
        logger.debug("Ignoring invalid slide size declaration")
        return default
    return SlideSize(width=width, height=height)


def read_geometry(shape_properties: Optional[XmlNode]) -> Optional[Geometry]:
    """Read offset and extent from an ``a:xfrm`` under ``shape_properties``."""
    if shape_properties is None:
        return None
    xfrm = shape_properties.first("a:xfrm")
    if xfrm is None:
        return None
    off = xfrm.first("a:off")
    ext = xfrm.first("a:ext")
    if off is None or ext is None:
        return None
    values = [_parse_int(off.get("x")), _parse_int(off.get("y")), _parse_int(ext.get("cx")), _parse_int(ext.get("cy"))]
    if any(value is None for value in values):
        return None
    x, y, cx, cy = values
    return (x, y, cx, cy)  # type: ignore[return-value]


def _group_transform(group: XmlNode) -> Optional[_GroupTransform]:
    xfrm = group.find("p:grpSpPr", "a:xfrm")
    if xfrm is None:
        return None
    off, ext = xfrm.first("a:off"), xfrm.first("a:ext")
    ch_off, ch_ext = xfrm.first("a:chOff"), xfrm.first("a:chExt")
    if off is None or ext is None:
        return None

    off_x, off_y = _parse_int(off.get("x")) or 0, _parse_int(off.get("y")) or 0
    cx, cy = _parse_int(ext.get("cx")) or 0, _parse_int(ext.get("cy")) or 0
    child_x = _parse_int(ch_off.get("x")) if ch_off is not None else None
    child_y = _parse_int(ch_off.get("y")) if ch_off is not None else None
    child_cx = _parse_int(ch_ext.get("cx")) if ch_ext is not None else None
    child_cy = _parse_int(ch_ext.get("cy")) if ch_ext is not None else None

    return _GroupTransform(
        off_x=off_x,
        off_y=off_y,
        scale_x=cx / child_cx if child_cx else 1.0,
        scale_y=cy / child_cy if child_cy else 1.0,
        child_x=child_x if child_x is not None else off_x,
        child_y=child_y if child_y is not None else off_y,
    )


def placeholder_of(shape: XmlNode) -> tuple[Optional[str], Optional[str]]:
    """Return ``(type, idx)`` of a shape's placeholder, or ``(None, None)``."""
    ph = shape.find("p:nvSpPr", "p:nvPr", "p:ph")
    if ph is None:
        return None, None
    return ph.get("type"), ph.get("idx")


class _PlaceholderPositions:
    """Placeholder geometry declared on a slide layout and its master."""

    def __init__(self, layout: dict[str, Geometry], layout_types: dict[str, Geometry], master: dict[str, Geometry]):
        self._layout_by_idx = layout
        self._layout_by_type = layout_types
        self._master_by_type = master

    @classmethod
    def from_parts(cls, layout: Optional[XmlNode], master: Optional[XmlNode]) -> _PlaceholderPositions:
        layout_by_idx: dict[str, Geometry] = {}
        layout_by_type: dict[str, Geometry] = {}
        master_by_type: dict[str, Geometry] = {}

        for part, by_idx, by_type in ((layout, layout_by_idx, layout_by_type), (master, None, master_by_type)):
            if part is None:
                continue
            for shape in part.iter("p:sp"):
                ph_type, ph_idx = placeholder_of(shape)
                if shape.find("p:nvSpPr", "p:nvPr", "p:ph") is None:
                    continue
                geometry = read_geometry(shape.first("p:spPr"))
                if geometry is None:
                    continue
                if by_idx is not None and ph_idx is not None:
                    by_idx.setdefault(ph_idx, geometry)
                by_type.setdefault(ph_type or BODY_PLACEHOLDER_TYPE, geometry)

        return cls(layout_by_idx, layout_by_type, master_by_type)

    def lookup(self, ph_type: Optional[str], ph_idx: Optional[str]) -> Optional[Geometry]:
        if ph_idx is not None and ph_idx in self._layout_by_idx:
            return self._layout_by_idx[ph_idx]
        key = ph_type or BODY_PLACEHOLDER_TYPE
        return self._layout_by_type.get(key) or self._master_by_type.get(key)


class PptxExtractor:
    """Extract slides from a PowerPoint package.

    The extractor is stateless between calls; per-deck data (media cache,
    relationship maps, slide size) lives only for one :meth:`extract`.

    Parameters
    ----------
    options : PptxOptions or None, default None
        Extraction options

    """

    def __init__(self, options: PptxOptions | None = None):
        """Initialize the extractor with options."""
        self.options = options or PptxOptions()

    def extract(self, source: PackageSource) -> ExtractedDeck:
        """Open a package and extract all of its slides.

        Parameters
        ----------
        source : str, Path, bytes or IO[bytes]
            The ``.pptx`` file or its bytes

        Returns
        -------
        ExtractedDeck
            Slide size and slides in ascending slide-number order

        Raises
        ------
        InvalidArchiveError
            If the source is not a zip container.
        MalformedXmlError
            If a slide, notes or relationship part is not well-formed.

        """
        with SlidePackage.open(source) as package:
            return self.extract_package(package)

    def extract_package(self, package: SlidePackage) -> ExtractedDeck:
        """Extract all slides from an already opened package."""
        default_size = SlideSize(self.options.default_slide_width, self.options.default_slide_height)
        size = read_slide_size(package, default_size)
        media = build_media_cache(package)
        layout_cache: dict[str, _PlaceholderPositions] = {}

        slide_parts = list_slide_parts(package)
        logger.debug(f"Found {len(slide_parts)} slide part(s), {len(media)} media item(s)")

        deck = ExtractedDeck(size=size)
        for number, part_name in enumerate(slide_parts, start=1):
            slide_xml = package.read_xml(part_name)
            relationships = build_relationship_map(package, part_name)

            inherited = None
            if self.options.inherit_placeholder_positions:
                inherited = self._placeholder_positions(package, part_name, layout_cache)

            slide = self.extract_slide(slide_xml, relationships, media, size, number=number, inherited=inherited)
            if self.options.include_notes:
                slide.notes = self.read_notes(package, number)
            deck.slides.append(slide)

        return deck

    def extract_slide(
        self,
        slide_xml: XmlNode,
        relationships: dict[str, str],
        media: dict[str, str],
        size: SlideSize,
        number: int = 1,
        inherited: Optional[_PlaceholderPositions] = None,
    ) -> ExtractedSlide:
        """Extract one slide.

        Parameters
        ----------
        slide_xml : XmlNode
            Parsed slide part (``p:sld``)
        relationships : dict
            Relationship id -> archive path for this slide
        media : dict
            Archive path -> data URI for the whole deck
        size : SlideSize
            Slide dimensions of the deck
        number : int
            1-based slide position
        inherited : _PlaceholderPositions, optional
            Layout/master placeholder geometry for shapes without a transform

        Returns
        -------
        ExtractedSlide
            The extracted slide. A slide without a shape tree comes back empty.

        """
        slide = ExtractedSlide(number=number)
        if slide_xml.tag != "p:sld":
            logger.warning(f"Slide {number}: unexpected root element <{slide_xml.tag}>, slide left empty")
            return slide

        common = slide_xml.find("p:cSld")
        if common is None:
            logger.warning(f"Slide {number}: no p:cSld element, slide left empty")
            return slide
        slide.background = self._background_color(common)

        tree = common.first("p:spTree")
        if tree is None:
            logger.warning(f"Slide {number}: no shape tree, slide left empty")
            return slide

        for node, transforms in self._iter_shapes(tree, ()):
            if node.tag == "p:sp":
                self._add_text_shape(slide, node, transforms, size, inherited)
            elif node.tag == "p:pic":
                picture = self._picture_shape(node, transforms, relationships, media, size)
                if picture is not None:
                    slide.shapes.append(picture)

        return slide

    def read_notes(self, package: SlidePackage, number: int) -> str:
        """Return the speaker notes of the slide at 1-based position ``number``.

        A deck without a matching notes part has empty notes.
        """
        part_name = NOTES_PART_TEMPLATE.format(number=number)
        if not package.has_entry(part_name):
            return ""
        return extract_notes_text(package.read_xml(part_name))

    # ------------------------------------------------------------------
    # Shape walking
    # ------------------------------------------------------------------

    def _iter_shapes(
        self, container: XmlNode, transforms: tuple[_GroupTransform, ...]
    ) -> Iterator[tuple[XmlNode, tuple[_GroupTransform, ...]]]:
        for child in container.children:
            if child.tag in ("p:sp", "p:pic"):
                yield child, transforms
            elif child.tag == "p:grpSp":
                group = _group_transform(child)
                yield from self._iter_shapes(child, transforms + (group,) if group else transforms)
            elif child.tag == "mc:AlternateContent":
                fallback = child.first("mc:Fallback")
                if fallback is not None:
                    yield from self._iter_shapes(fallback, transforms)
            elif child.tag in ("p:graphicFrame", "p:cxnSp", "p:contentPart"):
                logger.debug(f"Skipping unsupported shape <{child.tag}>")

    def _box(
        self,
        geometry: Optional[Geometry],
        transforms: tuple[_GroupTransform, ...],
        size: SlideSize,
    ) -> Optional[ShapeBox]:
        if geometry is None:
            return None
        for transform in reversed(transforms):
            geometry = transform.apply(geometry)
        return ShapeBox.from_emu(*geometry, size=size)

    def _add_text_shape(
        self,
        slide: ExtractedSlide,
        node: XmlNode,
        transforms: tuple[_GroupTransform, ...],
        size: SlideSize,
        inherited: Optional[_PlaceholderPositions],
    ) -> None:
        text_body = node.first("p:txBody")
        if text_body is None:
            return

        ph_type, ph_idx = placeholder_of(node)
        shape = TextShape(
            paragraphs=[parse_paragraph(p) for p in text_body.elements("a:p")],
            placeholder_type=ph_type,
            placeholder_idx=ph_idx,
            name=_shape_name(node, "p:nvSpPr"),
        )
        if not shape.has_text:
            return

        if ph_type in TITLE_PLACEHOLDER_TYPES and not slide.title:
            shape.is_title = True
            slide.title = " ".join(shape.texts)
        elif self._is_body(ph_type, ph_idx):
            shape.is_body = True
        else:
            logger.debug(f"Slide {slide.number}: dropping '{ph_type}' placeholder under typed body policy")
            return

        geometry = read_geometry(node.first("p:spPr"))
        if geometry is None and inherited is not None and (ph_type is not None or ph_idx is not None):
            geometry = inherited.lookup(ph_type, ph_idx)
        shape.box = self._box(geometry, transforms, size)
        slide.shapes.append(shape)

    def _is_body(self, ph_type: Optional[str], ph_idx: Optional[str]) -> bool:
        if self.options.body_placeholder_policy == "any":
            return True
        return ph_type == BODY_PLACEHOLDER_TYPE or ph_idx is not None or (ph_type is None and ph_idx is None)

    def _picture_shape(
        self,
        node: XmlNode,
        transforms: tuple[_GroupTransform, ...],
        relationships: dict[str, str],
        media: dict[str, str],
        size: SlideSize,
    ) -> Optional[PictureShape]:
        blip = node.find("p:blipFill", "a:blip")
        rel_id = blip.get("r:embed") if blip is not None else None
        if not rel_id:
            logger.debug("Picture without an embedded image reference")
            return None

        target = relationships.get(rel_id)
        data_uri = media.get(target) if target else None
        if data_uri is None:
            logger.debug(f"Unresolved picture reference {rel_id} -> {target}")
            return None

        properties = node.find("p:nvPicPr", "p:cNvPr")
        return PictureShape(
            data_uri=data_uri,
            box=self._box(read_geometry(node.first("p:spPr")), transforms, size),
            alt_text=(properties.get("descr") or "") if properties is not None else "",
            name=properties.get("name") if properties is not None else None,
        )

    @staticmethod
    def _background_color(common: XmlNode) -> Optional[str]:
        color = common.find("p:bg", "p:bgPr", "a:solidFill", "a:srgbClr")
        value = color.get("val") if color is not None else None
        return f"#{value}" if value else None

    def _placeholder_positions(
        self, package: SlidePackage, part_name: str, cache: dict[str, _PlaceholderPositions]
    ) -> Optional[_PlaceholderPositions]:
        layout_name = _related_part(package, part_name, REL_TYPE_SLIDE_LAYOUT)
        if layout_name is None:
            return None
        if layout_name not in cache:
            layout = package.read_xml(layout_name) if package.has_entry(layout_name) else None
            master_name = _related_part(package, layout_name, REL_TYPE_SLIDE_MASTER)
            master = package.read_xml(master_name) if master_name and package.has_entry(master_name) else None
            cache[layout_name] = _PlaceholderPositions.from_parts(layout, master)
        return cache[layout_name]


def _related_part(package: SlidePackage, part_name: str, rel_type: str) -> Optional[str]:
    for rel in read_relationships(package, part_name):
        if rel.rel_type == rel_type and not rel.external:
            try:
                return resolve_archive_path(part_name, rel.target)
            except PathResolutionError:
                return None
    return None


def parse_run_style(properties: Optional[XmlNode]) -> RunStyle:
    """Read bold/italic/underline/size/color from an ``a:rPr`` element."""
    if properties is None:
        return RunStyle()

    underline = properties.get("u")
    size = _parse_int(properties.get("sz"))

    color = None
    fill = properties.first("a:solidFill")
    if fill is not None:
        rgb = fill.first("a:srgbClr")
        system = fill.first("a:sysClr")
        if rgb is not None and rgb.get("val"):
            color = f"#{rgb.get('val')}"
        elif system is not None and system.get("lastClr"):
            color = f"#{system.get('lastClr')}"

    return RunStyle(
        bold=_is_true(properties.get("b")),
        italic=_is_true(properties.get("i")),
        underline=underline is not None and underline != "none",
        size_pt=size / HUNDREDTHS_PER_POINT if size is not None and size > 0 else None,
        color=color,
    )


def parse_paragraph(paragraph: XmlNode) -> Paragraph:
    """Convert an ``a:p`` element into a :class:`Paragraph`.

    Text runs (``a:r``) and fields (``a:fld``) contribute their ``a:t`` text in
    document order, line breaks (``a:br``) become ``"\\n"``.
    """
    properties = paragraph.first("a:pPr")
    level = 0
    alignment = None
    if properties is not None:
        level = max(_parse_int(properties.get("lvl")) or 0, 0)
        alignment = PARAGRAPH_ALIGNMENTS.get(properties.get("algn") or "")

    runs: list[TextRun] = []
    for child in paragraph.children:
        if child.tag in ("a:r", "a:fld"):
            text = "".join(t.text_content() for t in child.elements("a:t"))
            runs.append(TextRun(text=text, style=parse_run_style(child.first("a:rPr"))))
        elif child.tag == "a:br":
            runs.append(TextRun(text="\n", style=parse_run_style(child.first("a:rPr"))))

    return Paragraph(runs=runs, level=level, alignment=alignment)


def extract_notes_text(notes_xml: XmlNode) -> str:
    """Return the text of the notes placeholder (``idx="1"``) of a notes slide.

    Non-blank paragraphs are joined with newlines; the result is trimmed.
    """
    tree = notes_xml.find("p:cSld", "p:spTree") if notes_xml.tag == "p:notes" else None
    if tree is None:
        return ""

    lines: list[str] = []
    for shape in tree.elements("p:sp"):
        _, ph_idx = placeholder_of(shape)
        if ph_idx != NOTES_PLACEHOLDER_IDX:
            continue
        text_body = shape.first("p:txBody")
        if text_body is None:
            continue
        for paragraph in text_body.elements("a:p"):
            text = parse_paragraph(paragraph).text
            if text.strip():
                lines.append(text)

    return "\n".join(lines).strip()


def _shape_name(node: XmlNode, properties_tag: str) -> Optional[str]:
    properties = node.find(properties_tag, "p:cNvPr")
    return properties.get("name") if properties is not None else None
