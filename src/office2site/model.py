#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/model.py
"""Data model for extracted slide decks.

The extractor in :mod:`office2site.parsers.pptx` produces these dataclasses,
and both slide renderers consume them. They hold plain values only (no XML
nodes, no archive handles), so a deck can be rendered after its package has
been closed.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from office2site.constants import CSS_PIXELS_PER_INCH, EMU_PER_INCH


def emu_to_pixels(emu: float) -> float:
    """Convert EMU to CSS pixels at 96 DPI."""
    return emu / EMU_PER_INCH * CSS_PIXELS_PER_INCH


@dataclass(frozen=True)
class SlideSize:
    """Slide dimensions in EMU (914,400 per inch)."""

    width: int
    height: int

    @property
    def width_px(self) -> float:
        """Slide width in CSS pixels."""
        return emu_to_pixels(self.width)

    @property
    def height_px(self) -> float:
        """Slide height in CSS pixels."""
        return emu_to_pixels(self.height)


@dataclass(frozen=True)
class ShapeBox:
    """Shape placement, both raw (EMU) and as percentages of the slide.

    Parameters
    ----------
    x, y, cx, cy : int
        Offset and extent in EMU
    left, top, width, height : float
        The same box as percentages of slide width/height

    """

    x: int
    y: int
    cx: int
    cy: int
    left: float
    top: float
    width: float
    height: float

    @classmethod
    def from_emu(cls, x: int, y: int, cx: int, cy: int, size: SlideSize) -> ShapeBox:
        """Build a box from EMU values relative to ``size``."""
        return cls(
            x=x,
            y=y,
            cx=cx,
            cy=cy,
            left=x / size.width * 100,
            top=y / size.height * 100,
            width=cx / size.width * 100,
            height=cy / size.height * 100,
        )


@dataclass(frozen=True)
class RunStyle:
    """Character formatting of one text run."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    size_pt: Optional[float] = None
    color: Optional[str] = None

    @property
    def is_plain(self) -> bool:
        """True when the run carries no formatting at all."""
        return self == RunStyle()


@dataclass
class TextRun:
    """A span of text with uniform formatting. ``text`` may contain ``\\n`` for line breaks."""

    text: str
    style: RunStyle = field(default_factory=RunStyle)


@dataclass
class Paragraph:
    """One paragraph of a text body.

    Parameters
    ----------
    runs : list of TextRun
        Runs in document order
    level : int
        Zero-based indent (bullet nesting) level
    alignment : str or None
        CSS ``text-align`` value, when the paragraph declares one

    """

    runs: list[TextRun] = field(default_factory=list)
    level: int = 0
    alignment: Optional[str] = None

    @property
    def text(self) -> str:
        """Concatenated run text."""
        return "".join(run.text for run in self.runs)


@dataclass
class TextShape:
    """A shape carrying a text body."""

    paragraphs: list[Paragraph]
    box: Optional[ShapeBox] = None
    placeholder_type: Optional[str] = None
    placeholder_idx: Optional[str] = None
    name: Optional[str] = None
    is_title: bool = False
    is_body: bool = False

    @property
    def texts(self) -> list[str]:
        """Texts of the paragraphs that contain something other than whitespace."""
        return [paragraph.text for paragraph in self.paragraphs if paragraph.text.strip()]

    @property
    def has_text(self) -> bool:
        """True if any paragraph has visible text."""
        return bool(self.texts)


@dataclass
class PictureShape:
    """A raster (or vector) picture resolved to an embedded data URI."""

    data_uri: str
    box: Optional[ShapeBox] = None
    alt_text: str = ""
    name: Optional[str] = None


Shape = Union[TextShape, PictureShape]


@dataclass
class ExtractedSlide:
    """Everything the renderers need to know about one slide.

    Parameters
    ----------
    number : int
        1-based position of the slide in the deck
    title : str
        Title text, empty when the slide has no titled placeholder
    shapes : list of Shape
        Text and picture shapes in drawing order
    background : str or None
        Solid background color as ``#RRGGBB``
    notes : str
        Speaker notes, empty when there are none

    """

    number: int
    title: str = ""
    shapes: list[Shape] = field(default_factory=list)
    background: Optional[str] = None
    notes: str = ""

    @property
    def body_shapes(self) -> list[TextShape]:
        """Text shapes classified as body content, in drawing order."""
        return [shape for shape in self.shapes if isinstance(shape, TextShape) and shape.is_body]

    @property
    def placed_shapes(self) -> list[Shape]:
        """Shapes that have a position and can be drawn on the slide canvas."""
        return [shape for shape in self.shapes if shape.box is not None]


@dataclass
class ExtractedDeck:
    """An extracted presentation: slide size plus its slides in order."""

    size: SlideSize
    slides: list[ExtractedSlide] = field(default_factory=list)
