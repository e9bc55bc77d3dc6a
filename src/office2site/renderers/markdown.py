#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/renderers/markdown.py
"""Markdown outline rendering for extracted slide decks.

Each slide becomes a second-level heading followed by its body text as a
nested bullet list and, optionally, its speaker notes as a block quote.
Slides are separated by horizontal rules::

    ## Intro

    - Point A

    ---

    ## Slide 2

    - Point B

    **Notes:**

    > Remember X

"""

from __future__ import annotations

import logging
import re

from office2site.model import ExtractedDeck, ExtractedSlide, Paragraph, TextShape

logger = logging.getLogger(__name__)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")

SLIDE_SEPARATOR = "\n\n---\n\n"
LIST_INDENT = "  "


class SlideMarkdownRenderer:
    """Render an :class:`ExtractedDeck` as a Markdown outline.

    The renderer is pure: it holds no state between calls.
    """

    def render(self, deck: ExtractedDeck) -> str:
        """Render all slides of a deck.

        Parameters
        ----------
        deck : ExtractedDeck
            Extracted presentation

        Returns
        -------
        str
            Markdown text, one section per slide (empty for a deck without slides)

        """
        logger.debug(f"Rendering {len(deck.slides)} slide(s) to Markdown")
        return SLIDE_SEPARATOR.join(self.render_slide(slide) for slide in deck.slides)

    def render_slide(self, slide: ExtractedSlide) -> str:
        """Render one slide: heading, body blocks and notes, separated by blank lines."""
        heading = slide.title.replace("\n", " ") if slide.title else f"Slide {slide.number}"
        parts = [f"## {heading}"]

        blocks = [self.render_block(shape) for shape in slide.body_shapes]
        if blocks:
            parts.append("\n\n".join(blocks))

        if slide.notes:
            parts.append(self.render_notes(slide.notes))

        return "\n\n".join(parts)

    def render_block(self, shape: TextShape) -> str:
        """Render one body shape as bullet lines, one per paragraph."""
        block = "\n".join(self.render_paragraph(paragraph) for paragraph in shape.paragraphs)
        return _EXCESS_NEWLINES.sub("\n\n", block)

    @staticmethod
    def render_paragraph(paragraph: Paragraph) -> str:
        """Return ``"  " * level + "- " + text``, or an empty line for a blank paragraph."""
        text = paragraph.text.replace("\n", " ")
        if not text.strip():
            return ""
        return f"{LIST_INDENT * paragraph.level}- {text}"

    @staticmethod
    def render_notes(notes: str) -> str:
        """Render speaker notes as a bold label followed by a block quote."""
        quoted = "\n".join(f"> {line}" for line in notes.split("\n"))
        return f"**Notes:**\n\n{quoted}"
