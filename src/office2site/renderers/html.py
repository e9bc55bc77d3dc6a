#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/office2site/renderers/html.py
"""Standalone HTML slide viewer.

The viewer is a single self-contained document: every slide is a
``section.slide`` sized to the deck in CSS pixels, shapes are absolutely
positioned with percentages of the slide box, pictures are inlined as data
URIs. A small script handles navigation and scales the stage to the window.

"""

from __future__ import annotations

import logging
from html import escape

from office2site.constants import (
    VIEWER_DEFAULT_FONT_SIZE_PT,
    VIEWER_FIT_MARGIN_PX,
    VIEWER_LEVEL_INDENT_EM,
)
from office2site.model import (
    ExtractedDeck,
    ExtractedSlide,
    Paragraph,
    PictureShape,
    ShapeBox,
    TextRun,
    TextShape,
)

logger = logging.getLogger(__name__)


def _format_number(value: float) -> str:
    """Format a CSS number with at most four decimals and no trailing zeros."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def _box_style(box: ShapeBox) -> str:
    return (
        f"left:{_format_number(box.left)}%;top:{_format_number(box.top)}%;"
        f"width:{_format_number(box.width)}%;height:{_format_number(box.height)}%"
    )


class SlideViewerRenderer:
    """Render an :class:`ExtractedDeck` into one HTML document.

    Parameters
    ----------
    fit_margin : int, default 40
        Pixels kept free around the stage when scaling it to the window

    """

    def __init__(self, fit_margin: int = VIEWER_FIT_MARGIN_PX):
        """Initialize the renderer."""
        self.fit_margin = fit_margin

    def render(self, title: str, deck: ExtractedDeck) -> str:
        """Render the complete viewer document.

        Parameters
        ----------
        title : str
            Document title (usually the deck's file stem)
        deck : ExtractedDeck
            Extracted presentation

        Returns
        -------
        str
            HTML document

        """
        width = _format_number(deck.size.width_px)
        height = _format_number(deck.size.height_px)
        total = len(deck.slides)
        logger.debug(f"Rendering {total} slide(s) to HTML viewer ({width}x{height}px)")

        parts = [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape(title)}</title>",
            "<style>",
            self._generate_css(),
            "</style>",
            "</head>",
            "<body>",
            '<div class="toolbar">',
            '<button type="button" id="prev" aria-label="Previous slide">&#9664;</button>',
            f'<span id="counter">{1 if total else 0} / {total}</span>',
            '<button type="button" id="next" aria-label="Next slide">&#9654;</button>',
            "</div>",
            '<div class="viewport">',
            f'<div id="stage" style="width:{width}px;height:{height}px">',
        ]
        for index, slide in enumerate(deck.slides):
            parts.append(self.render_slide(slide, active=index == 0))
        parts.extend(
            [
                "</div>",
                "</div>",
                "<script>",
                self._generate_script(width, height),
                "</script>",
                "</body>",
                "</html>",
            ]
        )
        return "\n".join(parts)

    def render_slide(self, slide: ExtractedSlide, active: bool = False) -> str:
        """Render one ``section.slide`` with its positioned shapes."""
        classes = "slide active" if active else "slide"
        background = slide.background or "#ffffff"
        lines = [
            f'<section class="{classes}" data-slide="{slide.number}" style="background:{escape(background)}">'
        ]
        for shape in slide.placed_shapes:
            if isinstance(shape, TextShape):
                lines.append(self.render_text_shape(shape))
            elif isinstance(shape, PictureShape):
                lines.append(self.render_picture(shape))
        lines.append("</section>")
        return "\n".join(lines)

    def render_text_shape(self, shape: TextShape) -> str:
        """Render a text box; empty paragraphs keep their line as ``&nbsp;``."""
        assert shape.box is not None
        classes = "shape text title" if shape.is_title else "shape text"
        paragraphs = "".join(self.render_paragraph(paragraph) for paragraph in shape.paragraphs)
        return f'<div class="{classes}" style="{_box_style(shape.box)}">{paragraphs}</div>'

    def render_paragraph(self, paragraph: Paragraph) -> str:
        styles = []
        if paragraph.level:
            styles.append(f"margin-left:{_format_number(paragraph.level * VIEWER_LEVEL_INDENT_EM)}em")
        if paragraph.alignment:
            styles.append(f"text-align:{paragraph.alignment}")
        style_attr = f' style="{";".join(styles)}"' if styles else ""

        content = "".join(self.render_run(run) for run in paragraph.runs)
        if not paragraph.text.strip():
            content = "&nbsp;"
        return f"<p{style_attr}>{content}</p>"

    @staticmethod
    def render_run(run: TextRun) -> str:
        """Render a run as escaped text, wrapped in a styled span when it carries formatting."""
        text = "<br>".join(escape(piece) for piece in run.text.split("\n"))
        style = run.style
        if style.is_plain:
            return text

        declarations = []
        if style.bold:
            declarations.append("font-weight:bold")
        if style.italic:
            declarations.append("font-style:italic")
        if style.underline:
            declarations.append("text-decoration:underline")
        if style.size_pt is not None:
            declarations.append(f"font-size:{_format_number(style.size_pt)}pt")
        if style.color:
            declarations.append(f"color:{escape(style.color)}")
        return f'<span style="{";".join(declarations)}">{text}</span>'

    @staticmethod
    def render_picture(shape: PictureShape) -> str:
        assert shape.box is not None
        return (
            f'<img class="shape picture" src="{escape(shape.data_uri)}" '
            f'alt="{escape(shape.alt_text)}" style="{_box_style(shape.box)}">'
        )

    def _generate_css(self) -> str:
        return f"""* {{ box-sizing: border-box; }}
html, body {{ margin: 0; height: 100%; background: #2b2b2b; font-family: Calibri, Arial, sans-serif; }}
.toolbar {{ position: fixed; bottom: 8px; left: 50%; transform: translateX(-50%); z-index: 10;
  display: flex; gap: 12px; align-items: center; color: #eee; font-size: 14px; }}
.toolbar button {{ border: none; border-radius: 4px; padding: 4px 12px; cursor: pointer; }}
.toolbar button:disabled {{ opacity: 0.4; cursor: default; }}
.viewport {{ position: absolute; inset: 0; display: flex; align-items: center; justify-content: center;
  overflow: hidden; }}
#stage {{ position: relative; flex: none; transform-origin: center center; }}
.slide {{ position: absolute; inset: 0; display: none; overflow: hidden;
  box-shadow: 0 2px 12px rgba(0, 0, 0, 0.5); }}
.slide.active {{ display: block; }}
.shape {{ position: absolute; }}
.text {{ overflow: hidden; font-size: {VIEWER_DEFAULT_FONT_SIZE_PT}pt; color: #000; }}
.text p {{ margin: 0; white-space: pre-wrap; }}
.title {{ font-weight: bold; }}
.picture {{ object-fit: contain; }}"""

    def _generate_script(self, width: str, height: str) -> str:
        return f"""(function () {{
  var slides = document.querySelectorAll(".slide");
  var stage = document.getElementById("stage");
  var prev = document.getElementById("prev");
  var next = document.getElementById("next");
  var counter = document.getElementById("counter");
  var width = {width}, height = {height}, margin = {self.fit_margin};
  var current = 0;

  function show(index) {{
    if (!slides.length) {{
      prev.disabled = true;
      next.disabled = true;
      return;
    }}
    current = Math.max(0, Math.min(index, slides.length - 1));
    for (var i = 0; i < slides.length; i++) {{
      slides[i].classList.toggle("active", i === current);
    }}
    counter.textContent = (current + 1) + " / " + slides.length;
    prev.disabled = current === 0;
    next.disabled = current === slides.length - 1;
  }}

  function fit() {{
    var scale = Math.min((window.innerWidth - margin) / width, (window.innerHeight - margin) / height);
    stage.style.transform = "scale(" + Math.max(scale, 0) + ")";
  }}

  prev.addEventListener("click", function () {{ show(current - 1); }});
  next.addEventListener("click", function () {{ show(current + 1); }});
  document.addEventListener("keydown", function (event) {{
    switch (event.key) {{
      case "ArrowLeft": case "ArrowUp": case "PageUp":
        show(current - 1); break;
      case "ArrowRight": case "ArrowDown": case "PageDown": case " ":
        show(current + 1); break;
      case "Home":
        show(0); break;
      case "End":
        show(slides.length - 1); break;
      default:
        return;
    }}
    event.preventDefault();
  }});
  window.addEventListener("resize", fit);
  fit();
  show(0);
}})();"""
