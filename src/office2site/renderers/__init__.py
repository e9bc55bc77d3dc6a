"""Renderers for extracted slide decks."""

from office2site.renderers.html import SlideViewerRenderer
from office2site.renderers.markdown import SlideMarkdownRenderer

__all__ = ["SlideMarkdownRenderer", "SlideViewerRenderer"]
