#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options for a whole-tree site conversion run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from office2site.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SIDEBAR_FORMAT,
    DEFAULT_SLIDES_MODE,
    SidebarFormat,
    SlidesMode,
)
from office2site.exceptions import ValidationError
from office2site.options.base import CloneFrozenMixin
from office2site.options.docx import DocxOptions
from office2site.options.pptx import PptxOptions


@dataclass(frozen=True)
class SiteOptions(CloneFrozenMixin):
    """Configuration for converting an input tree into VitePress content.

    An explicit value passed to :func:`office2site.site.convert_tree` and the
    pipeline entry points; nothing is read from module-level state.

    Parameters
    ----------
    input_dir : Path
        Root of the documents to convert.
    output_dir : Path
        VitePress source directory that receives the converted tree.
    slides_mode : {"markdown", "viewer"}, default "markdown"
        "markdown" writes a slide outline per deck; "viewer" writes a standalone
        HTML viewer under ``public/slides/`` and a Markdown page embedding it.
    base_url : str, default "/"
        URL prefix of the site, used for the viewer frame URLs. Sidebar links
        stay root-relative because VitePress prefixes them with its own base.
    sidebar_format : {"ts", "json"}, default "ts"
        Serialization of the generated sidebar index.
    pptx : PptxOptions
        Slide-deck extraction options.
    docx : DocxOptions
        Word conversion options.

    """

    input_dir: Path = field(
        default=Path(DEFAULT_INPUT_DIR),
        metadata={"help": "Directory holding the .docx/.pptx/.xlsx sources"},
    )
    output_dir: Path = field(
        default=Path(DEFAULT_OUTPUT_DIR),
        metadata={"help": "Directory receiving the generated site content"},
    )
    slides_mode: SlidesMode = field(
        default=DEFAULT_SLIDES_MODE,
        metadata={
            "help": "How decks are published: 'markdown' outline or HTML 'viewer'",
            "choices": ["markdown", "viewer"],
        },
    )
    base_url: str = field(
        default=DEFAULT_BASE_URL,
        metadata={"help": "Site base URL used for slide viewer frame URLs"},
    )
    sidebar_format: SidebarFormat = field(
        default=DEFAULT_SIDEBAR_FORMAT,
        metadata={"help": "Sidebar index format: 'ts' or 'json'", "choices": ["ts", "json"]},
    )
    pptx: PptxOptions = field(default_factory=PptxOptions)
    docx: DocxOptions = field(default_factory=DocxOptions)

    def __post_init__(self) -> None:
        """Normalize paths and validate choices.

        Raises
        ------
        ValidationError
            If a choice field holds an unknown value.

        """
        object.__setattr__(self, "input_dir", Path(self.input_dir).resolve())
        object.__setattr__(self, "output_dir", Path(self.output_dir).resolve())
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")

        if self.slides_mode not in ("markdown", "viewer"):
            raise ValidationError(
                f"slides_mode must be 'markdown' or 'viewer', got {self.slides_mode!r}",
                parameter_name="slides_mode",
                parameter_value=self.slides_mode,
            )
        if self.sidebar_format not in ("ts", "json"):
            raise ValidationError(
                f"sidebar_format must be 'ts' or 'json', got {self.sidebar_format!r}",
                parameter_name="sidebar_format",
                parameter_value=self.sidebar_format,
            )
