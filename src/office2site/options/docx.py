#  Copyright (c) 2025 Tom Villani, Ph.D.
"""DOCX conversion options."""

from __future__ import annotations

from dataclasses import dataclass, field

from office2site.exceptions import ValidationError
from office2site.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class DocxOptions(CloneFrozenMixin):
    """Configuration options for Word document conversion.

    Parameters
    ----------
    embed_images : bool, default True
        Embed inline pictures as base64 data URIs. When False, pictures are dropped.
    bullet_marker : {"-", "*", "+"}, default "-"
        Marker used for unordered list items.

    """

    embed_images: bool = field(
        default=True,
        metadata={"help": "Embed inline pictures as data URIs"},
    )
    bullet_marker: str = field(
        default="-",
        metadata={"help": "Unordered list marker", "choices": ["-", "*", "+"]},
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.bullet_marker not in ("-", "*", "+"):
            raise ValidationError(
                f"bullet_marker must be one of '-', '*', '+', got {self.bullet_marker!r}",
                parameter_name="bullet_marker",
                parameter_value=self.bullet_marker,
            )
