#  Copyright (c) 2025 Tom Villani, Ph.D.
"""PPTX extraction options."""

from __future__ import annotations

from dataclasses import dataclass, field

from office2site.constants import (
    DEFAULT_SLIDE_HEIGHT_EMU,
    DEFAULT_SLIDE_WIDTH_EMU,
    BodyPlaceholderPolicy,
)
from office2site.exceptions import ValidationError
from office2site.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class PptxOptions(CloneFrozenMixin):
    """Configuration options for slide-deck extraction.

    Parameters
    ----------
    include_notes : bool, default True
        Read speaker notes from the matching notes slide.
    body_placeholder_policy : {"any", "typed"}, default "any"
        Which non-title text shapes count as body content:
        - "any": every non-title shape with text
        - "typed": only ``body`` placeholders, indexed placeholders and plain
          (untyped, unindexed) text boxes
    inherit_placeholder_positions : bool, default False
        Let a placeholder without its own transform borrow the position of the
        matching placeholder on its slide layout (then the slide master).
        When False, such shapes are left out of positioned (HTML) output.
    default_slide_width : int
        Slide width in EMU used when the presentation declares none.
    default_slide_height : int
        Slide height in EMU used when the presentation declares none.

    """

    include_notes: bool = field(
        default=True,
        metadata={"help": "Include speaker notes under each slide"},
    )
    body_placeholder_policy: BodyPlaceholderPolicy = field(
        default="any",
        metadata={
            "help": "Which non-title shapes become body content: 'any' or 'typed'",
            "choices": ["any", "typed"],
        },
    )
    inherit_placeholder_positions: bool = field(
        default=False,
        metadata={"help": "Inherit missing placeholder positions from the slide layout/master"},
    )
    default_slide_width: int = field(
        default=DEFAULT_SLIDE_WIDTH_EMU,
        metadata={"help": "Fallback slide width in EMU", "type": int},
    )
    default_slide_height: int = field(
        default=DEFAULT_SLIDE_HEIGHT_EMU,
        metadata={"help": "Fallback slide height in EMU", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If the placeholder policy is unknown or a default dimension is not positive.

        """
        if self.body_placeholder_policy not in ("any", "typed"):
            raise ValidationError(
                f"body_placeholder_policy must be 'any' or 'typed', got {self.body_placeholder_policy!r}",
                parameter_name="body_placeholder_policy",
                parameter_value=self.body_placeholder_policy,
            )
        for name in ("default_slide_width", "default_slide_height"):
            value = getattr(self, name)
            if value <= 0:
                raise ValidationError(
                    f"{name} must be positive, got {value}", parameter_name=name, parameter_value=value
                )
