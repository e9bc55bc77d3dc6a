#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Shared behaviour of the option dataclasses.

Options are frozen; a changed copy comes from :meth:`CloneFrozenMixin.create_updated`
and a copy built from a config-file table from :meth:`CloneFrozenMixin.from_mapping`.
Both go through ``__init__``, so each class's ``__post_init__`` validation runs.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from office2site.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy and construct frozen option dataclasses."""

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names of the settings this class accepts."""
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], section: str = "configuration") -> Self:
        """Build an instance from a config table, rejecting keys that are not fields.

        Parameters
        ----------
        data : Mapping[str, Any]
            Setting names and values
        section : str, default "configuration"
            Name of the table, used in the error message

        Raises
        ------
        ValidationError
            If ``data`` has unknown keys or a value fails validation.

        Examples
        --------
        >>> from office2site.options import DocxOptions
        >>> DocxOptions.from_mapping({"bullet_marker": "*"}).bullet_marker
        '*'

        """
        unknown = sorted(set(data) - cls.field_names())
        if unknown:
            raise ValidationError(
                f"Unknown {section} setting(s): {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=data[unknown[0]],
            )
        return cls(**data)

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs)
