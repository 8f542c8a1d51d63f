"""Base classes for serializer and parser options.

This module defines the foundation classes for the frozen option objects
used by the Markdown serializer and parser.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from slatedown.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    def _validate_bool_fields(self) -> None:
        """Reject non-boolean values in fields declared as ``bool``.

        Raises
        ------
        ValidationError
            If a boolean field holds another type.

        """
        for f in fields(self):
            if f.type not in ("bool", bool):
                continue
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise ValidationError(
                    f"{f.name} must be a bool, got {type(value).__name__}",
                    parameter_name=f.name,
                    parameter_value=value,
                )


@dataclass(frozen=True)
class BaseSerializerOptions(CloneFrozenMixin):
    """Base class for serializer options.

    Notes
    -----
    Subclasses should define format-specific options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate field types.

        Raises
        ------
        ValidationError
            If any field value has the wrong type.

        """
        self._validate_bool_fields()


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options.

    Notes
    -----
    Subclasses should define format-specific parsing options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate field types.

        Raises
        ------
        ValidationError
            If any field value has the wrong type.

        """
        self._validate_bool_fields()
