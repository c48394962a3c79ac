#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for printer options.

This module defines the foundation shared by the option classes of both
printers: immutable dataclasses that are copied rather than mutated, and
whose fields carry help text for the command line tool.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

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


@dataclass(frozen=True)
class BasePrinterOptions(CloneFrozenMixin):
    """Base class for printer options.

    Subclasses declare their settings as frozen dataclass fields whose
    ``metadata`` holds a ``help`` string and an ``importance`` level.
    """

    @classmethod
    def field_help(cls) -> dict[str, str]:
        """Return the help text of every field, keyed by field name."""
        return {f.name: f.metadata.get("help", "") for f in fields(cls)}

    @staticmethod
    def _require_positive(name: str, value: int) -> None:
        """Raise ValueError unless ``value`` is a positive integer.

        Raises
        ------
        ValueError
            If ``value`` is not an int or is not positive.

        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
