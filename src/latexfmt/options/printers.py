#  Copyright (c) 2025 Tom Villani, Ph.D.

# latexfmt/options/printers.py
"""Configuration options for the token printer and the layout printer."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from latexfmt.constants import (
    DEFAULT_PARSER_NAME,
    DEFAULT_PRINT_WIDTH,
    DEFAULT_TAB_WIDTH,
    DEFAULT_TOKEN_MAX_WIDTH,
    DEFAULT_TOKEN_TAB_WIDTH,
    DEFAULT_USE_TABS,
)
from latexfmt.exceptions import ValidationError
from latexfmt.options.base import BasePrinterOptions

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


@dataclass(frozen=True)
class TokenPrinterOptions(BasePrinterOptions):
    """Configuration options for the greedy line-wrapping token printer.

    Parameters
    ----------
    max_width : int, default 60
        Column at which plain text is wrapped.
    tab_width : int, default 8
        Width of one indentation tab when measuring line length.

    """

    max_width: int = field(
        default=DEFAULT_TOKEN_MAX_WIDTH,
        metadata={"help": "Column at which plain text is wrapped", "type": int, "importance": "core"},
    )
    tab_width: int = field(
        default=DEFAULT_TOKEN_TAB_WIDTH,
        metadata={"help": "Width of one indentation tab", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate widths.

        Raises
        ------
        ValueError
            If either width is not a positive integer.

        """
        self._require_positive("max_width", self.max_width)
        self._require_positive("tab_width", self.tab_width)


@dataclass(frozen=True)
class LayoutOptions(BasePrinterOptions):
    """Configuration options for the document layout printer.

    Parameters
    ----------
    print_width : int, default 80
        Width the layout engine tries to keep lines within.
    tab_width : int, default 8
        Width of one indentation level.
    use_tabs : bool, default True
        Indent with tab characters instead of spaces.
    parser : str, default "latex"
        Name of the input dialect. Only ``"latex"`` is understood; the
        value is carried for compatibility with generic layout options.

    """

    print_width: int = field(
        default=DEFAULT_PRINT_WIDTH,
        metadata={"help": "Maximum line width for the layout engine", "type": int, "importance": "core"},
    )
    tab_width: int = field(
        default=DEFAULT_TAB_WIDTH,
        metadata={"help": "Width of one indentation level", "type": int, "importance": "core"},
    )
    use_tabs: bool = field(
        default=DEFAULT_USE_TABS,
        metadata={"help": "Indent with tabs instead of spaces", "importance": "core"},
    )
    parser: str = field(
        default=DEFAULT_PARSER_NAME,
        metadata={"help": "Input dialect name", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate widths and flags.

        Raises
        ------
        ValueError
            If a width is not a positive integer or ``use_tabs`` is not a bool.

        """
        self._require_positive("print_width", self.print_width)
        self._require_positive("tab_width", self.tab_width)
        if not isinstance(self.use_tabs, bool):
            raise ValueError(f"use_tabs must be a bool, got {type(self.use_tabs).__name__}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "LayoutOptions":
        """Build options from a plain mapping such as ``{"printWidth": 40}``.

        Keys may be given in camelCase or snake_case. Unknown keys are
        ignored with a warning.

        Parameters
        ----------
        mapping : Mapping[str, Any]
            Option values keyed by name

        Returns
        -------
        LayoutOptions
            The validated options

        Raises
        ------
        ValidationError
            If a recognized key holds an invalid value.

        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in mapping.items():
            name = _to_snake_case(key)
            if name not in known:
                logger.warning("Ignoring unknown layout option: %s", key)
                continue
            values[name] = value

        try:
            return cls(**values)
        except ValueError as e:
            raise ValidationError(str(e), parameter_value=dict(mapping), original_error=e) from e
