#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the latexfmt printers.

Options are frozen dataclasses: derive a modified copy with
``create_updated`` instead of mutating an instance.
"""

from __future__ import annotations

from latexfmt.options.base import BasePrinterOptions, CloneFrozenMixin
from latexfmt.options.printers import LayoutOptions, TokenPrinterOptions

__all__ = [
    "BasePrinterOptions",
    "CloneFrozenMixin",
    "LayoutOptions",
    "TokenPrinterOptions",
]
