#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Small helpers shared by the latexfmt entry points."""

from latexfmt.utils.timing import debug_timer

__all__ = ["debug_timer"]
