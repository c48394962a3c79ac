#  Copyright (c) 2025 Tom Villani, Ph.D.
"""LaTeX grammar and the parsing-expression primitives it is built from."""

from __future__ import annotations

from latexfmt.parsers.latex import LatexGrammar, RawNode, parse_raw
from latexfmt.parsers.peg import Match, PegParser

__all__ = ["LatexGrammar", "Match", "PegParser", "RawNode", "parse_raw"]
