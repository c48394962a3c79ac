#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Printers turning a LaTeX tree back into text.

- raw: the unformatted source form
- tokens: token stream with greedy word wrapping
- layout: doc builder and layout engine (doc, doc_printer)
"""

from latexfmt.renderers.base import BaseRenderer
from latexfmt.renderers.doc_printer import PrintResult, print_doc_to_string
from latexfmt.renderers.layout import DocBuilder, LayoutRenderer
from latexfmt.renderers.raw import RawRenderer, print_raw
from latexfmt.renderers.tokens import Directive, TokenBuilder, TokenRenderer, render_tokens

__all__ = [
    "BaseRenderer",
    "Directive",
    "DocBuilder",
    "LayoutRenderer",
    "PrintResult",
    "RawRenderer",
    "TokenBuilder",
    "TokenRenderer",
    "print_doc_to_string",
    "print_raw",
    "render_tokens",
]
