"""latexfmt - parse and pretty-print LaTeX source.

latexfmt reads LaTeX into a typed syntax tree and prints it back with
consistent spacing, indentation of environment bodies and wrapping of long
lines. Two printers are provided: a fast greedy token printer and a layout
engine that word-wraps paragraphs and breaks argument lists as a unit.

Examples
--------
Format text with the layout engine:

    >>> from latexfmt import print_with_layout_engine
    >>> print_with_layout_engine("\\\\begin{center}hello   world\\\\end{center}")
    '\\\\begin{center}\\n\\thello world\\n\\\\end{center}'

Work with the tree directly:

    >>> from latexfmt import parse, annotate
    >>> tree = parse("a \\\\emph[x]{y}")
    >>> links = annotate(tree)
    >>> links.parent(tree.content[0]) is tree
    True

See Also
--------
latexfmt.ast : node definitions and tree utilities
latexfmt.renderers : the printers

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "latexfmt requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from latexfmt.api import format_text, parse, print_as_text, print_with_layout_engine
from latexfmt.ast.links import TreeLinks, annotate
from latexfmt.ast.normalize import remove_excess_space
from latexfmt.exceptions import (
    FileError,
    InvalidOptionsError,
    LatexFmtError,
    LatexSyntaxError,
    MalformedNodeError,
    ParsingError,
    RenderingError,
    SourceLocation,
    ValidationError,
)
from latexfmt.options import LayoutOptions, TokenPrinterOptions
from latexfmt.renderers.doc_printer import PrintResult, print_doc_to_string
from latexfmt.renderers.raw import print_raw

__all__ = [
    "__version__",
    "FileError",
    "InvalidOptionsError",
    "LatexFmtError",
    "LatexSyntaxError",
    "LayoutOptions",
    "MalformedNodeError",
    "ParsingError",
    "PrintResult",
    "RenderingError",
    "SourceLocation",
    "TokenPrinterOptions",
    "TreeLinks",
    "ValidationError",
    "annotate",
    "format_text",
    "parse",
    "print_as_text",
    "print_doc_to_string",
    "print_raw",
    "print_with_layout_engine",
    "remove_excess_space",
]
