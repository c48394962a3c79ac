#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/api.py
"""Public entry points: parse LaTeX and print it with either engine."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from latexfmt.ast.builder import build_document
from latexfmt.ast.nodes import Node, NodeList
from latexfmt.ast.normalize import remove_excess_space
from latexfmt.constants import DEFAULT_ENGINE, PrinterEngine
from latexfmt.exceptions import InvalidOptionsError, ValidationError
from latexfmt.options.printers import LayoutOptions, TokenPrinterOptions
from latexfmt.parsers.latex import parse_raw
from latexfmt.renderers.layout import LayoutRenderer
from latexfmt.renderers.tokens import TokenRenderer
from latexfmt.utils.timing import debug_timer

logger = logging.getLogger(__name__)


def parse(text: str) -> NodeList:
    """Parse LaTeX source into a tree.

    The tree is returned exactly as parsed; call
    :func:`~latexfmt.ast.normalize.remove_excess_space` to collapse
    whitespace before printing.

    Parameters
    ----------
    text : str
        LaTeX source

    Returns
    -------
    NodeList
        Top-level nodes of the document

    Raises
    ------
    LatexSyntaxError
        If ``text`` is not valid input, including mismatched
        ``\\begin``/``\\end`` names. The error carries the location of the
        furthest point the parser reached and what it expected there.

    Examples
    --------
        >>> parse("3.14")
        NodeList(content=[StringNode(content='3.14')])

    """
    if not isinstance(text, str):
        raise ValidationError(
            f"Expected LaTeX source as str, got {type(text).__name__}",
            parameter_name="text",
            parameter_value=text,
        )
    with debug_timer(logger, f"Parsing {len(text)} characters"):
        return build_document(parse_raw(text))


def _prepare(ast_or_text: Union[str, Node]) -> Node:
    if isinstance(ast_or_text, str):
        return remove_excess_space(parse(ast_or_text))
    if isinstance(ast_or_text, Node):
        return remove_excess_space(ast_or_text)
    raise ValidationError(
        f"Expected a LaTeX string or a Node, got {type(ast_or_text).__name__}",
        parameter_name="ast_or_text",
        parameter_value=ast_or_text,
    )


def print_as_text(
    ast_or_text: Union[str, Node],
    options: Optional[TokenPrinterOptions] = None,
    **kwargs: Any,
) -> str:
    """Format LaTeX with the token printer.

    Parameters
    ----------
    ast_or_text : str or Node
        Source text, which is parsed first, or an existing tree. A tree is
        normalized in place.
    options : TokenPrinterOptions, optional
        Wrapping settings
    kwargs : Any
        Overrides for individual option fields, e.g. ``max_width=40``

    Returns
    -------
    str
        The formatted text

    Raises
    ------
    LatexSyntaxError
        If ``ast_or_text`` is a string that does not parse.
    ValidationError
        If an option value is invalid.

    Examples
    --------
        >>> print_as_text("x_{y}  and   x_{yz}")
        'x_y and x_{yz}'

    """
    resolved = _token_options(options, kwargs)
    root = _prepare(ast_or_text)
    with debug_timer(logger, "Token printing"):
        return TokenRenderer(resolved).render_to_string(root)


def _token_options(options: Optional[TokenPrinterOptions], overrides: Mapping[str, Any]) -> TokenPrinterOptions:
    if options is not None and not isinstance(options, TokenPrinterOptions):
        raise InvalidOptionsError(
            "Token printer expects TokenPrinterOptions",
            expected_type=TokenPrinterOptions,
            received_type=type(options),
        )
    base = options or TokenPrinterOptions()
    if not overrides:
        return base
    try:
        return base.create_updated(**overrides)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e), parameter_value=dict(overrides), original_error=e) from e


def _layout_options(options: Union[LayoutOptions, Mapping[str, Any], None]) -> LayoutOptions:
    if options is None:
        return LayoutOptions()
    if isinstance(options, LayoutOptions):
        return options
    if isinstance(options, Mapping):
        return LayoutOptions.from_mapping(options)
    raise InvalidOptionsError(
        "Layout printer expects LayoutOptions or a mapping",
        expected_type=LayoutOptions,
        received_type=type(options),
    )


def print_with_layout_engine(
    ast_or_text: Union[str, Node],
    options: Union[LayoutOptions, Mapping[str, Any], None] = None,
) -> str:
    """Format LaTeX with the layout engine.

    Parameters
    ----------
    ast_or_text : str or Node
        Source text, which is parsed first, or an existing tree. A tree is
        normalized in place.
    options : LayoutOptions or mapping, optional
        Layout settings. A mapping may use ``printWidth``, ``tabWidth``,
        ``useTabs`` and ``parser`` keys (or their snake_case names).

    Returns
    -------
    str
        The formatted text

    Raises
    ------
    LatexSyntaxError
        If ``ast_or_text`` is a string that does not parse.
    ValidationError
        If an option value is invalid.

    Examples
    --------
        >>> print_with_layout_engine("\\\\begin{itemize}\\\\item a\\\\end{itemize}")
        '\\\\begin{itemize}\\n\\t\\\\item a\\n\\\\end{itemize}'

    """
    resolved = _layout_options(options)
    root = _prepare(ast_or_text)
    with debug_timer(logger, "Layout printing"):
        return LayoutRenderer(resolved).render_to_string(root)


def format_text(
    text: str,
    engine: PrinterEngine = DEFAULT_ENGINE,
    token_options: Optional[TokenPrinterOptions] = None,
    layout_options: Union[LayoutOptions, Mapping[str, Any], None] = None,
) -> str:
    """Format ``text`` with the named engine (``"text"`` or ``"layout"``)."""
    logger.debug("Formatting with the %s engine", engine)
    if engine == "text":
        return print_as_text(text, token_options)
    if engine == "layout":
        return print_with_layout_engine(text, layout_options)
    raise ValidationError(f"Unknown engine: {engine!r}", parameter_name="engine", parameter_value=engine)
