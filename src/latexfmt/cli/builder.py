#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser and exit codes for the latexfmt command line tool.

Help text for the width and indentation flags comes from the ``help``
metadata of the option dataclasses, so the flags and the options stay
described in one place.
"""

from __future__ import annotations

import argparse
import logging

from latexfmt import __version__
from latexfmt.exceptions import FileError, ParsingError, RenderingError, ValidationError
from latexfmt.options.printers import LayoutOptions, TokenPrinterOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7


def positive_int(value: str) -> int:
    """Argparse type accepting positive integers only."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``latexfmt``.

    Options left unset on the command line are ``None`` so that values from
    a configuration file can fill them in.

    Returns
    -------
    argparse.ArgumentParser
        The configured parser

    """
    layout_help = LayoutOptions.field_help()
    token_help = TokenPrinterOptions.field_help()

    parser = argparse.ArgumentParser(
        prog="latexfmt",
        description="Parse LaTeX source and print it back with consistent layout.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  latexfmt paper.tex\n"
            "  latexfmt --engine text --print-width 72 chapter.tex\n"
            "  latexfmt --check *.tex\n"
            "  cat paper.tex | latexfmt -"
        ),
    )

    parser.add_argument(
        "input",
        nargs="*",
        metavar="FILE",
        help="Files to format. Reads standard input when omitted or given as '-'",
    )

    formatting = parser.add_argument_group("formatting")
    formatting.add_argument(
        "--engine",
        choices=["text", "layout"],
        default=None,
        help="Printer to use: the greedy token printer ('text') or the layout engine ('layout', default)",
    )
    formatting.add_argument(
        "--print-width",
        type=positive_int,
        metavar="N",
        default=None,
        help=f"{layout_help['print_width']} (token printer: {token_help['max_width'].lower()})",
    )
    formatting.add_argument(
        "--tab-width",
        type=positive_int,
        metavar="N",
        default=None,
        help=layout_help["tab_width"],
    )
    formatting.add_argument(
        "--use-spaces",
        action="store_true",
        default=None,
        help="Indent with spaces instead of tabs (layout engine only)",
    )

    output = parser.add_argument_group("output")
    modes = output.add_mutually_exclusive_group()
    modes.add_argument("--write", "-w", action="store_true", help="Rewrite files in place")
    modes.add_argument(
        "--check",
        action="store_true",
        help="Report files that are not formatted and exit with status 1 if there are any",
    )
    modes.add_argument(
        "--dump-ast",
        action="store_true",
        help="Print the normalized syntax tree as JSON instead of formatted text",
    )

    config = parser.add_argument_group("configuration")
    config.add_argument(
        "--config",
        metavar="PATH",
        help="Path to a configuration file (TOML, YAML or JSON). If not specified, searches for "
        ".latexfmt.toml, .latexfmt.yaml, .latexfmt.yml, .latexfmt.json or a [tool.latexfmt] table in "
        "pyproject.toml, from the current directory upwards",
    )
    config.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    logging_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    logging_group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    logging_group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps, logger names and timing information",
    )

    parser.add_argument("--version", "-V", action="version", version=f"latexfmt {__version__}")
    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (FileError, OSError)):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR
