#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/cli/processors.py
"""Per-file processing for the latexfmt command line tool."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from latexfmt.api import format_text, parse
from latexfmt.ast.normalize import remove_excess_space
from latexfmt.ast.serialization import ast_to_json
from latexfmt.cli.builder import EXIT_ERROR, EXIT_SUCCESS, get_exit_code_for_exception
from latexfmt.exceptions import FileError, LatexFmtError, LatexSyntaxError
from latexfmt.options.printers import LayoutOptions, TokenPrinterOptions
from latexfmt.utils.timing import debug_timer

logger = logging.getLogger(__name__)

STDIN_NAME = "-"


@dataclass(frozen=True)
class FormatSettings:
    """Everything needed to format one input."""

    engine: str
    token_options: TokenPrinterOptions
    layout_options: LayoutOptions


def read_source(name: str) -> str:
    """Read a file, or standard input for ``-``.

    Raises
    ------
    FileError
        If the file cannot be read or decoded.

    """
    if name == STDIN_NAME:
        return sys.stdin.read()
    try:
        return Path(name).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Cannot read {name}: {e}", file_path=name, original_error=e) from e


def write_source(name: str, text: str) -> None:
    """Write ``text`` back to the file ``name``.

    Raises
    ------
    FileError
        If the file cannot be written.

    """
    try:
        Path(name).write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileError(f"Cannot write {name}: {e}", file_path=name, original_error=e) from e


def format_source(text: str, settings: FormatSettings, dump_ast: bool = False) -> str:
    """Return the formatted text, or the JSON tree when ``dump_ast`` is set.

    A source ending in a newline keeps a final newline.
    """
    if dump_ast:
        return ast_to_json(remove_excess_space(parse(text))) + "\n"
    formatted = format_text(text, settings.engine, settings.token_options, settings.layout_options)
    if text.endswith("\n") and not formatted.endswith("\n"):
        formatted += "\n"
    return formatted


def report_error(name: str, error: LatexFmtError) -> None:
    """Print an error for ``name`` to standard error in ``path:line:column: message`` form."""
    label = "<stdin>" if name == STDIN_NAME else name
    if isinstance(error, LatexSyntaxError):
        location = error.location
        print(f"{label}:{location.line}:{location.column}: {error.message}", file=sys.stderr)
    else:
        print(f"Error: {label}: {error}", file=sys.stderr)


def process_file(name: str, parsed_args: argparse.Namespace, settings: FormatSettings) -> int:
    """Format one input according to the output mode flags.

    Returns
    -------
    int
        Exit code for this input

    """
    try:
        source = read_source(name)
        with debug_timer(logger, f"Formatting {name}"):
            formatted = format_source(source, settings, dump_ast=parsed_args.dump_ast)
    except LatexFmtError as e:
        report_error(name, e)
        return get_exit_code_for_exception(e)

    if parsed_args.check:
        if formatted != source:
            print(f"would reformat {name}", file=sys.stderr)
            return EXIT_ERROR
        return EXIT_SUCCESS

    if parsed_args.write and name != STDIN_NAME:
        if formatted == source:
            logger.info("%s already formatted", name)
            return EXIT_SUCCESS
        try:
            write_source(name, formatted)
        except FileError as e:
            report_error(name, e)
            return get_exit_code_for_exception(e)
        logger.info("Reformatted %s", name)
        return EXIT_SUCCESS

    sys.stdout.write(formatted)
    return EXIT_SUCCESS


def process_inputs(inputs: list[str], parsed_args: argparse.Namespace, settings: FormatSettings) -> int:
    """Process every input and return the highest exit code seen."""
    exit_code = EXIT_SUCCESS
    for name in inputs or [STDIN_NAME]:
        result = process_file(name, parsed_args, settings)
        exit_code = max(exit_code, result)
    return exit_code
