"""Command-line interface for the latexfmt LaTeX formatter.

Examples
--------
Format a file to standard output::

    $ latexfmt paper.tex

Rewrite files in place with the token printer::

    $ latexfmt --engine text --write chapters/*.tex

Check formatting in CI::

    $ latexfmt --check paper.tex

Inspect the normalized tree::

    $ echo '\\emph{x}' | latexfmt --dump-ast

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys

from latexfmt.cli.builder import EXIT_VALIDATION_ERROR, create_parser, get_exit_code_for_exception
from latexfmt.cli.config import build_options, load_config_with_priority
from latexfmt.cli.processors import FormatSettings, process_inputs
from latexfmt.constants import CONFIG_ENV_VAR
from latexfmt.exceptions import ValidationError
from latexfmt.logging_utils import configure_logging

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _load_settings(parsed_args: argparse.Namespace) -> FormatSettings:
    config = {}
    if not parsed_args.no_config:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    engine, token_options, layout_options = build_options(config, parsed_args)
    logger.debug("Engine %s, token options %s, layout options %s", engine, token_options, layout_options)
    return FormatSettings(engine, token_options, layout_options)


def main(args: list[str] | None = None) -> int:
    """Run the latexfmt command line tool and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        settings = _load_settings(parsed_args)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    if parsed_args.write and not parsed_args.input:
        print("Error: --write requires at least one input file", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    return process_inputs(parsed_args.input, parsed_args, settings)


if __name__ == "__main__":
    sys.exit(main())
