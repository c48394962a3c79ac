#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for latexfmt.

This module centralizes the character classes used by the grammar, the
fixed tables of macros and environments that receive special treatment,
and the default values of every printer option.

Constants are organized by category:
1. Type Definitions
2. Grammar Character Classes
3. Special Macros and Environments
4. Printer Defaults
5. Configuration Discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

PrinterEngine = Literal["text", "layout"]

# =============================================================================
# Grammar Character Classes
# =============================================================================

ESCAPE = "\\"
BEGIN_GROUP = "{"
END_GROUP = "}"
MATH_SHIFT = "$"
ALIGNMENT_TAB = "&"
MACRO_PARAMETER = "#"
SUPERSCRIPT = "^"
SUBSCRIPT = "_"
COMMENT_START = "%"
IGNORED_CHARACTER = "\0"
HORIZONTAL_SPACE = " \t"
NEWLINE_CHARACTERS = "\r\n"

PUNCTUATION = frozenset(".,;:-*/()!?=+<>[]")

# Characters that end a text-mode run of ordinary characters
NONCHAR_CHARACTERS = frozenset("\\%{}$&\r\n#^_\0 \t")

# A line never starts with one of these when the token printer wraps
NON_WRAPPABLE_START = frozenset(".,/#!$%^&*;:{}=-_`~()")

VERB_MACROS = ("verb*", "verb")
VERBATIM_ENVIRONMENTS = ("verbatim*", "verbatim")
COMMENT_ENVIRONMENT = "comment"

# Longest names first so that ``equation*`` is tried before ``equation``
MATH_ENVIRONMENTS = (
    "equation*",
    "equation",
    "align*",
    "align",
    "alignat*",
    "alignat",
    "gather*",
    "gather",
    "multline*",
    "multline",
    "flalign*",
    "flalign",
    "split",
    "math",
    "displaymath",
)

# Names the generic macro rule refuses; they only occur inside environments
RESERVED_MACRO_NAMES = frozenset({"begin", "end"})

# =============================================================================
# Special Macros and Environments
# =============================================================================

# Macros that always start on a fresh line
NEWLINE_MACROS = frozenset({"usepackage", "newcommand"})

# Macros that prefer to start a new paragraph
PARAGRAPH_MACROS = frozenset({"item"})

# =============================================================================
# Printer Defaults
# =============================================================================

DEFAULT_TOKEN_MAX_WIDTH = 60
DEFAULT_TOKEN_TAB_WIDTH = 8

DEFAULT_PRINT_WIDTH = 80
DEFAULT_TAB_WIDTH = 8
DEFAULT_USE_TABS = True
DEFAULT_PARSER_NAME = "latex"

DEFAULT_ENGINE: PrinterEngine = "layout"

# =============================================================================
# Configuration Discovery
# =============================================================================

CONFIG_FILENAMES = (".latexfmt.toml", ".latexfmt.yaml", ".latexfmt.yml", ".latexfmt.json")
PYPROJECT_TOOL_SECTION = "latexfmt"
CONFIG_ENV_VAR = "LATEXFMT_CONFIG"
