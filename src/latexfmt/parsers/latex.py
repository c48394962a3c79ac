#  Copyright (c) 2025 Tom Villani, Ph.D.

# latexfmt/parsers/latex.py
r"""LaTeX grammar producing the raw parse tree.

The raw tree is made of plain Python values: strings for runs of literal
text, lists for token sequences and dictionaries tagged with a ``"TYPE"``
key for every structured construct, e.g.::

    {"TYPE": "macro", "content": "emph", "args": None}
    {"TYPE": "environment", "env": "itemize", "args": None, "content": [...]}

:func:`latexfmt.ast.builder.build_ast` turns it into typed nodes.

Three token flavours share most of their alternatives:

``token``
    Text mode. Ordinary characters are grouped into runs so that a word
    is a single string.
``math_token``
    Math mode. One character per string, whitespace folded around groups
    and alignment tabs, and ``^``/``_`` take the following math token as
    their base so ``x^2_3`` nests.
``args_token``
    Inside ``[...]`` optional arguments, where ``,`` and ``]`` end a run.

Alternatives are tried in order and the first match wins.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from latexfmt.constants import (
    ALIGNMENT_TAB,
    BEGIN_GROUP,
    COMMENT_ENVIRONMENT,
    COMMENT_START,
    END_GROUP,
    ESCAPE,
    HORIZONTAL_SPACE,
    IGNORED_CHARACTER,
    MACRO_PARAMETER,
    MATH_ENVIRONMENTS,
    MATH_SHIFT,
    NEWLINE_CHARACTERS,
    NONCHAR_CHARACTERS,
    RESERVED_MACRO_NAMES,
    SUBSCRIPT,
    SUPERSCRIPT,
    VERB_MACROS,
    VERBATIM_ENVIRONMENTS,
)
from latexfmt.parsers.peg import Match, PegParser, Rule, describe_literal

logger = logging.getLogger(__name__)

RawNode = Any

LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
DIGITS = frozenset("0123456789")

_ARGS_NONCHAR = NONCHAR_CHARACTERS | {",", "]"}
# Characters the math catch-all refuses; each has a dedicated rule
_MATH_RESERVED = frozenset({ESCAPE, BEGIN_GROUP, END_GROUP, MATH_SHIFT})
# Characters after which ``^`` and ``_`` in text mode stay literal
_SCRIPT_STOP = frozenset(HORIZONTAL_SPACE) | frozenset(NEWLINE_CHARACTERS) | {COMMENT_START}


class LatexGrammar(PegParser):
    """Recursive-descent parser for the LaTeX grammar.

    Parameters
    ----------
    text : str
        The LaTeX source

    Examples
    --------
    >>> LatexGrammar(r"\\emph{hi}").parse_document()
    [{'TYPE': 'macro', 'content': 'emph', 'args': None}, {'TYPE': 'group', 'content': ['hi']}]

    """

    def parse_document(self) -> list[RawNode]:
        """Parse the whole source.

        Returns
        -------
        list
            The raw token sequence of the document

        Raises
        ------
        LatexSyntaxError
            If any input remains after the longest derivable document, or
            if groups and environments nest deeper than the interpreter
            stack allows.

        """
        try:
            match = self.many(0, self.token)
        except RecursionError as e:
            raise self.nesting_error() from e
        assert match is not None
        if not self.at_end(match.pos):
            raise self.syntax_error()
        return match.value

    # ------------------------------------------------------------------
    # Token flavours
    # ------------------------------------------------------------------

    def token(self, pos: int) -> Optional[Match]:
        return self._token(pos, self.token, self.text_run)

    def args_token(self, pos: int) -> Optional[Match]:
        return self._token(pos, self.args_token, self.args_run)

    def _token(self, pos: int, flavour: Rule, run: Rule) -> Optional[Match]:
        return self.choice(
            pos,
            self.special_macro,
            self.macro,
            self.full_comment,
            self.group,
            self.inline_math,
            self.alignment_tab,
            self.parbreak,
            self.macro_parameter,
            lambda p: self.text_script(p, SUPERSCRIPT, "superscript", flavour),
            lambda p: self.text_script(p, SUBSCRIPT, "subscript", flavour),
            self.ignore,
            self.number,
            self.whitespace,
            run,
        )

    def math_token(self, pos: int) -> Optional[Match]:
        return self.choice(
            pos,
            self.special_macro,
            self.macro,
            self.full_comment,
            lambda p: self._folded(p, self.math_group),
            lambda p: self._folded(p, self.alignment_tab),
            lambda p: self._folded(p, self.macro_parameter),
            lambda p: self.math_script(p, SUPERSCRIPT, "superscript"),
            lambda p: self.math_script(p, SUBSCRIPT, "subscript"),
            self.ignore,
            self.whitespace,
            lambda p: self.char_not_in(p, _MATH_RESERVED, "math character"),
        )

    def _folded(self, pos: int, rule: Rule) -> Optional[Match]:
        """Match ``rule`` surrounded by optional whitespace, keeping only its value."""
        start = self.many(pos, self.whitespace)
        assert start is not None
        match = rule(start.pos)
        if match is None:
            return None
        end = self.many(match.pos, self.whitespace)
        assert end is not None
        return Match(end.pos, match.value)

    # ------------------------------------------------------------------
    # Special macros
    # ------------------------------------------------------------------

    def special_macro(self, pos: int) -> Optional[Match]:
        # every special form opens with a backslash or with $$
        if pos >= self.length or self.text[pos] not in (ESCAPE, MATH_SHIFT):
            return None
        return self.choice(
            pos,
            self.verb,
            self.verbatim,
            self.comment_environment,
            self.display_math_brackets,
            self.inline_math_parens,
            self.display_math_dollars,
            self.math_environment,
            self.environment,
        )

    def verb(self, pos: int) -> Optional[Match]:
        for name in VERB_MACROS:
            opener = self.literal(pos, ESCAPE + name)
            if opener is None:
                continue
            delimiter = self.char_not_in(
                opener.pos, LETTERS | set(HORIZONTAL_SPACE) | set(NEWLINE_CHARACTERS), "verb delimiter"
            )
            if delimiter is None:
                continue
            end = self.text.find(delimiter.value, delimiter.pos)
            if end < 0:
                self.expect(self.length, describe_literal(delimiter.value))
                continue
            content = self.text[delimiter.pos : end]
            return Match(end + 1, {"TYPE": "verb", "env": name, "escape": delimiter.value, "content": content})
        return None

    def verbatim(self, pos: int) -> Optional[Match]:
        for name in VERBATIM_ENVIRONMENTS:
            match = self._raw_environment(pos, name)
            if match is not None:
                return Match(match.pos, {"TYPE": "verbatim", "env": name, "content": match.value})
        return None

    def comment_environment(self, pos: int) -> Optional[Match]:
        match = self._raw_environment(pos, COMMENT_ENVIRONMENT)
        if match is None:
            return None
        content = match.value
        end = match.pos
        # one trailing newline belongs to the environment
        newline = self.newline(self._skip_space(end))
        if newline is not None:
            end = newline.pos
            if not self.lookahead(self._skip_space(end), self.newline):
                end = self._skip_space(end)
        return Match(end, {"TYPE": "commentenv", "content": content})

    def _raw_environment(self, pos: int, name: str) -> Optional[Match]:
        """Match ``\\begin{name}`` through ``\\end{name}`` capturing the body verbatim."""
        opener = self.literal(pos, f"{ESCAPE}begin{{{name}}}")
        if opener is None:
            return None
        closer = f"{ESCAPE}end{{{name}}}"
        end = self.text.find(closer, opener.pos)
        if end < 0:
            self.expect(self.length, describe_literal(closer))
            return None
        return Match(end + len(closer), self.text[opener.pos : end])

    def display_math_brackets(self, pos: int) -> Optional[Match]:
        return self._math_block(pos, ESCAPE + "[", ESCAPE + "]", "displaymath")

    def inline_math_parens(self, pos: int) -> Optional[Match]:
        return self._math_block(pos, ESCAPE + "(", ESCAPE + ")", "inlinemath")

    def display_math_dollars(self, pos: int) -> Optional[Match]:
        return self._math_block(pos, MATH_SHIFT * 2, MATH_SHIFT * 2, "displaymath")

    def _math_block(self, pos: int, opener: str, closer: str, node_type: str) -> Optional[Match]:
        start = self.literal(pos, opener)
        if start is None:
            return None
        body = self.many(start.pos, self.math_token, until=lambda p: self.literal(p, closer))
        assert body is not None
        end = self.literal(body.pos, closer)
        if end is None:
            return None
        return Match(end.pos, {"TYPE": node_type, "content": body.value})

    def math_environment(self, pos: int) -> Optional[Match]:
        for name in MATH_ENVIRONMENTS:
            opener = self.literal(pos, f"{ESCAPE}begin{{{name}}}")
            if opener is None:
                continue
            closer = f"{ESCAPE}end{{{name}}}"
            body = self.many(opener.pos, self.math_token, until=lambda p, c=closer: self.literal(p, c))
            assert body is not None
            end = self.literal(body.pos, closer)
            if end is None:
                return None
            return Match(end.pos, {"TYPE": "mathenv", "env": name, "content": body.value})
        return None

    def environment(self, pos: int) -> Optional[Match]:
        opener = self.literal(pos, f"{ESCAPE}begin{BEGIN_GROUP}")
        if opener is None:
            return None
        name = self.span(opener.pos, _EnvNameChars(), "environment name")
        if name is None:
            return None
        close_name = self.literal(name.pos, END_GROUP)
        if close_name is None:
            return None
        args = self.argument_list(close_name.pos)
        body_start = args.pos if args is not None else close_name.pos

        closer = f"{ESCAPE}end{BEGIN_GROUP}{name.value}{END_GROUP}"
        body = self.many(body_start, self.token, until=lambda p: self.literal(p, closer))
        assert body is not None
        end = self.literal(body.pos, closer)
        if end is None:
            return None
        return Match(
            end.pos,
            {
                "TYPE": "environment",
                "env": name.value,
                "args": args.value if args is not None else None,
                "content": body.value,
            },
        )

    # ------------------------------------------------------------------
    # Macros, groups and argument lists
    # ------------------------------------------------------------------

    def macro(self, pos: int) -> Optional[Match]:
        escape = self.literal(pos, ESCAPE)
        if escape is None:
            return None
        named = self.span(escape.pos, LETTERS, "letter")
        if named is not None:
            if named.value in RESERVED_MACRO_NAMES:
                self.expect(pos, "macro")
                return None
            name, end = named.value, named.pos
        else:
            symbol = self.any_char(escape.pos)
            if symbol is None:
                return None
            name, end = symbol.value, symbol.pos

        args = self.argument_list(end)
        if args is not None:
            end = args.pos
        return Match(end, {"TYPE": "macro", "content": name, "args": args.value if args is not None else None})

    def argument_list(self, pos: int) -> Optional[Match]:
        leading = self.many(pos, self.whitespace)
        assert leading is not None
        opener = self.literal(leading.pos, "[")
        if opener is None:
            return None
        body = self.many(
            opener.pos,
            lambda p: self.choice(p, lambda q: self.literal(q, ","), self.args_token),
            until=lambda p: self.literal(p, "]"),
        )
        assert body is not None
        closer = self.literal(body.pos, "]")
        if closer is None:
            return None
        return Match(closer.pos, {"TYPE": "arglist", "content": body.value})

    def group(self, pos: int) -> Optional[Match]:
        return self._group(pos, self.token)

    def math_group(self, pos: int) -> Optional[Match]:
        return self._group(pos, self.math_token)

    def _group(self, pos: int, inner: Rule) -> Optional[Match]:
        opener = self.literal(pos, BEGIN_GROUP)
        if opener is None:
            return None
        body = self.many(opener.pos, inner, until=lambda p: self.literal(p, END_GROUP))
        assert body is not None
        closer = self.literal(body.pos, END_GROUP)
        if closer is None:
            return None
        return Match(closer.pos, {"TYPE": "group", "content": body.value})

    def inline_math(self, pos: int) -> Optional[Match]:
        opener = self.literal(pos, MATH_SHIFT)
        if opener is None:
            return None
        body = self.many(opener.pos, self.math_token, min_count=1, until=lambda p: self.literal(p, MATH_SHIFT))
        if body is None:
            return None
        closer = self.literal(body.pos, MATH_SHIFT)
        if closer is None:
            return None
        return Match(closer.pos, {"TYPE": "inlinemath", "content": body.value})

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def full_comment(self, pos: int) -> Optional[Match]:
        own_line_start = self._skip_space(pos)
        newline = self.newline(own_line_start)
        if newline is not None:
            match = self.comment(self._skip_space(newline.pos))
            if match is not None:
                match.value["sameline"] = False
                return match
        match = self.comment(pos)
        if match is not None:
            match.value["sameline"] = True
        return match

    def comment(self, pos: int) -> Optional[Match]:
        start = self.literal(pos, COMMENT_START)
        if start is None:
            return None
        end = start.pos
        while end < self.length and self.text[end] not in NEWLINE_CHARACTERS:
            end += 1
        content = self.text[start.pos : end]

        suffix_parbreak = False
        newline = self.newline(end)
        if newline is not None:
            end = newline.pos
            blank = self._blank_lines(end)
            if blank is not None:
                end = blank
                suffix_parbreak = True
            else:
                end = self._skip_space(end)
        return Match(end, {"TYPE": "comment", "content": content, "suffix_parbreak": suffix_parbreak})

    def _blank_lines(self, pos: int) -> Optional[int]:
        """Consume ``(sp* nl)+ sp*`` and return the new cursor, or None if absent."""
        end = None
        cursor = pos
        while True:
            newline = self.newline(self._skip_space(cursor))
            if newline is None:
                break
            cursor = end = newline.pos
        if end is None:
            return None
        return self._skip_space(end)

    # ------------------------------------------------------------------
    # Small tokens
    # ------------------------------------------------------------------

    def alignment_tab(self, pos: int) -> Optional[Match]:
        return self.literal(pos, ALIGNMENT_TAB)

    def parbreak(self, pos: int) -> Optional[Match]:
        newline = self.newline(self._skip_space(pos))
        if newline is None:
            return None
        end = self._blank_lines(newline.pos)
        if end is None:
            return None
        return Match(end, {"TYPE": "parbreak"})

    def macro_parameter(self, pos: int) -> Optional[Match]:
        marker = self.literal(pos, MACRO_PARAMETER)
        if marker is None:
            return None
        digit = self.char_in(marker.pos, DIGITS, "digit")
        if digit is not None:
            return Match(digit.pos, MACRO_PARAMETER + digit.value)
        return marker

    def text_script(self, pos: int, marker: str, node_type: str, flavour: Rule) -> Optional[Match]:
        start = self.literal(pos, marker)
        if start is None:
            return None
        if start.pos < self.length and self.text[start.pos] not in _SCRIPT_STOP:
            base = flavour(start.pos)
            if base is not None and base.value is not None:
                return Match(base.pos, {"TYPE": node_type, "content": base.value})
        return start

    def math_script(self, pos: int, marker: str, node_type: str) -> Optional[Match]:
        start = self._skip_whitespace_tokens(pos)
        if self.literal(start, marker) is None:
            return None
        base = self.math_token(self._skip_whitespace_tokens(start + len(marker)))
        if base is None or base.value is None:
            return None
        return Match(base.pos, {"TYPE": node_type, "content": base.value})

    def ignore(self, pos: int) -> Optional[Match]:
        match = self.literal(pos, IGNORED_CHARACTER)
        if match is None:
            return None
        return Match(match.pos, None)

    def number(self, pos: int) -> Optional[Match]:
        whole = self.span(pos, DIGITS, "digit", min_count=0)
        assert whole is not None
        dot = self.literal(whole.pos, ".")
        if dot is None:
            return None
        fraction = self.span(dot.pos, DIGITS, "digit", min_count=0)
        assert fraction is not None
        if not whole.value and not fraction.value:
            return None
        return Match(fraction.pos, self.text[pos : fraction.pos])

    def whitespace(self, pos: int) -> Optional[Match]:
        newline = self.newline(pos)
        if newline is not None:
            return Match(self._skip_space(newline.pos), {"TYPE": "whitespace"})

        spaces = self.span(pos, HORIZONTAL_SPACE, "whitespace")
        if spaces is None:
            return None
        newline = self.newline(spaces.pos)
        if newline is not None:
            end = self._skip_space(newline.pos)
            if not self.lookahead(end, self.newline):
                return Match(end, {"TYPE": "whitespace"})
        return Match(spaces.pos, {"TYPE": "whitespace"})

    def newline(self, pos: int) -> Optional[Match]:
        if self.text.startswith("\r\n", pos):
            return Match(pos + 2, "\r\n")
        return self.char_in(pos, NEWLINE_CHARACTERS, "newline")

    def text_run(self, pos: int) -> Optional[Match]:
        return self.span(pos, _Excluding(NONCHAR_CHARACTERS), "text")

    def args_run(self, pos: int) -> Optional[Match]:
        return self.span(pos, _Excluding(_ARGS_NONCHAR), "text")

    def _skip_space(self, pos: int) -> int:
        while pos < self.length and self.text[pos] in HORIZONTAL_SPACE:
            pos += 1
        return pos

    def _skip_whitespace_tokens(self, pos: int) -> int:
        match = self.many(pos, self.whitespace)
        assert match is not None
        return match.pos


class _Excluding:
    """Membership test matching every character except the given ones."""

    __slots__ = ("excluded",)

    def __init__(self, excluded: frozenset[str]):
        self.excluded = excluded

    def __contains__(self, char: object) -> bool:
        return char not in self.excluded


class _EnvNameChars(_Excluding):
    def __init__(self) -> None:
        super().__init__(frozenset({BEGIN_GROUP, END_GROUP}))


def parse_raw(text: str) -> list[RawNode]:
    """Parse LaTeX source into the raw tree.

    Parameters
    ----------
    text : str
        LaTeX source

    Returns
    -------
    list
        Raw token sequence of the document

    Raises
    ------
    LatexSyntaxError
        If the source cannot be derived from the grammar.

    """
    logger.debug("Parsing %d characters of LaTeX", len(text))
    return LatexGrammar(text).parse_document()
