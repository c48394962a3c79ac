#  Copyright (c) 2025 Tom Villani, Ph.D.

# latexfmt/parsers/peg.py
"""Parsing-expression-grammar primitives.

Rules are plain callables taking a cursor (an integer offset into the
source) and returning a :class:`Match` holding the new cursor and the
produced value, or ``None`` when the rule does not apply. Nothing about the
cursor is stored on the parser, so ordered choice and backtracking amount
to calling the next alternative with the same cursor.

The only state kept on :class:`PegParser` is diagnostic: the furthest
offset at which a terminal failed and what was expected there. It is used
to build a :class:`~latexfmt.exceptions.LatexSyntaxError` once the top rule
gives up, and never influences which derivation is chosen.
"""

from __future__ import annotations

from collections.abc import Callable, Container
from typing import Any, NamedTuple, Optional

from latexfmt.exceptions import LatexSyntaxError, SourceLocation


class Match(NamedTuple):
    """Successful application of a rule."""

    pos: int
    value: Any


Rule = Callable[[int], Optional[Match]]

END_OF_INPUT = "end of input"


def describe_literal(text: str) -> str:
    """Quote ``text`` the way it is shown in syntax error messages."""
    escaped = text.encode("unicode_escape").decode("ascii").replace('"', '\\"')
    return f'"{escaped}"'


class PegParser:
    """Terminal matchers and combinators shared by concrete grammars.

    Parameters
    ----------
    text : str
        The complete source being parsed

    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self._fail_pos = 0
        self._fail_expected: set[str] = set()
        self._silent = 0

    # ------------------------------------------------------------------
    # Failure bookkeeping
    # ------------------------------------------------------------------

    def expect(self, pos: int, description: str) -> None:
        """Record that ``description`` was expected at ``pos``."""
        if self._silent or pos < self._fail_pos:
            return
        if pos > self._fail_pos:
            self._fail_pos = pos
            self._fail_expected = set()
        self._fail_expected.add(description)

    def syntax_error(self) -> LatexSyntaxError:
        """Build the error describing the furthest failure seen so far."""
        pos = self._fail_pos
        expected = sorted(self._fail_expected)
        found = self.text[pos] if pos < self.length else None

        if not expected:
            expected_text = "valid input"
        elif len(expected) == 1:
            expected_text = expected[0]
        else:
            expected_text = ", ".join(expected[:-1]) + " or " + expected[-1]
        found_text = describe_literal(found) if found is not None else END_OF_INPUT

        return LatexSyntaxError(
            f"Expected {expected_text} but {found_text} found.",
            expected=expected,
            found=found,
            location=SourceLocation.from_offset(self.text, pos),
        )

    def nesting_error(self) -> LatexSyntaxError:
        """Build the error raised when nesting exhausts the interpreter stack.

        The location is the furthest failure seen so far, which is close to
        the deepest point the parser reached.
        """
        pos = self._fail_pos
        found = self.text[pos] if pos < self.length else None
        return LatexSyntaxError(
            "Input is nested too deeply to parse.",
            expected=[],
            found=found,
            location=SourceLocation.from_offset(self.text, pos),
        )

    # ------------------------------------------------------------------
    # Terminals
    # ------------------------------------------------------------------

    def literal(self, pos: int, expected: str) -> Optional[Match]:
        """Match the exact string ``expected``."""
        if self.text.startswith(expected, pos):
            return Match(pos + len(expected), expected)
        self.expect(pos, describe_literal(expected))
        return None

    def char_in(self, pos: int, chars: Container[str], description: str) -> Optional[Match]:
        """Match one character belonging to ``chars``."""
        if pos < self.length and self.text[pos] in chars:
            return Match(pos + 1, self.text[pos])
        self.expect(pos, description)
        return None

    def char_not_in(self, pos: int, chars: Container[str], description: str) -> Optional[Match]:
        """Match one character that does not belong to ``chars``."""
        if pos < self.length and self.text[pos] not in chars:
            return Match(pos + 1, self.text[pos])
        self.expect(pos, description)
        return None

    def any_char(self, pos: int) -> Optional[Match]:
        """Match any single character."""
        if pos < self.length:
            return Match(pos + 1, self.text[pos])
        self.expect(pos, "any character")
        return None

    def span(self, pos: int, chars: Container[str], description: str, min_count: int = 1) -> Optional[Match]:
        """Match a run of characters from ``chars`` and return it as one string."""
        end = pos
        while end < self.length and self.text[end] in chars:
            end += 1
        if end - pos < min_count:
            self.expect(end, description)
            return None
        return Match(end, self.text[pos:end])

    def at_end(self, pos: int) -> bool:
        """Return True when ``pos`` is at end of input, recording the expectation otherwise."""
        if pos >= self.length:
            return True
        self.expect(pos, END_OF_INPUT)
        return False

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def choice(self, pos: int, *rules: Rule) -> Optional[Match]:
        """Return the first alternative that matches at ``pos``."""
        for rule in rules:
            match = rule(pos)
            if match is not None:
                return match
        return None

    def many(self, pos: int, rule: Rule, min_count: int = 0, until: Optional[Rule] = None) -> Optional[Match]:
        """Apply ``rule`` repeatedly, collecting its values.

        Parameters
        ----------
        pos : int
            Starting cursor
        rule : Rule
            The repeated rule
        min_count : int, default 0
            Fewest repetitions accepted
        until : Rule, optional
            Stop before any position where this rule matches. It is
            evaluated as a silent lookahead.

        Returns
        -------
        Match or None
            The cursor after the last repetition and the list of values.
            Values that are ``None`` are dropped.

        """
        values: list[Any] = []
        count = 0
        while True:
            if until is not None and self.lookahead(pos, until):
                break
            match = rule(pos)
            if match is None or match.pos == pos and match.value is None:
                break
            count += 1
            if match.value is not None:
                values.append(match.value)
            if match.pos == pos:
                break
            pos = match.pos
        if count < min_count:
            return None
        return Match(pos, values)

    def lookahead(self, pos: int, rule: Rule) -> bool:
        """Test ``rule`` at ``pos`` without consuming input or recording failures."""
        self._silent += 1
        try:
            return rule(pos) is not None
        finally:
            self._silent -= 1
