#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/renderers/doc_printer.py
"""Layout algorithm turning a doc into text.

The printer keeps an explicit stack of commands, each holding the
indentation to use after a break, whether the doc is printed flat or
broken, and the doc itself. A group is printed flat when its contents, plus
everything already queued after it up to the next line break, fit in the
remaining width. A fill makes that decision separator by separator, which
produces ragged word-wrapped paragraphs.

Hard breaks inside a group break the group. :func:`propagate_breaks` marks
those groups before printing starts.

"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, NamedTuple, Optional, Union

from latexfmt.exceptions import MalformedNodeError
from latexfmt.options.printers import LayoutOptions
from latexfmt.renderers.doc import (
    Align,
    BreakParent,
    Concat,
    Cursor,
    Doc,
    Fill,
    Group,
    IfBreak,
    Indent,
    Line,
    LineSuffix,
    LineSuffixBoundary,
    Trim,
)

logger = logging.getLogger(__name__)


class Mode(Enum):
    BREAK = "break"
    FLAT = "flat"


class _IndentPart(NamedTuple):
    kind: str
    value: Union[int, str, None] = None


@dataclass(frozen=True)
class Indentation:
    """Indentation written after a line break.

    Attributes
    ----------
    value : str
        The characters written
    length : int
        Their display width, counting a tab as ``tab_width`` columns
    queue : tuple
        The indent and align steps that produced ``value``
    root : Indentation or None
        Indentation restored by ``dedent_to_root``

    """

    value: str = ""
    length: int = 0
    queue: tuple[_IndentPart, ...] = ()
    root: Optional["Indentation"] = None


class _FillTail(NamedTuple):
    """The parts of a fill from ``start`` on, without copying them."""

    fill: Fill
    start: int


class _Command(NamedTuple):
    indentation: Indentation
    mode: Mode
    doc: Any


class PrintResult(NamedTuple):
    """Output of :func:`print_doc_to_string`.

    Attributes
    ----------
    formatted : str
        The printed text
    cursor_offset : int or None
        Offset of the cursor placeholder in ``formatted``, if the doc held one

    """

    formatted: str
    cursor_offset: Optional[int] = None


def get_string_width(text: str) -> int:
    """Return the display width of ``text``.

    Wide and full-width East Asian characters count as two columns and
    combining marks as zero.
    """
    if text.isascii():
        return len(text)
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def _generate_indentation(ind: Indentation, part: _IndentPart, options: LayoutOptions) -> Indentation:
    queue = ind.queue[:-1] if part.kind == "dedent" else ind.queue + (part,)

    value: list[str] = []
    length = 0
    last_tabs = 0
    last_spaces = 0

    def add_tabs(count: int) -> None:
        nonlocal length
        value.append("\t" * count)
        length += options.tab_width * count

    def add_spaces(count: int) -> None:
        nonlocal length
        value.append(" " * count)
        length += count

    def flush() -> None:
        nonlocal last_tabs, last_spaces
        if options.use_tabs and last_tabs > 0:
            add_tabs(last_tabs)
        elif not options.use_tabs and last_spaces > 0:
            add_spaces(last_spaces)
        last_tabs = last_spaces = 0

    for item in queue:
        if item.kind == "indent":
            flush()
            if options.use_tabs:
                add_tabs(1)
            else:
                add_spaces(options.tab_width)
        elif item.kind == "string_align":
            flush()
            assert isinstance(item.value, str)
            value.append(item.value)
            length += len(item.value)
        elif item.kind == "number_align":
            assert isinstance(item.value, int)
            last_tabs += 1
            last_spaces += item.value

    # trailing number alignment is always written as spaces
    if last_spaces > 0:
        add_spaces(last_spaces)

    return replace(ind, value="".join(value), length=length, queue=queue)


def make_indent(ind: Indentation, options: LayoutOptions) -> Indentation:
    return _generate_indentation(ind, _IndentPart("indent"), options)


def make_align(ind: Indentation, doc: Align, options: LayoutOptions) -> Indentation:
    n = doc.n
    if doc.root:
        return replace(ind, root=ind)
    if isinstance(n, str):
        return _generate_indentation(ind, _IndentPart("string_align", n), options) if n else ind
    if n == float("-inf"):
        return ind.root or Indentation()
    if n < 0:
        return _generate_indentation(ind, _IndentPart("dedent"), options)
    if not n:
        return ind
    return _generate_indentation(ind, _IndentPart("number_align", int(n)), options)


def _trim(out: list[Any]) -> int:
    """Strip trailing spaces and tabs from ``out`` and return how many were removed."""
    trimmed = 0
    while out and isinstance(out[-1], str):
        stripped = out[-1].rstrip(" \t")
        trimmed += len(out[-1]) - len(stripped)
        if stripped:
            out[-1] = stripped
            break
        out.pop()
    return trimmed


def _children(doc: Any) -> list[Any]:
    if isinstance(doc, Concat):
        return doc.parts
    if isinstance(doc, Fill):
        return doc.parts
    if isinstance(doc, (Indent, Align, LineSuffix)):
        return [doc.contents]
    if isinstance(doc, Group):
        return list(doc.expanded_states) if doc.expanded_states else [doc.contents]
    if isinstance(doc, IfBreak):
        return [d for d in (doc.break_contents, doc.flat_contents) if d is not None]
    return []


def propagate_breaks(doc: Doc) -> None:
    """Mark every group containing a hard break (or a broken group) as broken.

    Groups with ``expanded_states`` are left alone; the printer chooses
    among their states instead.
    """
    group_stack: list[Group] = []
    visited: set[int] = set()
    # (doc, exiting) pairs; groups are exited after their contents
    stack: list[tuple[Any, bool]] = [(doc, False)]

    def break_parent_group() -> None:
        if group_stack and not group_stack[-1].expanded_states:
            group_stack[-1].should_break = True

    while stack:
        current, exiting = stack.pop()
        if exiting:
            finished = group_stack.pop()
            if finished.should_break:
                break_parent_group()
            continue

        if isinstance(current, BreakParent):
            break_parent_group()
        elif isinstance(current, Group):
            group_stack.append(current)
            stack.append((current, True))
            if id(current) in visited:
                continue
            visited.add(id(current))

        for child in reversed(_children(current)):
            stack.append((child, False))


def _fill_parts(doc: Any) -> tuple[list[Any], int]:
    if isinstance(doc, _FillTail):
        return doc.fill.parts, doc.start
    return doc.parts, 0


def _fits(
    next_command: _Command,
    rest_commands: list[_Command],
    width: float,
    options: LayoutOptions,
    must_be_flat: bool = False,
) -> bool:
    """Return True if ``next_command`` fits in ``width`` columns.

    The queued ``rest_commands`` are measured too, from the top of the
    stack down, until the first line break.
    """
    rest_index = len(rest_commands)
    commands = [next_command]
    out: list[str] = []
    while width >= 0:
        if not commands:
            if rest_index == 0:
                return True
            rest_index -= 1
            commands.append(rest_commands[rest_index])
            continue

        ind, mode, doc = commands.pop()
        if isinstance(doc, str):
            out.append(doc)
            width -= get_string_width(doc)
        elif isinstance(doc, Concat):
            for part in reversed(doc.parts):
                commands.append(_Command(ind, mode, part))
        elif isinstance(doc, (Fill, _FillTail)):
            parts, start = _fill_parts(doc)
            for part in reversed(parts[start:]):
                commands.append(_Command(ind, mode, part))
        elif isinstance(doc, Indent):
            commands.append(_Command(make_indent(ind, options), mode, doc.contents))
        elif isinstance(doc, Align):
            commands.append(_Command(make_align(ind, doc, options), mode, doc.contents))
        elif isinstance(doc, Trim):
            width += _trim(out)
        elif isinstance(doc, Group):
            if must_be_flat and doc.should_break:
                return False
            commands.append(_Command(ind, Mode.BREAK if doc.should_break else mode, doc.contents))
        elif isinstance(doc, IfBreak):
            contents = doc.break_contents if mode is Mode.BREAK else doc.flat_contents
            if contents is not None:
                commands.append(_Command(ind, mode, contents))
        elif isinstance(doc, Line):
            if mode is Mode.BREAK or doc.hard:
                return True
            if not doc.soft:
                out.append(" ")
                width -= 1
    return False


class _DocPrinter:
    """State of a single :func:`print_doc_to_string` run."""

    _CURSOR = object()

    def __init__(self, options: LayoutOptions):
        self.options = options
        self.width = options.print_width
        self.pos = 0
        self.out: list[Any] = []
        self.commands: list[_Command] = []
        self.should_remeasure = False
        self.line_suffix: list[_Command] = []

    def run(self, doc: Doc) -> PrintResult:
        self.commands.append(_Command(Indentation(), Mode.BREAK, doc))
        while self.commands:
            self._step(self.commands.pop())
            if not self.commands and self.line_suffix:
                self.commands.extend(reversed(self.line_suffix))
                self.line_suffix = []
        _trim(self.out)

        if self._CURSOR in self.out:
            index = self.out.index(self._CURSOR)
            before = "".join(self.out[:index])
            after = "".join(part for part in self.out[index + 1 :] if part is not self._CURSOR)
            return PrintResult(before + after, len(before))
        return PrintResult("".join(self.out))

    def _step(self, command: _Command) -> None:
        ind, mode, doc = command
        if isinstance(doc, str):
            self.out.append(doc)
            self.pos += get_string_width(doc)
        elif isinstance(doc, Cursor):
            self.out.append(self._CURSOR)
        elif isinstance(doc, Concat):
            for part in reversed(doc.parts):
                self.commands.append(_Command(ind, mode, part))
        elif isinstance(doc, Indent):
            self.commands.append(_Command(make_indent(ind, self.options), mode, doc.contents))
        elif isinstance(doc, Align):
            self.commands.append(_Command(make_align(ind, doc, self.options), mode, doc.contents))
        elif isinstance(doc, Trim):
            self.pos -= _trim(self.out)
        elif isinstance(doc, Group):
            self._print_group(ind, mode, doc)
        elif isinstance(doc, (Fill, _FillTail)):
            self._print_fill(ind, mode, doc)
        elif isinstance(doc, IfBreak):
            contents = doc.break_contents if mode is Mode.BREAK else doc.flat_contents
            if contents is not None:
                self.commands.append(_Command(ind, mode, contents))
        elif isinstance(doc, LineSuffix):
            self.line_suffix.append(_Command(ind, mode, doc.contents))
        elif isinstance(doc, LineSuffixBoundary):
            if self.line_suffix:
                self.commands.append(_Command(ind, mode, Line(hard=True)))
        elif isinstance(doc, Line):
            self._print_line(ind, mode, doc)
        elif isinstance(doc, BreakParent):
            pass
        else:
            raise MalformedNodeError(f"Unexpected doc type: {type(doc).__name__}", node=doc)

    def _print_group(self, ind: Indentation, mode: Mode, doc: Group) -> None:
        if mode is Mode.FLAT and not self.should_remeasure:
            self.commands.append(_Command(ind, Mode.BREAK if doc.should_break else Mode.FLAT, doc.contents))
            return

        self.should_remeasure = False
        flat = _Command(ind, Mode.FLAT, doc.contents)
        remaining = self.width - self.pos
        if not doc.should_break and _fits(flat, self.commands, remaining, self.options):
            self.commands.append(flat)
            return

        if not doc.expanded_states:
            self.commands.append(_Command(ind, Mode.BREAK, doc.contents))
            return

        most_expanded = doc.expanded_states[-1]
        if doc.should_break:
            self.commands.append(_Command(ind, Mode.BREAK, most_expanded))
            return
        for state in doc.expanded_states[1:-1]:
            candidate = _Command(ind, Mode.FLAT, state)
            if _fits(candidate, self.commands, remaining, self.options):
                self.commands.append(candidate)
                return
        self.commands.append(_Command(ind, Mode.BREAK, most_expanded))

    def _print_fill(self, ind: Indentation, mode: Mode, doc: Union[Fill, _FillTail]) -> None:
        parts, start = _fill_parts(doc)
        count = len(parts) - start
        if count <= 0:
            return

        remaining = self.width - self.pos
        content = parts[start]
        content_flat = _Command(ind, Mode.FLAT, content)
        content_break = _Command(ind, Mode.BREAK, content)
        content_fits = _fits(content_flat, [], remaining, self.options, must_be_flat=True)

        if count == 1:
            self.commands.append(content_flat if content_fits else content_break)
            return

        whitespace = parts[start + 1]
        whitespace_flat = _Command(ind, Mode.FLAT, whitespace)
        whitespace_break = _Command(ind, Mode.BREAK, whitespace)

        if count == 2:
            if content_fits:
                self.commands.extend([whitespace_flat, content_flat])
            else:
                self.commands.extend([whitespace_break, content_break])
            return

        fill = doc.fill if isinstance(doc, _FillTail) else doc
        rest = _Command(ind, mode, _FillTail(fill, start + 2))
        pair = _Command(ind, Mode.FLAT, Concat([content, whitespace, parts[start + 2]]))
        if _fits(pair, [], remaining, self.options, must_be_flat=True):
            self.commands.extend([rest, whitespace_flat, content_flat])
        elif content_fits:
            self.commands.extend([rest, whitespace_break, content_flat])
        else:
            self.commands.extend([rest, whitespace_break, content_break])

    def _print_line(self, ind: Indentation, mode: Mode, doc: Line) -> None:
        if mode is Mode.FLAT and not doc.hard:
            if not doc.soft:
                self.out.append(" ")
                self.pos += 1
            return
        if mode is Mode.FLAT:
            self.should_remeasure = True

        if self.line_suffix:
            self.commands.append(_Command(ind, mode, doc))
            self.commands.extend(reversed(self.line_suffix))
            self.line_suffix = []
            return

        if doc.literal:
            if ind.root is not None:
                self.out.extend(["\n", ind.root.value])
                self.pos = ind.root.length
            else:
                self.out.append("\n")
                self.pos = 0
        else:
            _trim(self.out)
            self.out.append("\n" + ind.value)
            self.pos = ind.length


def _resolve_options(options: Union[LayoutOptions, Mapping[str, Any], None]) -> LayoutOptions:
    if options is None:
        return LayoutOptions()
    if isinstance(options, LayoutOptions):
        return options
    return LayoutOptions.from_mapping(options)


def print_doc_to_string(doc: Doc, options: Union[LayoutOptions, Mapping[str, Any], None] = None) -> PrintResult:
    """Lay out ``doc`` and return the resulting text.

    Parameters
    ----------
    doc : Doc
        Document to print. Groups inside it may have ``should_break`` set
        by this call.
    options : LayoutOptions, mapping or None
        Width and indentation settings. A mapping may use ``printWidth``
        style keys.

    Returns
    -------
    PrintResult
        The text and, if the doc contained :data:`~latexfmt.renderers.doc.cursor`,
        its offset

    Raises
    ------
    ValidationError
        If ``options`` is a mapping holding invalid values.
    MalformedNodeError
        If ``doc`` contains a value that is not a doc.

    Examples
    --------
    >>> from latexfmt.renderers.doc import group, indent, line, concat
    >>> doc = group(concat(["a", indent(concat([line, "b"]))]))
    >>> print_doc_to_string(doc, {"printWidth": 80}).formatted
    'a b'
    >>> print_doc_to_string(doc, {"printWidth": 1, "useTabs": False, "tabWidth": 2}).formatted
    'a\\n  b'

    """
    resolved = _resolve_options(options)
    propagate_breaks(doc)
    return _DocPrinter(resolved).run(doc)
