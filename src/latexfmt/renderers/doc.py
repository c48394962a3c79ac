#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/renderers/doc.py
"""Document IR for the layout printer.

A *doc* is either a plain string or one of the dataclasses below. Docs
describe text together with the places where it may be broken across
lines; :func:`latexfmt.renderers.doc_printer.print_doc_to_string` decides
which breaks to take.

Builders
--------
concat, join
    Sequences of docs
group, conditional_group
    Print flat if the contents fit on the line, broken otherwise
fill
    Word-wrap: alternating content and separator docs
indent, align, dedent_to_root, mark_as_root
    Increase or reset the indentation used after a break
line, softline, hardline, literalline
    Break points (a space, nothing, or a forced newline when flat)
if_break, line_suffix, line_suffix_boundary, break_parent, trim, cursor
    Less common layout controls

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union


@dataclass
class Concat:
    """Docs printed one after another."""

    parts: list["Doc"] = field(default_factory=list)


@dataclass
class Indent:
    """Contents printed with one more level of indentation after breaks."""

    contents: "Doc"


@dataclass
class Align:
    """Contents printed with extra alignment after breaks.

    Parameters
    ----------
    contents : Doc
        The aligned doc
    n : int, float or str
        Number of spaces, a literal alignment string, a negative number to
        drop the innermost indentation level, or ``float("-inf")`` to return
        to the root indentation
    root : bool, default False
        Mark the current indentation as the root for ``float("-inf")``
        alignments inside ``contents``

    """

    contents: "Doc"
    n: Union[int, float, str] = 0
    root: bool = False


@dataclass(eq=False)
class Group:
    """Contents printed flat when they fit, broken otherwise.

    ``should_break`` is set by :func:`propagate_breaks` when the contents
    contain a hard break. Groups compare by identity because that flag is
    mutated in place.

    """

    contents: "Doc"
    should_break: bool = False
    expanded_states: Optional[list["Doc"]] = None


@dataclass
class Fill:
    """Alternating content and separator docs, filled line by line."""

    parts: list["Doc"] = field(default_factory=list)


@dataclass
class IfBreak:
    """Docs chosen by whether the enclosing group is broken."""

    break_contents: Optional["Doc"] = None
    flat_contents: Optional["Doc"] = None


@dataclass
class LineSuffix:
    """Contents deferred until just before the next newline."""

    contents: "Doc"


@dataclass(frozen=True)
class LineSuffixBoundary:
    """Forces pending line suffixes out with a hard break."""


@dataclass(frozen=True)
class BreakParent:
    """Marks every enclosing group as broken."""


@dataclass(frozen=True)
class Line:
    """A break point.

    Flat, a plain line prints one space and a soft line prints nothing.
    A hard line always breaks. A literal line breaks without indenting.
    """

    soft: bool = False
    hard: bool = False
    literal: bool = False


@dataclass(frozen=True)
class Trim:
    """Removes trailing spaces and tabs from the current line."""


@dataclass(frozen=True)
class Cursor:
    """Placeholder whose output offset is reported by the printer."""


Doc = Union[str, Concat, Indent, Align, Group, Fill, IfBreak, LineSuffix, LineSuffixBoundary, BreakParent, Line, Trim, Cursor]


line = Line()
softline = Line(soft=True)
break_parent = BreakParent()
hardline = Concat([Line(hard=True), break_parent])
literalline = Concat([Line(hard=True, literal=True), break_parent])
line_suffix_boundary = LineSuffixBoundary()
trim = Trim()
cursor = Cursor()


def concat(parts: Sequence[Doc]) -> Concat:
    return Concat(list(parts))


def join(separator: Doc, docs: Sequence[Doc]) -> Concat:
    """Concatenate ``docs`` with ``separator`` between each pair."""
    parts: list[Doc] = []
    for index, doc in enumerate(docs):
        if index:
            parts.append(separator)
        parts.append(doc)
    return Concat(parts)


def indent(contents: Doc) -> Indent:
    return Indent(contents)


def align(n: Union[int, float, str], contents: Doc) -> Align:
    return Align(contents, n)


def dedent_to_root(contents: Doc) -> Align:
    """Print ``contents`` at the root indentation."""
    return Align(contents, float("-inf"))


def mark_as_root(contents: Doc) -> Align:
    """Make the current indentation the root for :func:`dedent_to_root`."""
    return Align(contents, 0, root=True)


def group(contents: Doc, should_break: bool = False, expanded_states: Optional[list[Doc]] = None) -> Group:
    return Group(contents, should_break=should_break, expanded_states=expanded_states)


def conditional_group(states: list[Doc], should_break: bool = False) -> Group:
    """Group trying each of ``states`` in order, from least to most expanded."""
    return Group(states[0], should_break=should_break, expanded_states=states)


def fill(parts: Sequence[Doc]) -> Fill:
    return Fill(list(parts))


def if_break(break_contents: Optional[Doc], flat_contents: Optional[Doc] = None) -> IfBreak:
    return IfBreak(break_contents, flat_contents)


def line_suffix(contents: Doc) -> LineSuffix:
    return LineSuffix(contents)


def add_alignment_to_doc(doc: Doc, size: int, tab_width: int) -> Doc:
    """Align ``doc`` to the absolute column ``size``.

    Whole tab stops become indentation levels and the remainder becomes
    space alignment, all relative to the root indentation.
    """
    if size <= 0:
        return doc
    aligned = doc
    for _ in range(size // tab_width):
        aligned = indent(aligned)
    aligned = align(size % tab_width, aligned)
    return dedent_to_root(aligned)
