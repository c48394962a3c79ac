#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/renderers/layout.py
"""Layout-engine renderer.

:class:`DocBuilder` turns a tree into a doc
(see :mod:`latexfmt.renderers.doc`) and :class:`LayoutRenderer` prints it
with :func:`~latexfmt.renderers.doc_printer.print_doc_to_string`.

The builder follows the same rules as the token printer. Breaks are not
written when they are requested. They are held back and written just before
the next piece of content, in whatever indentation region is open at that
point, so a break followed by ``\\end{x}`` lands at the indentation of the
``\\end``. Runs of text are collected into fills, whose separators are the
tree's whitespace, so paragraphs word-wrap instead of breaking all at once.

"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from latexfmt.ast.nodes import (
    ArgList,
    CommentEnv,
    CommentNode,
    DisplayMath,
    Environment,
    Group,
    InlineMath,
    Macro,
    MathEnv,
    Node,
    NodeList,
    Parbreak,
    StringNode,
    Subscript,
    Superscript,
    Verb,
    Verbatim,
    Whitespace,
)
from latexfmt.ast.visitors import NodeVisitor
from latexfmt.constants import COMMENT_START, ESCAPE, NEWLINE_MACROS, PARAGRAPH_MACROS, SUBSCRIPT, SUPERSCRIPT
from latexfmt.exceptions import MalformedNodeError
from latexfmt.options.printers import LayoutOptions
from latexfmt.renderers.base import BaseRenderer
from latexfmt.renderers.doc import (
    Doc,
    concat,
    fill,
    group,
    hardline,
    indent,
    join,
    line,
    line_suffix,
    literalline,
    softline,
)
from latexfmt.renderers.doc_printer import PrintResult, print_doc_to_string
from latexfmt.renderers.raw import RawRenderer, begin_tag, end_tag

logger = logging.getLogger(__name__)

_NEWLINE = "newline"
_PARAGRAPH = "paragraph"


class _Sink:
    """Docs collected for one region of the output."""

    def __init__(self, separator: Doc = " "):
        self.parts: list[Doc] = []
        self.separator = separator

    def add(self, doc: Doc) -> None:
        self.parts.append(doc)

    def space(self) -> None:
        self.parts.append(self.separator)

    def add_break(self, doc: Doc) -> None:
        self.parts.append(doc)

    def finish(self) -> Doc:
        return concat(self.parts)


class _FillSink(_Sink):
    """Collects a fill: whitespace ends the current content item."""

    def __init__(self) -> None:
        super().__init__(line)
        self.item: list[Doc] = []

    def add(self, doc: Doc) -> None:
        self.item.append(doc)

    def space(self) -> None:
        if not self.item:
            self.item.append(" ")
            return
        self.parts.extend([concat(self.item), line])
        self.item = []

    def add_break(self, doc: Doc) -> None:
        # breaks are separators, never part of a content item
        if self.item or not self.parts:
            self.parts.extend([concat(self.item), doc])
            self.item = []
        else:
            self.parts[-1] = doc

    def finish(self) -> Doc:
        return fill(self.parts + [concat(self.item)])


def literal_text(text: str) -> Doc:
    """Doc for opaque text, keeping its own line breaks unindented."""
    lines = text.split("\n")
    if len(lines) == 1:
        return text
    return join(literalline, lines)


class DocBuilder(NodeVisitor):
    """Visitor building the doc of a tree.

    Visit methods write into the innermost open region and return nothing;
    call :meth:`build` for the finished doc.
    """

    def __init__(self) -> None:
        self._raw = RawRenderer()
        self._sinks: list[_Sink] = []
        self._pending = 0
        self._last_break: Optional[str] = _PARAGRAPH
        self._nowrap = 0

    def build(self, root: Node) -> Doc:
        """Return the doc of ``root``."""
        self._sinks = [_Sink()]
        self._pending = 0
        self._last_break = _PARAGRAPH
        self._nowrap = 0
        self._visit(root)
        self._flush()
        return self._sinks[0].finish()

    def _visit(self, node: object) -> None:
        if not isinstance(node, Node):
            raise MalformedNodeError(f"Unknown node type: {type(node).__name__}", node=node)
        node.accept(self)

    # ------------------------------------------------------------------
    # Output primitives
    # ------------------------------------------------------------------

    def _flush(self) -> None:
        if self._pending:
            self._sinks[-1].add_break(concat([hardline] * self._pending))
        self._pending = 0

    def _emit(self, doc: Doc) -> None:
        if doc == "":
            return
        self._flush()
        self._sinks[-1].add(doc)
        self._last_break = None

    def _newline(self) -> None:
        if self._last_break is None:
            self._pending += 1
            self._last_break = _NEWLINE

    def _paragraph(self) -> None:
        if self._last_break == _PARAGRAPH:
            return
        self._pending += 1 if self._last_break == _NEWLINE else 2
        self._last_break = _PARAGRAPH

    def _space(self) -> None:
        if self._last_break is not None:
            return
        if self._nowrap:
            self._sinks[-1].add(" ")
        else:
            self._sinks[-1].space()

    def _open(self, sink: _Sink) -> None:
        self._sinks.append(sink)

    def _close_into(self, wrap: Callable[[Doc], Doc]) -> None:
        # appended as is: pending breaks stay pending for the enclosing region
        doc = self._sinks.pop().finish()
        self._sinks[-1].add(wrap(doc))

    def _args(self, args: Optional[ArgList]) -> None:
        if args is not None:
            self._visit(args)

    # ------------------------------------------------------------------
    # Visitors
    # ------------------------------------------------------------------

    def visit_node_list(self, node: NodeList) -> None:
        if self._nowrap:
            for child in node.content:
                self._visit(child)
            return
        self._open(_FillSink())
        for child in node.content:
            self._visit(child)
        self._close_into(lambda doc: doc)

    def visit_string(self, node: StringNode) -> None:
        self._emit(node.content)

    def visit_whitespace(self, node: Whitespace) -> None:
        self._space()

    def visit_parbreak(self, node: Parbreak) -> None:
        self._paragraph()

    def visit_arg_list(self, node: ArgList) -> None:
        self._open(_Sink())
        self._emit("[")
        self._open(_Sink(line))
        self._sinks[-1].add(softline)
        children = node.content.content
        for index, child in enumerate(children):
            self._visit(child)
            following = children[index + 1] if index + 1 < len(children) else None
            if (
                not self._nowrap
                and isinstance(child, StringNode)
                and child.content == ","
                and not isinstance(following, Whitespace)
            ):
                self._sinks[-1].add(softline)
        self._close_into(indent)
        self._emit("]")
        self._sinks[-1].add(softline)
        self._close_into(group)

    def visit_macro(self, node: Macro) -> None:
        if node.name in NEWLINE_MACROS:
            self._newline()
        elif node.name in PARAGRAPH_MACROS and self._last_break is None:
            self._paragraph()
        self._emit(ESCAPE + node.name)
        self._args(node.args)

    def visit_environment(self, node: Environment) -> None:
        self._newline()
        self._emit(begin_tag(node.env))
        self._open(_Sink())
        self._args(node.args)
        self._newline()
        if isinstance(node.content, str):
            self._emit(literal_text(node.content))
        else:
            self._visit(node.content)
        self._close_into(indent)
        self._newline()
        self._emit(end_tag(node.env))

    def visit_math_env(self, node: MathEnv) -> None:
        self.visit_environment(node)

    def visit_verbatim(self, node: Verbatim) -> None:
        self._emit(literal_text(node.accept(self._raw)))

    def visit_comment_env(self, node: CommentEnv) -> None:
        self._emit(literal_text(node.accept(self._raw)[:-1]))
        self._newline()

    def visit_inline_math(self, node: InlineMath) -> None:
        self._nowrap += 1
        self._emit("$")
        self._visit(node.content)
        self._emit("$")
        self._nowrap -= 1

    def visit_display_math(self, node: DisplayMath) -> None:
        self._newline()
        self._emit(ESCAPE + "[")
        self._open(_Sink())
        self._newline()
        self._visit(node.content)
        self._close_into(indent)
        self._newline()
        self._emit(ESCAPE + "]")
        self._newline()

    def visit_group(self, node: Group) -> None:
        self._nowrap += 1
        self._emit("{")
        self._visit(node.content)
        self._emit("}")
        self._nowrap -= 1

    def _script(self, marker: str, base: Node) -> None:
        if isinstance(base, StringNode) and len(base.content) == 1:
            self._emit(marker + base.content)
        elif isinstance(base, Group):
            inner = base.content.content
            if len(inner) == 1 and isinstance(inner[0], StringNode) and len(inner[0].content) == 1:
                self._emit(marker + inner[0].content)
            else:
                self._emit(marker)
                self._visit(base)
        else:
            self._emit(marker + "{")
            self._visit(base)
            self._emit("}")

    def visit_subscript(self, node: Subscript) -> None:
        self._script(SUBSCRIPT, node.content)

    def visit_superscript(self, node: Superscript) -> None:
        self._script(SUPERSCRIPT, node.content)

    def visit_verb(self, node: Verb) -> None:
        self._emit(node.accept(self._raw))

    def visit_comment(self, node: CommentNode) -> None:
        if not node.sameline:
            self._newline()
        self._emit(line_suffix(COMMENT_START + node.content))
        if node.suffix_parbreak:
            self._paragraph()
        else:
            self._newline()


class LayoutRenderer(BaseRenderer):
    """Renderer printing trees through the layout engine.

    Parameters
    ----------
    options : LayoutOptions or None, default = None
        Width and indentation settings

    Examples
    --------
        >>> from latexfmt import parse
        >>> LayoutRenderer().render_to_string(parse(r"\\begin{x}y\\end{x}"))
        '\\\\begin{x}\\n\\ty\\n\\\\end{x}'

    """

    def __init__(self, options: LayoutOptions | None = None):
        BaseRenderer._validate_options_type(options, LayoutOptions, "layout")
        options = options or LayoutOptions()
        BaseRenderer.__init__(self, options)
        self.options: LayoutOptions = options

    def to_doc(self, root: Node) -> Doc:
        """Return the doc of ``root`` without printing it."""
        return DocBuilder().build(root)

    def render_result(self, root: Node) -> PrintResult:
        """Print ``root`` and return the text together with the cursor offset."""
        doc = self.to_doc(root)
        logger.debug("Laying out document at width %d", self.options.print_width)
        return print_doc_to_string(doc, self.options)

    def render_to_string(self, root: Node) -> str:
        return self.render_result(root).formatted
