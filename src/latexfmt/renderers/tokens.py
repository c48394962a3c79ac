#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/renderers/tokens.py
"""Token-stream printer with greedy line wrapping.

Printing happens in two steps. :class:`TokenBuilder` flattens the tree into
a list whose items are either literal strings or :class:`Directive` values.
:func:`render_tokens` then walks that list once, keeping track of the
indentation level, the length of the current line, how many no-wrap
regions are open and what kind of line break was emitted last.

Line breaks never stack. The start of the output counts as a paragraph
break, a ``NEWLINE`` at the start of a line does nothing and there is never
more than one blank line in a row. Indentation is only written when the
first string of a line arrives, so the indentation in effect at that moment
is the one used.

Examples
--------
    >>> from latexfmt import parse
    >>> from latexfmt.ast.normalize import remove_excess_space
    >>> tree = remove_excess_space(parse("a   b\\n\\n\\n\\nc"))
    >>> TokenRenderer().render_to_string(tree)
    'a b\\n\\nc'

"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence, Union

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
from latexfmt.constants import (
    COMMENT_START,
    ESCAPE,
    NEWLINE_MACROS,
    NON_WRAPPABLE_START,
    PARAGRAPH_MACROS,
    SUBSCRIPT,
    SUPERSCRIPT,
)
from latexfmt.exceptions import MalformedNodeError
from latexfmt.options.printers import TokenPrinterOptions
from latexfmt.renderers.base import BaseRenderer
from latexfmt.renderers.raw import RawRenderer, begin_tag, end_tag

logger = logging.getLogger(__name__)


class Directive(Enum):
    """Layout instructions interleaved with the literal strings of a token stream."""

    INDENT = "indent"
    END_INDENT = "end-indent"
    NO_WRAP = "no-wrap"
    END_NO_WRAP = "end-no-wrap"
    NEWLINE = "newline"
    ENSURE_NEWLINE = "ensure-newline"
    ENSURE_PARAGRAPH = "ensure-paragraph"
    PREFER_PARAGRAPH = "prefer-paragraph"
    PARAGRAPH_BREAK = "paragraph-break"
    SPACE = "space"


Token = Union[str, Directive]

_NEWLINE = "newline"
_PARAGRAPH = "paragraph"


def is_wrappable(token: str) -> bool:
    """Return True if a line may start with ``token``."""
    return bool(token) and token[0] not in NON_WRAPPABLE_START


def script_tokens(marker: str, base: Node, builder: "TokenBuilder") -> list[Token]:
    """Tokens for ``marker`` (``_`` or ``^``) applied to ``base``.

    A base that is a single character, bare or alone in braces, uses the
    short form ``x_y``. Any other group keeps its braces and everything
    else is wrapped in new ones.
    """
    if isinstance(base, StringNode) and len(base.content) == 1:
        return [marker + base.content]
    if isinstance(base, Group):
        inner = base.content.content
        if len(inner) == 1 and isinstance(inner[0], StringNode) and len(inner[0].content) == 1:
            return [marker + inner[0].content]
        return [marker] + base.accept(builder)
    return [marker + "{"] + base.accept(builder) + ["}"]


class TokenBuilder(NodeVisitor):
    """Visitor turning a tree into a flat token stream."""

    def __init__(self) -> None:
        self._raw = RawRenderer()

    def build(self, root: Node) -> list[Token]:
        """Return the token stream of ``root``."""
        return self._visit(root)

    def _visit(self, node: object) -> list[Token]:
        if not isinstance(node, Node):
            raise MalformedNodeError(f"Unknown node type: {type(node).__name__}", node=node)
        return node.accept(self)

    def _args(self, args: Optional[ArgList]) -> list[Token]:
        if args is None:
            return []
        return ["["] + args.accept(self) + ["]"]

    def visit_node_list(self, node: NodeList) -> list[Token]:
        tokens: list[Token] = []
        for child in node.content:
            tokens.extend(self._visit(child))
        return tokens

    def visit_string(self, node: StringNode) -> list[Token]:
        return [node.content]

    def visit_whitespace(self, node: Whitespace) -> list[Token]:
        return [Directive.SPACE]

    def visit_parbreak(self, node: Parbreak) -> list[Token]:
        return [Directive.ENSURE_PARAGRAPH]

    def visit_arg_list(self, node: ArgList) -> list[Token]:
        return self.visit_node_list(node.content)

    def visit_macro(self, node: Macro) -> list[Token]:
        tokens: list[Token] = []
        if node.name in NEWLINE_MACROS:
            tokens.append(Directive.ENSURE_NEWLINE)
        elif node.name in PARAGRAPH_MACROS:
            tokens.append(Directive.PREFER_PARAGRAPH)
        tokens.append(ESCAPE + node.name)
        return tokens + self._args(node.args)

    def visit_environment(self, node: Environment) -> list[Token]:
        if isinstance(node.content, str):
            body: list[Token] = [Directive.NO_WRAP, node.content, Directive.END_NO_WRAP]
        else:
            body = self._visit(node.content)
        return (
            [Directive.ENSURE_NEWLINE, begin_tag(node.env), Directive.INDENT]
            + self._args(node.args)
            + [Directive.NEWLINE]
            + body
            + [Directive.END_INDENT, Directive.NEWLINE, end_tag(node.env)]
        )

    def visit_math_env(self, node: MathEnv) -> list[Token]:
        return self.visit_environment(node)

    def visit_verbatim(self, node: Verbatim) -> list[Token]:
        return [Directive.NO_WRAP, node.accept(self._raw), Directive.END_NO_WRAP]

    def visit_comment_env(self, node: CommentEnv) -> list[Token]:
        text = node.accept(self._raw)
        return [Directive.NO_WRAP, text[:-1], Directive.END_NO_WRAP, Directive.NEWLINE]

    def visit_inline_math(self, node: InlineMath) -> list[Token]:
        return [Directive.NO_WRAP, "$"] + self._visit(node.content) + ["$", Directive.END_NO_WRAP]

    def visit_display_math(self, node: DisplayMath) -> list[Token]:
        return (
            [Directive.ENSURE_NEWLINE, ESCAPE + "[", Directive.INDENT, Directive.NEWLINE]
            + self._visit(node.content)
            + [Directive.END_INDENT, Directive.NEWLINE, ESCAPE + "]", Directive.NEWLINE]
        )

    def visit_group(self, node: Group) -> list[Token]:
        return [Directive.NO_WRAP, "{"] + self._visit(node.content) + ["}", Directive.END_NO_WRAP]

    def visit_subscript(self, node: Subscript) -> list[Token]:
        return script_tokens(SUBSCRIPT, node.content, self)

    def visit_superscript(self, node: Superscript) -> list[Token]:
        return script_tokens(SUPERSCRIPT, node.content, self)

    def visit_verb(self, node: Verb) -> list[Token]:
        return [Directive.NO_WRAP, node.accept(self._raw), Directive.END_NO_WRAP]

    def visit_comment(self, node: CommentNode) -> list[Token]:
        ending = Directive.PARAGRAPH_BREAK if node.suffix_parbreak else Directive.NEWLINE
        tokens: list[Token] = [COMMENT_START + node.content, ending]
        if not node.sameline:
            tokens.insert(0, Directive.ENSURE_NEWLINE)
        return tokens


class _TokenWriter:
    """Mutable state of a single :func:`render_tokens` pass."""

    def __init__(self, max_width: int, tab_width: int):
        self.max_width = max_width
        self.tab_width = tab_width
        self.parts: list[str] = []
        self.indent = 0
        self.nowrap = 0
        self.line_len = 0
        # the start of output behaves like a paragraph break
        self.last_break: Optional[str] = _PARAGRAPH

    def trim(self) -> None:
        while self.parts:
            stripped = self.parts[-1].rstrip(" \t")
            if stripped:
                self.parts[-1] = stripped
                return
            self.parts.pop()

    def newline(self) -> None:
        if self.last_break is not None:
            return
        self.trim()
        self.parts.append("\n")
        self.last_break = _NEWLINE

    def paragraph(self) -> None:
        if self.last_break == _PARAGRAPH:
            return
        self.trim()
        self.parts.append("\n" if self.last_break == _NEWLINE else "\n\n")
        self.last_break = _PARAGRAPH

    def space(self) -> None:
        if self.last_break is None:
            self.parts.append(" ")
            self.line_len += 1

    def text(self, token: str) -> None:
        first_line = token.split("\n", 1)[0]
        if (
            self.last_break is None
            and self.nowrap == 0
            and is_wrappable(token)
            and self.line_len > self.indent * self.tab_width
            and self.line_len + len(first_line) > self.max_width
        ):
            self.newline()

        if self.last_break is not None:
            self.parts.append("\t" * self.indent)
            self.line_len = self.indent * self.tab_width
            self.last_break = None

        self.parts.append(token)
        if "\n" in token:
            self.line_len = len(token.rsplit("\n", 1)[1])
        else:
            self.line_len += len(token)

    def apply(self, directive: Directive) -> None:
        if directive is Directive.INDENT:
            self.indent += 1
        elif directive is Directive.END_INDENT:
            self.indent = max(0, self.indent - 1)
        elif directive is Directive.NO_WRAP:
            self.nowrap += 1
        elif directive is Directive.END_NO_WRAP:
            self.nowrap = max(0, self.nowrap - 1)
        elif directive in (Directive.NEWLINE, Directive.ENSURE_NEWLINE):
            self.newline()
        elif directive in (Directive.ENSURE_PARAGRAPH, Directive.PARAGRAPH_BREAK):
            self.paragraph()
        elif directive is Directive.PREFER_PARAGRAPH:
            if self.last_break is None:
                self.paragraph()
        elif directive is Directive.SPACE:
            self.space()


def render_tokens(tokens: Sequence[Token], max_width: int = 60, tab_width: int = 8) -> str:
    """Render a token stream to text with greedy word wrapping.

    A string that would push the current line past ``max_width`` starts a
    new line instead, unless wrapping is suppressed by an open
    ``NO_WRAP``, the line holds nothing but indentation, or the string
    starts with punctuation such as ``.`` or ``}``. Trailing spaces and
    tabs are trimmed from every line, the last one included.

    Parameters
    ----------
    tokens : sequence of str or Directive
        Token stream, usually from :class:`TokenBuilder`
    max_width : int, default 60
        Wrapping column
    tab_width : int, default 8
        Width counted for each indentation tab

    Returns
    -------
    str
        The rendered text

    Raises
    ------
    MalformedNodeError
        If the stream holds something other than strings and directives.

    """
    writer = _TokenWriter(max_width, tab_width)
    for token in tokens:
        if isinstance(token, Directive):
            writer.apply(token)
        elif isinstance(token, str):
            if token:
                writer.text(token)
        else:
            raise MalformedNodeError(f"Invalid token in stream: {token!r}", node=token)
    writer.trim()
    return "".join(writer.parts)


class TokenRenderer(BaseRenderer):
    """Renderer combining :class:`TokenBuilder` and :func:`render_tokens`.

    Parameters
    ----------
    options : TokenPrinterOptions or None, default = None
        Wrapping width and tab width

    """

    def __init__(self, options: TokenPrinterOptions | None = None):
        BaseRenderer._validate_options_type(options, TokenPrinterOptions, "token")
        options = options or TokenPrinterOptions()
        BaseRenderer.__init__(self, options)
        self.options: TokenPrinterOptions = options

    def to_tokens(self, root: Node) -> list[Token]:
        """Return the token stream of ``root`` without rendering it."""
        return TokenBuilder().build(root)

    def render_to_string(self, root: Node) -> str:
        tokens = self.to_tokens(root)
        logger.debug("Rendering %d tokens at width %d", len(tokens), self.options.max_width)
        return render_tokens(tokens, self.options.max_width, self.options.tab_width)
