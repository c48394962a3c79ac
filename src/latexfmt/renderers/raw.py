#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/renderers/raw.py
"""Unformatted source rendering.

:class:`RawRenderer` writes every node back in its plain source form with
no wrapping, indentation or re-spacing. Both formatting printers use it for
nodes they treat as opaque (verbatim, comments), and reparsing its output
gives back an equal tree.

"""

from __future__ import annotations

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
from latexfmt.constants import COMMENT_START, ESCAPE, SUBSCRIPT, SUPERSCRIPT
from latexfmt.exceptions import MalformedNodeError
from latexfmt.renderers.base import BaseRenderer


def begin_tag(env: str) -> str:
    """Return ``\\begin{env}``."""
    return f"{ESCAPE}begin{{{env}}}"


def end_tag(env: str) -> str:
    """Return ``\\end{env}``."""
    return f"{ESCAPE}end{{{env}}}"


class RawRenderer(NodeVisitor, BaseRenderer):
    """Render nodes back to LaTeX source without any formatting.

    Examples
    --------
        >>> from latexfmt import parse
        >>> RawRenderer().render_to_string(parse(r"\\emph [x]{y}"))
        '\\\\emph[x]{y}'

    """

    def render_to_string(self, root: Node) -> str:
        if not isinstance(root, Node):
            raise MalformedNodeError(f"Cannot render {type(root).__name__}", node=root)
        return root.accept(self)

    def _children(self, nodes: NodeList) -> str:
        parts = []
        for child in nodes.content:
            if not isinstance(child, Node):
                raise MalformedNodeError(f"Unknown node type: {type(child).__name__}", node=child)
            parts.append(child.accept(self))
        return "".join(parts)

    def _args(self, args: ArgList | None) -> str:
        return args.accept(self) if args is not None else ""

    def visit_node_list(self, node: NodeList) -> str:
        return self._children(node)

    def visit_string(self, node: StringNode) -> str:
        return node.content

    def visit_whitespace(self, node: Whitespace) -> str:
        return " "

    def visit_parbreak(self, node: Parbreak) -> str:
        return "\n\n"

    def visit_arg_list(self, node: ArgList) -> str:
        return "[" + self._children(node.content) + "]"

    def visit_macro(self, node: Macro) -> str:
        return ESCAPE + node.name + self._args(node.args)

    def visit_environment(self, node: Environment) -> str:
        body = node.content if isinstance(node.content, str) else self._children(node.content)
        return begin_tag(node.env) + self._args(node.args) + body + end_tag(node.env)

    def visit_math_env(self, node: MathEnv) -> str:
        return self.visit_environment(node)

    def visit_verbatim(self, node: Verbatim) -> str:
        return begin_tag(node.env) + node.content + end_tag(node.env)

    def visit_comment_env(self, node: CommentEnv) -> str:
        # the line ending after \end{comment} belongs to the environment
        return begin_tag(node.env) + node.content + end_tag(node.env) + "\n"

    def visit_inline_math(self, node: InlineMath) -> str:
        return "$" + self._children(node.content) + "$"

    def visit_display_math(self, node: DisplayMath) -> str:
        return ESCAPE + "[" + self._children(node.content) + ESCAPE + "]"

    def visit_group(self, node: Group) -> str:
        return "{" + self._children(node.content) + "}"

    def visit_subscript(self, node: Subscript) -> str:
        return SUBSCRIPT + node.content.accept(self)

    def visit_superscript(self, node: Superscript) -> str:
        return SUPERSCRIPT + node.content.accept(self)

    def visit_verb(self, node: Verb) -> str:
        return ESCAPE + node.env + node.escape + node.content + node.escape

    def visit_comment(self, node: CommentNode) -> str:
        text = COMMENT_START + node.content + "\n"
        if node.suffix_parbreak:
            text += "\n"
        if not node.sameline:
            text = "\n" + text
        return text


def print_raw(node: Node) -> str:
    """Return the unformatted LaTeX source of ``node``.

    Parameters
    ----------
    node : Node
        Any node or tree

    Returns
    -------
    str
        Source text that parses back to an equal tree

    """
    return RawRenderer().render_to_string(node)
