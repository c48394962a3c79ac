#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/ast/normalize.py
"""Whitespace normalization for parsed LaTeX trees.

LaTeX treats any amount of horizontal space as one space and any number of
blank lines as one paragraph break. The parser already folds single runs,
but a document can still contain adjacent Whitespace and Parbreak nodes
(``a \\n\\n b`` or a comment between two runs). :func:`remove_excess_space`
reduces every run to at most one node and removes space that carries no
meaning:

* space at the start or end of an environment body
* space directly before or after an environment

A run containing a Parbreak becomes that Parbreak, otherwise the first
Whitespace of the run is kept. The pass mutates the tree in place and is
idempotent.

"""

from __future__ import annotations

import logging
from typing import Optional

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
    is_space_like,
)
from latexfmt.ast.visitors import NodeVisitor

logger = logging.getLogger(__name__)


class ExcessSpaceRemover(NodeVisitor):
    """Visitor collapsing whitespace runs in every NodeList of a tree.

    Attributes
    ----------
    removed : int
        Number of space nodes dropped so far

    """

    def __init__(self) -> None:
        self.removed = 0

    def visit_node_list(self, node: NodeList) -> None:
        self._normalize(node, environment_body=False)

    def visit_environment(self, node: Environment) -> None:
        if node.args is not None:
            node.args.accept(self)
        if isinstance(node.content, NodeList):
            self._normalize(node.content, environment_body=True)

    def visit_math_env(self, node: MathEnv) -> None:
        self.visit_environment(node)

    def visit_arg_list(self, node: ArgList) -> None:
        node.content.accept(self)

    def visit_macro(self, node: Macro) -> None:
        if node.args is not None:
            node.args.accept(self)

    def visit_inline_math(self, node: InlineMath) -> None:
        node.content.accept(self)

    def visit_display_math(self, node: DisplayMath) -> None:
        node.content.accept(self)

    def visit_group(self, node: Group) -> None:
        node.content.accept(self)

    def visit_subscript(self, node: Subscript) -> None:
        node.content.accept(self)

    def visit_superscript(self, node: Superscript) -> None:
        node.content.accept(self)

    def visit_string(self, node: StringNode) -> None:
        pass

    def visit_whitespace(self, node: Whitespace) -> None:
        pass

    def visit_parbreak(self, node: Parbreak) -> None:
        pass

    def visit_verbatim(self, node: Verbatim) -> None:
        pass

    def visit_comment_env(self, node: CommentEnv) -> None:
        pass

    def visit_verb(self, node: Verb) -> None:
        pass

    def visit_comment(self, node: CommentNode) -> None:
        pass

    def _normalize(self, nodes: NodeList, environment_body: bool) -> None:
        content = nodes.content
        for child in content:
            child.accept(self)

        result: list[Node] = []
        count = len(content)
        start = 0
        while start < count:
            node = content[start]
            if not is_space_like(node):
                result.append(node)
                start += 1
                continue

            stop = start
            kept: Optional[Node] = None
            while stop < count and is_space_like(content[stop]):
                if kept is None or isinstance(content[stop], Parbreak) and not isinstance(kept, Parbreak):
                    kept = content[stop]
                stop += 1

            before = content[start - 1] if start > 0 else None
            after = content[stop] if stop < count else None
            at_edge = environment_body and (start == 0 or stop == count)
            if not at_edge and not isinstance(before, Environment) and not isinstance(after, Environment):
                assert kept is not None
                result.append(kept)
            start = stop

        self.removed += count - len(result)
        content[:] = result


def remove_excess_space(ast: Node) -> Node:
    """Collapse redundant whitespace and paragraph breaks in place.

    Parameters
    ----------
    ast : Node
        Root of the tree to normalize, usually the NodeList returned by
        :func:`latexfmt.parse`

    Returns
    -------
    Node
        The same ``ast`` object, mutated

    Examples
    --------
    >>> from latexfmt import parse, print_raw
    >>> print_raw(remove_excess_space(parse("a \\n\\n b")))
    'a\\n\\nb'

    """
    remover = ExcessSpaceRemover()
    ast.accept(remover)
    logger.debug("Removed %d redundant space nodes", remover.removed)
    return ast
