#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/ast/utils.py
"""Traversal and in-place editing helpers for LaTeX ASTs."""

from __future__ import annotations

import copy
from typing import Iterator, TypeVar

from latexfmt.ast.nodes import (
    ArgList,
    DisplayMath,
    Environment,
    Group,
    InlineMath,
    Macro,
    Node,
    NodeList,
    Subscript,
    Superscript,
    get_node_children,
)

N = TypeVar("N", bound=Node)


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants depth-first in document order.

    Examples
    --------
    >>> from latexfmt import parse
    >>> [type(n).__name__ for n in walk(parse("{a}"))]
    ['NodeList', 'Group', 'NodeList', 'StringNode']

    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_node_children(current)))


def find_all(node: Node, node_type: type[N]) -> list[N]:
    """Return every descendant of ``node`` (itself included) that is an instance of ``node_type``."""
    return [n for n in walk(node) if isinstance(n, node_type)]


def clone_node(node: N) -> N:
    """Return a deep copy of ``node`` sharing nothing with the original."""
    return copy.deepcopy(node)


def replace_node(root: Node, target: Node, replacement: Node) -> bool:
    """Replace ``target`` with ``replacement`` wherever it occurs under ``root``.

    Nodes are compared by identity, so only that exact object is replaced.
    Links from :func:`~latexfmt.ast.links.annotate` must be rebuilt
    afterwards.

    Parameters
    ----------
    root : Node
        Tree to search
    target : Node
        The node object to remove
    replacement : Node
        The node put in its place

    Returns
    -------
    bool
        True if ``target`` was found

    Raises
    ------
    ValueError
        If ``target`` is ``root``, or if it is the argument list or body
        of a node and ``replacement`` has the wrong type for that slot.

    """
    if target is root:
        raise ValueError("Cannot replace the root of the tree")

    found = False
    for node in list(walk(root)):
        if isinstance(node, NodeList):
            for index, child in enumerate(node.content):
                if child is target:
                    node.splice(index, index + 1, [replacement])
                    found = True
        elif isinstance(node, (Macro, Environment)) and node.args is target:
            if not isinstance(replacement, ArgList):
                raise ValueError("An argument list can only be replaced by another ArgList")
            node.args = replacement
            found = True
        elif isinstance(node, (Subscript, Superscript)) and node.content is target:
            node.content = replacement
            found = True
        elif isinstance(node, (Environment, ArgList, InlineMath, DisplayMath, Group)) and node.content is target:
            if not isinstance(replacement, NodeList):
                raise ValueError("A body can only be replaced by another NodeList")
            node.content = replacement
            found = True
    return found
