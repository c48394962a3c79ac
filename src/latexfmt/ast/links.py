#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/ast/links.py
"""Parent and sibling links for a LaTeX AST.

Nodes do not store back-references. :func:`annotate` walks a tree once and
returns a :class:`TreeLinks` holding index maps keyed by node identity. The
maps describe the tree as it was when ``annotate`` ran; after any structural
change (normalization, :meth:`NodeList.splice`, :func:`replace_node`) call
``annotate`` again.

Examples
--------
    >>> from latexfmt import parse
    >>> root = parse(r"a \\emph b")
    >>> links = annotate(root)
    >>> macro = root[2]
    >>> links.parent(macro) is root
    True
    >>> links.previous(macro)
    Whitespace()

"""

from __future__ import annotations

import logging
from typing import Optional

from latexfmt.ast.nodes import Node, NodeList, get_node_children

logger = logging.getLogger(__name__)


class TreeLinks:
    """Derived parent, sibling and index relationships of a tree.

    Parameters
    ----------
    root : Node
        Root the links were computed from

    """

    def __init__(self, root: Node):
        self.root = root
        self._nodes: dict[int, Node] = {}
        self._parent: dict[int, int] = {}
        self._index: dict[int, int] = {}

    def _register(self, node: Node, parent: Optional[Node], index: Optional[int]) -> None:
        key = id(node)
        if key in self._nodes:
            raise ValueError(f"Node {node!r} appears more than once in the tree")
        self._nodes[key] = node
        if parent is not None:
            self._parent[key] = id(parent)
        if index is not None:
            self._index[key] = index

    def __contains__(self, node: object) -> bool:
        return id(node) in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def parent(self, node: Node) -> Optional[Node]:
        """Return the enclosing node, or None for the root.

        For a NodeList element this is the list itself. For the child of a
        wrapper (a script base, an argument list, an environment body) it is
        the wrapper.

        Raises
        ------
        KeyError
            If ``node`` was not part of the annotated tree.

        """
        key = self._key(node)
        parent_key = self._parent.get(key)
        return self._nodes[parent_key] if parent_key is not None else None

    def index(self, node: Node) -> Optional[int]:
        """Return the position of ``node`` in its NodeList, or None outside lists."""
        return self._index.get(self._key(node))

    def next(self, node: Node) -> Optional[Node]:
        """Return the following sibling in the enclosing NodeList."""
        return self._sibling(node, 1)

    def previous(self, node: Node) -> Optional[Node]:
        """Return the preceding sibling in the enclosing NodeList."""
        return self._sibling(node, -1)

    def siblings(self, node: Node) -> list[Node]:
        """Return every node of the enclosing NodeList, ``node`` included."""
        parent = self.parent(node)
        if isinstance(parent, NodeList) and self.index(node) is not None:
            return list(parent.content)
        return [node]

    def _sibling(self, node: Node, step: int) -> Optional[Node]:
        index = self.index(node)
        parent = self.parent(node)
        if index is None or not isinstance(parent, NodeList):
            return None
        target = index + step
        if 0 <= target < len(parent.content):
            return parent.content[target]
        return None

    def _key(self, node: Node) -> int:
        key = id(node)
        if key not in self._nodes:
            raise KeyError(f"{type(node).__name__} node is not part of the annotated tree")
        return key


def annotate(root: Node) -> TreeLinks:
    """Compute parent, sibling and index links for every node under ``root``.

    Parameters
    ----------
    root : Node
        Tree root, usually the NodeList returned by :func:`latexfmt.parse`

    Returns
    -------
    TreeLinks
        Links valid until the tree is next mutated

    Raises
    ------
    ValueError
        If the same node object occurs twice, which would make the
        structure a graph rather than a tree.

    """
    links = TreeLinks(root)
    links._register(root, None, None)
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        in_list = isinstance(node, NodeList)
        for index, child in enumerate(get_node_children(node)):
            links._register(child, node, index if in_list else None)
            stack.append(child)
    logger.debug("Annotated %d nodes", len(links))
    return links
