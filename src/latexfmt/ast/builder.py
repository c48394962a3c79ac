#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/ast/builder.py
"""Conversion of the raw parse tree into typed AST nodes.

The grammar in :mod:`latexfmt.parsers.latex` produces plain strings, lists
and ``"TYPE"``-tagged dictionaries. :func:`build_ast` maps them one to one
onto the classes in :mod:`latexfmt.ast.nodes`. Nothing from the raw tree is
shared with the result, so the raw tree can be discarded afterwards.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

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
from latexfmt.exceptions import MalformedNodeError

logger = logging.getLogger(__name__)


def _node_list(raw: Any) -> NodeList:
    if raw is None:
        return NodeList()
    if isinstance(raw, list):
        return build_node_list(raw)
    node = build_ast(raw)
    return NodeList([node] if node is not None else [])


def _arg_list(raw: Any) -> Optional[ArgList]:
    node = build_ast(raw)
    if node is None:
        return None
    if not isinstance(node, ArgList):
        raise MalformedNodeError(f"Expected an argument list, got {type(node).__name__}", node=node)
    return node


def _script_base(raw: dict[str, Any]) -> Node:
    node = build_ast(raw.get("content"))
    if node is None:
        raise MalformedNodeError(f"{raw['TYPE']} without a base")
    return node


_BUILDERS: dict[str, Callable[[dict[str, Any]], Node]] = {
    "whitespace": lambda raw: Whitespace(),
    "parbreak": lambda raw: Parbreak(),
    "subscript": lambda raw: Subscript(_script_base(raw)),
    "superscript": lambda raw: Superscript(_script_base(raw)),
    "inlinemath": lambda raw: InlineMath(_node_list(raw.get("content"))),
    "displaymath": lambda raw: DisplayMath(_node_list(raw.get("content"))),
    "group": lambda raw: Group(_node_list(raw.get("content"))),
    "arglist": lambda raw: ArgList(_node_list(raw.get("content"))),
    "mathenv": lambda raw: MathEnv(raw["env"], _node_list(raw.get("content"))),
    "macro": lambda raw: Macro(raw["content"], _arg_list(raw.get("args"))),
    "environment": lambda raw: Environment(
        raw["env"],
        _node_list(raw.get("content")),
        _arg_list(raw.get("args")),
    ),
    "verbatim": lambda raw: Verbatim(env=raw.get("env", "verbatim"), content=raw["content"]),
    "commentenv": lambda raw: CommentEnv(content=raw["content"]),
    "verb": lambda raw: Verb(raw["content"], escape=raw.get("escape", "|"), env=raw.get("env", "verb")),
    "comment": lambda raw: CommentNode(
        raw["content"],
        sameline=bool(raw.get("sameline", True)),
        suffix_parbreak=bool(raw.get("suffix_parbreak", False)),
    ),
}


def build_node_list(raw: list[Any]) -> NodeList:
    """Convert a raw token sequence into a NodeList, dropping absent entries."""
    nodes = []
    for item in raw:
        node = build_ast(item)
        if node is not None:
            nodes.append(node)
    return NodeList(nodes)


def build_ast(raw: Any) -> Optional[Node]:
    """Convert a raw parse tree value into a typed node.

    Parameters
    ----------
    raw : str, list, dict or None
        A value produced by the grammar. Strings become StringNodes, lists
        become NodeLists and tagged dictionaries become the matching node
        class.

    Returns
    -------
    Node or None
        The typed node. ``None`` maps to ``None`` so that optional parts
        such as a missing argument list stay absent. Dictionaries carrying
        an unknown ``TYPE`` also map to ``None`` after a warning is logged.

    Raises
    ------
    MalformedNodeError
        If a known tag is missing a required field, or a value of an
        unsupported Python type is found.

    """
    if raw is None:
        return None
    if isinstance(raw, str):
        return StringNode(raw)
    if isinstance(raw, list):
        return build_node_list(raw)
    if isinstance(raw, dict):
        tag = raw.get("TYPE")
        builder = _BUILDERS.get(tag) if isinstance(tag, str) else None
        if builder is None:
            logger.warning("Ignoring raw node with unknown TYPE %r", tag)
            return None
        try:
            return builder(raw)
        except KeyError as e:
            raise MalformedNodeError(f"Raw {tag} node is missing field {e}", node=None) from e
    raise MalformedNodeError(f"Cannot build a node from {type(raw).__name__}")


def build_document(raw: list[Any]) -> NodeList:
    """Convert the raw output of :func:`latexfmt.parsers.parse_raw` into the document root."""
    root = build_node_list(raw)
    logger.debug("Built AST with %d top-level nodes", len(root))
    return root
