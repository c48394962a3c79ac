#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/ast/serialization.py
"""JSON serialization and deserialization for LaTeX AST nodes.

The dictionary form is what ``latexfmt --dump-ast`` prints. Every node is
written as an object with a ``node_type`` key holding the class name and
one key per field; containers hold their children under ``content``.

Examples
--------
    >>> from latexfmt import parse
    >>> ast_to_dict(parse("x"))
    {'node_type': 'NodeList', 'content': [{'node_type': 'StringNode', 'content': 'x'}]}

"""

from __future__ import annotations

import json
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
from latexfmt.exceptions import ValidationError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _serialize_list(node: NodeList) -> dict[str, Any]:
    return {"node_type": "NodeList", "content": [ast_to_dict(child) for child in node.content]}


def _serialize_container(node: Any) -> dict[str, Any]:
    return {"node_type": type(node).__name__, "content": ast_to_dict(node.content)}


def _serialize_optional(node: Optional[Node]) -> Optional[dict[str, Any]]:
    return ast_to_dict(node) if node is not None else None


def _serialize_environment(node: Environment) -> dict[str, Any]:
    result: dict[str, Any] = {"node_type": type(node).__name__, "env": node.env}
    result["content"] = node.content if isinstance(node.content, str) else ast_to_dict(node.content)
    if not isinstance(node, (MathEnv, Verbatim, CommentEnv)):
        result["args"] = _serialize_optional(node.args)
    return result


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    NodeList: _serialize_list,
    StringNode: lambda n: {"node_type": "StringNode", "content": n.content},
    Whitespace: lambda n: {"node_type": "Whitespace"},
    Parbreak: lambda n: {"node_type": "Parbreak"},
    ArgList: _serialize_container,
    Macro: lambda n: {"node_type": "Macro", "name": n.name, "args": _serialize_optional(n.args)},
    Environment: _serialize_environment,
    MathEnv: _serialize_environment,
    Verbatim: _serialize_environment,
    CommentEnv: _serialize_environment,
    InlineMath: _serialize_container,
    DisplayMath: _serialize_container,
    Group: _serialize_container,
    Subscript: _serialize_container,
    Superscript: _serialize_container,
    Verb: lambda n: {"node_type": "Verb", "env": n.env, "escape": n.escape, "content": n.content},
    CommentNode: lambda n: {
        "node_type": "CommentNode",
        "content": n.content,
        "sameline": n.sameline,
        "suffix_parbreak": n.suffix_parbreak,
    },
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dictionary.

    Parameters
    ----------
    node : Node
        The AST node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValidationError
        If ``node`` is not one of the latexfmt node classes.

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer is None:
        raise ValidationError(
            f"Unknown node type for serialization: {type(node).__name__}",
            parameter_name="node",
            parameter_value=node,
        )
    return serializer(node)


def _content_list(data: dict[str, Any]) -> NodeList:
    content = data.get("content")
    if content is None:
        return NodeList()
    node = dict_to_ast(content)
    if not isinstance(node, NodeList):
        raise ValidationError(
            f"{data['node_type']} content must be a NodeList, got {type(node).__name__}",
            parameter_name="content",
            parameter_value=content,
        )
    return node


def _optional_args(data: dict[str, Any]) -> Optional[ArgList]:
    args = data.get("args")
    if args is None:
        return None
    node = dict_to_ast(args)
    if not isinstance(node, ArgList):
        raise ValidationError(
            f"args must be an ArgList, got {type(node).__name__}", parameter_name="args", parameter_value=args
        )
    return node


def _environment_body(data: dict[str, Any]) -> NodeList | str:
    content = data.get("content")
    if isinstance(content, str):
        return content
    return _content_list(data)


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any]], Node]] = {
    "NodeList": lambda d: NodeList([dict_to_ast(child) for child in d.get("content", [])]),
    "StringNode": lambda d: StringNode(d["content"]),
    "Whitespace": lambda d: Whitespace(),
    "Parbreak": lambda d: Parbreak(),
    "ArgList": lambda d: ArgList(_content_list(d)),
    "Macro": lambda d: Macro(d["name"], _optional_args(d)),
    "Environment": lambda d: Environment(d["env"], _environment_body(d), _optional_args(d)),
    "MathEnv": lambda d: MathEnv(d["env"], _content_list(d)),
    "Verbatim": lambda d: Verbatim(env=d.get("env", "verbatim"), content=d["content"]),
    "CommentEnv": lambda d: CommentEnv(content=d["content"]),
    "InlineMath": lambda d: InlineMath(_content_list(d)),
    "DisplayMath": lambda d: DisplayMath(_content_list(d)),
    "Group": lambda d: Group(_content_list(d)),
    "Subscript": lambda d: Subscript(dict_to_ast(d["content"])),
    "Superscript": lambda d: Superscript(dict_to_ast(d["content"])),
    "Verb": lambda d: Verb(d["content"], escape=d.get("escape", "|"), env=d.get("env", "verb")),
    "CommentNode": lambda d: CommentNode(
        d["content"],
        sameline=bool(d.get("sameline", True)),
        suffix_parbreak=bool(d.get("suffix_parbreak", False)),
    ),
}


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Convert a dictionary produced by :func:`ast_to_dict` back into a node.

    Parameters
    ----------
    data : dict
        Dictionary representation of a node

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    ValidationError
        If the dictionary has no or an unknown ``node_type``, or a required
        field is missing.

    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Expected a node dictionary, got {type(data).__name__}", parameter_name="data", parameter_value=data
        )

    node_type = data.get("node_type")
    if not node_type:
        raise ValidationError("Dictionary must contain 'node_type' field", parameter_name="node_type")

    deserializer = _DESERIALIZATION_DISPATCH.get(node_type)
    if deserializer is None:
        raise ValidationError(f"Unknown node type: {node_type}", parameter_name="node_type", parameter_value=node_type)

    try:
        return deserializer(data)
    except KeyError as e:
        raise ValidationError(
            f"{node_type} is missing required field {e}", parameter_name=str(e.args[0]), original_error=e
        ) from e


def ast_to_json(node: Node, indent: int | None = 2) -> str:
    """Serialize an AST node to a JSON string.

    The top-level object carries a ``schema_version`` key next to the node
    fields. Unicode is written unescaped.

    Parameters
    ----------
    node : Node
        The AST node to serialize
    indent : int or None, default = 2
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON text

    """
    node_dict = ast_to_dict(node)
    versioned = {"schema_version": SCHEMA_VERSION, **node_dict}
    return json.dumps(versioned, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str) -> Node:
    """Deserialize a JSON string produced by :func:`ast_to_json`.

    Parameters
    ----------
    json_str : str
        JSON text

    Returns
    -------
    Node
        Reconstructed AST node

    Raises
    ------
    ValidationError
        If the JSON is malformed, has an unsupported schema version or
        describes an unknown node type.

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid AST JSON: {e}", parameter_name="json_str", original_error=e) from e

    if not isinstance(data, dict):
        raise ValidationError("AST JSON must be an object", parameter_name="json_str")

    schema_version = data.pop("schema_version", None)
    if schema_version is None:
        logger.debug("No schema_version in AST JSON, assuming %d", SCHEMA_VERSION)
    elif schema_version != SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported schema version: {schema_version}",
            parameter_name="schema_version",
            parameter_value=schema_version,
        )
    return dict_to_ast(data)
