#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/ast/__init__.py
"""Typed syntax tree for LaTeX documents.

The module consists of several components:

- nodes: the closed set of node dataclasses
- visitors: the visitor base class every printer implements
- builder: conversion of the raw parse tree into nodes
- links: parent and sibling lookups computed on demand
- normalize: whitespace collapsing
- serialization: JSON view of a tree
- utils: traversal and in-place replacement helpers

Examples
--------
    >>> from latexfmt.ast import Macro, NodeList, StringNode, find_all
    >>> tree = NodeList([Macro("emph"), StringNode("x")])
    >>> [m.name for m in find_all(tree, Macro)]
    ['emph']

"""

from __future__ import annotations

from latexfmt.ast.builder import build_ast, build_document, build_node_list
from latexfmt.ast.links import TreeLinks, annotate
from latexfmt.ast.nodes import (
    NODE_TYPES,
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
    get_node_children,
    is_space_like,
)
from latexfmt.ast.normalize import ExcessSpaceRemover, remove_excess_space
from latexfmt.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from latexfmt.ast.utils import clone_node, find_all, replace_node, walk
from latexfmt.ast.visitors import NodeVisitor

__all__ = [
    "NODE_TYPES",
    "ArgList",
    "CommentEnv",
    "CommentNode",
    "DisplayMath",
    "Environment",
    "ExcessSpaceRemover",
    "Group",
    "InlineMath",
    "Macro",
    "MathEnv",
    "Node",
    "NodeList",
    "NodeVisitor",
    "Parbreak",
    "StringNode",
    "Subscript",
    "Superscript",
    "TreeLinks",
    "Verb",
    "Verbatim",
    "Whitespace",
    "annotate",
    "ast_to_dict",
    "ast_to_json",
    "build_ast",
    "build_document",
    "build_node_list",
    "clone_node",
    "dict_to_ast",
    "find_all",
    "get_node_children",
    "is_space_like",
    "json_to_ast",
    "remove_excess_space",
    "replace_node",
    "walk",
]
