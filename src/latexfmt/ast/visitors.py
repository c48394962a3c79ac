#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/ast/visitors.py
"""Visitor pattern base class for LaTeX AST traversal.

Every printer and tree pass in latexfmt is a :class:`NodeVisitor`. The
abstract methods cover the closed set of node types, so a visitor that
forgets a node type cannot be instantiated.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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
    NodeList,
    Parbreak,
    StringNode,
    Subscript,
    Superscript,
    Verb,
    Verbatim,
    Whitespace,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node type. Dispatch
    happens through :meth:`latexfmt.ast.nodes.Node.accept`.

    Examples
    --------
    Count macros in a document:

        >>> class MacroCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_macro(self, node):
        ...         self.count += 1
        ...     # remaining visit_* methods recurse or do nothing

    """

    @abstractmethod
    def visit_node_list(self, node: NodeList) -> Any:
        """Visit a NodeList node.

        Parameters
        ----------
        node : NodeList
            The node list to visit

        Returns
        -------
        Any
            Result of processing this node

        """

    @abstractmethod
    def visit_string(self, node: StringNode) -> Any:
        """Visit a StringNode."""

    @abstractmethod
    def visit_whitespace(self, node: Whitespace) -> Any:
        """Visit a Whitespace node."""

    @abstractmethod
    def visit_parbreak(self, node: Parbreak) -> Any:
        """Visit a Parbreak node."""

    @abstractmethod
    def visit_arg_list(self, node: ArgList) -> Any:
        """Visit an ArgList node."""

    @abstractmethod
    def visit_macro(self, node: Macro) -> Any:
        """Visit a Macro node.

        Parameters
        ----------
        node : Macro
            The macro to visit

        Returns
        -------
        Any
            Result of processing this node

        """

    @abstractmethod
    def visit_environment(self, node: Environment) -> Any:
        """Visit an Environment node with a parsed body.

        Parameters
        ----------
        node : Environment
            The environment to visit

        Returns
        -------
        Any
            Result of processing this node

        """

    @abstractmethod
    def visit_math_env(self, node: MathEnv) -> Any:
        """Visit a MathEnv node."""

    @abstractmethod
    def visit_verbatim(self, node: Verbatim) -> Any:
        """Visit a Verbatim node."""

    @abstractmethod
    def visit_comment_env(self, node: CommentEnv) -> Any:
        """Visit a CommentEnv node."""

    @abstractmethod
    def visit_inline_math(self, node: InlineMath) -> Any:
        """Visit an InlineMath node."""

    @abstractmethod
    def visit_display_math(self, node: DisplayMath) -> Any:
        """Visit a DisplayMath node."""

    @abstractmethod
    def visit_group(self, node: Group) -> Any:
        """Visit a Group node."""

    @abstractmethod
    def visit_subscript(self, node: Subscript) -> Any:
        """Visit a Subscript node."""

    @abstractmethod
    def visit_superscript(self, node: Superscript) -> Any:
        """Visit a Superscript node."""

    @abstractmethod
    def visit_verb(self, node: Verb) -> Any:
        """Visit a Verb node."""

    @abstractmethod
    def visit_comment(self, node: CommentNode) -> Any:
        """Visit a CommentNode."""
