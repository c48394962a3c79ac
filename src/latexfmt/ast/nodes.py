#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/latexfmt/ast/nodes.py
"""AST node classes for LaTeX documents.

This module defines the closed set of node types a parsed LaTeX document is
made of. Every node supports the visitor pattern through ``accept``; the
printers, the normalizer and the serializer are all visitors, so adding a
node type means adding one abstract ``visit_*`` method that every visitor
must then implement.

Node Hierarchy
--------------
Containers:
    - NodeList (ordered sequence; the document root and every body)
    - Group, InlineMath, DisplayMath, ArgList

Commands and environments:
    - Macro
    - Environment, with the specialisations MathEnv, Verbatim, CommentEnv

Leaves:
    - StringNode, Whitespace, Parbreak, Verb, CommentNode

Script wrappers:
    - Subscript, Superscript (own exactly one child node)

Nodes never point back at their parents. Parent and sibling relationships
are derived on demand by :func:`latexfmt.ast.links.annotate`.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, Optional, Union, overload


class Node(ABC):
    """Base class for all AST nodes.

    Attributes
    ----------
    node_type : str
        Tag identifying the variant, e.g. ``"macro"``

    """

    node_type: ClassVar[str] = "node"

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the matching ``visit_*`` method

        """


@dataclass
class NodeList(Node):
    """Ordered sequence of nodes.

    The order of ``content`` is the rendered order. A NodeList is the root
    of every parsed document and the body of groups, math and environments.

    Parameters
    ----------
    content : list of Node, default = empty list
        The nodes in document order

    """

    node_type: ClassVar[str] = "nodelist"

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_node_list(self)

    def __len__(self) -> int:
        return len(self.content)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.content)

    @overload
    def __getitem__(self, index: int) -> Node: ...

    @overload
    def __getitem__(self, index: slice) -> list[Node]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Node, list[Node]]:
        return self.content[index]

    def splice(self, start: int, stop: int, replacement: list[Node]) -> list[Node]:
        """Replace ``content[start:stop]`` with ``replacement`` in place.

        Links computed by :func:`~latexfmt.ast.links.annotate` are stale
        afterwards and must be rebuilt.

        Parameters
        ----------
        start : int
            First index to replace
        stop : int
            Index one past the last replaced node
        replacement : list of Node
            Nodes inserted at ``start``

        Returns
        -------
        list of Node
            The removed nodes

        """
        removed = self.content[start:stop]
        self.content[start:stop] = replacement
        return removed


@dataclass
class StringNode(Node):
    """A run of literal characters.

    Parameters
    ----------
    content : str
        The characters, exactly as they appeared in the source

    """

    node_type: ClassVar[str] = "string"

    content: str

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_string(self)


@dataclass
class Whitespace(Node):
    """Horizontal whitespace or a single newline, collapsed to one space."""

    node_type: ClassVar[str] = "whitespace"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_whitespace(self)


@dataclass
class Parbreak(Node):
    """A paragraph break (one or more blank lines)."""

    node_type: ClassVar[str] = "parbreak"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_parbreak(self)


@dataclass
class ArgList(Node):
    """Contents of a ``[...]`` optional argument.

    Parameters
    ----------
    content : NodeList
        The tokens between the brackets, commas included as strings

    """

    node_type: ClassVar[str] = "arglist"

    content: NodeList = field(default_factory=NodeList)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_arg_list(self)


@dataclass
class Macro(Node):
    r"""A control sequence such as ``\emph`` or ``\\``.

    Parameters
    ----------
    name : str
        Command name without the leading backslash
    args : ArgList or None, default = None
        Optional ``[...]`` argument list directly following the name

    """

    node_type: ClassVar[str] = "macro"

    name: str
    args: Optional[ArgList] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_macro(self)


@dataclass
class Environment(Node):
    r"""A ``\begin{env} ... \end{env}`` construct.

    Parameters
    ----------
    env : str
        Environment name, identical in the begin and end tags
    content : NodeList or str
        Parsed body, or raw text for verbatim-like specialisations
    args : ArgList or None, default = None
        Optional argument list following ``\begin{env}``

    """

    node_type: ClassVar[str] = "environment"

    env: str
    content: Union[NodeList, str]
    args: Optional[ArgList] = None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_environment(self)


@dataclass
class MathEnv(Environment):
    """A named math environment such as ``align*``; never has arguments."""

    node_type: ClassVar[str] = "mathenv"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_math_env(self)


@dataclass
class Verbatim(Environment):
    """A ``verbatim`` environment whose body is kept byte for byte.

    Parameters
    ----------
    env : str, default = "verbatim"
        ``verbatim`` or ``verbatim*``
    content : str, default = ""
        The raw body

    """

    node_type: ClassVar[str] = "verbatim"

    env: str = "verbatim"
    content: str = ""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_verbatim(self)


@dataclass
class CommentEnv(Environment):
    """A ``comment`` environment. The newline after ``\\end{comment}`` belongs to it."""

    node_type: ClassVar[str] = "commentenv"

    env: str = "comment"
    content: str = ""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_comment_env(self)


@dataclass
class InlineMath(Node):
    """Inline math, written ``$...$`` or ``\\(...\\)`` in the source."""

    node_type: ClassVar[str] = "inlinemath"

    content: NodeList = field(default_factory=NodeList)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_inline_math(self)


@dataclass
class DisplayMath(Node):
    """Display math, written ``\\[...\\]`` or ``$$...$$`` in the source."""

    node_type: ClassVar[str] = "displaymath"

    content: NodeList = field(default_factory=NodeList)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_display_math(self)


@dataclass
class Group(Node):
    """A brace group ``{...}``. Printers never wrap lines inside it."""

    node_type: ClassVar[str] = "group"

    content: NodeList = field(default_factory=NodeList)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_group(self)


@dataclass
class Subscript(Node):
    """``_`` applied to exactly one base node.

    Parameters
    ----------
    content : Node
        The subscript base, often a Group or a single-character StringNode

    """

    node_type: ClassVar[str] = "subscript"

    content: Node

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_subscript(self)


@dataclass
class Superscript(Node):
    """``^`` applied to exactly one base node."""

    node_type: ClassVar[str] = "superscript"

    content: Node

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_superscript(self)


@dataclass
class Verb(Node):
    r"""Inline verbatim text ``\verb|...|``.

    Parameters
    ----------
    content : str
        Raw text between the delimiters
    escape : str, default = "|"
        The delimiter character
    env : str, default = "verb"
        ``verb`` or ``verb*``

    """

    node_type: ClassVar[str] = "verb"

    content: str
    escape: str = "|"
    env: str = "verb"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_verb(self)


@dataclass
class CommentNode(Node):
    """A ``%`` comment running to the end of its line.

    Parameters
    ----------
    content : str
        Text after the ``%``, without the line ending
    sameline : bool, default = True
        True when the comment follows other content on its line, False
        when it starts a line of its own
    suffix_parbreak : bool, default = False
        True when a blank line followed the comment

    """

    node_type: ClassVar[str] = "comment"

    content: str
    sameline: bool = True
    suffix_parbreak: bool = False

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_comment(self)


NODE_TYPES: dict[str, type[Node]] = {
    cls.node_type: cls
    for cls in (
        NodeList,
        StringNode,
        Whitespace,
        Parbreak,
        ArgList,
        Macro,
        Environment,
        MathEnv,
        Verbatim,
        CommentEnv,
        InlineMath,
        DisplayMath,
        Group,
        Subscript,
        Superscript,
        Verb,
        CommentNode,
    )
}


def is_space_like(node: Node) -> bool:
    """Return True for Whitespace and Parbreak nodes."""
    return isinstance(node, (Whitespace, Parbreak))


def get_node_children(node: Node) -> list[Node]:
    """Get the direct child nodes of ``node`` in document order.

    Argument lists come before environment bodies, matching the order in
    which they appear in the source. Raw string bodies are not nodes and
    are not returned.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        Child nodes (empty list for leaves)

    Examples
    --------
    >>> get_node_children(Macro("emph", ArgList(NodeList([StringNode("a")]))))
    [ArgList(content=NodeList(content=[StringNode(content='a')]))]

    """
    if isinstance(node, NodeList):
        return list(node.content)

    if isinstance(node, (Macro, Environment)):
        children: list[Node] = []
        if node.args is not None:
            children.append(node.args)
        if isinstance(node, Environment) and isinstance(node.content, NodeList):
            children.append(node.content)
        return children

    if isinstance(node, (ArgList, InlineMath, DisplayMath, Group)):
        return [node.content]

    if isinstance(node, (Subscript, Superscript)):
        return [node.content]

    return []
