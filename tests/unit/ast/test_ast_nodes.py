"""Unit tests for the LaTeX node classes."""

import pytest

from latexfmt.ast import (
    NODE_TYPES,
    ArgList,
    CommentEnv,
    Environment,
    Group,
    Macro,
    MathEnv,
    NodeList,
    NodeVisitor,
    Parbreak,
    StringNode,
    Subscript,
    Verbatim,
    Whitespace,
    get_node_children,
    is_space_like,
)


@pytest.mark.unit
class TestNodeEquality:
    """Test structural equality of nodes."""

    def test_equal_trees(self):
        """Test that trees with the same shape compare equal."""
        first = NodeList([Macro("a", ArgList(NodeList([StringNode("x")]))), Whitespace()])
        second = NodeList([Macro("a", ArgList(NodeList([StringNode("x")]))), Whitespace()])
        assert first == second

    def test_space_nodes(self):
        """Test that space nodes carry no data."""
        assert Whitespace() == Whitespace()
        assert Whitespace() != Parbreak()

    def test_environment_subclasses_differ(self):
        """Test that a MathEnv is not equal to a plain Environment."""
        assert MathEnv("equation", NodeList()) != Environment("equation", NodeList())

    def test_verbatim_defaults(self):
        """Test the defaults of the opaque environments."""
        assert Verbatim(content="x").env == "verbatim"
        assert CommentEnv(content="x").env == "comment"
        assert Verbatim().args is None


@pytest.mark.unit
class TestNodeList:
    """Test the sequence helpers of NodeList."""

    def test_sequence_protocol(self):
        """Test len, iteration and indexing."""
        nodes = NodeList([StringNode("a"), StringNode("b")])
        assert len(nodes) == 2
        assert [n.content for n in nodes] == ["a", "b"]
        assert nodes[1] == StringNode("b")
        assert nodes[:1] == [StringNode("a")]

    def test_splice(self):
        """Test that splice replaces a range and returns the removed nodes."""
        nodes = NodeList([StringNode("a"), Whitespace(), StringNode("b")])
        removed = nodes.splice(0, 2, [Macro("x")])
        assert removed == [StringNode("a"), Whitespace()]
        assert nodes == NodeList([Macro("x"), StringNode("b")])

    def test_splice_insert(self):
        """Test that an empty range inserts."""
        nodes = NodeList([StringNode("a")])
        assert nodes.splice(1, 1, [Parbreak()]) == []
        assert nodes == NodeList([StringNode("a"), Parbreak()])


@pytest.mark.unit
class TestNodeHelpers:
    """Test node tags and child access."""

    def test_node_types_registry(self):
        """Test that every tag maps to its class."""
        assert NODE_TYPES["macro"] is Macro
        assert NODE_TYPES["verbatim"] is Verbatim
        assert len(NODE_TYPES) == 17

    def test_is_space_like(self):
        """Test the space-like predicate."""
        assert is_space_like(Whitespace())
        assert is_space_like(Parbreak())
        assert not is_space_like(StringNode(" "))

    def test_children_of_environment(self):
        """Test that arguments come before the body."""
        args = ArgList(NodeList())
        body = NodeList([StringNode("x")])
        assert get_node_children(Environment("e", body, args)) == [args, body]

    def test_children_of_verbatim(self):
        """Test that a raw string body is not a child."""
        assert get_node_children(Verbatim(content="x")) == []

    def test_children_of_wrappers(self):
        """Test groups and scripts."""
        inner = NodeList([StringNode("y")])
        assert get_node_children(Group(inner)) == [inner]
        base = StringNode("i")
        assert get_node_children(Subscript(base)) == [base]
        assert get_node_children(StringNode("x")) == []


@pytest.mark.unit
class TestVisitorDispatch:
    """Test accept and the abstract visitor."""

    def test_incomplete_visitor_cannot_be_created(self):
        """Test that a visitor missing methods is abstract."""

        class OnlyMacros(NodeVisitor):
            def visit_macro(self, node):
                return node.name

        with pytest.raises(TypeError):
            OnlyMacros()

    def test_accept_calls_matching_method(self):
        """Test dispatch for environment specialisations."""
        names = {}
        for name in NodeVisitor.__abstractmethods__:
            names[name] = lambda self, node, name=name: name
        visitor = type("Recorder", (NodeVisitor,), names)()
        assert Macro("x").accept(visitor) == "visit_macro"
        assert MathEnv("align", NodeList()).accept(visitor) == "visit_math_env"
        assert Verbatim().accept(visitor) == "visit_verbatim"
        assert CommentEnv().accept(visitor) == "visit_comment_env"
        assert Environment("e", NodeList()).accept(visitor) == "visit_environment"
