"""Unit tests for unformatted source rendering."""

import io

import pytest

from latexfmt import parse, print_raw
from latexfmt.ast import (
    ArgList,
    CommentEnv,
    CommentNode,
    DisplayMath,
    Environment,
    Group,
    InlineMath,
    Macro,
    NodeList,
    Parbreak,
    StringNode,
    Subscript,
    Superscript,
    Verb,
    Verbatim,
    Whitespace,
)
from latexfmt.exceptions import FileError, MalformedNodeError
from latexfmt.renderers import RawRenderer


@pytest.mark.unit
class TestPrintRaw:
    """Test the source form of each node."""

    def test_text_and_space(self):
        """Test strings, whitespace and paragraph breaks."""
        tree = NodeList([StringNode("a"), Whitespace(), StringNode("b"), Parbreak(), StringNode("c")])
        assert print_raw(tree) == "a b\n\nc"

    def test_macro_with_args(self):
        """Test that args print in brackets right after the name."""
        assert print_raw(Macro("item", ArgList(NodeList([StringNode("x")])))) == "\\item[x]"

    def test_environment(self):
        """Test a generic environment."""
        env = Environment("center", NodeList([StringNode("x")]), ArgList(NodeList([StringNode("o")])))
        assert print_raw(env) == "\\begin{center}[o]x\\end{center}"

    def test_verbatim(self):
        """Test that verbatim content is written untouched."""
        assert print_raw(Verbatim("verbatim*", " a\n b ")) == "\\begin{verbatim*} a\n b \\end{verbatim*}"

    def test_comment_environment_keeps_line_ending(self):
        """Test that a comment environment is followed by its newline."""
        assert print_raw(CommentEnv("comment", "x")) == "\\begin{comment}x\\end{comment}\n"

    def test_math(self):
        """Test inline and display math delimiters."""
        assert print_raw(InlineMath(NodeList([StringNode("x")]))) == "$x$"
        assert print_raw(DisplayMath(NodeList([StringNode("x")]))) == "\\[x\\]"

    def test_scripts_without_added_braces(self):
        """Test that script bases print exactly as stored."""
        assert print_raw(Subscript(StringNode("i"))) == "_i"
        assert print_raw(Superscript(Group(NodeList([StringNode("ij")])))) == "^{ij}"

    def test_verb(self):
        """Test the verb form with its delimiter."""
        assert print_raw(Verb("a b", escape="+", env="verb*")) == "\\verb*+a b+"

    def test_comments(self):
        """Test the line endings written for each comment flavour."""
        assert print_raw(CommentNode(" c")) == "% c\n"
        assert print_raw(CommentNode("c", suffix_parbreak=True)) == "%c\n\n"
        assert print_raw(CommentNode("c", sameline=False)) == "\n%c\n"

    def test_reparse_gives_equal_tree(self, sample_latex):
        """Test that the raw output of a parsed document parses to the same tree."""
        tree = parse(sample_latex)
        assert parse(print_raw(tree)) == tree


@pytest.mark.unit
class TestRawRenderer:
    """Test RawRenderer as a renderer."""

    def test_rejects_non_node(self):
        """Test that a non-node root raises MalformedNodeError."""
        with pytest.raises(MalformedNodeError):
            RawRenderer().render_to_string("text")

    def test_rejects_foreign_child(self):
        """Test that a foreign object inside a list is reported."""
        with pytest.raises(MalformedNodeError):
            print_raw(NodeList([StringNode("a"), 3]))

    def test_render_to_text_stream(self):
        """Test writing to a text stream."""
        stream = io.StringIO()
        RawRenderer().render(parse("a b"), stream)
        assert stream.getvalue() == "a b"

    def test_render_to_binary_stream(self):
        """Test writing UTF-8 to a binary stream."""
        stream = io.BytesIO()
        RawRenderer().render(parse("é"), stream)
        assert stream.getvalue() == "é".encode("utf-8")

    def test_render_to_path(self, tmp_path):
        """Test writing to a file path."""
        target = tmp_path / "out.tex"
        RawRenderer().render(parse("\\x"), target)
        assert target.read_text(encoding="utf-8") == "\\x"

    def test_unwritable_path(self, tmp_path):
        """Test that a path in a missing directory raises FileError."""
        with pytest.raises(FileError):
            RawRenderer().render(parse("x"), tmp_path / "missing" / "out.tex")
