"""Unit tests for the token stream printer."""

import pytest

from latexfmt import parse, print_as_text
from latexfmt.ast import CommentNode, Group, Macro, NodeList, StringNode, Subscript, Superscript
from latexfmt.exceptions import InvalidOptionsError, MalformedNodeError
from latexfmt.options import LayoutOptions, TokenPrinterOptions
from latexfmt.renderers import Directive, TokenBuilder, TokenRenderer, render_tokens
from latexfmt.renderers.tokens import is_wrappable

D = Directive


@pytest.mark.unit
class TestRenderTokens:
    """Test render_tokens on hand-written streams."""

    def test_words_and_space(self):
        """Test that SPACE writes one space."""
        assert render_tokens(["a", D.SPACE, "b"]) == "a b"

    def test_greedy_wrap(self):
        """Test that a word that would overflow starts a new line."""
        tokens = ["aaaa", D.SPACE, "bbbb", D.SPACE, "cccc"]
        assert render_tokens(tokens, max_width=10) == "aaaa bbbb\ncccc"

    def test_no_wrap_before_punctuation(self):
        """Test that a line never starts with a period."""
        assert render_tokens(["aaaa", D.SPACE, "bbbb", "."], max_width=9) == "aaaa bbbb."

    def test_no_wrap_region(self):
        """Test that nothing wraps inside NO_WRAP."""
        tokens = [D.NO_WRAP, "aaaa", D.SPACE, "bbbb", D.END_NO_WRAP]
        assert render_tokens(tokens, max_width=5) == "aaaa bbbb"

    def test_long_word_at_line_start(self):
        """Test that an overlong word on an empty line is written anyway."""
        assert render_tokens(["a" * 12], max_width=5) == "a" * 12

    def test_paragraph_after_newline(self):
        """Test that a paragraph after a newline adds one more line break."""
        assert render_tokens(["a", D.NEWLINE, D.ENSURE_PARAGRAPH, "b"]) == "a\n\nb"

    def test_breaks_do_not_stack(self):
        """Test that repeated paragraph breaks produce one blank line."""
        tokens = ["a", D.ENSURE_PARAGRAPH, D.PARAGRAPH_BREAK, D.NEWLINE, "b"]
        assert render_tokens(tokens) == "a\n\nb"

    def test_start_of_output_is_a_paragraph(self):
        """Test that breaks at the very start are dropped."""
        assert render_tokens([D.NEWLINE, D.ENSURE_PARAGRAPH, "a"]) == "a"

    def test_indentation(self):
        """Test that indentation is written with tabs when a line starts."""
        tokens = ["x", D.INDENT, D.NEWLINE, "y", D.END_INDENT, D.NEWLINE, "z"]
        assert render_tokens(tokens) == "x\n\ty\nz"

    def test_indentation_counts_tab_width(self):
        """Test that an indentation tab uses tab_width columns."""
        tokens = [D.INDENT, "aaaa", D.SPACE, "bb"]
        assert render_tokens(tokens, max_width=10, tab_width=8) == "\taaaa\n\tbb"

    def test_prefer_paragraph(self):
        """Test that PREFER_PARAGRAPH only acts mid-line."""
        assert render_tokens(["a", D.PREFER_PARAGRAPH, "b"]) == "a\n\nb"
        assert render_tokens(["a", D.NEWLINE, D.PREFER_PARAGRAPH, "b"]) == "a\nb"

    def test_space_after_break_skipped(self):
        """Test that a line never starts with a space."""
        assert render_tokens(["a", D.NEWLINE, D.SPACE, "b"]) == "a\nb"

    def test_trailing_space_trimmed(self):
        """Test that spaces before a break are removed."""
        assert render_tokens(["a", D.SPACE, D.NEWLINE, "b"]) == "a\nb"

    def test_trailing_space_trimmed_at_end(self):
        """Test that a space at the end of the stream is not written."""
        assert render_tokens(["a", D.SPACE]) == "a"

    def test_multiline_token_resets_line_length(self):
        """Test that the length after a multi-line token is its last line."""
        tokens = ["xxxxxxxx\ny", D.SPACE, "zz"]
        assert render_tokens(tokens, max_width=5) == "xxxxxxxx\ny zz"

    def test_empty_string_ignored(self):
        """Test that empty strings do not end a line break."""
        assert render_tokens(["a", D.NEWLINE, "", D.SPACE, "b"]) == "a\nb"

    def test_invalid_token(self):
        """Test that a foreign token raises MalformedNodeError."""
        with pytest.raises(MalformedNodeError):
            render_tokens(["a", 3])

    @pytest.mark.parametrize("token,expected", [("word", True), (".", False), ("}", False), ("", False)])
    def test_is_wrappable(self, token, expected):
        """Test which tokens may start a line."""
        assert is_wrappable(token) is expected


@pytest.mark.unit
class TestTokenBuilder:
    """Test the token stream built from trees."""

    def test_newline_macro(self):
        """Test that \\usepackage starts on a fresh line."""
        tokens = TokenBuilder().build(parse("\\usepackage{x}"))
        assert tokens == [D.ENSURE_NEWLINE, "\\usepackage", D.NO_WRAP, "{", "x", "}", D.END_NO_WRAP]

    def test_paragraph_macro(self):
        """Test that \\item prefers a new paragraph."""
        assert TokenBuilder().build(Macro("item")) == [D.PREFER_PARAGRAPH, "\\item"]

    def test_short_script(self):
        """Test that one-character bases use the short form."""
        assert TokenBuilder().build(Subscript(Group(NodeList([StringNode("y")])))) == ["_y"]
        assert TokenBuilder().build(Superscript(StringNode("2"))) == ["^2"]

    def test_long_script_keeps_group(self):
        """Test that longer groups keep their braces."""
        tokens = TokenBuilder().build(Subscript(Group(NodeList([StringNode("yz")]))))
        assert tokens == ["_", D.NO_WRAP, "{", "yz", "}", D.END_NO_WRAP]

    def test_script_macro_base_gets_braces(self):
        """Test that a non-group base is wrapped in new braces."""
        assert TokenBuilder().build(Subscript(Macro("alpha"))) == ["_{", "\\alpha", "}"]

    def test_own_line_comment(self):
        """Test the tokens of a comment on its own line."""
        tokens = TokenBuilder().build(CommentNode("c", sameline=False, suffix_parbreak=True))
        assert tokens == [D.ENSURE_NEWLINE, "%c", D.PARAGRAPH_BREAK]

    def test_verbatim_is_one_token(self):
        """Test that verbatim content is a single no-wrap token."""
        tokens = TokenBuilder().build(parse("\\begin{verbatim}a  b\\end{verbatim}"))
        assert tokens == [D.NO_WRAP, "\\begin{verbatim}a  b\\end{verbatim}", D.END_NO_WRAP]

    def test_foreign_node(self):
        """Test that a foreign child raises MalformedNodeError."""
        with pytest.raises(MalformedNodeError):
            TokenBuilder().build(NodeList([object()]))


@pytest.mark.unit
class TestPrintAsText:
    """Test the token printer on parsed documents."""

    def test_collapses_space_and_short_scripts(self):
        """Test whitespace collapsing and script shortening together."""
        assert print_as_text("x_{y}  and   x_{yz}") == "x_y and x_{yz}"

    def test_paragraphs(self):
        """Test that many blank lines become one."""
        assert print_as_text("a   b\n\n\n\nc") == "a b\n\nc"

    def test_final_newline_not_turned_into_space(self):
        """Test that a newline-terminated document leaves no trailing space."""
        assert print_as_text("a\n") == "a"
        assert print_as_text("a b  \n") == "a b"

    def test_environment_indents_body(self):
        """Test that an environment body is indented with a tab."""
        result = print_as_text("\\begin{itemize}\\item a\\end{itemize}")
        assert result == "\\begin{itemize}\n\t\\item a\n\\end{itemize}"

    def test_wrapping_width(self):
        """Test the max_width override."""
        assert print_as_text("aaa bbb ccc", max_width=7) == "aaa bbb\nccc"

    def test_inline_math_not_wrapped(self):
        """Test that inline math stays on one line."""
        assert print_as_text("aa $b + c$", max_width=4) == "aa $b + c$"

    def test_display_math(self):
        """Test display math layout."""
        assert print_as_text("\\[a\\]") == "\\[\n\ta\n\\]\n"

    def test_verbatim_untouched(self):
        """Test that verbatim text is reproduced exactly."""
        source = "\\begin{verbatim}\n  a   b\n\\end{verbatim}"
        assert print_as_text(source) == source

    def test_comments(self):
        """Test same-line comments and comments followed by a blank line."""
        assert print_as_text("a % c\nb") == "a % c\nb"
        assert print_as_text("%c\n\nb") == "%c\n\nb"

    def test_accepts_tree(self):
        """Test that an already parsed tree can be printed."""
        assert print_as_text(parse("a  b")) == "a b"

    def test_wrong_options_type(self):
        """Test that layout options are rejected by the token renderer."""
        with pytest.raises(InvalidOptionsError):
            TokenRenderer(LayoutOptions())

    def test_renderer_options(self):
        """Test TokenRenderer with explicit options."""
        renderer = TokenRenderer(TokenPrinterOptions(max_width=3))
        assert renderer.render_to_string(parse("aa bb")) == "aa\nbb"
