"""Unit tests for the doc builders and the layout algorithm."""

import pytest

from latexfmt.exceptions import MalformedNodeError, ValidationError
from latexfmt.options import LayoutOptions
from latexfmt.renderers.doc import (
    add_alignment_to_doc,
    align,
    break_parent,
    concat,
    conditional_group,
    cursor,
    dedent_to_root,
    fill,
    group,
    hardline,
    if_break,
    indent,
    join,
    line,
    line_suffix,
    line_suffix_boundary,
    literalline,
    mark_as_root,
    softline,
    trim,
)
from latexfmt.renderers.doc_printer import PrintResult, get_string_width, print_doc_to_string, propagate_breaks

SPACES = LayoutOptions(use_tabs=False, tab_width=2)


def render(doc, options=None):
    return print_doc_to_string(doc, options).formatted


@pytest.mark.unit
class TestStringWidth:
    """Test display width measurement."""

    def test_ascii(self):
        """Test that ASCII text counts one column per character."""
        assert get_string_width("abc") == 3

    def test_wide_characters(self):
        """Test that CJK characters count two columns."""
        assert get_string_width("日本") == 4

    def test_combining_marks(self):
        """Test that combining accents take no width."""
        assert get_string_width("e\u0301") == 1


@pytest.mark.unit
class TestGroups:
    """Test flat and broken groups."""

    def test_plain_string(self):
        """Test that a string prints as is."""
        assert print_doc_to_string("abc") == PrintResult("abc", None)

    def test_group_fits_flat(self):
        """Test that a line prints as a space when the group fits."""
        doc = group(concat(["a", indent(concat([line, "b"]))]))
        assert render(doc) == "a b"

    def test_group_breaks_when_too_wide(self):
        """Test that a group breaks and indents when it does not fit."""
        doc = group(concat(["a", indent(concat([line, "b"]))]))
        assert render(doc, {"printWidth": 1, "useTabs": False, "tabWidth": 2}) == "a\n  b"

    def test_tabs_by_default(self):
        """Test that indentation uses tabs unless disabled."""
        doc = group(concat(["a", indent(concat([line, "b"]))]))
        assert render(doc, {"printWidth": 1}) == "a\n\tb"

    def test_softline_flat_is_empty(self):
        """Test that a soft line prints nothing when flat."""
        assert render(group(concat(["a", softline, "b"]))) == "ab"

    def test_hardline_breaks_enclosing_group(self):
        """Test that a hard break forces the other lines of its group to break."""
        doc = group(concat(["a", line, "b", hardline, "c"]))
        assert render(doc) == "a\nb\nc"

    def test_remaining_content_counts(self):
        """Test that text after a group on the same line is measured."""
        doc = concat([group(concat(["a", line, "b"])), "cccc"])
        assert render(doc, {"printWidth": 5}) == "a\nbcccc"

    def test_conditional_group_first_state(self):
        """Test that the first state is used when it fits."""
        assert render(conditional_group(["aaaa", "b"]), {"printWidth": 10}) == "aaaa"

    def test_conditional_group_falls_back(self):
        """Test that the most expanded state is used when nothing fits."""
        assert render(conditional_group(["aaaa", "b"]), {"printWidth": 2}) == "b"

    def test_if_break(self):
        """Test that if_break picks its branch from the group mode."""
        assert render(group(if_break("B", "F"))) == "F"
        assert render(group(concat([if_break("B", "F"), break_parent]))) == "B"


@pytest.mark.unit
class TestPropagateBreaks:
    """Test break propagation."""

    def test_marks_nested_groups(self):
        """Test that a hard break marks every enclosing group."""
        inner = group(concat(["a", hardline]))
        outer = group(concat(["x", inner]))
        propagate_breaks(outer)
        assert inner.should_break
        assert outer.should_break

    def test_leaves_sibling_groups(self):
        """Test that a group without hard breaks stays unbroken."""
        flat = group(concat(["a", line, "b"]))
        broken = group(concat(["c", hardline]))
        propagate_breaks(concat([flat, broken]))
        assert not flat.should_break
        assert broken.should_break

    def test_conditional_group_not_marked(self):
        """Test that groups with expanded states are left alone."""
        doc = conditional_group([concat(["a", hardline]), "b"])
        propagate_breaks(doc)
        assert not doc.should_break


@pytest.mark.unit
class TestFill:
    """Test word-wrapping fills."""

    def test_fill_wraps(self):
        """Test that a fill breaks only where needed."""
        doc = fill(["aaa", line, "bbb", line, "ccc"])
        assert render(doc, {"printWidth": 7}) == "aaa bbb\nccc"

    def test_fill_all_on_one_line(self):
        """Test that a fill that fits stays on one line."""
        doc = fill(["aaa", line, "bbb", line, "ccc"])
        assert render(doc) == "aaa bbb ccc"

    def test_fill_keeps_indentation(self):
        """Test that wrapped lines are indented."""
        doc = indent(fill(["aa", line, "bb"]))
        assert render(doc, {"printWidth": 3, "useTabs": False, "tabWidth": 2}) == "aa\n  bb"

    def test_empty_fill(self):
        """Test that an empty fill prints nothing."""
        assert render(fill([])) == ""


@pytest.mark.unit
class TestIndentation:
    """Test indentation and alignment."""

    def test_nested_indent_with_spaces(self):
        """Test that each indent adds tab_width spaces."""
        doc = indent(indent(concat(["a", hardline, "b"])))
        assert render(doc, SPACES) == "a\n    b"

    def test_align(self):
        """Test numeric alignment."""
        assert render(align(3, concat(["a", hardline, "b"])), SPACES) == "a\n   b"

    def test_string_align(self):
        """Test alignment with a literal string."""
        assert render(align("> ", concat(["a", hardline, "b"]))) == "a\n> b"

    def test_dedent(self):
        """Test that a negative alignment drops one level."""
        doc = indent(indent(concat(["a", align(-1, concat([hardline, "b"]))])))
        assert render(doc, SPACES) == "a\n  b"

    def test_dedent_to_root(self):
        """Test that dedent_to_root returns to column zero."""
        doc = indent(concat(["a", hardline, "b", dedent_to_root(concat([hardline, "c"]))]))
        assert render(doc) == "a\n\tb\nc"

    def test_mark_as_root(self):
        """Test that mark_as_root sets the indentation dedent_to_root returns to."""
        doc = indent(mark_as_root(indent(concat(["a", dedent_to_root(concat([hardline, "b"]))]))))
        assert render(doc, SPACES) == "a\n  b"

    def test_literalline_ignores_indentation(self):
        """Test that a literal line starts at column zero."""
        assert render(indent(concat(["a", literalline, "b"]))) == "a\nb"

    def test_add_alignment_to_doc(self):
        """Test alignment to an absolute column with spaces."""
        doc = add_alignment_to_doc(concat(["a", hardline, "b"]), 10, 8)
        assert render(doc, LayoutOptions(use_tabs=False)) == "a\n" + " " * 10 + "b"

    def test_add_alignment_to_doc_zero(self):
        """Test that a zero size returns the doc unchanged."""
        doc = concat(["a"])
        assert add_alignment_to_doc(doc, 0, 8) is doc


@pytest.mark.unit
class TestLineControls:
    """Test trimming, line suffixes and the cursor."""

    def test_trailing_space_trimmed_before_break(self):
        """Test that spaces at the end of a line are removed."""
        assert render(concat(["a  ", hardline, "b"])) == "a\nb"

    def test_trailing_space_trimmed_at_end(self):
        """Test that the last line is trimmed as well."""
        assert render(concat(["a", " \t"])) == "a"

    def test_trim(self):
        """Test the explicit trim doc."""
        assert render(concat(["a \t ", trim, "b"])) == "ab"

    def test_line_suffix_before_newline(self):
        """Test that a line suffix is written just before the next break."""
        doc = concat(["a", line_suffix(" % c"), "b", hardline, "d"])
        assert render(doc) == "ab % c\nd"

    def test_line_suffix_at_end(self):
        """Test that pending suffixes are flushed at the end of the doc."""
        assert render(concat(["a", line_suffix("%c")])) == "a%c"

    def test_line_suffix_boundary(self):
        """Test that a boundary forces a break after a pending suffix."""
        doc = concat(["a", line_suffix("%c"), line_suffix_boundary, "b"])
        assert render(doc) == "a%c\nb"

    def test_line_suffix_boundary_without_suffix(self):
        """Test that a boundary does nothing when no suffix is pending."""
        assert render(concat(["a", line_suffix_boundary, "b"])) == "ab"

    def test_cursor_offset(self):
        """Test that the cursor position is reported and not printed."""
        result = print_doc_to_string(concat(["ab", cursor, "c"]))
        assert result == PrintResult("abc", 2)

    def test_join(self):
        """Test join with a hard break separator."""
        assert render(join(hardline, ["a", "b", "c"])) == "a\nb\nc"


@pytest.mark.unit
class TestPrinterErrors:
    """Test invalid docs and options."""

    def test_unknown_doc(self):
        """Test that a non-doc value raises MalformedNodeError."""
        with pytest.raises(MalformedNodeError):
            print_doc_to_string(concat(["a", 42]))

    def test_invalid_mapping_options(self):
        """Test that a zero width is rejected."""
        with pytest.raises(ValidationError):
            print_doc_to_string("a", {"printWidth": 0})
