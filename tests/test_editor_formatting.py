"""Tests for toolbar formatting and AI splicing."""

import pytest

from chameleon_docs.editor.formatting import (
    EditResult,
    UnknownFormatAction,
    apply_format,
    rewrite_source,
    splice_rewrite,
)


class TestInlineFormats:

    @pytest.mark.parametrize("action,marker", [("bold", "**"), ("italic", "*"), ("code", "`")])
    def test_wraps_selection(self, action, marker):
        result = apply_format("make this word", 10, 14, action)
        assert result.content == f"make this {marker}word{marker}"
        assert result.content[result.selection_start:result.selection_end] == "word"

    def test_empty_selection_inserts_markers(self):
        result = apply_format("ab", 1, 1, "bold")
        assert result == EditResult("a****b", 3, 3)

    def test_reversed_selection_is_normalised(self):
        assert apply_format("abc", 3, 0, "code").content == "`abc`"


class TestLinePrefixes:

    def test_heading_applies_to_cursor_line(self):
        content = "first\nsecond\nthird"
        result = apply_format(content, 8, 8, "h1")
        assert result.content == "first\n# second\nthird"

    def test_h2_ignores_extra_selected_lines(self):
        result = apply_format("one\ntwo", 0, 7, "h2")
        assert result.content == "## one\ntwo"

    def test_list_applies_to_each_selected_line(self):
        result = apply_format("one\ntwo\nthree", 0, 7, "list")
        assert result.content == "- one\n- two\nthree"

    def test_quote_selection_ending_at_newline(self):
        result = apply_format("one\ntwo\n", 0, 4, "quote")
        assert result.content == "> one\ntwo\n"

    def test_unknown_action(self):
        with pytest.raises(UnknownFormatAction):
            apply_format("x", 0, 1, "strikethrough")


class TestSplice:

    def test_replaces_selection(self):
        result = splice_rewrite("keep OLD keep", 5, 8, "NEW TEXT")
        assert result.content == "keep NEW TEXT keep"
        assert result.selection_start == result.selection_end == 13

    def test_empty_selection_replaces_everything(self):
        result = splice_rewrite("all of it", 3, 3, "rewritten")
        assert result == EditResult("rewritten", 9, 9)

    def test_rewrite_source(self):
        assert rewrite_source("abc def", 4, 7) == "def"
        assert rewrite_source("abc def", 2, 2) == "abc def"
