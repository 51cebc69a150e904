"""Tests for block flattening and the offset locator."""

import pytest

from cnxcheck.blocks import annotate, fold_whitespace, locate_offset, prepare_block, utf16_to_index
from cnxcheck.doctree import parse_document
from helpers import find


class TestFoldWhitespace:
    """Test newline/indentation folding."""

    def test_indentation_after_newline(self):
        assert fold_whitespace("line one\n   line two") == "line one\nline two"

    def test_blank_lines_collapse(self):
        assert fold_whitespace("a\n\n\t  b") == "a\nb"

    def test_inner_spaces_untouched(self):
        assert fold_whitespace("a  b   c") == "a  b   c"

    @pytest.mark.parametrize(
        "text",
        ["line one\n   line two", "a\n \n  b\n", "\n\n", "no newline", "  lead\n\ttab  "],
    )
    def test_idempotent(self, text):
        once = fold_whitespace(text)
        assert fold_whitespace(once) == once


class TestPrepareBlock:
    """Test normalization of a block before submission."""

    def test_multiline_para(self):
        root = parse_document("<para>\n    The Cat sat on\n    the mat.\n  </para>")
        assert prepare_block(root) == "The Cat sat on\nthe mat."

    def test_newline_marker(self):
        root = parse_document("<para>one<newline/>   two</para>")
        assert prepare_block(root) == "one\ntwo"
        assert find_or_none(root, "newline") is None

    def test_text_node_block(self):
        root = parse_document("<section>\n   Loose text\n</section>")
        text_node = root.children[0]
        assert prepare_block(text_node) == "Loose text"

    def test_whitespace_only(self):
        root = parse_document("<para>  \n   </para>")
        assert prepare_block(root) == ""

    def test_nested_markup_flattened(self):
        root = parse_document("<para>An <emphasis>important</emphasis> point.</para>")
        assert prepare_block(root) == "An important point."


def find_or_none(root, tag):
    return next((n for n in root.iter() if n.tag == tag), None)


class TestLocateOffset:
    """Test mapping text offsets back to nodes."""

    def test_each_offset_maps_to_owner(self):
        root = parse_document("<para>  The <emphasis>big</emphasis> cat</para>")
        text = prepare_block(root)
        assert text == "The big cat"
        emphasis = find(root, "emphasis")
        expected = [root] * 4 + [emphasis] * 3 + [root] * 4
        assert [locate_offset(root, i) for i in range(len(text))] == expected

    def test_located_node_contains_character(self):
        root = parse_document(
            "<para>Start <term>alpha <emphasis>beta</emphasis></term>\n   end <foreign>gamma</foreign></para>"
        )
        text = prepare_block(root)
        for i, ch in enumerate(text):
            node = locate_offset(root, i)
            assert node is not None
            own = "".join(c.data for c in node.children if c.is_text)
            assert ch in own

    def test_offset_past_end(self):
        root = parse_document("<para>short</para>")
        prepare_block(root)
        assert locate_offset(root, 5) is None
        assert locate_offset(root, 100) is None

    def test_text_node_block_returns_parent(self):
        root = parse_document("<section>Loose text<para>x</para></section>")
        text_node = root.children[0]
        prepare_block(text_node)
        assert locate_offset(text_node, 2) is root


class TestAnnotate:
    """Test context snippet construction."""

    def test_brackets_match(self):
        assert annotate("The Cat sat.", 4, 3) == "The [Cat] sat."

    def test_at_start_and_end(self):
        assert annotate("abc", 0, 1) == "[a]bc"
        assert annotate("abc", 2, 1) == "ab[c]"

    def test_zero_length(self):
        assert annotate("abc", 1, 0) == "a[]bc"


class TestUtf16ToIndex:
    """Test conversion of checker offsets to string indices."""

    def test_ascii_unchanged(self):
        assert utf16_to_index("plain text", 6) == 6

    def test_bmp_characters_count_once(self):
        assert utf16_to_index("café au lait", 8) == 8

    def test_astral_characters_count_twice(self):
        text = "Let \U0001D465 be teh"
        assert utf16_to_index(text, 10) == text.index("teh")

    def test_past_end(self):
        assert utf16_to_index("\U0001D465", 5) == 1
        assert utf16_to_index("abc", 5) == 3
