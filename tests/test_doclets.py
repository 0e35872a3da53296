# tests/test_doclets.py

"""
Unit tests for doclet parsing and tag accessors.
"""

import pytest

from tsinfo.doclets import (
    add_tag,
    extract_tag_text,
    get_doclets_between,
    merge_doclet_infos,
    new_doclet_info,
    parse_doclet,
    remove_all_doclets,
    remove_tag,
)
from tsinfo.models import DocletInfo
from tsinfo.parser import get_nodes_children


class TestParseDoclet:
    """Test cases for parsing one doclet block."""

    def test_description_and_tags(self):
        """Test gutter stripping, tag texts and the return type removal."""
        doclet = parse_doclet(
            "/** Does a thing.\n * @param {number} a - value\n * @return {number} result */"
        )
        assert doclet.tags == {
            "description": ["Does a thing."],
            "param": ["{number} a - value"],
            "return": ["result"],
        }

    def test_repeated_tags_accumulate(self):
        """Test values of a repeated tag are kept in order."""
        doclet = parse_doclet(
            "/**\n"
            " * Sums.\n"
            " *\n"
            " * @param a First\n"
            " * @param b Second\n"
            " */"
        )
        assert doclet.tags["param"] == ["a First", "b Second"]

    def test_multiline_description(self):
        """Test description lines are joined with newlines."""
        doclet = parse_doclet(
            "/**\n"
            " * First line.\n"
            " * Second line.\n"
            " *\n"
            " * @since 1.0.0\n"
            " */"
        )
        assert doclet.tags["description"] == ["First line.\nSecond line."]
        assert doclet.tags["since"] == ["1.0.0"]

    def test_crlf_line_endings(self):
        """Test CRLF line breaks leave no carriage returns in tag texts."""
        doclet = parse_doclet(
            "/**\r\n"
            " * Sums.\r\n"
            " * @param a first\r\n"
            " *   more\r\n"
            " * @since 1.0.0\r\n"
            " */"
        )
        assert doclet.tags == {
            "description": ["Sums."],
            "param": ["a first\n   more"],
            "since": ["1.0.0"],
        }

    def test_tag_without_text(self):
        """Test a bare tag is recorded with an empty list."""
        doclet = parse_doclet("/** @private */")
        assert doclet.tags == {"private": []}

    def test_inline_tag_is_text(self):
        """Test inline {@link} does not start a tag."""
        doclet = parse_doclet("/** See {@link Chart} for details. */")
        assert doclet.tags == {"description": ["See {@link Chart} for details."]}

    @pytest.mark.parametrize("block", ["/***/", "/** */", "/**\n *\n */"])
    def test_empty_block(self, block):
        """Test an empty block still yields a doclet."""
        doclet = parse_doclet(block)
        assert isinstance(doclet, DocletInfo)
        assert doclet.tags == {}

    def test_meta_offsets(self):
        """Test the doclet meta spans the block."""
        doclet = parse_doclet("/** doc */", begin=13)
        assert doclet.meta.begin == 13
        assert doclet.meta.end == 23
        assert doclet.meta.syntax == "comment"


class TestDocletsBetween:
    """Test cases for recovering doclets between nodes."""

    def test_blocks_between_nodes(self, analyzer):
        """Test only /** blocks in the gap are found."""
        text = (
            "const a = 1;\n"
            "// line comment\n"
            "/* block comment */\n"
            "/** first */\n"
            "/** second */\n"
            "const b = 2;\n"
        )
        source_file = analyzer.parse("test.ts", text)
        first, second = get_nodes_children(source_file.root_node)

        blocks = get_doclets_between(source_file, first, second)

        assert [block for _, block in blocks] == ["/** first */", "/** second */"]
        assert text[blocks[0][0]:].startswith("/** first */")

    def test_leading_blocks_of_first_node(self, analyzer):
        """Test the same node as start and end covers its leading trivia."""
        text = "/** header */\nconst a = 1;"
        source_file = analyzer.parse("test.ts", text)
        node = get_nodes_children(source_file.root_node)[0]

        blocks = get_doclets_between(source_file, node, node)

        assert blocks == [(0, "/** header */")]


class TestTagAccessors:
    """Test cases for doclet tag manipulation."""

    def test_add_and_extract(self):
        """Test adding tags and reading their text."""
        doclet = new_doclet_info()
        add_tag(doclet, "sample", "first")
        add_tag(doclet, "sample", "second")

        assert extract_tag_text(doclet, "sample") == "second"
        assert extract_tag_text(doclet, "sample", all_text=True) == "first\n\nsecond"
        assert extract_tag_text(doclet, "missing") is None

    def test_add_without_text(self):
        """Test a tag can be added without text."""
        doclet = add_tag(new_doclet_info(), "private")
        assert doclet.tags == {"private": []}
        assert extract_tag_text(doclet, "private") is None

    def test_remove_tag(self):
        """Test removing returns the removed texts."""
        doclet = add_tag(new_doclet_info(), "since", "2.0")
        assert remove_tag(doclet, "since") == ["2.0"]
        assert remove_tag(doclet, "since") == []
        assert "since" not in doclet.tags

    def test_new_doclet_copies_tags(self):
        """Test a copied doclet does not share tag lists."""
        template = add_tag(new_doclet_info(), "param", "a")
        copy = new_doclet_info(template)
        add_tag(copy, "param", "b")

        assert template.tags == {"param": ["a"]}
        assert copy.tags == {"param": ["a", "b"]}


class TestMergeDocletInfos:
    """Test cases for merging doclets."""

    def test_merge_deduplicates(self):
        """Test identical values are kept once in first-seen order."""
        target = add_tag(new_doclet_info(), "param", "a")
        source = add_tag(new_doclet_info(), "param", "a")
        add_tag(source, "param", "b")
        add_tag(source, "since", "1.0")

        merged = merge_doclet_infos(target, source)

        assert merged is target
        assert merged.tags == {"param": ["a", "b"], "since": ["1.0"]}

    def test_merge_into_none(self):
        """Test a target is created when none is given."""
        source = add_tag(new_doclet_info(), "sample", "x")
        merged = merge_doclet_infos(None, source)

        assert merged is not source
        assert merged.tags == {"sample": ["x"]}

    def test_merge_is_commutative_on_value_sets(self):
        """Test source order never drops a distinct value."""
        def make_a():
            doclet = add_tag(new_doclet_info(), "param", "a")
            return add_tag(doclet, "since", "1.0")

        def make_b():
            doclet = add_tag(new_doclet_info(), "param", "b")
            add_tag(doclet, "param", "a")
            return add_tag(doclet, "deprecated", "")

        ab = merge_doclet_infos(make_a(), make_b())
        ba = merge_doclet_infos(make_b(), make_a())

        assert ab.tags.keys() == ba.tags.keys()
        for tag in ab.tags:
            assert set(ab.tags[tag]) == set(ba.tags[tag])


class TestRemoveAllDoclets:
    """Test cases for stripping doclets from source code."""

    def test_remove_doclets(self):
        """Test doclet blocks and their lines are removed."""
        source_code = (
            "const a = 1;\n"
            "    /**\n"
            "     * Doc.\n"
            "     */\n"
            "const b = 2;\n"
        )
        assert remove_all_doclets(source_code) == "const a = 1;\nconst b = 2;\n"

    def test_other_comments_stay(self):
        """Test line and block comments are kept."""
        source_code = "const a = 1;\n// note\n/* block */\nconst b = 2;"
        assert remove_all_doclets(source_code) == source_code
