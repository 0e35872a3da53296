# tests/test_serialization.py

"""
Unit tests for doclet rendering and record serialization.
"""

import json

from tsinfo.doclets import add_tag, new_doclet_info, parse_doclet
from tsinfo.serialization import to_dict, to_doclet_string, to_json_string


class TestToDocletString:
    """Test cases for rendering doclets."""

    def test_render_tags(self):
        """Test description first, then one block per tag value."""
        doclet = parse_doclet(
            "/** Does a thing.\n * @param {number} a - value\n * @return {number} result */"
        )
        assert to_doclet_string(doclet) == (
            "\n/**"
            "\n * Does a thing."
            "\n *"
            "\n * @param {number} a - value"
            "\n *"
            "\n * @return result"
            "\n */\n"
        )

    def test_indent(self):
        """Test numeric and string indents."""
        doclet = add_tag(new_doclet_info(), "description", "Chart.")
        expected = "\n    /**\n     * Chart.\n     */\n"
        assert to_doclet_string(doclet, 4) == expected
        assert to_doclet_string(doclet, "    ") == expected

    def test_repeated_tags(self):
        """Test every value of a tag gets its own block."""
        doclet = new_doclet_info()
        add_tag(doclet, "sample", "one")
        add_tag(doclet, "sample", "two")
        rendered = to_doclet_string(doclet)
        assert rendered.count("@sample") == 2
        assert rendered.index("@sample one") < rendered.index("@sample two")

    def test_continuation_lines_are_aligned(self):
        """Test later lines of a tag value are aligned after the tag name."""
        doclet = add_tag(new_doclet_info(), "param", "a\nsecond line")
        assert " * @param a\n *        second line\n" in to_doclet_string(doclet)

    def test_typed_description_is_labeled(self):
        """Test a description starting with a brace is rendered as a tag."""
        doclet = add_tag(new_doclet_info(), "description", "{Object} options")
        assert "@description {Object} options" in to_doclet_string(doclet)

    def test_long_lines_are_wrapped(self):
        """Test lines over 80 columns break at a space."""
        doclet = add_tag(new_doclet_info(), "description", ("word " * 30).strip())
        lines = to_doclet_string(doclet).split("\n")
        assert all(len(line) <= 80 for line in lines)
        assert sum(line.count("word") for line in lines) == 30

    def test_unbreakable_lines_are_kept(self):
        """Test lines without a late enough space are not broken."""
        token = "x" * 100
        doclet = add_tag(new_doclet_info(), "description", token)
        assert "\n * " + token + "\n" in to_doclet_string(doclet)

    def test_round_trip(self):
        """Test rendered doclets parse to the same tags."""
        doclet = new_doclet_info()
        add_tag(doclet, "description", "Chart options.")
        add_tag(doclet, "since", "1.0.0")
        add_tag(doclet, "param", "{string} type The series type.")

        rendered = to_doclet_string(doclet).strip()

        assert parse_doclet(rendered).tags == doclet.tags


class TestToDict:
    """Test cases for dictionaries and JSON."""

    def test_import_to_dict(self, analyzer):
        """Test field names, omitted fields and kind."""
        source_info = analyzer.get_source_info(
            "test.ts", "import { Foo as Bar } from './other.js';"
        )
        result = to_dict(source_info.code[0])

        assert list(result)[0] == "kind"
        assert result["kind"] == "Import"
        assert result["from"] == "./other"
        assert result["imports"] == {"Foo": "Bar"}
        assert "doclet" not in result
        assert "flags" not in result
        assert result["meta"]["syntax"] == "import_statement"

    def test_function_to_dict(self, analyzer):
        """Test nested records and the return field."""
        source_info = analyzer.get_source_info(
            "test.ts", "/** Doc. */\nfunction f(a: number): string { return ''; }"
        )
        result = to_dict(source_info.code[0])

        assert result["return"] == "string"
        assert result["parameters"][0]["kind"] == "Variable"
        assert result["doclet"]["tags"] == {"description": ["Doc."]}

    def test_nodes_become_text(self, analyzer):
        """Test syntax nodes are rendered as their source text."""
        text = "const a = 1;"
        source_info = analyzer.get_source_info("test.ts", text, include_nodes=True)
        result = to_dict(source_info)

        assert result["node"] == text
        assert result["code"][0]["node"] == "a = 1"

    def test_to_json_string(self, analyzer):
        """Test JSON output of a source file."""
        source_info = analyzer.get_source_info(
            "test.ts", "interface Chart { type: string }"
        )
        data = json.loads(to_json_string(source_info, indent=2))

        assert data["path"] == "test.ts"
        assert data["code"][0]["name"] == "Chart"
        assert data["code"][0]["properties"][0]["type"] == "string"
