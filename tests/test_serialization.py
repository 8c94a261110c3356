"""
Tests for loading and dumping declaration trees.
"""

import json
from pathlib import Path

import pytest
import yaml

from sigsort.ast import (
    Alias,
    AttrReader,
    ClassDecl,
    MemberKind,
    MethodDefinition,
    MethodKind,
    ModuleDecl,
    Private,
    UnknownMember,
    Visibility,
)
from sigsort.errors import SerializationError
from sigsort.serialization import (
    detect_format,
    dumps,
    load_document,
    load_file,
    loads,
    node_from_dict,
    node_to_dict,
)

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    """Tests for detect_format."""

    @pytest.mark.parametrize(
        "name,expected",
        [("a.json", "json"), ("a.yaml", "yaml"), ("a.yml", "yaml"), ("A.JSON", "json")],
    )
    def test_known_extensions(self, name, expected):
        """Test that known extensions map to their format."""
        assert detect_format(name) == expected

    def test_unknown_extension(self):
        """Test that an unknown extension is rejected with the path."""
        with pytest.raises(SerializationError, match="decls.rbs"):
            detect_format("decls.rbs")


class TestNodeFromDict:
    """Tests for node_from_dict."""

    def test_method_with_enums(self):
        """Test that enum fields and string lists are converted."""
        node = node_from_dict(
            {
                "tag": "method",
                "name": "build",
                "kind": "singleton",
                "visibility": "private",
                "overloads": ["() -> void", "(Integer) -> void"],
            }
        )
        assert node == MethodDefinition(
            name="build",
            kind=MethodKind.SINGLETON,
            overloads=("() -> void", "(Integer) -> void"),
            visibility=Visibility.PRIVATE,
        )

    def test_alias_kind_is_member_kind(self):
        """Test that alias kinds use the attribute/alias scope enum."""
        node = node_from_dict({"tag": "alias", "new_name": "a", "old_name": "b", "kind": "singleton"})
        assert node.kind is MemberKind.SINGLETON

    def test_nested_members(self):
        """Test that members are loaded recursively as tuples."""
        node = node_from_dict(
            {
                "tag": "class",
                "name": "Outer",
                "members": [{"tag": "module", "name": "Inner", "members": [{"tag": "private"}]}],
            }
        )
        assert node == ClassDecl(name="Outer", members=(ModuleDecl(name="Inner", members=(Private(),)),))

    def test_unknown_tag_kept(self):
        """Test that an unknown tag becomes an UnknownMember with its payload."""
        data = {"tag": "annotation_block", "text": "%a{pure}", "extra": [1, 2]}
        node = node_from_dict(data)

        assert isinstance(node, UnknownMember)
        assert node.kind == "annotation_block"
        assert node.text == "%a{pure}"
        assert node.payload == data

    def test_missing_tag(self):
        """Test that a node without a tag is rejected."""
        with pytest.raises(SerializationError, match="Missing required 'tag'"):
            node_from_dict({"name": "x"})

    def test_not_a_mapping(self):
        """Test that scalars are rejected."""
        with pytest.raises(SerializationError, match="got str"):
            node_from_dict("class Foo")

    def test_missing_required_field(self):
        """Test that a required field must be present."""
        with pytest.raises(SerializationError, match="Missing required field 'type'"):
            node_from_dict({"tag": "attr_reader", "name": "x"})

    @pytest.mark.parametrize(
        "data,field_name",
        [
            ({"tag": "attr_writer", "name": None, "type": "T"}, "name"),
            ({"tag": "constant", "name": "A", "type": None}, "type"),
            ({"tag": "alias", "new_name": "b", "old_name": None}, "old_name"),
        ],
    )
    def test_null_required_field(self, data, field_name):
        """Test that null is rejected for fields without a default."""
        with pytest.raises(SerializationError, match=f"'{field_name}' must be a string"):
            node_from_dict(data)

    def test_null_optional_field(self):
        """Test that null is accepted for optional fields."""
        node = node_from_dict({"tag": "class", "name": "A", "super_class": None, "comment": None})
        assert node == ClassDecl(name="A")

    def test_null_member_field_reports_path(self):
        """Test that a null name inside a member is reported with the member path."""
        text = "- tag: class\n  name: C\n  members:\n  - {tag: attr_writer, name: null, type: T}\n"
        with pytest.raises(SerializationError) as exc_info:
            loads(text, "yaml")
        assert exc_info.value.path == "document[0].members[0]"

    def test_invalid_enum_value(self):
        """Test that an invalid enum value names the allowed values."""
        with pytest.raises(SerializationError, match="Invalid visibility 'protected'"):
            node_from_dict({"tag": "method", "name": "x", "visibility": "protected"})

    def test_overloads_must_be_strings(self):
        """Test that string list fields are type-checked."""
        with pytest.raises(SerializationError, match="'overloads' must be a list of strings"):
            node_from_dict({"tag": "method", "name": "x", "overloads": "() -> void"})

    def test_error_path_points_at_member(self):
        """Test that errors carry the path of the offending node."""
        with pytest.raises(SerializationError) as exc_info:
            load_document(
                [{"tag": "class", "name": "A", "members": [{"tag": "method", "name": "ok"}, {"tag": "method"}]}]
            )
        assert exc_info.value.path == "document[0].members[1]"
        assert str(exc_info.value).startswith("document[0].members[1]: ")


class TestNodeToDict:
    """Tests for node_to_dict."""

    def test_defaults_omitted(self):
        """Test that default-valued fields are left out."""
        assert node_to_dict(MethodDefinition(name="run")) == {"tag": "method", "name": "run"}

    def test_enums_and_tuples_converted(self):
        """Test that enums become values and tuples become lists."""
        node = AttrReader(
            name="size",
            type="Integer",
            kind=MemberKind.SINGLETON,
            visibility=Visibility.PRIVATE,
        )
        assert node_to_dict(node) == {
            "tag": "attr_reader",
            "name": "size",
            "type": "Integer",
            "kind": "singleton",
            "visibility": "private",
        }

    def test_unknown_member_payload_verbatim(self):
        """Test that unknown members are dumped from their original payload."""
        data = {"tag": "annotation_block", "text": "%a{pure}", "extra": [1, 2]}
        assert node_to_dict(node_from_dict(data)) == data

    def test_unknown_member_without_payload(self):
        """Test that a constructed unknown member dumps its fields."""
        node = UnknownMember(kind="mystery")
        assert node_to_dict(node) == {"tag": "unknown", "kind": "mystery"}

    def test_alias_reload(self):
        """Test that an alias survives a dump and reload."""
        alias = Alias(new_name="to_str", old_name="to_s", visibility=Visibility.PUBLIC)
        assert node_from_dict(node_to_dict(alias)) == alias


class TestDocuments:
    """Tests for document-level loading and dumping."""

    def test_empty_documents(self):
        """Test that empty input yields no declarations."""
        assert loads("", "json") == []
        assert loads("", "yaml") == []
        assert loads("[]", "json") == []

    def test_mapping_needs_declarations(self):
        """Test that a mapping document must have a declarations key."""
        with pytest.raises(SerializationError, match="declarations"):
            load_document({"decls": []})

    def test_declarations_must_be_list(self):
        """Test that declarations must be a list."""
        with pytest.raises(SerializationError, match="must be a list"):
            load_document({"declarations": {"tag": "class"}})

    def test_invalid_json(self):
        """Test that malformed JSON is reported as a serialization error."""
        with pytest.raises(SerializationError, match="Invalid json document"):
            loads("{", "json")

    def test_unsupported_format(self):
        """Test that only json and yaml are accepted."""
        with pytest.raises(SerializationError, match="Unsupported format"):
            loads("[]", "toml")
        with pytest.raises(SerializationError, match="Unsupported format"):
            dumps([], "toml")

    def test_json_and_yaml_fixtures_agree(self):
        """Test that the JSON and YAML fixtures load to the same tree."""
        assert load_file(FIXTURES / "sample.json") == load_file(FIXTURES / "sample.yaml")

    def test_dumps_json(self):
        """Test JSON output shape."""
        text = dumps([ClassDecl(name="A")], "json")

        assert text.endswith("\n")
        assert json.loads(text) == {"declarations": [{"tag": "class", "name": "A"}]}

    def test_dumps_yaml_keeps_field_order(self):
        """Test that YAML output keeps tag first."""
        text = dumps([ClassDecl(name="A", super_class="B")], "yaml")

        assert yaml.safe_load(text) == {
            "declarations": [{"tag": "class", "name": "A", "super_class": "B"}]
        }
        assert text.index("tag:") < text.index("name:")

    def test_fixture_reloads_after_dump(self):
        """Test that dumping a loaded fixture and loading it again is lossless."""
        decls = load_file(FIXTURES / "sample.yaml")
        assert loads(dumps(decls, "yaml"), "yaml") == decls
        assert loads(dumps(decls, "json"), "json") == decls


class TestLoadFile:
    """Tests for load_file."""

    def test_error_mentions_file(self, tmp_path):
        """Test that load errors are prefixed with the file path."""
        path = tmp_path / "bad.json"
        path.write_text('[{"tag": "class"}]', encoding="utf-8")

        with pytest.raises(SerializationError) as exc_info:
            load_file(path)

        assert exc_info.value.path == str(path)
        assert "Missing required field 'name'" in str(exc_info.value)

    def test_explicit_format_overrides_extension(self, tmp_path):
        """Test that an explicit format is used for any extension."""
        path = tmp_path / "decls.txt"
        path.write_text("- tag: class\n  name: A\n", encoding="utf-8")

        assert load_file(path, "yaml") == [ClassDecl(name="A")]

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            load_file(tmp_path / "missing.json")
