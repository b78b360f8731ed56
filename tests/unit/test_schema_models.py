"""Unit tests for the schema models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from normkit.schema import (
    AnySchema,
    ArraySchema,
    ConstSchema,
    EnumSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    SchemaKind,
    StringSchema,
    is_any_schema,
    parse_schema,
)


class TestSchemaKinds:
    """Test that each kind maps to its model."""

    @pytest.mark.parametrize(
        ("schema_json", "model", "kind"),
        [
            ({"const": 1}, ConstSchema, SchemaKind.CONST),
            ({"enum": ["a"]}, EnumSchema, SchemaKind.ENUM),
            ({}, AnySchema, SchemaKind.ANY),
            ({"type": "any"}, AnySchema, SchemaKind.ANY),
            ({"type": "null"}, NullSchema, SchemaKind.NULL),
            ({"type": "string"}, StringSchema, SchemaKind.STRING),
            ({"type": "integer"}, NumberSchema, SchemaKind.NUMBER),
            ({"type": ["array", "null"]}, ArraySchema, SchemaKind.ARRAY),
            ({"type": "object"}, ObjectSchema, SchemaKind.OBJECT),
        ],
    )
    def test_kind(self, schema_json, model, kind) -> None:
        """Test the built model class and its kind tag."""
        schema = parse_schema(schema_json)
        assert isinstance(schema, model)
        assert schema.kind is kind

    def test_is_any_schema(self) -> None:
        """Test only schemas without a type or literal count as any."""
        assert is_any_schema(parse_schema({"title": "Anything"}))
        assert not is_any_schema(parse_schema({"type": "string"}))


class TestTypedSchema:
    """Test the base type and nullable marker of typed schemas."""

    def test_nullable(self) -> None:
        """Test a type pair with null is nullable."""
        schema = parse_schema({"type": ["null", "string"]})
        assert schema.base_type == "string"
        assert schema.nullable

    def test_not_nullable(self) -> None:
        """Test a single type name is not nullable."""
        schema = parse_schema({"type": "integer"})
        assert schema.base_type == "integer"
        assert not schema.nullable

    def test_null_type_is_nullable(self) -> None:
        """Test the null type accepts None."""
        assert parse_schema({"type": "null"}).nullable


class TestSchemaFields:
    """Test field access and serialization."""

    def test_annotations(self) -> None:
        """Test annotation keywords are readable under their Python names."""
        schema = parse_schema({
            "$comment": "internal",
            "title": "Name",
            "description": "Full name",
            "default": "",
            "examples": ["Ann"],
            "type": "string",
        })
        assert schema.comment == "internal"
        assert schema.title == "Name"
        assert schema.default_value == ""
        assert schema.examples == ("Ann",)

    def test_nested_models(self) -> None:
        """Test nested schemas are built as models."""
        schema = parse_schema({
            "type": "object",
            "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
            "additionalProperties": {"type": "number"},
        })
        tags = schema.properties["tags"]
        assert isinstance(tags, ArraySchema)
        assert isinstance(tags.items, StringSchema)
        assert isinstance(schema.additional_properties, NumberSchema)

    def test_additional_properties_true(self) -> None:
        """Test additionalProperties true is kept as True."""
        schema = parse_schema({"type": "object", "additionalProperties": True})
        assert schema.additional_properties is True

    def test_to_json_only_set_keywords(self) -> None:
        """Test to_json returns exactly the mapping the schema was built from."""
        schema_json = {
            "title": "Point",
            "type": "object",
            "properties": {"x": {"type": "number", "minimum": 0}, "label": {"type": ["string", "null"]}},
            "required": ["x"],
        }
        assert parse_schema(schema_json).to_json() == schema_json

    def test_to_json_lists_stay_lists(self) -> None:
        """Test keyword lists serialize as lists, not tuples."""
        schema_json = {"enum": ["a", [1, 2]], "examples": ["a"]}
        dumped = parse_schema(schema_json).to_json()
        assert dumped == schema_json
        assert isinstance(dumped["enum"], list)
        assert isinstance(dumped["examples"], list)

    def test_to_json_keeps_null_literals(self) -> None:
        """Test explicit null const and default survive serialization."""
        assert parse_schema({"const": None, "default": None}).to_json() == {"const": None, "default": None}


class TestReadOnly:
    """Test that a built schema cannot be changed."""

    def test_frozen(self) -> None:
        """Test attribute assignment is rejected."""
        schema = parse_schema({"type": "string"})
        with pytest.raises(ValidationError):
            schema.min_length = 3

    def test_required_is_immutable(self) -> None:
        """Test the required list cannot be appended to."""
        schema = parse_schema({"type": "object", "required": ["a"]})
        assert schema.required == ("a",)
        with pytest.raises(AttributeError):
            schema.required.append("b")

    def test_properties_are_read_only(self) -> None:
        """Test properties cannot be added or removed."""
        schema = parse_schema({"type": "object", "properties": {"a": {"type": "string"}}})
        with pytest.raises(TypeError):
            schema.properties["b"] = parse_schema({"type": "number"})
        with pytest.raises(TypeError):
            del schema.properties["a"]
        assert list(schema.properties) == ["a"]

    def test_enum_and_type_are_immutable(self) -> None:
        """Test enum members and the nullable type pair are tuples."""
        assert parse_schema({"enum": ["a", "b"]}).enum == ("a", "b")
        assert parse_schema({"type": ["string", "null"]}).type == ("string", "null")

    def test_input_mapping_is_not_shared(self) -> None:
        """Test changing the source mapping leaves the schema untouched."""
        schema_json = {"type": "object", "properties": {"a": {"type": "string"}}, "required": ["a"]}
        schema = parse_schema(schema_json)
        schema_json["properties"]["b"] = {"type": "number"}
        schema_json["required"].append("b")
        assert list(schema.properties) == ["a"]
        assert schema.required == ("a",)
