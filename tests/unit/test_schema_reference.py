"""Cross-check the value validator against the jsonschema reference library.

Only keywords whose meaning is identical in both are used: no "any"
type and no formats.
"""

from __future__ import annotations

import pytest
from jsonschema import Draft202012Validator

from normkit.schema import json_normalizer_with_schema, parse_schema

CASES = [
    ({"type": "string"}, "x"),
    ({"type": "string"}, 1),
    ({"type": "string"}, None),
    ({"type": ["string", "null"]}, None),
    ({"type": "string", "minLength": 2}, "a"),
    ({"type": "string", "maxLength": 2}, "ab"),
    ({"type": "number"}, 1.5),
    ({"type": "number"}, True),
    ({"type": "number"}, "1"),
    ({"type": "integer"}, 3),
    ({"type": "integer"}, 3.0),
    ({"type": "integer"}, 3.5),
    ({"type": "number", "minimum": 1}, 1),
    ({"type": "number", "exclusiveMinimum": 1}, 1),
    ({"type": "number", "maximum": 1}, 1.5),
    ({"type": "number", "exclusiveMaximum": 2}, 1.999),
    ({"type": "integer", "multipleOf": 3}, 9),
    ({"type": "integer", "multipleOf": 3}, 10),
    ({"type": "boolean"}, False),
    ({"type": "boolean"}, 0),
    ({"type": "null"}, None),
    ({"type": "null"}, "null"),
    ({"const": {"a": [1, 2]}}, {"a": [1, 2]}),
    ({"const": {"a": [1, 2]}}, {"a": [2, 1]}),
    ({"const": True}, 1),
    ({"enum": ["a", 1, None]}, None),
    ({"enum": ["a", 1, None]}, "b"),
    ({"type": "array", "items": {"type": "integer"}}, [1, 2, 3]),
    ({"type": "array", "items": {"type": "integer"}}, [1, "2"]),
    ({"type": "array", "minItems": 2}, [1]),
    ({"type": "array", "maxItems": 2}, [1, 2, 3]),
    ({"type": "array"}, {"0": 1}),
    ({"type": "object", "required": ["a"]}, {"b": 1}),
    ({"type": "object", "properties": {"a": {"type": "string"}}}, {"a": 1}),
    ({"type": "object", "properties": {"a": {"type": "string"}}}, {"b": 1}),
    ({"type": "object", "additionalProperties": {"type": "number"}}, {"x": 1, "y": 2.5}),
    ({"type": "object", "additionalProperties": {"type": "number"}}, {"x": "1"}),
    ({"type": "object", "properties": {"a": {}}, "additionalProperties": True}, {"a": 1, "b": [None]}),
    ({"type": "object"}, []),
    (
        {
            "type": "object",
            "properties": {
                "tags": {"type": "array", "items": {"type": "string", "minLength": 1}},
                "owner": {"type": ["object", "null"], "properties": {"id": {"type": "integer"}}, "required": ["id"]},
            },
            "required": ["tags"],
        },
        {"tags": ["a", ""], "owner": None},
    ),
    (
        {
            "type": "object",
            "properties": {
                "owner": {"type": ["object", "null"], "properties": {"id": {"type": "integer"}}, "required": ["id"]},
            },
        },
        {"owner": {"id": 7}},
    ),
]


class TestAgainstReferenceValidator:
    """Accept/reject decisions match jsonschema's Draft 2020-12 validator."""

    @pytest.mark.parametrize(("schema_json", "value"), CASES)
    def test_same_decision(self, schema_json, value) -> None:
        """Test accept and reject decisions match Draft 2020-12."""
        Draft202012Validator.check_schema(schema_json)
        expected = Draft202012Validator(schema_json).is_valid(value)

        result = json_normalizer_with_schema(parse_schema(schema_json)).normalize(value)

        assert result.ok is expected, result.error_message
