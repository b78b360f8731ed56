"""JSON Schema subset: models, validators and compatibility checks.

Usage::

    from normkit.schema import json_normalizer_with_schema, parse_schema, satisfies

    old = parse_schema({"type": "object", "properties": {"a": {"type": "string"}}})
    new = parse_schema({"type": "object", "properties": {"a": {"type": ["string", "null"]}}})
    satisfies(new, old)  # True

    result = json_normalizer_with_schema(old).normalize({"a": "x", "b": 1})
    result.warning_message  # "b: Unknown property not defined in schema."
"""

from __future__ import annotations

from normkit.schema.models import (
    AnySchema,
    ArraySchema,
    BooleanSchema,
    ConstSchema,
    EnumSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    Schema,
    SchemaBase,
    SchemaKind,
    StringSchema,
    TypedSchema,
    is_any_schema,
)
from normkit.schema.satisfies import satisfies, schema_accepts_value
from normkit.schema.validator import json_normalizer_with_schema, validate_against_schema
from normkit.schema.wellformed import parse_schema, schema_normalizer

__all__ = [
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "ConstSchema",
    "EnumSchema",
    "NullSchema",
    "NumberSchema",
    "ObjectSchema",
    "Schema",
    "SchemaBase",
    "SchemaKind",
    "StringSchema",
    "TypedSchema",
    "is_any_schema",
    "json_normalizer_with_schema",
    "parse_schema",
    "satisfies",
    "schema_accepts_value",
    "schema_normalizer",
    "validate_against_schema",
]
