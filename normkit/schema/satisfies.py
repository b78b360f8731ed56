"""Structural compatibility between schemas.

``satisfies(provided, required)`` answers: does every value accepted by
``required`` (the old schema consumers rely on) pass ``provided`` (the new
schema)? It is the check to run before replacing a published schema.

Schemas must be well-formed (see :mod:`normkit.schema.wellformed`).
Recursion follows the nesting of the schemas without a depth limit.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from normkit.equality import have_same_contents
from normkit.json_types import JSONValue
from normkit.schema.models import (
    AnySchema,
    ArraySchema,
    ConstSchema,
    EnumSchema,
    NumberSchema,
    ObjectSchema,
    Schema,
    StringSchema,
    TypedSchema,
    is_any_schema,
)

logger = logging.getLogger(__name__)


def satisfies(provided: Schema, required: Schema) -> bool:
    """Whether ``provided`` accepts every value that ``required`` accepts.

    Args:
        provided: The new schema.
        required: The old schema.

    Returns:
        True if ``provided`` can replace ``required`` without rejecting any
        value that was valid before.
    """
    if is_any_schema(provided):
        return True

    if is_any_schema(required):
        return False

    if isinstance(required, ConstSchema):
        if isinstance(provided, ConstSchema):
            return have_same_contents(provided.const, required.const)
        if isinstance(provided, EnumSchema):
            return any(have_same_contents(option, required.const) for option in provided.enum)
        return schema_accepts_value(provided, required.const)

    if isinstance(required, EnumSchema):
        if isinstance(provided, ConstSchema):
            return len(required.enum) == 1 and have_same_contents(provided.const, required.enum[0])
        if isinstance(provided, EnumSchema):
            return all(
                any(have_same_contents(option, required_option) for option in provided.enum)
                for required_option in required.enum
            )
        return all(schema_accepts_value(provided, option) for option in required.enum)

    # A literal schema never covers a whole type.
    if not isinstance(provided, TypedSchema) or not isinstance(required, TypedSchema):
        return False

    if required.nullable and not provided.nullable:
        return False

    provided_type = provided.base_type
    required_type = required.base_type

    if required_type == "null":
        return provided_type == "null" or provided.nullable

    # number is a superset of integer
    if provided_type != required_type and not (provided_type == "number" and required_type == "integer"):
        logger.debug("Type %r does not satisfy type %r", provided_type, required_type)
        return False

    if required_type == "string":
        return _strings_satisfy(provided, required)  # type: ignore[arg-type]
    if required_type in ("number", "integer"):
        return _numbers_satisfy(provided, required)  # type: ignore[arg-type]
    if required_type == "boolean":
        return True
    if required_type == "array":
        return _arrays_satisfy(provided, required)  # type: ignore[arg-type]
    if required_type == "object":
        return _objects_satisfy(provided, required)  # type: ignore[arg-type]
    return False


# =============================================================================
# BOUNDS
# =============================================================================
#
# A bound set on ``provided`` but not on ``required`` narrows the accepted
# values, so it fails the comparison. A bound missing from ``provided``
# never does.


def _lower_bound_satisfies(provided: float | None, required: float | None) -> bool:
    if provided is None:
        return True
    if required is None:
        return False
    return provided <= required


def _upper_bound_satisfies(provided: float | None, required: float | None) -> bool:
    if provided is None:
        return True
    if required is None:
        return False
    return provided >= required


def _strings_satisfy(provided: StringSchema, required: StringSchema) -> bool:
    if not _lower_bound_satisfies(provided.min_length, required.min_length):
        return False
    if not _upper_bound_satisfies(provided.max_length, required.max_length):
        return False
    return provided.format is None or provided.format == required.format


def _numbers_satisfy(provided: NumberSchema, required: NumberSchema) -> bool:
    if not _lower_bound_satisfies(provided.minimum, required.minimum):
        return False
    if not _upper_bound_satisfies(provided.maximum, required.maximum):
        return False
    if not _lower_bound_satisfies(provided.exclusive_minimum, required.exclusive_minimum):
        return False
    if not _upper_bound_satisfies(provided.exclusive_maximum, required.exclusive_maximum):
        return False
    if provided.multiple_of is None:
        return True
    if required.multiple_of is None:
        return False
    # Every multiple of required's step must be a multiple of provided's step.
    return required.multiple_of % provided.multiple_of == 0


def _arrays_satisfy(provided: ArraySchema, required: ArraySchema) -> bool:
    if not _lower_bound_satisfies(provided.min_items, required.min_items):
        return False
    if not _upper_bound_satisfies(provided.max_items, required.max_items):
        return False
    if provided.items is None:
        return True
    if required.items is None:
        return is_any_schema(provided.items)
    return satisfies(provided.items, required.items)


def _objects_satisfy(provided: ObjectSchema, required: ObjectSchema) -> bool:
    # A property mandatory in provided must already have been mandatory.
    required_keys = set(required.required or ())
    if any(key not in required_keys for key in provided.required or ()):
        return False

    provided_properties = provided.properties or {}
    for key, required_property in (required.properties or {}).items():
        if key in provided_properties:
            if not satisfies(provided_properties[key], required_property):
                return False
        elif provided.additional_properties is not None and provided.additional_properties is not True:
            if not satisfies(provided.additional_properties, required_property):
                return False

    if required.additional_properties is None or provided.additional_properties is None:
        return True
    if required.additional_properties is True:
        return provided.additional_properties is True
    if provided.additional_properties is True:
        return True
    return satisfies(provided.additional_properties, required.additional_properties)


# =============================================================================
# LITERAL ACCEPTANCE
# =============================================================================


def schema_accepts_value(schema: Schema, value: JSONValue) -> bool:
    """Whether ``schema`` accepts one concrete value.

    Mirrors the value validator, except that ``format`` is assumed to be
    satisfied: literal values are taken as well-formed.
    """
    if isinstance(schema, AnySchema):
        return True
    if isinstance(schema, ConstSchema):
        return have_same_contents(value, schema.const)
    if isinstance(schema, EnumSchema):
        return any(have_same_contents(value, option) for option in schema.enum)

    base_type = schema.base_type

    if value is None:
        return schema.nullable

    if base_type == "null":
        return False

    if base_type == "string":
        if not isinstance(value, str):
            return False
        if schema.min_length is not None and len(value) < schema.min_length:  # type: ignore[union-attr]
            return False
        if schema.max_length is not None and len(value) > schema.max_length:  # type: ignore[union-attr]
            return False
        return True

    if base_type in ("number", "integer"):
        return _number_accepted(schema, value)  # type: ignore[arg-type]

    if base_type == "boolean":
        return isinstance(value, bool)

    if base_type == "array":
        if not isinstance(value, (list, tuple)):
            return False
        if schema.min_items is not None and len(value) < schema.min_items:  # type: ignore[union-attr]
            return False
        if schema.max_items is not None and len(value) > schema.max_items:  # type: ignore[union-attr]
            return False
        items = schema.items  # type: ignore[union-attr]
        return items is None or all(schema_accepts_value(items, item) for item in value)

    if base_type == "object":
        return _object_accepted(schema, value)  # type: ignore[arg-type]

    return False


def _number_accepted(schema: NumberSchema, value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    if schema.base_type == "integer" and not (isinstance(value, int) or value.is_integer()):
        return False
    if schema.minimum is not None and value < schema.minimum:
        return False
    if schema.maximum is not None and value > schema.maximum:
        return False
    if schema.exclusive_minimum is not None and value <= schema.exclusive_minimum:
        return False
    if schema.exclusive_maximum is not None and value >= schema.exclusive_maximum:
        return False
    if schema.multiple_of is not None and value % schema.multiple_of != 0:
        return False
    return True


def _object_accepted(schema: ObjectSchema, value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    if any(key not in value for key in schema.required or ()):
        return False
    properties = schema.properties or {}
    for key, property_value in value.items():
        if key in properties:
            if not schema_accepts_value(properties[key], property_value):
                return False
        elif schema.additional_properties is not None and schema.additional_properties is not True:
            if not schema_accepts_value(schema.additional_properties, property_value):
                return False
    return True
