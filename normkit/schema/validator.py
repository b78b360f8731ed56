"""Validate JSON values against schemas.

Errors are raised as ``NormalizationError`` and warnings are sent to the
run's ``Warn`` accumulator. Both are prefixed with the path of the
offending value, e.g. ``items[2].name: Value must be a string.``
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from normkit.equality import have_same_contents
from normkit.exceptions import NormalizationError
from normkit.formats import FORMAT_NORMALIZERS
from normkit.json_types import JSONValue, json_normalizer
from normkit.messages import prepend_message
from normkit.normalizer import Normalizer, Warn
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
    StringSchema,
    TypedSchema,
)

UNKNOWN_PROPERTY_WARNING = "Unknown property not defined in schema."


def json_normalizer_with_schema(schema: Schema) -> Normalizer[JSONValue]:
    """Pipeline that accepts JSON values conforming to ``schema``.

    The value is returned unchanged; warnings (unknown properties, format
    normalizer warnings) are reported on the result.
    """

    def parse(value: JSONValue, warn: Warn) -> JSONValue:
        validate_against_schema(value, schema, warn)
        return value

    return json_normalizer.chain(parse)


def validate_against_schema(
    value: JSONValue,
    schema: Schema,
    warn: Warn,
    path: str | None = None,
) -> None:
    """Check that ``value`` conforms to ``schema``.

    Args:
        value: The JSON value.
        schema: A well-formed schema model.
        warn: Receives path-prefixed warnings.
        path: Location of ``value`` in the enclosing document, None at the root.

    Raises:
        NormalizationError: With a path-prefixed message on the first violation.
    """

    def fail(message: str) -> NormalizationError:
        return NormalizationError(prepend_message(path, message) or message)

    if isinstance(schema, ConstSchema):
        if not have_same_contents(value, schema.const):
            raise fail(f"Value must be {_dump(schema.const)}.")
        return

    if isinstance(schema, EnumSchema):
        if not any(have_same_contents(value, option) for option in schema.enum):
            raise fail(f"Value must be one of: {', '.join(_dump(option) for option in schema.enum)}.")
        return

    if isinstance(schema, AnySchema):
        return

    if not isinstance(schema, TypedSchema):
        raise fail(f"Unsupported schema {type(schema).__name__}.")

    if value is None:
        if schema.nullable:
            return
        raise fail("Value cannot be null.")

    if isinstance(schema, NullSchema):
        raise fail("Value must be null.")

    if isinstance(schema, StringSchema):
        if not isinstance(value, str):
            raise fail("Value must be a string.")
        if schema.min_length is not None and len(value) < schema.min_length:
            raise fail(f"String length must be at least {schema.min_length}.")
        if schema.max_length is not None and len(value) > schema.max_length:
            raise fail(f"String length must be at most {schema.max_length}.")
        if schema.format is not None:
            _validate_string_format(value, schema.format, warn, path)
        return

    if isinstance(schema, NumberSchema):
        type_name = schema.base_type
        if not _is_number(value):
            raise fail(f"Value must be {'an' if type_name == 'integer' else 'a'} {type_name}.")
        if type_name == "integer" and not _is_integral(value):
            raise fail("Value must be an integer.")
        if schema.minimum is not None and value < schema.minimum:
            raise fail(f"Value must be at least {_number(schema.minimum)}.")
        if schema.maximum is not None and value > schema.maximum:
            raise fail(f"Value must be at most {_number(schema.maximum)}.")
        if schema.exclusive_minimum is not None and value <= schema.exclusive_minimum:
            raise fail(f"Value must be greater than {_number(schema.exclusive_minimum)}.")
        if schema.exclusive_maximum is not None and value >= schema.exclusive_maximum:
            raise fail(f"Value must be less than {_number(schema.exclusive_maximum)}.")
        if schema.multiple_of is not None and value % schema.multiple_of != 0:
            raise fail(f"Value must be a multiple of {_number(schema.multiple_of)}.")
        return

    if isinstance(schema, BooleanSchema):
        if not isinstance(value, bool):
            raise fail("Value must be a boolean.")
        return

    if isinstance(schema, ArraySchema):
        if not isinstance(value, (list, tuple)):
            raise fail("Value must be an array.")
        if schema.min_items is not None and len(value) < schema.min_items:
            raise fail(f"Array must have at least {schema.min_items} item(s).")
        if schema.max_items is not None and len(value) > schema.max_items:
            raise fail(f"Array must have at most {schema.max_items} item(s).")
        if schema.items is not None:
            for index, item in enumerate(value):
                validate_against_schema(item, schema.items, warn, f"{path or ''}[{index}]")
        return

    if isinstance(schema, ObjectSchema):
        if not isinstance(value, Mapping):
            raise fail("Value must be an object.")
        for required_key in schema.required or ():
            if required_key not in value:
                raise fail(f'Missing required property "{required_key}".')

        properties = schema.properties or {}
        for key, property_value in value.items():
            property_path = f"{path}.{key}" if path else key
            if key in properties:
                validate_against_schema(property_value, properties[key], warn, property_path)
            elif schema.additional_properties is not None:
                if schema.additional_properties is not True:
                    validate_against_schema(property_value, schema.additional_properties, warn, property_path)
            elif properties:
                warn(prepend_message(property_path, UNKNOWN_PROPERTY_WARNING))
        return

    raise fail(f'Unsupported schema type "{schema.base_type}".')


def _validate_string_format(value: str, format_name: str, warn: Warn, path: str | None) -> None:
    """Delegate to the format's normalizer; unknown formats are accepted."""
    entry = FORMAT_NORMALIZERS.get(format_name)
    if entry is None:
        return
    normalizer, error_message = entry
    normalized = normalizer.normalize(value)
    if normalized.error_message:
        raise NormalizationError(prepend_message(path, error_message) or error_message)
    if normalized.warning_message:
        warn(prepend_message(path, normalized.warning_message))


# =============================================================================
# HELPERS
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value: int | float) -> bool:
    return isinstance(value, int) or value.is_integer()


def _number(value: int | float) -> str:
    """Render ``5.0`` as ``5``, like JSON does."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _dump(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
