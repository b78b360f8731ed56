"""Well-formedness validator for schemas.

Checks that an arbitrary JSON value is a legal schema of the supported
subset and builds the matching model. Each kind accepts a closed set of
keywords; anything else is reported by name.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from normkit.exceptions import NormalizationError
from normkit.json_types import json_normalizer
from normkit.normalizer import MISSING, Normalizer, Warn
from normkit.schema.models import (
    ANNOTATION_KEYWORDS,
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
)

logger = logging.getLogger(__name__)

NULLABLE_TYPE_MESSAGE = 'Type must be a single type or a tuple of [type, "null"] for nullable types.'


# =============================================================================
# HELPERS
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value: int | float) -> bool:
    return isinstance(value, int) or value.is_integer()


def _reject_unsupported(context: str, keywords: Mapping[str, Any], *allowed: str) -> None:
    unsupported = [key for key in keywords if key not in allowed]
    if unsupported:
        listed = ", ".join(f'"{key}"' for key in unsupported)
        raise NormalizationError(f"When {context}, these properties are not supported: {listed}.")


def _check_count(name: str, value: Any) -> None:
    """Lengths and item counts are non-negative integers."""
    if value is MISSING:
        return
    if not _is_number(value):
        raise NormalizationError(f'"{name}" must be a number.')
    if value < 0:
        raise NormalizationError(f'"{name}" cannot be negative.')
    if not _is_integral(value):
        raise NormalizationError(f'"{name}" must be an integer.')


def _check_number(name: str, value: Any) -> None:
    if value is not MISSING and not _is_number(value):
        raise NormalizationError(f'"{name}" must be a number.')


def _check_annotations(value: Mapping[str, Any]) -> None:
    for key in ("$comment", "title", "description"):
        if key in value and not isinstance(value[key], str):
            raise NormalizationError(f'"{key}" must be a string.')
    if "examples" in value and not isinstance(value["examples"], (list, tuple)):
        raise NormalizationError('"examples" must be an array.')


def _nested(value: Any, prefix: str, warn: Warn) -> Schema:
    return schema_normalizer.required.normalize(value).get_value(warn, prefix=prefix)


# =============================================================================
# KIND PARSERS
# =============================================================================


def _parse_string(value: dict[str, Any], keywords: dict[str, Any]) -> StringSchema:
    _reject_unsupported('type is "string"', keywords, "minLength", "maxLength", "format")
    min_length = keywords.get("minLength", MISSING)
    max_length = keywords.get("maxLength", MISSING)
    _check_count("minLength", min_length)
    _check_count("maxLength", max_length)
    if min_length is not MISSING and max_length is not MISSING and max_length < min_length:
        raise NormalizationError('"maxLength" cannot be less than "minLength".')
    if "format" in keywords and not isinstance(keywords["format"], str):
        raise NormalizationError('"format" must be a string.')
    return StringSchema.model_validate(value)


def _parse_number(value: dict[str, Any], keywords: dict[str, Any], type_name: str) -> NumberSchema:
    _reject_unsupported(
        f'type is "{type_name}"',
        keywords,
        "minimum",
        "maximum",
        "exclusiveMinimum",
        "exclusiveMaximum",
        "multipleOf",
    )
    minimum = keywords.get("minimum", MISSING)
    maximum = keywords.get("maximum", MISSING)
    exclusive_minimum = keywords.get("exclusiveMinimum", MISSING)
    exclusive_maximum = keywords.get("exclusiveMaximum", MISSING)
    multiple_of = keywords.get("multipleOf", MISSING)

    _check_number("minimum", minimum)
    _check_number("maximum", maximum)
    if minimum is not MISSING and maximum is not MISSING and maximum < minimum:
        raise NormalizationError('"maximum" cannot be less than "minimum".')
    _check_number("exclusiveMinimum", exclusive_minimum)
    _check_number("exclusiveMaximum", exclusive_maximum)
    if (
        exclusive_minimum is not MISSING
        and exclusive_maximum is not MISSING
        and exclusive_maximum <= exclusive_minimum
    ):
        raise NormalizationError('"exclusiveMaximum" must be greater than "exclusiveMinimum".')
    if multiple_of is not MISSING:
        _check_number("multipleOf", multiple_of)
        if multiple_of <= 0:
            raise NormalizationError('"multipleOf" must be positive.')
    return NumberSchema.model_validate(value)


def _parse_array(value: dict[str, Any], keywords: dict[str, Any], warn: Warn) -> ArraySchema:
    _reject_unsupported('type is "array"', keywords, "items", "minItems", "maxItems")
    payload = dict(value)
    if "items" in keywords:
        payload["items"] = _nested(keywords["items"], "items", warn)
    min_items = keywords.get("minItems", MISSING)
    max_items = keywords.get("maxItems", MISSING)
    _check_count("minItems", min_items)
    _check_count("maxItems", max_items)
    if min_items is not MISSING and max_items is not MISSING and max_items < min_items:
        raise NormalizationError('"maxItems" cannot be less than "minItems".')
    return ArraySchema.model_validate(payload)


def _parse_object(value: dict[str, Any], keywords: dict[str, Any], warn: Warn) -> ObjectSchema:
    _reject_unsupported('type is "object"', keywords, "properties", "additionalProperties", "required")
    payload = dict(value)

    if "properties" in keywords:
        properties = keywords["properties"]
        if not isinstance(properties, Mapping):
            raise NormalizationError('"properties" must be an object.')
        payload["properties"] = {
            key: _nested(property_schema, f"properties.{key}", warn)
            for key, property_schema in properties.items()
        }

    additional_properties = keywords.get("additionalProperties", MISSING)
    if additional_properties is not MISSING and additional_properties is not True:
        payload["additionalProperties"] = _nested(additional_properties, "additionalProperties", warn)

    if "required" in keywords:
        required = keywords["required"]
        if not isinstance(required, (list, tuple)):
            raise NormalizationError('"required" must be an array.')
        if not all(isinstance(item, str) for item in required):
            raise NormalizationError('"required" array must contain only strings.')

    return ObjectSchema.model_validate(payload)


# =============================================================================
# ENTRY POINT
# =============================================================================


def _parse_schema(value: Any, warn: Warn) -> Schema | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise NormalizationError("Schema must be an object.")

    value = dict(value)
    _check_annotations(value)
    keywords = {key: item for key, item in value.items() if key not in ANNOTATION_KEYWORDS}

    if "const" in keywords:
        _reject_unsupported('"const" is declared', keywords, "const")
        return ConstSchema.model_validate(value)

    if "enum" in keywords:
        enum_values = keywords["enum"]
        if not isinstance(enum_values, (list, tuple)):
            raise NormalizationError('"enum" must be an array.')
        if len(enum_values) == 0:
            raise NormalizationError('"enum" must have at least one value.')
        _reject_unsupported('"enum" is declared', keywords, "enum")
        return EnumSchema.model_validate(value)

    type_value = keywords.pop("type", MISSING)

    if type_value is MISSING or type_value == "any":
        context = "no type is specified" if type_value is MISSING else 'type is "any"'
        _reject_unsupported(context, keywords)
        return AnySchema.model_validate(value)

    if isinstance(type_value, (list, tuple)):
        non_null = [item for item in type_value if item != "null"]
        if len(type_value) != 2 or len(non_null) != 1:
            raise NormalizationError(NULLABLE_TYPE_MESSAGE)
        type_name = non_null[0]
    else:
        type_name = type_value

    if not isinstance(type_name, str):
        raise NormalizationError('"type" must be a string or an array of strings.')

    if type_name == "null":
        _reject_unsupported('type is "null"', keywords)
        return NullSchema.model_validate(value)

    if type_name == "string":
        return _parse_string(value, keywords)

    if type_name in ("number", "integer"):
        return _parse_number(value, keywords, type_name)

    if type_name == "boolean":
        _reject_unsupported('type is "boolean"', keywords)
        return BooleanSchema.model_validate(value)

    if type_name == "array":
        return _parse_array(value, keywords, warn)

    if type_name == "object":
        return _parse_object(value, keywords, warn)

    raise NormalizationError(f'Unsupported type "{type_name}".')


schema_normalizer: Normalizer[Schema | None] = json_normalizer.chain(_parse_schema)
"""Validates a JSON value as a schema and returns the schema model.

``None`` passes through; use ``schema_normalizer.required`` to reject it.
"""


def parse_schema(value: Any) -> Schema:
    """Build a schema model from a JSON mapping.

    Raises:
        NormalizationError: If the value is not a well-formed schema.
    """
    result = schema_normalizer.required.normalize(value)
    if not result.ok:
        logger.debug("Rejected schema: %s", result.error_message)
    return result.value
