"""Built-in pipelines and step factories.

``None`` is treated as "no value" by every pipeline here and is passed
through untouched; use ``.required`` to reject it.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from normkit.exceptions import NormalizationError
from normkit.normalizer.pipeline import Normalizer, ParseOrThrow
from normkit.normalizer.warn import Warn

WHITESPACE_WARNING = "Leading or trailing whitespace is removed."

# Longer lists of allowed values are not spelled out in error messages.
MAX_LISTED_VALUES = 7


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# =============================================================================
# ANY
# =============================================================================


any_value: Normalizer[Any] = Normalizer(lambda value, warn: value)


# =============================================================================
# STRINGS
# =============================================================================


def _parse_string(value: Any, warn: Warn) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        warn("Expected a string.")
        if isinstance(value, bool):
            value = "true" if value else "false"
        else:
            value = str(value)
    return value or None


def _trim(value: str | None, warn: Warn) -> str | None:
    if not value:
        return value
    trimmed = value.strip()
    if not trimmed:
        return value
    if len(trimmed) != len(value):
        warn(WHITESPACE_WARNING)
    return trimmed


def _lower(value: str | None, warn: Warn) -> str | None:
    return value.lower() if value else value


string: Normalizer[str | None] = Normalizer(_parse_string)
"""Coerces to a string (warning when coercion happens); empty strings become None."""

string_trimmed: Normalizer[str | None] = string.chain(_trim)
"""Like ``string`` but trims whitespace, warning when something was removed."""

string_trimmed_and_lower_cased: Normalizer[str | None] = string_trimmed.chain(_lower)


def string_limit_length(minimum: int, maximum: int) -> ParseOrThrow[str | None]:
    """Step that warns when a string's length is outside ``[minimum, maximum]``."""

    def parse(value: str | None, warn: Warn) -> str | None:
        if value is None:
            return None
        if len(value) < minimum:
            warn(f"At least {minimum} characters.")
        if len(value) > maximum:
            warn(f"At most {maximum} characters.")
        return value

    return parse


def string_enum_values(*allowed_values: str) -> ParseOrThrow[str | None]:
    """Step that rejects strings outside ``allowed_values``."""

    def parse(value: str | None, warn: Warn) -> str | None:
        if value is None:
            return None
        if value not in allowed_values:
            if len(allowed_values) < MAX_LISTED_VALUES:
                listed = ", ".join(f'"{allowed}"' for allowed in allowed_values)
                raise NormalizationError(f"Expected one of the following values: {listed}.")
            raise NormalizationError("Invalid value.")
        return value

    return parse


def string_enum(enum_class: type[Enum]) -> ParseOrThrow[str | None]:
    """Step that rejects strings that are not values of ``enum_class``."""
    return string_enum_values(*(str(member.value) for member in enum_class))


# =============================================================================
# NUMBERS
# =============================================================================


def _parse_number(value: Any, warn: Warn) -> int | float | None:
    if value is None:
        return None
    if _is_number(value):
        parsed = value
    else:
        warn("Expected a number.")
        if isinstance(value, bool):
            parsed = int(value)
        elif isinstance(value, str):
            text = value.strip()
            try:
                parsed = float(text) if text else 0
            except ValueError:
                parsed = math.nan
            if isinstance(parsed, float) and parsed.is_integer():
                parsed = int(parsed)
        else:
            parsed = math.nan
    if isinstance(parsed, float) and math.isnan(parsed):
        raise NormalizationError("Invalid number value.")
    return parsed


def _parse_integer(value: int | float | None, warn: Warn) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, float) and not value.is_integer():
        raise NormalizationError("Expected an integer number.")
    return value


number: Normalizer[int | float | None] = Normalizer(_parse_number)
"""Coerces to a number (warning when coercion happens); NaN is an error."""

number_integer: Normalizer[int | float | None] = number.chain(_parse_integer)


def number_limit_range(minimum: float, maximum: float) -> ParseOrThrow[int | float | None]:
    """Step that warns when a number is outside ``[minimum, maximum]``.

    Zero is always accepted without a warning.
    """

    def parse(value: int | float | None, warn: Warn) -> int | float | None:
        if not value:
            return value
        if value < minimum:
            warn(f"At least {minimum}.")
        if value > maximum:
            warn(f"At most {maximum}.")
        return value

    return parse


# =============================================================================
# BOOLEANS
# =============================================================================


def _parse_boolean(value: Any, warn: Warn) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    warn("Expected a boolean.")
    if value == "true":
        return True
    if value == "false":
        return False
    raise NormalizationError("Invalid boolean value.")


boolean: Normalizer[bool | None] = Normalizer(_parse_boolean)
"""Accepts booleans and the strings ``"true"``/``"false"``."""


# =============================================================================
# OBJECTS & ARRAYS
# =============================================================================


def _parse_object(value: Any, warn: Warn) -> Mapping[str, Any] | None:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise NormalizationError("Expected an object.")
    return value


object_value: Normalizer[Mapping[str, Any] | None] = Normalizer(_parse_object)


def object_require_keys(*keys: str) -> ParseOrThrow[Mapping[str, Any] | None]:
    """Step that rejects objects missing any of ``keys``."""

    def parse(value: Mapping[str, Any] | None, warn: Warn) -> Mapping[str, Any] | None:
        if value is None:
            return None
        missing_keys = [key for key in keys if key not in value]
        if missing_keys:
            noun = "property" if len(missing_keys) == 1 else "properties"
            raise NormalizationError(f"Missing required {noun}: {', '.join(missing_keys)}.")
        return value

    return parse


def _parse_array(value: Any, warn: Warn) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


array: Normalizer[list[Any]] = Normalizer(_parse_array)
"""Wraps a single value in a list; None becomes an empty list."""


__all__ = [
    "MAX_LISTED_VALUES",
    "WHITESPACE_WARNING",
    "any_value",
    "array",
    "boolean",
    "number",
    "number_integer",
    "number_limit_range",
    "object_require_keys",
    "object_value",
    "string",
    "string_enum",
    "string_enum_values",
    "string_limit_length",
    "string_trimmed",
    "string_trimmed_and_lower_cased",
]
