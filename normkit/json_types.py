"""JSON value types, the JSON pipeline and the text codec.

Text is parsed as strict JSON first; anything that is not valid JSON is
retried as YAML, which accepts a relaxed superset (``#`` comments, unquoted
keys and strings, block style).
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any, TypeAlias

import yaml

from normkit.exceptions import NormalizationError
from normkit.messages import get_error_message
from normkit.normalizer import Normalized, Normalizer, Warn

JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]


# =============================================================================
# PREDICATES
# =============================================================================


def is_json_leaf(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def is_json_array(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(is_json(item) for item in value)


def is_json_object(value: Any) -> bool:
    return isinstance(value, Mapping) and all(
        isinstance(key, str) and is_json(item) for key, item in value.items()
    )


def is_json(value: Any) -> bool:
    """Whether ``value`` is made only of JSON-representable parts."""
    return is_json_leaf(value) or is_json_array(value) or is_json_object(value)


def _parse_json(value: Any, warn: Warn) -> JSONValue:
    if not is_json(value):
        raise NormalizationError("Invalid JSON object.")
    return value


json_normalizer: Normalizer[JSONValue] = Normalizer(_parse_json)


# =============================================================================
# TEXT CODEC
# =============================================================================


class _JsonLoader(yaml.SafeLoader):
    """SafeLoader that only types JSON scalars; any other plain scalar stays a string.

    YAML 1.1 would read ``1:30`` as 90, ``010`` as 8 and ``NO`` as false.
    """


_DIGITS = list("-0123456789")

# Only the merge key survives from the stock resolvers.
_JsonLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag == "tag:yaml.org,2002:merge"]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_JsonLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool", re.compile(r"^(?:true|false)$"), list("tf")
)
_JsonLoader.add_implicit_resolver("tag:yaml.org,2002:null", re.compile(r"^null$"), ["n"])
_JsonLoader.add_implicit_resolver(
    "tag:yaml.org,2002:int", re.compile(r"^-?(?:0|[1-9][0-9]*)$"), _DIGITS
)
_JsonLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(r"^-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?$"),
    _DIGITS,
)


def parse(text: str) -> Any:
    """Parse JSON text, falling back to YAML for relaxed input.

    Raises:
        NormalizationError: If the text is neither valid JSON nor YAML.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as json_error:
        try:
            return yaml.load(text, Loader=_JsonLoader)  # noqa: S506
        except yaml.YAMLError:
            raise NormalizationError(f"Invalid JSON: {json_error}") from json_error


def parse_safe(text: str) -> Normalized[Any]:
    """Like :func:`parse` but returns an error result instead of raising."""
    try:
        return Normalized.success(parse(text))
    except NormalizationError as error:
        return Normalized.failure(get_error_message(error))


def stringify(value: Any, indent: int | str | None = None) -> str:
    """Serialize a JSON value to text."""
    return json.dumps(value, indent=indent, ensure_ascii=False)


def stringify_safe(value: Any, indent: int | str | None = None) -> Normalized[str]:
    """Like :func:`stringify` but returns an error result instead of raising."""
    try:
        return Normalized.success(stringify(value, indent))
    except (TypeError, ValueError) as error:
        return Normalized.failure(get_error_message(error))


__all__ = [
    "JSONArray",
    "JSONObject",
    "JSONScalar",
    "JSONValue",
    "is_json",
    "json_normalizer",
    "parse",
    "parse_safe",
    "stringify",
    "stringify_safe",
]
