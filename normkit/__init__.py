"""normkit: composable normalization pipelines and a JSON Schema subset.

Usage::

    from normkit import parse_schema, json_normalizer_with_schema

    schema = parse_schema({"type": "string", "format": "email"})
    result = json_normalizer_with_schema(schema).normalize("someone@example.com")
    if result.error_message:
        print(result.error_message)
"""

from __future__ import annotations

from normkit.exceptions import AbortedError, NormalizationError, NormkitError
from normkit.normalizer import (
    MISSING,
    AsyncNormalizer,
    Normalized,
    Normalizer,
    Warn,
    combine,
    normalize_array_inline,
    normalize_array_inline_async,
    normalize_object_inline,
    normalize_object_inline_async,
)
from normkit.schema import (
    Schema,
    SchemaKind,
    json_normalizer_with_schema,
    parse_schema,
    satisfies,
    schema_accepts_value,
    schema_normalizer,
    validate_against_schema,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "AbortedError",
    "AsyncNormalizer",
    "NormalizationError",
    "Normalized",
    "Normalizer",
    "NormkitError",
    "Schema",
    "SchemaKind",
    "Warn",
    "combine",
    "json_normalizer_with_schema",
    "normalize_array_inline",
    "normalize_array_inline_async",
    "normalize_object_inline",
    "normalize_object_inline_async",
    "parse_schema",
    "satisfies",
    "schema_accepts_value",
    "schema_normalizer",
    "validate_against_schema",
]
