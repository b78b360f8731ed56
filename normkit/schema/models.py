"""Schema models for the supported JSON Schema subset.

A schema is exactly one of nine kinds, each a frozen Pydantic model with a
closed keyword set. Keyword lists are stored as tuples and ``properties`` as
a read-only mapping, so a built schema cannot be changed in place. JSON
literals (``const``, ``default`` and the members of ``enum`` and
``examples``) are kept as given.

Models are built by the well-formedness validator
(:mod:`normkit.schema.wellformed`) and serialize back to the JSON mapping
they were built from via :meth:`SchemaBase.to_json`.

See https://json-schema.org/draft/2020-12 for the keyword semantics.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
)

# =============================================================================
# ENUMS
# =============================================================================


class SchemaKind(str, Enum):
    """Discriminant of a schema.

    ``NUMBER`` covers both ``"number"`` and ``"integer"`` types.
    """

    CONST = "const"
    ENUM = "enum"
    ANY = "any"
    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


ANNOTATION_KEYWORDS = ("$comment", "title", "description", "default", "examples")

STRING_FORMATS = ("date-time", "email", "uuid", "uri")


def _dump_as_list(value: Any, handler: SerializerFunctionWrapHandler) -> Any:
    dumped = handler(value)
    return list(dumped) if isinstance(dumped, tuple) else dumped


# =============================================================================
# BASE MODELS
# =============================================================================


class SchemaBase(BaseModel):
    """Annotation keywords shared by every schema kind."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ClassVar[SchemaKind]

    comment: str | None = Field(default=None, alias="$comment")
    title: str | None = None
    description: str | None = None
    default_value: Any = Field(default=None, alias="default")
    examples: tuple[Any, ...] | None = None

    @field_serializer("examples", mode="wrap")
    def _serialize_examples(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        return _dump_as_list(value, handler)

    def to_json(self) -> dict[str, Any]:
        """The schema as a JSON mapping, with only the keywords it was built from."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class TypedSchema(SchemaBase):
    """A schema validated by its ``type`` keyword.

    ``type`` is either a type name or a ``[type, "null"]`` pair for
    nullable types.
    """

    type: str | tuple[str, ...]

    @field_serializer("type", mode="wrap")
    def _serialize_type(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        return _dump_as_list(value, handler)

    @property
    def base_type(self) -> str:
        """The type name without the nullable marker."""
        if isinstance(self.type, tuple):
            return next(item for item in self.type if item != "null")
        return self.type

    @property
    def nullable(self) -> bool:
        """Whether ``None`` is accepted."""
        if isinstance(self.type, tuple):
            return "null" in self.type
        return self.type == "null"


# =============================================================================
# SCHEMA KINDS
# =============================================================================


class ConstSchema(SchemaBase):
    """Accepts exactly one value."""

    kind: ClassVar[SchemaKind] = SchemaKind.CONST

    const: Any


class EnumSchema(SchemaBase):
    """Accepts any of a non-empty list of values."""

    kind: ClassVar[SchemaKind] = SchemaKind.ENUM

    enum: tuple[Any, ...]

    @field_serializer("enum", mode="wrap")
    def _serialize_enum(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        return _dump_as_list(value, handler)


class AnySchema(SchemaBase):
    """Accepts every value. ``type`` is absent or ``"any"``."""

    kind: ClassVar[SchemaKind] = SchemaKind.ANY

    type: Literal["any"] | None = None


class NullSchema(TypedSchema):
    kind: ClassVar[SchemaKind] = SchemaKind.NULL


class StringSchema(TypedSchema):
    kind: ClassVar[SchemaKind] = SchemaKind.STRING

    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    format: str | None = None


class NumberSchema(TypedSchema):
    """``"number"`` or ``"integer"``."""

    kind: ClassVar[SchemaKind] = SchemaKind.NUMBER

    minimum: int | float | None = None
    maximum: int | float | None = None
    exclusive_minimum: int | float | None = Field(default=None, alias="exclusiveMinimum")
    exclusive_maximum: int | float | None = Field(default=None, alias="exclusiveMaximum")
    multiple_of: int | float | None = Field(default=None, alias="multipleOf")


class BooleanSchema(TypedSchema):
    kind: ClassVar[SchemaKind] = SchemaKind.BOOLEAN


class ArraySchema(TypedSchema):
    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY

    items: Schema | None = None
    min_items: int | None = Field(default=None, alias="minItems")
    max_items: int | None = Field(default=None, alias="maxItems")


class ObjectSchema(TypedSchema):
    """Objects with declared properties.

    ``additional_properties`` is a schema for undeclared properties, or
    ``True`` to accept them without checks.
    """

    kind: ClassVar[SchemaKind] = SchemaKind.OBJECT

    properties: Mapping[str, Schema] | None = None
    additional_properties: Schema | Literal[True] | None = Field(default=None, alias="additionalProperties")
    required: tuple[str, ...] | None = None

    @field_validator("properties", mode="after")
    @classmethod
    def _freeze_properties(cls, value: Mapping[str, Schema] | None) -> Mapping[str, Schema] | None:
        return None if value is None else MappingProxyType(dict(value))

    @field_serializer("properties", mode="wrap")
    def _serialize_properties(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        return handler(None if value is None else dict(value))

    @field_serializer("required", mode="wrap")
    def _serialize_required(self, value: Any, handler: SerializerFunctionWrapHandler) -> Any:
        return _dump_as_list(value, handler)


Schema = Union[
    ConstSchema,
    EnumSchema,
    AnySchema,
    NullSchema,
    StringSchema,
    NumberSchema,
    BooleanSchema,
    ArraySchema,
    ObjectSchema,
]

ArraySchema.model_rebuild()
ObjectSchema.model_rebuild()


# Type keyword -> model class, for the typed kinds.
TYPED_SCHEMA_MODELS: dict[str, type[TypedSchema]] = {
    "null": NullSchema,
    "string": StringSchema,
    "number": NumberSchema,
    "integer": NumberSchema,
    "boolean": BooleanSchema,
    "array": ArraySchema,
    "object": ObjectSchema,
}


def is_any_schema(schema: Schema) -> bool:
    """Whether the schema accepts every value."""
    return isinstance(schema, AnySchema)


__all__ = [
    "ANNOTATION_KEYWORDS",
    "STRING_FORMATS",
    "TYPED_SCHEMA_MODELS",
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
]
