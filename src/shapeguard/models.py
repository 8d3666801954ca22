"""Pydantic models for shapeguard schemas and options.

A schema is written as plain data (usually loaded from YAML or JSON) and
parsed once into these models:

- A *node* describes one kind of value: ``string``, ``number``, ``boolean``,
  ``date``, ``object`` or ``array``. Nodes are told apart by their ``type``.
- A *type* is a single node or a list of at least two nodes (a field union).
- A *schema* maps field names to types, or is a list of at least two such
  mappings (a schema union).

Example:
    >>> schema = parse_schema({
    ...     "name": {"type": "string", "max": 32},
    ...     "tags": {"type": "array", "items": {"type": "string"}},
    ... })
    >>> schema["name"].trim
    True
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter, field_validator, model_validator

from ._base import GuardBaseModel
from .dates import to_instant


class BaseNodeModel(GuardBaseModel):
    """Attributes shared by every schema node.

    Attributes:
        required: Whether an absent value is a violation.
        nullable: Whether ``None`` is an accepted value.
        default: Value injected when the field is absent.
        has_default: Whether a default was explicitly provided. Set from the
            input, so that ``default: null`` differs from no default at all.
    """

    required: bool = True
    nullable: bool = False
    default: Any = None
    has_default: bool = False

    @model_validator(mode="before")
    @classmethod
    def set_has_default(cls, values: Any) -> Any:
        """Set has_default based on whether default is present in input."""
        if isinstance(values, dict) and "default" in values:
            values = {**values, "has_default": True}
        return values

    @property
    def accepts_null(self) -> bool:
        """Whether an observed ``None`` passes: nullable, or an explicit null default."""
        return self.nullable or (self.has_default and self.default is None)


class StringNode(BaseNodeModel):
    """String rules. Normalization runs trim, then lowercase, then uppercase."""

    type: Literal["string"]
    default: str | None = None
    enum: list[str] | None = None
    pattern: str | None = None
    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)
    trim: bool = True
    lowercase: bool = False
    uppercase: bool = False

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"Invalid pattern {value!r}: {e}") from e
        return value


class NumberNode(BaseNodeModel):
    """Number rules. ``positive`` accepts zero, ``negative`` does not."""

    type: Literal["number"]
    default: int | float | None = None
    enum: list[int | float] | None = None
    min: int | float | None = None
    max: int | float | None = None
    integer: bool = False
    positive: bool = False
    negative: bool = False


class BooleanNode(BaseNodeModel):
    type: Literal["boolean"]
    default: bool | None = None


class DateNode(BaseNodeModel):
    """Date rules. Bounds are ISO-8601 strings compared as instants."""

    type: Literal["date"]
    default: str | None = None
    min: str | None = None
    max: str | None = None

    @field_validator("min", "max")
    @classmethod
    def check_bound(cls, value: str | None) -> str | None:
        if value is not None:
            to_instant(value)
        return value


class ObjectNode(BaseNodeModel):
    type: Literal["object"]
    properties: Schema
    default: dict[str, Any] | None = None


class ArrayNode(BaseNodeModel):
    type: Literal["array"]
    items: TypeSpec
    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)
    default: list[Any] | None = None


SchemaNode = Annotated[
    Union[StringNode, NumberNode, BooleanNode, DateNode, ObjectNode, ArrayNode],
    Field(discriminator="type"),
]
TypeUnion = Annotated[list[SchemaNode], Field(min_length=2)]
TypeSpec = Union[SchemaNode, TypeUnion]
SchemaMapping = dict[str, TypeSpec]
SchemaUnion = Annotated[list[SchemaMapping], Field(min_length=2)]
Schema = Union[SchemaMapping, SchemaUnion]

NODE_TYPES = (StringNode, NumberNode, BooleanNode, DateNode, ObjectNode, ArrayNode)


class ValidateOptions(GuardBaseModel):
    """Options for one validation call.

    Attributes:
        abort_early: Raise at the first violation instead of collecting all.
        strip_unknown: Drop data keys and indices the schema does not declare.
        sort_keys: Deep-sort the keys of every mapping in the output.
        error_messages: Message templates keyed by ``"<category>.<rule>"``,
            e.g. ``"string.min"``. A nested ``{"string": {"min": ...}}``
            mapping is accepted and flattened.

    Example:
        >>> options = ValidateOptions(
        ...     abort_early=False,
        ...     error_messages={"base": {"required": "{path} is missing"}},
        ... )
        >>> options.error_messages["base.required"]
        '{path} is missing'
    """

    abort_early: bool = True
    strip_unknown: bool = False
    sort_keys: bool = False
    error_messages: dict[str, str] = Field(default_factory=dict)

    @field_validator("error_messages", mode="before")
    @classmethod
    def flatten_messages(cls, value: Any) -> Any:
        """Flatten ``{"category": {"rule": template}}`` into ``{"category.rule": template}``."""
        if not isinstance(value, dict):
            return value
        flat: dict[str, Any] = {}
        for key, template in value.items():
            if isinstance(template, dict):
                for rule, nested in template.items():
                    flat[f"{key}.{rule}"] = nested
            else:
                flat[key] = template
        return flat

    def merged(self, **overrides: Any) -> ValidateOptions:
        """Return a copy with *overrides* applied (``None`` values are ignored)."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return ValidateOptions.model_validate({**self.model_dump(), **updates})


ObjectNode.model_rebuild()
ArrayNode.model_rebuild()

_schema_adapter: TypeAdapter[Any] = TypeAdapter(Schema)
_type_adapter: TypeAdapter[Any] = TypeAdapter(TypeSpec)


def parse_schema(raw: Any) -> Any:
    """Parse a raw schema (mapping or list of mappings) into node models.

    Already-parsed schemas pass through unchanged.

    Raises:
        pydantic.ValidationError: If the schema is malformed.
    """
    return _schema_adapter.validate_python(raw)


def parse_type(raw: Any) -> Any:
    """Parse a raw single node or field union into node models."""
    return _type_adapter.validate_python(raw)


def is_node(value: Any) -> bool:
    return isinstance(value, NODE_TYPES)


def is_type_union(value: Any) -> bool:
    """A field union: a list whose members are nodes."""
    return isinstance(value, list) and bool(value) and all(is_node(v) for v in value)


def is_schema_union(value: Any) -> bool:
    """A schema union: a list whose members are field mappings."""
    return isinstance(value, list) and bool(value) and all(isinstance(v, dict) for v in value)
