"""Core validation logic for shapeguard."""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from pydantic import ValidationError as PydanticValidationError

from ._types import ABSENT
from .declare import declare as write_declaration
from .errors import (
    SchemaEngineError,
    ValidationError,
    Violation,
    ViolationCode,
    ViolationFound,
)
from .json_schema import to_json_schema
from .loaders import load_schema_from_file
from .messages import MessageCatalog
from .models import (
    ArrayNode,
    ObjectNode,
    ValidateOptions,
    is_schema_union,
    is_type_union,
    parse_schema,
)
from .paths import format_path
from .resolver import locate_type, matches, resolve_type
from .rules import FieldRules

logger = logging.getLogger(__name__)

_DROP = object()


def to_working_copy(value: Any) -> Any:
    """Deep-copy *value* into plain JSON-like containers.

    Tuples, numpy arrays and pandas Series become lists, DataFrames become
    lists of records, numpy scalars become Python scalars and pandas
    timestamps become ``datetime`` (``NaT`` becomes ``None``).
    """
    if value is pd.NaT:
        return None
    if isinstance(value, pd.DataFrame):
        return [to_working_copy(row) for row in value.replace({pd.NaT: None}).to_dict("records")]
    if isinstance(value, pd.Series):
        return [to_working_copy(item) for item in value.tolist()]
    if isinstance(value, np.ndarray):
        return [to_working_copy(item) for item in value.tolist()]
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, Mapping):
        return {key: to_working_copy(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_working_copy(item) for item in value]
    return copy.deepcopy(value)


def sort_keys(value: Any) -> Any:
    """Return *value* with the keys of every mapping sorted, recursively."""
    if isinstance(value, dict):
        return {key: sort_keys(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, list):
        return [sort_keys(item) for item in value]
    return value


def _seed_value(type_spec: Any, value: Any) -> None:
    if is_type_union(type_spec):
        # Only seed through a union when the value fits exactly one candidate.
        fitting = [candidate for candidate in type_spec if matches(candidate, value)]
        if len(fitting) != 1:
            return
        node = fitting[0]
    else:
        node = resolve_type(type_spec, value)
    if isinstance(node, ObjectNode) and isinstance(value, dict):
        if isinstance(node.properties, dict):
            seed_missing(node.properties, value)
    elif isinstance(node, ArrayNode) and isinstance(value, list):
        for item in value:
            _seed_value(node.items, item)


def seed_missing(schema: Mapping[str, Any], data: dict[str, Any]) -> dict[str, Any]:
    """Insert ``ABSENT`` for every declared key missing from *data*.

    Descends into nested objects (and the objects inside arrays) whose data
    is present, so the traversal sees every declared field.
    """
    for key, type_spec in schema.items():
        if key not in data:
            data[key] = ABSENT
        _seed_value(type_spec, data[key])
    return data


def coerce_options(options: ValidateOptions | Mapping[str, Any] | None) -> ValidateOptions:
    """Turn ``None``, a mapping or an options model into ``ValidateOptions``."""
    if options is None:
        return ValidateOptions()
    if isinstance(options, ValidateOptions):
        return options
    if isinstance(options, Mapping):
        try:
            return ValidateOptions.model_validate(dict(options))
        except PydanticValidationError as e:
            raise SchemaEngineError(f"Invalid validation options: {e}") from e
    raise SchemaEngineError(f"Options must be a mapping or ValidateOptions, got {type(options).__name__}")


class _Run:
    """State of one traversal over one single (non-union) schema."""

    def __init__(self, schema: Mapping[str, Any], options: ValidateOptions, rules: FieldRules):
        self.schema = schema
        self.options = options
        self.rules = rules
        self.violations: list[Violation] = []

    def report(self, violation: Violation) -> None:
        if self.options.abort_early:
            raise ValidationError([violation])
        self.violations.append(violation)


class SchemaValidator:
    """Validates and normalizes data against a shapeguard schema.

    The schema is parsed once, on construction. Each call to :meth:`validate`
    works on its own copy of the data:

    1. Seed: declared keys missing from the data are marked absent
    2. Traverse: every path is visited depth-first, parents before children
    3. Each path is matched to its schema node, unions are resolved from the
       shape of the value, and the node's rules normalize or reject it
    4. The normalized copy is returned, or a :class:`ValidationError` raised

    Example:
        >>> validator = SchemaValidator({
        ...     "email": {"type": "string", "lowercase": True},
        ...     "age": {"type": "number", "integer": True, "positive": True},
        ...     "role": {"type": "string", "enum": ["admin", "user"], "default": "user"},
        ... })
        >>> validator.validate({"email": " Ada@Example.com ", "age": 36})
        {'email': 'ada@example.com', 'age': 36, 'role': 'user'}
    """

    def __init__(self, schema: Any, options: ValidateOptions | Mapping[str, Any] | None = None):
        """Initialize the validator.

        Args:
            schema: A field mapping, a list of field mappings (schema union),
                or an already parsed schema.
            options: Default options for every call.

        Raises:
            SchemaEngineError: If the schema or the options are malformed.
        """
        try:
            self.schema = parse_schema(schema)
        except PydanticValidationError as e:
            raise SchemaEngineError(f"Invalid schema: {e}") from e
        self.options = coerce_options(options)

    @classmethod
    def from_file(
        cls, path: str | Path, options: ValidateOptions | Mapping[str, Any] | None = None
    ) -> SchemaValidator:
        """Create a SchemaValidator from a YAML or JSON schema file."""
        return cls(load_schema_from_file(path), options=options)

    def validate(
        self,
        data: Any,
        options: ValidateOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> Any:
        """Validate *data* and return its normalized copy.

        Args:
            data: The value to validate, usually a mapping parsed from JSON.
            options: Options for this call, replacing the validator's defaults.
            **overrides: Individual options (``abort_early``, ``strip_unknown``,
                ``sort_keys``, ``error_messages``) applied on top.

        Returns:
            The normalized data. The caller's object is never modified.

        Raises:
            ValidationError: If the data violates the schema.
            SchemaEngineError: For malformed options or unexpected failures.
        """
        base = self.options if options is None else coerce_options(options)
        try:
            effective = base.merged(**overrides)
        except PydanticValidationError as e:
            raise SchemaEngineError(f"Invalid validation options: {e}") from e

        try:
            if is_schema_union(self.schema):
                return self._validate_union(self.schema, data, effective)
            return self._validate_single(self.schema, data, effective)
        except (ValidationError, SchemaEngineError):
            raise
        except Exception as e:
            logger.error(f"Unexpected failure while validating: {e}")
            raise SchemaEngineError(f"Validation failed unexpectedly: {e}") from e

    async def validate_async(
        self,
        data: Any,
        options: ValidateOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> Any:
        """Awaitable form of :meth:`validate`.

        Yields to the event loop once, then validates synchronously.
        """
        await asyncio.sleep(0)
        return self.validate(data, options, **overrides)

    def to_json_schema(self, options: ValidateOptions | Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Export the schema as a JSON-Schema document."""
        return to_json_schema(self.schema, self.options if options is None else coerce_options(options))

    def declare(self, name: str, output_dir: str | Path = ".") -> Path:
        """Write a Python module declaring TypedDicts for the schema."""
        return write_declaration(self.schema, name, output_dir)

    def _validate_union(self, members: Sequence[Any], data: Any, options: ValidateOptions) -> Any:
        """Try each member schema in order; the first one that passes wins."""
        failures: list[ValidationError] = []
        for index, member in enumerate(members):
            try:
                result = self._validate_single(member, data, options)
            except ValidationError as e:
                logger.debug(f"Schema union member {index} rejected the data: {e}")
                failures.append(e)
                continue
            logger.debug(f"Schema union member {index} matched")
            return result

        if options.abort_early:
            raise failures[-1]

        # Fewest violations wins; min() keeps the earliest member on ties.
        closest = min(failures, key=lambda failure: len(failure.violations))
        rules = FieldRules(MessageCatalog(options.error_messages))
        no_match = rules.violation(ViolationCode.UNION_NO_MATCH, "base.union", "").violation
        raise ValidationError([no_match, *closest.violations])

    def _validate_single(self, schema: Mapping[str, Any], data: Any, options: ValidateOptions) -> Any:
        rules = FieldRules(MessageCatalog(options.error_messages))
        working = to_working_copy(data)
        if not isinstance(working, dict):
            raise ValidationError(
                [rules.violation(ViolationCode.TYPE_MISMATCH, "object.type", "").violation]
            )

        seed_missing(schema, working)
        run = _Run(schema, options, rules)
        result = self._walk(run, working, [])

        if run.violations:
            logger.debug(f"Collected {len(run.violations)} violations")
            raise ValidationError(run.violations)

        if options.sort_keys:
            result = sort_keys(result)
        return result

    def _walk(self, run: _Run, value: Any, path: list[Any]) -> Any:
        """Visit *value* at *path*, then its children; return the new value or _DROP."""
        if path:
            value = self._visit(run, value, path)
            if value is _DROP:
                return _DROP

        if isinstance(value, dict):
            for key in list(value):
                child = self._walk(run, value[key], [*path, key])
                if child is _DROP:
                    del value[key]
                else:
                    value[key] = child
        elif isinstance(value, list):
            kept = []
            for index, item in enumerate(value):
                child = self._walk(run, item, [*path, index])
                if child is not _DROP:
                    kept.append(child)
            value[:] = kept
        return value

    def _visit(self, run: _Run, value: Any, path: list[Any]) -> Any:
        declared = locate_type(run.schema, path)
        if declared is None:
            if run.options.strip_unknown or value is ABSENT:
                return _DROP
            return value

        try:
            return self._apply(run, declared, value, format_path(path))
        except ViolationFound as found:
            run.report(found.violation)
            return _DROP if value is ABSENT else value

    def _apply(self, run: _Run, declared: Any, value: Any, path: str) -> Any:
        """Apply null/absent handling, then the rules of the resolved node."""
        node = resolve_type(declared, value)

        if value is None:
            if not node.accepts_null:
                raise run.rules.violation(ViolationCode.NULLABLE, "base.nullable", path)
            return None

        if value is ABSENT:
            if node.has_default:
                value = copy.deepcopy(node.default)
                if value is None:
                    return None
                node = resolve_type(declared, value)
                _seed_value(declared, value)
            elif node.required:
                raise run.rules.violation(ViolationCode.REQUIRED_MISSING, "base.required", path)
            else:
                return _DROP

        if is_type_union(declared) and not any(matches(candidate, value) for candidate in declared):
            raise run.rules.violation(ViolationCode.UNION_NO_MATCH, "base.union", path)

        return run.rules.check(node, value, path)


def validate(
    schema: Any,
    data: Any,
    options: ValidateOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Any:
    """Validate *data* against *schema* and return the normalized copy.

    Example:
        >>> validate({"name": {"type": "string"}}, {"name": "  Ada "})
        {'name': 'Ada'}
    """
    return SchemaValidator(schema).validate(data, options, **overrides)


async def validate_async(
    schema: Any,
    data: Any,
    options: ValidateOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Any:
    """Awaitable form of :func:`validate`."""
    return await SchemaValidator(schema).validate_async(data, options, **overrides)
