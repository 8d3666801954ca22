"""Schema and option loading utilities for shapeguard."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .errors import SchemaEngineError
from .models import ValidateOptions

FORMATS = {".yaml": "yaml", ".yml": "yaml", ".json": "json"}


def _parse(content: str, format: str) -> Any:
    parsers = {"yaml": (yaml.safe_load, yaml.YAMLError), "json": (json.loads, json.JSONDecodeError)}
    if format not in parsers:
        raise ValueError(f"Unsupported format: {format}. Use 'yaml' or 'json'")
    parse, error = parsers[format]
    try:
        return parse(content)
    except error as e:
        raise ValueError(f"Failed to parse {format.upper()}: {e}") from e


def load_schema(content: str, format: str = "yaml") -> dict[str, Any] | list[Any]:
    """Load a raw schema from string content.

    The document must be a field mapping or a list of field mappings; it is
    checked for shape only, the nodes themselves are checked when the schema
    is parsed.

    Raises:
        ValueError: If format is not supported, parsing fails, or the document
            is not a mapping or a list of mappings
    """
    raw = _parse(content, format)
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, list):
        for index, member in enumerate(raw):
            if not isinstance(member, dict):
                raise ValueError(
                    f"Schema union member {index} must be a mapping, got {type(member).__name__}"
                )
        return raw
    kind = "empty document" if raw is None else type(raw).__name__
    raise ValueError(f"Schema must be a mapping of fields or a list of mappings, got {kind}")


def _format_for(path: Path) -> str:
    try:
        return FORMATS[path.suffix.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported file extension: {path.suffix}. Use .yaml, .yml, or .json"
        ) from None


def _read(path: str | Path, what: str) -> tuple[str, str]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{what} file not found: {path}")
    return path.read_text(encoding="utf-8"), _format_for(path)


def load_schema_from_file(path: str | Path) -> dict[str, Any] | list[Any]:
    """Load a raw schema from a YAML or JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the extension is not supported or the content is not a schema
    """
    content, format = _read(path, "Schema")
    return load_schema(content, format=format)


def load_options_from_file(path: str | Path) -> ValidateOptions:
    """Load validation options from a YAML or JSON file.

    The file holds a mapping of option names to values, for example::

        abort_early: false
        strip_unknown: true
        error_messages:
          base:
            required: "{path} is missing"

    An empty file yields the default options.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported or parsing fails
        SchemaEngineError: If the content is not a valid set of options
    """
    content, format = _read(path, "Options")
    data = _parse(content, format)
    try:
        return ValidateOptions.model_validate(data if data is not None else {})
    except PydanticValidationError as e:
        raise SchemaEngineError(f"Invalid validation options in {path}: {e}") from e
