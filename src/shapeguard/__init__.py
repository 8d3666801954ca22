"""shapeguard - declarative schema validation and normalization.

Describe the shape of your data once, then validate untrusted input (API
payloads, configuration blobs) against it:
- Field rules for strings, numbers, booleans, dates, objects and arrays
- Normalization: trimming, casing, default injection and date coercion
- Field unions and whole-schema unions, resolved from the shape of the data
- Fail-fast or collect-all error reporting with structured violations

## Key Components

### Core
- `SchemaValidator`: Parses a schema once and validates data against it
- `validate` / `validate_async`: One-shot validation helpers
- `ValidationError`: Raised with one or more `Violation` records
- `SchemaEngineError`: Raised for malformed schemas and unexpected failures

### Schema Types
- `StringNode`, `NumberNode`, `BooleanNode`, `DateNode`, `ObjectNode`,
  `ArrayNode`: the node models
- `ValidateOptions`: `abort_early`, `strip_unknown`, `sort_keys`,
  `error_messages`

## Quick Examples

### Validation
```python
from shapeguard import SchemaValidator, Patterns

validator = SchemaValidator({
    "email": {"type": "string", "pattern": Patterns.EMAIL, "lowercase": True},
    "tags": {"type": "array", "items": {"type": "string"}, "max": 5},
    "plan": {"type": "string", "enum": ["free", "pro"], "default": "free"},
})

validator.validate({"email": " Ada@Example.com ", "tags": ["x"]})
# Returns: {"email": "ada@example.com", "tags": ["x"], "plan": "free"}
```

### Collecting every violation
```python
from shapeguard import ValidationError

try:
    validator.validate({"email": 3, "tags": "x"}, abort_early=False)
except ValidationError as e:
    for violation in e.violations:
        print(violation.path, violation.code.value, violation.message)
```
"""

from ._types import ABSENT
from .core import SchemaValidator, validate, validate_async
from .declare import declare, render_typed_dict
from .errors import SchemaEngineError, ValidationError, Violation, ViolationCode
from .json_schema import to_json_schema
from .loaders import load_options_from_file, load_schema, load_schema_from_file
from .models import (
    ArrayNode,
    BooleanNode,
    DateNode,
    NumberNode,
    ObjectNode,
    StringNode,
    ValidateOptions,
    parse_schema,
)
from .paths import format_path
from .patterns import PatternCache, Patterns, pattern_cache
from .resolver import locate, resolve_union

__all__ = [
    # Core
    "SchemaValidator",
    "validate",
    "validate_async",
    # Errors
    "ValidationError",
    "SchemaEngineError",
    "Violation",
    "ViolationCode",
    # Schema types
    "StringNode",
    "NumberNode",
    "BooleanNode",
    "DateNode",
    "ObjectNode",
    "ArrayNode",
    "ValidateOptions",
    "parse_schema",
    "ABSENT",
    # Building blocks
    "locate",
    "resolve_union",
    "format_path",
    "PatternCache",
    "Patterns",
    "pattern_cache",
    # Outer surfaces
    "to_json_schema",
    "render_typed_dict",
    "declare",
    "load_schema",
    "load_schema_from_file",
    "load_options_from_file",
]
