"""Violation records and the exceptions raised by shapeguard."""

from enum import Enum

from ._base import GuardBaseModel


class ViolationCode(str, Enum):
    """Kinds of schema violation.

    - REQUIRED_MISSING: A required field is absent and has no default
    - NULLABLE: ``None`` was given for a field that does not accept it
    - TYPE_MISMATCH: The value has the wrong kind for its node
    - ENUM_MISMATCH: The value is not one of the allowed values
    - PATTERN_MISMATCH: A string does not match the node's pattern
    - LENGTH_OUT_OF_RANGE: A string or array is too short or too long
    - RANGE_OUT_OF_BOUNDS: A number or date lies outside ``min``/``max``
    - NOT_INTEGER / NOT_POSITIVE / NOT_NEGATIVE: Number sign and integrality
    - UNION_NO_MATCH: No union member or candidate fits the value
    """

    REQUIRED_MISSING = "required-missing"
    NULLABLE = "nullable-violation"
    TYPE_MISMATCH = "type-mismatch"
    ENUM_MISMATCH = "enum-mismatch"
    PATTERN_MISMATCH = "pattern-mismatch"
    LENGTH_OUT_OF_RANGE = "length-out-of-range"
    RANGE_OUT_OF_BOUNDS = "range-out-of-bounds"
    NOT_INTEGER = "not-integer"
    NOT_POSITIVE = "not-positive"
    NOT_NEGATIVE = "not-negative"
    UNION_NO_MATCH = "union-no-match"


class Violation(GuardBaseModel):
    """A single failed rule.

    Attributes:
        code: The kind of violation.
        rule: The message key that produced ``message``, e.g. ``"string.min"``.
        path: Formatted path of the offending value (empty for the root).
        message: The expanded message template.
        parts: The values substituted into the template (``path`` and, where
            relevant, ``min``, ``max``, ``pattern`` and ``plural_suffix``), so
            callers can render their own messages.
    """

    code: ViolationCode
    rule: str
    path: str
    message: str
    parts: dict[str, str]


class ViolationFound(Exception):
    """Raised by a rule set to report one violation to the engine."""

    def __init__(self, violation: Violation):
        super().__init__(violation.message)
        self.violation = violation


class ValidationError(ValueError):
    """Raised when data does not satisfy its schema.

    Carries one violation in fail-fast mode and every collected violation
    otherwise. ``message``, ``code`` and ``parts`` mirror the first one.
    """

    def __init__(self, violations: list[Violation]):
        if not violations:
            raise ValueError("ValidationError needs at least one violation")
        self.violations = list(violations)
        first = self.violations[0]
        self.message = first.message
        self.code = first.code
        self.parts = dict(first.parts)
        if len(self.violations) == 1:
            text = first.message
        else:
            text = "; ".join(v.message for v in self.violations)
        super().__init__(text)

    @property
    def paths(self) -> list[str]:
        return [v.path for v in self.violations]


class SchemaEngineError(RuntimeError):
    """Raised for failures that are not schema violations.

    Malformed schemas, invalid options and unexpected internal errors are
    wrapped in this exception; the original error is kept as ``__cause__``.
    """
