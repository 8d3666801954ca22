"""Default violation messages and template expansion.

Templates are keyed by ``"<category>.<rule>"`` and may use the placeholders
``{path}``, ``{min}``, ``{max}``, ``{pattern}`` and ``{plural_suffix}``.
Placeholders are replaced literally, so templates may contain other braces.
"""

from collections.abc import Mapping

DEFAULT_MESSAGES: dict[str, str] = {
    "base.required": "{path} is required",
    "base.nullable": "{path} cannot be null",
    "base.union": "{path} does not match any of the allowed shapes",
    "string.type": "{path} must be a string",
    "string.enum": "{path} must be one of the allowed values",
    "string.pattern": "{path} must match the pattern {pattern}",
    "string.min": "{path} must be at least {min} character{plural_suffix} long",
    "string.max": "{path} must be at most {max} character{plural_suffix} long",
    "number.type": "{path} must be a number",
    "number.enum": "{path} must be one of the allowed values",
    "number.min": "{path} must be greater than or equal to {min}",
    "number.max": "{path} must be less than or equal to {max}",
    "number.integer": "{path} must be an integer",
    "number.positive": "{path} must be positive",
    "number.negative": "{path} must be negative",
    "boolean.type": "{path} must be a boolean",
    "date.type": "{path} must be a valid date",
    "date.min": "{path} must be on or after {min}",
    "date.max": "{path} must be on or before {max}",
    "object.type": "{path} must be an object",
    "array.type": "{path} must be an array",
    "array.min": "{path} must contain at least {min} item{plural_suffix}",
    "array.max": "{path} must contain at most {max} item{plural_suffix}",
}

PLACEHOLDERS = ("path", "min", "max", "pattern", "plural_suffix")


def plural_suffix(count: int | float) -> str:
    return "s" if count > 1 else ""


def render(template: str, parts: Mapping[str, str]) -> str:
    """Substitute every known placeholder in *template* with its part."""
    message = template
    for name in PLACEHOLDERS:
        if name in parts:
            message = message.replace("{" + name + "}", parts[name])
    return message


class MessageCatalog:
    """Resolves message templates, user overrides first."""

    def __init__(self, overrides: Mapping[str, str] | None = None):
        self.templates = {**DEFAULT_MESSAGES, **(overrides or {})}

    def format(self, rule: str, parts: Mapping[str, str]) -> str:
        return render(self.templates.get(rule, "{path} is invalid"), parts)
