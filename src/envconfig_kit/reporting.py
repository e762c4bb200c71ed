"""Field error construction, secret masking and report rendering."""

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Literal, Optional

from .schema import BaseField

MASK = "********"

HEADER = "Environment validation failed:"
CLOSING_HINT = "  Run your app with valid environment variables or add them to .env"

ErrorKind = Literal["missing", "type", "custom_validation", "schema"]

_MISSING_EXAMPLES: Dict[str, str] = {
    "string": "your-value-here",
    "number": "3000",
    "integer": "42",
    "boolean": "true",
    "url": "https://example.com",
    "email": "user@example.com",
    "port": "3000",
    "json": '{"key":"value"}',
    "array": "a,b,c",
    "enum": "value",
    "regex": "value-matching-pattern",
}

_TYPE_EXAMPLES: Dict[str, str] = {
    "string": "hello",
    "number": "42",
    "integer": "42",
    "boolean": "true",
    "url": "https://example.com",
    "email": "user@example.com",
    "port": "3000",
    "json": '{"key":"value"}',
    "array": "a,b,c",
    "enum": "value",
    "regex": "value-matching-pattern",
}

_SUGGESTIONS: Dict[str, str] = {
    "string": "Provide a string value",
    "number": "Provide a valid number",
    "integer": "Provide a whole number without a fractional part",
    "boolean": "Use true/false, 1/0, yes/no",
    "url": "Provide a valid URL with protocol",
    "email": "Provide a valid email address",
    "port": "Provide a number between 0-65535",
    "json": "Provide valid JSON text",
    "array": "Provide a list of values separated by commas",
    "enum": "Use one of the allowed values",
    "regex": "Provide a value matching the required pattern",
}


@dataclass(frozen=True)
class FieldError:
    """A single field that failed to resolve.

    Attributes:
        key: Environment variable name
        message: What went wrong
        kind: Error category (missing, type, custom_validation, schema)
        suggestion: How to fix it
        example: A sample ``KEY=value`` line
        value: Raw value as displayed (masked for secrets)
    """
    key: str
    message: str
    kind: ErrorKind = "type"
    suggestion: Optional[str] = None
    example: Optional[str] = None
    value: Optional[str] = None


def example_value(field_type: str, field: Optional[BaseField] = None, missing: bool = False) -> str:
    """Canonical sample raw value for a field type."""
    if field is not None:
        if field.example:
            return field.example
        if field.type == "enum":
            return field.values[0]
        if field.type == "array" and field.separator != ",":
            return field.separator.join(["a", "b", "c"])
    table = _MISSING_EXAMPLES if missing else _TYPE_EXAMPLES
    return table[field_type]


def suggestion_for(field_type: str, field: Optional[BaseField] = None) -> str:
    if field is not None:
        if field.type == "enum":
            return f"Use one of: {', '.join(field.values)}"
        if field.type == "regex":
            return f"Provide a value matching the pattern {field.pattern.pattern}"
        if field.type == "array" and field.separator != ",":
            return f"Provide a list of values separated by '{field.separator}'"
    return _SUGGESTIONS[field_type]


def create_missing_error(key: str, field_type: str, field: Optional[BaseField] = None) -> FieldError:
    return FieldError(
        key=key,
        message="Missing required environment variable",
        kind="missing",
        suggestion="Add to .env file",
        example=f"{key}={example_value(field_type, field, missing=True)}",
    )


def create_type_error(
    key: str,
    value: str,
    field_type: str,
    details: str,
    field: Optional[BaseField] = None,
) -> FieldError:
    return FieldError(
        key=key,
        message=details,
        kind="type",
        suggestion=suggestion_for(field_type, field),
        example=f"{key}={example_value(field_type, field)}",
        value=value,
    )


def create_validation_error(key: str, value: str) -> FieldError:
    return FieldError(
        key=key,
        message=f'Custom validation failed for value "{value}"',
        kind="custom_validation",
        suggestion="Check the validate function requirements",
        value=value,
    )


def create_schema_error(key: str, details: str) -> FieldError:
    return FieldError(
        key=key,
        message=f"Invalid schema: {details}",
        kind="schema",
        suggestion="Fix the field definition in the schema",
    )


def mask_error(error: FieldError, raw: Optional[str]) -> FieldError:
    """Hide ``raw`` in the message and displayed value of ``error``.

    Messages quote the raw input, so only the quoted occurrence is replaced.
    Suggestions and examples come from the field definition and are left intact.
    """
    if not raw:
        return error

    return replace(
        error,
        message=error.message.replace(f'"{raw}"', f'"{MASK}"'),
        value=MASK if error.value is not None else None,
    )


def format_validation_errors(errors: Iterable[FieldError]) -> str:
    """Render all field errors as one multi-line report."""
    lines = [f"{HEADER}\n"]

    for error in errors:
        lines.append(f"  {error.key}: {error.message}")

        if error.suggestion:
            lines.append(f"    Fix: {error.suggestion}")

        if error.example:
            lines.append(f"    Example: {error.example}")

        lines.append("")

    lines.append(CLOSING_HINT)

    return "\n".join(lines)
