"""Type validators: one coercion function per field type tag.

Every validator takes the raw string and, optionally, the field it belongs
to, and either returns a fresh typed value or raises ``ValidationFailure``.
"""

import json
import math
import re
from typing import Any, Callable, Dict, List, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from .errors import SchemaConfigurationError, ValidationFailure
from .schema import FIELD_TYPES, BaseField

Validator = Callable[[str, Optional[BaseField]], Any]

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# Plain ASCII decimal notation only: no digit separators, no other scripts
_NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

_URL_ADAPTER: TypeAdapter = TypeAdapter(AnyUrl)


def validate_string(value: str, field: Optional[BaseField] = None) -> str:
    return value


def _parse_number(value: str) -> Optional[float]:
    text = value.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    try:
        number = float(text)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _parse_integer(value: str) -> Optional[int]:
    text = value.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        pass
    number = _parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def validate_number(value: str, field: Optional[BaseField] = None) -> float:
    if value == "":
        raise ValidationFailure("Cannot parse empty string as number")
    number = _parse_number(value)
    if number is None:
        raise ValidationFailure(f'Invalid number: "{value}"', value=value)
    return number


def validate_integer(value: str, field: Optional[BaseField] = None) -> int:
    if value == "":
        raise ValidationFailure("Cannot parse empty string as integer")
    number = _parse_integer(value)
    if number is None:
        raise ValidationFailure(f'Invalid integer: "{value}"', value=value)
    return number


def validate_boolean(value: str, field: Optional[BaseField] = None) -> bool:
    lower = value.lower()
    if lower in _TRUE_VALUES:
        return True
    if lower in _FALSE_VALUES:
        return False
    raise ValidationFailure(f'Invalid boolean: "{value}"', value=value)


def validate_url(value: str, field: Optional[BaseField] = None) -> str:
    """Accept absolute URLs with a scheme; the raw string is returned as-is."""
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ValidationFailure(f'Invalid URL: "{value}"', value=value) from exc
    return value


def validate_email(value: str, field: Optional[BaseField] = None) -> str:
    if not _EMAIL_RE.fullmatch(value):
        raise ValidationFailure(f'Invalid email: "{value}"', value=value)
    return value


def validate_port(value: str, field: Optional[BaseField] = None) -> int:
    number = _parse_integer(value) if value else None
    if number is None or not 0 <= number <= 65535:
        raise ValidationFailure(f'Invalid port: "{value}"', value=value)
    return number


def _reject_constant(name: str) -> Any:
    # json.loads would otherwise accept NaN, Infinity and -Infinity
    raise ValidationFailure(f"Invalid JSON: unexpected token {name}")


def validate_json(value: str, field: Optional[BaseField] = None) -> Any:
    try:
        return json.loads(value, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise ValidationFailure(f"Invalid JSON: {exc.msg}", value=value) from exc
    except RecursionError as exc:
        raise ValidationFailure("Invalid JSON: nesting too deep", value=value) from exc


def validate_array(value: str, field: Optional[BaseField] = None) -> List[str]:
    separator = getattr(field, "separator", None) or ","
    return [item.strip() for item in value.split(separator) if item.strip()]


def validate_enum(value: str, field: Optional[BaseField] = None) -> str:
    values = getattr(field, "values", None)
    if not values:
        raise SchemaConfigurationError("Enum field requires a non-empty 'values' list")
    if value not in values:
        raise ValidationFailure(
            f'Invalid enum value: "{value}". Expected one of: {", ".join(values)}',
            value=value,
        )
    return value


def validate_regex(value: str, field: Optional[BaseField] = None) -> str:
    pattern = getattr(field, "pattern", None)
    if pattern is None:
        raise SchemaConfigurationError("Regex field requires a 'pattern'")
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    if pattern.fullmatch(value) is None:
        raise ValidationFailure(
            f'Value "{value}" does not match pattern {pattern.pattern}',
            value=value,
        )
    return value


VALIDATORS: Dict[str, Validator] = {
    "string": validate_string,
    "number": validate_number,
    "integer": validate_integer,
    "boolean": validate_boolean,
    "url": validate_url,
    "email": validate_email,
    "port": validate_port,
    "json": validate_json,
    "array": validate_array,
    "enum": validate_enum,
    "regex": validate_regex,
}

_missing = set(FIELD_TYPES) - set(VALIDATORS)
if _missing:  # pragma: no cover
    raise RuntimeError(f"No validator registered for: {', '.join(sorted(_missing))}")


def validate_value(value: str, field: BaseField) -> Any:
    """Coerce ``value`` with the validator registered for ``field.type``."""
    return VALIDATORS[field.type](value, field)
