"""Field specifications for environment schemas.

Each supported type tag has its own frozen pydantic model carrying exactly
the attributes that type needs. ``FieldSpec`` is the discriminated union
over all of them, keyed by ``type``.

Schemas may mix model instances and plain mappings::

    schema = {
        "PORT": PortField(default=3000),
        "LOG_LEVEL": {"type": "enum", "values": ["debug", "info"]},
    }

Plain mappings are parsed lazily with :func:`parse_field`.
"""

import re
from typing import (
    Annotated, Any, Callable, Dict, Iterator, List, Literal, Mapping,
    Optional, Tuple, Union, get_args,
)

from pydantic import (
    BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator,
)

from .errors import SchemaConfigurationError


FieldTypeName = Literal[
    "string", "number", "integer", "boolean", "url", "email",
    "port", "json", "array", "enum", "regex",
]

FIELD_TYPES: Tuple[str, ...] = get_args(FieldTypeName)


class BaseField(BaseModel):
    """Attributes shared by every field type."""

    model_config = ConfigDict(extra='forbid', frozen=True, populate_by_name=True)

    default: Any = None
    optional: bool = False
    secret: bool = False
    transform: Optional[Callable[[Any], Any]] = None
    check: Optional[Callable[[Any], Any]] = Field(
        default=None,
        alias="validate",
        description="Predicate applied after transform; a falsy result rejects the value",
    )
    description: Optional[str] = None
    example: Optional[str] = Field(
        default=None,
        description="Sample raw value shown in error reports",
    )

    @property
    def required(self) -> bool:
        return not self.optional


class StringField(BaseField):
    type: Literal["string"] = "string"
    default: Optional[str] = None


class NumberField(BaseField):
    type: Literal["number"] = "number"
    default: Optional[Union[int, float]] = None


class IntegerField(BaseField):
    type: Literal["integer"] = "integer"
    default: Optional[int] = None


class BooleanField(BaseField):
    type: Literal["boolean"] = "boolean"
    default: Optional[bool] = None


class UrlField(BaseField):
    type: Literal["url"] = "url"
    default: Optional[str] = None


class EmailField(BaseField):
    type: Literal["email"] = "email"
    default: Optional[str] = None


class PortField(BaseField):
    type: Literal["port"] = "port"
    default: Optional[Annotated[int, Field(ge=0, le=65535)]] = None


class JsonField(BaseField):
    type: Literal["json"] = "json"


class ArrayField(BaseField):
    type: Literal["array"] = "array"
    default: Optional[List[str]] = None
    separator: str = Field(default=",", min_length=1)


class EnumField(BaseField):
    type: Literal["enum"] = "enum"
    default: Optional[str] = None
    values: Tuple[str, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _default_is_allowed(self) -> "EnumField":
        if self.default is not None and self.default not in self.values:
            raise ValueError(
                f"default {self.default!r} is not one of: {', '.join(self.values)}"
            )
        return self


class RegexField(BaseField):
    type: Literal["regex"] = "regex"
    default: Optional[str] = None
    pattern: re.Pattern


FieldSpec = Annotated[
    Union[
        StringField, NumberField, IntegerField, BooleanField, UrlField,
        EmailField, PortField, JsonField, ArrayField, EnumField, RegexField,
    ],
    Field(discriminator="type"),
]

Schema = Mapping[str, Union[BaseField, Mapping[str, Any]]]

_FIELD_ADAPTER: TypeAdapter = TypeAdapter(FieldSpec)

# Attributes a plain mapping must carry for these types
_REQUIRED_ATTRIBUTES = {
    "enum": ("values", "Enum field requires a non-empty 'values' list"),
    "regex": ("pattern", "Regex field requires a 'pattern'"),
}


def parse_field(spec: Union[BaseField, Mapping[str, Any]]) -> BaseField:
    """Turn a field specification into its typed model.

    Args:
        spec: A field model, or a mapping such as ``{"type": "port"}``

    Returns:
        The matching ``BaseField`` subclass instance

    Raises:
        SchemaConfigurationError: If the mapping does not describe a valid field
    """
    if isinstance(spec, BaseField):
        return spec
    if not isinstance(spec, Mapping):
        raise SchemaConfigurationError(
            f"Field specification must be a mapping, got {type(spec).__name__}"
        )

    field_type = spec.get("type")
    if field_type in _REQUIRED_ATTRIBUTES:
        attribute, message = _REQUIRED_ATTRIBUTES[field_type]
        if not spec.get(attribute):
            raise SchemaConfigurationError(message, field_type=field_type)

    try:
        return _FIELD_ADAPTER.validate_python(dict(spec))
    except ValidationError as exc:
        raise SchemaConfigurationError(
            f"Invalid field specification: {_describe(exc)}",
            field_type=field_type,
        ) from exc


def parse_schema(schema: Schema) -> Dict[str, BaseField]:
    """Parse every field of a schema, failing on the first broken one."""
    parsed: Dict[str, BaseField] = {}
    for name, spec in schema.items():
        try:
            parsed[name] = parse_field(spec)
        except SchemaConfigurationError as exc:
            raise SchemaConfigurationError(f"{name}: {exc.message}", key=name) from exc
    return parsed


def iter_fields(schema: Schema) -> Iterator[Tuple[str, BaseField]]:
    """Yield ``(name, field)`` pairs in declaration order."""
    for name, spec in schema.items():
        yield name, parse_field(spec)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = [str(part) for part in error["loc"]]
        # Drop the discriminator tag pydantic prefixes to union errors
        if location and location[0] in FIELD_TYPES:
            location = location[1:]
        where = ".".join(location)
        parts.append(f"{where}: {error['msg']}" if where else error["msg"])
    return "; ".join(parts)
