"""Typed environment configuration backed by a declarative schema."""

from . import presets
from .errors import (
    EnvConfigError, EnvValidationError, ProjectConfigError,
    SchemaConfigurationError, ValidationFailure,
)
from .export import generate_dotenv_example, schema_to_json, schema_to_markdown
from .reporting import MASK, FieldError, format_validation_errors
from .resolver import (
    ResolutionContext, ResolutionResult, ResolveOptions,
    build_context, resolve, resolve_fields,
)
from .schema import (
    FIELD_TYPES, ArrayField, BaseField, BooleanField, EmailField, EnumField,
    FieldSpec, IntegerField, JsonField, NumberField, PortField, RegexField,
    Schema, StringField, UrlField, parse_field, parse_schema,
)
from .sources import EnvSourceLoader, load_dotenv, parse_dotenv
from .validators import VALIDATORS, validate_value

__version__ = "0.1.0"

__all__ = [
    'resolve',
    'resolve_fields',
    'build_context',
    'ResolveOptions',
    'ResolutionContext',
    'ResolutionResult',
    'FIELD_TYPES',
    'FieldSpec',
    'Schema',
    'BaseField',
    'StringField',
    'NumberField',
    'IntegerField',
    'BooleanField',
    'UrlField',
    'EmailField',
    'PortField',
    'JsonField',
    'ArrayField',
    'EnumField',
    'RegexField',
    'parse_field',
    'parse_schema',
    'VALIDATORS',
    'validate_value',
    'EnvSourceLoader',
    'load_dotenv',
    'parse_dotenv',
    'schema_to_json',
    'schema_to_markdown',
    'generate_dotenv_example',
    'presets',
    'MASK',
    'FieldError',
    'format_validation_errors',
    'EnvConfigError',
    'EnvValidationError',
    'ProjectConfigError',
    'SchemaConfigurationError',
    'ValidationFailure',
]
