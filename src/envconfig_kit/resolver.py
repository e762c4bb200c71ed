"""Schema-driven resolution of environment variables.

Resolution is split in two:

* :func:`resolve_fields` is a pure function of a schema and a raw mapping.
  It resolves every field independently and collects all failures.
* :func:`resolve` builds the raw mapping from dotenv files and the process
  environment, runs :func:`resolve_fields` and raises one aggregated
  ``EnvValidationError`` if anything failed.

Per field, the order is fixed: default or optional policy for absent values,
then the type validator, then ``transform``, then the ``validate`` predicate.
Exceptions raised by ``transform`` or ``validate`` are not collected; they
propagate to the caller unchanged.
"""

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import EnvValidationError, SchemaConfigurationError, ValidationFailure
from .reporting import (
    FieldError,
    create_missing_error,
    create_schema_error,
    create_type_error,
    create_validation_error,
    mask_error,
)
from .schema import BaseField, Schema, parse_field
from .sources import EnvSourceLoader
from .validators import validate_value

logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT_VARIABLE = "APP_ENV"


class ResolveOptions(BaseModel):
    """Options for :func:`resolve`."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    mask_secrets: bool = Field(
        default=True,
        description="Hide raw values of secret fields in error reports",
    )
    base_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding the dotenv files (defaults to the cwd)",
    )
    environment: Optional[str] = Field(
        default=None,
        description="Environment name selecting .env.<name>; read from environment_variable when unset",
    )
    environment_variable: str = Field(
        default=DEFAULT_ENVIRONMENT_VARIABLE,
        description="Process variable holding the environment name",
    )
    load_dotenv: bool = Field(
        default=True,
        description="Read dotenv files; when false only the process environment is used",
    )


@dataclass(frozen=True)
class ResolutionContext:
    """Everything resolution reads: the raw mapping and the environment name."""
    raw: Mapping[str, str]
    environment: Optional[str] = None


@dataclass
class ResolutionResult:
    """Outcome of resolving a schema: typed values or field errors."""
    values: Dict[str, Any] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> Dict[str, Any]:
        """Return the values, or raise the aggregated error."""
        if self.errors:
            raise EnvValidationError(self.errors)
        return self.values


def _is_absent(raw: Optional[str]) -> bool:
    return raw is None or raw == ""


def resolve_field(
    key: str,
    spec: Union[BaseField, Mapping[str, Any]],
    raw: Optional[str],
    mask_secrets: bool = True,
) -> Union[FieldError, Any]:
    """Resolve one field.

    Returns:
        The resolved value, or a ``FieldError`` describing the failure
    """
    try:
        field_spec = parse_field(spec)
    except SchemaConfigurationError as e:
        return create_schema_error(key, e.message)

    if _is_absent(raw):
        if field_spec.default is not None:
            return copy.deepcopy(field_spec.default)
        if field_spec.optional:
            return None
        return create_missing_error(key, field_spec.type, field_spec)

    masked = mask_secrets and field_spec.secret

    try:
        value = validate_value(raw, field_spec)
    except SchemaConfigurationError as e:
        return create_schema_error(key, e.message)
    except ValidationFailure as e:
        error = create_type_error(key, raw, field_spec.type, e.message, field_spec)
        return mask_error(error, raw) if masked else error

    if field_spec.transform is not None:
        value = field_spec.transform(value)

    if field_spec.check is not None and not field_spec.check(value):
        error = create_validation_error(key, raw)
        return mask_error(error, raw) if masked else error

    return value


def resolve_fields(
    schema: Schema,
    raw: Mapping[str, str],
    *,
    mask_secrets: bool = True,
) -> ResolutionResult:
    """Resolve every schema field against ``raw``, collecting all failures."""
    result = ResolutionResult()

    for key, spec in schema.items():
        outcome = resolve_field(key, spec, raw.get(key), mask_secrets=mask_secrets)
        if isinstance(outcome, FieldError):
            logger.debug(f"Field {key} failed: {outcome.kind}")
            result.errors.append(outcome)
        else:
            result.values[key] = outcome

    logger.debug(
        f"Resolved {len(result.values)} field(s), {len(result.errors)} error(s)"
    )
    return result


def build_context(
    options: Optional[ResolveOptions] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ResolutionContext:
    """Read all configured sources into a fresh ``ResolutionContext``."""
    options = options or ResolveOptions()
    process_env = dict(os.environ if environ is None else environ)
    environment = options.environment or process_env.get(options.environment_variable) or None

    if not options.load_dotenv:
        return ResolutionContext(raw=process_env, environment=environment)

    loader = EnvSourceLoader(base_dir=options.base_dir, environment=environment)
    return ResolutionContext(raw=loader.load(process_env), environment=environment)


def resolve(
    schema: Schema,
    options: Optional[ResolveOptions] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    context: Optional[ResolutionContext] = None,
) -> Dict[str, Any]:
    """Resolve ``schema`` into a fully typed configuration mapping.

    Args:
        schema: Mapping of variable name to field specification
        options: Resolution options (masking, dotenv location, environment name)
        environ: Process environment to use instead of ``os.environ``
        context: Pre-built raw mapping; when given, no sources are read

    Returns:
        Mapping of every schema key to its resolved value (``None`` for unset
        optional fields)

    Raises:
        EnvValidationError: If any field is missing or invalid
    """
    options = options or ResolveOptions()
    if context is None:
        context = build_context(options, environ)

    if context.environment:
        logger.debug(f"Resolving {len(schema)} field(s) for environment {context.environment}")

    return resolve_fields(schema, context.raw, mask_secrets=options.mask_secrets).unwrap()
