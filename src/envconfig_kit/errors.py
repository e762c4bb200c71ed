"""Base error definitions for envconfig_kit."""

from typing import Any, Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .reporting import FieldError


class EnvConfigError(Exception):
    """Base exception for all envconfig_kit errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ValidationFailure(EnvConfigError):
    """A raw value could not be coerced to its declared type."""
    pass


class SchemaConfigurationError(ValidationFailure):
    """A field specification is incomplete or malformed."""
    pass


class ProjectConfigError(EnvConfigError):
    """Project configuration file is unreadable or invalid."""
    pass


class EnvValidationError(EnvConfigError):
    """One or more fields failed to resolve.

    The message is the full human-readable report; ``errors`` keeps the
    structured per-field errors in schema order.
    """

    def __init__(self, errors: List["FieldError"], **context: Any) -> None:
        from .reporting import format_validation_errors

        super().__init__(format_validation_errors(errors), **context)
        self.errors = list(errors)

    @property
    def keys(self) -> List[str]:
        return [error.key for error in self.errors]
