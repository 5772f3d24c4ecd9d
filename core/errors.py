# ============================================================================
# COMPILER ERRORS
# ============================================================================
# STATUS: Core - Generation-time and binding-time exceptions
# PURPOSE: Fatal configuration errors raised while compiling a model
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: ConfigurationError and subclasses, PlanBindingError
# ============================================================================
"""
Compiler Errors

Configuration errors are programmer errors in a model declaration.
They are raised at generation time and abort the whole model: no
partial DDL, no partial argument plan, no retry.

PlanBindingError is the one runtime error: it is raised when an
instance is paired with a compiled plan and a value cannot be bound.
"""

from typing import Optional


class ConfigurationError(Exception):
    """Base exception for invalid model declarations."""

    code = "ConfigurationError"

    def __init__(self, message: str, model: Optional[str] = None, field: Optional[str] = None):
        self.model = model
        self.field = field
        self.message = message
        super().__init__(self._format(message))

    def _format(self, message: str) -> str:
        where = []
        if self.model:
            where.append(f"model={self.model}")
        if self.field:
            where.append(f"field={self.field}")
        if where:
            return f"{self.code}: {message} ({', '.join(where)})"
        return f"{self.code}: {message}"

    def with_model(self, model: str) -> "ConfigurationError":
        """Attach the model name once the error reaches the compiler."""
        if self.model is None:
            self.model = model
            self.args = (self._format(self.message),)
        return self


class UnsupportedFieldType(ConfigurationError):
    """Declared type is not a semantic type after unwrapping."""
    code = "UnsupportedFieldType"


class UnsupportedStructShape(ConfigurationError):
    """Declaration is not a simple named-field list."""
    code = "UnsupportedStructShape"


class InvalidForeignKeySpec(ConfigurationError):
    """foreign_key does not split into exactly 'table.column'."""
    code = "InvalidForeignKeySpec"


class InvalidDefaultForType(ConfigurationError):
    """'now' default on a field that is not Date or DateTime."""
    code = "InvalidDefaultForType"


class InvalidModifier(ConfigurationError):
    """Unknown modifier key or a modifier value of the wrong kind."""
    code = "InvalidModifier"


class MultiplePrimaryKeys(ConfigurationError):
    """More than one field marked primary_key=true."""
    code = "MultiplePrimaryKeys"


class MissingPrimaryKey(ConfigurationError):
    """No primary key while require_primary_key is enabled."""
    code = "MissingPrimaryKey"


class DuplicateModelError(ConfigurationError):
    """Model name registered twice in one registry."""
    code = "DuplicateModel"


class PlanBindingError(ValueError):
    """Raised when an instance cannot be bound to a compiled plan."""

    def __init__(self, message: str, model: Optional[str] = None, field: Optional[str] = None):
        self.model = model
        self.field = field
        super().__init__(message)


__all__ = [
    "ConfigurationError",
    "UnsupportedFieldType",
    "UnsupportedStructShape",
    "InvalidForeignKeySpec",
    "InvalidDefaultForType",
    "InvalidModifier",
    "MultiplePrimaryKeys",
    "MissingPrimaryKey",
    "DuplicateModelError",
    "PlanBindingError",
]
