# ============================================================================
# COMPILED MODEL ARTIFACTS
# ============================================================================
# STATUS: Core model - Compiler output
# PURPOSE: Immutable DDL, primary key, argument plans and delete statement
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: ModelArtifacts, CreatePlan, UpdatePlan, read_field_value
# DEPENDENCIES: pydantic
# ============================================================================
"""
Compiled Model Artifacts

ModelArtifacts is everything the compiler emits for one model:

    ddl               create table if not exists ...;
    primary_key       primary key field name ("" if none)
    create_args       field names for the create operation
    update_args       field names for the update operation
    delete_statement  delete from ... where <pk>=?1;

Plans pair the argument lists with an instance's values at call time:

    artifacts.create_plan(user)   -> CreatePlan(values=(("name", "Ann"), ...))
    artifacts.update_plan(user)   -> UpdatePlan(primary_key_value=7, values=...)
"""

from collections.abc import Mapping
from typing import Any, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from core.contracts import KeyGeneration
from core.models.field import ModelDefinition
from core.errors import PlanBindingError


_MISSING = object()


def read_field_value(instance: Any, name: str, model: Optional[str] = None) -> Any:
    """
    Read one field value from a mapping or an attribute-style object.

    Raises:
        PlanBindingError: If the instance carries no value for the field
    """
    if isinstance(instance, Mapping):
        value = instance.get(name, _MISSING)
    else:
        value = getattr(instance, name, _MISSING)

    if value is _MISSING:
        raise PlanBindingError(f"instance has no value for field {name!r}", model=model, field=name)
    return value


# ============================================================================
# PLANS
# ============================================================================

class CreatePlan(BaseModel):
    """Ordered (field name, value) pairs for a create operation."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    model_name: str
    values: Tuple[Tuple[str, Any], ...] = Field(default_factory=tuple)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.values)

    @property
    def params(self) -> Tuple[Any, ...]:
        return tuple(value for _, value in self.values)


class UpdatePlan(BaseModel):
    """Primary-key value plus ordered (field name, value) pairs."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    model_name: str
    primary_key: str
    primary_key_value: Any
    values: Tuple[Tuple[str, Any], ...] = Field(default_factory=tuple)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.values)

    @property
    def params(self) -> Tuple[Any, ...]:
        return tuple(value for _, value in self.values)


# ============================================================================
# ARTIFACTS
# ============================================================================

class ModelArtifacts(BaseModel):
    """
    Immutable output of compiling one model.

    definition keeps the extracted descriptors so executors can encode
    values according to each field's semantic type.
    """
    model_config = ConfigDict(frozen=True)

    model_name: str
    ddl: str
    primary_key: str = ""
    primary_key_generation: Optional[KeyGeneration] = None
    create_args: Tuple[str, ...] = Field(default_factory=tuple)
    update_args: Tuple[str, ...] = Field(default_factory=tuple)
    delete_statement: str
    definition: ModelDefinition

    @property
    def has_primary_key(self) -> bool:
        return bool(self.primary_key)

    def require_primary_key(self, operation: str) -> str:
        """
        Primary key name for operations keyed by it.

        Raises:
            PlanBindingError: If the model declared no primary key
        """
        if not self.primary_key:
            raise PlanBindingError(
                f"{operation} requires a primary key but {self.model_name} declares none",
                model=self.model_name,
            )
        return self.primary_key

    def create_plan(self, instance: Any) -> CreatePlan:
        """Pair createArgs with the instance's values."""
        values = tuple(
            (name, read_field_value(instance, name, self.model_name)) for name in self.create_args
        )
        return CreatePlan(model_name=self.model_name, values=values)

    def update_plan(self, instance: Any) -> UpdatePlan:
        """Pair updateArgs with the instance's values, keyed by primary key."""
        primary_key = self.require_primary_key("update")
        values = tuple(
            (name, read_field_value(instance, name, self.model_name)) for name in self.update_args
        )
        return UpdatePlan(
            model_name=self.model_name,
            primary_key=primary_key,
            primary_key_value=read_field_value(instance, primary_key, self.model_name),
            values=values,
        )

    def delete_params(self, instance: Any) -> Tuple[Any]:
        """The single parameter bound by delete_statement."""
        primary_key = self.require_primary_key("delete")
        return (read_field_value(instance, primary_key, self.model_name),)


__all__ = [
    "read_field_value",
    "CreatePlan",
    "UpdatePlan",
    "ModelArtifacts",
]
