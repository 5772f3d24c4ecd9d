# ============================================================================
# FIELD & MODEL DECLARATION MODELS
# ============================================================================
# STATUS: Core model - Raw declarations and normalized descriptors
# PURPOSE: Input and intermediate data contracts of the model compiler
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: FieldDeclaration, ModelDeclaration, ForeignKey, FieldDescriptor,
#          ModelDefinition
# DEPENDENCIES: pydantic
# ============================================================================
"""
Field and Model Declarations

Two layers:
- FieldDeclaration / ModelDeclaration: what a model author wrote
  (name, declared type, raw modifier pairs). Nothing is validated yet.
- FieldDescriptor / ModelDefinition: normalized by the extractor.
  Every modifier has been parsed and checked; the descriptor is the
  only thing the compiler stages look at.

All models are frozen. A ModelDefinition is built once per model per
generation run and never mutated.
"""

from typing import Any, Dict, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from core.contracts import NOW_KEYWORD, SemanticType


DefaultValue = Union[StrictBool, StrictInt, StrictStr]


# ============================================================================
# RAW DECLARATIONS
# ============================================================================

class FieldDeclaration(BaseModel):
    """
    One declared field, exactly as written.

    declared_type may be a semantic type name ("String"), a wrapped
    name ("Optional[String]"), a SemanticType member, a Python type
    (int, str, datetime, ...) or a typing Optional of one of those.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    declared_type: Any
    modifiers: Dict[str, Any] = Field(default_factory=dict)


class ModelDeclaration(BaseModel):
    """Ordered field declarations of one model."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    fields: Tuple[FieldDeclaration, ...] = Field(default_factory=tuple)


# ============================================================================
# NORMALIZED DESCRIPTORS
# ============================================================================

class ForeignKey(BaseModel):
    """Target of a 'references table(column)' clause."""
    model_config = ConfigDict(frozen=True)

    table: str = Field(..., min_length=1)
    column: str = Field(..., min_length=1)

    def render(self) -> str:
        return f"references {self.table}({self.column})"


class FieldDescriptor(BaseModel):
    """
    Normalized representation of one declared field.

    size is kept only for String fields; the extractor drops it for
    every other type.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    semantic_type: SemanticType
    nullable: bool = False

    is_primary_key: bool = False
    is_auto: bool = False
    is_unique: bool = False

    has_default: bool = False
    default_value: Optional[DefaultValue] = None

    size: Optional[int] = Field(default=None, ge=1)
    foreign_key: Optional[ForeignKey] = None

    @property
    def is_now_default(self) -> bool:
        return self.has_default and self.default_value == NOW_KEYWORD


class ModelDefinition(BaseModel):
    """
    A model name plus its descriptors in declaration order.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    fields: Tuple[FieldDescriptor, ...] = Field(default_factory=tuple)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get_field(self, name: str) -> Optional[FieldDescriptor]:
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        return None


__all__ = [
    "DefaultValue",
    "FieldDeclaration",
    "ModelDeclaration",
    "ForeignKey",
    "FieldDescriptor",
    "ModelDefinition",
]
