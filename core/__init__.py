# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts, models, and the model compiler
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================

from core.contracts import SemanticType, KeyGeneration, FieldRole, ParamStyle
from core.errors import (
    ConfigurationError,
    UnsupportedFieldType,
    UnsupportedStructShape,
    InvalidForeignKeySpec,
    InvalidDefaultForType,
    PlanBindingError,
)
from core.models import (
    FieldDeclaration,
    ModelDeclaration,
    FieldDescriptor,
    ModelDefinition,
    ModelArtifacts,
    CreatePlan,
    UpdatePlan,
)
from core.schema import ModelCompiler, ModelRegistry, compile_model

__all__ = [
    # Enums
    "SemanticType",
    "KeyGeneration",
    "FieldRole",
    "ParamStyle",
    # Errors
    "ConfigurationError",
    "UnsupportedFieldType",
    "UnsupportedStructShape",
    "InvalidForeignKeySpec",
    "InvalidDefaultForType",
    "PlanBindingError",
    # Models
    "FieldDeclaration",
    "ModelDeclaration",
    "FieldDescriptor",
    "ModelDefinition",
    "ModelArtifacts",
    "CreatePlan",
    "UpdatePlan",
    # Compiler
    "ModelCompiler",
    "ModelRegistry",
    "compile_model",
]
