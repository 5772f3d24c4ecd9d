# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for compiler data contracts
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic data contracts flowing through the compiler:

    FieldDeclaration / ModelDeclaration   raw input
    FieldDescriptor / ModelDefinition     normalized by the extractor
    ModelArtifacts, CreatePlan, UpdatePlan  compiler output
"""

from core.models.field import (
    FieldDeclaration,
    ModelDeclaration,
    ForeignKey,
    FieldDescriptor,
    ModelDefinition,
)
from core.models.artifacts import (
    ModelArtifacts,
    CreatePlan,
    UpdatePlan,
    read_field_value,
)

__all__ = [
    # Declarations
    "FieldDeclaration",
    "ModelDeclaration",
    # Descriptors
    "ForeignKey",
    "FieldDescriptor",
    "ModelDefinition",
    # Artifacts
    "ModelArtifacts",
    "CreatePlan",
    "UpdatePlan",
    "read_field_value",
]
