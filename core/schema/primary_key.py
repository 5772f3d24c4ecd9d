# ============================================================================
# PRIMARY KEY RESOLVER
# ============================================================================
# STATUS: Core - Primary key identity and generation mode
# PURPOSE: Pick the model's primary key while fields stream through
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: PrimaryKey, PrimaryKeyResolver, key_generation, resolve_primary_key
# DEPENDENCIES: pydantic
# ============================================================================
"""
Primary Key Resolver

The first field marked primary_key=true is the model's primary key. A
second marked field raises MultiplePrimaryKeys instead of being ignored.

Generation mode:
    auto=true              AUTO      'primary key autoincrement', not in createArgs
    Serial, auto unset     SERIAL    'primary key', not in createArgs
    anything else          SUPPLIED  'primary key', caller passes it on create

A model without a primary key resolves to an empty identity ("").
"""

from typing import Iterable, Optional
from pydantic import BaseModel, ConfigDict

from core.contracts import FieldRole, KeyGeneration, SemanticType
from core.models.field import FieldDescriptor
from core.errors import MultiplePrimaryKeys


class PrimaryKey(BaseModel):
    """Resolved primary key of a model."""
    model_config = ConfigDict(frozen=True)

    name: str
    generation: KeyGeneration


def key_generation(descriptor: FieldDescriptor) -> KeyGeneration:
    """Generation mode of a primary-key descriptor."""
    if descriptor.is_auto:
        return KeyGeneration.AUTO
    if descriptor.semantic_type == SemanticType.SERIAL:
        return KeyGeneration.SERIAL
    return KeyGeneration.SUPPLIED


class PrimaryKeyResolver:
    """
    Resolve the primary key one descriptor at a time.

    One resolver per compilation run.
    """

    def __init__(self):
        self._primary_key: Optional[PrimaryKey] = None

    @property
    def primary_key(self) -> Optional[PrimaryKey]:
        return self._primary_key

    @property
    def name(self) -> str:
        """Primary key field name, or '' when none was declared."""
        return self._primary_key.name if self._primary_key else ""

    def observe(self, descriptor: FieldDescriptor) -> FieldRole:
        """
        Classify one descriptor.

        Raises:
            MultiplePrimaryKeys: If a primary key was already resolved
        """
        if not descriptor.is_primary_key:
            return FieldRole.COLUMN

        if self._primary_key is not None:
            raise MultiplePrimaryKeys(
                f"primary key already declared on {self._primary_key.name!r}",
                field=descriptor.name,
            )

        self._primary_key = PrimaryKey(name=descriptor.name, generation=key_generation(descriptor))
        return FieldRole.PRIMARY_KEY


def resolve_primary_key(descriptors: Iterable[FieldDescriptor]) -> Optional[PrimaryKey]:
    """Resolve the primary key of a full descriptor sequence."""
    resolver = PrimaryKeyResolver()
    for descriptor in descriptors:
        resolver.observe(descriptor)
    return resolver.primary_key


__all__ = [
    "PrimaryKey",
    "PrimaryKeyResolver",
    "key_generation",
    "resolve_primary_key",
]
