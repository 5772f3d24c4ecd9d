# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared by compiler and executors
# PURPOSE: Semantic field types, primary-key roles, bind parameter styles
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: SemanticType, KeyGeneration, FieldRole, ParamStyle, NOW_KEYWORD
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the model compiler.

These enums cross every boundary of the system:
- Declaration (what a model author writes)
- Compilation (descriptors, plans, DDL)
- Execution (placeholder translation, value encoding)
"""

from enum import Enum


# Default keyword that renders as the database's current date/time
NOW_KEYWORD = "now"


# ============================================================================
# SEMANTIC TYPES
# ============================================================================

class SemanticType(str, Enum):
    """
    Semantic field types a model may declare.

    Values are the declaration-facing type names.
    """
    SERIAL = "Serial"
    INTEGER = "Integer"
    STRING = "String"
    FLOAT = "Float"
    TEXT = "Text"
    DATE = "Date"
    BOOLEAN = "Boolean"
    DATETIME = "DateTime"

    def is_temporal(self) -> bool:
        """Check if this type accepts the 'now' default."""
        return self in (SemanticType.DATE, SemanticType.DATETIME)

    @classmethod
    def names(cls) -> list:
        return [member.value for member in cls]


# ============================================================================
# PRIMARY KEY ROLES
# ============================================================================

class KeyGeneration(str, Enum):
    """
    How a primary-key value comes into existence.

    AUTO      - declared auto=true, rendered 'primary key autoincrement'
    SERIAL    - Serial type without auto, rendered 'primary key'
    SUPPLIED  - caller passes the value on create
    """
    AUTO = "auto"
    SERIAL = "serial"
    SUPPLIED = "supplied"

    def is_database_generated(self) -> bool:
        return self in (KeyGeneration.AUTO, KeyGeneration.SERIAL)


class FieldRole(str, Enum):
    """Role a single field plays in the compiled model."""
    PRIMARY_KEY = "primary_key"
    COLUMN = "column"


# ============================================================================
# BIND PARAMETER STYLES
# ============================================================================

class ParamStyle(str, Enum):
    """
    Backend bind-parameter syntaxes (DB-API paramstyle names).

    Generated statements carry canonical '?N' markers; executors
    translate them to one of these before dispatch.
    """
    QMARK = "qmark"        # sqlite3: ?
    FORMAT = "format"      # psycopg: %s
    NUMERIC = "numeric"    # :1
    DOLLAR = "dollar"      # asyncpg / server-side: $1


__all__ = [
    "NOW_KEYWORD",
    "SemanticType",
    "KeyGeneration",
    "FieldRole",
    "ParamStyle",
]
