# ============================================================================
# TYPE MAPPER
# ============================================================================
# STATUS: Core - Semantic type to column type mapping
# PURPOSE: Portable column syntax for each semantic field type
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: TYPE_MAP, PYTHON_TYPE_MAP, DEFAULT_STRING_SIZE, column_type
# ============================================================================
"""
Type Mapper

Dates, timestamps and booleans are stored as portable text/integer
columns rather than backend-native temporal or boolean types:

    Date      -> varchar(10)   ISO date text
    DateTime  -> varchar(40)   ISO timestamp text
    Boolean   -> integer       0/1
"""

from datetime import date, datetime
from typing import Optional

from core.contracts import SemanticType


DEFAULT_STRING_SIZE = 255


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP = {
    SemanticType.SERIAL: "serial",
    SemanticType.INTEGER: "integer",
    SemanticType.FLOAT: "float",
    SemanticType.TEXT: "text",
    SemanticType.DATE: "varchar(10)",
    SemanticType.BOOLEAN: "integer",
    SemanticType.DATETIME: "varchar(40)",
}

# Plain Python annotations accepted in place of a semantic type name.
# bool before int: bool is a subclass of int.
PYTHON_TYPE_MAP = {
    bool: SemanticType.BOOLEAN,
    int: SemanticType.INTEGER,
    float: SemanticType.FLOAT,
    str: SemanticType.STRING,
    datetime: SemanticType.DATETIME,
    date: SemanticType.DATE,
}


def column_type(
    semantic_type: SemanticType,
    size: Optional[int] = None,
    default_string_size: int = DEFAULT_STRING_SIZE,
) -> str:
    """
    Map a semantic type to column-type syntax.

    Args:
        semantic_type: Field semantic type
        size: varchar length, honoured for String only
        default_string_size: varchar length when String has no size

    Returns:
        Column type string (e.g. 'varchar(50)')
    """
    if semantic_type == SemanticType.STRING:
        return f"varchar({size or default_string_size})"
    return TYPE_MAP[semantic_type]


__all__ = [
    "DEFAULT_STRING_SIZE",
    "TYPE_MAP",
    "PYTHON_TYPE_MAP",
    "column_type",
]
