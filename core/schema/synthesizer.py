# ============================================================================
# SCHEMA SYNTHESIZER
# ============================================================================
# STATUS: Core - CREATE TABLE generation
# PURPOSE: Render column clauses and the full table-definition statement
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: render_default, render_column, synthesize_table
# ============================================================================
"""
Schema Synthesizer

Column clause grammar:

    <name> <type> [primary key [autoincrement]] [unique] [default <expr>]
                  [not null] [references <table>(<column>)]

'not null' is rendered for every non-nullable column except the
primary key, which carries it implicitly.

Statement:

    create table if not exists <model> (<clause>, <clause>, ...);
"""

from typing import Optional, Sequence

from core.contracts import NOW_KEYWORD, FieldRole, KeyGeneration, SemanticType
from core.models.field import FieldDescriptor
from core.errors import InvalidDefaultForType
from core.schema.type_mapper import DEFAULT_STRING_SIZE, column_type


NOW_EXPRESSIONS = {
    SemanticType.DATE: "current_date",
    SemanticType.DATETIME: "current_timestamp",
}


def quote_literal(value: str) -> str:
    """Single-quote a string literal, doubling embedded quotes."""
    return "'" + value.replace("'", "''") + "'"


def render_default(descriptor: FieldDescriptor) -> str:
    """
    Render the 'default <expr>' fragment of a column clause.

    Raises:
        InvalidDefaultForType: 'now' on a field that is not Date/DateTime
    """
    value = descriptor.default_value

    if isinstance(value, bool):
        return "default 1" if value else "default 0"
    if isinstance(value, int):
        return f"default {value}"
    if value == NOW_KEYWORD:
        expression = NOW_EXPRESSIONS.get(descriptor.semantic_type)
        if expression is None:
            raise InvalidDefaultForType(
                f"'now' works only with Date or DateTime, not {descriptor.semantic_type.value}",
                field=descriptor.name,
            )
        return f"default {expression}"
    return f"default {quote_literal(value)}"


def render_column(
    descriptor: FieldDescriptor,
    role: FieldRole = FieldRole.COLUMN,
    generation: Optional[KeyGeneration] = None,
    default_string_size: int = DEFAULT_STRING_SIZE,
) -> str:
    """
    Render one column clause.

    Args:
        descriptor: Field to render
        role: PRIMARY_KEY for the resolved primary key
        generation: Key generation mode (AUTO adds 'autoincrement')
        default_string_size: varchar length for String fields without size

    Returns:
        Column clause text
    """
    parts = [descriptor.name, column_type(descriptor.semantic_type, descriptor.size, default_string_size)]

    if role == FieldRole.PRIMARY_KEY:
        parts.append("primary key")
        if generation == KeyGeneration.AUTO:
            parts.append("autoincrement")

    if descriptor.is_unique:
        parts.append("unique")

    if descriptor.has_default:
        parts.append(render_default(descriptor))

    # primary key implies not null
    if not descriptor.nullable and role != FieldRole.PRIMARY_KEY:
        parts.append("not null")

    if descriptor.foreign_key is not None:
        parts.append(descriptor.foreign_key.render())

    return " ".join(parts)


def synthesize_table(model_name: str, clauses: Sequence[str]) -> str:
    """Wrap column clauses into the create-if-missing statement."""
    return f"create table if not exists {model_name} ({', '.join(clauses)});"


__all__ = [
    "NOW_EXPRESSIONS",
    "quote_literal",
    "render_default",
    "render_column",
    "synthesize_table",
]
