# ============================================================================
# STATEMENT TEMPLATER
# ============================================================================
# STATUS: Core - Parameterized statement templates
# PURPOSE: Delete statement keyed by primary key, plus insert/update
#          templates for executors, all with canonical ?N placeholders
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: placeholder, delete_statement, insert_statement,
#          update_statement, translate_placeholders
# ============================================================================
"""
Statement Templater

Generated statements never know the backend. They carry canonical,
numbered placeholders:

    delete from User where id=?1;

Executors call translate_placeholders() right before dispatch to get
backend syntax and a matching parameter tuple:

    qmark    ?        (sqlite3)
    format   %s       (psycopg)
    numeric  :1
    dollar   $1
"""

import re
from typing import Any, Sequence, Tuple, Union

from core.contracts import ParamStyle


_CANONICAL_PLACEHOLDER = re.compile(r"\?(\d+)")


def placeholder(index: int) -> str:
    """Canonical placeholder for the 1-based parameter index."""
    return f"?{index}"


def delete_statement(model_name: str, primary_key: str) -> str:
    """Delete one row by primary key. Binds exactly one parameter."""
    return f"delete from {model_name} where {primary_key}={placeholder(1)};"


def insert_statement(model_name: str, names: Sequence[str]) -> str:
    """Insert the planned create fields, in plan order."""
    if not names:
        return f"insert into {model_name} default values;"
    columns = ", ".join(names)
    values = ", ".join(placeholder(i) for i in range(1, len(names) + 1))
    return f"insert into {model_name} ({columns}) values ({values});"


def update_statement(model_name: str, primary_key: str, names: Sequence[str]) -> str:
    """
    Update the planned fields of one row.

    Field values bind ?1..?N in plan order; the primary key binds ?N+1.
    """
    assignments = ", ".join(f"{name}={placeholder(i)}" for i, name in enumerate(names, start=1))
    return f"update {model_name} set {assignments} where {primary_key}={placeholder(len(names) + 1)};"


def translate_placeholders(
    statement: str,
    params: Sequence[Any],
    paramstyle: Union[ParamStyle, str] = ParamStyle.FORMAT,
) -> Tuple[str, Tuple[Any, ...]]:
    """
    Translate canonical ?N placeholders into a backend paramstyle.

    Args:
        statement: Statement with canonical placeholders
        params: Values indexed by placeholder number (params[0] is ?1)
        paramstyle: Target style

    Returns:
        (translated statement, params in the order the backend expects)

    Raises:
        ValueError: If a placeholder has no matching parameter
    """
    style = ParamStyle(paramstyle)
    params = tuple(params)

    indexes = [int(match.group(1)) for match in _CANONICAL_PLACEHOLDER.finditer(statement)]
    for index in indexes:
        if index < 1 or index > len(params):
            raise ValueError(f"placeholder ?{index} has no parameter ({len(params)} given)")

    if style == ParamStyle.NUMERIC:
        return _CANONICAL_PLACEHOLDER.sub(r":\1", statement), params
    if style == ParamStyle.DOLLAR:
        return _CANONICAL_PLACEHOLDER.sub(r"$\1", statement), params

    if style == ParamStyle.FORMAT:
        translated = _CANONICAL_PLACEHOLDER.sub("%s", statement.replace("%", "%%"))
    else:
        translated = _CANONICAL_PLACEHOLDER.sub("?", statement)

    return translated, tuple(params[index - 1] for index in indexes)


__all__ = [
    "placeholder",
    "delete_statement",
    "insert_statement",
    "update_statement",
    "translate_placeholders",
]
