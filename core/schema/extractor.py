# ============================================================================
# FIELD DESCRIPTOR EXTRACTOR
# ============================================================================
# STATUS: Core - Declaration normalization
# PURPOSE: Turn raw field declarations into validated FieldDescriptors
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: extract_field, extract_model, coerce_declaration,
#          declaration_from_pydantic, unwrap_optional, resolve_semantic_type
# DEPENDENCIES: pydantic, annotated_types
# ============================================================================
"""
Field Descriptor Extractor

Normalizes one declared field at a time:

    FieldDeclaration(name="email", declared_type="Optional[String]",
                     modifiers={"unique": True})
        -> FieldDescriptor(name="email", semantic_type=STRING,
                           nullable=True, is_unique=True)

Optional wrappers are unwrapped exactly one level. The type left after
unwrapping must be one of the semantic types.

Declarations can be handed in several shapes (see coerce_declaration):
a ModelDeclaration, a list of FieldDeclaration / (name, type[, modifiers])
tuples, a {name: type | (type, modifiers)} mapping, or a pydantic model
class. Anything else is an UnsupportedStructShape.
"""

import logging
import re
import types
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, Union, get_args, get_origin

from annotated_types import MaxLen
from pydantic import BaseModel

from core.contracts import NOW_KEYWORD, SemanticType
from core.models.field import (
    FieldDeclaration,
    FieldDescriptor,
    ForeignKey,
    ModelDeclaration,
    ModelDefinition,
)
from core.errors import (
    ConfigurationError,
    InvalidForeignKeySpec,
    InvalidModifier,
    UnsupportedFieldType,
    UnsupportedStructShape,
)
from core.schema.type_mapper import PYTHON_TYPE_MAP

logger = logging.getLogger(__name__)


MODIFIER_KEYS = ("primary_key", "auto", "unique", "size", "default", "foreign_key")
BOOL_MODIFIERS = {
    "primary_key": "is_primary_key",
    "auto": "is_auto",
    "unique": "is_unique",
}

# Optional[String] / Option<String>
_WRAPPED_NAME = re.compile(r"^\s*(?:Optional|Option)\s*(?:\[(?P<square>.+)\]|<(?P<angle>.+)>)\s*$")

# default_factory values that mean "let the database stamp it"
_NOW_FACTORIES = (datetime.now, datetime.utcnow, date.today)


# ============================================================================
# TYPE RESOLUTION
# ============================================================================

def unwrap_optional(declared_type: Any, field: Optional[str] = None) -> Tuple[Any, bool]:
    """
    Strip one optional wrapper from a declared type.

    Args:
        declared_type: Type name string, SemanticType, Python type or typing form
        field: Field name for error context

    Returns:
        (inner type, nullable)

    Raises:
        UnsupportedFieldType: For unions that are not a plain Optional
    """
    if isinstance(declared_type, SemanticType):
        return declared_type, False

    if isinstance(declared_type, str):
        match = _WRAPPED_NAME.match(declared_type)
        if match:
            inner = match.group("square") or match.group("angle")
            return inner.strip(), True
        return declared_type.strip(), False

    origin = get_origin(declared_type)
    if origin is Union or origin is types.UnionType:
        args = get_args(declared_type)
        inner = [arg for arg in args if arg is not type(None)]
        if len(args) == 2 and len(inner) == 1:
            return inner[0], True
        raise UnsupportedFieldType(
            f"union type {declared_type!r} is not an optional wrapper", field=field
        )

    return declared_type, False


def resolve_semantic_type(type_ref: Any, field: Optional[str] = None) -> SemanticType:
    """
    Resolve an unwrapped type reference to a SemanticType.

    Raises:
        UnsupportedFieldType: If the reference names no semantic type
    """
    if isinstance(type_ref, SemanticType):
        return type_ref

    if isinstance(type_ref, str):
        try:
            return SemanticType(type_ref)
        except ValueError:
            pass
    elif isinstance(type_ref, type) and type_ref in PYTHON_TYPE_MAP:
        return PYTHON_TYPE_MAP[type_ref]

    expected = ", ".join(f"'{name}'" for name in SemanticType.names())
    raise UnsupportedFieldType(
        f"unexpected field type {_type_label(type_ref)!r}, expected one of: {expected}",
        field=field,
    )


def _type_label(type_ref: Any) -> str:
    if isinstance(type_ref, type):
        return type_ref.__name__
    return str(type_ref)


# ============================================================================
# MODIFIER PARSING
# ============================================================================

def parse_foreign_key(spec: Any, field: Optional[str] = None) -> ForeignKey:
    """
    Parse a 'table.column' foreign key reference.

    Raises:
        InvalidModifier: If spec is not a string
        InvalidForeignKeySpec: If spec does not split into two non-empty parts
    """
    if not isinstance(spec, str):
        raise InvalidModifier(f"foreign_key must be a 'table.column' string, got {spec!r}", field=field)

    parts = spec.split(".")
    if len(parts) != 2 or not all(parts):
        raise InvalidForeignKeySpec(f"invalid foreign key {spec!r}, expected 'table.column'", field=field)

    return ForeignKey(table=parts[0], column=parts[1])


def parse_modifiers(
    name: str,
    semantic_type: SemanticType,
    modifiers: Mapping,
) -> Dict[str, Any]:
    """
    Validate raw modifier pairs and map them onto descriptor attributes.

    Args:
        name: Field name (error context)
        semantic_type: Resolved semantic type (size applies to String only)
        modifiers: Raw key/value pairs from the declaration

    Returns:
        Keyword arguments for FieldDescriptor

    Raises:
        InvalidModifier: Unknown key or wrong kind of value
        InvalidForeignKeySpec: Malformed foreign_key
    """
    parsed: Dict[str, Any] = {}

    for key, value in modifiers.items():
        if key in BOOL_MODIFIERS:
            if not isinstance(value, bool):
                raise InvalidModifier(f"{key} must be a bool, got {value!r}", field=name)
            parsed[BOOL_MODIFIERS[key]] = value

        elif key == "size":
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidModifier(f"size must be a positive integer, got {value!r}", field=name)
            if semantic_type == SemanticType.STRING:
                parsed["size"] = value

        elif key == "default":
            if not isinstance(value, (bool, int, str)):
                raise InvalidModifier(
                    f"default must be a string, bool or integer literal, got {value!r}", field=name
                )
            parsed["has_default"] = True
            parsed["default_value"] = value

        elif key == "foreign_key":
            parsed["foreign_key"] = parse_foreign_key(value, field=name)

        else:
            raise InvalidModifier(
                f"unknown modifier {key!r}, expected one of: {', '.join(MODIFIER_KEYS)}", field=name
            )

    return parsed


# ============================================================================
# EXTRACTION
# ============================================================================

def extract_field(declaration: FieldDeclaration) -> FieldDescriptor:
    """
    Normalize one field declaration into a FieldDescriptor.

    Raises:
        UnsupportedFieldType, InvalidModifier, InvalidForeignKeySpec
    """
    name = declaration.name
    inner, nullable = unwrap_optional(declaration.declared_type, field=name)
    semantic_type = resolve_semantic_type(inner, field=name)
    parsed = parse_modifiers(name, semantic_type, declaration.modifiers)

    return FieldDescriptor(
        name=name,
        semantic_type=semantic_type,
        nullable=nullable,
        **parsed,
    )


def extract_model(source: Any, name: Optional[str] = None) -> ModelDefinition:
    """
    Extract every field of a model declaration.

    Args:
        source: Any declaration shape accepted by coerce_declaration
        name: Model name (required unless source carries one)

    Returns:
        ModelDefinition with descriptors in declaration order
    """
    declaration = coerce_declaration(source, name)
    try:
        descriptors = tuple(extract_field(field) for field in declaration.fields)
    except ConfigurationError as e:
        raise e.with_model(declaration.name)
    return ModelDefinition(name=declaration.name, fields=descriptors)


# ============================================================================
# DECLARATION SHAPES
# ============================================================================

def coerce_declaration(source: Any, name: Optional[str] = None) -> ModelDeclaration:
    """
    Accept the supported declaration shapes and return a ModelDeclaration.

    Supported:
        ModelDeclaration
        pydantic BaseModel subclass (name, if given, overrides its table name)
        [FieldDeclaration | (name, type) | (name, type, modifiers), ...]
        {name: type | (type, modifiers) | FieldDeclaration, ...}

    Raises:
        UnsupportedStructShape: For anything else
    """
    if isinstance(source, ModelDeclaration):
        return source

    if isinstance(source, type) and issubclass(source, BaseModel):
        declaration = declaration_from_pydantic(source)
        if name and name != declaration.name:
            declaration = declaration.model_copy(update={"name": name})
        return declaration

    if isinstance(source, BaseModel):
        raise UnsupportedStructShape(
            f"expected a model class, got an instance of {type(source).__name__}", model=name
        )

    if not name:
        raise UnsupportedStructShape("a model name is required for a bare field list")

    if isinstance(source, Mapping):
        fields = [_field_from_mapping_item(name, key, value) for key, value in source.items()]
    elif isinstance(source, (list, tuple)):
        fields = [_field_from_item(name, item) for item in source]
    else:
        raise UnsupportedStructShape(
            f"expected a named-field list, got {type(source).__name__}", model=name
        )

    return ModelDeclaration(name=name, fields=tuple(fields))


def _field_from_item(model: str, item: Any) -> FieldDeclaration:
    if isinstance(item, FieldDeclaration):
        return item
    if isinstance(item, tuple) and len(item) in (2, 3) and isinstance(item[0], str) and item[0]:
        modifiers = item[2] if len(item) == 3 else {}
        if not isinstance(modifiers, Mapping):
            raise UnsupportedStructShape(f"modifiers must be a mapping, got {modifiers!r}", model=model, field=item[0])
        return FieldDeclaration(name=item[0], declared_type=item[1], modifiers=dict(modifiers))
    raise UnsupportedStructShape(f"unnamed or malformed field declaration {item!r}", model=model)


def _field_from_mapping_item(model: str, key: Any, value: Any) -> FieldDeclaration:
    if not isinstance(key, str) or not key:
        raise UnsupportedStructShape(f"field names must be non-empty strings, got {key!r}", model=model)
    if isinstance(value, FieldDeclaration):
        return value
    if isinstance(value, tuple):
        return _field_from_item(model, (key,) + value)
    return FieldDeclaration(name=key, declared_type=value)


def declaration_from_pydantic(model_cls: Type[BaseModel]) -> ModelDeclaration:
    """
    Read a pydantic model class into a ModelDeclaration.

    Conventions:
        __sql_table__ ClassVar             table name (default: class name)
        Field(max_length=N)                size
        Field(json_schema_extra={...})     primary_key, auto, unique,
                                           foreign_key, default, sql_type
        literal default (str/bool/int)     default
        default_factory=datetime.utcnow    default "now"

    sql_type overrides the semantic type inferred from the annotation;
    it is how Serial and Text columns are declared.
    """
    if not (isinstance(model_cls, type) and issubclass(model_cls, BaseModel)):
        raise UnsupportedStructShape(f"expected a pydantic model class, got {model_cls!r}")

    table = getattr(model_cls, "__sql_table__", None) or model_cls.__name__
    fields = []

    for field_name, field_info in model_cls.model_fields.items():
        extra = field_info.json_schema_extra if isinstance(field_info.json_schema_extra, dict) else {}
        modifiers = {key: extra[key] for key in MODIFIER_KEYS if key in extra}

        declared_type: Any = field_info.annotation
        sql_type = extra.get("sql_type")
        if sql_type is not None:
            try:
                _, nullable = unwrap_optional(declared_type, field=field_name)
                semantic_type = resolve_semantic_type(sql_type, field=field_name)
            except UnsupportedFieldType as e:
                raise e.with_model(table)
            declared_type = f"Optional[{semantic_type.value}]" if nullable else semantic_type.value

        if "size" not in modifiers:
            for constraint in field_info.metadata:
                if isinstance(constraint, MaxLen):
                    modifiers["size"] = constraint.max_length
                    break

        if "default" not in modifiers:
            default = _database_default(field_info)
            if default is not None:
                modifiers["default"] = default

        fields.append(FieldDeclaration(name=field_name, declared_type=declared_type, modifiers=modifiers))

    logger.debug(f"Read {len(fields)} fields from pydantic model {model_cls.__name__}")
    return ModelDeclaration(name=table, fields=tuple(fields))


def _database_default(field_info) -> Any:
    """Column default implied by a pydantic field default, if any."""
    if field_info.default_factory is not None:
        if field_info.default_factory in _NOW_FACTORIES:
            return NOW_KEYWORD
        return None

    if field_info.is_required():
        return None

    default = field_info.default
    if isinstance(default, Enum):
        default = default.value
    if isinstance(default, (bool, int, str)):
        return default
    return None


__all__ = [
    "MODIFIER_KEYS",
    "unwrap_optional",
    "resolve_semantic_type",
    "parse_foreign_key",
    "parse_modifiers",
    "extract_field",
    "extract_model",
    "coerce_declaration",
    "declaration_from_pydantic",
]
