# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - Schema and operation compilation
# PURPOSE: Compile model declarations into DDL and operation plans
# LAST_REVIEWED: 17 OCT 2026
# ============================================================================

from core.schema.type_mapper import (
    DEFAULT_STRING_SIZE,
    TYPE_MAP,
    column_type,
)
from core.schema.extractor import (
    coerce_declaration,
    declaration_from_pydantic,
    extract_field,
    extract_model,
)
from core.schema.primary_key import PrimaryKey, PrimaryKeyResolver, resolve_primary_key
from core.schema.planner import ArgumentPlanner
from core.schema.synthesizer import render_column, render_default, synthesize_table
from core.schema.templater import (
    delete_statement,
    insert_statement,
    update_statement,
    translate_placeholders,
)
from core.schema.compiler import ModelCompiler, compile_model
from core.schema.registry import ModelRegistry
from core.schema.codegen import CodegenError, render_module, write_module

__all__ = [
    # Compiler
    "ModelCompiler",
    "compile_model",
    "ModelRegistry",
    # Stages
    "extract_field",
    "extract_model",
    "coerce_declaration",
    "declaration_from_pydantic",
    "PrimaryKey",
    "PrimaryKeyResolver",
    "resolve_primary_key",
    "ArgumentPlanner",
    "render_column",
    "render_default",
    "synthesize_table",
    # Types
    "TYPE_MAP",
    "DEFAULT_STRING_SIZE",
    "column_type",
    # Statements
    "delete_statement",
    "insert_statement",
    "update_statement",
    "translate_placeholders",
    # Codegen
    "CodegenError",
    "render_module",
    "write_module",
]
