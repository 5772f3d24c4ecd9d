# ============================================================================
# MODEL COMPILER
# ============================================================================
# STATUS: Core - Schema and operation compilation
# PURPOSE: Compile a model declaration into DDL, primary key, argument
#          plans and a delete statement
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: ModelCompiler, compile_model
# DEPENDENCIES: pydantic
# ============================================================================
"""
Model Compiler

Declarations are the SINGLE SOURCE OF TRUTH for a table and its
create/update/delete operations.

Each field goes through every stage before the next field starts:

    extract -> resolve primary key role -> plan arguments -> render column

Any ConfigurationError aborts the whole model; nothing partial is
returned. Compilation holds no state between calls, so compiling the
same declaration twice yields identical artifacts.

Usage:
    compiler = ModelCompiler()
    artifacts = compiler.compile([
        ("id", "Serial", {"primary_key": True, "auto": True}),
        ("name", "String", {"size": 50, "unique": True}),
        ("email", "Optional[String]"),
        ("created_at", "DateTime", {"default": "now"}),
    ], name="User")

    artifacts.ddl
    # create table if not exists User (id serial primary key autoincrement, ...);
"""

from typing import Any, Iterable, List, Optional

from core.config import CompilerDefaults, get_defaults
from core.contracts import FieldRole
from core.errors import ConfigurationError, MissingPrimaryKey, UnsupportedStructShape
from core.logging import ComponentType, get_logger, log_context
from core.models.artifacts import ModelArtifacts
from core.models.field import FieldDescriptor, ModelDefinition
from core.schema.extractor import coerce_declaration, extract_field
from core.schema.planner import ArgumentPlanner
from core.schema.primary_key import PrimaryKeyResolver
from core.schema.synthesizer import render_column, synthesize_table
from core.schema.templater import delete_statement

logger = get_logger(__name__, ComponentType.COMPILER)


class ModelCompiler:
    """
    Compile model declarations into ModelArtifacts.

    Stateless apart from its configuration; safe to reuse.
    """

    def __init__(self, defaults: Optional[CompilerDefaults] = None):
        """
        Initialize the compiler.

        Args:
            defaults: Compiler defaults (environment defaults if omitted)
        """
        self.defaults = defaults or get_defaults().compiler

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def compile(self, source: Any, name: Optional[str] = None) -> ModelArtifacts:
        """
        Compile one model.

        Args:
            source: ModelDeclaration, pydantic model class, field list or mapping
            name: Model name for bare field lists

        Returns:
            ModelArtifacts

        Raises:
            ConfigurationError: Any declaration error (whole model aborted)
        """
        declaration = coerce_declaration(source, name)
        descriptors = (extract_field(field) for field in declaration.fields)
        return self._compile_fields(declaration.name, descriptors, len(declaration.fields))

    def compile_definition(self, definition: ModelDefinition) -> ModelArtifacts:
        """Compile already-extracted descriptors."""
        return self._compile_fields(definition.name, iter(definition.fields), len(definition.fields))

    def compile_all(self, sources: Iterable[Any]) -> List[ModelArtifacts]:
        """
        Compile several models in order.

        The first failing model aborts the run.
        """
        return [self.compile(source) for source in sources]

    # =========================================================================
    # COMPILATION
    # =========================================================================

    def _compile_fields(
        self,
        model_name: str,
        descriptors: Iterable[FieldDescriptor],
        field_count: int,
    ) -> ModelArtifacts:
        with log_context(model=model_name, operation="compile"):
            try:
                return self._run(model_name, descriptors, field_count)
            except ConfigurationError as e:
                e.with_model(model_name)
                with log_context(field_name=e.field):
                    logger.error(f"Generation aborted for {model_name}: {e}")
                raise

    def _run(
        self,
        model_name: str,
        descriptors: Iterable[FieldDescriptor],
        field_count: int,
    ) -> ModelArtifacts:
        if field_count == 0:
            raise UnsupportedStructShape("model declares no fields", model=model_name)

        resolver = PrimaryKeyResolver()
        planner = ArgumentPlanner()
        extracted: List[FieldDescriptor] = []
        clauses: List[str] = []

        for descriptor in descriptors:
            with log_context(field_name=descriptor.name):
                role = resolver.observe(descriptor)
                generation = resolver.primary_key.generation if role == FieldRole.PRIMARY_KEY else None

                planner.add(descriptor, role, generation)
                clauses.append(
                    render_column(descriptor, role, generation, self.defaults.default_string_size)
                )
                extracted.append(descriptor)

                logger.debug(f"Planned {descriptor.semantic_type.value} field as {role.value}")

        primary_key = resolver.name
        if not primary_key:
            if self.defaults.require_primary_key:
                raise MissingPrimaryKey("no field is marked primary_key", model=model_name)
            logger.warning(f"Model {model_name} has no primary key; update and delete are unavailable")

        artifacts = ModelArtifacts(
            model_name=model_name,
            ddl=synthesize_table(model_name, clauses),
            primary_key=primary_key,
            primary_key_generation=resolver.primary_key.generation if resolver.primary_key else None,
            create_args=planner.create_args,
            update_args=planner.update_args,
            delete_statement=delete_statement(model_name, primary_key),
            definition=ModelDefinition(name=model_name, fields=tuple(extracted)),
        )

        logger.info(
            f"Compiled model {model_name}: {len(clauses)} columns, "
            f"{len(artifacts.create_args)} create args, {len(artifacts.update_args)} update args"
        )
        return artifacts


def compile_model(source: Any, name: Optional[str] = None) -> ModelArtifacts:
    """Compile one model with default configuration."""
    return ModelCompiler().compile(source, name)


__all__ = [
    "ModelCompiler",
    "compile_model",
]
