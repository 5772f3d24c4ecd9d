# ============================================================================
# MODEL REGISTRY
# ============================================================================
# STATUS: Core - Explicit model registration
# PURPOSE: Ordered collection of model declarations for batch migration
# CREATED: 17 OCT 2026
# ============================================================================
"""
Model Registry

The application assembles the models it wants migrated, in order,
and hands the registry to the migration runner.

Design:
- Registries are plain objects; there is no global collector
- Registration order is migration order
- Fail-fast on duplicate model names
- Usable as a class decorator for pydantic models

Example:
    MODELS = ModelRegistry()

    @MODELS.register
    class User(BaseModel):
        __sql_table__: ClassVar[str] = "users"
        ...

    MODELS.register(ORDER_FIELDS, name="orders")
"""

import logging
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from core.errors import DuplicateModelError
from core.models.artifacts import ModelArtifacts
from core.models.field import ModelDeclaration
from core.schema.compiler import ModelCompiler
from core.schema.extractor import coerce_declaration

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Ordered, explicit set of model declarations."""

    def __init__(self, models: Optional[Iterable[Any]] = None):
        self._declarations: List[ModelDeclaration] = []
        for model in models or ():
            self.register(model)

    def register(self, model: Any = None, *, name: Optional[str] = None) -> Any:
        """
        Register a model declaration.

        Args:
            model: Any shape accepted by coerce_declaration
            name: Model name for bare field lists

        Returns:
            The model unchanged (so this works as a decorator)

        Raises:
            DuplicateModelError: If the model name is already registered
            UnsupportedStructShape: If the declaration shape is not supported
        """
        if model is None:
            return lambda target: self.register(target, name=name)

        declaration = coerce_declaration(model, name)
        if declaration.name in self.names:
            raise DuplicateModelError("model already registered", model=declaration.name)

        self._declarations.append(declaration)
        logger.debug(f"Registered model {declaration.name} ({len(declaration.fields)} fields)")
        return model

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self._declarations)

    @property
    def declarations(self) -> Tuple[ModelDeclaration, ...]:
        return tuple(self._declarations)

    def __iter__(self) -> Iterator[ModelDeclaration]:
        return iter(self._declarations)

    def __len__(self) -> int:
        return len(self._declarations)

    def compile_all(self, compiler: Optional[ModelCompiler] = None) -> List[ModelArtifacts]:
        """
        Compile every registered model in registration order.

        Raises:
            ConfigurationError: From the first model that fails
        """
        compiler = compiler or ModelCompiler()
        return compiler.compile_all(self._declarations)


__all__ = ["ModelRegistry"]
