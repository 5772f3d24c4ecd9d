# ============================================================================
# MODEL REPOSITORY
# ============================================================================
# STATUS: Repository - Executes compiled model artifacts
# PURPOSE: save / update / delete an instance using its compiled plans
# CREATED: 17 OCT 2026
# ============================================================================
"""
Model Repository

Turns compiled plans into bound statements and dispatches them:

    repo = ModelRepository(artifacts, PostgreSQLRepository())
    repo.create_table()
    repo.save(user)      # insert into User (name, email) values (%s, %s);
    repo.update(user)    # update User set name=%s, ... where id=%s;
    repo.delete(user)    # delete from User where id=%s;

Each call acquires its own connection from the provider, commits, and
releases it on exit. The provider is anything exposing a
get_connection() context manager yielding a DB-API connection
(PostgreSQLRepository, or sqlite3 in tests).

Values are encoded the way the column types store them:
Boolean -> 0/1, Date -> 'YYYY-MM-DD', DateTime -> ISO 8601 text.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional, Sequence, Union

from core.config import get_defaults
from core.contracts import ParamStyle, SemanticType
from core.logging import log_context
from core.models.artifacts import ModelArtifacts
from core.schema.templater import insert_statement, translate_placeholders, update_statement
from infrastructure.base_repository import BaseRepository


def encode_value(semantic_type: SemanticType, value: Any) -> Any:
    """Encode a runtime value for its column type. None passes through."""
    if value is None:
        return None
    if semantic_type == SemanticType.BOOLEAN:
        return 1 if value else 0
    if semantic_type == SemanticType.DATE:
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
    if semantic_type == SemanticType.DATETIME and isinstance(value, datetime):
        return value.isoformat()
    return value


class ModelRepository(BaseRepository):
    """
    Executor for one compiled model.

    Usage:
        artifacts = ModelCompiler().compile(User)
        repo = ModelRepository(artifacts, get_postgres_repository())
        repo.save(User(name="ann", email=None))
    """

    def __init__(
        self,
        artifacts: ModelArtifacts,
        connection_provider: Any,
        paramstyle: Optional[Union[ParamStyle, str]] = None,
    ):
        """
        Initialize the repository.

        Args:
            artifacts: Compiled model artifacts
            connection_provider: Object with a get_connection() context manager
            paramstyle: Bind syntax (defaults to the provider's paramstyle,
                then MODELGEN_PARAMSTYLE)
        """
        super().__init__()
        self.artifacts = artifacts
        self.provider = connection_provider
        self.paramstyle = ParamStyle(
            paramstyle
            or getattr(connection_provider, "paramstyle", None)
            or get_defaults().database.paramstyle
        )

    @property
    def model_name(self) -> str:
        return self.artifacts.model_name

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def create_table(self) -> None:
        """Execute the model's create-if-missing DDL."""
        self._dispatch(self.artifacts.ddl, None, f"{self.model_name} create table", self.model_name)
        self._log_operation(True, "Table ensured", self.model_name)

    def save(self, instance: Any) -> int:
        """
        Insert an instance using the create plan.

        Returns:
            Affected row count
        """
        plan = self.artifacts.create_plan(instance)
        statement = insert_statement(self.model_name, plan.names)
        params = self._encode(plan.values)

        rowcount = self._dispatch(statement, params, f"{self.model_name} insert", self._entity_id(instance))
        self._log_operation(True, f"{self.model_name} inserted", self._entity_id(instance))
        return rowcount

    def update(self, instance: Any) -> int:
        """
        Update an instance by primary key using the update plan.

        Returns:
            Affected row count (0 when there is nothing to update)
        """
        plan = self.artifacts.update_plan(instance)
        entity_id = str(plan.primary_key_value)

        if not plan.values:
            self.logger.warning(f"{self.model_name} has no updatable fields, skipping update of {entity_id}")
            return 0

        statement = update_statement(self.model_name, plan.primary_key, plan.names)
        params = self._encode(plan.values) + self._encode(((plan.primary_key, plan.primary_key_value),))

        rowcount = self._dispatch(statement, params, f"{self.model_name} update", entity_id)
        self._log_operation(rowcount > 0, f"{self.model_name} updated", entity_id, {"rows": rowcount})
        return rowcount

    def delete(self, instance: Any) -> int:
        """
        Delete an instance by primary key.

        Returns:
            Affected row count
        """
        (key_value,) = self.artifacts.delete_params(instance)
        entity_id = str(key_value)
        params = self._encode(((self.artifacts.primary_key, key_value),))

        rowcount = self._dispatch(self.artifacts.delete_statement, params, f"{self.model_name} delete", entity_id)
        self._log_operation(rowcount > 0, f"{self.model_name} deleted", entity_id, {"rows": rowcount})
        return rowcount

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _encode(self, values: Sequence) -> tuple:
        encoded = []
        for name, value in values:
            descriptor = self.artifacts.definition.get_field(name)
            encoded.append(encode_value(descriptor.semantic_type, value) if descriptor else value)
        return tuple(encoded)

    def _entity_id(self, instance: Any) -> str:
        if not self.artifacts.primary_key:
            return self.model_name
        if isinstance(instance, Mapping):
            value = instance.get(self.artifacts.primary_key)
        else:
            value = getattr(instance, self.artifacts.primary_key, None)
        return self.model_name if value is None else str(value)

    def _dispatch(self, statement: str, params: Optional[tuple], operation: str, entity_id: str) -> int:
        """Execute one statement on a connection scoped to this call."""
        with log_context(model=self.model_name, operation=operation), self._error_context(operation, entity_id):
            if params is None:
                translated, ordered = statement, None
            else:
                translated, ordered = translate_placeholders(statement, params, self.paramstyle)

            self.logger.debug(f"{operation}: {translated}")
            with self.provider.get_connection() as conn:
                cursor = conn.cursor()
                try:
                    if ordered is None:
                        cursor.execute(translated)
                    else:
                        cursor.execute(translated, ordered)
                    rowcount = cursor.rowcount
                finally:
                    cursor.close()
                conn.commit()
            return rowcount


__all__ = [
    "encode_value",
    "ModelRepository",
]
