# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Database operations
# PURPOSE: Connections, repository base patterns and schema migration
# CREATED: 17 OCT 2026
# ============================================================================
"""
Infrastructure module.

Provides:
- MigrationRunner: Create tables for a registry of models
- PostgreSQLRepository: Scoped psycopg connections
- BaseRepository: Error handling and logging for executors

Usage:
    from infrastructure import MigrationRunner, load_registry

    result = MigrationRunner(load_registry("app.models:MODELS")).run()
"""

from infrastructure.base_repository import (
    BaseRepository,
    RepositoryError,
)
from infrastructure.postgresql import (
    PostgreSQLRepository,
    get_postgres_repository,
)
from infrastructure.migration_runner import (
    MigrationRunner,
    MigrationResult,
    StepResult,
    load_registry,
    migrate,
)

__all__ = [
    # Repository patterns
    'BaseRepository',
    'RepositoryError',
    # PostgreSQL
    'PostgreSQLRepository',
    'get_postgres_repository',
    # Migration
    'MigrationRunner',
    'MigrationResult',
    'StepResult',
    'load_registry',
    'migrate',
]
