# ============================================================================
# POSTGRESQL CONNECTION INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - PostgreSQL connection handling
# PURPOSE: Scoped psycopg connections for migrations and model executors
# CREATED: 17 OCT 2026
# ============================================================================
"""
PostgreSQL Connection Infrastructure

Provides database connectivity for the migration runner and the model
repositories:
- Connection string from DATABASE_URL or POSTGRES_* variables
- Context managers that always release the connection

Connections are opened per call and closed on exit. There is no pool.
"""

import os
import logging
import threading
from typing import Any, Dict, Optional
from contextlib import contextmanager

import psycopg
from psycopg.rows import dict_row

from core.config import DatabaseDefaults, get_defaults
from core.contracts import ParamStyle

logger = logging.getLogger(__name__)


class PostgreSQLRepository:
    """
    Connection provider for PostgreSQL.

    Usage:
        repo = PostgreSQLRepository()
        with repo.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
    """

    # psycopg binds %s markers
    paramstyle = ParamStyle.FORMAT

    def __init__(
        self,
        connection_string: Optional[str] = None,
        defaults: Optional[DatabaseDefaults] = None,
    ):
        """
        Initialize PostgreSQL repository.

        Args:
            connection_string: Optional explicit connection string
            defaults: Database defaults (environment defaults if omitted)
        """
        self.defaults = defaults or get_defaults().database
        self._conn_string = connection_string
        self._conn_string_lock = threading.Lock()

    @property
    def conn_string(self) -> str:
        """Get or build connection string (lazy, thread-safe)."""
        if self._conn_string is None:
            with self._conn_string_lock:
                if self._conn_string is None:
                    self._conn_string = self._build_connection_string()
        return self._conn_string

    @property
    def host(self) -> str:
        return os.environ.get("POSTGRES_HOST", "localhost")

    @property
    def database(self) -> str:
        return os.environ.get("POSTGRES_DB", "postgres")

    def _build_connection_string(self) -> str:
        """
        Build PostgreSQL connection string.

        Priority:
        1. DATABASE_URL
        2. Individual POSTGRES_* components
        """
        if self.defaults.database_url:
            return self.defaults.database_url

        host = os.environ.get("POSTGRES_HOST")
        port = os.environ.get("POSTGRES_PORT", "5432")
        database = os.environ.get("POSTGRES_DB")

        if not host or not database:
            raise ValueError(
                "Database connection not configured. "
                "Set DATABASE_URL, or POSTGRES_HOST and POSTGRES_DB environment variables."
            )

        user = os.environ.get("POSTGRES_USER", "postgres")
        password = os.environ.get("POSTGRES_PASSWORD", "")

        if not password:
            raise ValueError("No authentication configured. Provide POSTGRES_PASSWORD.")

        logger.debug(f"Password connection string built for {database}")
        return (
            f"postgresql://{user}:{password}@{host}:{port}/{database}"
            f"?sslmode={self.defaults.sslmode}"
        )

    @contextmanager
    def get_connection(self):
        """
        Context manager for PostgreSQL connections.

        Yields:
            psycopg connection with dict_row factory
        """
        conn = None
        try:
            logger.debug("Connecting to PostgreSQL...")
            conn = psycopg.connect(
                self.conn_string,
                row_factory=dict_row,
                connect_timeout=self.defaults.connect_timeout_seconds,
            )
            logger.debug("PostgreSQL connection established")
            yield conn

        except psycopg.Error as e:
            logger.error(f"PostgreSQL connection error: {e}")
            if conn:
                conn.rollback()
            raise

        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self, conn=None):
        """
        Context manager for PostgreSQL cursors.

        Args:
            conn: Optional existing connection (for transactions)

        Yields:
            psycopg cursor
        """
        if conn:
            # Use existing connection - caller controls transaction
            with conn.cursor() as cursor:
                yield cursor
        else:
            # Create new connection with auto-commit
            with self.get_connection() as conn:
                with conn.cursor() as cursor:
                    yield cursor
                    conn.commit()

    def execute(self, query: str, params: tuple = None) -> None:
        """Execute a query without returning results."""
        with self.get_cursor() as cur:
            cur.execute(query, params)

    def fetch_one(self, query: str, params: tuple = None) -> Optional[Dict[str, Any]]:
        """Execute query and fetch one result."""
        with self.get_cursor() as cur:
            cur.execute(query, params)
            return cur.fetchone()


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_repo: Optional[PostgreSQLRepository] = None
_repo_lock = threading.Lock()


def get_postgres_repository() -> PostgreSQLRepository:
    """Get shared PostgreSQL repository instance."""
    global _default_repo
    if _default_repo is None:
        with _repo_lock:
            if _default_repo is None:
                _default_repo = PostgreSQLRepository()
    return _default_repo


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PostgreSQLRepository",
    "get_postgres_repository",
]
