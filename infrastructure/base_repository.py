# ============================================================================
# BASE REPOSITORY - ERROR HANDLING PATTERNS
# ============================================================================
# STATUS: Infrastructure - Base repository patterns
# PURPOSE: Common error handling and logging for executors
# CREATED: 17 OCT 2026
# ============================================================================
"""
Base Repository Patterns

Abstract base class that provides common infrastructure for repositories
that execute compiled artifacts:
- Consistent error handling with context managers
- Standardized logging

Binding errors (PlanBindingError) and configuration errors pass through
unchanged; everything else raised by a backend is wrapped in
RepositoryError with the operation and entity for context.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Any, Dict, Optional

from core.errors import ConfigurationError, PlanBindingError
from core.logging import ComponentType, get_logger


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, operation: str = None, entity_id: str = None):
        self.operation = operation
        self.entity_id = entity_id
        super().__init__(message)


class BaseRepository(ABC):
    """
    Abstract base repository with common patterns.

    Provides:
    - Error context manager for consistent error handling
    - Standardized logging

    Subclasses implement storage-specific operations.
    """

    def __init__(self):
        """Initialize base repository."""
        self.logger = get_logger(self.__class__.__name__, ComponentType.REPOSITORY)
        self.logger.debug(f"{self.__class__.__name__} initialized")

    @contextmanager
    def _error_context(self, operation: str, entity_id: Optional[str] = None):
        """
        Context manager for consistent error handling.

        All backend exceptions are logged with context before being
        re-raised as RepositoryError.

        Args:
            operation: Human-readable description of the operation
            entity_id: Optional entity ID for context

        Example:
            with self._error_context("User insert", "42"):
                cur.execute(statement, params)
        """
        try:
            yield
        except (PlanBindingError, ConfigurationError):
            # Caller error, already has context
            raise
        except Exception as e:
            error_msg = f"{operation} failed"
            if entity_id:
                error_msg += f" for {entity_id}"
            error_msg += f": {e}"
            self.logger.error(error_msg)
            raise RepositoryError(error_msg, operation=operation, entity_id=entity_id) from e

    def _log_operation(
        self,
        success: bool,
        operation: str,
        entity_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log operation result with consistent formatting.

        Format:
            Success: "operation: entity_id | details"
            Failure: "operation failed: entity_id | details"
        """
        # Truncate long IDs for readability
        short_id = entity_id[:16] + "..." if len(entity_id) > 16 else entity_id

        if success:
            msg = f"{operation}: {short_id}"
        else:
            msg = f"{operation} failed: {short_id}"

        if details:
            msg += f" | {details}"

        if success:
            self.logger.info(msg)
        else:
            self.logger.warning(msg)


__all__ = [
    "RepositoryError",
    "BaseRepository",
]
