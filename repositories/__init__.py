# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Database access layer
# PURPOSE: Execute compiled model artifacts
# CREATED: 17 OCT 2026
# ============================================================================
"""
Repositories Module

Executes compiled create/update/delete plans against a database.

Usage:
    from repositories import ModelRepository

    repo = ModelRepository(artifacts, get_postgres_repository())
    repo.save(user)
"""

from .model_repository import ModelRepository, encode_value

__all__ = [
    "ModelRepository",
    "encode_value",
]
