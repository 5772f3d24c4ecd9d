# ============================================================================
# MIGRATION RUNNER - CREATE-IF-MISSING TABLES
# ============================================================================
# STATUS: Infrastructure - Schema deployment orchestrator
# PURPOSE: Compile every registered model and execute its DDL in order
# CREATED: 17 OCT 2026
# ============================================================================
"""
MigrationRunner - tables from model declarations.

Workflow:
1. Compile every registered model (no statement runs if any model fails)
2. Test the database connection
3. Execute each model's create-if-missing DDL in registration order

All DDL is "create table if not exists", so runs are idempotent. There is
no diffing of existing tables.

Usage:
    from infrastructure import MigrationRunner, load_registry

    runner = MigrationRunner(load_registry("app.models:MODELS"))
    result = runner.run()

    # Dry run (compile and show SQL without executing)
    result = runner.run(dry_run=True)
"""

import importlib
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.errors import ConfigurationError
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models.artifacts import ModelArtifacts
from core.schema.compiler import ModelCompiler
from core.schema.registry import ModelRegistry

logger = get_logger(__name__, ComponentType.MIGRATION)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class StepResult:
    """Result of a single migration step."""
    name: str
    status: str  # 'success', 'failed', 'skipped'
    message: str = ""
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class MigrationResult:
    """Complete result of a migration run."""
    timestamp: str
    dry_run: bool
    success: bool
    models: List[str] = field(default_factory=list)
    statements: List[str] = field(default_factory=list)
    steps: List[StepResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp,
            "dry_run": self.dry_run,
            "success": self.success,
            "models": self.models,
            "statements": self.statements,
            "steps": [
                {
                    "name": s.name,
                    "status": s.status,
                    "message": s.message,
                    "error": s.error,
                    "details": s.details,
                }
                for s in self.steps
            ],
            "errors": self.errors,
            "summary": {
                "total_steps": len(self.steps),
                "successful": len([s for s in self.steps if s.status == "success"]),
                "failed": len([s for s in self.steps if s.status == "failed"]),
                "skipped": len([s for s in self.steps if s.status == "skipped"]),
            },
        }


# ============================================================================
# MIGRATION RUNNER
# ============================================================================

class MigrationRunner:
    """
    Deploys tables for a registry of models.

    The repository needs execute(statement) and fetch_one(query);
    PostgreSQLRepository is used when none is given.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        repository: Any = None,
        compiler: Optional[ModelCompiler] = None,
    ):
        self.registry = registry
        self.compiler = compiler or ModelCompiler()
        self._repository = repository

    @property
    def repository(self):
        """Get the database repository (lazy initialization)."""
        if self._repository is None:
            from infrastructure.postgresql import get_postgres_repository
            self._repository = get_postgres_repository()
        return self._repository

    def compile(self) -> List[ModelArtifacts]:
        """
        Compile every registered model in registration order.

        Raises:
            ConfigurationError: From the first model that fails
        """
        return self.registry.compile_all(self.compiler)

    def generate(self) -> List[str]:
        """Ordered create-if-missing DDL for every registered model."""
        return [artifacts.ddl for artifacts in self.compile()]

    def run(self, dry_run: bool = False) -> MigrationResult:
        """
        Compile all models, then create their tables.

        Args:
            dry_run: If True, compile and log SQL but don't execute

        Returns:
            MigrationResult with per-step results
        """
        result = MigrationResult(
            timestamp=datetime.now(timezone.utc).isoformat(),
            dry_run=dry_run,
            success=False,
            models=list(self.registry.names),
        )

        logger.info("=" * 70)
        logger.info("MODEL SCHEMA MIGRATION")
        logger.info(f"   Models: {len(self.registry)}")
        logger.info(f"   Mode: {'DRY RUN' if dry_run else 'EXECUTE'}")
        logger.info("=" * 70)

        # Step 1: Compile everything before touching the database
        step, compiled = self._compile_models()
        result.steps.append(step)
        if step.status == "failed":
            result.errors.append(f"Compilation failed: {step.error}")
            self._log_summary(result)
            return result
        result.statements = [a.ddl for a in compiled]

        if dry_run:
            for artifacts in compiled:
                logger.info(f"   [{artifacts.model_name}] {artifacts.ddl}")
                result.steps.append(StepResult(
                    name=f"create_table:{artifacts.model_name}",
                    status="success",
                    message="[DRY RUN] Would execute create table",
                    details={"statement": artifacts.ddl},
                ))
            result.success = True
            self._log_summary(result)
            return result

        # Step 2: Test connection
        step = self._test_connection()
        result.steps.append(step)
        if step.status == "failed":
            result.errors.append(f"Connection failed: {step.error}")
            self._log_summary(result)
            return result

        # Step 3: Create tables, stopping at the first failure
        failed = False
        for artifacts in compiled:
            if failed:
                result.steps.append(StepResult(
                    name=f"create_table:{artifacts.model_name}",
                    status="skipped",
                    message="Skipped after earlier failure",
                ))
                continue

            with log_context(model=artifacts.model_name, operation="create_table"):
                step = self._create_table(artifacts)
            result.steps.append(step)
            if step.status == "failed":
                failed = True
                result.errors.append(f"{artifacts.model_name}: {step.error}")

        result.success = not failed
        self._log_summary(result)
        return result

    # ========================================================================
    # STEPS
    # ========================================================================

    def _compile_models(self):
        step = StepResult(name="compile_models", status="pending")
        logger.info("Step: Compiling models...")

        compiled: List[ModelArtifacts] = []
        try:
            compiled = self.compile()
            step.status = "success"
            step.message = f"Compiled {len(compiled)} models"
            step.details = {"models": [a.model_name for a in compiled]}
        except ConfigurationError as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Compilation failed: {e}"
            step.details = {"code": e.code, "model": e.model, "field": e.field}
            logger.error(f"Compilation failed: {e}")

        logger.info(f"   Result: {step.status} - {step.message}")
        return step, compiled

    def _test_connection(self) -> StepResult:
        """Test database connection using repository."""
        step = StepResult(name="test_connection", status="pending")
        logger.info("Step: Testing database connection...")

        try:
            self.repository.fetch_one("SELECT 1 AS ok")
            step.status = "success"
            step.message = "Connected"
        except Exception as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Connection failed: {e}"
            logger.error(f"Connection test failed: {e}")

        logger.info(f"   Result: {step.status} - {step.message}")
        return step

    def _create_table(self, artifacts: ModelArtifacts) -> StepResult:
        step = StepResult(name=f"create_table:{artifacts.model_name}", status="pending")
        logger.info(f"Step: Creating table {artifacts.model_name}...")

        try:
            self.repository.execute(artifacts.ddl)
            step.status = "success"
            step.message = f"Table {artifacts.model_name} ensured"
            step.details = {"statement": artifacts.ddl}
        except Exception as e:
            step.status = "failed"
            step.error = str(e)
            step.message = f"Create table failed: {e}"
            logger.error(f"Create table {artifacts.model_name} failed: {e}")
            logger.debug(traceback.format_exc())

        logger.info(f"   Result: {step.status} - {step.message}")
        return step

    def _log_summary(self, result: MigrationResult) -> None:
        summary = result.to_dict()["summary"]
        logger.info("=" * 70)
        logger.info(f"MIGRATION {'COMPLETE' if result.success else 'FAILED'}")
        logger.info(
            f"   Steps: {summary['successful']} succeeded, "
            f"{summary['failed']} failed, {summary['skipped']} skipped"
        )
        if result.errors:
            logger.warning(f"   Errors: {result.errors}")
        logger.info("=" * 70)

        log_checkpoint("migration_complete", {
            "success": result.success,
            "dry_run": result.dry_run,
            "models": len(result.models),
            **summary,
        })


# ============================================================================
# REGISTRY LOADING
# ============================================================================

def load_registry(target: str) -> ModelRegistry:
    """
    Resolve "package.module:ATTRIBUTE" to a ModelRegistry.

    The attribute may be a ModelRegistry or a list/tuple of models.

    Raises:
        ValueError: If target is not in module:attribute form
        TypeError: If the attribute is neither a registry nor a model list
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Expected 'module:ATTRIBUTE', got {target!r}")

    module = importlib.import_module(module_name)
    try:
        value = getattr(module, attribute)
    except AttributeError:
        raise ValueError(f"Module {module_name!r} has no attribute {attribute!r}") from None

    if isinstance(value, ModelRegistry):
        return value
    if isinstance(value, (list, tuple)):
        return ModelRegistry(value)
    raise TypeError(f"{target} is {type(value).__name__}, expected ModelRegistry or list of models")


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

def migrate(target: str, dry_run: bool = False) -> MigrationResult:
    """Load a registry and run its migration."""
    return MigrationRunner(load_registry(target)).run(dry_run=dry_run)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "MigrationRunner",
    "MigrationResult",
    "StepResult",
    "load_registry",
    "migrate",
]
