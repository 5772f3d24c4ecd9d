# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for compilation and execution
# CREATED: 17 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the model compiler and the executors that run
its artifacts. These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from core.contracts import ParamStyle


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class CompilerDefaults:
    """
    Defaults for model compilation.

    require_primary_key=False keeps models without a primary key
    compilable (empty key identity, update/delete unavailable).
    """
    default_string_size: int = 255
    require_primary_key: bool = False

    def __post_init__(self):
        if self.default_string_size < 1:
            raise ValueError(f"default_string_size must be positive, got {self.default_string_size}")

    @classmethod
    def from_env(cls) -> "CompilerDefaults":
        """Create from environment variables."""
        return cls(
            default_string_size=int(os.getenv("MODELGEN_DEFAULT_STRING_SIZE", 255)),
            require_primary_key=_env_flag("MODELGEN_REQUIRE_PRIMARY_KEY"),
        )


@dataclass(frozen=True)
class DatabaseDefaults:
    """
    Defaults for executing compiled artifacts against PostgreSQL.
    """
    paramstyle: str = ParamStyle.FORMAT.value
    sslmode: str = "require"
    connect_timeout_seconds: int = 10
    database_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        return cls(
            paramstyle=ParamStyle(os.getenv("MODELGEN_PARAMSTYLE", ParamStyle.FORMAT.value)).value,
            sslmode=os.getenv("POSTGRES_SSLMODE", "require"),
            connect_timeout_seconds=int(os.getenv("POSTGRES_CONNECT_TIMEOUT", 10)),
            database_url=os.getenv("DATABASE_URL"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    compiler: CompilerDefaults = field(default_factory=CompilerDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            compiler=CompilerDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "CompilerDefaults",
    "DatabaseDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
