# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 17 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the model compiler.
"""

from core.config.defaults import (
    CompilerDefaults,
    DatabaseDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "CompilerDefaults",
    "DatabaseDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
