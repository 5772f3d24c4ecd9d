# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with model/field context
# PURPOSE: Tag compiler, migration and executor log lines with the model,
#          field and operation they concern
# CREATED: 17 OCT 2026
# ============================================================================
"""
Structured Logging

Every log line emitted while a model is being compiled, migrated or
executed carries the model, field and operation it concerns. The context
is thread-local and nests: an inner log_context overrides only the keys
it names.

Usage:
    from core.logging import ComponentType, get_logger, log_context

    logger = get_logger(__name__, ComponentType.COMPILER)

    with log_context(model="User", operation="compile"):
        with log_context(field_name="email"):
            logger.debug("Planned String field as column")

configure_logging() selects JSON lines (json_output=True or LOG_FORMAT=json)
or the single-line human format.
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class ComponentType(str, Enum):
    """Which layer produced a log line."""
    COMPILER = "compiler"
    MIGRATION = "migration"
    REPOSITORY = "repository"


@dataclass(frozen=True)
class LogContext:
    """Contextual fields attached to every record logged inside log_context."""
    model: Optional[str] = None
    field_name: Optional[str] = None
    operation: Optional[str] = None
    component: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Set fields only."""
        return {key: value for key, value in asdict(self).items() if value is not None}


_CONTEXT_KEYS = frozenset(f.name for f in fields(LogContext))

# HumanFormatter renders these inline, in this order
_HUMAN_LABELS = (
    ("model", "model"),
    ("field_name", "field"),
    ("operation", "op"),
)

_local = threading.local()
_EMPTY = LogContext()


def _stack() -> list:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_current_context() -> LogContext:
    """Innermost active context, or an empty one."""
    stack = _stack()
    return stack[-1] if stack else _EMPTY


@contextmanager
def log_context(**overrides):
    """
    Push a context for the duration of the block.

    Keys are LogContext fields; passing None clears an inherited value.

    Raises:
        TypeError: For a key that is not a LogContext field
    """
    context = replace(get_current_context(), **overrides)
    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


def _record_data(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "extra", None) or {}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line: message, active context, extra data and source."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = get_current_context().to_dict()
        if context:
            entry["context"] = context

        data = _record_data(record)
        if data:
            entry["data"] = data

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }
        return json.dumps(entry, default=str)


class HumanFormatter(logging.Formatter):
    """
    Single-line format for terminals:

        2026-10-17 09:30:00 DEBUG    core.schema.compiler [model=User, field=email, op=compile]: ...
    """

    def format(self, record: logging.LogRecord) -> str:
        context = get_current_context()
        tags = [
            f"{label}={getattr(context, key)}"
            for key, label in _HUMAN_LABELS
            if getattr(context, key)
        ]
        tag_str = f" [{', '.join(tags)}]" if tags else ""

        data = {key: value for key, value in _record_data(record).items() if key not in _CONTEXT_KEYS}
        data_str = f" {data}" if data else ""

        line = (
            f"{_timestamp(record).strftime('%Y-%m-%d %H:%M:%S')} {record.levelname.ljust(8)} "
            f"{record.name}{tag_str}: {record.getMessage()}{data_str}"
        )
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


class ContextLogger(logging.LoggerAdapter):
    """
    Adapter that copies the active context and the logger's component
    into record.extra, where both formatters read it.
    """

    def process(self, msg, kwargs):
        data = dict(kwargs.get("extra") or {})
        data.update(get_current_context().to_dict())

        component = (self.extra or {}).get("component")
        if component is not None:
            data.setdefault("component", component.value if isinstance(component, Enum) else component)

        kwargs["extra"] = {"extra": data}
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    """Context-aware logger for a module, tagged with its component."""
    return ContextLogger(logging.getLogger(name), {"component": component})


def configure_logging(level: Union[str, int] = "INFO", json_output: bool = False) -> None:
    """
    Replace the root handlers with a single stdout handler.

    Args:
        level: Level name or number
        json_output: Emit JSON lines (also enabled by LOG_FORMAT=json)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter()
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# CHECKPOINTS
# ============================================================================

def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named milestone of a migration run (e.g. "migration_complete").

    The record carries the checkpoint name, the active context and data.
    """
    payload: Dict[str, Any] = {"checkpoint": name, **get_current_context().to_dict()}
    if data:
        payload["data"] = data

    (logger or logging.getLogger("checkpoint")).info(f"CHECKPOINT: {name}", extra={"extra": payload})


__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
