# ============================================================================
# BUILD-TIME CODE GENERATION
# ============================================================================
# STATUS: Core - Render compiled artifacts as Python source
# PURPOSE: Emit a generated module of statement constants at build time
# CREATED: 17 OCT 2026
# EXPORTS: render_module, write_module, constant_prefix, CodegenError
# DEPENDENCIES: jinja2
# ============================================================================
"""
Build-Time Code Generation

Call sites that prefer build-time generation over compiling at process
startup render the artifacts into a plain Python module:

    USER_NAME = 'User'
    USER_SCHEMA = 'create table if not exists User (...);'
    USER_PK = 'id'
    USER_CREATE_ARGS = ('name', 'email')
    USER_UPDATE_ARGS = ('name', 'email', 'created_at')
    USER_DELETE = 'delete from User where id=?1;'

    MODELS = {'User': {...}}

Output is deterministic: the same artifacts render byte-identical source.
"""

import logging
import re
from pathlib import Path
from typing import Sequence, Union

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateSyntaxError, UndefinedError

from core.models.artifacts import ModelArtifacts

logger = logging.getLogger(__name__)


MODULE_TEMPLATE = '''"""
Generated model artifacts.

Do not edit by hand; regenerate from the model declarations.
"""
{% for model in models %}

# {{ model.model_name }}
{% set prefix = model.model_name | constant %}
{{ prefix }}_NAME = {{ model.model_name | pyrepr }}
{{ prefix }}_SCHEMA = {{ model.ddl | pyrepr }}
{{ prefix }}_PK = {{ model.primary_key | pyrepr }}
{{ prefix }}_CREATE_ARGS = {{ model.create_args | pyrepr }}
{{ prefix }}_UPDATE_ARGS = {{ model.update_args | pyrepr }}
{{ prefix }}_DELETE = {{ model.delete_statement | pyrepr }}
{% endfor %}


MODELS = {
{% for model in models %}
{% set prefix = model.model_name | constant %}
    {{ model.model_name | pyrepr }}: {
        "schema": {{ prefix }}_SCHEMA,
        "primary_key": {{ prefix }}_PK,
        "create_args": {{ prefix }}_CREATE_ARGS,
        "update_args": {{ prefix }}_UPDATE_ARGS,
        "delete": {{ prefix }}_DELETE,
    },
{% endfor %}
}
'''


class CodegenError(Exception):
    """Raised when the generated module cannot be rendered."""


def constant_prefix(model_name: str) -> str:
    """
    Upper snake-case constant prefix for a model name.

    'UserProfile' -> 'USER_PROFILE', 'order-items' -> 'ORDER_ITEMS'
    """
    snake = re.sub(r'(?<=[a-z0-9])(?=[A-Z])', '_', model_name)
    snake = re.sub(r'\W+', '_', snake).strip('_')
    if not snake or snake[0].isdigit():
        snake = f"MODEL_{snake}"
    return snake.upper()


def _build_environment() -> Environment:
    env = Environment(
        loader=BaseLoader(),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["pyrepr"] = repr
    env.filters["constant"] = constant_prefix
    return env


def render_module(artifacts: Sequence[ModelArtifacts]) -> str:
    """
    Render compiled artifacts as Python source.

    Raises:
        CodegenError: On duplicate constant prefixes or template failure
    """
    prefixes = [constant_prefix(a.model_name) for a in artifacts]
    duplicates = sorted({p for p in prefixes if prefixes.count(p) > 1})
    if duplicates:
        raise CodegenError(f"models map to the same constant prefix: {', '.join(duplicates)}")

    try:
        template = _build_environment().from_string(MODULE_TEMPLATE)
        return template.render(models=list(artifacts))
    except (TemplateSyntaxError, UndefinedError) as e:
        raise CodegenError(f"Failed to render generated module: {e}") from e


def write_module(artifacts: Sequence[ModelArtifacts], path: Union[str, Path]) -> Path:
    """Render and write the generated module, returning its path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_module(artifacts), encoding="utf-8")
    logger.info(f"Wrote generated module for {len(artifacts)} models to {target}")
    return target


__all__ = [
    "MODULE_TEMPLATE",
    "CodegenError",
    "constant_prefix",
    "render_module",
    "write_module",
]
