# ============================================================================
# OPERATION ARGUMENT PLANNER
# ============================================================================
# STATUS: Core - Create/update argument lists
# PURPOSE: Derive ordered field-name lists for create and update operations
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: ArgumentPlanner
# ============================================================================
"""
Operation Argument Planner

Rules, applied per field in declaration order:

1. Primary key: added to createArgs only when caller-supplied.
   Never added to updateArgs.
2. Any other field: added to createArgs and updateArgs.
3. Field with a default: the createArgs entry just added for this
   field is removed again; updateArgs keeps it.

Rule 3 removes the entry added in the same step, so fields must be fed
one at a time, in order, each fully planned before the next.
"""

from typing import List, Optional, Tuple

from core.contracts import FieldRole, KeyGeneration
from core.models.field import FieldDescriptor


class ArgumentPlanner:
    """Accumulates createArgs/updateArgs for one compilation run."""

    def __init__(self):
        self._create_args: List[str] = []
        self._update_args: List[str] = []

    @property
    def create_args(self) -> Tuple[str, ...]:
        return tuple(self._create_args)

    @property
    def update_args(self) -> Tuple[str, ...]:
        return tuple(self._update_args)

    def add(
        self,
        descriptor: FieldDescriptor,
        role: FieldRole,
        generation: Optional[KeyGeneration] = None,
    ) -> None:
        """
        Plan one field.

        Args:
            descriptor: Field being planned
            role: PRIMARY_KEY or COLUMN, from the primary key resolver
            generation: Key generation mode when role is PRIMARY_KEY
        """
        appended = False

        if role == FieldRole.PRIMARY_KEY:
            if generation is None or not generation.is_database_generated():
                self._create_args.append(descriptor.name)
                appended = True
        else:
            self._create_args.append(descriptor.name)
            self._update_args.append(descriptor.name)
            appended = True

        if descriptor.has_default and appended:
            self._create_args.pop()


__all__ = ["ArgumentPlanner"]
