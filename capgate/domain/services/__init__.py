"""Domain services (pure functions, no I/O)."""

from capgate.domain.services.privilege_evaluator import (
    level_on_branch,
    list_available,
    permitted_level,
    resolve_branch,
)

__all__ = [
    "level_on_branch",
    "list_available",
    "permitted_level",
    "resolve_branch",
]
