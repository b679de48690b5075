"""Domain value objects.

Usage:
    from capgate.domain.value_objects import Action, Branch, ActionSet
"""

from capgate.domain.value_objects.action_set import (
    Action,
    ActionHandler,
    ActionSet,
    Branch,
    ExecutionContext,
)

__all__ = [
    "Action",
    "ActionHandler",
    "ActionSet",
    "Branch",
    "ExecutionContext",
]
