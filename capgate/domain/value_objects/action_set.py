"""Privilege model value objects: Action, Branch, ActionSet.

A resource type's entire access surface is an ActionSet: a mapping of branch
name to Branch. A Branch is an ordered ladder of Actions, lowest privilege
first. Privilege is a single total order per branch, so authorizing an
action reduces to one integer comparison and listing what a user may do
reduces to copying a prefix.

Business Rules:
    - A Branch is never empty; index 0 is the no-op/deny action and is
      always available.
    - Action names are unique within a Branch.
    - Branches are resolved once at construction into an internal
      name -> index map; nothing is mutated afterwards.
    - owner_bypass is a per-type policy flag: when set, a resource's owner
      gets the highest level on every branch.
    - required_data names the keys every resource of the type must carry
      in its data; provisioning rejects resources missing any of them.

Usage:
    data = Branch(
        name="data",
        actions=(
            Action(name="no-access", handler=deny),
            Action(name="view", handler=view_samples),
        ),
    )
    action_set = ActionSet.of(data, owner_bypass=True)
"""

from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from capgate.core.errors import DomainError
from capgate.core.result import Result

if TYPE_CHECKING:
    from capgate.domain.protocols.logger_protocol import LoggerProtocol
    from capgate.domain.protocols.query_executor_protocol import (
        QueryExecutorProtocol,
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class ExecutionContext:
    """Explicit execution context handed to every action handler.

    Handlers receive backend access through this object, never through
    module globals, so tests can substitute a fake executor.

    Attributes:
        query_executor: Backend query executor.
        logger: Logger bound to the current dispatch.
        resource_id: Resource the action runs against.
        user_id: Caller the action runs for.
    """

    query_executor: "QueryExecutorProtocol"
    logger: "LoggerProtocol"
    resource_id: str
    user_id: str


ActionHandler: TypeAlias = Callable[
    [Mapping[str, str], Mapping[str, str], ExecutionContext],
    Awaitable[Result[Any, DomainError]],
]
"""Handler signature: (resource_data, caller_params, context) -> Result."""


@dataclass(frozen=True, slots=True, kw_only=True)
class Action:
    """A named operation with a declared parameter contract.

    Attributes:
        name: Unique name within the owning Branch.
        handler: Coroutine performing the operation once authorized.
        required_params: Parameter names the caller must supply.
        description: Short human-readable summary.
    """

    name: str
    handler: ActionHandler
    required_params: frozenset[str] = frozenset()
    description: str = ""

    def __post_init__(self) -> None:
        """Validate action after initialization.

        Raises:
            ValueError: If the name is empty.
        """
        if not self.name or not self.name.strip():
            raise ValueError("Action name cannot be empty")
        object.__setattr__(self, "required_params", frozenset(self.required_params))

    def missing_params(self, params: Mapping[str, str]) -> list[str]:
        """Return required parameter names absent from ``params``, sorted."""
        return sorted(name for name in self.required_params if name not in params)


@dataclass(frozen=True, slots=True, kw_only=True)
class Branch:
    """Ordered privilege ladder of actions (lowest privilege first).

    Attributes:
        name: Branch name (e.g. "data").
        actions: Actions in strictly increasing privilege order.
    """

    name: str
    actions: tuple[Action, ...]
    _index: Mapping[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the ladder and build the name -> index map.

        Raises:
            ValueError: If the branch is unnamed, empty, or has duplicate
                action names.
        """
        if not self.name or not self.name.strip():
            raise ValueError("Branch name cannot be empty")
        actions = tuple(self.actions)
        if not actions:
            raise ValueError(f"Branch {self.name!r} must have at least one action")

        index: dict[str, int] = {}
        for position, action in enumerate(actions):
            if action.name in index:
                raise ValueError(
                    f"Duplicate action {action.name!r} in branch {self.name!r}"
                )
            index[action.name] = position

        object.__setattr__(self, "actions", actions)
        object.__setattr__(self, "_index", MappingProxyType(index))

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self.actions)

    @property
    def highest_level(self) -> int:
        """Index of the most privileged action."""
        return len(self.actions) - 1

    def index_of(self, action_name: str) -> int | None:
        """Return the privilege index of ``action_name``, or None if absent."""
        return self._index.get(action_name)

    def action_at(self, level: int) -> Action:
        """Return the action at privilege index ``level``."""
        return self.actions[level]

    def names_through(self, level: int) -> list[str]:
        """Return action names at indices 0..level inclusive, in order."""
        return [action.name for action in self.actions[: level + 1]]

    def clamp(self, level: int) -> int:
        """Clamp a stored level into [0, highest_level]."""
        return max(0, min(level, self.highest_level))


@dataclass(frozen=True, slots=True, kw_only=True)
class ActionSet:
    """Complete access surface of one resource type.

    Attributes:
        branches: Read-only mapping of branch name to Branch, in
            declaration order.
        owner_bypass: Whether a resource's owner gets full access on
            every branch.
        required_data: Keys a resource of this type must have in its data.
    """

    branches: Mapping[str, Branch]
    owner_bypass: bool = False
    required_data: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        """Freeze the branch mapping.

        Raises:
            ValueError: If the set is empty or a key disagrees with its
                Branch name.
        """
        if not self.branches:
            raise ValueError("ActionSet must define at least one branch")
        for key, branch in self.branches.items():
            if key != branch.name:
                raise ValueError(
                    f"Branch key {key!r} does not match branch name {branch.name!r}"
                )
        object.__setattr__(self, "branches", MappingProxyType(dict(self.branches)))
        object.__setattr__(self, "required_data", frozenset(self.required_data))

    @classmethod
    def of(
        cls,
        *branches: Branch,
        owner_bypass: bool = False,
        required_data: frozenset[str] = frozenset(),
    ) -> "ActionSet":
        """Build an ActionSet from branches, keyed by their names.

        Raises:
            ValueError: If two branches share a name.
        """
        mapping: dict[str, Branch] = {}
        for branch in branches:
            if branch.name in mapping:
                raise ValueError(f"Duplicate branch {branch.name!r}")
            mapping[branch.name] = branch
        return cls(
            branches=mapping,
            owner_bypass=owner_bypass,
            required_data=required_data,
        )

    def missing_data(self, data: Mapping[str, str]) -> list[str]:
        """Return required data keys absent from ``data``, sorted."""
        return sorted(key for key in self.required_data if key not in data)

    def branch(self, name: str) -> Branch | None:
        """Return the named Branch, or None if this type has no such branch."""
        return self.branches.get(name)

    @property
    def branch_names(self) -> list[str]:
        """Branch names in declaration order."""
        return list(self.branches)
