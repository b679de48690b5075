"""Resource type registry.

Process-wide mapping of resource type name -> ActionSet, populated once at
startup and read-only afterwards.

Lifecycle:
    1. Container creates the registry.
    2. Built-in (and deployment-specific) types are registered.
    3. freeze() is called; from then on register() is a programming error
       and lookups need no synchronization.

Usage:
    registry = ResourceTypeRegistry()
    registry.register("dataset-probe", DATASET_PROBE)
    registry.freeze()

    result = registry.lookup("dataset-probe")
"""

from collections.abc import Mapping
from types import MappingProxyType

from capgate.core.enums import ErrorCode
from capgate.core.errors import ConflictError, NotFoundError
from capgate.core.result import Failure, Result, Success
from capgate.domain.value_objects.action_set import ActionSet


class ResourceTypeRegistry:
    """Registry of resource types and their ActionSets.

    Attributes:
        _types: Registered types (plain dict until frozen, then a
            read-only proxy).
        _frozen: Whether initialization has finished.
    """

    def __init__(self) -> None:
        """Create an empty, unfrozen registry."""
        self._types: dict[str, ActionSet] | Mapping[str, ActionSet] = {}
        self._frozen = False

    def register(
        self,
        name: str,
        action_set: ActionSet,
    ) -> Result[None, ConflictError]:
        """Register a resource type during initialization.

        Args:
            name: Resource type name.
            action_set: The type's complete access surface.

        Returns:
            Success(None), or Failure(ConflictError) with
            RESOURCE_TYPE_ALREADY_REGISTERED if ``name`` is taken.

        Raises:
            RuntimeError: If called after freeze().
        """
        if self._frozen:
            raise RuntimeError(
                f"Cannot register resource type {name!r}: registry is frozen"
            )
        if name in self._types:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.RESOURCE_TYPE_ALREADY_REGISTERED,
                    message=f"Resource type {name!r} is already registered",
                    resource_type="ResourceType",
                    conflicting_field="name",
                )
            )
        self._types[name] = action_set  # type: ignore[index]
        return Success(value=None)

    def freeze(self) -> None:
        """End initialization; the registry is read-only afterwards."""
        if not self._frozen:
            self._types = MappingProxyType(dict(self._types))
            self._frozen = True

    @property
    def is_frozen(self) -> bool:
        """Whether freeze() has been called."""
        return self._frozen

    @property
    def type_names(self) -> list[str]:
        """Registered type names in registration order."""
        return list(self._types)

    def lookup(self, name: str) -> Result[ActionSet, NotFoundError]:
        """Resolve a type name to its ActionSet.

        Returns:
            Success(ActionSet) or Failure(NotFoundError) with
            RESOURCE_TYPE_NOT_FOUND.
        """
        action_set = self._types.get(name)
        if action_set is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.RESOURCE_TYPE_NOT_FOUND,
                    message=f"Resource type {name!r} not registered",
                    resource_type="ResourceType",
                    resource_id=name,
                )
            )
        return Success(value=action_set)
