"""Built-in resource types.

Usage:
    registry = ResourceTypeRegistry()
    register_builtin_action_sets(registry)
    registry.freeze()
"""

from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.core.result import Failure
from capgate.infrastructure.action_sets import dataset_probe, kv_namespace

BUILTIN_ACTION_SETS = {
    dataset_probe.RESOURCE_TYPE: dataset_probe.DATASET_PROBE,
    kv_namespace.RESOURCE_TYPE: kv_namespace.KV_NAMESPACE,
}


def register_builtin_action_sets(registry: ResourceTypeRegistry) -> None:
    """Register every built-in resource type.

    Raises:
        RuntimeError: If the registry is frozen or a name is already taken.
    """
    for name, action_set in BUILTIN_ACTION_SETS.items():
        result = registry.register(name, action_set)
        if isinstance(result, Failure):
            raise RuntimeError(result.error.message)


__all__ = ["BUILTIN_ACTION_SETS", "register_builtin_action_sets"]
