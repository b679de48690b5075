"""Resource type registry and dispatcher factories."""

from functools import lru_cache

from capgate.application.services.action_dispatcher import ActionDispatcher
from capgate.application.services.resource_type_registry import (
    ResourceTypeRegistry,
)
from capgate.core.config import settings
from capgate.core.container.infrastructure import (
    get_logger,
    get_query_executor,
    get_resource_store,
)


@lru_cache()
def get_resource_type_registry() -> ResourceTypeRegistry:
    """Build, populate and freeze the process-wide registry.

    Returns:
        Frozen ResourceTypeRegistry with every built-in type registered.
    """
    from capgate.infrastructure.action_sets import register_builtin_action_sets

    registry = ResourceTypeRegistry()
    register_builtin_action_sets(registry)
    registry.freeze()

    get_logger().info("resource_types_registered", types=registry.type_names)
    return registry


@lru_cache()
def get_action_dispatcher() -> ActionDispatcher:
    """Get action dispatcher singleton (app-scoped).

    Returns:
        ActionDispatcher wired to the store, registry and backend executor.
    """
    return ActionDispatcher(
        store=get_resource_store(),
        registry=get_resource_type_registry(),
        query_executor=get_query_executor(),
        logger=get_logger(),
        default_timeout_seconds=settings.handler_timeout_seconds,
    )
