"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from capgate.core.container import get_action_dispatcher, get_logger

The container is organized into modules:
- infrastructure: Core services (logger, redis, database, store, executor)
- registry: Resource type registry and action dispatcher
- handlers: Provisioning command handler factories
"""

from capgate.core.container.handlers import (
    get_add_resource_handler,
    get_grant_privilege_handler,
    get_revoke_privilege_handler,
    get_set_default_privilege_handler,
)
from capgate.core.container.infrastructure import (
    get_database,
    get_logger,
    get_query_executor,
    get_redis_client,
    get_resource_store,
)
from capgate.core.container.registry import (
    get_action_dispatcher,
    get_resource_type_registry,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_logger",
    "get_query_executor",
    "get_redis_client",
    "get_resource_store",
    # Registry / dispatch
    "get_action_dispatcher",
    "get_resource_type_registry",
    # Provisioning handlers
    "get_add_resource_handler",
    "get_grant_privilege_handler",
    "get_revoke_privilege_handler",
    "get_set_default_privilege_handler",
]
