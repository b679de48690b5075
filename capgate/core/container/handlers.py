"""Provisioning command handler factories.

Handlers are stateless over their injected dependencies, so they are
built once per process like the dispatcher.
"""

from functools import lru_cache

from capgate.application.commands.handlers import (
    AddResourceHandler,
    GrantPrivilegeHandler,
    RevokePrivilegeHandler,
    SetDefaultPrivilegeHandler,
)
from capgate.core.container.infrastructure import get_logger, get_resource_store
from capgate.core.container.registry import get_resource_type_registry


@lru_cache()
def get_add_resource_handler() -> AddResourceHandler:
    """Get AddResource handler."""
    return AddResourceHandler(
        store=get_resource_store(),
        registry=get_resource_type_registry(),
        logger=get_logger(),
    )


@lru_cache()
def get_grant_privilege_handler() -> GrantPrivilegeHandler:
    """Get GrantPrivilege handler."""
    return GrantPrivilegeHandler(
        store=get_resource_store(),
        registry=get_resource_type_registry(),
        logger=get_logger(),
    )


@lru_cache()
def get_revoke_privilege_handler() -> RevokePrivilegeHandler:
    """Get RevokePrivilege handler."""
    return RevokePrivilegeHandler(
        store=get_resource_store(),
        registry=get_resource_type_registry(),
        logger=get_logger(),
    )


@lru_cache()
def get_set_default_privilege_handler() -> SetDefaultPrivilegeHandler:
    """Get SetDefaultPrivilege handler."""
    return SetDefaultPrivilegeHandler(
        store=get_resource_store(),
        registry=get_resource_type_registry(),
        logger=get_logger(),
    )
