"""Command handlers."""

from capgate.application.commands.handlers.add_resource_handler import (
    AddResourceHandler,
    AddResourceResult,
)
from capgate.application.commands.handlers.privilege_handlers import (
    GrantPrivilegeHandler,
    RevokePrivilegeHandler,
    SetDefaultPrivilegeHandler,
)

__all__ = [
    "AddResourceHandler",
    "AddResourceResult",
    "GrantPrivilegeHandler",
    "RevokePrivilegeHandler",
    "SetDefaultPrivilegeHandler",
]
