"""Resource administration commands (CQRS write operations)."""

from capgate.application.commands.resource_commands import (
    AddResource,
    GrantPrivilege,
    RevokePrivilege,
    SetDefaultPrivilege,
)

__all__ = [
    "AddResource",
    "GrantPrivilege",
    "RevokePrivilege",
    "SetDefaultPrivilege",
]
