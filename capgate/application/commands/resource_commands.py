"""Resource administration commands (CQRS write operations).

Commands represent administrative intent to provision resources or change
their privilege masks. All commands are immutable (frozen=True) and use
keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers validate against the resource type and write through the store
- Mask changes always go through the store's atomic update
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class AddResource:
    """Provision a resource if its id is not taken.

    Idempotent: a second call with the same id reports that the resource
    already exists and leaves the stored record untouched.

    Attributes:
        resource_type: Registered resource type name.
        resource_id: Unique resource identifier.
        owner_id: Owning user.
        data: Opaque backend parameters for the type's handlers.
        default_mask: Branch -> level for callers without an override.

    Example:
        >>> command = AddResource(
        ...     resource_type="dataset-probe",
        ...     resource_id="r1",
        ...     owner_id="alice",
        ...     data={"probe_id": "p-17"},
        ...     default_mask={"data": 1},
        ... )
        >>> result = await handler.handle(command)
    """

    resource_type: str
    resource_id: str
    owner_id: str
    data: dict[str, str] = field(default_factory=dict)
    default_mask: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class GrantPrivilege:
    """Set a per-user level override on one branch.

    Attributes:
        resource_id: Target resource.
        user_id: User receiving the override.
        branch: Branch the level applies to.
        level: New level (index into the branch).
    """

    resource_id: str
    user_id: str
    branch: str
    level: int


@dataclass(frozen=True, kw_only=True)
class RevokePrivilege:
    """Remove a per-user level override on one branch.

    The user falls back to the resource's default mask. Revoking an
    override that does not exist succeeds without changes.

    Attributes:
        resource_id: Target resource.
        user_id: User losing the override.
        branch: Branch the override applied to.
    """

    resource_id: str
    user_id: str
    branch: str


@dataclass(frozen=True, kw_only=True)
class SetDefaultPrivilege:
    """Set the default level on one branch.

    Attributes:
        resource_id: Target resource.
        branch: Branch the level applies to.
        level: New default level.
    """

    resource_id: str
    branch: str
    level: int
