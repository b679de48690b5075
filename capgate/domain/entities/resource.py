"""Resource domain entity.

A Resource is an access-controlled entity proxying a backend data object.
It references a registered resource type, carries opaque string parameters
consumed by that type's handlers, and holds privilege masks.

Masks:
    default_mask: branch -> level applied to any caller without an override.
    user_masks:   user -> branch -> level override.

Business Rules:
    - id is stable for the lifetime of the resource
    - Masks are only changed through copy-on-write helpers (with_grant,
      without_grant, with_default) applied inside the store's atomic update
    - Level range and branch existence are validated against the type's
      ActionSet by provisioning, not by the entity itself

Reference:
    - capgate/domain/value_objects/action_set.py
"""

from copy import deepcopy
from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True, kw_only=True)
class Resource:
    """Resource domain entity.

    Attributes:
        id: Unique resource identifier.
        owner_id: User who owns the resource.
        type: Registered resource type name.
        data: Opaque backend parameters for the type's handlers.
        default_mask: Branch -> level for callers without an override.
        user_masks: User -> branch -> level overrides.

    Example:
        >>> probe = Resource(
        ...     id="r1",
        ...     owner_id="alice",
        ...     type="dataset-probe",
        ...     data={"probe_id": "p-17"},
        ...     default_mask={"data": 1},
        ... )
        >>> probe.mask_for("bob", "data")
        1
    """

    id: str
    owner_id: str
    type: str
    data: dict[str, str] = field(default_factory=dict)
    default_mask: dict[str, int] = field(default_factory=dict)
    user_masks: dict[str, dict[str, int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate resource after initialization.

        Raises:
            ValueError: If id, owner_id or type is empty.
        """
        if not self.id or not self.id.strip():
            raise ValueError("Resource id cannot be empty")
        if not self.owner_id or not self.owner_id.strip():
            raise ValueError("Resource owner_id cannot be empty")
        if not self.type or not self.type.strip():
            raise ValueError("Resource type cannot be empty")

    # -------------------------------------------------------------------------
    # Query Methods (Read-Only)
    # -------------------------------------------------------------------------

    def is_owner(self, user_id: str) -> bool:
        """Check whether ``user_id`` owns this resource."""
        return user_id == self.owner_id

    def mask_for(self, user_id: str, branch_name: str) -> int:
        """Return the raw (unclamped) level for a user on a branch.

        Resolution: per-user override, then default mask, then 0.
        """
        override = self.user_masks.get(user_id, {})
        if branch_name in override:
            return override[branch_name]
        return self.default_mask.get(branch_name, 0)

    # -------------------------------------------------------------------------
    # Copy-on-write Updates (used as atomic_update mutators)
    # -------------------------------------------------------------------------

    def with_grant(self, user_id: str, branch_name: str, level: int) -> "Resource":
        """Return a copy with ``user_masks[user_id][branch_name] = level``."""
        user_masks = deepcopy(self.user_masks)
        user_masks.setdefault(user_id, {})[branch_name] = level
        return replace(self, user_masks=user_masks)

    def without_grant(self, user_id: str, branch_name: str) -> "Resource":
        """Return a copy with the user's override on ``branch_name`` removed.

        The user's entry is dropped once it holds no overrides. Removing an
        absent override returns an equal copy.
        """
        user_masks = deepcopy(self.user_masks)
        overrides = user_masks.get(user_id)
        if overrides is not None:
            overrides.pop(branch_name, None)
            if not overrides:
                del user_masks[user_id]
        return replace(self, user_masks=user_masks)

    def with_default(self, branch_name: str, level: int) -> "Resource":
        """Return a copy with ``default_mask[branch_name] = level``."""
        default_mask = dict(self.default_mask)
        default_mask[branch_name] = level
        return replace(self, default_mask=default_mask)
