"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures (bad privilege level, bad mask)
- NotFoundError: Resource, resource type, branch or action not found
- ConflictError: Duplicate registration, lost optimistic update

Usage:
    from capgate.core.errors import NotFoundError
    from capgate.core.enums import ErrorCode
    from capgate.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.RESOURCE_NOT_FOUND,
        message="Resource not found",
        resource_type="Resource",
        resource_id=resource_id,
    ))
"""

from dataclasses import dataclass

from capgate.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Lookup failure.

    Attributes:
        resource_type: Kind of thing that was looked up
            (Resource, ResourceType, Branch, Action).
        resource_id: Identifier that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Conflict with existing state.

    Attributes:
        resource_type: Kind of thing in conflict.
        conflicting_field: Field that has the conflict, if any.
    """

    resource_type: str
    conflicting_field: str | None = None
