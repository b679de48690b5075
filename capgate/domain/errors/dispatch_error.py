"""Dispatch error types.

Errors produced by the action dispatcher after lookup succeeds. Lookup
failures use NotFoundError from capgate.core.errors.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Returned in Failure(...), never raised
    - Every error keeps enough context (resource, branch, action, user)
      for the server-side audit log, even when the caller only sees a
      generic refusal

Error Types:
    PermissionDeniedError: action index exceeds the caller's permitted level
    MissingParameterError: a declared required parameter was not supplied
    HandlerError: the handler (or its backend) failed; wraps the cause
    HandlerTimeoutError: the handler did not finish before the deadline
"""

from dataclasses import dataclass

from capgate.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PermissionDeniedError(DomainError):
    """Caller's privilege level is below the action's index.

    Attributes:
        resource_id: Target resource.
        branch: Branch the action belongs to.
        action: Requested action name.
        required_level: Index of the requested action.
        permitted_level: Highest index the caller may invoke.
    """

    resource_id: str
    branch: str
    action: str
    required_level: int
    permitted_level: int


@dataclass(frozen=True, slots=True, kw_only=True)
class MissingParameterError(DomainError):
    """A required action parameter was not supplied.

    Attributes:
        action: Action that declared the parameter.
        parameter: First missing parameter name.
        missing: All missing parameter names, sorted.
    """

    action: str
    parameter: str
    missing: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class HandlerError(DomainError):
    """Action handler failure, surfaced once and never retried.

    Attributes:
        action: Action whose handler failed.
        cause: Error returned by the handler, if it returned a Failure.
    """

    action: str
    cause: DomainError | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class HandlerTimeoutError(DomainError):
    """Action handler exceeded its deadline.

    Attributes:
        action: Action whose handler timed out.
        timeout_seconds: Deadline that was applied.
    """

    action: str
    timeout_seconds: float
