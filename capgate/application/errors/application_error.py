"""Application layer error types.

Wraps domain errors with the application-level category the presentation
layer turns into an HTTP status.

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
    from_domain_error: Map a DomainError to its ApplicationError
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from capgate.core.enums import ErrorCode
from capgate.core.errors.domain_error import DomainError


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    NOT_AVAILABLE is the deliberately vague answer shared by unknown
    resources/branches/actions and permission denials.
    """

    NOT_AVAILABLE = "not_available"
    FORBIDDEN = "forbidden"
    MISSING_PARAMETER = "missing_parameter"
    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    CONFLICT = "conflict"
    HANDLER_FAILED = "handler_failed"
    HANDLER_TIMEOUT = "handler_timeout"
    SERVICE_UNAVAILABLE = "service_unavailable"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Attributes:
        code: Application error code.
        message: Human-readable error message (safe to show callers).
        domain_error: Original domain error (kept for logging only).
        details: Additional caller-safe context.
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, Any] | None = None


NOT_AVAILABLE_MESSAGE = "Resource or action not available"

_NOT_AVAILABLE_CODES = frozenset(
    {
        ErrorCode.RESOURCE_NOT_FOUND,
        ErrorCode.RESOURCE_TYPE_NOT_FOUND,
        ErrorCode.BRANCH_NOT_FOUND,
        ErrorCode.ACTION_NOT_FOUND,
    }
)


def from_domain_error(
    error: DomainError,
    *,
    expose_denial_reasons: bool = False,
) -> ApplicationError:
    """Map a domain error to an ApplicationError.

    Unknown resource/type/branch/action and permission denial all map to
    the same NOT_AVAILABLE answer unless ``expose_denial_reasons`` is set,
    in which case a denial becomes FORBIDDEN with its message.

    Args:
        error: Domain error from the dispatcher or a command handler.
        expose_denial_reasons: Whether callers may learn why they were refused.

    Returns:
        ApplicationError for the presentation layer.
    """
    code = error.code

    if code in _NOT_AVAILABLE_CODES:
        message = error.message if expose_denial_reasons else NOT_AVAILABLE_MESSAGE
        return ApplicationError(
            code=ApplicationErrorCode.NOT_AVAILABLE,
            message=message,
            domain_error=error,
        )
    if code == ErrorCode.PERMISSION_DENIED:
        if expose_denial_reasons:
            return ApplicationError(
                code=ApplicationErrorCode.FORBIDDEN,
                message=error.message,
                domain_error=error,
            )
        return ApplicationError(
            code=ApplicationErrorCode.NOT_AVAILABLE,
            message=NOT_AVAILABLE_MESSAGE,
            domain_error=error,
        )
    if code == ErrorCode.MISSING_PARAMETER:
        return ApplicationError(
            code=ApplicationErrorCode.MISSING_PARAMETER,
            message=error.message,
            domain_error=error,
        )
    if code in (
        ErrorCode.VALIDATION_FAILED,
        ErrorCode.INVALID_PRIVILEGE_LEVEL,
        ErrorCode.INVALID_RESOURCE_ID,
    ):
        return ApplicationError(
            code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
            message=error.message,
            domain_error=error,
        )
    if code in (
        ErrorCode.RESOURCE_TYPE_ALREADY_REGISTERED,
        ErrorCode.RESOURCE_UPDATE_CONFLICT,
    ):
        return ApplicationError(
            code=ApplicationErrorCode.CONFLICT,
            message=error.message,
            domain_error=error,
        )
    if code == ErrorCode.HANDLER_TIMEOUT:
        return ApplicationError(
            code=ApplicationErrorCode.HANDLER_TIMEOUT,
            message="Action timed out",
            domain_error=error,
        )
    if code == ErrorCode.HANDLER_FAILED:
        return ApplicationError(
            code=ApplicationErrorCode.HANDLER_FAILED,
            message="Action failed",
            domain_error=error,
        )

    # Store / backend infrastructure failures
    return ApplicationError(
        code=ApplicationErrorCode.SERVICE_UNAVAILABLE,
        message="Service temporarily unavailable",
        domain_error=error,
    )
