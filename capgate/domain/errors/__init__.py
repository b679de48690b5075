"""Domain errors for action dispatch.

Usage:
    from capgate.domain.errors import PermissionDeniedError, HandlerError
"""

from capgate.domain.errors.dispatch_error import (
    HandlerError,
    HandlerTimeoutError,
    MissingParameterError,
    PermissionDeniedError,
)

__all__ = [
    "HandlerError",
    "HandlerTimeoutError",
    "MissingParameterError",
    "PermissionDeniedError",
]
