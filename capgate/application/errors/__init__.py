"""Application layer errors.

Usage:
    from capgate.application.errors import ApplicationError, from_domain_error
"""

from capgate.application.errors.application_error import (
    NOT_AVAILABLE_MESSAGE,
    ApplicationError,
    ApplicationErrorCode,
    from_domain_error,
)

__all__ = [
    "NOT_AVAILABLE_MESSAGE",
    "ApplicationError",
    "ApplicationErrorCode",
    "from_domain_error",
]
