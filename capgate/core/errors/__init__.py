"""Core errors package.

Usage:
    from capgate.core.errors import DomainError, ValidationError, NotFoundError
"""

from capgate.core.errors.common_errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from capgate.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
]
