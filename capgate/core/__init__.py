"""Core shared kernel.

Foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes and error codes
- Settings and the dependency container

The core module has NO dependencies on other application layers
(the container is the only composition point).
"""

from capgate.core.enums import ErrorCode
from capgate.core.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from capgate.core.result import Failure, Result, Success

__all__ = [
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
    "ValidationError",
]
