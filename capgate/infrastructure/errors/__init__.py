"""Infrastructure errors package.

Usage:
    from capgate.infrastructure.errors import DatabaseError, CacheError
"""

from capgate.infrastructure.errors.infrastructure_error import (
    CacheError,
    DatabaseError,
    InfrastructureError,
)

__all__ = [
    "InfrastructureError",
    "DatabaseError",
    "CacheError",
]
