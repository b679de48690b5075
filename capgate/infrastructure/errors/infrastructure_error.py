"""Adapter failures.

SqlQueryExecutor and RedisResourceStore catch driver exceptions at the
boundary and return these instead. ``code`` is what the dispatcher and the
HTTP mapping act on (DATABASE_ERROR, STORE_UNAVAILABLE, ...);
``infrastructure_code`` records which driver-level step failed.
"""

from dataclasses import dataclass

from capgate.core.errors import DomainError
from capgate.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Failure of an external system.

    Attributes:
        infrastructure_code: Driver-level failure, if known.
    """

    infrastructure_code: InfrastructureErrorCode | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseError(InfrastructureError):
    """A handler query failed, or its placeholders did not match its arguments."""


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """The resource store was unreachable or returned an undecodable record."""
