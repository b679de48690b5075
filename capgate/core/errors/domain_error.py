"""Base error value for capgate.

Lookups, authorization checks, handlers and adapters report failure by
returning ``Failure(error=<DomainError subclass>)``. The dispatcher never
raises for a refused or failed action; raising is reserved for programming
errors (invalid ActionSet construction, registering after freeze).

Subclasses add the fields the audit log and the HTTP mapping need:

    @dataclass(frozen=True, slots=True, kw_only=True)
    class PermissionDeniedError(DomainError):
        required_level: int
        permitted_level: int
"""

from dataclasses import dataclass
from typing import Any

from capgate.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Error carried by a ``Failure``.

    Attributes:
        code: What went wrong, as an ErrorCode.
        message: Text for logs and, when exposed, for callers.
        details: Extra fields for the audit log.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
